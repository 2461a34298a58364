import logging
import uuid
from concurrent.futures import ThreadPoolExecutor
from datetime import datetime, timezone
from typing import List, Optional, Protocol, Tuple

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import sessionmaker

from storefront.database import is_unique_violation
from storefront.errors import ProductNotFoundError, ProductSKUAlreadyExistError
from storefront.models.product import Product
from storefront.schemas.product import SORTABLE_FIELDS, ProductCreate

logger = logging.getLogger(__name__)


class ProductRepository(Protocol):
    """Store operations the product service relies on."""

    def create(self, product_data: ProductCreate) -> Product: ...

    def get_by_id(self, product_id: str) -> Product: ...

    def get_by_sku(self, sku: str) -> Product: ...

    def delete(self, product_id: str) -> None: ...

    def update(self, product_id: str, qty: int) -> Product: ...

    def search(
        self,
        limit: int,
        offset: int,
        name: Optional[str] = None,
        in_stock: Optional[bool] = None,
        sort: Optional[str] = None,
    ) -> Tuple[List[Product], int]: ...


class SQLProductRepository:
    """
    Product repository backed by SQLAlchemy.

    Every operation opens its own session from the shared session factory,
    so a single repository instance can serve concurrent requests.
    """

    def __init__(self, session_factory: sessionmaker):
        self.session_factory = session_factory

    def _now(self) -> datetime:
        return datetime.now(timezone.utc)

    def create(self, product_data: ProductCreate) -> Product:
        """
        Store a new product.

        Args:
            product_data: Validated product creation data

        Returns:
            Created product

        Raises:
            ProductSKUAlreadyExistError: If the SKU is already stored
        """
        now = self._now()
        product = Product(
            id=str(uuid.uuid4()),
            name=product_data.name,
            description=product_data.description,
            sku=product_data.sku,
            qty=product_data.qty,
            images=product_data.images,
            price=product_data.price,
            in_stock=product_data.qty > 0,
            created_at=now,
            updated_at=now,
        )

        with self.session_factory() as session:
            session.add(product)
            try:
                session.commit()
            except IntegrityError as e:
                session.rollback()
                if is_unique_violation(e):
                    logger.warning(f"Product sku {product_data.sku} already exists")
                    raise ProductSKUAlreadyExistError()
                raise
            session.refresh(product)

        logger.info(f"Product {product.id} created with sku {product.sku}")
        return product

    def get_by_id(self, product_id: str) -> Product:
        """Get a product by ID or raise ProductNotFoundError."""
        with self.session_factory() as session:
            product = session.get(Product, product_id)

        if product is None:
            raise ProductNotFoundError()
        return product

    def get_by_sku(self, sku: str) -> Product:
        """Get a product by SKU or raise ProductNotFoundError."""
        with self.session_factory() as session:
            product = session.scalars(
                select(Product).where(Product.sku == sku)
            ).first()

        if product is None:
            raise ProductNotFoundError()
        return product

    def delete(self, product_id: str) -> None:
        """
        Delete a product.

        Deleting a product that doesn't exist is not an error.
        """
        with self.session_factory() as session:
            product = session.get(Product, product_id)
            if product is None:
                return
            session.delete(product)
            session.commit()

        logger.info(f"Product {product_id} deleted")

    def update(self, product_id: str, qty: int) -> Product:
        """
        Set a product's quantity.

        In-stock flag is recomputed and the update timestamp bumped.

        Args:
            product_id: ID of product to update
            qty: New quantity

        Returns:
            Product as stored after the update

        Raises:
            ProductNotFoundError: If product doesn't exist
        """
        with self.session_factory() as session:
            product = session.get(Product, product_id)
            if product is None:
                raise ProductNotFoundError()

            product.qty = qty
            product.in_stock = qty > 0
            product.updated_at = self._now()

            session.commit()
            session.refresh(product)

        logger.info(f"Product {product_id} quantity set to {qty}")
        return product

    def search(
        self,
        limit: int,
        offset: int,
        name: Optional[str] = None,
        in_stock: Optional[bool] = None,
        sort: Optional[str] = None,
    ) -> Tuple[List[Product], int]:
        """
        Get a page of products and the total number of matches.

        The page and the count are fetched concurrently, each on its own
        session. If either query fails the whole search fails.

        Args:
            limit: Maximum number of products returned
            offset: Number of products skipped
            name: Case-insensitive substring the name must contain
            in_stock: Only return products with this in-stock flag
            sort: Field to order by, prefixed with "-" for descending

        Returns:
            Tuple of (products list, total count)
        """
        filters = []
        if name:
            filters.append(Product.name.ilike(f"%{name}%"))
        if in_stock is not None:
            filters.append(Product.in_stock == in_stock)

        order_by = self._order_by(sort)

        def fetch_page() -> List[Product]:
            with self.session_factory() as session:
                query = (
                    select(Product)
                    .where(*filters)
                    .order_by(order_by, Product.id)
                    .offset(offset)
                    .limit(limit)
                )
                return list(session.scalars(query).all())

        def count_all() -> int:
            with self.session_factory() as session:
                query = select(func.count()).select_from(Product).where(*filters)
                return session.scalar(query) or 0

        with ThreadPoolExecutor(max_workers=2) as executor:
            page_future = executor.submit(fetch_page)
            count_future = executor.submit(count_all)
            # result() re-raises the worker's exception
            products = page_future.result()
            total = count_future.result()

        return products, total

    def _order_by(self, sort: Optional[str]):
        if not sort:
            return Product.created_at.asc()

        descending = sort.startswith("-")
        field = sort.lstrip("-")
        if field not in SORTABLE_FIELDS:
            raise ValueError(f"invalid sort field {field}")

        column = getattr(Product, field)
        return column.desc() if descending else column.asc()
