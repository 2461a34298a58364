from typing import Protocol

from storefront.models.product import Product
from storefront.repositories.product_repository import ProductRepository
from storefront.schemas.product import (
    Metadata,
    ProductCreate,
    ProductResponse,
    SearchRequest,
    SearchResponse,
)


class ProductServiceInterface(Protocol):
    """Operations the catalog routes call."""

    def create(self, product_data: ProductCreate) -> Product: ...

    def get_by_id(self, product_id: str) -> Product: ...

    def get_by_sku(self, sku: str) -> Product: ...

    def delete(self, product_id: str) -> None: ...

    def update(self, product_id: str, qty: int) -> Product: ...

    def search(self, request: SearchRequest) -> SearchResponse: ...


class ProductService:
    """
    Service class for product catalog operations.

    Reads and writes go straight to the repository; the service only
    assembles the pagination envelope for searches. Domain errors raised
    by the repository propagate unchanged.
    """

    def __init__(self, repository: ProductRepository):
        self.repository = repository

    def create(self, product_data: ProductCreate) -> Product:
        """Create a new product."""
        return self.repository.create(product_data)

    def get_by_id(self, product_id: str) -> Product:
        return self.repository.get_by_id(product_id)

    def get_by_sku(self, sku: str) -> Product:
        return self.repository.get_by_sku(sku)

    def delete(self, product_id: str) -> None:
        self.repository.delete(product_id)

    def update(self, product_id: str, qty: int) -> Product:
        """Set a product's quantity and return the updated product."""
        return self.repository.update(product_id, qty)

    def search(self, request: SearchRequest) -> SearchResponse:
        """
        Search products.

        Args:
            request: Pagination and filters

        Returns:
            Matching products with total, limit and offset metadata
        """
        products, total = self.repository.search(
            limit=request.limit,
            offset=request.offset,
            name=request.name,
            in_stock=request.in_stock,
            sort=request.sort,
        )

        return SearchResponse(
            products=[ProductResponse.model_validate(p) for p in products],
            metadata=Metadata(
                total=total,
                limit=request.limit,
                offset=request.offset,
            ),
        )
