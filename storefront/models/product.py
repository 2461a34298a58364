from sqlalchemy import Column, Integer, String, Text, Boolean, DateTime, JSON, CheckConstraint

from storefront.database import Base


class Product(Base):
    """
    Product model representing catalog items.

    Attributes:
        id: Generated unique identifier (uuid4)
        name: Product name
        description: Optional product description
        sku: Stock-keeping unit, unique across the catalog
        qty: Available quantity (must be non-negative)
        images: Optional list of image URLs
        price: Product price (positive, validated on input)
        in_stock: Derived from qty, True when qty > 0
        created_at: Timestamp when product was created
        updated_at: Timestamp when product was last updated
    """
    __tablename__ = "products"

    id = Column(String(36), primary_key=True)
    name = Column(String(255), nullable=False, index=True)
    description = Column(Text, nullable=True)
    sku = Column(String(64), unique=True, index=True, nullable=False)
    qty = Column(Integer, nullable=False, default=0)
    images = Column(JSON, nullable=True)
    price = Column(Integer, nullable=False)
    in_stock = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime(timezone=True), nullable=False)
    updated_at = Column(DateTime(timezone=True), nullable=False)

    __table_args__ = (
        CheckConstraint('qty >= 0', name='check_qty_non_negative'),
    )

    def __repr__(self):
        return f"<Product(id={self.id}, sku='{self.sku}', qty={self.qty})>"
