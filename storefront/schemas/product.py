from pydantic import BaseModel, Field, ConfigDict, field_validator
from datetime import datetime, timezone
from typing import Optional

# Columns products can be sorted by; a leading "-" sorts descending
SORTABLE_FIELDS = ("name", "sku", "price", "qty", "created_at", "updated_at")


class ProductCreate(BaseModel):
    """Schema for creating a new product."""
    name: str = Field("", validate_default=True, description="Product name")
    sku: str = Field("", validate_default=True, description="Unique stock-keeping unit")
    description: Optional[str] = Field(None, description="Product description")
    qty: int = Field(0, ge=0, description="Available quantity (must be non-negative)")
    images: Optional[list[str]] = Field(None, description="Product image URLs")
    price: int = Field(0, validate_default=True, description="Product price (must be positive)")

    @field_validator("name")
    @classmethod
    def name_not_empty(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("product name cannot be empty")
        return value

    @field_validator("sku")
    @classmethod
    def sku_not_empty(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("product sku cannot be empty")
        return value

    @field_validator("images")
    @classmethod
    def images_not_blank(cls, value: Optional[list[str]]) -> Optional[list[str]]:
        for image in value or []:
            if not image.strip():
                raise ValueError("product image cannot be empty")
        return value

    @field_validator("price")
    @classmethod
    def price_positive(cls, value: int) -> int:
        if value <= 0:
            raise ValueError("product price invalid value")
        return value


class ProductUpdate(BaseModel):
    """Schema for updating a product quantity."""
    qty: int = Field(..., ge=0, description="New available quantity")


class ProductResponse(BaseModel):
    """Schema for product response including all fields."""
    id: str
    name: str
    description: Optional[str] = None
    sku: str
    qty: int
    images: Optional[list[str]] = None
    price: int
    in_stock: bool
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)

    @field_validator("created_at", "updated_at")
    @classmethod
    def as_utc(cls, value: datetime) -> datetime:
        # Timestamps are stored as UTC but SQLite returns them without tzinfo
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)


class SearchRequest(BaseModel):
    """Pagination and filters accepted by product search."""
    limit: int = Field(..., ge=0)
    offset: int = Field(..., ge=0)
    name: Optional[str] = None
    in_stock: Optional[bool] = None
    sort: Optional[str] = None

    @field_validator("sort")
    @classmethod
    def sort_field_known(cls, value: Optional[str]) -> Optional[str]:
        if value and value.lstrip("-") not in SORTABLE_FIELDS:
            raise ValueError("incorrect sort format")
        return value or None


class Metadata(BaseModel):
    """Pagination metadata returned with search results."""
    total: int
    limit: int
    offset: int


class SearchResponse(BaseModel):
    """Schema for paginated product search response."""
    products: list[ProductResponse]
    metadata: Metadata
