from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status

from storefront.api.deps import get_product_service
from storefront.errors import ProductNotFoundError, ProductSKUAlreadyExistError
from storefront.services.product_service import ProductServiceInterface
from storefront.schemas.product import (
    ProductCreate,
    ProductUpdate,
    ProductResponse,
    SearchRequest,
    SearchResponse,
)

router = APIRouter(prefix="/v1", tags=["Products"])


def _require_value(value: str, field: str) -> str:
    if not value.strip():
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"product {field} must be provided"
        )
    return value


@router.post(
    "",
    response_model=ProductResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a new product",
    description="Create a new product. The SKU must not be used by another product."
)
def create_product(
    product_data: ProductCreate,
    service: ProductServiceInterface = Depends(get_product_service)
):
    """
    Create a new product.

    - **name**: Product name (required)
    - **sku**: Unique stock-keeping unit (required)
    - **qty**: Initial quantity, must be non-negative
    - **price**: Product price, must be positive (required)
    """
    try:
        return service.create(product_data)
    except ProductSKUAlreadyExistError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e)
        )
    except Exception as e:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=str(e)
        )


@router.get(
    "",
    response_model=SearchResponse,
    summary="Search products",
    description="Get a page of products with optional name, stock and sort parameters."
)
def search_products(
    search: Annotated[SearchRequest, Query()],
    service: ProductServiceInterface = Depends(get_product_service)
):
    """Get paginated list of products."""
    try:
        return service.search(search)
    except Exception as e:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=str(e)
        )


@router.get(
    "/sku/{sku}/",
    response_model=ProductResponse,
    summary="Get product by SKU"
)
def get_product_by_sku(
    sku: str,
    service: ProductServiceInterface = Depends(get_product_service)
):
    _require_value(sku, "sku")

    try:
        return service.get_by_sku(sku)
    except ProductNotFoundError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(e)
        )
    except Exception as e:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=str(e)
        )


@router.get(
    "/{product_id}/",
    response_model=ProductResponse,
    summary="Get product by ID"
)
def get_product(
    product_id: str,
    service: ProductServiceInterface = Depends(get_product_service)
):
    _require_value(product_id, "id")

    try:
        return service.get_by_id(product_id)
    except ProductNotFoundError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(e)
        )
    except Exception as e:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=str(e)
        )


@router.put(
    "/{product_id}/",
    response_model=ProductResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Update product quantity",
    description="Set the available quantity. The in-stock flag follows the new quantity."
)
def update_product(
    product_id: str,
    product_data: ProductUpdate,
    service: ProductServiceInterface = Depends(get_product_service)
):
    _require_value(product_id, "id")

    try:
        return service.update(product_id, product_data.qty)
    except ProductNotFoundError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(e)
        )
    except Exception as e:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=str(e)
        )


@router.delete(
    "/{product_id}/",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a product",
    description="Delete a product by ID. Deleting an unknown product succeeds."
)
def delete_product(
    product_id: str,
    service: ProductServiceInterface = Depends(get_product_service)
):
    """Delete a product."""
    _require_value(product_id, "id")

    try:
        service.delete(product_id)
    except Exception as e:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=str(e)
        )

    return Response(status_code=status.HTTP_204_NO_CONTENT)
