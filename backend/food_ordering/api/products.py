"""
Products API Endpoints
Read-only access to the product catalog
"""
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Path

from food_ordering.api.dependencies import get_catalog_service, to_http_exception
from food_ordering.core.exceptions import FoodOrderingError
from food_ordering.domain.product import Product
from food_ordering.services.catalog_service import CatalogService

router = APIRouter()


@router.get("/products", response_model=List[Product])
def get_products(service: CatalogService = Depends(get_catalog_service)):
    """
    Get all products in the catalog
    """
    try:
        return service.list_products()
    except FoodOrderingError as e:
        raise to_http_exception(e)


@router.get("/product/", include_in_schema=False)
def get_product_without_id():
    raise HTTPException(status_code=400, detail="Invalid ID supplied")


@router.get("/product/{product_id}", response_model=Product)
def get_product(
    product_id: str = Path(..., description="Product ID"),
    service: CatalogService = Depends(get_catalog_service),
):
    """
    Get a single product by ID

    Returns 400 for an empty ID and 404 when no product matches
    """
    try:
        return service.get_product(product_id)
    except FoodOrderingError as e:
        raise to_http_exception(e)
