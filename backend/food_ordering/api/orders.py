"""
Orders API Endpoints
Order placement and listing
"""
from typing import List

from fastapi import APIRouter, Depends

from food_ordering.api.dependencies import get_order_service, to_http_exception
from food_ordering.core.exceptions import FoodOrderingError
from food_ordering.domain.order import Order, OrderRequest
from food_ordering.services.order_service import OrderService

router = APIRouter()


@router.get("/orders", response_model=List[Order])
def get_orders(service: OrderService = Depends(get_order_service)):
    """
    Get all orders with their items and products
    """
    try:
        return service.list_orders()
    except FoodOrderingError as e:
        raise to_http_exception(e)


@router.post("/order", response_model=Order, status_code=201)
def create_order(order_request: OrderRequest, service: OrderService = Depends(get_order_service)):
    """
    Place an order

    Errors:
    - 400: invalid body, no items, quantity < 1 or unknown product
    - 422: coupon code unknown or not valid
    - 500: order could not be stored
    """
    try:
        return service.place_order(order_request)
    except FoodOrderingError as e:
        raise to_http_exception(e)
