"""
Domain Layer - Business Entities

This layer contains Pydantic models representing business entities.
These models enforce type safety and validation across the application.
"""
from food_ordering.domain.product import Product, parse_product_id
from food_ordering.domain.order import Order, OrderItem, OrderItemRequest, OrderRequest
from food_ordering.domain.coupon import Coupon, LoadSummary

__all__ = [
    'Product',
    'parse_product_id',
    'Order',
    'OrderItem',
    'OrderItemRequest',
    'OrderRequest',
    'Coupon',
    'LoadSummary',
]
