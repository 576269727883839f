"""
Repository Layer - Data Access

This layer handles all database queries and returns domain models.
Repositories abstract away SQL details from business logic.
"""
from food_ordering.repositories.product_repository import ProductRepository
from food_ordering.repositories.order_repository import OrderRepository
from food_ordering.repositories.coupon_repository import CouponRepository

__all__ = [
    'ProductRepository',
    'OrderRepository',
    'CouponRepository',
]
