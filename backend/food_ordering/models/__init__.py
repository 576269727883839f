"""
Modelos de base de datos
"""
from .product import Product
from .order import Order, OrderItem, order_products
from .coupon import Coupon, CouponSource, coupon_sources_join

__all__ = [
    "Product",
    "Order",
    "OrderItem",
    "order_products",
    "Coupon",
    "CouponSource",
    "coupon_sources_join",
]
