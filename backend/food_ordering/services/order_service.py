"""
Order Service
Validates order requests and creates orders atomically

Validation is fail-fast, first violation wins:
1. Coupon (if given) must exist and be backed by enough sources -> 422
2. At least one item -> 400
3. Every quantity >= 1 -> 400
4. Every referenced product exists -> 400

The product lookup and all inserts share one transaction, so an order is
either stored completely (order, items, product links) or not at all.
"""
import logging
from typing import Dict, List, Optional

from sqlalchemy.orm import Session

from food_ordering.core.config import settings
from food_ordering.core.exceptions import BadRequestError, InvalidCouponError
from food_ordering.domain.order import Order, OrderItemRequest, OrderRequest
from food_ordering.domain.product import parse_product_id
from food_ordering.repositories.base import storage_operation
from food_ordering.repositories.coupon_repository import CouponRepository
from food_ordering.repositories.order_repository import OrderRepository
from food_ordering.repositories.product_repository import ProductRepository

logger = logging.getLogger(__name__)


class OrderService:
    """
    Service for placing and listing orders

    Args:
        session: Fresh session; each operation runs its own transaction
        coupon_min_sources: Sources a coupon needs to be redeemable
            (defaults to settings.COUPON_MIN_SOURCES)
        log: Logger for this service
    """

    def __init__(
        self,
        session: Session,
        coupon_min_sources: Optional[int] = None,
        log: Optional[logging.Logger] = None,
    ):
        self.session = session
        self.coupon_min_sources = settings.COUPON_MIN_SOURCES if coupon_min_sources is None else coupon_min_sources
        self.logger = log or logger
        self.orders = OrderRepository(session, self.logger)
        self.products = ProductRepository(session, self.logger)
        self.coupons = CouponRepository(session, self.logger)

    def validate_coupon(self, code: str) -> None:
        """
        Raises:
            InvalidCouponError: Unknown code or too few sources
        """
        coupon = self.coupons.find_by_code(code)
        if coupon is None:
            self.logger.info(f"Coupon not found: {code}")
            raise InvalidCouponError("Invalid coupon code")

        if not coupon.is_valid(self.coupon_min_sources):
            self.logger.info(
                f"Invalid coupon code provided: {code} "
                f"({coupon.source_count} sources, {self.coupon_min_sources} required)"
            )
            raise InvalidCouponError("Invalid coupon code")

    @staticmethod
    def _resolve_product_ids(items: List[OrderItemRequest]) -> Dict[str, int]:
        """
        Map external product IDs to internal ones

        Raises:
            BadRequestError: An ID can never match a stored product
        """
        resolved = {}
        for item in items:
            internal_id = parse_product_id(item.product_id)
            if internal_id is None:
                raise BadRequestError("One or more products not found")
            resolved[item.product_id] = internal_id
        return resolved

    def place_order(self, request: OrderRequest) -> Order:
        """
        Validate and store an order

        Args:
            request: Coupon code (optional) and line items

        Returns:
            The created Order with its items and distinct products

        Raises:
            InvalidCouponError: Coupon rejected
            BadRequestError: No items, bad quantity or unknown product
            StorageError: Database failure; nothing was stored
        """
        items = request.items or []

        with storage_operation("failed to create order", self.logger):
            with self.session.begin():
                if request.coupon_code:
                    self.validate_coupon(request.coupon_code)

                if not items:
                    raise BadRequestError("Order must contain at least one item")

                for item in items:
                    if item.quantity <= 0:
                        raise BadRequestError("Quantity must be greater than zero")

                resolved = self._resolve_product_ids(items)
                product_ids = set(resolved.values())

                # Locked until commit so a product can't vanish under the order
                products = self.products.find_by_ids(product_ids, lock=True)
                if len(products) != len(product_ids):
                    raise BadRequestError("One or more products not found")

                order_id = self.orders.create(
                    [(resolved[item.product_id], item.quantity) for item in items],
                    product_ids,
                )
                order = self.orders.find_by_id(order_id)

        self.logger.info(f"Order {order.id} created with {len(order.items)} items")
        return order

    def list_orders(self) -> List[Order]:
        with storage_operation("failed to fetch orders", self.logger):
            with self.session.begin():
                return self.orders.find_all()
