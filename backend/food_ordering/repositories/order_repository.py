"""
Order Repository - Data Access Layer for Orders

Handles all database queries for orders and returns Order domain models
with their items and products loaded.
"""
import logging
from typing import Iterable, List, Optional, Tuple

from sqlalchemy import func, select
from sqlalchemy.orm import Session, selectinload

from food_ordering.domain.order import Order, OrderItem
from food_ordering.domain.product import Product
from food_ordering.models.order import Order as OrderRow, OrderItem as OrderItemRow, order_products
from food_ordering.repositories.base import insert_link, storage_operation

logger = logging.getLogger(__name__)


def _to_domain(row: OrderRow) -> Order:
    return Order(
        id=row.id,
        items=[OrderItem(product_id=str(item.product_id), quantity=item.quantity) for item in row.items],
        products=[Product.model_validate(product) for product in row.products],
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


class OrderRepository:
    """
    Repository for Order data access

    Returns Order domain models with related data (items, products).
    Writes never commit: the caller owns the transaction.
    """

    def __init__(self, session: Session, log: Optional[logging.Logger] = None):
        self.session = session
        self.logger = log or logger

    def create(self, items: Iterable[Tuple[int, int]], product_ids: Iterable[int]) -> int:
        """
        Insert an order, its items and its product links

        Args:
            items: (product_id, quantity) pairs in request order
            product_ids: Resolved product IDs to link to the order

        Returns:
            The new order ID
        """
        with storage_operation("failed to create order", self.logger):
            order = OrderRow(
                items=[OrderItemRow(product_id=product_id, quantity=quantity) for product_id, quantity in items]
            )
            self.session.add(order)
            self.session.flush()

            for product_id in sorted(set(product_ids)):
                insert_link(self.session, order_products, order_id=order.id, product_id=product_id)

            return order.id

    def find_by_id(self, order_id: int) -> Optional[Order]:
        """
        Find order by ID with items and products

        Args:
            order_id: Internal order ID

        Returns:
            Order with all related data or None if not found
        """
        stmt = (
            select(OrderRow)
            .where(OrderRow.id == order_id)
            .options(selectinload(OrderRow.items), selectinload(OrderRow.products))
            .execution_options(populate_existing=True)
        )
        with storage_operation(f"failed to fetch order {order_id}", self.logger):
            row = self.session.execute(stmt).scalar_one_or_none()
            return _to_domain(row) if row else None

    def find_all(self) -> List[Order]:
        """
        Get all orders ordered by ID

        Items and products are loaded eagerly in two extra queries
        (no N+1), so the result is self-contained.
        """
        stmt = (
            select(OrderRow)
            .order_by(OrderRow.id)
            .options(selectinload(OrderRow.items), selectinload(OrderRow.products))
        )
        with storage_operation("failed to fetch orders", self.logger):
            rows = self.session.execute(stmt).scalars().all()
            return [_to_domain(row) for row in rows]

    def count(self) -> int:
        with storage_operation("failed to count orders", self.logger):
            return self.session.execute(select(func.count(OrderRow.id))).scalar_one()

    def count_items(self) -> int:
        with storage_operation("failed to count order items", self.logger):
            return self.session.execute(select(func.count(OrderItemRow.id))).scalar_one()
