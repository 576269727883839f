"""
Product Repository - Data Access Layer for Products

Handles all database queries for products and returns Product domain models.
"""
import logging
from decimal import Decimal
from typing import Iterable, List, Optional, Tuple

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from food_ordering.domain.product import Product
from food_ordering.models.product import Product as ProductRow
from food_ordering.repositories.base import storage_operation

logger = logging.getLogger(__name__)


class ProductRepository:
    """
    Repository for Product data access

    All SQL queries for products are centralized here.
    The caller owns the session and its transaction.
    """

    def __init__(self, session: Session, log: Optional[logging.Logger] = None):
        self.session = session
        self.logger = log or logger

    def count(self) -> int:
        """Number of products in the catalog"""
        with storage_operation("failed to count products", self.logger):
            return self.session.execute(select(func.count(ProductRow.id))).scalar_one()

    def add_all(self, products: Iterable[Tuple[str, Decimal, str]]) -> int:
        """
        Insert products from (name, price, category) triples

        Returns:
            Number of products inserted
        """
        rows = [ProductRow(name=name, price=price, category=category) for name, price, category in products]
        with storage_operation("failed to create products", self.logger):
            self.session.add_all(rows)
            self.session.flush()
        return len(rows)

    def find_all(self) -> List[Product]:
        """
        Get all products ordered by ID

        Returns:
            List of products
        """
        with storage_operation("failed to fetch products", self.logger):
            rows = self.session.execute(select(ProductRow).order_by(ProductRow.id)).scalars().all()
            return [Product.model_validate(row) for row in rows]

    def find_by_id(self, product_id: int) -> Optional[Product]:
        """
        Find product by internal ID

        Args:
            product_id: Internal product ID

        Returns:
            Product or None if not found
        """
        with storage_operation(f"failed to fetch product {product_id}", self.logger):
            row = self.session.get(ProductRow, product_id)
            return Product.model_validate(row) if row else None

    def find_by_ids(self, product_ids: Iterable[int], lock: bool = False) -> List[Product]:
        """
        Find all products whose ID is in product_ids

        Args:
            product_ids: Internal product IDs (duplicates are ignored)
            lock: Take a shared row lock so the products cannot be removed
                before the current transaction ends (no-op on SQLite)

        Returns:
            Matching products ordered by ID; missing IDs are simply absent
        """
        ids = sorted(set(product_ids))
        if not ids:
            return []

        stmt = select(ProductRow).where(ProductRow.id.in_(ids)).order_by(ProductRow.id)
        if lock:
            stmt = stmt.with_for_update(read=True)

        with storage_operation("failed to fetch products", self.logger):
            rows = self.session.execute(stmt).scalars().all()
            return [Product.model_validate(row) for row in rows]
