"""
Catalog Service
Seeds and serves the fixed product catalog
"""
import logging
from decimal import Decimal
from typing import List, Optional

from sqlalchemy.orm import Session

from food_ordering.core.exceptions import BadRequestError, NotFoundError
from food_ordering.domain.product import Product, parse_product_id
from food_ordering.repositories.base import storage_operation
from food_ordering.repositories.product_repository import ProductRepository

logger = logging.getLogger(__name__)

# (name, price, category)
SEED_PRODUCTS = [
    ("Margherita Pizza", Decimal("12.99"), "Pizza"),
    ("Pepperoni Pizza", Decimal("14.99"), "Pizza"),
    ("Caesar Salad", Decimal("8.99"), "Salad"),
    ("Garlic Bread", Decimal("4.99"), "Sides"),
    ("Chocolate Cake", Decimal("6.99"), "Dessert"),
    ("Chicken Waffle", Decimal("1.00"), "Waffle"),
]


class CatalogService:
    """Read-only product catalog, seeded once"""

    def __init__(self, session: Session, log: Optional[logging.Logger] = None):
        self.session = session
        self.logger = log or logger
        self.products = ProductRepository(session, self.logger)

    def seed_catalog(self) -> int:
        """
        Insert the seed products if the catalog is empty

        Returns:
            Number of products inserted (0 when already seeded)
        """
        with storage_operation("failed to seed product data", self.logger):
            with self.session.begin():
                if self.products.count() > 0:
                    self.logger.info("Product catalog already seeded")
                    return 0
                inserted = self.products.add_all(SEED_PRODUCTS)

        self.logger.info(f"Seeded {inserted} products")
        return inserted

    def list_products(self) -> List[Product]:
        with storage_operation("failed to fetch products", self.logger):
            with self.session.begin():
                return self.products.find_all()

    def get_product(self, product_id: str) -> Product:
        """
        Get a single product by its external (string) ID

        Raises:
            BadRequestError: Empty ID
            NotFoundError: No product with that ID
        """
        if not product_id or not product_id.strip():
            raise BadRequestError("Invalid ID supplied")

        not_found = NotFoundError(f"No product found with id: {product_id}")
        internal_id = parse_product_id(product_id)
        if internal_id is None:
            raise not_found

        with storage_operation("failed to fetch product", self.logger):
            with self.session.begin():
                product = self.products.find_by_id(internal_id)

        if product is None:
            raise not_found
        return product
