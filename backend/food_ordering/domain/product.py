"""
Product Domain Model

Represents a catalog product as exposed by the API.
"""
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field, ConfigDict, field_serializer

# Upper bound of a signed 64-bit integer column
MAX_PRODUCT_ID = 2**63 - 1


def parse_product_id(value: str) -> Optional[int]:
    """
    Convert an external product ID to the internal integer ID

    Returns None unless value is plain ASCII digits naming a positive ID
    that fits the integer column.
    """
    if not value.isascii() or not value.isdigit():
        return None
    internal_id = int(value)
    if not 0 < internal_id <= MAX_PRODUCT_ID:
        return None
    return internal_id


class Product(BaseModel):
    """
    Product domain model - represents a product in our catalog

    Fields:
        id: Internal product ID (primary key)
        name: Product name
        price: Unit price, non-negative
        category: Product category (Pizza, Salad, ...)
    """

    id: int = Field(..., description="Internal product ID")
    name: str = Field(..., description="Product name")
    price: Decimal = Field(..., description="Unit price", ge=0)
    category: str = Field(..., description="Product category")

    model_config = ConfigDict(from_attributes=True)

    @field_serializer("price")
    def serialize_price(self, price: Decimal) -> float:
        """Prices travel as JSON numbers"""
        return float(price)
