"""
Order Domain Models

Represents orders, their line items and the incoming order request.
Field names follow the public JSON contract (camelCase aliases).
"""
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field, ConfigDict, field_validator

from food_ordering.domain.product import Product


class OrderItem(BaseModel):
    """
    Order Item domain model - represents a line item in an order

    Fields:
        product_id: Product catalog ID, string-typed externally
        quantity: Number of units ordered
    """

    product_id: str = Field(..., alias="productId", description="Product catalog ID")
    quantity: int = Field(..., description="Quantity ordered", ge=1)

    model_config = ConfigDict(populate_by_name=True)


class Order(BaseModel):
    """
    Order domain model - a placed order with its items and products

    Fields:
        id: Internal order ID (primary key)
        items: Line items in request order
        products: Distinct products referenced by the items
        created_at: When order was created
        updated_at: When order was last updated
    """

    id: int = Field(..., description="Internal order ID")
    items: List[OrderItem] = Field(default_factory=list, description="Order items")
    products: List[Product] = Field(default_factory=list, description="Products in the order")
    created_at: Optional[datetime] = Field(None, alias="createdAt", description="Creation timestamp")
    updated_at: Optional[datetime] = Field(None, alias="updatedAt", description="Last update timestamp")

    model_config = ConfigDict(populate_by_name=True)

    @property
    def total_quantity(self) -> int:
        """Total quantity of all items"""
        return sum(item.quantity for item in self.items)


class OrderItemRequest(BaseModel):
    """
    A requested line item

    Quantity is deliberately unconstrained here: the order service rejects
    non-positive quantities after coupon validation.
    """

    product_id: str = Field(..., alias="productId")
    quantity: int

    model_config = ConfigDict(populate_by_name=True)

    @field_validator("product_id", mode="before")
    @classmethod
    def coerce_product_id(cls, value):
        """Accept numeric ids from clients"""
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value


class OrderRequest(BaseModel):
    """Schema for placing a new order"""

    coupon_code: Optional[str] = Field(None, alias="couponCode")
    items: Optional[List[OrderItemRequest]] = None

    model_config = ConfigDict(populate_by_name=True)
