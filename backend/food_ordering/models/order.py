"""
Modelos relacionados con órdenes/pedidos
"""
from sqlalchemy import Column, Integer, DateTime, ForeignKey, Table, CheckConstraint
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from food_ordering.core.database import Base


# Order <-> Product, derived from the order's items. Rows are inserted
# explicitly by OrderRepository inside the order transaction.
order_products = Table(
    "order_products",
    Base.metadata,
    Column("order_id", Integer, ForeignKey("orders.id", ondelete="CASCADE"), primary_key=True),
    Column("product_id", Integer, ForeignKey("products.id"), primary_key=True),
)


class Order(Base):
    """
    Tabla principal de órdenes
    """
    __tablename__ = "orders"

    id = Column(Integer, primary_key=True, index=True)

    # Metadata
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    # Relationships
    items = relationship(
        "OrderItem",
        back_populates="order",
        cascade="all, delete-orphan",
        order_by="OrderItem.id",
    )
    products = relationship(
        "Product",
        secondary=order_products,
        order_by="Product.id",
        viewonly=True,
    )


class OrderItem(Base):
    """
    Items/productos de cada orden
    """
    __tablename__ = "order_items"
    __table_args__ = (
        CheckConstraint("quantity > 0", name="ck_order_items_quantity_positive"),
    )

    id = Column(Integer, primary_key=True, index=True)
    order_id = Column(Integer, ForeignKey("orders.id", ondelete="CASCADE"), index=True, nullable=False)
    product_id = Column(Integer, ForeignKey("products.id"), index=True, nullable=False)
    quantity = Column(Integer, nullable=False)

    # Relationships
    order = relationship("Order", back_populates="items")
