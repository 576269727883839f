"""
Coupons harvested from the coupon corpus and the files they came from
"""
from sqlalchemy import Column, Integer, String, ForeignKey, Table
from sqlalchemy.orm import relationship

from food_ordering.core.database import Base


coupon_sources_join = Table(
    "coupon_sources_join",
    Base.metadata,
    Column("coupon_id", Integer, ForeignKey("coupons.id", ondelete="CASCADE"), primary_key=True),
    Column("source_id", Integer, ForeignKey("coupon_sources.id", ondelete="CASCADE"), primary_key=True),
)


class Coupon(Base):
    """
    A coupon code; redeemable once it appears in enough source files
    """
    __tablename__ = "coupons"

    id = Column(Integer, primary_key=True, index=True)
    code = Column(String(255), nullable=False, unique=True, index=True)

    sources = relationship(
        "CouponSource",
        secondary=coupon_sources_join,
        order_by="CouponSource.id",
        viewonly=True,
    )


class CouponSource(Base):
    """
    A scanned corpus file, unique by path
    """
    __tablename__ = "coupon_sources"

    id = Column(Integer, primary_key=True, index=True)
    source = Column(String(1024), nullable=False, unique=True)
