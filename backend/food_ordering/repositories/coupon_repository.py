"""
Coupon Repository - Data Access Layer for Coupons and Coupon Sources

Find-or-create helpers used by the coupon corpus loader, and lookups used
to validate coupon codes at order time.
"""
import logging
from typing import List, Optional

from sqlalchemy import func, select
from sqlalchemy.orm import Session, selectinload

from food_ordering.domain.coupon import Coupon
from food_ordering.models.coupon import (
    Coupon as CouponRow,
    CouponSource as CouponSourceRow,
    coupon_sources_join,
)
from food_ordering.repositories.base import insert_link, storage_operation

logger = logging.getLogger(__name__)


def _to_domain(row: CouponRow) -> Coupon:
    return Coupon(id=row.id, code=row.code, sources=[source.source for source in row.sources])


class CouponRepository:
    """
    Repository for Coupon data access

    Writes never commit: the caller owns the transaction.
    """

    def __init__(self, session: Session, log: Optional[logging.Logger] = None):
        self.session = session
        self.logger = log or logger

    def get_or_create_source(self, path: str) -> int:
        """
        Find the coupon source for path, creating it if missing

        Returns:
            Source ID
        """
        with storage_operation(f"failed to create coupon source {path}", self.logger):
            source_id = self.session.execute(
                select(CouponSourceRow.id).where(CouponSourceRow.source == path)
            ).scalar_one_or_none()
            if source_id is not None:
                return source_id

            source = CouponSourceRow(source=path)
            self.session.add(source)
            self.session.flush()
            return source.id

    def get_or_create_coupon(self, code: str) -> int:
        """
        Find the coupon with exactly this code, creating it if missing

        Returns:
            Coupon ID
        """
        with storage_operation(f"failed to create coupon {code}", self.logger):
            coupon_id = self.session.execute(
                select(CouponRow.id).where(CouponRow.code == code)
            ).scalar_one_or_none()
            if coupon_id is not None:
                return coupon_id

            coupon = CouponRow(code=code)
            self.session.add(coupon)
            self.session.flush()
            return coupon.id

    def link_source(self, coupon_id: int, source_id: int) -> bool:
        """
        Associate a coupon with a source file (idempotent)

        Returns:
            True if the association is new
        """
        with storage_operation(f"failed to link coupon {coupon_id} to source {source_id}", self.logger):
            return insert_link(self.session, coupon_sources_join, coupon_id=coupon_id, source_id=source_id)

    def find_by_code(self, code: str) -> Optional[Coupon]:
        """
        Find coupon by exact code with its sources

        Returns:
            Coupon or None if not found
        """
        stmt = (
            select(CouponRow)
            .where(CouponRow.code == code)
            .options(selectinload(CouponRow.sources))
            .execution_options(populate_existing=True)
        )
        with storage_operation(f"failed to fetch coupon {code}", self.logger):
            row = self.session.execute(stmt).scalar_one_or_none()
            return _to_domain(row) if row else None

    def find_all(self) -> List[Coupon]:
        stmt = (
            select(CouponRow)
            .order_by(CouponRow.id)
            .options(selectinload(CouponRow.sources))
            .execution_options(populate_existing=True)
        )
        with storage_operation("failed to fetch coupons", self.logger):
            rows = self.session.execute(stmt).scalars().all()
            return [_to_domain(row) for row in rows]

    def count_coupons(self) -> int:
        with storage_operation("failed to count coupons", self.logger):
            return self.session.execute(select(func.count(CouponRow.id))).scalar_one()

    def count_sources(self) -> int:
        with storage_operation("failed to count coupon sources", self.logger):
            return self.session.execute(select(func.count(CouponSourceRow.id))).scalar_one()

    def count_links(self) -> int:
        with storage_operation("failed to count coupon source links", self.logger):
            return self.session.execute(select(func.count()).select_from(coupon_sources_join)).scalar_one()
