"""
Coupon Domain Models
"""
from typing import List

from pydantic import BaseModel, Field, ConfigDict


class Coupon(BaseModel):
    """A coupon code and the corpus files it was found in"""

    id: int
    code: str
    sources: List[str] = Field(default_factory=list, description="Source file paths")

    model_config = ConfigDict(from_attributes=True)

    @property
    def source_count(self) -> int:
        return len(self.sources)

    def is_valid(self, min_sources: int) -> bool:
        """Check if the coupon is backed by at least min_sources files"""
        return self.source_count >= min_sources


class LoadSummary(BaseModel):
    """Outcome of one coupon corpus load"""

    files_scanned: int = 0
    directories_skipped: int = 0
    lines_matched: int = 0
    coupon_count: int = 0
    source_count: int = 0
