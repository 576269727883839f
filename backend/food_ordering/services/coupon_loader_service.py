"""
Coupon Corpus Loader
Harvests coupon codes from a directory of plain-text files

Each file in the corpus directory is registered as a coupon source. Every
non-empty line containing a run of 8 to 10 word characters is a coupon code,
and the coupon is linked to the file it appeared in. A coupon found in
several files ends up with several sources, which is what makes it
redeemable at order time.
"""
import logging
import re
from pathlib import Path
from typing import List, Optional, Pattern, Tuple

from sqlalchemy.orm import Session

from food_ordering.core.exceptions import CorpusLoadError
from food_ordering.domain.coupon import LoadSummary
from food_ordering.repositories.base import storage_operation
from food_ordering.repositories.coupon_repository import CouponRepository

logger = logging.getLogger(__name__)

# ASCII word characters, as in the corpus format
COUPON_PATTERN = re.compile(r"\w{8,10}", re.ASCII)


class CouponLoaderService:
    """
    Service for loading the coupon corpus into the database

    Handles:
    - Listing corpus files (one level deep, subdirectories skipped)
    - Extracting candidate codes line by line
    - Find-or-create of sources, coupons and their links

    The whole load runs in one transaction: any unreadable file aborts it and
    nothing is kept. Loading the same directory again adds nothing.
    """

    def __init__(
        self,
        session: Session,
        log: Optional[logging.Logger] = None,
        pattern: Pattern[str] = COUPON_PATTERN,
    ):
        self.session = session
        self.logger = log or logger
        self.pattern = pattern

    def list_files(self, dir_path: str) -> Tuple[List[Path], int]:
        """
        List the files directly inside dir_path

        Args:
            dir_path: Corpus directory

        Returns:
            Tuple of (sorted file paths, number of subdirectories skipped)

        Raises:
            CorpusLoadError: If the directory does not exist or can't be listed
        """
        root = Path(dir_path)
        if not root.is_dir():
            raise CorpusLoadError(f"directory {dir_path} does not exist")

        try:
            entries = sorted(root.iterdir())
        except OSError as e:
            raise CorpusLoadError(f"error walking through directory {dir_path}") from e

        files = []
        skipped = 0
        for entry in entries:
            if entry.is_dir():
                self.logger.debug(f"Skipping subdirectory {entry}")
                skipped += 1
                continue
            files.append(entry)

        return files, skipped

    def read_codes(self, path: Path) -> List[str]:
        """
        Read candidate coupon codes from one corpus file

        A line is kept whole when the pattern matches anywhere in it.

        Raises:
            CorpusLoadError: If the file can't be opened, read or decoded as UTF-8
        """
        codes = []
        try:
            with open(path, "r", encoding="utf-8") as fh:
                for line in fh:
                    code = line.rstrip("\r\n")
                    if not code or not self.pattern.search(code):
                        continue
                    codes.append(code)
        except OSError as e:
            raise CorpusLoadError(f"failed to read file: {path}") from e
        except UnicodeDecodeError as e:
            raise CorpusLoadError(f"file is not valid UTF-8: {path}") from e

        return codes

    def load_directory(self, dir_path: str) -> LoadSummary:
        """
        Load every file in dir_path into coupons and coupon sources

        Args:
            dir_path: Corpus directory

        Returns:
            LoadSummary with scan statistics and resulting row counts

        Raises:
            CorpusLoadError: Missing directory or unreadable file
            StorageError: Database failure
        """
        files, skipped = self.list_files(dir_path)
        summary = LoadSummary(files_scanned=len(files), directories_skipped=skipped)
        repo = CouponRepository(self.session, self.logger)

        with storage_operation("failed to load coupon corpus", self.logger):
            with self.session.begin():
                for path in files:
                    source_id = repo.get_or_create_source(str(path))
                    codes = self.read_codes(path)
                    summary.lines_matched += len(codes)

                    for code in dict.fromkeys(codes):
                        coupon_id = repo.get_or_create_coupon(code)
                        repo.link_source(coupon_id, source_id)

                    self.logger.debug(f"Loaded {len(codes)} coupon lines from {path}")

                summary.coupon_count = repo.count_coupons()
                summary.source_count = repo.count_sources()

                if self.logger.isEnabledFor(logging.DEBUG):
                    for coupon in repo.find_all():
                        self.logger.debug(f"Coupon {coupon.code}: {coupon.sources}")

        self.logger.info(
            f"Coupon corpus loaded from {dir_path}: {summary.files_scanned} files, "
            f"{summary.lines_matched} matching lines, {summary.coupon_count} coupons, "
            f"{summary.source_count} sources"
        )
        return summary
