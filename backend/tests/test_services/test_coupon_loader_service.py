"""
Tests for CouponLoaderService

Run against an in-memory SQLite database with corpus files in tmp_path.
"""
import builtins
from unittest.mock import patch

import pytest

from food_ordering.core.exceptions import CorpusLoadError
from food_ordering.repositories.coupon_repository import CouponRepository
from food_ordering.services.coupon_loader_service import CouponLoaderService


def _counts(session_factory):
    with session_factory() as session:
        repo = CouponRepository(session)
        return repo.count_coupons(), repo.count_sources(), repo.count_links()


def _coupons(session_factory):
    with session_factory() as session:
        return {coupon.code: coupon for coupon in CouponRepository(session).find_all()}


class TestCouponLoaderService:
    """Test coupon corpus loading"""

    def test_single_file_with_one_valid_line(self, session_factory, seeded_catalog, tmp_path):
        """Only the matching line becomes a coupon, linked to its file"""
        # Arrange
        corpus_file = tmp_path / "couponbase1.txt"
        corpus_file.write_text("SAVE10NOW\n\nx\n")

        # Act
        with session_factory() as session:
            summary = CouponLoaderService(session).load_directory(str(tmp_path))

        # Assert
        coupons = _coupons(session_factory)
        assert list(coupons) == ["SAVE10NOW"]
        assert coupons["SAVE10NOW"].sources == [str(corpus_file)]
        assert summary.files_scanned == 1
        assert summary.lines_matched == 1
        assert summary.coupon_count == 1
        assert summary.source_count == 1
        assert len(seeded_catalog) == 6

    def test_coupon_in_two_files_gets_two_sources(self, session_factory, loaded_coupons, coupon_dir):
        coupons = _coupons(session_factory)

        assert set(coupons) == {"HAPPYHRS", "FIFTYOFF", "ONLYONCE1"}
        assert coupons["HAPPYHRS"].sources == [
            str(coupon_dir / "couponbase1.txt"),
            str(coupon_dir / "couponbase2.txt"),
        ]
        assert coupons["ONLYONCE1"].source_count == 1

    def test_reload_is_idempotent(self, session_factory, coupon_dir):
        """Loading the same directory twice adds no rows"""
        with session_factory() as session:
            CouponLoaderService(session).load_directory(str(coupon_dir))
        first = _counts(session_factory)

        with session_factory() as session:
            summary = CouponLoaderService(session).load_directory(str(coupon_dir))
        second = _counts(session_factory)

        assert first == (3, 2, 5)
        assert second == first
        assert (summary.coupon_count, summary.source_count) == (3, 2)

    def test_duplicate_line_in_same_file_links_once(self, session_factory, tmp_path):
        (tmp_path / "dupes.txt").write_text("REPEATED1\nREPEATED1\n")

        with session_factory() as session:
            summary = CouponLoaderService(session).load_directory(str(tmp_path))

        assert summary.lines_matched == 2
        assert _counts(session_factory) == (1, 1, 1)

    def test_subdirectories_are_skipped(self, session_factory, tmp_path):
        """Files inside subdirectories are never read"""
        (tmp_path / "top.txt").write_text("TOPLEVEL1\n")
        nested = tmp_path / "nested"
        nested.mkdir()
        (nested / "inner.txt").write_text("NESTEDCODE\n")

        with session_factory() as session:
            summary = CouponLoaderService(session).load_directory(str(tmp_path))

        assert summary.files_scanned == 1
        assert summary.directories_skipped == 1
        assert list(_coupons(session_factory)) == ["TOPLEVEL1"]

    def test_line_pattern(self, session_factory, tmp_path):
        """Lines need a run of 8+ word characters; the whole line is the code"""
        (tmp_path / "mixed.txt").write_text(
            "abcdefg\n"           # 7 characters
            "ab-cd-ef-gh\n"       # no contiguous run
            "12345678\n"          # digits count
            "under_score\n"       # 11 characters, contains a run of 10
            "WINDOWS01\r\n"       # CRLF line ending
            "promo:SPRING2024\n"  # matched anywhere in the line
        )

        with session_factory() as session:
            CouponLoaderService(session).load_directory(str(tmp_path))

        assert set(_coupons(session_factory)) == {
            "12345678",
            "under_score",
            "WINDOWS01",
            "promo:SPRING2024",
        }

    def test_file_with_no_codes_still_registers_source(self, session_factory, tmp_path):
        (tmp_path / "empty.txt").write_text("\n\nnope\n")

        with session_factory() as session:
            CouponLoaderService(session).load_directory(str(tmp_path))

        assert _counts(session_factory) == (0, 1, 0)

    def test_missing_directory_raises(self, db_session, tmp_path):
        with pytest.raises(CorpusLoadError) as exc_info:
            CouponLoaderService(db_session).load_directory(str(tmp_path / "missing"))

        assert "does not exist" in exc_info.value.message

    def test_unreadable_file_aborts_whole_load(self, session_factory, tmp_path):
        """A file that can't be opened rolls back every file loaded before it"""
        (tmp_path / "a.txt").write_text("GOODCODE1\n")
        (tmp_path / "b.txt").write_text("NEVERREAD1\n")
        real_open = builtins.open

        def fake_open(path, *args, **kwargs):
            if str(path).endswith("b.txt"):
                raise PermissionError("permission denied")
            return real_open(path, *args, **kwargs)

        with patch("builtins.open", side_effect=fake_open):
            with session_factory() as session:
                with pytest.raises(CorpusLoadError) as exc_info:
                    CouponLoaderService(session).load_directory(str(tmp_path))

        assert "b.txt" in exc_info.value.message
        assert isinstance(exc_info.value.__cause__, PermissionError)
        assert _counts(session_factory) == (0, 0, 0)

    def test_non_utf8_file_aborts_whole_load(self, session_factory, tmp_path):
        """Undecodable bytes are rejected instead of being merged into lossy codes"""
        (tmp_path / "a.txt").write_text("GOODCODE1\n")
        (tmp_path / "b.txt").write_bytes(b"BADCODE\xff1\nBADCODE\xfe1\n")

        with session_factory() as session:
            with pytest.raises(CorpusLoadError) as exc_info:
                CouponLoaderService(session).load_directory(str(tmp_path))

        assert "b.txt" in exc_info.value.message
        assert isinstance(exc_info.value.__cause__, UnicodeDecodeError)
        assert _counts(session_factory) == (0, 0, 0)
