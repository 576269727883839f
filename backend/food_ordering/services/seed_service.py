"""
Seed Service
Sets up the database and populates data for the first run

Creates the schema, fills the product catalog and loads the coupon corpus.
Any failure propagates: the service must not start with a partial seed.
"""
import logging
from typing import Optional

from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker

from food_ordering.core.config import Settings
from food_ordering.core.database import init_db
from food_ordering.domain.coupon import LoadSummary
from food_ordering.services.catalog_service import CatalogService
from food_ordering.services.coupon_loader_service import CouponLoaderService

logger = logging.getLogger(__name__)


def seed_database(
    engine: Engine,
    session_factory: sessionmaker,
    settings: Settings,
    log: Optional[logging.Logger] = None,
) -> LoadSummary:
    """
    Initialize the database with initial data

    Args:
        engine: Engine used to create the schema
        session_factory: Factory for the seeding sessions
        settings: Provides COUPON_DATA_DIR
        log: Logger passed to the seeding services

    Returns:
        Summary of the coupon corpus load

    Raises:
        CorpusLoadError: Coupon directory or file unreadable
        StorageError: Database failure
    """
    log = log or logger

    init_db(engine)
    log.info("Database schema ready")

    with session_factory() as session:
        CatalogService(session, log).seed_catalog()

    with session_factory() as session:
        return CouponLoaderService(session, log).load_directory(settings.COUPON_DATA_DIR)
