"""
Pytest fixtures and configuration for Food Ordering Backend tests

Every test gets its own in-memory SQLite database, so tests never share
state and need no external services.
"""
import pytest
from fastapi.testclient import TestClient

from food_ordering.core.config import Settings
from food_ordering.core.database import build_engine, build_session_factory, init_db
from food_ordering.main import create_app
from food_ordering.services.catalog_service import CatalogService
from food_ordering.services.coupon_loader_service import CouponLoaderService


@pytest.fixture
def engine():
    """
    Provides a fresh in-memory database with the schema created

    Scope: function (new database per test)
    """
    engine = build_engine("sqlite://")
    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return build_session_factory(engine)


@pytest.fixture
def db_session(session_factory):
    """
    Provides a session for each test

    Automatically closes the session after the test
    """
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def seeded_catalog(session_factory):
    """
    Seeds the product catalog and returns the seeded products
    """
    with session_factory() as session:
        CatalogService(session).seed_catalog()
    with session_factory() as session:
        return CatalogService(session).list_products()


@pytest.fixture
def coupon_dir(tmp_path):
    """
    Provides a small coupon corpus

    HAPPYHRS and FIFTYOFF appear in two files, ONLYONCE1 in one.
    """
    corpus = tmp_path / "coupons"
    corpus.mkdir()
    (corpus / "couponbase1.txt").write_text("HAPPYHRS\nFIFTYOFF\nONLYONCE1\n")
    (corpus / "couponbase2.txt").write_text("FIFTYOFF\nHAPPYHRS\nshort\n")
    return corpus


@pytest.fixture
def loaded_coupons(session_factory, coupon_dir):
    """
    Loads coupon_dir into the database and returns the load summary
    """
    with session_factory() as session:
        return CouponLoaderService(session).load_directory(str(coupon_dir))


@pytest.fixture
def test_settings(coupon_dir):
    """
    Settings for an app backed by its own in-memory database
    """
    return Settings(
        DATABASE_URL="sqlite://",
        COUPON_DATA_DIR=str(coupon_dir),
        COUPON_MIN_SOURCES=2,
        DB_CONNECT_RETRIES=1,
        DB_RETRY_DELAY=0,
        SEED_ON_STARTUP=True,
    )


@pytest.fixture
def app(test_settings):
    return create_app(test_settings)


@pytest.fixture
def client(app):
    """
    Provides a TestClient; entering it runs startup (connect + seed)
    """
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def product_ids(client):
    """
    Maps product name -> ID for the seeded catalog
    """
    response = client.get("/products")
    return {product["name"]: product["id"] for product in response.json()}
