"""
Conexión a base de datos

Este módulo centraliza el acceso a la base de datos vía SQLAlchemy:
- Engine y session factory construidos desde DATABASE_URL
- Dependencia de FastAPI para obtener una sesión por request
- Verificación de conexión con retry al arrancar

SQLite is used for local runs and tests; PostgreSQL (psycopg2) in deployment.
"""
import logging
import time
from typing import Iterator, Optional

from fastapi import Request
from sqlalchemy import create_engine, event, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import Session, declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

logger = logging.getLogger(__name__)

# Base para modelos
Base = declarative_base()


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def build_engine(database_url: str) -> Engine:
    """
    Build a SQLAlchemy engine for the given URL

    SQLite connections are shared across threads (TestClient, uvicorn workers
    threadpool) and enforce foreign keys. In-memory SQLite keeps a single
    connection so every session sees the same database.

    Args:
        database_url: SQLAlchemy database URL

    Returns:
        Engine
    """
    if database_url.startswith("sqlite"):
        kwargs = {"connect_args": {"check_same_thread": False}}
        if ":memory:" in database_url or database_url in ("sqlite://", "sqlite+pysqlite://"):
            kwargs["poolclass"] = StaticPool
        engine = create_engine(database_url, **kwargs)
        event.listen(engine, "connect", _enable_sqlite_foreign_keys)
        return engine

    return create_engine(
        database_url,
        pool_pre_ping=True,  # Verificar conexión antes de usar
        pool_size=10,
        max_overflow=20,
    )


def build_session_factory(engine: Engine) -> sessionmaker:
    """Session factory; objects stay readable after commit"""
    return sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)


def init_db(engine: Engine) -> None:
    """Create all tables that do not exist yet"""
    # Register models on Base.metadata
    from food_ordering import models  # noqa: F401

    Base.metadata.create_all(bind=engine)


def get_db(request: Request) -> Iterator[Session]:
    """
    FastAPI dependency para obtener sesión de SQLAlchemy

    Usage:
        @router.get("/items")
        def read_items(db: Session = Depends(get_db)):
            ...
    """
    db = request.app.state.session_factory()
    try:
        yield db
    finally:
        db.close()


def connect_with_retry(
    engine: Engine,
    max_retries: int = 3,
    retry_delay: float = 1.0,
    log: Optional[logging.Logger] = None,
) -> None:
    """
    Verify database connectivity, retrying transient connection failures

    Retries OperationalError up to max_retries times with exponential backoff.
    Any other error fails immediately.

    Args:
        engine: Engine to check
        max_retries: Maximum number of connection attempts (default: 3)
        retry_delay: Initial delay between retries in seconds (default: 1.0)
        log: Logger to report attempts to

    Raises:
        OperationalError: If all retry attempts fail
    """
    log = log or logger

    for attempt in range(1, max_retries + 1):
        try:
            log.debug(f"Database connection attempt {attempt}/{max_retries}")
            with engine.connect() as conn:
                conn.execute(text("SELECT 1"))
            log.debug(f"Database connection successful on attempt {attempt}")
            return

        except OperationalError as e:
            log.warning(f"Connection error on attempt {attempt}/{max_retries}: {e}")

            # Don't retry on last attempt
            if attempt == max_retries:
                log.error(f"All {max_retries} connection attempts failed")
                raise

            # Exponential backoff
            delay = retry_delay * (2 ** (attempt - 1))
            log.info(f"Retrying in {delay:.2f} seconds...")
            time.sleep(delay)
