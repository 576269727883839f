"""
Food Ordering - Backend API
Products, orders and coupon validation over a relational store
"""
import time
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

# Load environment variables
env_path = Path(__file__).parent.parent / '.env'
load_dotenv(env_path)

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse

from food_ordering.api import orders, products
from food_ordering.core.config import Settings, settings as default_settings
from food_ordering.core.database import build_engine, build_session_factory, connect_with_retry
from food_ordering.core.logging_config import configure_logging
from food_ordering.services.seed_service import seed_database


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Verify the database and seed it before serving any request"""
    app_settings = app.state.settings
    log = app.state.logger

    connect_with_retry(
        app.state.engine,
        max_retries=app_settings.DB_CONNECT_RETRIES,
        retry_delay=app_settings.DB_RETRY_DELAY,
        log=log,
    )
    log.info("Database setup complete")

    if app_settings.SEED_ON_STARTUP:
        seed_database(app.state.engine, app.state.session_factory, app_settings, log)
        log.info("Database seeding complete")

    yield

    app.state.engine.dispose()


def create_app(app_settings: Optional[Settings] = None) -> FastAPI:
    """
    Build the FastAPI application

    Args:
        app_settings: Settings to use (defaults to environment settings)

    Returns:
        Configured FastAPI app; the database is seeded on startup
    """
    app_settings = app_settings or default_settings
    log = configure_logging(app_settings.LOG_LEVEL)

    app = FastAPI(
        title=app_settings.API_TITLE,
        version=app_settings.API_VERSION,
        description=app_settings.API_DESCRIPTION,
        lifespan=lifespan,
    )

    engine = build_engine(app_settings.DATABASE_URL)
    app.state.settings = app_settings
    app.state.logger = log
    app.state.engine = engine
    app.state.session_factory = build_session_factory(engine)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_settings.get_allowed_origins(),
        allow_credentials=True,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        start_time = time.time()
        response = await call_next(request)
        elapsed_ms = round((time.time() - start_time) * 1000)
        log.info(f"Request to {request.url.path} completed in {elapsed_ms} ms")
        return response

    @app.exception_handler(RequestValidationError)
    async def invalid_body_handler(request: Request, exc: RequestValidationError):
        log.warning(f"Failed to parse request body for {request.url.path}: {exc.errors()}")
        return JSONResponse(status_code=400, content={"detail": "Invalid request body"})

    @app.get("/health", response_class=PlainTextResponse)
    def health():
        """Health check endpoint para monitoreo"""
        return "OK"

    # Include API routers
    app.include_router(products.router, tags=["Products"])
    app.include_router(orders.router, tags=["Orders"])

    return app


app = create_app()


def run():
    """Run the API with uvicorn using API_HOST / API_PORT"""
    import uvicorn

    uvicorn.run(app, host=default_settings.API_HOST, port=default_settings.API_PORT)


if __name__ == "__main__":
    run()
