"""
FastAPI dependencies shared by the routers
"""
import logging

from fastapi import Depends, HTTPException, Request
from sqlalchemy.orm import Session

from food_ordering.core.database import get_db
from food_ordering.core.exceptions import FoodOrderingError
from food_ordering.services.catalog_service import CatalogService
from food_ordering.services.order_service import OrderService


def get_logger(request: Request) -> logging.Logger:
    return request.app.state.logger


def get_catalog_service(
    db: Session = Depends(get_db),
    log: logging.Logger = Depends(get_logger),
) -> CatalogService:
    return CatalogService(db, log)


def get_order_service(
    request: Request,
    db: Session = Depends(get_db),
    log: logging.Logger = Depends(get_logger),
) -> OrderService:
    return OrderService(db, request.app.state.settings.COUPON_MIN_SOURCES, log)


def to_http_exception(error: FoodOrderingError) -> HTTPException:
    """Map an application error to its HTTP status with a client-safe message"""
    return HTTPException(status_code=error.status_code, detail=error.message)
