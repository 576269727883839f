"""
Error taxonomy for the food ordering backend

Every error carries a stable, human-readable message that is safe to return
to API callers. Storage errors keep the original exception chained as
__cause__ so it can be logged without leaking to the client.
"""


class FoodOrderingError(Exception):
    """Base class for all application errors"""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(FoodOrderingError):
    """Request rejected by a business rule"""

    status_code = 400


class InvalidCouponError(ValidationError):
    """Coupon code unknown or not backed by enough sources"""

    status_code = 422


class BadRequestError(ValidationError):
    """Malformed order: no items, bad quantity or unknown product"""

    status_code = 400


class NotFoundError(FoodOrderingError):
    status_code = 404


class StorageError(FoodOrderingError):
    """
    Database failure wrapped with a description of the failed operation

    Usage:
        try:
            session.execute(...)
        except SQLAlchemyError as e:
            raise StorageError("failed to fetch products") from e
    """

    status_code = 500


class CorpusLoadError(FoodOrderingError):
    """Coupon corpus could not be read; fatal at startup"""
