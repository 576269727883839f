"""
Logging setup

Modules log through logging.getLogger(__name__); components that need a
specific logger receive it in their constructor.
"""
import logging

LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%dT%H:%M:%S%z"


def configure_logging(level: str = "INFO") -> logging.Logger:
    """
    Configure the root logger once and return the application logger

    Args:
        level: Log level name (DEBUG, INFO, WARNING, ...)

    Returns:
        The "food_ordering" logger
    """
    logging.basicConfig(format=LOG_FORMAT, datefmt=DATE_FORMAT)
    logging.getLogger().setLevel(level.upper())
    return logging.getLogger("food_ordering")
