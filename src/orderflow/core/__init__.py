"""Core module - Logging, exceptions, and caching."""

from orderflow.core.logger import setup_logger
from orderflow.core.exceptions import (
    ConfigurationError,
    OrderFlowError,
    RecordNotFoundError,
    ValidationError,
)

__all__ = [
    "setup_logger",
    "ConfigurationError",
    "OrderFlowError",
    "RecordNotFoundError",
    "ValidationError",
]
