"""Application exceptions.

Backend/transport errors raised by the store client (e.g. ``RedisError``)
are deliberately not part of this hierarchy: they propagate unchanged.
"""


class OrderFlowError(Exception):
    """Base class for application errors."""


class ConfigurationError(OrderFlowError):
    """A required setting (connection, table name) is missing or invalid."""


class RecordNotFoundError(OrderFlowError):
    """No record is stored under the requested id."""

    def __init__(self, record_id: str):
        super().__init__(f"Record {record_id} not found")
        self.record_id = record_id


class ValidationError(OrderFlowError):
    """A create/update payload is missing required fields."""
