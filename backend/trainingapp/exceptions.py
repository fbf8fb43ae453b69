"""Error taxonomy for the progression engine."""

import logging
import math
from typing import Any

logger = logging.getLogger(__name__)


class ProgressionError(Exception):
    """Base class for every error raised by the progression engine."""

    code = "PROGRESSION_ERROR"

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def to_dict(self) -> dict:
        """Serialize for API error responses."""
        return {
            "code": self.code,
            "message": self.message,
            "details": self.details,
        }


class InvalidInputError(ProgressionError, ValueError):
    """Negative or otherwise out-of-range input to an engine operation."""

    code = "VALIDATION_ERROR"

    def __init__(self, field: str, value: Any, reason: str = "must be >= 0"):
        super().__init__(f"{field} {reason} (got {value!r})", {field: reason})
        self.field = field
        self.value = value


class StoreError(ProgressionError):
    """The persistence layer failed to load or save progression state."""

    code = "SERVER_ERROR"

    def __init__(self, operation: str, cause: Exception | None = None):
        super().__init__(f"Store operation '{operation}' failed")
        self.operation = operation
        self.cause = cause
        logger.error(f"StoreError during {operation}: {cause}", exc_info=cause)


def require_non_negative(field: str, value) -> None:
    """Raise InvalidInputError if value is negative, NaN or infinite."""
    if isinstance(value, float) and not math.isfinite(value):
        raise InvalidInputError(field, value, "must be a finite number")
    if value < 0:
        raise InvalidInputError(field, value)
