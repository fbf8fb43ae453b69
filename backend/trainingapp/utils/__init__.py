"""Utility functions."""

from trainingapp.utils.clock import utcnow
from trainingapp.utils.response import (
    error_response,
    not_found,
    progression_error,
    server_error,
    success_response,
    unauthorized,
    validation_error,
)

__all__ = [
    "success_response",
    "error_response",
    "unauthorized",
    "not_found",
    "validation_error",
    "progression_error",
    "server_error",
    "utcnow",
]
