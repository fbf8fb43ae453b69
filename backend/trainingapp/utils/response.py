"""JSON envelope helpers for API responses."""

from typing import Any

from flask import jsonify

from trainingapp.exceptions import ProgressionError


def success_response(
    data: Any = None, message: str | None = None, status_code: int = 200
):
    """{"success": true, "data": ..., "message": ...}"""
    response = {"success": True}

    if data is not None:
        response["data"] = data

    if message is not None:
        response["message"] = message

    return jsonify(response), status_code


def error_response(
    code: str, message: str, details: dict | None = None, status_code: int = 400
):
    """{"success": false, "error": {"code", "message", "details"}}"""
    response = {"success": False, "error": {"code": code, "message": message}}

    if details:
        response["error"]["details"] = details

    return jsonify(response), status_code


def progression_error(e: ProgressionError, status_code: int = 400):
    """Envelope for an engine error, keeping its code and field details."""
    return error_response(e.code, e.message, e.details, status_code=status_code)


def unauthorized(message: str = "Unauthorized"):
    return error_response("UNAUTHORIZED", message, status_code=401)


def not_found(message: str = "Resource not found"):
    return error_response("NOT_FOUND", message, status_code=404)


def validation_error(details: dict):
    """400 with per-field reasons."""
    return error_response(
        "VALIDATION_ERROR", "Invalid input data", details, status_code=400
    )


def server_error(message: str = "Internal server error"):
    return error_response("SERVER_ERROR", message, status_code=500)
