"""Logging setup: structlog for request events, JSON lines for stdlib loggers.

Engine and service modules log through ``logging.getLogger(__name__)`` under
the ``trainingapp`` namespace; request bookkeeping goes through structlog.
"""

import logging
import sys
import time
import uuid

import structlog
from flask import g, request
from pythonjsonlogger import jsonlogger

REQUEST_ID_HEADER = "X-Request-ID"
QUIET_PATHS = ("/health",)
NOISY_LOGGERS = ("werkzeug", "sqlalchemy.engine")


def _log_level(app) -> int:
    default = "DEBUG" if app.debug else "INFO"
    return logging.getLevelName(str(app.config.get("LOG_LEVEL") or default).upper())


def _json_handler(level: int) -> logging.Handler:
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        jsonlogger.JsonFormatter(
            fmt="%(asctime)s %(levelname)s %(name)s %(message)s",
            rename_fields={"levelname": "level", "asctime": "timestamp"},
        )
    )
    handler.setLevel(level)
    return handler


def configure_structlog(level: int, json_output: bool) -> None:
    renderer = (
        structlog.processors.JSONRenderer()
        if json_output
        else structlog.dev.ConsoleRenderer()
    )
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.StackInfoRenderer(),
            structlog.dev.set_exc_info,
            structlog.processors.TimeStamper(fmt="iso"),
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )


def route_stdlib_loggers(app, level: int) -> logging.Handler:
    """Send app, package and library loggers to one JSON handler."""
    handler = _json_handler(level)

    for logger in (app.logger, logging.getLogger("trainingapp")):
        logger.handlers = [handler]
        logger.setLevel(level)

    for name in NOISY_LOGGERS:
        logger = logging.getLogger(name)
        logger.handlers = [handler]
        logger.setLevel(logging.WARNING)

    return handler


def register_request_logging(app) -> None:
    """Tag every request with an id and log one line when it finishes."""

    @app.before_request
    def bind_request_context():
        g.request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex[:8]
        g.request_started = time.perf_counter()

        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(
            request_id=g.request_id,
            method=request.method,
            path=request.path,
        )

    @app.after_request
    def log_request(response):
        request_id = g.get("request_id")
        if request_id:
            response.headers[REQUEST_ID_HEADER] = request_id

        started = g.get("request_started")
        if started is None or request.path in QUIET_PATHS:
            return response

        user = g.get("user")
        fields = {
            "status_code": response.status_code,
            "duration_ms": round((time.perf_counter() - started) * 1000, 2),
            "user_id": user.id if user is not None else None,
        }
        logger = structlog.get_logger()
        if response.status_code >= 500:
            logger.error("request_failed", **fields)
        else:
            logger.info("request_completed", **fields)
        return response


def setup_logging(app):
    """Configure logging from LOG_LEVEL / LOG_JSON."""
    level = _log_level(app)
    json_output = app.config.get("LOG_JSON", not app.debug)

    configure_structlog(level, json_output)
    if json_output:
        route_stdlib_loggers(app, level)
    register_request_logging(app)

    return app
