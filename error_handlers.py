"""Global translation of exceptions into HTTP responses."""

import logging

from flask import request
from werkzeug.exceptions import HTTPException

from errors import ApiException

logger = logging.getLogger(__name__)

INTERNAL_ERROR_MESSAGE = "Internal server error"

_TEXT_PLAIN = {'Content-Type': 'text/plain; charset=utf-8'}


def register_error_handlers(app):
    """Attach the error handlers to a Flask application.

    Args:
        app: Flask application instance
    """

    @app.errorhandler(ApiException)
    def handle_api_exception(e: ApiException):
        """Typed errors keep their status code and message."""
        if e.status_code >= 500:
            logger.error(f"{request.method} {request.path} failed with {e.status_code}: {e.message}")
        else:
            logger.warning(f"{request.method} {request.path} -> {e.status_code}: {e.message}")
        return e.message, e.status_code, _TEXT_PLAIN

    @app.errorhandler(HTTPException)
    def handle_http_exception(e: HTTPException):
        # Routing errors (unknown path, wrong method) keep Flask's own response
        return e

    @app.errorhandler(Exception)
    def handle_unexpected_exception(e: Exception):
        """Anything else becomes a generic 500; the detail is only logged."""
        logger.exception(f"Unhandled error on {request.method} {request.path}: {e}")
        return INTERNAL_ERROR_MESSAGE, 500, _TEXT_PLAIN
