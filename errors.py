"""JSON error responses for the API.

Every failure is answered with ``{"error": <slug>, "message": <text>}`` and an
explicit status code; validation failures add an ``errors`` mapping.
"""

import logging

from flask import jsonify
from werkzeug.exceptions import HTTPException, InternalServerError

logger = logging.getLogger(__name__)


class ApiError(Exception):
    """Abort a request with a structured JSON body."""

    def __init__(self, status: int, error: str, message: str = "", details=None):
        super().__init__(message or error)
        self.status = status
        self.error = error
        self.message = message
        self.details = details


class ValidationFailed(ApiError):
    def __init__(self, errors):
        super().__init__(400, "validation_failed", "Validation failed.", details=errors)


def _slug(name: str) -> str:
    return name.lower().replace(" ", "_").replace("'", "")


def error_response(status: int, error: str, message: str = "", details=None):
    body = {"error": error, "message": message}
    if details is not None:
        body["errors"] = details
    return jsonify(body), status


def register_error_handlers(app) -> None:
    @app.errorhandler(ApiError)
    def handle_api_error(exc: ApiError):
        return error_response(exc.status, exc.error, exc.message, exc.details)

    @app.errorhandler(HTTPException)
    def handle_http_exception(exc: HTTPException):
        response = exc.get_response()
        body, status = error_response(exc.code, _slug(exc.name), exc.description)
        # keep Allow / WWW-Authenticate set by werkzeug
        for header in ("Allow", "WWW-Authenticate"):
            if header in response.headers:
                body.headers[header] = response.headers[header]
        return body, status

    @app.errorhandler(Exception)
    def handle_unexpected(exc: Exception):
        logger.exception("Unhandled error")
        err = InternalServerError()
        return error_response(err.code, "internal_server_error", err.description)
