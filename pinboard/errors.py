# pinboard/errors.py
"""
Error taxonomy for the JSON API.

Route handlers and services raise these; ``register_error_handlers`` turns
them into ``{"error": ...}`` responses so no handler has to build error
payloads by hand.
"""
from __future__ import annotations

from typing import Dict, Optional

from flask import jsonify, current_app
from sqlalchemy.exc import SQLAlchemyError
from werkzeug.exceptions import HTTPException

from .extensions import db


class ApiError(Exception):
    status_code = 400
    message = "Bad request"

    def __init__(
        self,
        message: Optional[str] = None,
        *,
        errors: Optional[Dict[str, str]] = None,
        status_code: Optional[int] = None,
    ):
        self.message = message or self.message
        self.errors = errors
        if status_code is not None:
            self.status_code = status_code
        super().__init__(self.message)

    def to_dict(self) -> Dict:
        payload = {"error": self.message}
        if self.errors:
            payload["errors"] = self.errors
        return payload


class Unauthorized(ApiError):
    status_code = 401
    message = "Unauthorized"


class NotFound(ApiError):
    status_code = 404
    message = "Not found"


class Conflict(ApiError):
    """Duplicate edge, self-follow, or a taken unique value."""
    status_code = 400
    message = "Conflict"


class ValidationError(ApiError):
    status_code = 400
    message = "Invalid input"


class Internal(ApiError):
    status_code = 500
    message = "Internal server error"


def register_error_handlers(app) -> None:
    @app.errorhandler(ApiError)
    def _api_error(e: ApiError):
        if e.status_code >= 500:
            current_app.logger.error("API error: %s", e.message)
        return jsonify(e.to_dict()), e.status_code

    @app.errorhandler(SQLAlchemyError)
    def _store_error(e: SQLAlchemyError):
        db.session.rollback()
        current_app.logger.exception("Store failure")
        return jsonify(Internal().to_dict()), 500

    @app.errorhandler(HTTPException)
    def _http_error(e: HTTPException):
        payload = {"error": e.name}
        if getattr(e, "description", None):
            payload["detail"] = e.description
        return jsonify(payload), e.code

    @app.errorhandler(Exception)
    def _unexpected_error(e: Exception):
        current_app.logger.exception("Unexpected error")
        return jsonify(Internal().to_dict()), 500
