"""Centralized error handlers.

Each handler discards the request's pending database work before answering,
so a handled error is never followed by a commit of partial changes.
"""

from __future__ import annotations

import logging

from flask import Flask
from marshmallow import ValidationError as MarshmallowValidationError
from sqlalchemy.exc import IntegrityError
from werkzeug.exceptions import HTTPException

from raffle_admin.db import rollback_request_session
from raffle_admin.errors import AppError, ConflictError, ValidationError
from raffle_admin.utils.responses import fail, fail_with

logger = logging.getLogger(__name__)


def register_error_handlers(app: Flask) -> None:
    """Register error handlers for the Flask app."""

    @app.errorhandler(AppError)
    def _handle_app_error(exc: AppError):
        rollback_request_session()
        return fail_with(exc)

    @app.errorhandler(MarshmallowValidationError)
    def _handle_schema_error(exc: MarshmallowValidationError):
        rollback_request_session()
        # exc.messages is a dict of field -> list[str]
        return fail_with(ValidationError(details=exc.messages))

    @app.errorhandler(IntegrityError)
    def _handle_integrity_error(exc: IntegrityError):
        rollback_request_session()
        logger.info("Integrity error", exc_info=exc)
        return fail_with(ConflictError(details=str(exc.orig) if exc.orig else str(exc)))

    @app.errorhandler(HTTPException)
    def _handle_http_exception(exc: HTTPException):
        rollback_request_session()
        status = int(getattr(exc, "code", 500) or 500)
        if status == 404:
            return fail("not_found", "Not found", 404)

        return fail(
            "http_error",
            getattr(exc, "description", "HTTP error"),
            status,
            details={"name": getattr(exc, "name", "HTTPException")},
        )

    @app.errorhandler(Exception)
    def _handle_unexpected(exc: Exception):
        rollback_request_session()
        logger.exception("Unhandled exception")
        return fail("internal_error", "Internal server error", 500)
