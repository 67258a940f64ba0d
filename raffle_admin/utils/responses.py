"""Helpers for the JSON response envelope shared by every endpoint."""

from __future__ import annotations

from typing import Any

from flask import Response, jsonify

from raffle_admin.errors import AppError


def ok(data: Any, status_code: int = 200) -> tuple[Response, int]:
    """Success response."""

    return jsonify({"success": True, "data": data, "error": None}), status_code


def fail(code: str, message: str, status_code: int, details: Any | None = None) -> tuple[Response, int]:
    """Error response."""

    return (
        jsonify(
            {
                "success": False,
                "data": None,
                "error": {"code": code, "message": message, "details": details},
            }
        ),
        status_code,
    )


def fail_with(exc: AppError) -> tuple[Response, int]:
    """Error response built from an application error."""

    return fail(exc.code, exc.message, exc.status_code, exc.details)
