"""Helpers for consistent JSON responses.

Success bodies are the resource documents themselves (the display and control
clients read fields such as ``winners`` or ``rounds`` at the top level); errors
always carry a human-readable ``error`` string.
"""

from __future__ import annotations

from typing import Any

from flask import Response, jsonify


def ok(data: Any, status_code: int = 200) -> Response:
    """Success response."""

    return jsonify(data), status_code


def fail(code: str, message: str, status_code: int, details: Any | None = None) -> Response:
    """Error response."""

    return (
        jsonify(
            {
                "success": False,
                "error": message,
                "code": code,
                "details": details,
            }
        ),
        status_code,
    )
