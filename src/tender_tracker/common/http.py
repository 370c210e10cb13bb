from __future__ import annotations

from typing import Any

from flask import jsonify, request

from ..core.exceptions import DomainError, ValidationError


def error_response(exc: DomainError):
    body: dict[str, Any] = {"message": exc.message}
    if isinstance(exc, ValidationError) and exc.errors:
        body["errors"] = exc.errors
    return jsonify(body), exc.status_code


def internal_error():
    return jsonify({"message": "Internal server error"}), 500


def json_body() -> Any:
    """Request JSON, or an empty dict when the body is missing or not JSON."""
    data = request.get_json(silent=True)
    return {} if data is None else data
