from __future__ import annotations

from typing import Any, Optional

from flask import jsonify

from ..core.exceptions import AuthenticationError, AuthorizationError, DomainError, NotFoundError


def ok(message: str, data: Any = None, status: int = 200):
    return jsonify({"success": True, "message": message, "data": data}), status


def fail(message: str, status: int = 400, data: Any = None):
    return jsonify({"success": False, "message": message, "data": data}), status


def domain_error(exc: DomainError):
    """Map a service-layer error onto the matching HTTP status."""

    if isinstance(exc, NotFoundError):
        return fail(str(exc), 404)
    if isinstance(exc, AuthenticationError):
        return fail(str(exc), 401)
    if isinstance(exc, AuthorizationError):
        return fail(str(exc), 403)
    return fail(str(exc), 400)


def positive_int(value: Any) -> Optional[int]:
    """Parse an id from a query string or JSON body; None when absent or invalid."""

    try:
        number = int(str(value).strip())
    except (TypeError, ValueError):
        return None
    return number if number > 0 else None
