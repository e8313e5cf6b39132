from __future__ import annotations

from functools import wraps

from flask import session

from ..core.enums import Role
from .api_response import fail


def login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "user_id" not in session:
            return fail("Unauthorized", 401)
        return view(*args, **kwargs)

    return wrapper


def admin_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "user_id" not in session:
            return fail("Unauthorized", 401)
        if session.get("role") != Role.ADMIN.value:
            return fail("Forbidden", 403)
        return view(*args, **kwargs)

    return wrapper


def client_required(view):
    """Allow only client accounts that are bound to a client company."""

    @wraps(view)
    def wrapper(*args, **kwargs):
        if "user_id" not in session:
            return fail("Unauthorized", 401)
        if session.get("role") != Role.CLIENT.value or not session.get("client_id"):
            return fail("Forbidden", 403)
        return view(*args, **kwargs)

    return wrapper
