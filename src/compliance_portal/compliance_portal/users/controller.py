from __future__ import annotations

import logging
from datetime import timedelta

from flask import Flask, request, session

from ..common.api_response import domain_error, fail, ok
from ..common.guards import login_required
from ..core.constants import DEFAULT_SESSION_DAYS
from ..core.exceptions import DomainError
from ..container import Container

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    @app.route("/api/auth/login", methods=["POST"], endpoint="login")
    def login():
        payload = request.get_json(silent=True) or {}
        try:
            s_user = container.auth_service.authenticate(payload.get("username", ""), payload.get("password", ""))
        except DomainError as e:
            return domain_error(e)
        except Exception:
            logger.exception("login failed")
            return fail("Login failed", 500)

        session.clear()
        session.permanent = bool(payload.get("rememberMe"))
        app.permanent_session_lifetime = timedelta(days=DEFAULT_SESSION_DAYS)

        session["user_id"] = s_user.user_id
        session["name"] = s_user.full_name
        session["role"] = s_user.role.value
        session["client_id"] = s_user.client_id

        return ok("Logged in", {"name": s_user.full_name, "role": s_user.role.value, "clientId": s_user.client_id})

    @app.route("/api/auth/logout", methods=["POST"], endpoint="logout")
    def logout():
        session.clear()
        return ok("Logged out")

    @app.route("/api/me", methods=["GET"], endpoint="me")
    @login_required
    def me():
        return ok(
            "Session fetched",
            {
                "userId": session.get("user_id"),
                "name": session.get("name"),
                "role": session.get("role"),
                "clientId": session.get("client_id"),
            },
        )
