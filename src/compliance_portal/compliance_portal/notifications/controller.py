from __future__ import annotations

import logging

from flask import Flask, request, session

from ..common.api_response import fail, ok, positive_int
from ..common.guards import admin_required, client_required
from ..core.enums import Audience
from ..container import Container

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    svc = container.notification_service

    @app.route("/api/admin/notifications", methods=["GET"], endpoint="admin_notifications")
    @admin_required
    def admin_notifications():
        client_id = positive_int(request.args.get("clientId"))
        try:
            svc.sync(client_id=client_id)
            feed = svc.feed(audience=Audience.ADMIN, client_id=client_id)
        except Exception:
            logger.exception("admin notifications failed client=%s", client_id)
            return fail("Failed to load notifications", 500)
        return ok("Notifications fetched", feed)

    @app.route("/api/client/notifications", methods=["GET"], endpoint="client_notifications")
    @client_required
    def client_notifications():
        client_id = int(session["client_id"])
        try:
            svc.sync(client_id=client_id)
            feed = svc.feed(audience=Audience.CLIENT, client_id=client_id)
        except Exception:
            logger.exception("client notifications failed client=%s", client_id)
            return fail("Failed to load notifications", 500)
        return ok("Notifications fetched", feed)

    @app.route("/api/admin/notifications/sync", methods=["POST"], endpoint="admin_notifications_sync")
    @admin_required
    def admin_notifications_sync():
        payload = request.get_json(silent=True) or {}
        client_id = positive_int(payload.get("clientId"))
        try:
            result = svc.sync(client_id=client_id)
        except Exception:
            logger.exception("notification sync failed client=%s", client_id)
            return fail("Failed to sync notifications", 500)
        return ok(
            "Notifications synced",
            {"desired": result.desired, "created": result.created, "deleted": result.deleted},
        )
