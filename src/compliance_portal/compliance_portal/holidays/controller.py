from __future__ import annotations

import logging

from flask import Flask, request

from ..common.api_response import domain_error, fail, ok, positive_int
from ..common.guards import admin_required
from ..core.exceptions import DomainError
from ..container import Container

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    @app.route("/api/admin/holidays", methods=["GET"], endpoint="admin_holidays")
    @admin_required
    def admin_holidays():
        client_id = positive_int(request.args.get("clientId"))
        if not client_id:
            return fail("Client is required", 400)
        try:
            holidays = container.holiday_service.list_for_year(client_id=client_id, year=request.args.get("year"))
        except DomainError as e:
            return domain_error(e)
        return ok("Holidays fetched", {"holidays": [h.to_dict() for h in holidays]})

    @app.route("/api/admin/holidays", methods=["POST"], endpoint="admin_holidays_create")
    @admin_required
    def admin_holidays_create():
        payload = request.get_json(silent=True) or {}
        client_id = positive_int(payload.get("clientId"))
        if not client_id:
            return fail("Client is required", 400)
        try:
            holiday = container.holiday_service.add(
                client_id=client_id,
                date_value=str(payload.get("date") or ""),
                name=str(payload.get("name") or ""),
                year=payload.get("year"),
            )
        except DomainError as e:
            return domain_error(e)
        except Exception:
            logger.exception("holiday create failed client=%s", client_id)
            return fail("Failed to add holiday", 500)
        return ok("Holiday added", {"holiday": holiday.to_dict()}, 201)

    @app.route("/api/admin/holidays/<int:holiday_id>", methods=["DELETE"], endpoint="admin_holidays_delete")
    @admin_required
    def admin_holidays_delete(holiday_id: int):
        try:
            container.holiday_service.delete(holiday_id=holiday_id)
        except DomainError as e:
            return domain_error(e)
        return ok("Holiday deleted")
