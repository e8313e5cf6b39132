from __future__ import annotations

import logging

from flask import Flask, request, session

from ..common.api_response import domain_error, fail, ok, positive_int
from ..common.guards import admin_required, client_required
from ..core.exceptions import DomainError
from ..container import Container
from .service import event_payload

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    schedules = container.schedule_service
    calendars = container.training_calendar_service

    @app.route("/api/admin/compliance/schedules", methods=["GET"], endpoint="admin_schedules")
    @admin_required
    def admin_schedules():
        client_id = positive_int(request.args.get("clientId"))
        if not client_id:
            return fail("Invalid query", 400)
        try:
            data = schedules.overview(client_id=client_id, category=request.args.get("category", ""))
        except DomainError as e:
            return domain_error(e)
        return ok("Compliance schedules fetched", data)

    @app.route("/api/admin/compliance/schedules", methods=["POST"], endpoint="admin_schedules_generate")
    @admin_required
    def admin_schedules_generate():
        payload = request.get_json(silent=True) or {}
        client_id = positive_int(payload.get("clientId"))
        if not client_id:
            return fail("Invalid payload", 400)
        try:
            events = schedules.generate(
                client_id=client_id,
                category=str(payload.get("category") or ""),
                count_per_title=payload.get("countPerTitle", container.default_count_per_title),
            )
        except DomainError as e:
            return domain_error(e)
        except Exception:
            logger.exception("schedule generation failed client=%s", client_id)
            return fail("Failed to generate schedule", 500)
        return ok("Compliance schedule generated", {"events": [event_payload(e) for e in events]})

    @app.route("/api/admin/compliance/templates", methods=["POST"], endpoint="admin_templates_create")
    @admin_required
    def admin_templates_create():
        payload = request.get_json(silent=True) or {}
        client_id = positive_int(payload.get("clientId"))
        if not client_id:
            return fail("Invalid payload", 400)
        try:
            template_id = schedules.add_template(
                client_id=client_id,
                category=str(payload.get("category") or ""),
                title=str(payload.get("title") or ""),
            )
        except DomainError as e:
            return domain_error(e)
        return ok("Template added", {"id": template_id}, 201)

    @app.route("/api/admin/compliance/templates/<int:template_id>", methods=["DELETE"], endpoint="admin_templates_delete")
    @admin_required
    def admin_templates_delete(template_id: int):
        try:
            schedules.delete_template(template_id=template_id)
        except DomainError as e:
            return domain_error(e)
        return ok("Template deleted")

    @app.route("/api/client/compliance/schedules", methods=["GET"], endpoint="client_schedules")
    @client_required
    def client_schedules():
        try:
            data = schedules.overview(client_id=int(session["client_id"]), category=request.args.get("category", ""))
        except DomainError as e:
            return domain_error(e)
        return ok("Compliance schedules fetched", {"events": data["events"]})

    @app.route("/api/admin/training-calendar", methods=["POST"], endpoint="admin_training_calendar")
    @admin_required
    def admin_training_calendar():
        payload = request.get_json(silent=True) or {}
        client_id = positive_int(payload.get("companyId"))
        if not client_id:
            return fail("Invalid payload", 400)
        try:
            calendar = calendars.generate(client_id=client_id, mode=str(payload.get("mode") or ""))
        except DomainError as e:
            return domain_error(e)
        except Exception:
            logger.exception("training calendar failed client=%s", client_id)
            return fail("Failed to generate training calendar", 500)
        return ok("Training calendar generated", calendar.to_dict())

    @app.route("/api/client/training-calendar", methods=["GET"], endpoint="client_training_calendar")
    @client_required
    def client_training_calendar():
        try:
            calendar = calendars.generate(client_id=int(session["client_id"]), mode=request.args.get("mode", "future"))
        except DomainError as e:
            return domain_error(e)
        return ok("Training calendar generated", calendar.to_dict())
