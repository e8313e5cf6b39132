from __future__ import annotations

import logging
from datetime import date

from flask import Flask, request, send_file, session

from ..common.api_response import domain_error, fail, ok, positive_int
from ..common.guards import admin_required, client_required
from ..core.exceptions import DomainError
from ..container import Container
from .service import EXCEL_MIMETYPE, to_payload

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    svc = container.legal_doc_service

    @app.route("/api/admin/compliance/legal-docs", methods=["GET"], endpoint="admin_legal_docs")
    @admin_required
    def admin_legal_docs():
        client_id = positive_int(request.args.get("clientId"))
        if not client_id:
            return fail("Client is required", 400)
        return ok("Compliance legal docs fetched", {"documents": svc.list_for_client(client_id=client_id)})

    @app.route("/api/admin/compliance/legal-docs", methods=["POST"], endpoint="admin_legal_docs_create")
    @admin_required
    def admin_legal_docs_create():
        payload = request.get_json(silent=True) or {}
        client_id = positive_int(payload.get("clientId"))
        if not client_id:
            return fail("Client is required", 400)
        try:
            document = svc.create(
                client_id=client_id,
                name=str(payload.get("name") or ""),
                issue_date=payload.get("issueDate"),
                expiry_date=payload.get("expiryDate"),
                remarks=payload.get("remarks"),
            )
        except DomainError as e:
            return domain_error(e)
        except Exception:
            logger.exception("legal doc create failed client=%s", client_id)
            return fail("Failed to create legal doc", 500)
        return ok("Compliance legal doc created", {"document": to_payload(document)}, 201)

    @app.route("/api/admin/compliance/legal-docs/<int:document_id>", methods=["PUT"], endpoint="admin_legal_docs_update")
    @admin_required
    def admin_legal_docs_update(document_id: int):
        payload = request.get_json(silent=True) or {}
        try:
            document = svc.update(
                document_id=document_id,
                name=str(payload.get("name") or ""),
                issue_date=payload.get("issueDate"),
                expiry_date=payload.get("expiryDate"),
                remarks=payload.get("remarks"),
            )
        except DomainError as e:
            return domain_error(e)
        except Exception:
            logger.exception("legal doc update failed id=%s", document_id)
            return fail("Failed to update legal doc", 500)
        return ok("Compliance legal doc updated", {"document": to_payload(document)})

    @app.route("/api/admin/compliance/legal-docs/<int:document_id>", methods=["DELETE"], endpoint="admin_legal_docs_delete")
    @admin_required
    def admin_legal_docs_delete(document_id: int):
        try:
            svc.delete(document_id=document_id)
        except DomainError as e:
            return domain_error(e)
        except Exception:
            logger.exception("legal doc delete failed id=%s", document_id)
            return fail("Failed to delete legal doc", 500)
        return ok("Compliance legal doc deleted")

    @app.route("/api/admin/compliance/legal-docs/import", methods=["POST"], endpoint="admin_legal_docs_import")
    @admin_required
    def admin_legal_docs_import():
        client_id = positive_int(request.form.get("clientId"))
        if not client_id:
            return fail("Client is required", 400)
        upload = request.files.get("file")
        if upload is None or not upload.filename:
            return fail("Excel file is required", 400)
        try:
            count = svc.import_excel(client_id=client_id, stream=upload.stream)
        except DomainError as e:
            return domain_error(e)
        except Exception:
            logger.exception("legal doc import failed client=%s", client_id)
            return fail("Failed to import legal docs", 500)
        return ok("Compliance legal docs imported", {"importedCount": count}, 201)

    @app.route("/api/admin/compliance/legal-docs/export", methods=["GET"], endpoint="admin_legal_docs_export")
    @admin_required
    def admin_legal_docs_export():
        client_id = positive_int(request.args.get("clientId"))
        if not client_id:
            return fail("Client is required", 400)
        out = svc.export_excel(client_id=client_id)
        return send_file(
            out,
            mimetype=EXCEL_MIMETYPE,
            as_attachment=True,
            download_name=f"compliance_legal_docs_{date.today().strftime('%Y-%m-%d')}.xlsx",
        )

    @app.route("/api/client/compliance/legal-docs", methods=["GET"], endpoint="client_legal_docs")
    @client_required
    def client_legal_docs():
        try:
            documents = svc.client_view(client_id=int(session["client_id"]))
        except DomainError as e:
            return domain_error(e)
        except Exception:
            logger.exception("client legal docs failed client=%s", session.get("client_id"))
            return fail("Failed to load legal docs", 500)
        return ok("Compliance legal docs fetched", {"documents": documents})
