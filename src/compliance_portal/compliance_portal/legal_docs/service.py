from __future__ import annotations

import io
import logging
from datetime import date
from typing import IO, List, Optional

import pandas as pd

from ..clients.repository import ClientRepository
from ..common.datetime_utils import parse_date_input, to_iso, today_local
from ..common.validators import normalize_optional, require_non_empty
from ..core.exceptions import NotFoundError, ValidationError
from ..notifications.service import NotificationService
from .model import DocumentStatus, LegalDocument, LegalDocumentDraft
from .repository import LegalDocumentRepository

logger = logging.getLogger(__name__)

EXCEL_COLUMNS = ["Document Name", "Issue Date", "Expiry Date", "Remarks"]
EXCEL_MIMETYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


def document_status(expiry_date: date, today: date) -> DocumentStatus:
    days = (expiry_date - today).days
    if days < 0:
        return DocumentStatus("Expired", "expired", days)
    if days <= 7:
        return DocumentStatus("Expiring Soon", "warning", days)
    if days <= 30:
        return DocumentStatus("Due This Month", "warning", days)
    return DocumentStatus("Active", "active", days)


def to_payload(document: LegalDocument, *, today: Optional[date] = None) -> dict:
    payload = {
        "id": document.document_id,
        "clientId": document.client_id,
        "name": document.name,
        "issueDate": to_iso(document.issue_date) if document.issue_date else "",
        "expiryDate": to_iso(document.expiry_date),
        "remarks": document.remarks or "",
        "fileUrl": document.file_url,
    }
    if today is not None:
        payload["status"] = document_status(document.expiry_date, today).to_dict()
    return payload


class LegalDocumentService:
    """Use case: maintain a client's legal documents.

    Every change re-runs the expiry notification sync for the client so badge
    counts never lag behind the documents.
    """

    def __init__(
        self,
        documents: LegalDocumentRepository,
        clients: ClientRepository,
        notifications: NotificationService,
    ):
        self._documents = documents
        self._clients = clients
        self._notifications = notifications

    def _require_client(self, client_id: int) -> None:
        if not self._clients.get_by_id(int(client_id)):
            raise NotFoundError("Client not found")

    def _require_document(self, document_id: int) -> LegalDocument:
        document = self._documents.get_by_id(int(document_id))
        if not document:
            raise NotFoundError("Legal document not found")
        return document

    def list_for_client(self, *, client_id: int, today: Optional[date] = None, with_status: bool = False) -> List[dict]:
        today = today or today_local()
        documents = self._documents.list_all(client_id=int(client_id))
        return [to_payload(d, today=today if with_status else None) for d in documents]

    def client_view(self, *, client_id: int, today: Optional[date] = None) -> List[dict]:
        """Client dashboard read: sync notifications first, then list with status."""

        today = today or today_local()
        self._notifications.sync(client_id=int(client_id), today=today)
        return self.list_for_client(client_id=client_id, today=today, with_status=True)

    def create(
        self,
        *,
        client_id: int,
        name: str,
        expiry_date: object,
        issue_date: object = None,
        remarks: object = None,
    ) -> LegalDocument:
        self._require_client(client_id)
        name = require_non_empty(name, "Document name")
        expiry = parse_date_input(expiry_date)
        if not expiry:
            raise ValidationError("Expiry date is required")

        document_id = self._documents.create(
            LegalDocumentDraft(
                client_id=int(client_id),
                name=name,
                expiry_date=expiry,
                issue_date=parse_date_input(issue_date),
                remarks=normalize_optional(remarks),
            )
        )
        self._notifications.sync(client_id=int(client_id))
        logger.info("legal document created id=%s client=%s", document_id, client_id)
        return self._require_document(document_id)

    def update(
        self,
        *,
        document_id: int,
        name: str,
        expiry_date: object,
        issue_date: object = None,
        remarks: object = None,
    ) -> LegalDocument:
        current = self._require_document(document_id)
        name = require_non_empty(name, "Document name")
        expiry = parse_date_input(expiry_date)
        if not expiry:
            raise ValidationError("Expiry date is required")

        self._documents.update(
            document_id=current.document_id,
            name=name,
            issue_date=parse_date_input(issue_date),
            expiry_date=expiry,
            remarks=normalize_optional(remarks),
        )
        self._notifications.sync(client_id=current.client_id)
        return self._require_document(current.document_id)

    def delete(self, *, document_id: int) -> None:
        current = self._require_document(document_id)
        self._notifications.forget_document(current.document_id)
        if not self._documents.delete(current.document_id):
            raise ValidationError("Failed to delete legal document")
        self._notifications.sync(client_id=current.client_id)
        logger.info("legal document deleted id=%s client=%s", current.document_id, current.client_id)

    def import_excel(self, *, client_id: int, stream: IO[bytes]) -> int:
        """Read the first sheet; rows without a name or valid expiry date are skipped."""

        self._require_client(client_id)
        try:
            df = pd.read_excel(stream, sheet_name=0, dtype=object)
        except Exception as exc:
            raise ValidationError("Could not read the Excel file") from exc

        if df.empty:
            raise ValidationError("No rows found in import file")

        df = df.astype(object).where(df.notna(), None)
        drafts: List[LegalDocumentDraft] = []
        for record in df.to_dict(orient="records"):
            name = normalize_optional(record.get("Document Name"))
            expiry = parse_date_input(record.get("Expiry Date"))
            if not name or not expiry:
                continue
            drafts.append(
                LegalDocumentDraft(
                    client_id=int(client_id),
                    name=name,
                    expiry_date=expiry,
                    issue_date=parse_date_input(record.get("Issue Date")),
                    remarks=normalize_optional(record.get("Remarks")),
                )
            )

        if not drafts:
            raise ValidationError("No valid legal document rows found. Required columns: Document Name, Expiry Date")

        created = self._documents.create_many(drafts)
        self._notifications.sync(client_id=int(client_id))
        logger.info("legal documents imported client=%s rows=%d", client_id, created)
        return created

    def export_excel(self, *, client_id: int) -> io.BytesIO:
        rows = [
            {
                "Document Name": d.name,
                "Issue Date": to_iso(d.issue_date) if d.issue_date else "",
                "Expiry Date": to_iso(d.expiry_date),
                "Remarks": d.remarks or "",
            }
            for d in self._documents.list_all(client_id=int(client_id))
        ]
        df = pd.DataFrame(rows, columns=EXCEL_COLUMNS)

        out = io.BytesIO()
        with pd.ExcelWriter(out, engine="openpyxl") as writer:
            df.to_excel(writer, index=False, sheet_name="Legal Docs")
        out.seek(0)
        return out
