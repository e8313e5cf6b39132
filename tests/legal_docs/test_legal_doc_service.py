from __future__ import annotations

import io
from datetime import date, timedelta

import pandas as pd
import pytest

from src.compliance_portal.compliance_portal.core.enums import NotificationKind
from src.compliance_portal.compliance_portal.core.exceptions import NotFoundError, ValidationError
from src.compliance_portal.compliance_portal.legal_docs.service import EXCEL_COLUMNS, LegalDocumentService
from src.compliance_portal.compliance_portal.notifications import service as notification_service_module
from src.compliance_portal.compliance_portal.notifications.service import NotificationService


@pytest.fixture
def svc(monkeypatch, today, clients, legal_docs_repo, notifications_repo):
    monkeypatch.setattr(notification_service_module, "today_local", lambda: today)
    notifications = NotificationService(notifications_repo, legal_docs_repo)
    return LegalDocumentService(legal_docs_repo, clients, notifications)


def _excel(rows) -> io.BytesIO:
    out = io.BytesIO()
    pd.DataFrame(rows, columns=EXCEL_COLUMNS).to_excel(out, index=False, engine="openpyxl")
    out.seek(0)
    return out


def test_create_syncs_notifications(svc, today, notifications_repo):
    doc = svc.create(client_id=1, name="  Factory Licence ", expiry_date=(today + timedelta(days=5)).isoformat())

    assert doc.name == "Factory Licence"
    assert doc.client_name == "Demo Industries"
    assert {k.kind for k in notifications_repo.keys()} == {NotificationKind.EXPIRY_30_DAYS, NotificationKind.EXPIRY_7_DAYS}


def test_create_validates(svc):
    with pytest.raises(NotFoundError):
        svc.create(client_id=99, name="Factory Licence", expiry_date="2026-04-01")
    with pytest.raises(ValidationError, match="Document name is required"):
        svc.create(client_id=1, name="  ", expiry_date="2026-04-01")
    with pytest.raises(ValidationError, match="Expiry date is required"):
        svc.create(client_id=1, name="Factory Licence", expiry_date="sometime")


def test_update_renewal_retracts_notifications(svc, today, notifications_repo):
    doc = svc.create(client_id=1, name="Fire NOC", expiry_date=today - timedelta(days=2))
    assert notifications_repo.keys() != set()

    renewed = svc.update(
        document_id=doc.document_id,
        name="Fire NOC",
        expiry_date=(today + timedelta(days=60)).strftime("%d/%m/%Y"),
        issue_date=today.isoformat(),
        remarks=" renewed ",
    )

    assert renewed.expiry_date == today + timedelta(days=60)
    assert renewed.issue_date == today
    assert renewed.remarks == "renewed"
    assert notifications_repo.rows == {}


def test_update_unknown_document(svc):
    with pytest.raises(NotFoundError):
        svc.update(document_id=404, name="X", expiry_date="2026-04-01")


def test_delete_removes_document_and_notifications(svc, today, legal_docs_repo, notifications_repo):
    doc = svc.create(client_id=1, name="Fire NOC", expiry_date=today)
    keep = svc.create(client_id=1, name="Trade Licence", expiry_date=today + timedelta(days=3))

    svc.delete(document_id=doc.document_id)

    assert legal_docs_repo.get_by_id(doc.document_id) is None
    assert {k.document_id for k in notifications_repo.keys()} == {keep.document_id}


def test_list_with_status(svc, today):
    svc.create(client_id=1, name="Later", expiry_date=today + timedelta(days=90))
    svc.create(client_id=1, name="Soon", expiry_date=today + timedelta(days=3), issue_date="01/01/2025")
    svc.create(client_id=2, name="Other client", expiry_date=today)

    rows = svc.list_for_client(client_id=1, today=today, with_status=True)

    assert [r["name"] for r in rows] == ["Soon", "Later"]
    assert rows[0]["status"] == {"label": "Expiring Soon", "tone": "warning", "days": 3}
    assert rows[0]["issueDate"] == "2025-01-01"
    assert rows[1]["issueDate"] == ""
    assert "status" not in svc.list_for_client(client_id=1, today=today)[0]


def test_client_view_syncs_first(svc, today, legal_docs_repo, notifications_repo):
    legal_docs_repo.add(client_id=1, name="Fire NOC", expiry_date=today - timedelta(days=1))
    assert notifications_repo.rows == {}

    rows = svc.client_view(client_id=1, today=today)

    assert rows[0]["status"]["label"] == "Expired"
    assert {k.kind for k in notifications_repo.keys()} == {NotificationKind.EXPIRED}


def test_import_excel_skips_invalid_rows(svc, today, legal_docs_repo, notifications_repo):
    stream = _excel(
        [
            ["Factory Licence", "01/04/2025", "15/04/2026", "renew early"],
            [None, None, "15/04/2026", None],
            ["Fire NOC", None, date(2026, 3, 12), None],
            ["Pollution Consent", None, "someday", None],
        ]
    )

    created = svc.import_excel(client_id=1, stream=stream)

    assert created == 2
    docs = {d.name: d for d in legal_docs_repo.list_all(client_id=1)}
    assert set(docs) == {"Factory Licence", "Fire NOC"}
    assert docs["Factory Licence"].expiry_date == date(2026, 4, 15)
    assert docs["Factory Licence"].issue_date == date(2025, 4, 1)
    assert docs["Factory Licence"].remarks == "renew early"
    assert docs["Fire NOC"].expiry_date == date(2026, 3, 12)
    assert docs["Fire NOC"].remarks is None
    # Fire NOC is two days out from the fixed today
    assert {k.document_id for k in notifications_repo.keys()} == {docs["Fire NOC"].document_id}


def test_import_excel_without_valid_rows(svc):
    with pytest.raises(ValidationError, match="No valid legal document rows"):
        svc.import_excel(client_id=1, stream=_excel([["", None, "bad", None]]))


def test_import_excel_rejects_garbage(svc):
    with pytest.raises(ValidationError, match="Could not read"):
        svc.import_excel(client_id=1, stream=io.BytesIO(b"definitely not a workbook"))


def test_export_excel_roundtrip_columns(svc, today):
    svc.create(client_id=1, name="Factory Licence", expiry_date="2026-04-15", issue_date="2025-04-01", remarks="x")
    svc.create(client_id=2, name="Other client", expiry_date="2026-04-15")

    df = pd.read_excel(svc.export_excel(client_id=1), sheet_name="Legal Docs", dtype=str)

    assert list(df.columns) == EXCEL_COLUMNS
    assert df.to_dict(orient="records") == [
        {"Document Name": "Factory Licence", "Issue Date": "2025-04-01", "Expiry Date": "2026-04-15", "Remarks": "x"}
    ]
