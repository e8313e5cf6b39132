from __future__ import annotations

from contextlib import contextmanager
from datetime import date, datetime
from typing import Optional

import pytest

from src.compliance_portal.compliance_portal.clients.model import Client
from src.compliance_portal.compliance_portal.core.enums import Audience
from src.compliance_portal.compliance_portal.legal_docs.model import LegalDocument, LegalDocumentDraft
from src.compliance_portal.compliance_portal.notifications.model import ComplianceNotification, NotificationKey


class InMemoryClients:
    def __init__(self, *clients: Client):
        self.clients = {c.client_id: c for c in clients}

    def get_by_id(self, client_id: int) -> Optional[Client]:
        return self.clients.get(int(client_id))

    def list_all(self):
        return sorted(self.clients.values(), key=lambda c: c.name)


class InMemoryNotifications:
    """Mirrors the unique (document, audience, kind) key of the real table."""

    def __init__(self):
        self.rows: dict[int, ComplianceNotification] = {}
        self._next_id = 1
        self.transactions = 0
        self.in_transaction = False
        self.calls_outside_transaction = 0

    @contextmanager
    def transaction(self):
        self.transactions += 1
        self.in_transaction = True
        snapshot = dict(self.rows)
        try:
            yield
        except Exception:
            self.rows = snapshot
            raise
        finally:
            self.in_transaction = False

    def _track(self):
        if not self.in_transaction:
            self.calls_outside_transaction += 1

    def create_if_absent(self, notification: ComplianceNotification) -> bool:
        self._track()
        if any(n.key == notification.key for n in self.rows.values()):
            return False
        nid = self._next_id
        self._next_id += 1
        self.rows[nid] = ComplianceNotification(
            client_id=notification.client_id,
            document_id=notification.document_id,
            audience=notification.audience,
            kind=notification.kind,
            notify_at=notification.notify_at,
            title=notification.title,
            message=notification.message,
            notification_id=nid,
            created_at=datetime(2026, 3, 1, 9, 0, 0),
        )
        return True

    def list_keys(self, *, client_id=None):
        self._track()
        return [
            (nid, n.key)
            for nid, n in sorted(self.rows.items())
            if client_id is None or n.client_id == int(client_id)
        ]

    def delete_many(self, notification_ids) -> int:
        self._track()
        deleted = 0
        for nid in notification_ids:
            if self.rows.pop(int(nid), None) is not None:
                deleted += 1
        return deleted

    def delete_for_document(self, document_id: int) -> int:
        ids = [nid for nid, n in self.rows.items() if n.document_id == int(document_id)]
        return self.delete_many(ids)

    def list_for_audience(self, *, audience: Audience, client_id=None, limit: int = 50):
        items = [
            n
            for n in self.rows.values()
            if n.audience == audience and (client_id is None or n.client_id == int(client_id))
        ]
        items.sort(key=lambda n: (n.notify_at, n.notification_id), reverse=True)
        return items[:limit]

    def keys(self, *, client_id=None) -> set[NotificationKey]:
        return {key for _, key in self.list_keys(client_id=client_id)}


class InMemoryLegalDocs:
    def __init__(self, clients: InMemoryClients):
        self._clients = clients
        self.docs: dict[int, LegalDocument] = {}
        self._next_id = 1

    def add(self, *, client_id: int, name: str, expiry_date: date, issue_date=None, remarks=None) -> LegalDocument:
        return self.docs[self.create(LegalDocumentDraft(client_id, name, expiry_date, issue_date, remarks))]

    def list_all(self, *, client_id=None):
        docs = [d for d in self.docs.values() if client_id is None or d.client_id == int(client_id)]
        return sorted(docs, key=lambda d: (d.expiry_date, d.name))

    def get_by_id(self, document_id: int):
        return self.docs.get(int(document_id))

    def create(self, draft: LegalDocumentDraft) -> int:
        did = self._next_id
        self._next_id += 1
        client = self._clients.get_by_id(draft.client_id)
        self.docs[did] = LegalDocument(
            document_id=did,
            client_id=draft.client_id,
            name=draft.name,
            expiry_date=draft.expiry_date,
            client_name=client.name if client else "",
            issue_date=draft.issue_date,
            remarks=draft.remarks,
        )
        return did

    def create_many(self, drafts) -> int:
        for draft in drafts:
            self.create(draft)
        return len(drafts)

    def update(self, *, document_id, name, issue_date, expiry_date, remarks) -> bool:
        current = self.docs.get(int(document_id))
        if not current:
            return False
        self.docs[current.document_id] = LegalDocument(
            document_id=current.document_id,
            client_id=current.client_id,
            name=name,
            expiry_date=expiry_date,
            client_name=current.client_name,
            issue_date=issue_date,
            remarks=remarks,
        )
        return True

    def delete(self, document_id: int) -> bool:
        return self.docs.pop(int(document_id), None) is not None


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2026, 3, 10, 9, 30, 0)


@pytest.fixture
def today(fixed_now) -> date:
    return fixed_now.date()


@pytest.fixture
def clients() -> InMemoryClients:
    return InMemoryClients(
        Client(client_id=1, name="Demo Industries"),
        Client(client_id=2, name="Acme Textiles"),
    )


@pytest.fixture
def notifications_repo() -> InMemoryNotifications:
    return InMemoryNotifications()


@pytest.fixture
def legal_docs_repo(clients) -> InMemoryLegalDocs:
    return InMemoryLegalDocs(clients)
