from __future__ import annotations

from datetime import date
from typing import Optional

from ..common.datetime_utils import today_local
from ..core.constants import DEFAULT_FEED_LIMIT
from ..core.enums import Audience
from ..legal_docs.repository import LegalDocumentRepository
from .model import ReconcileResult
from .reconciler import ExpiryNotificationReconciler
from .repository import NotificationRepository


class NotificationService:
    """Use case: keep expiry notifications current and serve them to a bell/feed."""

    def __init__(
        self,
        notifications: NotificationRepository,
        documents: LegalDocumentRepository,
        *,
        reconciler: Optional[ExpiryNotificationReconciler] = None,
    ):
        self._notifications = notifications
        self._documents = documents
        self._reconciler = reconciler or ExpiryNotificationReconciler(notifications)

    def sync(self, *, client_id: Optional[int] = None, today: Optional[date] = None) -> ReconcileResult:
        documents = self._documents.list_all(client_id=client_id)
        return self._reconciler.reconcile(documents, today or today_local(), client_id=client_id)

    def forget_document(self, document_id: int) -> int:
        return self._notifications.delete_for_document(int(document_id))

    def feed(self, *, audience: Audience, client_id: Optional[int] = None, limit: int = DEFAULT_FEED_LIMIT) -> dict:
        items = self._notifications.list_for_audience(audience=audience, client_id=client_id, limit=int(limit))
        return {
            "count": len(items),
            "notifications": [n.to_dict() for n in items],
        }
