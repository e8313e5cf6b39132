"""Keeps the notification table in line with document expiry dates.

Each pass computes the full set of notifications that should exist right now
and diffs it against everything stored, so a renewed or deleted document
loses the notifications it no longer warrants.
"""

from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Iterable, List, Optional, Union

from ..core.constants import NOTIFICATION_TITLE
from ..core.enums import NotificationKind
from ..legal_docs.model import LegalDocument
from .model import AUDIENCES, NOTIFICATION_RULES, ComplianceNotification, NotificationRule, ReconcileResult
from .repository import NotificationRepository

logger = logging.getLogger(__name__)


def _as_date(value: Union[date, datetime]) -> date:
    return value.date() if isinstance(value, datetime) else value


def days_until(expiry: Union[date, datetime], today: Union[date, datetime]) -> int:
    """Whole days from ``today`` to ``expiry``; negative once expired."""
    return (_as_date(expiry) - _as_date(today)).days


def build_message(document: LegalDocument, rule: NotificationRule) -> str:
    if rule.kind == NotificationKind.EXPIRED:
        return f"{document.name} for {document.client_name} has expired."
    return f"{document.name} for {document.client_name} is {rule.label}."


def desired_notifications(documents: Iterable[LegalDocument], today: date) -> List[ComplianceNotification]:
    out: List[ComplianceNotification] = []
    for document in documents:
        diff = days_until(document.expiry_date, today)
        for rule in NOTIFICATION_RULES:
            if not rule.fires(diff):
                continue
            message = build_message(document, rule)
            for audience in AUDIENCES:
                out.append(
                    ComplianceNotification(
                        client_id=document.client_id,
                        document_id=document.document_id,
                        audience=audience,
                        kind=rule.kind,
                        notify_at=today,
                        title=NOTIFICATION_TITLE,
                        message=message,
                    )
                )
    return out


class ExpiryNotificationReconciler:
    def __init__(self, notifications: NotificationRepository):
        self._notifications = notifications

    def reconcile(
        self,
        documents: Iterable[LegalDocument],
        today: Union[date, datetime],
        *,
        client_id: Optional[int] = None,
    ) -> ReconcileResult:
        """Create missing notifications and delete stale ones.

        ``client_id`` limits the stale sweep to that client's rows and must be
        given whenever ``documents`` only covers one client. Store errors
        propagate and roll the whole pass back.
        """

        today = _as_date(today)
        desired = desired_notifications(documents, today)
        desired_keys = {n.key for n in desired}

        with self._notifications.transaction():
            created = 0
            for notification in desired:
                if self._notifications.create_if_absent(notification):
                    created += 1

            stale = [
                notification_id
                for notification_id, key in self._notifications.list_keys(client_id=client_id)
                if key not in desired_keys
            ]
            deleted = self._notifications.delete_many(stale) if stale else 0

        logger.info(
            "compliance notifications reconciled client=%s desired=%d created=%d deleted=%d",
            client_id if client_id is not None else "*",
            len(desired_keys),
            created,
            deleted,
        )
        return ReconcileResult(desired=len(desired_keys), created=created, deleted=deleted)
