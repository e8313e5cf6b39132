from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import NamedTuple, Optional, Tuple

from ..core.enums import Audience, NotificationKind


@dataclass(frozen=True)
class NotificationRule:
    kind: NotificationKind
    days_before: int
    label: str

    def fires(self, diff_days: int) -> bool:
        if self.kind == NotificationKind.EXPIRED:
            return diff_days < 0
        return 0 <= diff_days <= self.days_before


# Several rules may fire together (30/7/1 day at one day out); each severity is
# kept as its own notification.
NOTIFICATION_RULES: Tuple[NotificationRule, ...] = (
    NotificationRule(NotificationKind.EXPIRY_30_DAYS, 30, "expiring in 30 days"),
    NotificationRule(NotificationKind.EXPIRY_7_DAYS, 7, "expiring in 7 days"),
    NotificationRule(NotificationKind.EXPIRY_1_DAY, 1, "expiring tomorrow"),
    NotificationRule(NotificationKind.EXPIRED, 0, "has expired"),
)

AUDIENCES: Tuple[Audience, ...] = (Audience.ADMIN, Audience.CLIENT)


class NotificationKey(NamedTuple):
    document_id: int
    audience: Audience
    kind: NotificationKind


@dataclass(frozen=True)
class ComplianceNotification:
    client_id: int
    document_id: int
    audience: Audience
    kind: NotificationKind
    notify_at: date
    title: str
    message: str
    notification_id: Optional[int] = None
    created_at: Optional[datetime] = None

    @property
    def key(self) -> NotificationKey:
        return NotificationKey(self.document_id, self.audience, self.kind)

    def to_dict(self) -> dict:
        return {
            "id": self.notification_id,
            "clientId": self.client_id,
            "documentId": self.document_id,
            "audience": self.audience.value,
            "kind": self.kind.value,
            "notifyAt": self.notify_at.strftime("%Y-%m-%d"),
            "title": self.title,
            "message": self.message,
        }


@dataclass(frozen=True)
class ReconcileResult:
    desired: int
    created: int
    deleted: int
