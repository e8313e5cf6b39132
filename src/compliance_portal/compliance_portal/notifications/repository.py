from __future__ import annotations

from typing import ContextManager, Optional, Protocol, Sequence, Tuple

from ..core.enums import Audience
from .model import ComplianceNotification, NotificationKey


class NotificationRepository(Protocol):
    """Store for compliance notifications, unique on (document, audience, kind)."""

    def transaction(self) -> ContextManager[None]:
        """Run the enclosed calls atomically."""

        raise NotImplementedError

    def create_if_absent(self, notification: ComplianceNotification) -> bool:
        """Insert unless the key already exists; never touches an existing row.

        Returns True when a row was created.
        """

        raise NotImplementedError

    def list_keys(self, *, client_id: Optional[int] = None) -> Sequence[Tuple[int, NotificationKey]]:
        raise NotImplementedError

    def delete_many(self, notification_ids: Sequence[int]) -> int:
        raise NotImplementedError

    def delete_for_document(self, document_id: int) -> int:
        raise NotImplementedError

    def list_for_audience(
        self,
        *,
        audience: Audience,
        client_id: Optional[int] = None,
        limit: int = 50,
    ) -> Sequence[ComplianceNotification]:
        raise NotImplementedError
