from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from .model import LegalDocument, LegalDocumentDraft


class LegalDocumentRepository(Protocol):
    def list_all(self, *, client_id: Optional[int] = None) -> Sequence[LegalDocument]:
        """Documents joined with their client name, soonest expiry first."""

        raise NotImplementedError

    def get_by_id(self, document_id: int) -> Optional[LegalDocument]:
        raise NotImplementedError

    def create(self, draft: LegalDocumentDraft) -> int:
        raise NotImplementedError

    def create_many(self, drafts: Sequence[LegalDocumentDraft]) -> int:
        """Insert all drafts in one transaction; returns how many were written."""

        raise NotImplementedError

    def update(
        self,
        *,
        document_id: int,
        name: str,
        issue_date: Optional[date],
        expiry_date: date,
        remarks: Optional[str],
    ) -> bool:
        raise NotImplementedError

    def delete(self, document_id: int) -> bool:
        raise NotImplementedError
