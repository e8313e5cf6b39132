from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional


@dataclass(frozen=True)
class LegalDocument:
    """A dated licence/registration held for one client."""

    document_id: int
    client_id: int
    name: str
    expiry_date: date
    client_name: str = ""
    issue_date: Optional[date] = None
    remarks: Optional[str] = None
    file_url: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


@dataclass(frozen=True)
class DocumentStatus:
    label: str
    tone: str
    days: int

    def to_dict(self) -> dict:
        return {"label": self.label, "tone": self.tone, "days": self.days}


@dataclass(frozen=True)
class LegalDocumentDraft:
    """Validated input for a new document row."""

    client_id: int
    name: str
    expiry_date: date
    issue_date: Optional[date] = None
    remarks: Optional[str] = None
