from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import List, Optional

from ..core.enums import EventType, ScheduleCategory, TrainingMode


@dataclass(frozen=True)
class ScheduleRow:
    """One generated occurrence; not persisted by the generator itself."""

    title: str
    scheduled_for: date
    scheduled_iso: str
    scheduled_label: str

    def to_dict(self) -> dict:
        return {
            "title": self.title,
            "scheduledFor": self.scheduled_iso,
            "scheduledIso": self.scheduled_iso,
            "scheduledLabel": self.scheduled_label,
        }


@dataclass(frozen=True)
class TrainingRow:
    name: str
    type: EventType
    date_iso: str
    date_label: str

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "type": self.type.value,
            "dateIso": self.date_iso,
            "dateLabel": self.date_label,
        }


@dataclass(frozen=True)
class HolidayRow:
    date_iso: str
    date_label: str

    def to_dict(self) -> dict:
        return {"dateIso": self.date_iso, "dateLabel": self.date_label}


@dataclass(frozen=True)
class TrainingCalendar:
    mode: TrainingMode
    generated_at: datetime
    rows: List[TrainingRow] = field(default_factory=list)
    holidays: List[HolidayRow] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "mode": self.mode.value,
            "generatedAt": self.generated_at.isoformat(),
            "page1": [r.to_dict() for r in self.rows],
            "page2": [h.to_dict() for h in self.holidays],
        }


@dataclass(frozen=True)
class ScheduleTemplate:
    template_id: int
    client_id: int
    category: ScheduleCategory
    title: str
    created_at: Optional[datetime] = None


@dataclass(frozen=True)
class ScheduleEvent:
    event_id: int
    client_id: int
    category: ScheduleCategory
    title: str
    scheduled_for: date
    template_id: Optional[int] = None


@dataclass(frozen=True)
class ScheduleEventDraft:
    title: str
    scheduled_for: date
    template_id: Optional[int] = None
