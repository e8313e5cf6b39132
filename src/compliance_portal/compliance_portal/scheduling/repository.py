from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from ..core.enums import ScheduleCategory
from .model import ScheduleEvent, ScheduleEventDraft, ScheduleTemplate


class ScheduleTemplateRepository(Protocol):
    def list_for_client(self, *, client_id: int, category: Optional[ScheduleCategory] = None) -> Sequence[ScheduleTemplate]:
        raise NotImplementedError

    def create(self, *, client_id: int, category: ScheduleCategory, title: str) -> int:
        raise NotImplementedError

    def delete(self, *, template_id: int) -> bool:
        raise NotImplementedError


class ScheduleEventRepository(Protocol):
    def list_for_client(self, *, client_id: int, category: ScheduleCategory) -> Sequence[ScheduleEvent]:
        raise NotImplementedError

    def replace_future(
        self,
        *,
        client_id: int,
        category: ScheduleCategory,
        start: date,
        drafts: Sequence[ScheduleEventDraft],
    ) -> Sequence[ScheduleEvent]:
        """Drop events on or after ``start`` and insert ``drafts`` atomically.

        Returns the new events in date order.
        """

        raise NotImplementedError
