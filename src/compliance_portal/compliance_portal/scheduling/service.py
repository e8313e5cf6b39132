from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Dict, List, Optional, Sequence, Union

from ..clients.repository import ClientRepository
from ..common.datetime_utils import now_local, today_local
from ..common.validators import require_int_range, require_non_empty
from ..core.constants import DEFAULT_COUNT_PER_TITLE, MAX_COUNT_PER_TITLE
from ..core.enums import ScheduleCategory, TrainingMode
from ..core.exceptions import NotFoundError, ValidationError
from ..holidays.service import HolidayService
from .generator import generate_future_schedule
from .model import ScheduleEvent, ScheduleEventDraft, ScheduleTemplate, TrainingCalendar
from .repository import ScheduleEventRepository, ScheduleTemplateRepository
from .training_calendar import calendar_window, generate_training_calendar

logger = logging.getLogger(__name__)


def _category(value: Union[ScheduleCategory, str]) -> ScheduleCategory:
    try:
        return ScheduleCategory(value)
    except ValueError:
        raise ValidationError("Category must be TRAINING or COMMITTEE") from None


def event_payload(event: ScheduleEvent) -> dict:
    return {
        "id": event.event_id,
        "clientId": event.client_id,
        "category": event.category.value,
        "title": event.title,
        "scheduledFor": event.scheduled_for.strftime("%Y-%m-%d"),
        "scheduledLabel": event.scheduled_for.strftime("%d %b %Y"),
        "templateId": event.template_id,
    }


def template_payload(template: ScheduleTemplate) -> dict:
    return {
        "id": template.template_id,
        "clientId": template.client_id,
        "category": template.category.value,
        "title": template.title,
    }


class ComplianceScheduleService:
    """Use case: (re)generate a client's future trainings or committee meetings."""

    def __init__(
        self,
        templates: ScheduleTemplateRepository,
        events: ScheduleEventRepository,
        holidays: HolidayService,
        clients: ClientRepository,
    ):
        self._templates = templates
        self._events = events
        self._holidays = holidays
        self._clients = clients

    def _require_client(self, client_id: int) -> None:
        if not self._clients.get_by_id(int(client_id)):
            raise NotFoundError("Client not found")

    def overview(self, *, client_id: int, category: Union[ScheduleCategory, str]) -> dict:
        category = _category(category)
        templates = self._templates.list_for_client(client_id=int(client_id), category=category)
        events = self._events.list_for_client(client_id=int(client_id), category=category)
        return {
            "templates": [template_payload(t) for t in templates],
            "events": [event_payload(e) for e in events],
        }

    def add_template(self, *, client_id: int, category: Union[ScheduleCategory, str], title: str) -> int:
        self._require_client(client_id)
        return self._templates.create(client_id=int(client_id), category=_category(category), title=require_non_empty(title, "Title"))

    def delete_template(self, *, template_id: int) -> None:
        if not self._templates.delete(template_id=int(template_id)):
            raise NotFoundError("Template not found")

    def generate(
        self,
        *,
        client_id: int,
        category: Union[ScheduleCategory, str],
        count_per_title: int = DEFAULT_COUNT_PER_TITLE,
        today: Optional[date] = None,
    ) -> Sequence[ScheduleEvent]:
        """Replace every future event of the category with a fresh schedule.

        Past events are kept. The client id is the seed prefix, so running
        this twice on the same day yields the same dates.
        """

        self._require_client(client_id)
        category = _category(category)
        count_per_title = require_int_range(count_per_title, "Count per title", 1, MAX_COUNT_PER_TITLE)
        today = today or today_local()

        templates = self._templates.list_for_client(client_id=int(client_id), category=category)
        if not templates:
            raise ValidationError("Upload at least one template first.")

        template_by_title: Dict[str, ScheduleTemplate] = {}
        for t in templates:
            template_by_title.setdefault(t.title.strip(), t)

        rows = generate_future_schedule(
            [t.title for t in templates],
            self._holidays.upcoming_iso(client_id=int(client_id), start=today),
            count_per_title,
            seed_prefix=str(client_id),
            from_date=today,
        )
        drafts = [
            ScheduleEventDraft(title=r.title, scheduled_for=r.scheduled_for, template_id=template_by_title[r.title].template_id)
            for r in rows
            if r.title in template_by_title
        ]
        if not drafts:
            raise ValidationError("No schedules could be generated.")

        events = self._events.replace_future(client_id=int(client_id), category=category, start=today, drafts=drafts)
        logger.info(
            "compliance schedule generated client=%s category=%s titles=%d events=%d",
            client_id,
            category.value,
            len(template_by_title),
            len(events),
        )
        return events


class TrainingCalendarService:
    """Use case: one-year training/committee calendar for a client."""

    def __init__(self, templates: ScheduleTemplateRepository, holidays: HolidayService, clients: ClientRepository):
        self._templates = templates
        self._holidays = holidays
        self._clients = clients

    def generate(self, *, client_id: int, mode: Union[TrainingMode, str], now: Optional[datetime] = None) -> TrainingCalendar:
        if not self._clients.get_by_id(int(client_id)):
            raise NotFoundError("Selected company not found.")
        try:
            mode = TrainingMode(mode)
        except ValueError:
            raise ValidationError("Mode must be reference or future") from None
        now = now or now_local()

        templates = self._templates.list_for_client(client_id=int(client_id))
        if not templates:
            raise ValidationError("Please upload training/committee templates first.")

        trainings: List[str] = [t.title for t in templates if t.category == ScheduleCategory.TRAINING]
        committees: List[str] = [t.title for t in templates if t.category == ScheduleCategory.COMMITTEE]

        start, end = calendar_window(mode, now.date())
        holidays = self._holidays.iso_dates_for_years(client_id=int(client_id), years=range(start.year, end.year + 1))

        calendar = generate_training_calendar(mode, now, trainings, committees, holidays)
        if not calendar.rows:
            raise ValidationError("No training entries available to generate.")
        if not calendar.holidays:
            raise ValidationError("No holidays configured in Holiday Master for selected company.")

        logger.info(
            "training calendar generated client=%s mode=%s trainings=%d committees=%d holidays=%d rows=%d",
            client_id,
            mode.value,
            len(trainings),
            len(committees),
            len(calendar.holidays),
            len(calendar.rows),
        )
        return calendar
