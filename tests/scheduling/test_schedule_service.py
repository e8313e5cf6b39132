from __future__ import annotations

from datetime import date, datetime

import pytest

from src.compliance_portal.compliance_portal.core.enums import EventType, ScheduleCategory
from src.compliance_portal.compliance_portal.core.exceptions import NotFoundError, ValidationError
from src.compliance_portal.compliance_portal.scheduling.generator import generate_future_schedule
from src.compliance_portal.compliance_portal.scheduling.model import ScheduleEvent, ScheduleTemplate
from src.compliance_portal.compliance_portal.scheduling.service import ComplianceScheduleService, TrainingCalendarService

TODAY = date(2025, 12, 1)


class InMemoryTemplates:
    def __init__(self):
        self.rows: dict[int, ScheduleTemplate] = {}
        self._next_id = 1

    def list_for_client(self, *, client_id, category=None):
        return [
            t
            for t in self.rows.values()
            if t.client_id == client_id and (category is None or t.category == category)
        ]

    def create(self, *, client_id, category, title):
        tid = self._next_id
        self._next_id += 1
        self.rows[tid] = ScheduleTemplate(tid, client_id, category, title)
        return tid

    def delete(self, *, template_id):
        return self.rows.pop(template_id, None) is not None


class InMemoryEvents:
    def __init__(self):
        self.rows: list[ScheduleEvent] = []
        self.replace_calls = 0

    def list_for_client(self, *, client_id, category):
        return sorted(
            (e for e in self.rows if e.client_id == client_id and e.category == category),
            key=lambda e: (e.scheduled_for, e.event_id),
        )

    def replace_future(self, *, client_id, category, start, drafts):
        self.replace_calls += 1
        self.rows = [
            e
            for e in self.rows
            if not (e.client_id == client_id and e.category == category and e.scheduled_for >= start)
        ]
        created = []
        next_id = max((e.event_id for e in self.rows), default=0) + 1
        for i, d in enumerate(drafts):
            created.append(ScheduleEvent(next_id + i, client_id, category, d.title, d.scheduled_for, d.template_id))
        self.rows.extend(created)
        return sorted(created, key=lambda e: e.scheduled_for)


class StubHolidays:
    def __init__(self, isos):
        self.isos = list(isos)
        self.requested_years = None

    def upcoming_iso(self, *, client_id, start):
        return [h for h in self.isos if h >= start.isoformat()]

    def iso_dates_for_years(self, *, client_id, years):
        self.requested_years = list(years)
        return [h for h in self.isos if int(h[:4]) in self.requested_years]


@pytest.fixture
def templates():
    return InMemoryTemplates()


@pytest.fixture
def events():
    return InMemoryEvents()


@pytest.fixture
def holidays():
    return StubHolidays(["2025-12-27", "2026-01-26", "2026-08-15"])


@pytest.fixture
def svc(templates, events, holidays, clients):
    return ComplianceScheduleService(templates, events, holidays, clients)


def test_generate_uses_client_id_as_seed(svc, templates, events):
    fire = svc.add_template(client_id=1, category="TRAINING", title="Fire Safety")
    svc.add_template(client_id=1, category=ScheduleCategory.COMMITTEE, title="Internal Complaints Committee")

    created = svc.generate(client_id=1, category="TRAINING", today=TODAY)

    expected = generate_future_schedule(["Fire Safety"], ["2025-12-27", "2026-01-26", "2026-08-15"], 4, "1", TODAY)
    assert [e.scheduled_for for e in created] == [r.scheduled_for for r in expected]
    assert {e.template_id for e in created} == {fire}
    assert {e.category for e in events.rows} == {ScheduleCategory.TRAINING}
    assert "2025-12-27" not in {e.scheduled_for.isoformat() for e in created}


def test_regenerating_replaces_future_events_only(svc, events):
    svc.add_template(client_id=1, category="TRAINING", title="Fire Safety")
    past = ScheduleEvent(500, 1, ScheduleCategory.TRAINING, "Fire Safety", date(2025, 6, 1))
    events.rows.append(past)

    first = svc.generate(client_id=1, category="TRAINING", today=TODAY)
    second = svc.generate(client_id=1, category="TRAINING", today=TODAY)

    assert [e.scheduled_for for e in first] == [e.scheduled_for for e in second]
    assert past in events.rows
    assert len(events.rows) == 1 + 4
    assert events.replace_calls == 2


def test_generate_count_and_overview(svc):
    svc.add_template(client_id=1, category="COMMITTEE", title="ICC")
    svc.add_template(client_id=1, category="COMMITTEE", title="Safety Committee")

    created = svc.generate(client_id=1, category="COMMITTEE", count_per_title=2, today=TODAY)
    overview = svc.overview(client_id=1, category="COMMITTEE")

    assert len(created) == 4
    assert [t["title"] for t in overview["templates"]] == ["ICC", "Safety Committee"]
    assert len(overview["events"]) == 4
    first = overview["events"][0]
    assert first["category"] == "COMMITTEE"
    assert first["scheduledLabel"] == datetime.strptime(first["scheduledFor"], "%Y-%m-%d").strftime("%d %b %Y")


@pytest.mark.parametrize("count", [0, 13, "many"])
def test_generate_rejects_bad_count(svc, count):
    svc.add_template(client_id=1, category="TRAINING", title="Fire Safety")
    with pytest.raises(ValidationError):
        svc.generate(client_id=1, category="TRAINING", count_per_title=count, today=TODAY)


def test_generate_requires_templates(svc, events):
    with pytest.raises(ValidationError, match="Upload at least one template first."):
        svc.generate(client_id=1, category="TRAINING", today=TODAY)
    assert events.replace_calls == 0


def test_generate_rejects_unknown_category_and_client(svc):
    with pytest.raises(ValidationError):
        svc.generate(client_id=1, category="PAYROLL", today=TODAY)
    with pytest.raises(NotFoundError):
        svc.generate(client_id=99, category="TRAINING", today=TODAY)


def test_template_management(svc, templates):
    tid = svc.add_template(client_id=1, category="TRAINING", title="  First Aid ")
    assert templates.rows[tid].title == "First Aid"

    with pytest.raises(ValidationError):
        svc.add_template(client_id=1, category="TRAINING", title=" ")

    svc.delete_template(template_id=tid)
    with pytest.raises(NotFoundError):
        svc.delete_template(template_id=tid)


def test_training_calendar_service(templates, holidays, clients, fixed_now):
    templates.create(client_id=1, category=ScheduleCategory.TRAINING, title="Fire Safety")
    templates.create(client_id=1, category=ScheduleCategory.COMMITTEE, title="ICC")
    templates.create(client_id=2, category=ScheduleCategory.TRAINING, title="Not mine")

    cal = TrainingCalendarService(templates, holidays, clients).generate(client_id=1, mode="future", now=fixed_now)

    assert holidays.requested_years == [2026, 2027]
    assert {r.name for r in cal.rows} == {"Fire Safety", "ICC"}
    assert {r.type for r in cal.rows} == {EventType.TRAINING, EventType.COMMITTEE_MEETING}
    assert [h.date_iso for h in cal.holidays] == ["2026-01-26", "2026-08-15"]


def test_training_calendar_service_errors(templates, clients, fixed_now):
    with_holidays = TrainingCalendarService(templates, StubHolidays(["2026-08-15"]), clients)
    no_holidays = TrainingCalendarService(templates, StubHolidays([]), clients)

    with pytest.raises(NotFoundError, match="Selected company not found."):
        with_holidays.generate(client_id=99, mode="future", now=fixed_now)
    with pytest.raises(ValidationError, match="Mode must be"):
        with_holidays.generate(client_id=1, mode="sideways", now=fixed_now)
    with pytest.raises(ValidationError, match="Please upload training/committee templates first."):
        with_holidays.generate(client_id=1, mode="future", now=fixed_now)

    templates.create(client_id=1, category=ScheduleCategory.TRAINING, title="Fire Safety")
    with pytest.raises(ValidationError, match="No holidays configured"):
        no_holidays.generate(client_id=1, mode="future", now=fixed_now)
