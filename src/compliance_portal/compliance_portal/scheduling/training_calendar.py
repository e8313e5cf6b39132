from __future__ import annotations

from datetime import date, datetime
from typing import Iterable, List, Optional, Sequence, Tuple, Union

from ..common.datetime_utils import (
    add_days,
    add_months,
    add_years,
    now_local,
    parse_iso_date,
    to_dash_label,
    to_iso,
)
from ..core.constants import (
    DEFAULT_HOLIDAYS,
    TRAINING_DAY_JITTER,
    TRAINING_MONTH_JITTER,
    TRAINING_OCCURRENCES,
)
from ..core.enums import EventType, TrainingMode
from .generator import move_to_next_working_day, sanitize_holidays, sanitize_titles
from .model import HolidayRow, TrainingCalendar, TrainingRow
from .seeded_random import hash_seed, rand_int, seeded_random


def calendar_window(mode: TrainingMode, today: date) -> Tuple[date, date]:
    """One year back for ``reference`` mode, one year ahead for ``future``."""

    if mode == TrainingMode.REFERENCE:
        return add_years(today, -1), today
    return today, add_years(today, 1)


def _clamp(value: date, lo: date, hi: date) -> date:
    return min(max(value, lo), hi)


def _items(training_names: Iterable[str], committee_names: Iterable[str]) -> List[Tuple[str, EventType]]:
    trainings = [(name, EventType.TRAINING) for name in sanitize_titles(training_names)]
    committees = [(name, EventType.COMMITTEE_MEETING) for name in sanitize_titles(committee_names)]
    return trainings + committees


def generate_training_calendar(
    mode: Union[TrainingMode, str],
    now: Optional[datetime] = None,
    training_names: Sequence[str] = (),
    committee_names: Sequence[str] = (),
    holidays: Iterable[str] = DEFAULT_HOLIDAYS,
) -> TrainingCalendar:
    mode = TrainingMode(mode)
    now = now or now_local()
    today = now.date()

    holiday_list = sorted(sanitize_holidays(holidays))
    holiday_set = set(holiday_list)
    start, end = calendar_window(mode, today)

    rows: List[TrainingRow] = []
    for name, event_type in _items(training_names, committee_names):
        rng = seeded_random(hash_seed(f"{mode.value}-{now.year}-{event_type.value}-{name.lower()}"))

        item_dates: List[date] = []
        for i in range(TRAINING_OCCURRENCES):
            # roughly quarterly, each step may slip a month either way
            month_offset = i * 3 + rand_int(rng, -TRAINING_MONTH_JITTER, TRAINING_MONTH_JITTER)
            day_offset = rand_int(rng, -TRAINING_DAY_JITTER, TRAINING_DAY_JITTER)

            varied = add_days(add_months(start, month_offset), day_offset)
            item_dates.append(move_to_next_working_day(_clamp(varied, start, end), holiday_set))

        for d in sorted(item_dates):
            rows.append(TrainingRow(name=name, type=event_type, date_iso=to_iso(d), date_label=to_dash_label(d)))

    rows.sort(key=lambda r: r.date_iso)

    return TrainingCalendar(
        mode=mode,
        generated_at=now,
        rows=rows,
        holidays=[HolidayRow(date_iso=h, date_label=to_dash_label(parse_iso_date(h))) for h in holiday_list],
    )
