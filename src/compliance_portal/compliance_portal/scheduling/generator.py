"""Future schedule builder for recurring compliance items.

Every title gets its own seeded generator, so adding or removing a title
never moves the dates of the others when an admin regenerates a category.
"""

from __future__ import annotations

from datetime import date
from typing import Iterable, List, Optional, Set

from ..common.datetime_utils import (
    add_days,
    add_months,
    parse_calendar_date,
    to_iso,
    to_slash_label,
    today_local,
)
from ..core.constants import (
    DEFAULT_COUNT_PER_TITLE,
    FIRST_OFFSET_MAX_DAYS,
    FIRST_OFFSET_MIN_DAYS,
    REPEAT_EVERY_MONTHS,
    REPEAT_JITTER_DAYS,
)
from .model import ScheduleRow
from .seeded_random import hash_seed, rand_int, seeded_random


def sanitize_titles(values: Iterable[str]) -> List[str]:
    """Trim, drop empties, de-duplicate keeping the first occurrence."""

    seen: Set[str] = set()
    out: List[str] = []
    for value in values:
        title = (value or "").strip()
        if not title or title in seen:
            continue
        seen.add(title)
        out.append(title)
    return out


def sanitize_holidays(values: Iterable[str]) -> List[str]:
    """Parse holiday strings into ISO dates; unparseable entries are dropped."""

    seen: Set[str] = set()
    out: List[str] = []
    for value in values:
        parsed = parse_calendar_date(value)
        if parsed is None:
            continue
        iso = to_iso(parsed)
        if iso not in seen:
            seen.add(iso)
            out.append(iso)
    return out


def move_to_next_working_day(value: date, holidays: Set[str]) -> date:
    current = value
    while to_iso(current) in holidays:
        current = add_days(current, 1)
    return current


def schedule_seed(seed_prefix: str, title: str, year: int) -> int:
    return hash_seed(f"{seed_prefix}:{title.lower()}:{year}")


def generate_future_schedule(
    titles: Iterable[str],
    holidays: Iterable[str] = (),
    count_per_title: int = DEFAULT_COUNT_PER_TITLE,
    seed_prefix: str = "",
    from_date: Optional[date] = None,
) -> List[ScheduleRow]:
    """Spread ``count_per_title`` dates per title roughly three months apart.

    The first date is 10 to 40 days after ``from_date``; each following one is
    three calendar months later, jittered by up to three days either way.
    Any date on a holiday is pushed forward to the next non-holiday.
    """

    from_date = from_date or today_local()
    holiday_set = set(sanitize_holidays(holidays))
    rows: List[ScheduleRow] = []

    for title in sanitize_titles(titles):
        rng = seeded_random(schedule_seed(seed_prefix, title, from_date.year))

        next_date = add_days(from_date, rand_int(rng, FIRST_OFFSET_MIN_DAYS, FIRST_OFFSET_MAX_DAYS))
        next_date = move_to_next_working_day(next_date, holiday_set)

        for i in range(count_per_title):
            if i > 0:
                next_date = add_months(next_date, REPEAT_EVERY_MONTHS)
                next_date = add_days(next_date, rand_int(rng, -REPEAT_JITTER_DAYS, REPEAT_JITTER_DAYS))
                next_date = move_to_next_working_day(next_date, holiday_set)

            rows.append(
                ScheduleRow(
                    title=title,
                    scheduled_for=next_date,
                    scheduled_iso=to_iso(next_date),
                    scheduled_label=to_slash_label(next_date),
                )
            )

    # sort() is stable: equal dates keep per-title generation order.
    rows.sort(key=lambda r: r.scheduled_for)
    return rows
