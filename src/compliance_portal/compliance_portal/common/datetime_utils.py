from __future__ import annotations

import math
import re
from datetime import date, datetime, timedelta
from typing import Any, Optional

_DMY_RE = re.compile(r"^(\d{2})[/-](\d{2})[/-](\d{4})$")


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def parse_calendar_date(value: str) -> Optional[date]:
    """Parse ``YYYY-MM-DD``, ``DD/MM/YYYY`` or ``DD-MM-YYYY``.

    ISO datetimes are accepted too and reduced to their date part.
    Returns None for anything else, including impossible days like 31/02.
    """

    text = (value or "").strip()
    if not text:
        return None

    m = _DMY_RE.match(text)
    try:
        if m:
            return date(int(m.group(3)), int(m.group(2)), int(m.group(1)))
        return datetime.fromisoformat(text).date()
    except ValueError:
        return None


def to_iso(value: date) -> str:
    return value.strftime("%Y-%m-%d")


def to_slash_label(value: date) -> str:
    return value.strftime("%d/%m/%Y")


def to_dash_label(value: date) -> str:
    return value.strftime("%d-%m-%Y")


def add_days(value: date, days: int) -> date:
    return value + timedelta(days=days)


def add_months(value: date, months: int) -> date:
    """Shift by whole months, rolling a missing day over into the next month.

    Jan 31 + 1 month is Mar 3 (Mar 2 in a leap year), matching how schedules
    were generated before, so regenerated dates stay identical.
    """

    index = value.month - 1 + months
    year = value.year + index // 12
    month = index % 12 + 1
    return date(year, month, 1) + timedelta(days=value.day - 1)


def add_years(value: date, years: int) -> date:
    # Feb 29 rolls over to Mar 1 in a non-leap target year.
    return date(value.year + years, value.month, 1) + timedelta(days=value.day - 1)


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()


def today_local() -> date:
    return now_local().date()


EXCEL_EPOCH = date(1899, 12, 30)
_NUMERIC_RE = re.compile(r"^\d+(\.\d+)?$")
_LOOSE_DMY_RE = re.compile(r"^(\d{1,2})[/.\-](\d{1,2})[/.\-](\d{4})$")


def parse_date_input(value: Any) -> Optional[date]:
    """Best-effort date from form fields and spreadsheet cells.

    Accepts date/datetime objects, Excel serial day numbers (as numbers or
    numeric strings), ``D/M/YYYY`` style strings with ``/``, ``.`` or ``-``
    and ISO strings. Anything else gives None.
    """

    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, (int, float)):
        if not math.isfinite(value):
            return None
        try:
            return EXCEL_EPOCH + timedelta(days=math.floor(value))
        except OverflowError:
            return None

    text = str(value).strip()
    if not text:
        return None
    if _NUMERIC_RE.match(text):
        return parse_date_input(float(text))

    m = _LOOSE_DMY_RE.match(text)
    if m:
        try:
            return date(int(m.group(3)), int(m.group(2)), int(m.group(1)))
        except ValueError:
            pass

    try:
        return datetime.fromisoformat(text).date()
    except ValueError:
        return None
