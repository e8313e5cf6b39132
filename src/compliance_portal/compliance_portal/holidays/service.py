from __future__ import annotations

from datetime import date
from typing import Iterable, List

from ..clients.repository import ClientRepository
from ..common.datetime_utils import parse_iso_date, to_iso
from ..common.validators import require_int_range, require_non_empty
from ..core.exceptions import NotFoundError, ValidationError
from .model import Holiday
from .repository import HolidayRepository


class HolidayService:
    """Use case: per-client holiday master feeding the schedule generators."""

    def __init__(self, holidays: HolidayRepository, clients: ClientRepository):
        self._holidays = holidays
        self._clients = clients

    def list_for_year(self, *, client_id: int, year: int) -> List[Holiday]:
        year = require_int_range(year, "Year", 2000, 2100)
        return list(self._holidays.list_for_years(client_id=int(client_id), years=[year]))

    def add(self, *, client_id: int, date_value: str, name: str, year: int) -> Holiday:
        if not self._clients.get_by_id(int(client_id)):
            raise NotFoundError("Client not found")
        name = require_non_empty(name, "Holiday name")
        year = require_int_range(year, "Year", 2000, 2100)
        try:
            holiday_date = parse_iso_date((date_value or "").strip())
        except ValueError:
            raise ValidationError("Date must be YYYY-MM-DD") from None

        if holiday_date.year != year:
            raise ValidationError("Date must belong to selected year")
        if self._holidays.get_for_date(client_id=int(client_id), holiday_date=holiday_date):
            raise ValidationError("Holiday date already exists for this client")

        holiday_id = self._holidays.create(client_id=int(client_id), holiday_date=holiday_date, name=name, year=year)
        return Holiday(holiday_id=holiday_id, client_id=int(client_id), holiday_date=holiday_date, name=name, year=year)

    def delete(self, *, holiday_id: int) -> None:
        if not self._holidays.delete(holiday_id=int(holiday_id)):
            raise NotFoundError("Holiday not found")

    def upcoming_iso(self, *, client_id: int, start: date) -> List[str]:
        return [to_iso(h.holiday_date) for h in self._holidays.list_from(client_id=int(client_id), start=start)]

    def iso_dates_for_years(self, *, client_id: int, years: Iterable[int]) -> List[str]:
        rows = self._holidays.list_for_years(client_id=int(client_id), years=sorted(set(years)))
        return [to_iso(h.holiday_date) for h in rows]
