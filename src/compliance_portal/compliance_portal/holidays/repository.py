from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from .model import Holiday


class HolidayRepository(Protocol):
    def list_for_years(self, *, client_id: int, years: Sequence[int]) -> Sequence[Holiday]:
        raise NotImplementedError

    def list_from(self, *, client_id: int, start: date) -> Sequence[Holiday]:
        """Holidays on or after ``start``, ascending."""

        raise NotImplementedError

    def get_for_date(self, *, client_id: int, holiday_date: date) -> Optional[Holiday]:
        raise NotImplementedError

    def create(self, *, client_id: int, holiday_date: date, name: str, year: int) -> int:
        raise NotImplementedError

    def delete(self, *, holiday_id: int) -> bool:
        raise NotImplementedError
