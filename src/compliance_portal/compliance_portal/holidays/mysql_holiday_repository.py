from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, in_placeholders, normalize_mysql_date
from .model import Holiday
from .repository import HolidayRepository


def _to_holiday(r: dict) -> Holiday:
    return Holiday(
        holiday_id=int(r["holiday_id"]),
        client_id=int(r["client_id"]),
        holiday_date=normalize_mysql_date(r["holiday_date"]),
        name=r["name"],
        year=int(r["year"]),
    )


class MySQLHolidayRepository(HolidayRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_for_years(self, *, client_id: int, years: Sequence[int]) -> Sequence[Holiday]:
        years = [int(y) for y in years]
        if not years:
            return []
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT holiday_id, client_id, holiday_date, name, year
                FROM client_holidays
                WHERE client_id=%s AND year IN ({in_placeholders(years)})
                ORDER BY holiday_date ASC
                """,
                (int(client_id), *years),
            )
            return [_to_holiday(r) for r in fetchall(cur)]

    def list_from(self, *, client_id: int, start: date) -> Sequence[Holiday]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT holiday_id, client_id, holiday_date, name, year
                FROM client_holidays
                WHERE client_id=%s AND holiday_date >= %s
                ORDER BY holiday_date ASC
                """,
                (int(client_id), start),
            )
            return [_to_holiday(r) for r in fetchall(cur)]

    def get_for_date(self, *, client_id: int, holiday_date: date) -> Optional[Holiday]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT holiday_id, client_id, holiday_date, name, year
                FROM client_holidays
                WHERE client_id=%s AND holiday_date=%s
                """,
                (int(client_id), holiday_date),
            )
            r = fetchone(cur)
            return _to_holiday(r) if r else None

    def create(self, *, client_id: int, holiday_date: date, name: str, year: int) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "INSERT INTO client_holidays(client_id, holiday_date, name, year) VALUES(%s,%s,%s,%s)",
                (int(client_id), holiday_date, name, int(year)),
            )
            return int(cur.lastrowid)

    def delete(self, *, holiday_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM client_holidays WHERE holiday_id=%s", (int(holiday_id),))
            return cur.rowcount > 0
