from __future__ import annotations

from contextlib import contextmanager
from datetime import date, datetime
from typing import Any, Dict, Iterator, List, Optional

from .connection import DatabaseConnection


@contextmanager
def _open_cursor(conn_factory: DatabaseConnection, *, dictionary: bool = True):
    conn = conn_factory.connect()
    try:
        cur = conn.cursor(dictionary=dictionary)
        try:
            yield conn, cur
            conn.commit()
        finally:
            cur.close()
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, dictionary: bool = True):
    """Yield ``(conn, cursor)``; commit on success, roll back on error.

    Inside :func:`transaction` the thread's open cursor is reused and the
    commit is left to the transaction.
    """

    pair = conn_factory.bound()
    if pair is not None:
        yield pair
        return

    with _open_cursor(conn_factory, dictionary=dictionary) as pair:
        yield pair


@contextmanager
def transaction(conn_factory: DatabaseConnection) -> Iterator[None]:
    """Group every ``db_cursor`` call made on this thread into one commit."""

    if conn_factory.bound() is not None:
        yield
        return

    with _open_cursor(conn_factory) as pair:
        conn_factory.bind(pair)
        try:
            yield
        finally:
            conn_factory.bind(None)


def fetchone(cur) -> Optional[Dict[str, Any]]:
    row = cur.fetchone()
    return row if row else None


def fetchall(cur) -> List[Dict[str, Any]]:
    rows = cur.fetchall()
    return list(rows or [])


def in_placeholders(values: List[Any]) -> str:
    return ",".join(["%s"] * len(values))


def normalize_mysql_date(value: Any) -> Optional[date]:
    """DATE columns come back as date, DATETIME as datetime, some drivers as str."""

    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        return datetime.strptime(value.strip()[:10], "%Y-%m-%d").date()
    raise TypeError(f"Unsupported MySQL DATE value type: {type(value)!r}")
