from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..core.enums import ScheduleCategory
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, normalize_mysql_date
from .model import ScheduleEvent, ScheduleEventDraft, ScheduleTemplate
from .repository import ScheduleEventRepository, ScheduleTemplateRepository


class MySQLScheduleTemplateRepository(ScheduleTemplateRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_for_client(self, *, client_id: int, category: Optional[ScheduleCategory] = None) -> Sequence[ScheduleTemplate]:
        clauses = ["client_id=%s"]
        params: list[object] = [int(client_id)]
        if category is not None:
            clauses.append("category=%s")
            params.append(category.value)

        where = " AND ".join(clauses)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT template_id, client_id, category, title, created_at
                FROM compliance_schedule_templates
                WHERE {where}
                ORDER BY title ASC, template_id ASC
                """,
                tuple(params),
            )
            return [
                ScheduleTemplate(
                    template_id=int(r["template_id"]),
                    client_id=int(r["client_id"]),
                    category=ScheduleCategory(r["category"]),
                    title=r["title"],
                    created_at=r.get("created_at"),
                )
                for r in fetchall(cur)
            ]

    def create(self, *, client_id: int, category: ScheduleCategory, title: str) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "INSERT INTO compliance_schedule_templates(client_id, category, title) VALUES(%s,%s,%s)",
                (int(client_id), category.value, title),
            )
            return int(cur.lastrowid)

    def delete(self, *, template_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM compliance_schedule_templates WHERE template_id=%s", (int(template_id),))
            return cur.rowcount > 0


class MySQLScheduleEventRepository(ScheduleEventRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_for_client(self, *, client_id: int, category: ScheduleCategory) -> Sequence[ScheduleEvent]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT event_id, client_id, category, title, scheduled_for, template_id
                FROM compliance_schedule_events
                WHERE client_id=%s AND category=%s
                ORDER BY scheduled_for ASC, event_id ASC
                """,
                (int(client_id), category.value),
            )
            return [
                ScheduleEvent(
                    event_id=int(r["event_id"]),
                    client_id=int(r["client_id"]),
                    category=ScheduleCategory(r["category"]),
                    title=r["title"],
                    scheduled_for=normalize_mysql_date(r["scheduled_for"]),
                    template_id=r.get("template_id"),
                )
                for r in fetchall(cur)
            ]

    def replace_future(
        self,
        *,
        client_id: int,
        category: ScheduleCategory,
        start: date,
        drafts: Sequence[ScheduleEventDraft],
    ) -> Sequence[ScheduleEvent]:
        created: list[ScheduleEvent] = []
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                DELETE FROM compliance_schedule_events
                WHERE client_id=%s AND category=%s AND scheduled_for >= %s
                """,
                (int(client_id), category.value, start),
            )
            for d in drafts:
                cur.execute(
                    """
                    INSERT INTO compliance_schedule_events(client_id, category, title, scheduled_for, template_id)
                    VALUES(%s,%s,%s,%s,%s)
                    """,
                    (int(client_id), category.value, d.title, d.scheduled_for, d.template_id),
                )
                created.append(
                    ScheduleEvent(
                        event_id=int(cur.lastrowid),
                        client_id=int(client_id),
                        category=category,
                        title=d.title,
                        scheduled_for=d.scheduled_for,
                        template_id=d.template_id,
                    )
                )
        return created
