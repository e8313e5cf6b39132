from __future__ import annotations

from typing import ContextManager, Optional, Sequence, Tuple

from ..core.enums import Audience, NotificationKind
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, in_placeholders, normalize_mysql_date, transaction
from .model import ComplianceNotification, NotificationKey
from .repository import NotificationRepository


class MySQLNotificationRepository(NotificationRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def transaction(self) -> ContextManager[None]:
        return transaction(self._conn_factory)

    def create_if_absent(self, notification: ComplianceNotification) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            # The no-op update keeps existing content; rowcount is 1 only for a fresh insert.
            cur.execute(
                """
                INSERT INTO compliance_notifications(
                    client_id, document_id, audience, kind, notify_at, title, message
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s)
                ON DUPLICATE KEY UPDATE notification_id=notification_id
                """,
                (
                    int(notification.client_id),
                    int(notification.document_id),
                    notification.audience.value,
                    notification.kind.value,
                    notification.notify_at,
                    notification.title,
                    notification.message,
                ),
            )
            return cur.rowcount == 1

    def list_keys(self, *, client_id: Optional[int] = None) -> Sequence[Tuple[int, NotificationKey]]:
        sql = "SELECT notification_id, document_id, audience, kind FROM compliance_notifications"
        params: tuple = ()
        if client_id is not None:
            sql += " WHERE client_id=%s"
            params = (int(client_id),)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, params)
            return [
                (
                    int(r["notification_id"]),
                    NotificationKey(int(r["document_id"]), Audience(r["audience"]), NotificationKind(r["kind"])),
                )
                for r in fetchall(cur)
            ]

    def delete_many(self, notification_ids: Sequence[int]) -> int:
        ids = [int(i) for i in notification_ids]
        if not ids:
            return 0
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"DELETE FROM compliance_notifications WHERE notification_id IN ({in_placeholders(ids)})",
                tuple(ids),
            )
            return int(cur.rowcount)

    def delete_for_document(self, document_id: int) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM compliance_notifications WHERE document_id=%s", (int(document_id),))
            return int(cur.rowcount)

    def list_for_audience(
        self,
        *,
        audience: Audience,
        client_id: Optional[int] = None,
        limit: int = 50,
    ) -> Sequence[ComplianceNotification]:
        clauses = ["audience=%s"]
        params: list[object] = [audience.value]
        if client_id is not None:
            clauses.append("client_id=%s")
            params.append(int(client_id))
        params.append(int(limit))
        where = " AND ".join(clauses)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT notification_id, client_id, document_id, audience, kind,
                       notify_at, title, message, created_at
                FROM compliance_notifications
                WHERE {where}
                ORDER BY notify_at DESC, notification_id DESC
                LIMIT %s
                """,
                tuple(params),
            )
            return [
                ComplianceNotification(
                    notification_id=int(r["notification_id"]),
                    client_id=int(r["client_id"]),
                    document_id=int(r["document_id"]),
                    audience=Audience(r["audience"]),
                    kind=NotificationKind(r["kind"]),
                    notify_at=normalize_mysql_date(r["notify_at"]),
                    title=r["title"],
                    message=r["message"],
                    created_at=r.get("created_at"),
                )
                for r in fetchall(cur)
            ]
