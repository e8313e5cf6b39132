from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, normalize_mysql_date
from .model import LegalDocument, LegalDocumentDraft
from .repository import LegalDocumentRepository

_SELECT = """
    SELECT d.document_id, d.client_id, c.name AS client_name, d.name,
           d.issue_date, d.expiry_date, d.remarks, d.file_url,
           d.created_at, d.updated_at
    FROM compliance_legal_documents d
    JOIN clients c ON c.client_id = d.client_id
"""


def _to_document(r: dict) -> LegalDocument:
    return LegalDocument(
        document_id=int(r["document_id"]),
        client_id=int(r["client_id"]),
        client_name=r.get("client_name") or "",
        name=r["name"],
        issue_date=normalize_mysql_date(r.get("issue_date")),
        expiry_date=normalize_mysql_date(r["expiry_date"]),
        remarks=r.get("remarks"),
        file_url=r.get("file_url"),
        created_at=r.get("created_at"),
        updated_at=r.get("updated_at"),
    )


class MySQLLegalDocumentRepository(LegalDocumentRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self, *, client_id: Optional[int] = None) -> Sequence[LegalDocument]:
        sql = _SELECT
        params: tuple = ()
        if client_id is not None:
            sql += " WHERE d.client_id=%s"
            params = (int(client_id),)
        sql += " ORDER BY d.expiry_date ASC, d.name ASC"

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, params)
            return [_to_document(r) for r in fetchall(cur)]

    def get_by_id(self, document_id: int) -> Optional[LegalDocument]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " WHERE d.document_id=%s", (int(document_id),))
            r = fetchone(cur)
            return _to_document(r) if r else None

    def _insert(self, cur, draft: LegalDocumentDraft) -> int:
        cur.execute(
            """
            INSERT INTO compliance_legal_documents(client_id, name, issue_date, expiry_date, remarks)
            VALUES(%s,%s,%s,%s,%s)
            """,
            (int(draft.client_id), draft.name, draft.issue_date, draft.expiry_date, draft.remarks),
        )
        return int(cur.lastrowid)

    def create(self, draft: LegalDocumentDraft) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            return self._insert(cur, draft)

    def create_many(self, drafts: Sequence[LegalDocumentDraft]) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            for draft in drafts:
                self._insert(cur, draft)
            return len(drafts)

    def update(
        self,
        *,
        document_id: int,
        name: str,
        issue_date: Optional[date],
        expiry_date: date,
        remarks: Optional[str],
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE compliance_legal_documents
                SET name=%s, issue_date=%s, expiry_date=%s, remarks=%s
                WHERE document_id=%s
                """,
                (name, issue_date, expiry_date, remarks, int(document_id)),
            )
            return cur.rowcount > 0

    def delete(self, document_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM compliance_legal_documents WHERE document_id=%s", (int(document_id),))
            return cur.rowcount > 0
