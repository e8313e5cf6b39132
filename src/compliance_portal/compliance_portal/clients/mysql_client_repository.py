from __future__ import annotations

from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Client
from .repository import ClientRepository


def _to_client(r: dict) -> Client:
    return Client(
        client_id=int(r["client_id"]),
        name=r["name"],
        address=r.get("address"),
        logo_url=r.get("logo_url"),
    )


class MySQLClientRepository(ClientRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, client_id: int) -> Optional[Client]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT client_id, name, address, logo_url FROM clients WHERE client_id=%s",
                (int(client_id),),
            )
            r = fetchone(cur)
            return _to_client(r) if r else None

    def list_all(self) -> Sequence[Client]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT client_id, name, address, logo_url FROM clients ORDER BY name ASC")
            return [_to_client(r) for r in fetchall(cur)]
