from __future__ import annotations

import threading
from dataclasses import dataclass
from typing import Any, Optional, Tuple

import mysql.connector


@dataclass
class DBConfig:
    host: str
    port: int
    user: str
    password: str
    database: str
    connect_timeout: int = 10


class DatabaseConnection:
    """Process-wide MySQL connection factory.

    Note: Connections are short-lived (one per operation) unless a transaction
    is open on the current thread, in which case repositories reuse its
    connection and cursor until the transaction ends.
    """

    _instance: Optional["DatabaseConnection"] = None

    def __init__(self, config: DBConfig):
        self._config = config
        self._local = threading.local()

    @classmethod
    def get_instance(cls, config: DBConfig) -> "DatabaseConnection":
        if cls._instance is None:
            cls._instance = DatabaseConnection(config)
        return cls._instance

    def connect(self):
        return mysql.connector.connect(
            host=self._config.host,
            port=int(self._config.port),
            user=self._config.user,
            password=self._config.password,
            database=self._config.database,
            connection_timeout=int(self._config.connect_timeout),
            autocommit=False,
        )

    def bound(self) -> Optional[Tuple[Any, Any]]:
        return getattr(self._local, "pair", None)

    def bind(self, pair: Optional[Tuple[Any, Any]]) -> None:
        self._local.pair = pair
