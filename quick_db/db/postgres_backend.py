"""
Postgres backend for quick_db.

This backend mirrors the interface expected by:
    - DBConnection
    - Database façade

It provides:
    - connect()
    - driver_errors
    - last_insert_id() via ``SELECT lastval()``

This file intentionally keeps the connection semantics simple.
"""

from __future__ import annotations

from typing import Any, Optional

import psycopg2
import psycopg2.extras

from ..config import DatabaseConfig
from .backend_base import DBBackend


class PostgresBackend(DBBackend):
    """
    Minimal Postgres backend implementation.

    Parameters
    ----------
    config : DatabaseConfig
        host, port, database, username and password are used;
        charset becomes the client_encoding.
    """

    name = "postgres"
    paramstyle = "pyformat"
    supports_insert_set = False

    def __init__(self, config: DatabaseConfig):
        self.config = config

    @property
    def driver_errors(self):
        return (psycopg2.Error,)

    # ------------------------------------------------------------------
    # Connection handling
    # ------------------------------------------------------------------

    def connect(self) -> Any:
        """
        Create a psycopg2 connection with dict-like row access.
        """
        kwargs = dict(
            host=self.config.host,
            dbname=self.config.database,
            user=self.config.username,
            password=self.config.password,
            client_encoding=self.config.charset,
            cursor_factory=psycopg2.extras.RealDictCursor,
        )
        if self.config.port is not None:
            kwargs["port"] = self.config.port

        conn = psycopg2.connect(**kwargs)
        conn.autocommit = True
        return conn

    def last_insert_id(self, raw_conn: Any, cursor: Any) -> Optional[Any]:
        """
        Value most recently produced by a sequence in this session.

        Tables without a serial/identity column never touch a sequence;
        lastval() then raises and None is returned.
        """
        cur = raw_conn.cursor()
        try:
            cur.execute("SELECT lastval() AS id")
        except psycopg2.Error:
            return None
        row = cur.fetchone()
        return row["id"] if row else None

    def describe(self) -> str:
        port = f":{self.config.port}" if self.config.port is not None else ""
        return f"postgresql://{self.config.host}{port}/{self.config.database}"
