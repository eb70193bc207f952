"""
SQLite backend for quick_db.

Used for:
    - local development
    - tests
    - throwaway scripts that do not need a server

Implements:
    - connect()
    - driver_errors
    - init_schema()

SQLite binds ``:name`` placeholders natively, so statements pass through
unchanged. It has no ``INSERT ... SET`` form; Database builds a column
list instead.
"""

from __future__ import annotations

import sqlite3
from pathlib import Path
from typing import Optional

from .backend_base import DBBackend


class SQLiteBackend(DBBackend):
    """
    Minimal SQLite backend.

    Parameters
    ----------
    db_path : str
        Path to the SQLite database file, or ":memory:".
    schema : str, optional
        SQL script run by init_schema().
    """

    name = "sqlite"
    paramstyle = "named"
    supports_insert_set = False

    def __init__(self, db_path: str, schema: Optional[str] = None):
        self.path = db_path if db_path == ":memory:" else Path(db_path)
        self.schema = schema

    @property
    def driver_errors(self):
        return (sqlite3.Error,)

    # ------------------------------------------------------------------
    # Connection handling
    # ------------------------------------------------------------------

    def connect(self) -> sqlite3.Connection:
        """
        Open a SQLite3 connection with row_factory=dict-like access.

        isolation_level=None puts the driver in autocommit mode, so each
        statement is committed as soon as it runs.
        """
        conn = sqlite3.connect(str(self.path), isolation_level=None)
        conn.row_factory = sqlite3.Row
        conn.execute("PRAGMA foreign_keys = ON;")
        return conn

    # ------------------------------------------------------------------
    # Schema initializer
    # ------------------------------------------------------------------

    def init_schema(self, conn) -> None:
        """
        Run the configured schema script, if any.
        """
        if not self.schema:
            return None
        conn.executescript(self.schema)

    def describe(self) -> str:
        return f"sqlite:{self.path}"
