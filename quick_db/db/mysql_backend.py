"""
MySQL backend for quick_db.

MySQL is the dialect the shorthand statements were written for:
``INSERT INTO t SET a = :a`` is valid here and nowhere else.

Uses PyMySQL with DictCursor so rows come back as dicts, and autocommit
so every statement is committed when it runs.
"""

from __future__ import annotations

from typing import Any

import pymysql
from pymysql.cursors import DictCursor

from ..config import DatabaseConfig
from .backend_base import DBBackend


class MySQLBackend(DBBackend):
    """
    PyMySQL backend.

    Parameters
    ----------
    config : DatabaseConfig
        host, port, database, charset, username and password are used.
    """

    name = "mysql"
    paramstyle = "pyformat"
    supports_insert_set = True

    def __init__(self, config: DatabaseConfig):
        self.config = config

    @property
    def driver_errors(self):
        return (pymysql.Error,)

    def connect(self) -> Any:
        """
        Open a PyMySQL connection with dict rows and autocommit.
        """
        kwargs = dict(
            host=self.config.host,
            user=self.config.username,
            password=self.config.password,
            database=self.config.database,
            charset=self.config.charset,
            cursorclass=DictCursor,
            autocommit=True,
        )
        if self.config.port is not None:
            kwargs["port"] = self.config.port
        return pymysql.connect(**kwargs)

    def last_insert_id(self, raw_conn: Any, cursor: Any):
        return cursor.lastrowid

    def describe(self) -> str:
        port = f":{self.config.port}" if self.config.port is not None else ""
        return f"mysql://{self.config.host}{port}/{self.config.database}"
