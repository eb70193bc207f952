"""
quick_db.db

Driver layer for quick_db.

This package provides:

- A connection wrapper over one raw DB-API handle:
      * DBConnection

- Helper functions for placeholder handling and row mapping:
      * parameter_for_sets
      * prefix_parameters
      * adapt_placeholders
      * execute_named
      * row_to_dict

- Concrete driver backends:
      * SQLiteBackend   (local development + tests)
      * MySQLBackend    (PyMySQL, default)
      * PostgresBackend (psycopg2)

- Backend contracts:
      * DBBackend
      * BackendLike
      * ensure_backend
"""

from .connection import DBConnection
from .sqlite_backend import SQLiteBackend
from .mysql_backend import MySQLBackend
from .postgres_backend import PostgresBackend
from .backend_base import DBBackend, BackendLike, ensure_backend
from .helpers import (
    adapt_placeholders,
    execute_named,
    parameter_for_sets,
    prefix_parameters,
    row_to_dict,
)

__all__ = [
    # Connection
    "DBConnection",

    # Backends
    "SQLiteBackend",
    "MySQLBackend",
    "PostgresBackend",
    "DBBackend",
    "BackendLike",
    "ensure_backend",

    # Helpers
    "adapt_placeholders",
    "execute_named",
    "parameter_for_sets",
    "prefix_parameters",
    "row_to_dict",
]
