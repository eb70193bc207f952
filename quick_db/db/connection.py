"""
Connection abstraction for quick_db.

This file defines:
- DBConnection: a wrapper around one live database handle

Backends must expose:
    backend.connect() -> raw connection
    backend.paramstyle
    backend.helpers   -> module with:
        execute_named
        row_to_dict (used by QueryResult)
"""

from __future__ import annotations

import logging
from typing import Any, Mapping, Optional

logger = logging.getLogger(__name__)


class DBConnection:
    """
    Thin wrapper around a raw DB-API 2.0 connection.

    Responsibilities:
        - Execute statements written with ``:name`` placeholders on any
          backend, whatever its native paramstyle
        - Ask the backend for the key generated by an INSERT

    Notes:
        - Backends open connections in autocommit mode; there is no
          transaction handling here
        - Driver errors propagate unchanged
        - Safe to close() multiple times
    """

    def __init__(self, raw_conn: Any, backend: Any):
        self.raw = raw_conn
        self.backend = backend
        self.helpers = backend.helpers

    # ------------------------------------------------------------------
    # SQL execution wrappers
    # ------------------------------------------------------------------

    def execute(self, query: str, params: Optional[Mapping[str, Any]] = None):
        """
        Execute a single SQL statement.
        Returns the underlying cursor.
        """
        logger.debug("SQL: %s | params: %r", query, params)
        return self.helpers.execute_named(self.raw, query, params, self.backend.paramstyle)

    def last_insert_id(self, cursor: Any):
        """
        Primary key generated by the INSERT that produced ``cursor``.
        """
        return self.backend.last_insert_id(self.raw, cursor)

    # ------------------------------------------------------------------
    # Connection lifecycle
    # ------------------------------------------------------------------

    def close(self) -> None:
        """
        Close the underlying connection safely.
        """
        try:
            self.raw.close()
        except Exception:
            # Allow double-close or backend errors w/out propagating
            logger.debug("Ignoring error while closing connection", exc_info=True)
