"""
Tagged query results.

Database.query() never hands back a bare ``False``. It returns a
QueryResult that is either a success carrying the executed cursor or a
failure carrying the driver's reason, and callers branch on ``ok``::

    result = db.query("SELECT * FROM users WHERE id = :id", {":id": 1})
    if result.ok:
        rows = result.fetch_all()
    else:
        log.warning(result.reason)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .errors import QueryFailed


@dataclass(frozen=True)
class QueryResult:
    """
    Outcome of one executed statement.

    Attributes
    ----------
    ok:
        True when the driver executed the statement.
    statement:
        The executed DB-API cursor (success only).
    reason:
        Driver message (failure only).
    error:
        The driver exception (failure only).
    sql, parameters:
        What was executed, kept for error messages.
    """

    ok: bool
    statement: Any = None
    reason: Optional[str] = None
    error: Optional[BaseException] = None
    sql: str = ""
    parameters: Dict[str, Any] = field(default_factory=dict)
    row_to_dict: Any = field(default=dict, repr=False, compare=False)

    # ------------------------------------------------------------------
    # Constructors
    # ------------------------------------------------------------------

    @classmethod
    def success(cls, statement: Any, *, sql: str = "", parameters=None, row_to_dict=dict) -> "QueryResult":
        return cls(
            ok=True,
            statement=statement,
            sql=sql,
            parameters=dict(parameters or {}),
            row_to_dict=row_to_dict,
        )

    @classmethod
    def failure(cls, reason: str, error: Optional[BaseException] = None, *, sql: str = "", parameters=None) -> "QueryResult":
        return cls(
            ok=False,
            reason=reason,
            error=error,
            sql=sql,
            parameters=dict(parameters or {}),
        )

    def __bool__(self) -> bool:
        return self.ok

    # ------------------------------------------------------------------
    # Access
    # ------------------------------------------------------------------

    def unwrap(self) -> Any:
        """
        Return the executed cursor, or raise QueryFailed for a failure.
        """
        if not self.ok:
            raise QueryFailed(
                self.reason or "unknown error",
                sql=self.sql,
                parameters=self.parameters,
            ) from self.error
        return self.statement

    def fetch_all(self) -> List[Dict[str, Any]]:
        """Every remaining row as a dict."""
        return [self.row_to_dict(r) for r in self.unwrap().fetchall()]

    def fetch(self) -> Optional[Dict[str, Any]]:
        """Next row as a dict, or None when the result is exhausted."""
        row = self.unwrap().fetchone()
        return self.row_to_dict(row) if row is not None else None

    def fetch_column(self, index: int = 0) -> Any:
        """
        A single column of the next row, or None when there is no row.
        """
        row = self.unwrap().fetchone()
        if row is None:
            return None
        if isinstance(row, dict):
            return list(row.values())[index]
        return row[index]

    @property
    def row_count(self) -> int:
        """Rows affected by the statement (DB-API ``rowcount``)."""
        return self.unwrap().rowcount


__all__ = ["QueryResult"]
