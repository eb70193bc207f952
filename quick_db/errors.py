"""
Exception hierarchy for quick_db.

Every error raised by the package derives from QuickDBError so callers
can catch the whole family in one place.
"""

from __future__ import annotations

from typing import Any, Mapping, Optional


class QuickDBError(Exception):
    """Base class for all quick_db errors."""


class ConfigurationError(QuickDBError):
    """The connection configuration is incomplete or names an unknown driver."""


class ConnectionFailed(QuickDBError):
    """The driver refused to open a connection."""


class NotConnectedError(QuickDBError):
    """A query helper was called before a successful connect()."""


class QueryFailed(QuickDBError):
    """
    A statement failed to execute.

    Attributes
    ----------
    sql:
        Statement as written by the caller (``:name`` placeholders).
    parameters:
        Parameter set passed with the statement.
    reason:
        Driver message describing the failure.
    """

    def __init__(
        self,
        reason: str,
        *,
        sql: str = "",
        parameters: Optional[Mapping[str, Any]] = None,
    ):
        self.reason = reason
        self.sql = sql
        self.parameters = dict(parameters or {})
        super().__init__(f"Query failed: {reason} | Query: {sql!r} | Params: {self.parameters!r}")


__all__ = [
    "QuickDBError",
    "ConfigurationError",
    "ConnectionFailed",
    "NotConnectedError",
    "QueryFailed",
]
