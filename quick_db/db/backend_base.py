"""
Backend base interfaces for quick_db.

This module defines the minimal contracts that all driver backends
(SQLite, MySQL, Postgres) must satisfy.

It is intentionally light-weight:

- It does NOT depend on any specific DB driver.
- It only encodes the structural requirements assumed by:
      * quick_db.db.connection.DBConnection
      * quick_db.core.Database

Backends must expose:

    backend.connect() -> raw_connection (autocommit, dict-like rows)
    backend.helpers   -> module with execute_named / row_to_dict
    backend.paramstyle
    backend.supports_insert_set
    backend.driver_errors
    backend.last_insert_id(raw_conn, cursor)
    backend.init_schema(conn)  # optional

This file provides:
- DBBackend: abstract base class
- BackendLike: structural protocol
- ensure_backend: runtime validator
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Optional, Protocol, Tuple, Type, runtime_checkable

from . import helpers


# ---------------------------------------------------------------------------
# Abstract Base Backend
# ---------------------------------------------------------------------------

class DBBackend(ABC):
    """
    Abstract base class for a quick_db driver backend.

    Concrete subclasses may define any constructor signature they want
    (e.g. SQLiteBackend(db_path), MySQLBackend(config)).

    Class attributes
    ----------------
    name:
        Short driver name used in logs.
    paramstyle:
        DB-API paramstyle of the driver ("named" or "pyformat").
    supports_insert_set:
        True when the dialect accepts ``INSERT INTO t SET a = :a``.
    """

    name: str = "abstract"
    paramstyle: str = "named"
    supports_insert_set: bool = False

    @property
    def helpers(self) -> Any:
        """
        Return the helper module associated with this backend.

        Normally this is quick_db.db.helpers, but test backends may
        provide compatible modules.
        """
        return helpers

    @property
    @abstractmethod
    def driver_errors(self) -> Tuple[Type[BaseException], ...]:
        """
        Exception classes that mean "the statement failed".

        Normally the driver's DB-API ``Error`` base class.
        """
        raise NotImplementedError

    @abstractmethod
    def connect(self) -> Any:
        """
        Acquire and return a new raw DB-API 2.0 connection.
        """
        raise NotImplementedError

    def last_insert_id(self, raw_conn: Any, cursor: Any) -> Optional[Any]:
        """
        Primary key generated by the last INSERT on ``cursor``.

        Default: the DB-API ``lastrowid`` extension.
        """
        return getattr(cursor, "lastrowid", None)

    def init_schema(self, conn: Any) -> None:
        """
        Optional schema bootstrap.

        Default: no-op.
        """
        return None

    def describe(self) -> str:
        """Connection target without credentials, for log lines."""
        return self.name


# ---------------------------------------------------------------------------
# Structural Protocol
# ---------------------------------------------------------------------------

@runtime_checkable
class BackendLike(Protocol):
    """
    Structural protocol for objects usable as a quick_db backend.

    This lets Database operate on test doubles without knowing the
    concrete backend implementation.
    """

    helpers: Any
    paramstyle: str
    supports_insert_set: bool
    driver_errors: Tuple[Type[BaseException], ...]

    def connect(self) -> Any:
        ...

    def last_insert_id(self, raw_conn: Any, cursor: Any) -> Optional[Any]:
        ...


# ---------------------------------------------------------------------------
# Runtime Guard
# ---------------------------------------------------------------------------

_REQUIRED_ATTRIBUTES = (
    "connect",
    "helpers",
    "paramstyle",
    "supports_insert_set",
    "driver_errors",
    "last_insert_id",
)


def ensure_backend(backend: Any) -> BackendLike:
    """
    Validate that an object behaves like a quick_db backend.

    First, try an isinstance check against BackendLike.
    If that fails, fall back to manual attribute inspection so the error
    names what is missing.

    Raises:
        TypeError if required attributes are missing.
    """
    if not isinstance(backend, BackendLike):
        missing = [attr for attr in _REQUIRED_ATTRIBUTES if not hasattr(backend, attr)]

        if missing:
            raise TypeError(
                f"Invalid quick_db backend {backend!r}: missing attributes {missing}"
            )

    return backend  # type: ignore[return-value]


__all__ = [
    "DBBackend",
    "BackendLike",
    "ensure_backend",
]
