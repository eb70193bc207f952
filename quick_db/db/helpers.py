"""
Shared SQL helper utilities.

These functions cover the small amount of string work the façade needs:
    - turning a ``{":column": value}`` parameter set into a SET/WHERE clause
    - prefixing plain ``{column: value}`` records with the ``:`` marker
    - rewriting ``:name`` placeholders for pyformat drivers
    - predictable row→dict mapping

Backends import this module as `.helpers`
"""

from __future__ import annotations

import re
from typing import Any, Dict, Mapping, Optional


PLACEHOLDER_PREFIX = ":"

# ``:name`` but not the second colon of a Postgres ``::type`` cast.
_NAMED_PLACEHOLDER = re.compile(r"(?<![:\w]):([A-Za-z_][A-Za-z0-9_]*)")


# ----------------------------------------------------------------------
# Parameter sets
# ----------------------------------------------------------------------

def strip_prefix(key: str) -> str:
    """Drop every leading placeholder marker from ``key``."""
    return key.lstrip(PLACEHOLDER_PREFIX)


def parameter_for_sets(parameters: Mapping[str, Any]) -> str:
    """
    Build a ``column = :column`` clause from a parameter set.

    Keys keep their input order and are joined with a bare comma, so
    ``{":a": 1, ":b": 2}`` becomes ``"a = :a,b = :b"``.

    The same clause is used for SET lists and for WHERE filters. In a
    WHERE position more than one key yields invalid SQL, which the driver
    reports as a failed statement.
    """
    sets = []
    for key in parameters:
        sets.append(f"{strip_prefix(key)} = {PLACEHOLDER_PREFIX}{strip_prefix(key)}")
    return ",".join(sets)


def prefix_parameters(data: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Convert a plain ``{column: value}`` record into a parameter set.

    Example
    -------
    >>> prefix_parameters({"id": 1, "name": "Name"})
    {':id': 1, ':name': 'Name'}
    """
    return {f"{PLACEHOLDER_PREFIX}{key}": value for key, value in data.items()}


def bind_parameters(parameters: Optional[Mapping[str, Any]]) -> Dict[str, Any]:
    """
    Map a parameter set to the dict DB-API drivers bind by name.

    Drivers look values up by the bare name, so the ``:`` marker is
    removed. Two keys that differ only by the marker collide; the last
    one wins.
    """
    if not parameters:
        return {}
    return {strip_prefix(key): value for key, value in parameters.items()}


# ----------------------------------------------------------------------
# Placeholder styles
# ----------------------------------------------------------------------

def to_pyformat(sql: str) -> str:
    """
    Rewrite ``:name`` placeholders to ``%(name)s``.

    PyMySQL and psycopg2 interpolate with ``%``, so literal percent signs
    already in the statement are doubled first.
    """
    escaped = sql.replace("%", "%%")
    return _NAMED_PLACEHOLDER.sub(r"%(\1)s", escaped)


def adapt_placeholders(sql: str, paramstyle: str) -> str:
    """
    Return ``sql`` in the placeholder style a driver expects.

    Parameters
    ----------
    sql:
        Statement written with ``:name`` placeholders.
    paramstyle:
        DB-API paramstyle of the target driver ("named" or "pyformat").
    """
    if paramstyle == "named":
        return sql
    if paramstyle == "pyformat":
        return to_pyformat(sql)
    raise ValueError(f"Unsupported paramstyle: {paramstyle!r}")


# ----------------------------------------------------------------------
# Execution
# ----------------------------------------------------------------------

def execute_named(
    conn: Any,
    query: str,
    parameters: Optional[Mapping[str, Any]],
    paramstyle: str,
):
    """
    Execute a single statement with named parameters.
    Returns the raw cursor.

    Driver errors propagate unchanged; the caller decides whether they are
    a failed statement or a bug.
    """
    cur = conn.cursor()
    cur.execute(adapt_placeholders(query, paramstyle), bind_parameters(parameters))
    return cur


# ----------------------------------------------------------------------
# Row mapping
# ----------------------------------------------------------------------

def row_to_dict(row: Any) -> dict:
    """
    Convert sqlite3.Row, a PyMySQL dict row or a psycopg2 RealDictRow to a
    plain Python dict.

    Returns an empty dict for ``None``.
    """
    if row is None:
        return {}

    if isinstance(row, dict):
        return dict(row)

    # sqlite3.Row and friends
    if hasattr(row, "keys"):
        return {k: row[k] for k in row.keys()}

    # Fallback: treat as a tuple-like sequence
    return dict(enumerate(row))


__all__ = [
    "PLACEHOLDER_PREFIX",
    "strip_prefix",
    "parameter_for_sets",
    "prefix_parameters",
    "bind_parameters",
    "to_pyformat",
    "adapt_placeholders",
    "execute_named",
    "row_to_dict",
]
