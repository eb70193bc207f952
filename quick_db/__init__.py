"""
quick_db

Shorthand CRUD helpers over a single database connection, for quick
scripts and experiments.

This root package exports the façade, its configuration and its errors.
"""

from .config import DatabaseConfig, load_config
from .core import Database, create_database
from .errors import (
    ConfigurationError,
    ConnectionFailed,
    NotConnectedError,
    QueryFailed,
    QuickDBError,
)
from .results import QueryResult

__version__ = "0.1.0"

__all__ = [
    "Database",
    "create_database",
    "DatabaseConfig",
    "load_config",
    "QueryResult",
    "QuickDBError",
    "ConfigurationError",
    "ConnectionFailed",
    "NotConnectedError",
    "QueryFailed",
]
