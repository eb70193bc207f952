"""
Core façade for quick_db.

Database is the single entrypoint: it owns one live connection and offers
shorthand helpers that assemble simple statements by string concatenation.

    db = Database({
        "host": "localhost",
        "database": "shop",
        "charset": "utf8",
        "username": "user",
        "password": "pass",
    })
    user = db.find("users", 1)
    db.insert_with_array("users", {"name": "Ada"})

It is meant for quick scripts and prototypes:
    - no transactions (every statement autocommits)
    - no pooling, no retries
    - one connection per instance, not safe to share between threads

Table and column names are interpolated into the SQL unescaped. Only pass
identifiers from a fixed allow-list, never from user input.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Mapping, Optional, Union

from .config import DatabaseConfig, load_config
from .db import DBConnection, MySQLBackend, PostgresBackend, SQLiteBackend, ensure_backend
from .db.helpers import parameter_for_sets, prefix_parameters, strip_prefix
from .errors import ConnectionFailed, NotConnectedError, QuickDBError
from .results import QueryResult

logger = logging.getLogger(__name__)

ConfigLike = Union[DatabaseConfig, Mapping[str, Any]]


# ---------------------------------------------------------------------------
# Database façade
# ---------------------------------------------------------------------------

class Database:
    """
    Convenience wrapper around one database connection.

    Parameters
    ----------
    config:
        DatabaseConfig, or a plain mapping with host, database, charset,
        username and password (and optionally driver, port).
    autoconnect:
        Connect immediately (default). With False the instance starts
        disconnected and every helper raises NotConnectedError until
        connect() succeeds.
    backend:
        Prebuilt backend, overriding the one derived from ``config``.
    """

    def __init__(
        self,
        config: Optional[ConfigLike] = None,
        *,
        autoconnect: bool = True,
        backend: Any = None,
    ):
        self.config = _coerce_config(config)
        self._backend = ensure_backend(backend) if backend is not None else None
        self._conn: Optional[DBConnection] = None

        if self.config.enable_logging:
            logging.basicConfig(level=logging.INFO)

        if autoconnect:
            self.connect()

    @classmethod
    def from_env(cls, *, autoconnect: bool = True) -> "Database":
        """Construct a Database using QUICKDB_* environment variables."""
        return cls(load_config(), autoconnect=autoconnect)

    # ------------------------------------------------------------------
    # Connection
    # ------------------------------------------------------------------

    @property
    def connected(self) -> bool:
        return self._conn is not None

    def connect(self, config: Optional[ConfigLike] = None) -> None:
        """
        Open the connection and run the backend's schema bootstrap.

        Parameters
        ----------
        config:
            Optional replacement configuration; defaults to the one given
            at construction. It is kept only if the connection succeeds.

        Raises
        ------
        ConnectionFailed
            The driver refused the connection, rejected a config value, or
            the schema bootstrap failed. The instance stays disconnected
            with its previous configuration.
        """
        if self._conn is not None:
            raise QuickDBError("Database is already connected")

        if config is not None:
            cfg = _coerce_config(config)
            backend = _create_backend_from_config(cfg)
        else:
            cfg = self.config
            backend = self._backend or _create_backend_from_config(cfg)

        try:
            raw = backend.connect()
        except Exception as e:
            # Drivers validate some settings (charset, port) before any
            # network I/O and raise plain ValueError/AttributeError for them.
            logger.exception("Could not connect to %s", _describe(backend))
            raise ConnectionFailed(f"Could not connect to {_describe(backend)}: {e}") from e

        conn = DBConnection(raw, backend)
        init_schema = getattr(backend, "init_schema", None)
        if callable(init_schema):
            try:
                init_schema(raw)
            except Exception as e:
                logger.exception("Schema bootstrap failed on %s", _describe(backend))
                conn.close()
                raise ConnectionFailed(f"Schema bootstrap failed on {_describe(backend)}: {e}") from e

        self.config = cfg
        self._backend = backend
        self._conn = conn
        logger.info("Connected to %s", _describe(backend))

    def get_connection(self) -> Any:
        """
        Return the raw driver connection for anything the helpers do not
        cover.
        """
        return self._require_connection().raw

    def _require_connection(self) -> DBConnection:
        if self._conn is None:
            raise NotConnectedError("Database is not connected; call connect() first")
        return self._conn

    # ------------------------------------------------------------------
    # Raw statements
    # ------------------------------------------------------------------

    def query(self, sql: str, parameters: Optional[Mapping[str, Any]] = None) -> QueryResult:
        """
        Execute ``sql`` with named ``:placeholders`` bound from ``parameters``.

        Example
        -------
        >>> db.query("SELECT * FROM users WHERE id = :id AND name = :name",
        ...          {":id": 1, ":name": "Name"})

        Returns a successful QueryResult wrapping the executed cursor, or a
        failed one carrying the driver's reason. Driver errors are not
        raised here.
        """
        conn = self._require_connection()
        parameters = dict(parameters or {})

        try:
            cursor = conn.execute(sql, parameters)
        except self._backend.driver_errors as e:
            logger.warning("Query failed: %s | Query: %r", e, sql)
            return QueryResult.failure(str(e), e, sql=sql, parameters=parameters)

        return QueryResult.success(
            cursor,
            sql=sql,
            parameters=parameters,
            row_to_dict=conn.helpers.row_to_dict,
        )

    def fetch_all(self, sql: str, parameters: Optional[Mapping[str, Any]] = None) -> List[Dict[str, Any]]:
        """
        Run a query and return every row.

        Raises QueryFailed if the statement failed.
        """
        return self.query(sql, parameters).fetch_all()

    def fetch(self, sql: str, parameters: Optional[Mapping[str, Any]] = None) -> Optional[Dict[str, Any]]:
        """
        Run a query and return the first row, or None.

        Raises QueryFailed if the statement failed.
        """
        return self.query(sql, parameters).fetch()

    # ------------------------------------------------------------------
    # Shorthand helpers
    # ------------------------------------------------------------------

    def find(self, table: str, value: Any, column: str = "id") -> Optional[Dict[str, Any]]:
        """
        First row of ``table`` whose ``column`` equals ``value``, or None.
        """
        sql = f"SELECT * FROM {table} WHERE {column} = :{column} LIMIT 1"
        return self.fetch(sql, {f":{column}": value})

    def count(self, table: str, parameters: Optional[Mapping[str, Any]] = None) -> int:
        """
        ``SELECT count(*)`` over ``table``, filtered by equality on every
        key of ``parameters``.
        """
        parameters = dict(parameters or {})
        where = ""
        if parameters:
            where = " WHERE " + parameter_for_sets(parameters)

        result = self.query(f"SELECT count(*) AS aggregate FROM {table}{where}", parameters)
        return int(result.fetch_column() or 0)

    def insert(self, table: str, parameters: Optional[Mapping[str, Any]] = None) -> Optional[Any]:
        """
        Insert one row and return its new primary key.

        Returns None when no row was affected. Raises QueryFailed if the
        statement failed.
        """
        parameters = dict(parameters or {})
        result = self.query(self._insert_statement(table, parameters), parameters)
        cursor = result.unwrap()

        if cursor.rowcount > 0:
            return self._conn.last_insert_id(cursor)

        return None

    def insert_with_array(self, table: str, data: Optional[Mapping[str, Any]] = None) -> Optional[Any]:
        """
        insert() taking a plain ``{column: value}`` record.

        Example
        -------
        >>> db.insert_with_array("users", {"id": 1, "name": "Name"})
        """
        return self.insert(table, prefix_parameters(data or {}))

    def update(self, table: str, parameters: Optional[Mapping[str, Any]] = None) -> int:
        """
        ``UPDATE <table> SET col = :col,...`` and return the affected row count.

        There is no WHERE clause: every row of the table receives the given
        values.
        """
        parameters = dict(parameters or {})
        result = self.query(f"UPDATE {table} SET {parameter_for_sets(parameters)}", parameters)
        return result.row_count

    def update_with_array(self, table: str, data: Optional[Mapping[str, Any]] = None) -> int:
        """
        update() taking a plain ``{column: value}`` record.
        """
        return self.update(table, prefix_parameters(data or {}))

    def delete(self, table: str, parameters: Optional[Mapping[str, Any]] = None) -> int:
        """
        Shorthand delete, returning the affected row count.

        The statement is built as ``UPDATE FROM <table> [WHERE ...]``, which
        no supported dialect accepts, so every call raises QueryFailed. Use
        query() with an explicit ``DELETE FROM`` statement instead.
        """
        parameters = dict(parameters or {})
        where = ""
        if parameters:
            where = " WHERE " + parameter_for_sets(parameters)

        result = self.query(f"UPDATE FROM {table}{where}", parameters)
        return result.row_count

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _insert_statement(self, table: str, parameters: Mapping[str, Any]) -> str:
        backend = self._backend
        if backend is not None and backend.supports_insert_set:
            return f"INSERT INTO {table} SET {parameter_for_sets(parameters)}"

        columns = [strip_prefix(key) for key in parameters]
        if not columns:
            return f"INSERT INTO {table} DEFAULT VALUES"
        placeholders = ",".join(f":{c}" for c in columns)
        return f"INSERT INTO {table} ({','.join(columns)}) VALUES ({placeholders})"


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

def _coerce_config(config: Optional[ConfigLike]) -> DatabaseConfig:
    if config is None:
        return load_config()
    if isinstance(config, DatabaseConfig):
        return config
    return DatabaseConfig.from_mapping(config)


def _describe(backend: Any) -> str:
    describe = getattr(backend, "describe", None)
    return describe() if callable(describe) else type(backend).__name__


def _create_backend_from_config(config: DatabaseConfig):
    """
    Instantiate the appropriate driver backend for a given configuration.
    """
    if config.driver == "sqlite":
        return SQLiteBackend(config.database or ":memory:")

    if config.driver == "postgres":
        return PostgresBackend(config)

    return MySQLBackend(config)


# ---------------------------------------------------------------------------
# Convenience
# ---------------------------------------------------------------------------

def create_database(config: Optional[ConfigLike] = None, **kwargs: Any) -> Database:
    """
    Convenience constructor used by scripts.
    """
    return Database(config, **kwargs)


__all__ = [
    "Database",
    "create_database",
]
