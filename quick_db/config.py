"""
Connection configuration for quick_db.

This module centralizes configuration for:

    - driver selection (mysql, sqlite, postgres)
    - connection credentials and charset
    - feature flags (logging)

It provides:
    DatabaseConfig  – structured config object
    load_config()   – load from environment variables or defaults
"""

from __future__ import annotations

from dataclasses import dataclass
import os
from typing import Any, Mapping, Optional

from .errors import ConfigurationError


SUPPORTED_DRIVERS = ("mysql", "sqlite", "postgres")

_DRIVER_ALIASES = {
    "mysql": "mysql",
    "mariadb": "mysql",
    "sqlite": "sqlite",
    "sqlite3": "sqlite",
    "postgres": "postgres",
    "postgresql": "postgres",
    "psql": "postgres",
}


@dataclass
class DatabaseConfig:
    """
    Flat connection record.

    Attributes
    ----------
    host:
        Database server host name. Ignored by the sqlite driver.

    database:
        Database (schema) name. For sqlite, the path of the database
        file, or ":memory:".

    charset:
        Client character set passed to the driver.

    username, password:
        Credentials. Never written to logs.

    driver:
        "mysql" (default), "sqlite" or "postgres".

    port:
        Optional server port; the driver default is used when unset.

    enable_logging:
        Whether to configure basic INFO logging on construction.
    """

    host: str = "localhost"
    database: str = ""
    charset: str = "utf8"
    username: str = ""
    password: str = ""

    driver: str = "mysql"
    port: Optional[int] = None

    enable_logging: bool = False

    def __post_init__(self) -> None:
        self.driver = normalize_driver(self.driver)
        self.port = parse_port(self.port)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "DatabaseConfig":
        """
        Build a config from a plain record such as::

            {"host": "localhost", "database": "db", "charset": "utf8",
             "username": "user", "password": "pass"}

        Unknown keys are rejected so typos do not silently fall back to
        defaults.
        """
        known = set(cls.__dataclass_fields__)
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigurationError(f"Unknown configuration keys: {unknown}")

        return cls(**dict(data))

    def __repr__(self) -> str:
        return (
            f"DatabaseConfig(driver={self.driver!r}, host={self.host!r}, "
            f"port={self.port!r}, database={self.database!r}, "
            f"charset={self.charset!r}, username={self.username!r})"
        )


def normalize_driver(name: Optional[str]) -> str:
    """
    Map a driver name or alias to its canonical form.

    Raises
    ------
    ConfigurationError
        If the name is not a supported driver.
    """
    key = (name or "").strip().lower()
    try:
        return _DRIVER_ALIASES[key]
    except KeyError:
        raise ConfigurationError(
            f"Unsupported quick_db driver: {name!r} (expected one of {SUPPORTED_DRIVERS})"
        ) from None


def parse_port(value: Any) -> Optional[int]:
    """
    Coerce a port from config or the environment to an int.

    None and "" mean "driver default".

    Raises
    ------
    ConfigurationError
        If the value is not an integer in 1..65535.
    """
    if value is None or value == "":
        return None
    try:
        port = int(value)
    except (TypeError, ValueError) as e:
        raise ConfigurationError(f"Invalid port: {value!r}") from e
    if not 0 < port < 65536:
        raise ConfigurationError(f"Port out of range: {port}")
    return port


def load_config() -> DatabaseConfig:
    """
    Load DatabaseConfig from environment variables, falling back to defaults.

    Recognized variables:
        QUICKDB_DRIVER          (mysql|sqlite|postgres)
        QUICKDB_HOST
        QUICKDB_PORT
        QUICKDB_DATABASE        (database name, or file path for sqlite)
        QUICKDB_CHARSET
        QUICKDB_USERNAME
        QUICKDB_PASSWORD
        QUICKDB_ENABLE_LOGGING  ("true" / "false" / "1" / "0")

    Returns
    -------
    DatabaseConfig
    """

    def _env_flag(name: str, default: bool) -> bool:
        val = os.getenv(name)
        if val is None:
            return default
        return val.strip().lower() in ("1", "true", "yes", "on")

    return DatabaseConfig(
        host=os.getenv("QUICKDB_HOST", "localhost"),
        database=os.getenv("QUICKDB_DATABASE", ""),
        charset=os.getenv("QUICKDB_CHARSET", "utf8"),
        username=os.getenv("QUICKDB_USERNAME", ""),
        password=os.getenv("QUICKDB_PASSWORD", ""),

        driver=os.getenv("QUICKDB_DRIVER", "mysql"),
        port=os.getenv("QUICKDB_PORT"),

        enable_logging=_env_flag(
            "QUICKDB_ENABLE_LOGGING",
            default=False
        ),
    )


__all__ = [
    "DatabaseConfig",
    "SUPPORTED_DRIVERS",
    "load_config",
    "normalize_driver",
    "parse_port",
]
