"""
Database façade against a temporary SQLite file.
"""

import logging

import pytest

from quick_db import (
    ConnectionFailed,
    Database,
    DatabaseConfig,
    NotConnectedError,
    QueryFailed,
    QueryResult,
    QuickDBError,
    create_database,
)
from quick_db.db import SQLiteBackend


class TestQuery:

    def test_success_wraps_cursor(self, seeded_db):
        result = seeded_db.query("SELECT * FROM items WHERE name = :name", {":name": "pear"})

        assert isinstance(result, QueryResult)
        assert result.ok
        assert result.fetch()["price"] == 2.0

    def test_failure_is_returned_not_raised(self, db):
        result = db.query("SELECT * FROM missing_table")

        assert not result
        assert "missing_table" in result.reason
        assert result.error is not None

    def test_failure_unwrap_raises_typed_error(self, db):
        result = db.query("SELEC nonsense")

        with pytest.raises(QueryFailed) as info:
            result.unwrap()
        assert info.value.sql == "SELEC nonsense"

    def test_failure_is_logged(self, db, caplog):
        with caplog.at_level(logging.WARNING, logger="quick_db.core"):
            db.query("SELECT * FROM missing_table")
        assert "Query failed" in caplog.text


class TestFetch:

    def test_fetch_all_returns_dicts(self, seeded_db):
        rows = seeded_db.fetch_all("SELECT name FROM items ORDER BY id")
        assert rows == [{"name": "apple"}, {"name": "pear"}, {"name": "plum"}]

    def test_fetch_returns_first_row(self, seeded_db):
        row = seeded_db.fetch("SELECT * FROM items WHERE price > :p ORDER BY id", {":p": 1})
        assert row["name"] == "apple"

    def test_fetch_empty(self, db):
        assert db.fetch("SELECT * FROM items") is None

    def test_fetch_all_after_failed_query_raises(self, db):
        with pytest.raises(QueryFailed):
            db.fetch_all("SELECT * FROM missing_table")

    def test_fetch_after_failed_query_raises(self, db):
        with pytest.raises(QueryFailed):
            db.fetch("SELECT * FROM missing_table")


class TestShorthand:

    def test_insert_with_array_then_find(self, db):
        new_id = db.insert_with_array("items", {"name": "kiwi", "price": 3.0})

        row = db.find("items", "kiwi", "name")

        assert row["name"] == "kiwi"
        assert row["id"] == new_id

    def test_find_defaults_to_id(self, seeded_db):
        assert seeded_db.find("items", 2)["name"] == "pear"

    def test_find_missing(self, seeded_db):
        assert seeded_db.find("items", 999) is None

    def test_insert_returns_increasing_ids(self, db):
        first = db.insert("items", {":name": "a"})
        second = db.insert("items", {":name": "b"})
        assert second == first + 1

    def test_insert_failure_raises(self, db):
        with pytest.raises(QueryFailed):
            db.insert("items", {":no_such_column": 1})

    def test_count_all(self, seeded_db):
        total = len(seeded_db.fetch_all("SELECT * FROM items"))
        assert seeded_db.count("items", {}) == total == 3

    def test_count_with_filter(self, seeded_db):
        assert seeded_db.count("items", {":name": "plum"}) == 1
        assert seeded_db.count("items", {":name": "mango"}) == 0

    def test_count_with_two_filters_is_invalid_sql(self, seeded_db):
        # Filters are comma-joined like a SET list.
        with pytest.raises(QueryFailed):
            seeded_db.count("items", {":name": "plum", ":price": 0.5})

    def test_update_without_where_touches_every_row(self, seeded_db):
        affected = seeded_db.update("items", {":price": 9.0})

        assert affected == 3
        prices = {r["price"] for r in seeded_db.fetch_all("SELECT price FROM items")}
        assert prices == {9.0}

    def test_update_with_array(self, seeded_db):
        assert seeded_db.update_with_array("items", {"name": "same"}) == 3
        assert seeded_db.count("items", {":name": "same"}) == 3

    def test_delete_statement_is_rejected(self, seeded_db):
        with pytest.raises(QueryFailed) as info:
            seeded_db.delete("items", {":id": 1})

        assert info.value.sql.startswith("UPDATE FROM items")
        assert seeded_db.count("items") == 3

    def test_delete_without_filter_is_rejected(self, seeded_db):
        with pytest.raises(QueryFailed):
            seeded_db.delete("items")


class TestConnection:

    def test_helpers_before_connect_raise(self, db_path):
        database = Database(DatabaseConfig(driver="sqlite", database=db_path), autoconnect=False)

        assert not database.connected
        for call in (
            lambda: database.query("SELECT 1"),
            lambda: database.fetch_all("SELECT 1"),
            lambda: database.fetch("SELECT 1"),
            lambda: database.find("items", 1),
            lambda: database.count("items"),
            lambda: database.insert("items", {":name": "x"}),
            lambda: database.insert_with_array("items", {"name": "x"}),
            lambda: database.update("items", {":name": "x"}),
            lambda: database.update_with_array("items", {"name": "x"}),
            lambda: database.delete("items"),
            database.get_connection,
        ):
            with pytest.raises(NotConnectedError):
                call()

    def test_connect_later(self, db_path):
        database = Database({"driver": "sqlite", "database": db_path}, autoconnect=False)
        database.connect()

        assert database.connected
        assert database.fetch("SELECT 1 AS one") == {"one": 1}

    def test_second_connect_is_refused(self, db):
        with pytest.raises(QuickDBError):
            db.connect()

    def test_connection_failure_raises(self, tmp_path):
        bad_path = tmp_path / "missing_dir" / "x.db"

        with pytest.raises(ConnectionFailed):
            Database(DatabaseConfig(driver="sqlite", database=str(bad_path)))

    def test_get_connection_is_raw_driver_handle(self, db):
        import sqlite3

        assert isinstance(db.get_connection(), sqlite3.Connection)

    def test_statements_autocommit(self, db, db_path):
        db.insert_with_array("items", {"name": "durable"})

        other = Database(DatabaseConfig(driver="sqlite", database=db_path))
        assert other.find("items", "durable", "name") is not None

    def test_schema_bootstrap_runs_on_connect(self, db_path):
        backend = SQLiteBackend(db_path, schema="CREATE TABLE notes (id INTEGER PRIMARY KEY, body TEXT);")
        database = Database(DatabaseConfig(driver="sqlite", database=db_path), backend=backend)

        assert database.insert_with_array("notes", {"body": "hi"}) == 1
        assert database.count("notes") == 1

    def test_broken_schema_leaves_instance_disconnected(self, db_path):
        backend = SQLiteBackend(db_path, schema="CREATE TABLE broken (")
        database = Database(DatabaseConfig(driver="sqlite", database=db_path), autoconnect=False, backend=backend)

        with pytest.raises(ConnectionFailed):
            database.connect()
        assert not database.connected
        with pytest.raises(NotConnectedError):
            database.count("broken")

    def test_failed_reconnect_keeps_previous_config(self, db_path, tmp_path):
        good = DatabaseConfig(driver="sqlite", database=db_path)
        bad = DatabaseConfig(driver="sqlite", database=str(tmp_path / "missing_dir" / "x.db"))
        database = Database(good, autoconnect=False)

        with pytest.raises(ConnectionFailed):
            database.connect(bad)

        assert database.config is good
        assert not database.connected
        database.connect()
        assert database.fetch("SELECT 1 AS one") == {"one": 1}

    def test_connect_with_replacement_config(self, db_path):
        database = Database(DatabaseConfig(driver="sqlite", database=":memory:"), autoconnect=False)
        replacement = DatabaseConfig(driver="sqlite", database=db_path)

        database.connect(replacement)

        assert database.config is replacement


class TestConstructors:

    def test_from_env(self, monkeypatch, db_path):
        monkeypatch.setenv("QUICKDB_DRIVER", "sqlite")
        monkeypatch.setenv("QUICKDB_DATABASE", db_path)
        monkeypatch.delenv("QUICKDB_PORT", raising=False)
        monkeypatch.delenv("QUICKDB_ENABLE_LOGGING", raising=False)

        database = Database.from_env()

        assert database.connected
        assert database.config.database == db_path
        assert database.fetch("SELECT 2 AS two") == {"two": 2}

    def test_from_env_without_connecting(self, monkeypatch, db_path):
        monkeypatch.setenv("QUICKDB_DRIVER", "sqlite")
        monkeypatch.setenv("QUICKDB_DATABASE", db_path)
        monkeypatch.delenv("QUICKDB_PORT", raising=False)

        assert not Database.from_env(autoconnect=False).connected

    def test_create_database(self, db_path):
        database = create_database({"driver": "sqlite", "database": db_path})

        assert isinstance(database, Database)
        assert database.count("sqlite_master") == 0

    def test_create_database_reads_env_by_default(self, monkeypatch, db_path):
        monkeypatch.setenv("QUICKDB_DRIVER", "sqlite3")
        monkeypatch.setenv("QUICKDB_DATABASE", db_path)
        monkeypatch.delenv("QUICKDB_PORT", raising=False)

        database = create_database(autoconnect=False)

        assert database.config.driver == "sqlite"
        assert not database.connected
