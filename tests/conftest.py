import pytest

from quick_db import Database, DatabaseConfig


SCHEMA = """
CREATE TABLE items (
    id    INTEGER PRIMARY KEY AUTOINCREMENT,
    name  TEXT NOT NULL,
    price REAL DEFAULT 0
);
"""


@pytest.fixture()
def db_path(tmp_path):
    return str(tmp_path / "quick_db_test.db")


@pytest.fixture()
def db(db_path):
    database = Database(DatabaseConfig(driver="sqlite", database=db_path))
    database.get_connection().executescript(SCHEMA)
    yield database
    database.get_connection().close()


@pytest.fixture()
def seeded_db(db):
    for name, price in (("apple", 1.5), ("pear", 2.0), ("plum", 0.5)):
        db.insert_with_array("items", {"name": name, "price": price})
    return db
