"""
Placeholder and parameter-set helpers.
"""

import pytest

from quick_db.db.helpers import (
    adapt_placeholders,
    bind_parameters,
    parameter_for_sets,
    prefix_parameters,
    row_to_dict,
    to_pyformat,
)


class TestParameterForSets:

    def test_joins_in_input_order(self):
        assert parameter_for_sets({":a": 1, ":b": 2}) == "a = :a,b = :b"

    def test_order_follows_insertion(self):
        assert parameter_for_sets({":b": 2, ":a": 1}) == "b = :b,a = :a"

    def test_empty(self):
        assert parameter_for_sets({}) == ""

    def test_unprefixed_key_gets_marker(self):
        assert parameter_for_sets({"name": "x"}) == "name = :name"

    def test_strips_every_leading_marker(self):
        assert parameter_for_sets({"::a": 1}) == "a = :a"


def test_prefix_parameters():
    assert prefix_parameters({"id": 1, "name": "Name"}) == {":id": 1, ":name": "Name"}


def test_bind_parameters_strips_marker():
    assert bind_parameters({":id": 1, "name": "x"}) == {"id": 1, "name": "x"}
    assert bind_parameters({"::id": 1}) == {"id": 1}
    assert bind_parameters(None) == {}


class TestPlaceholderRewrite:

    def test_named_passthrough(self):
        sql = "SELECT * FROM t WHERE id = :id"
        assert adapt_placeholders(sql, "named") == sql

    def test_pyformat(self):
        assert (
            to_pyformat("UPDATE t SET a = :a,b = :b")
            == "UPDATE t SET a = %(a)s,b = %(b)s"
        )

    def test_pyformat_escapes_percent(self):
        assert (
            to_pyformat("SELECT * FROM t WHERE name LIKE '%x' AND id = :id")
            == "SELECT * FROM t WHERE name LIKE '%%x' AND id = %(id)s"
        )

    def test_pyformat_keeps_casts(self):
        assert to_pyformat("SELECT :v::text") == "SELECT %(v)s::text"

    def test_unknown_style(self):
        with pytest.raises(ValueError):
            adapt_placeholders("SELECT 1", "qmark")


class TestRowToDict:

    def test_none(self):
        assert row_to_dict(None) == {}

    def test_dict_is_copied(self):
        row = {"id": 1}
        out = row_to_dict(row)
        assert out == row and out is not row

    def test_tuple_fallback(self):
        assert row_to_dict((5, "x")) == {0: 5, 1: "x"}
