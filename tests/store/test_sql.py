"""Tests for SQL statement construction."""

import json

import pytest

from messagedb_store.store.messages import WriteMessage
from messagedb_store.store.sql import (
    SQL_GET_CATEGORY,
    SQL_GET_LAST,
    SQL_GET_STREAM,
    SQL_PUT,
    build_append,
    build_read,
    build_read_last,
    constrain_condition,
)


class TestConstrainCondition:
    """Tests for constrain_condition function."""

    def test_none_stays_none(self):
        assert constrain_condition(None) is None

    def test_wraps_condition_in_parentheses(self):
        assert constrain_condition("position > 2 OR type = 'x'") == "(position > 2 OR type = 'x')"


class TestBuildRead:
    """Tests for build_read function."""

    def test_category_uses_category_function(self):
        statement = build_read("cart")

        assert statement == SQL_GET_CATEGORY
        assert "get_category_messages" in statement

    def test_entity_stream_uses_stream_function(self):
        statement = build_read("cart-123")

        assert statement == SQL_GET_STREAM
        assert "get_stream_messages" in statement

    @pytest.mark.parametrize("statement", [SQL_GET_CATEGORY, SQL_GET_STREAM])
    def test_read_statements_take_four_parameters(self, statement):
        assert statement.count("%s") == 4

    def test_category_binds_condition_by_name(self):
        assert "condition => %s" in SQL_GET_CATEGORY

    @pytest.mark.parametrize("statement", [SQL_GET_CATEGORY, SQL_GET_STREAM, SQL_GET_LAST])
    def test_columns_in_fixed_order(self, statement):
        columns = "id, stream_name, type, position, global_position, data, metadata, time"
        assert f"SELECT {columns} FROM" in statement


class TestBuildReadLast:
    """Tests for build_read_last function."""

    def test_single_parameter(self):
        statement = build_read_last("cart-123")

        assert statement == SQL_GET_LAST
        assert "get_last_stream_message" in statement
        assert statement.count("%s") == 1


class TestBuildAppend:
    """Tests for build_append function."""

    def test_statement_and_parameters(self):
        message = WriteMessage(
            type="Added", data={"qty": 3}, metadata={"trace": "t1"}, id="msg-1"
        )

        statement, params = build_append(message, "cart-123", 0)

        assert statement == SQL_PUT
        assert "write_message" in statement
        assert statement.count("%s") == 6
        assert params[0] == "msg-1"
        assert params[1] == "cart-123"
        assert params[2] == "Added"
        assert json.loads(params[3]) == {"qty": 3}
        assert json.loads(params[4]) == {"trace": "t1"}
        assert params[5] == 0

    def test_no_expected_version_and_no_metadata(self):
        message = WriteMessage(type="Added", data={"qty": 3}, id="msg-1")

        _, params = build_append(message, "cart-123", None)

        assert params[4] is None
        assert params[5] is None

    def test_requires_resolved_id(self):
        with pytest.raises(ValueError, match="message id must be resolved"):
            build_append(WriteMessage(type="Added"), "cart-123", None)
