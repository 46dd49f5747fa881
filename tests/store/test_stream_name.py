"""Tests for stream name utilities."""

import uuid

import pytest

from messagedb_store.store.stream_name import (
    get_cardinal_id,
    get_category,
    get_entity_name,
    get_id,
    get_types,
    is_category,
    stream_name,
)


class TestIsCategory:
    """Tests for is_category function."""

    @pytest.mark.parametrize("name", ["cart", "cart:command", "cart:command+position"])
    def test_name_without_id_is_category(self, name):
        assert is_category(name) is True

    @pytest.mark.parametrize(
        "name",
        ["cart-123", "cart:command-123", "cart-123+456", f"cart-{uuid.uuid4()}"],
    )
    def test_name_with_id_is_not_category(self, name):
        assert is_category(name) is False


class TestGetCategory:
    """Tests for get_category function."""

    def test_entity_stream(self):
        assert get_category("cart-123") == "cart"

    def test_category_stream_is_returned_unchanged(self):
        assert get_category("cart") == "cart"

    def test_keeps_types(self):
        assert get_category("cart:command-123") == "cart:command"

    def test_uuid_id(self):
        assert get_category(f"cart-{uuid.uuid4()}") == "cart"


class TestGetId:
    """Tests for get_id and get_cardinal_id functions."""

    def test_simple_id(self):
        assert get_id("cart-123") == "123"

    def test_uuid_id_keeps_dashes(self):
        stream_id = str(uuid.uuid4())
        assert get_id(f"cart-{stream_id}") == stream_id

    def test_category_has_no_id(self):
        assert get_id("cart") is None

    def test_cardinal_id_of_compound_id(self):
        assert get_cardinal_id("cart-123+456") == "123"

    def test_cardinal_id_of_simple_id(self):
        assert get_cardinal_id("cart-123") == "123"

    def test_category_has_no_cardinal_id(self):
        assert get_cardinal_id("cart") is None


class TestGetTypes:
    """Tests for get_types and get_entity_name functions."""

    def test_no_types(self):
        assert get_types("cart-123") == []

    def test_single_type(self):
        assert get_types("cart:command-123") == ["command"]

    def test_multiple_types(self):
        assert get_types("cart:command+position") == ["command", "position"]

    def test_entity_name_strips_types(self):
        assert get_entity_name("cart:command+position-123") == "cart"


class TestStreamName:
    """Tests for stream_name composer."""

    def test_entity_stream(self):
        assert stream_name("cart", "123") == "cart-123"

    def test_category_stream(self):
        assert stream_name("cart") == "cart"

    def test_with_types(self):
        assert stream_name("cart", "123", types=["command", "position"]) == (
            "cart:command+position-123"
        )

    def test_category_with_types(self):
        name = stream_name("cart", types=["command"])
        assert name == "cart:command"
        assert is_category(name)

    def test_rejects_empty_category(self):
        with pytest.raises(ValueError, match="category cannot be empty"):
            stream_name("", "123")

    def test_rejects_whitespace_only_category(self):
        with pytest.raises(ValueError, match="category cannot be empty"):
            stream_name("   ", "123")

    def test_rejects_dash_in_category(self):
        with pytest.raises(ValueError, match="category cannot contain '-'"):
            stream_name("my-cart", "123")

    def test_rejects_colon_in_category(self):
        with pytest.raises(ValueError, match="category cannot contain ':'"):
            stream_name("cart:v1", "123")

    @pytest.mark.parametrize("bad_type", ["v-2", "a:b", "a+b"])
    def test_rejects_separator_in_type(self, bad_type):
        with pytest.raises(ValueError, match="type cannot contain"):
            stream_name("cart", types=[bad_type])

    @pytest.mark.parametrize("bad_type", ["", "  "])
    def test_rejects_empty_type(self, bad_type):
        with pytest.raises(ValueError, match="type cannot be empty"):
            stream_name("cart", "123", types=["command", bad_type])

    def test_typed_category_stays_a_category(self):
        name = stream_name("cart", types=["command", "position"])

        assert is_category(name)
        assert get_id(name) is None
        assert get_types(name) == ["command", "position"]

    def test_rejects_empty_id(self):
        with pytest.raises(ValueError, match="stream_id cannot be empty"):
            stream_name("cart", " ")

    def test_round_trip_through_helpers(self):
        name = stream_name("cart", "abc+def", types=["command"])

        assert get_category(name) == "cart:command"
        assert get_entity_name(name) == "cart"
        assert get_id(name) == "abc+def"
        assert get_cardinal_id(name) == "abc"
        assert get_types(name) == ["command"]
