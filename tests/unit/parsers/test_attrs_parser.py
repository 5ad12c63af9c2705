#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Unit tests for the tag attribute parser."""

import pytest

from lessonmark.parsers.attrs import AttributeParser, parse_attributes


@pytest.mark.unit
class TestAttributeParser:
    """Tests for parsing raw attribute strings."""

    def test_empty(self):
        assert parse_attributes("") == {}

    def test_quoted_values(self):
        assert parse_attributes("src=\"task/a b\" title='It is \"fine\"'") == {
            "src": "task/a b",
            "title": 'It is "fine"',
        }

    def test_bare_value(self):
        assert parse_attributes("height=300") == {"height": "300"}

    def test_flag_maps_to_empty_string(self):
        assert AttributeParser('src="demo" play link').parse() == {"src": "demo", "play": "", "link": ""}

    def test_spaces_around_equals(self):
        assert parse_attributes('src = "demo"') == {"src": "demo"}

    def test_order_is_preserved(self):
        assert list(parse_attributes("zip play src=x height=1")) == ["zip", "play", "src", "height"]

    def test_first_duplicate_wins(self):
        assert parse_attributes('src="first" src="second"') == {"src": "first"}

    def test_hyphenated_names(self):
        assert parse_attributes('data-id="7"') == {"data-id": "7"}

    def test_none_is_treated_as_empty(self):
        assert AttributeParser(None).parse() == {}
