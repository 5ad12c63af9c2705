#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Unit tests for node tree utilities."""

import pytest

from lessonmark.ast import (
    CompositeElement,
    Element,
    ErrorPlaceholder,
    Fragment,
    ImageTag,
    KeyLabel,
    Text,
    VerbatimText,
    extract_text,
    find_nodes,
)


@pytest.mark.unit
class TestExtractText:
    """Tests for plain text extraction."""

    def test_single_node(self):
        assert extract_text(Text("Hello")) == "Hello"

    def test_nested(self):
        tree = CompositeElement(
            "div",
            (Text("Press"), KeyLabel("Esc"), Fragment((VerbatimText("now"),))),
        )

        assert extract_text(tree) == "Press Esc now"

    def test_joiner(self):
        assert extract_text([Text("a"), Text("b")], joiner="") == "ab"

    def test_element_string_content(self):
        assert extract_text(Element("h3", "Title")) == "Title"

    def test_embeds_are_skipped(self):
        assert extract_text([ImageTag(attrs={"src": "a.png"}), Text("caption")]) == "caption"


@pytest.mark.unit
class TestFindNodes:
    """Tests for typed node queries."""

    def test_find_error_placeholders(self):
        errors = [
            ErrorPlaceholder(tag_name="img", message="a"),
            ErrorPlaceholder(tag_name="edit", message="b"),
        ]
        nodes = [
            Text("x"),
            CompositeElement("div", (errors[0], Fragment((errors[1],)))),
        ]

        assert find_nodes(nodes, ErrorPlaceholder) == errors

    def test_no_matches(self):
        assert find_nodes([Text("x")], KeyLabel) == []
