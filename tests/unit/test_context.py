"""Unit tests for the parse context and metadata accumulator."""

import dataclasses

import pytest

from lessonmark.context import Metadata, OrderedStringSet, ParseContext
from lessonmark.options import ParserOptions


@pytest.mark.unit
class TestOrderedStringSet:
    """Tests for the insertion-ordered set."""

    def test_add_reports_new_items(self):
        libs = OrderedStringSet()

        assert libs.add("d3") is True
        assert libs.add("d3") is False
        assert len(libs) == 1

    def test_keeps_first_seen_order(self):
        libs = OrderedStringSet(["b", "a", "b", "c", "a"])

        assert list(libs) == ["b", "a", "c"]
        assert "c" in libs
        assert "z" not in libs

    def test_equality_depends_on_order(self):
        assert OrderedStringSet(["a", "b"]) == OrderedStringSet(["a", "b"])
        assert OrderedStringSet(["a", "b"]) != OrderedStringSet(["b", "a"])


@pytest.mark.unit
class TestMetadata:
    """Tests for the metadata accumulator."""

    def test_defaults(self):
        metadata = Metadata()

        assert metadata.to_dict() == {"head": [], "libs": [], "importance": None}

    def test_accumulates(self):
        metadata = Metadata()
        metadata.append_head("<style></style>")
        metadata.append_head("<script></script>")
        metadata.add_lib("lodash")
        metadata.add_lib("lodash")
        metadata.set_importance(4)

        assert metadata.to_dict() == {
            "head": ["<style></style>", "<script></script>"],
            "libs": ["lodash"],
            "importance": 4,
        }

    def test_to_dict_is_a_copy(self):
        metadata = Metadata()
        exported = metadata.to_dict()
        exported["head"].append("x")

        assert metadata.head == []


@pytest.mark.unit
class TestParseContext:
    """Tests for the per-document context."""

    def test_is_immutable(self):
        context = ParseContext(trusted=True)

        with pytest.raises(dataclasses.FrozenInstanceError):
            context.trusted = False  # type: ignore[misc]

    def test_nested_shares_metadata(self):
        context = ParseContext(trusted=False)
        child = context.nested()

        assert child.depth == 1
        assert context.depth == 0
        assert child.metadata is context.metadata
        assert child.trusted is False

    def test_static_host_comes_from_options(self):
        options = ParserOptions(static_host="https://cdn.example", resource_web_root="/a")
        context = ParseContext(trusted=True, options=options)

        assert context.static_host == "https://cdn.example"
        assert context.resource_web_root == "/a"

    def test_fresh_metadata_per_context(self):
        assert ParseContext(trusted=True).metadata is not ParseContext(trusted=True).metadata
