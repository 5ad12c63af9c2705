#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Unit tests for node tree serialization."""

import json

import pytest

from lessonmark.ast import (
    CompositeElement,
    CutMarker,
    Element,
    ErrorPlaceholder,
    Fragment,
    ImageTag,
    KeyLabel,
    SourceEmbed,
    Text,
    ast_to_dict,
    ast_to_json,
    dict_to_ast,
    json_to_ast,
    result_to_dict,
)
from lessonmark.constants import AST_SCHEMA_VERSION
from lessonmark.context import Metadata


@pytest.mark.unit
class TestSerialization:
    """Tests for converting nodes to plain data."""

    def test_text(self):
        assert ast_to_dict(Text("Hello")) == {"node_type": "Text", "content": "Hello"}

    def test_cut_marker(self):
        assert ast_to_dict(CutMarker()) == {"node_type": "CutMarker"}

    def test_composite_element(self):
        node = CompositeElement("div", (Text("a"), KeyLabel("Esc")), {"class": "summary"})

        assert ast_to_dict(node) == {
            "node_type": "CompositeElement",
            "tag": "div",
            "children": [
                {"node_type": "Text", "content": "a"},
                {"node_type": "KeyLabel", "text": "Esc"},
            ],
            "attrs": {"class": "summary"},
        }

    def test_element_with_node_content(self):
        node = Element("b", Text("bold"))

        assert ast_to_dict(node)["content"] == {"node_type": "Text", "content": "bold"}

    def test_source_embed_without_src(self):
        data = ast_to_dict(SourceEmbed(kind="sql", body="SELECT 1"))

        assert "src" not in data
        assert data == {"node_type": "SourceEmbed", "kind": "sql", "body": "SELECT 1", "params": {}}

    def test_attribute_order_is_preserved_in_json(self):
        node = ImageTag(attrs={"src": "a.png", "width": "10", "height": "5"})
        text = ast_to_json(node)

        assert text.index('"src"') < text.index('"width"') < text.index('"height"')

    def test_ast_to_json_has_schema_version(self):
        data = json.loads(ast_to_json(Text("x")))

        assert data["schema_version"] == AST_SCHEMA_VERSION

    def test_result_to_dict(self):
        metadata = Metadata()
        metadata.add_lib("d3")
        data = result_to_dict([Text("a")], metadata)

        assert data == {
            "schema_version": AST_SCHEMA_VERSION,
            "nodes": [{"node_type": "Text", "content": "a"}],
            "metadata": {"head": [], "libs": ["d3"], "importance": None},
        }


@pytest.mark.unit
class TestDeserialization:
    """Tests for rebuilding nodes from plain data."""

    def test_round_trip_of_nested_tree(self):
        tree = CompositeElement(
            "div",
            (
                Fragment((Text("a"), Element("b", Text("c")))),
                ErrorPlaceholder(tag_name="img", message="img: attribute required src"),
                SourceEmbed(kind="js", body="x", src="task.js", params={"src": "task.js"}),
            ),
            {"class": "hide-close"},
        )

        assert json_to_ast(ast_to_json(tree)) == tree

    def test_missing_node_type(self):
        with pytest.raises(ValueError, match="node_type"):
            dict_to_ast({"content": "x"})

    def test_unknown_node_type_strict(self):
        with pytest.raises(ValueError, match="Unknown node type"):
            dict_to_ast({"node_type": "Marquee"})

    def test_unknown_node_type_lenient(self):
        node = dict_to_ast({"node_type": "Marquee"}, strict_mode=False)

        assert node == Text("[Unknown node type: Marquee]")

    def test_invalid_json(self):
        with pytest.raises(ValueError, match="Invalid JSON"):
            json_to_ast("{not json")

    def test_unsupported_schema_version(self):
        with pytest.raises(ValueError, match="schema version"):
            json_to_ast('{"schema_version": 99, "node_type": "CutMarker"}')
