#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/lessonmark/ast/__init__.py
"""Node tree module for parsed lesson content.

The tag parser produces a tree of presentation nodes; a renderer outside this
package turns that tree into markup. Keeping the two apart lets the same
parsed lesson be rendered for the live site and for static export.

The module consists of several components:

- nodes: node classes representing the presentation tree
- visitors: visitor base class for renderers and traversal
- serialization: JSON serialization and deserialization of node trees
- utils: text extraction and node queries

Examples
--------
    >>> from lessonmark.ast import CompositeElement, Text
    >>> box = CompositeElement("div", (Text("Hello"),), {"class": "summary"})
    >>> box.has_children()
    True

"""

from __future__ import annotations

from lessonmark.ast.nodes import (
    CompositeElement,
    CutMarker,
    EditLink,
    Element,
    ErrorPlaceholder,
    ExampleEmbed,
    Fragment,
    ImageTag,
    KeyLabel,
    Node,
    SourceEmbed,
    Text,
    VerbatimText,
    get_node_children,
)
from lessonmark.ast.serialization import ast_to_dict, ast_to_json, dict_to_ast, json_to_ast, result_to_dict
from lessonmark.ast.utils import extract_text, find_nodes
from lessonmark.ast.visitors import NodeCollector, NodeVisitor

__all__ = [
    # Base
    "Node",
    # Markup nodes
    "Text",
    "VerbatimText",
    "Element",
    "CompositeElement",
    "Fragment",
    # Tag nodes
    "SourceEmbed",
    "ImageTag",
    "EditLink",
    "CutMarker",
    "KeyLabel",
    "ExampleEmbed",
    # Error nodes
    "ErrorPlaceholder",
    # Node helpers
    "get_node_children",
    # Visitors
    "NodeVisitor",
    "NodeCollector",
    # Serialization
    "ast_to_dict",
    "ast_to_json",
    "dict_to_ast",
    "json_to_ast",
    "result_to_dict",
    # Utilities
    "extract_text",
    "find_nodes",
]
