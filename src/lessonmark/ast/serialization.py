#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/lessonmark/ast/serialization.py
"""JSON serialization and deserialization for node trees.

This module converts node trees to and from plain dictionaries and JSON, so a
parsed document can be handed to a renderer running in another process, or
inspected from the command line.

Examples
--------
Serialize a tree to JSON:

    >>> from lessonmark.ast import CompositeElement, Text
    >>> from lessonmark.ast.serialization import ast_to_json
    >>>
    >>> box = CompositeElement("div", (Text("Hello"),), {"class": "summary"})
    >>> json_str = ast_to_json(box, indent=2)

Deserialize JSON back to a tree:

    >>> from lessonmark.ast.serialization import json_to_ast
    >>> json_to_ast(json_str) == box
    True

"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, Any, Callable, Sequence

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
)
from lessonmark.constants import AST_SCHEMA_VERSION

if TYPE_CHECKING:
    from lessonmark.context import Metadata

logger = logging.getLogger(__name__)


def _serialize_element(node: Element) -> dict[str, Any]:
    """Serialize an Element node."""
    content: Any = ast_to_dict(node.content) if isinstance(node.content, Node) else node.content
    return {"node_type": "Element", "tag": node.tag, "content": content, "attrs": dict(node.attrs)}


def _serialize_composite_element(node: CompositeElement) -> dict[str, Any]:
    """Serialize a CompositeElement node."""
    return {
        "node_type": "CompositeElement",
        "tag": node.tag,
        "children": [ast_to_dict(child) for child in node.children],
        "attrs": dict(node.attrs),
    }


def _serialize_source_embed(node: SourceEmbed) -> dict[str, Any]:
    """Serialize a SourceEmbed node."""
    result: dict[str, Any] = {"node_type": "SourceEmbed", "kind": node.kind, "body": node.body}
    if node.src is not None:
        result["src"] = node.src
    result["params"] = dict(node.params)
    return result


_SERIALIZATION_DISPATCH: dict[type, Callable[[Any], dict[str, Any]]] = {
    Text: lambda n: {"node_type": "Text", "content": n.content},
    VerbatimText: lambda n: {"node_type": "VerbatimText", "content": n.content},
    Element: _serialize_element,
    CompositeElement: _serialize_composite_element,
    Fragment: lambda n: {"node_type": "Fragment", "children": [ast_to_dict(child) for child in n.children]},
    SourceEmbed: _serialize_source_embed,
    ImageTag: lambda n: {"node_type": "ImageTag", "attrs": dict(n.attrs), "is_figure": n.is_figure},
    EditLink: lambda n: {"node_type": "EditLink", "body": n.body, "attrs": dict(n.attrs)},
    CutMarker: lambda n: {"node_type": "CutMarker"},
    KeyLabel: lambda n: {"node_type": "KeyLabel", "text": n.text},
    ExampleEmbed: lambda n: {"node_type": "ExampleEmbed", "params": dict(n.params)},
    ErrorPlaceholder: lambda n: {"node_type": "ErrorPlaceholder", "tag_name": n.tag_name, "message": n.message},
}


def ast_to_dict(node: Node) -> dict[str, Any]:
    """Convert a node to a dictionary representation.

    Parameters
    ----------
    node : Node
        The node to convert

    Returns
    -------
    dict
        Dictionary representation of the node

    Raises
    ------
    ValueError
        If the node type has no serializer

    Examples
    --------
    >>> ast_to_dict(Text("Hello"))
    {'node_type': 'Text', 'content': 'Hello'}

    """
    serializer = _SERIALIZATION_DISPATCH.get(type(node))
    if serializer:
        return serializer(node)

    raise ValueError(f"Unknown node type for serialization: {type(node).__name__}")


def result_to_dict(nodes: Sequence[Node], metadata: Metadata) -> dict[str, Any]:
    """Build the hand-off record for a parsed document.

    Parameters
    ----------
    nodes : sequence of Node
        Top-level nodes of the document
    metadata : Metadata
        Metadata accumulated while parsing the document

    Returns
    -------
    dict
        ``{"schema_version", "nodes", "metadata"}``

    """
    return {
        "schema_version": AST_SCHEMA_VERSION,
        "nodes": [ast_to_dict(node) for node in nodes],
        "metadata": metadata.to_dict(),
    }


def ast_to_json(node: Node, indent: int | None = None) -> str:
    """Serialize a node to a JSON string with schema versioning.

    Parameters
    ----------
    node : Node
        The node to serialize
    indent : int or None, default = None
        Number of spaces for indentation (None for compact format)

    Returns
    -------
    str
        JSON string representation with schema version

    """
    versioned_dict = {"schema_version": AST_SCHEMA_VERSION, **ast_to_dict(node)}
    return json.dumps(versioned_dict, indent=indent, ensure_ascii=False)


# Helper functions for deserialization


def _children(data: dict[str, Any]) -> tuple[Node, ...]:
    return tuple(dict_to_ast(child) for child in data.get("children", []))


def _deserialize_element(data: dict[str, Any]) -> Element:
    content = data.get("content", "")
    if isinstance(content, dict):
        content = dict_to_ast(content)
    return Element(tag=data["tag"], content=content, attrs=dict(data.get("attrs", {})))


_DESERIALIZATION_DISPATCH: dict[str, Callable[[dict[str, Any]], Node]] = {
    "Text": lambda d: Text(content=d["content"]),
    "VerbatimText": lambda d: VerbatimText(content=d["content"]),
    "Element": _deserialize_element,
    "CompositeElement": lambda d: CompositeElement(tag=d["tag"], children=_children(d), attrs=dict(d.get("attrs", {}))),
    "Fragment": lambda d: Fragment(children=_children(d)),
    "SourceEmbed": lambda d: SourceEmbed(
        kind=d["kind"], body=d["body"], src=d.get("src"), params=dict(d.get("params", {}))
    ),
    "ImageTag": lambda d: ImageTag(attrs=dict(d["attrs"]), is_figure=bool(d.get("is_figure", False))),
    "EditLink": lambda d: EditLink(body=d["body"], attrs=dict(d["attrs"])),
    "CutMarker": lambda d: CutMarker(),
    "KeyLabel": lambda d: KeyLabel(text=d["text"]),
    "ExampleEmbed": lambda d: ExampleEmbed(params=dict(d["params"])),
    "ErrorPlaceholder": lambda d: ErrorPlaceholder(tag_name=d["tag_name"], message=d["message"]),
}


def dict_to_ast(data: dict[str, Any], strict_mode: bool = True) -> Node:
    """Convert a dictionary representation back to a node.

    Parameters
    ----------
    data : dict
        Dictionary produced by ``ast_to_dict``
    strict_mode : bool, default = True
        If True, raise on unknown node types. If False, log a warning and
        return a Text placeholder instead.

    Returns
    -------
    Node
        Reconstructed node

    Raises
    ------
    ValueError
        If ``node_type`` is missing, or unknown in strict mode

    """
    node_type = data.get("node_type")
    if not node_type:
        raise ValueError("Missing 'node_type' field in data")

    deserializer = _DESERIALIZATION_DISPATCH.get(node_type)
    if not deserializer:
        if strict_mode:
            raise ValueError(f"Unknown node type: {node_type}")
        logger.warning(f"Unknown node type '{node_type}', skipping")
        return Text(content=f"[Unknown node type: {node_type}]")

    return deserializer(data)


def json_to_ast(json_str: str, strict_mode: bool = True) -> Node:
    """Deserialize a JSON string to a node.

    Parameters
    ----------
    json_str : str
        JSON produced by ``ast_to_json``
    strict_mode : bool, default = True
        Passed through to ``dict_to_ast``

    Returns
    -------
    Node
        Reconstructed node

    Raises
    ------
    ValueError
        If the JSON is invalid or its schema version is unsupported

    """
    try:
        data = json.loads(json_str)
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON: {e}") from e

    version = data.pop("schema_version", AST_SCHEMA_VERSION)
    if version != AST_SCHEMA_VERSION:
        raise ValueError(f"Unsupported schema version: {version}")

    return dict_to_ast(data, strict_mode=strict_mode)


__all__ = [
    "ast_to_dict",
    "ast_to_json",
    "dict_to_ast",
    "json_to_ast",
    "result_to_dict",
]
