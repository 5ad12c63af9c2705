#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/lessonmark/ast/utils.py
"""Utility functions for working with tree nodes.

Functions
---------
extract_text : Extract plain text from a node or list of nodes
find_nodes : Collect nodes of a given type from a list of nodes

Examples
--------
    >>> from lessonmark.ast import CompositeElement, Text
    >>> from lessonmark.ast.utils import extract_text
    >>>
    >>> box = CompositeElement("div", (Text("Hello "), Text("world")))
    >>> extract_text(box, joiner="")
    'Hello world'

"""

from __future__ import annotations

from typing import TYPE_CHECKING, Sequence, TypeVar, Union

from lessonmark.ast.nodes import Element, KeyLabel, Text, VerbatimText, get_node_children
from lessonmark.ast.visitors import NodeCollector

if TYPE_CHECKING:
    from lessonmark.ast.nodes import Node

N = TypeVar("N")


def extract_text(node_or_nodes: Union[Node, Sequence[Node]], joiner: str = " ") -> str:
    """Extract plain text from a node or list of nodes.

    Text, verbatim text, key labels and the string content of elements all
    contribute. Embeds (images, listings, examples) carry no visible text and
    are skipped.

    Parameters
    ----------
    node_or_nodes : Node or sequence of Node
        A single node or a sequence of nodes to extract text from
    joiner : str, default = " "
        String used to join text parts at each level

    Returns
    -------
    str
        Concatenated text content

    """
    if isinstance(node_or_nodes, (list, tuple)):
        text_parts = []
        for node in node_or_nodes:
            extracted = extract_text(node, joiner=joiner)
            if extracted:
                text_parts.append(extracted)
        return joiner.join(text_parts)

    node = node_or_nodes

    if isinstance(node, (Text, VerbatimText)):
        return node.content
    if isinstance(node, KeyLabel):
        return node.text
    if isinstance(node, Element) and isinstance(node.content, str):
        return node.content

    text_parts = []
    for child in get_node_children(node):
        extracted = extract_text(child, joiner=joiner)
        if extracted:
            text_parts.append(extracted)

    return joiner.join(text_parts)


def find_nodes(nodes: Sequence[Node], node_type: type[N]) -> list[N]:
    """Collect all nodes of ``node_type`` in depth-first document order."""
    collector = NodeCollector(lambda n: isinstance(n, node_type))
    for node in nodes:
        node.accept(collector)
    return collector.collected  # type: ignore[return-value]


__all__ = [
    "extract_text",
    "find_nodes",
]
