#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/lessonmark/ast/nodes.py
"""Node classes for the lesson presentation tree.

This module defines the node hierarchy produced by the tag parser and handed
to a downstream renderer. Each node is a small immutable value; composite
nodes own their children exclusively and hold them as tuples so that a tree
never shares or mutates its parts after construction.

Node Hierarchy
--------------
All nodes inherit from the base Node class and support the visitor pattern.

Markup nodes describe generic elements:
    - Text, VerbatimText
    - Element, CompositeElement, Fragment

Tag nodes describe lesson-specific embeds the renderer knows how to draw:
    - SourceEmbed, ImageTag, EditLink, ExampleEmbed
    - CutMarker, KeyLabel

Error nodes replace a tag that failed to parse:
    - ErrorPlaceholder

Attribute and parameter mappings keep the insertion order they were built
with; the renderer's output depends on it. They are stored as read-only
proxies over a private copy, so a finished tree cannot be changed through them
and every node is hashable.

"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Mapping, Optional, Union


class Node(ABC):
    """Base class for all tree nodes.

    All nodes inherit from this base class and support the visitor pattern
    for traversal and rendering.

    """

    @abstractmethod
    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this node.

        Parameters
        ----------
        visitor : Any
            A visitor object with visit_* methods

        Returns
        -------
        Any
            Result from the visitor's processing

        """
        pass



def _freeze_mapping(node: Node, name: str) -> None:
    """Replace mapping field ``name`` of a frozen node with a read-only copy."""
    object.__setattr__(node, name, MappingProxyType(dict(getattr(node, name))))

# ============================================================================
# Markup Nodes
# ============================================================================


@dataclass(frozen=True)
class Text(Node):
    """Plain text node.

    The renderer escapes the content before writing it out.

    Parameters
    ----------
    content : str
        Text content

    """

    content: str

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this text.

        Parameters
        ----------
        visitor : Any
            A visitor object with visit_text method

        Returns
        -------
        Any
            Result from visitor.visit_text(self)

        """
        return visitor.visit_text(self)


@dataclass(frozen=True)
class VerbatimText(Node):
    """Raw text that the renderer must write out unescaped and unaltered.

    Parameters
    ----------
    content : str
        Raw content, exactly as the author wrote it

    """

    content: str

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this verbatim text."""
        return visitor.visit_verbatim_text(self)


@dataclass(frozen=True)
class Element(Node):
    """Element with a single piece of content.

    Parameters
    ----------
    tag : str
        Element name, e.g. ``"a"`` or ``"iframe"``
    content : str or Node
        Text content (escaped by the renderer) or a single child node
    attrs : Mapping, default = empty mapping
        Element attributes in output order

    """

    tag: str
    content: Union[str, Node] = ""
    attrs: Mapping[str, str] = field(default_factory=dict, hash=False)

    def __post_init__(self) -> None:
        _freeze_mapping(self, "attrs")

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this element.

        Parameters
        ----------
        visitor : Any
            A visitor object with visit_element method

        Returns
        -------
        Any
            Result from visitor.visit_element(self)

        """
        return visitor.visit_element(self)


@dataclass(frozen=True)
class CompositeElement(Node):
    """Element with an ordered sequence of children.

    Parameters
    ----------
    tag : str
        Element name, e.g. ``"div"``
    children : tuple of Node, default = empty tuple
        Child nodes in document order
    attrs : Mapping, default = empty mapping
        Element attributes in output order

    """

    tag: str
    children: tuple[Node, ...] = ()
    attrs: Mapping[str, str] = field(default_factory=dict, hash=False)

    def __post_init__(self) -> None:
        _freeze_mapping(self, "attrs")

    def has_children(self) -> bool:
        """Return True if the element has at least one child."""
        return bool(self.children)

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this composite element.

        Parameters
        ----------
        visitor : Any
            A visitor object with visit_composite_element method

        Returns
        -------
        Any
            Result from visitor.visit_composite_element(self)

        """
        return visitor.visit_composite_element(self)


@dataclass(frozen=True)
class Fragment(Node):
    """Transparent group of nodes rendered as its children, without a wrapper.

    Used where a tag expands to a whole parsed body, e.g. ``[online]``.

    Parameters
    ----------
    children : tuple of Node, default = empty tuple
        Child nodes in document order

    """

    children: tuple[Node, ...] = ()

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this fragment."""
        return visitor.visit_fragment(self)


# ============================================================================
# Tag Nodes
# ============================================================================


@dataclass(frozen=True)
class SourceEmbed(Node):
    """Code listing embed.

    Parameters
    ----------
    kind : str
        Listing kind, the tag name that produced it (``"js"``, ``"html"``, ...)
    body : str
        Raw listing body
    src : str or None, default = None
        Relative path of an external listing, if any
    params : Mapping, default = empty mapping
        All parameters the author wrote on the tag

    """

    kind: str
    body: str
    src: Optional[str] = None
    params: Mapping[str, str] = field(default_factory=dict, hash=False)

    def __post_init__(self) -> None:
        _freeze_mapping(self, "params")

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this listing."""
        return visitor.visit_source_embed(self)


@dataclass(frozen=True)
class ImageTag(Node):
    """Image embed.

    Parameters
    ----------
    attrs : Mapping
        Image attributes; always contains ``src``
    is_figure : bool, default = False
        Whether the image stands alone and should render as a figure

    """

    attrs: Mapping[str, str] = field(hash=False)
    is_figure: bool = False

    def __post_init__(self) -> None:
        _freeze_mapping(self, "attrs")

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this image."""
        return visitor.visit_image_tag(self)


@dataclass(frozen=True)
class EditLink(Node):
    """Link that opens a task's sandbox for editing.

    Parameters
    ----------
    body : str
        Link label
    attrs : Mapping
        Link attributes; contains the relative ``src``

    """

    body: str
    attrs: Mapping[str, str] = field(hash=False)

    def __post_init__(self) -> None:
        _freeze_mapping(self, "attrs")

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this edit link."""
        return visitor.visit_edit_link(self)


@dataclass(frozen=True)
class CutMarker(Node):
    """Pagination marker separating a teaser from the rest of the article."""

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this marker."""
        return visitor.visit_cut_marker(self)


@dataclass(frozen=True)
class KeyLabel(Node):
    """Keyboard key or shortcut label, e.g. ``Ctrl+C``.

    Parameters
    ----------
    text : str
        Key text

    """

    text: str

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this key label."""
        return visitor.visit_key_label(self)


@dataclass(frozen=True)
class ExampleEmbed(Node):
    """Embedded runnable example.

    Parameters
    ----------
    params : Mapping
        All parameters the author wrote on the tag; contains the relative ``src``

    """

    params: Mapping[str, str] = field(hash=False)

    def __post_init__(self) -> None:
        _freeze_mapping(self, "params")

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this example."""
        return visitor.visit_example_embed(self)


# ============================================================================
# Error Nodes
# ============================================================================


@dataclass(frozen=True)
class ErrorPlaceholder(Node):
    """Inline error shown in place of a tag that failed to parse.

    Parameters
    ----------
    tag_name : str
        Name of the failing tag
    message : str
        Human-readable error message

    """

    tag_name: str
    message: str

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this error."""
        return visitor.visit_error_placeholder(self)


def get_node_children(node: Node) -> list[Node]:
    """Get all child nodes from a node.

    Parameters
    ----------
    node : Node
        The node to get children from

    Returns
    -------
    list of Node
        List of child nodes (empty list if node has no children)

    Examples
    --------
    >>> box = CompositeElement("div", (Text("a"), Element("b", Text("c"))))
    >>> len(get_node_children(box))
    2

    """
    if isinstance(node, (CompositeElement, Fragment)):
        return list(node.children)

    if isinstance(node, Element) and isinstance(node.content, Node):
        return [node.content]

    return []
