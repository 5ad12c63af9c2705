#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/lessonmark/ast/visitors.py
"""Visitor pattern implementation for tree traversal.

This module provides the visitor base class a renderer implements to turn a
node tree into output markup, plus a small collecting visitor used for
queries over a parsed document.

"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Callable, Optional

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


class NodeVisitor(ABC):
    """Abstract base class for node visitors.

    Subclasses implement one ``visit_*`` method per node variant. A renderer
    is a visitor whose methods return output fragments.

    Examples
    --------
    Simple visitor that counts nodes:

        >>> class NodeCounter(NodeVisitor):
        ...     def __init__(self):
        ...         self.count = 0
        ...
        ...     def generic_visit(self, node):
        ...         self.count += 1
        ...         for child in get_node_children(node):
        ...             child.accept(self)

    """

    @abstractmethod
    def visit_text(self, node: Text) -> Any:
        """Visit a Text node.

        Parameters
        ----------
        node : Text
            The text node to visit

        Returns
        -------
        Any
            Result of processing this node

        """
        pass

    @abstractmethod
    def visit_verbatim_text(self, node: VerbatimText) -> Any:
        """Visit a VerbatimText node."""
        pass

    @abstractmethod
    def visit_element(self, node: Element) -> Any:
        """Visit an Element node.

        Parameters
        ----------
        node : Element
            The element node to visit

        Returns
        -------
        Any
            Result of processing this node

        """
        pass

    @abstractmethod
    def visit_composite_element(self, node: CompositeElement) -> Any:
        """Visit a CompositeElement node.

        Parameters
        ----------
        node : CompositeElement
            The composite element to visit

        Returns
        -------
        Any
            Result of processing this node

        """
        pass

    @abstractmethod
    def visit_fragment(self, node: Fragment) -> Any:
        """Visit a Fragment node."""
        pass

    @abstractmethod
    def visit_source_embed(self, node: SourceEmbed) -> Any:
        """Visit a SourceEmbed node."""
        pass

    @abstractmethod
    def visit_image_tag(self, node: ImageTag) -> Any:
        """Visit an ImageTag node."""
        pass

    @abstractmethod
    def visit_edit_link(self, node: EditLink) -> Any:
        """Visit an EditLink node."""
        pass

    @abstractmethod
    def visit_cut_marker(self, node: CutMarker) -> Any:
        """Visit a CutMarker node."""
        pass

    @abstractmethod
    def visit_key_label(self, node: KeyLabel) -> Any:
        """Visit a KeyLabel node."""
        pass

    @abstractmethod
    def visit_example_embed(self, node: ExampleEmbed) -> Any:
        """Visit an ExampleEmbed node."""
        pass

    @abstractmethod
    def visit_error_placeholder(self, node: ErrorPlaceholder) -> Any:
        """Visit an ErrorPlaceholder node."""
        pass


class NodeCollector(NodeVisitor):
    """Visitor that collects every node matching a predicate, depth first.

    Parameters
    ----------
    predicate : callable, optional
        Function deciding whether a node is collected. All nodes are
        collected when omitted.

    Examples
    --------
    >>> collector = NodeCollector(lambda n: isinstance(n, ErrorPlaceholder))
    >>> for node in nodes:
    ...     node.accept(collector)
    >>> errors = collector.collected

    """

    def __init__(self, predicate: Optional[Callable[[Node], bool]] = None):
        """Initialize the collector with an optional predicate."""
        self.predicate = predicate
        self.collected: list[Node] = []

    def _collect(self, node: Node) -> None:
        if self.predicate is None or self.predicate(node):
            self.collected.append(node)
        for child in get_node_children(node):
            child.accept(self)

    def visit_text(self, node: Text) -> None:
        self._collect(node)

    def visit_verbatim_text(self, node: VerbatimText) -> None:
        self._collect(node)

    def visit_element(self, node: Element) -> None:
        self._collect(node)

    def visit_composite_element(self, node: CompositeElement) -> None:
        self._collect(node)

    def visit_fragment(self, node: Fragment) -> None:
        self._collect(node)

    def visit_source_embed(self, node: SourceEmbed) -> None:
        self._collect(node)

    def visit_image_tag(self, node: ImageTag) -> None:
        self._collect(node)

    def visit_edit_link(self, node: EditLink) -> None:
        self._collect(node)

    def visit_cut_marker(self, node: CutMarker) -> None:
        self._collect(node)

    def visit_key_label(self, node: KeyLabel) -> None:
        self._collect(node)

    def visit_example_embed(self, node: ExampleEmbed) -> None:
        self._collect(node)

    def visit_error_placeholder(self, node: ErrorPlaceholder) -> None:
        self._collect(node)
