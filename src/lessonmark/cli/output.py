"""Output helpers for the lessonmark CLI."""

#  Copyright (c) 2025 Tom Villani, Ph.D.

# src/lessonmark/cli/output.py
from __future__ import annotations

import json
import sys
from typing import TYPE_CHECKING, Mapping, Optional, TextIO

from rich.markup import escape
from rich.tree import Tree

from lessonmark.ast import (
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
    NodeVisitor,
    SourceEmbed,
    Text,
    VerbatimText,
)

if TYPE_CHECKING:
    from lessonmark.api import ParseResult

# Longest text shown on one tree label before it is shortened
PREVIEW_LENGTH = 60


def _preview(text: str) -> str:
    flat = text.replace("\n", "\\n")
    if len(flat) > PREVIEW_LENGTH:
        flat = flat[: PREVIEW_LENGTH - 3] + "..."
    return escape(repr(flat))


def _format_attrs(attrs: Mapping[str, str]) -> str:
    if not attrs:
        return ""
    return " " + escape(" ".join(f'{key}="{value}"' for key, value in attrs.items()))


def should_use_rich_output(stream: Optional[TextIO] = None, force: bool = False) -> bool:
    """Determine whether output should be styled with rich.

    Styled output is used when ``force`` is set or ``stream`` (default
    stdout) is a terminal.
    """
    if force:
        return True

    target = stream or sys.stdout
    isatty = getattr(target, "isatty", None)
    if callable(isatty):
        try:
            return bool(isatty())
        except ValueError:
            # Closed stream
            return False
    return False


class RichTreeBuilder(NodeVisitor):
    """Visitor that mirrors a node tree as a ``rich.tree.Tree``.

    Each ``visit_*`` method adds a labelled branch under the current parent
    and descends into the node's children.

    Examples
    --------
        >>> builder = RichTreeBuilder("lesson.md")
        >>> for node in result.nodes:
        ...     node.accept(builder)
        >>> Console().print(builder.tree)

    """

    def __init__(self, label: str = "Document"):
        self.tree = Tree(f"[bold]{escape(label)}[/bold]")
        self._parent = self.tree

    def _add(self, label: str, children: tuple[Node, ...] = ()) -> Tree:
        branch = self._parent.add(label)
        if children:
            previous = self._parent
            self._parent = branch
            for child in children:
                child.accept(self)
            self._parent = previous
        return branch

    def visit_text(self, node: Text) -> None:
        self._add(f"[dim]Text[/dim] {_preview(node.content)}")

    def visit_verbatim_text(self, node: VerbatimText) -> None:
        self._add(f"[dim]VerbatimText[/dim] {_preview(node.content)}")

    def visit_element(self, node: Element) -> None:
        label = f"[cyan]<{node.tag}{_format_attrs(node.attrs)}>[/cyan]"
        if isinstance(node.content, Node):
            self._add(label, (node.content,))
        else:
            self._add(f"{label} {_preview(node.content)}" if node.content else label)

    def visit_composite_element(self, node: CompositeElement) -> None:
        self._add(f"[cyan]<{node.tag}{_format_attrs(node.attrs)}>[/cyan]", node.children)

    def visit_fragment(self, node: Fragment) -> None:
        self._add("[magenta]Fragment[/magenta]", node.children)

    def visit_source_embed(self, node: SourceEmbed) -> None:
        src = f" src={escape(node.src)}" if node.src else ""
        self._add(f"[green]Source[/green] {node.kind}{src} {_preview(node.body)}")

    def visit_image_tag(self, node: ImageTag) -> None:
        kind = "Figure" if node.is_figure else "Image"
        self._add(f"[green]{kind}[/green]{_format_attrs(node.attrs)}")

    def visit_edit_link(self, node: EditLink) -> None:
        self._add(f"[green]Edit[/green]{_format_attrs(node.attrs)} {_preview(node.body)}")

    def visit_cut_marker(self, node: CutMarker) -> None:
        self._add("[yellow]Cut[/yellow]")

    def visit_key_label(self, node: KeyLabel) -> None:
        self._add(f"[yellow]Key[/yellow] {escape(node.text)}")

    def visit_example_embed(self, node: ExampleEmbed) -> None:
        self._add(f"[green]Example[/green]{_format_attrs(node.params)}")

    def visit_error_placeholder(self, node: ErrorPlaceholder) -> None:
        self._add(f"[bold red]Error[/bold red] \\[{escape(node.tag_name)}] {escape(node.message)}")


def build_tree(result: ParseResult, label: str = "Document") -> Tree:
    """Build a rich tree for a parse result, with a metadata branch when there is any."""
    builder = RichTreeBuilder(label)
    for node in result.nodes:
        node.accept(builder)

    metadata = result.metadata
    if metadata.head or len(metadata.libs) or metadata.importance is not None:
        meta_branch = builder.tree.add("[bold blue]Metadata[/bold blue]")
        for fragment in metadata.head:
            meta_branch.add(f"head {_preview(fragment)}")
        for lib in metadata.libs:
            meta_branch.add(f"lib {escape(lib)}")
        if metadata.importance is not None:
            meta_branch.add(f"importance {metadata.importance}")

    return builder.tree


def format_json(result: ParseResult, indent: Optional[int] = 2) -> str:
    """Serialize a parse result for hand-off to a renderer."""
    return json.dumps(result.to_dict(), indent=indent, ensure_ascii=False)
