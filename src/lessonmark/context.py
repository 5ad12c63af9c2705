#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Per-document parse context and metadata accumulator.

A ``ParseContext`` is created once per top-level document parse and passed
by reference through every nested body and tag parse. It never changes
except through its ``Metadata``, the document-scoped side output that tags
such as ``[head]``, ``[libs]`` and ``[importance]`` write to instead of
producing visible content.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Iterable, Iterator, Optional

from lessonmark.options import CloneFrozenMixin, ParserOptions

logger = logging.getLogger(__name__)


class OrderedStringSet:
    """Set of strings that remembers first-insertion order."""

    def __init__(self, items: Iterable[str] = ()):
        self._items: dict[str, None] = {}
        for item in items:
            self.add(item)

    def add(self, item: str) -> bool:
        """Add ``item``; return False if it was already present."""
        if item in self._items:
            return False
        self._items[item] = None
        return True

    def __contains__(self, item: object) -> bool:
        return item in self._items

    def __iter__(self) -> Iterator[str]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, OrderedStringSet):
            return list(self) == list(other)
        return NotImplemented

    def __repr__(self) -> str:
        return f"OrderedStringSet({list(self)!r})"


@dataclass
class Metadata:
    """Document-scoped side output accumulated while parsing.

    Parameters
    ----------
    head : list of str
        Raw markup fragments for the page head, in document order
    libs : OrderedStringSet
        Client library identifiers, first-seen order, duplicates ignored
    importance : int or None
        Task importance; the last ``[importance]`` tag wins

    """

    head: list[str] = field(default_factory=list)
    libs: OrderedStringSet = field(default_factory=OrderedStringSet)
    importance: Optional[int] = None

    def append_head(self, fragment: str) -> None:
        """Append a raw head fragment."""
        self.head.append(fragment)

    def add_lib(self, lib: str) -> None:
        """Register a client library, ignoring duplicates."""
        if not self.libs.add(lib):
            logger.debug(f"Library {lib!r} already registered")

    def set_importance(self, importance: int) -> None:
        """Set the document importance, replacing any earlier value."""
        self.importance = importance

    def to_dict(self) -> dict[str, Any]:
        """Convert to a plain dictionary for hand-off to a renderer."""
        return {"head": list(self.head), "libs": list(self.libs), "importance": self.importance}


@dataclass(frozen=True)
class ParseContext(CloneFrozenMixin):
    """Trust and configuration shared by one whole document parse.

    Parameters
    ----------
    trusted : bool or None
        Whether the author is trusted. Leaving it unset is a configuration
        error reported when the first tag is parsed.
    export : bool, default False
        Render for static export instead of the live site
    options : ParserOptions
        Static configuration
    metadata : Metadata
        Mutable accumulator shared by every nested parse of this document
    depth : int, default 0
        Current tag nesting depth

    """

    trusted: Optional[bool] = None
    export: bool = False
    options: ParserOptions = field(default_factory=ParserOptions)
    metadata: Metadata = field(default_factory=Metadata)
    depth: int = 0

    @property
    def static_host(self) -> str:
        return self.options.static_host

    @property
    def resource_web_root(self) -> str:
        return self.options.resource_web_root

    def nested(self) -> ParseContext:
        """Return the context for a body nested one level deeper.

        The copy shares this context's ``Metadata`` instance.
        """
        return self.create_updated(depth=self.depth + 1)
