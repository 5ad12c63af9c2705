#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Tag token produced by the body parser and consumed by the tag parser."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class TagToken:
    """A tag found in lesson markup, before it is interpreted.

    Parameters
    ----------
    name : str
        Tag name (e.g. 'img', 'summary', 'js')
    attrs : str
        Raw, unparsed attribute string
    body : str
        Raw inner content; empty for self-closing tags
    is_figure : bool
        Whether the tag stands alone on its line and should render as a figure
    position : int
        Character position of the tag in its source text

    """

    name: str
    attrs: str = ""
    body: str = ""
    is_figure: bool = False
    position: int = 0
