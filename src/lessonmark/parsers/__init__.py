#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Parsers turning lesson markup into node trees.

- attrs: tag attribute strings to parameter maps
- body: markup text to literal runs and tag tokens
- tags: one tag token to one node, per-tag rules
"""

from lessonmark.parsers.attrs import AttributeParser, parse_attributes
from lessonmark.parsers.body import BodyParser, parse_body
from lessonmark.parsers.tags import TagParser, parse_tag
from lessonmark.parsers.tokens import TagToken

__all__ = [
    "AttributeParser",
    "BodyParser",
    "TagParser",
    "TagToken",
    "parse_attributes",
    "parse_body",
    "parse_tag",
]
