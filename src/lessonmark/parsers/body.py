#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/lessonmark/parsers/body.py
"""Lesson markup body parser.

This module splits a markup string into literal text runs and tag tokens,
and hands each tag token to the tag parser. Tags whose body is itself markup
come back here recursively through the tag parser, so a whole document is
parsed by alternating between the two.

Only known tag names are recognised; any other bracketed text, such as
``arr[0]``, stays literal.
"""

from __future__ import annotations

import logging
import re
from typing import Optional

from lessonmark.ast import Node, Text
from lessonmark.constants import KNOWN_TAGS, RAW_BODY_TAGS, SELF_CLOSING_TAGS
from lessonmark.context import ParseContext
from lessonmark.exceptions import NestingDepthError, TagParseError
from lessonmark.parsers.tokens import TagToken

logger = logging.getLogger(__name__)


class BodyParser:
    """Parse lesson markup into a list of nodes.

    Parameters
    ----------
    text : str
        Markup to parse
    context : ParseContext
        Context of the document being parsed; nested bodies receive a
        context one level deeper

    Examples
    --------
        >>> context = ParseContext(trusted=False)
        >>> nodes = BodyParser("Press [key Ctrl+C] to copy", context).parse()

    """

    # Opening tag: [name] or [name attrs]. Quoted attribute values may contain
    # ']' and '['; an unbalanced quote is plain text. Unquoted text stops at '['.
    OPEN_TAG_PATTERN = re.compile(
        r"""
        \[(?P<name>[A-Za-z][\w-]*)
        (?P<attrs>\s
            (?:
                [^\[\]"']
              | "[^"]*"
              | '[^']*'
              | "(?![^"]*")
              | '(?![^']*')
            )*
        )?
        \]
        """,
        re.VERBOSE,
    )

    # Any opening or closing tag mark, used to pair counted tags
    TAG_MARK_PATTERN = re.compile(r"\[(/?)([A-Za-z][\w-]*)(?=[\s\]])")

    def __init__(self, text: str, context: ParseContext):
        self.text = text
        self.context = context
        self._closing_positions: dict[int, int] = {}
        self._last_raw_closing: dict[str, int] = {}

    def parse(self) -> list[Node]:
        """Parse the text into nodes.

        Returns
        -------
        list of Node
            Literal runs as Text nodes and one node per tag, in document order

        Raises
        ------
        NestingDepthError
            If the context is nested deeper than ``max_nesting_depth``
        TagParseError
            In strict mode, if a tag is never closed

        """
        max_depth = self.context.options.max_nesting_depth
        if self.context.depth > max_depth:
            raise NestingDepthError(max_depth)

        text = self.text
        if self.context.depth == 0:
            text = text.replace("\r\n", "\n").replace("\r", "\n")

        self._last_raw_closing = {}
        self._closing_positions = self._pair_closing_tags(text)

        result: list[Node] = []
        literal_buffer: list[str] = []
        pos = 0

        while pos < len(text):
            match = self.OPEN_TAG_PATTERN.search(text, pos)

            if not match:
                literal_buffer.append(text[pos:])
                break

            name = match.group("name")
            if name not in KNOWN_TAGS:
                # Not a tag; keep the bracket as text and rescan after it
                literal_buffer.append(text[pos : match.start() + 1])
                pos = match.start() + 1
                continue

            token, new_pos = self._read_token(text, match)
            if token is None:
                literal_buffer.append(text[pos : match.end()])
                pos = match.end()
                continue

            if match.start() > pos:
                literal_buffer.append(text[pos : match.start()])
            self._flush(literal_buffer, result)

            result.append(self._parse_token(token))
            pos = new_pos

        self._flush(literal_buffer, result)
        return result

    def _read_token(self, text: str, match: re.Match[str]) -> tuple[Optional[TagToken], int]:
        """Build the token for an opening tag match.

        Returns
        -------
        tuple of (TagToken or None, int)
            The token and the position after it, or None if the tag is
            never closed and the opening tag should stay literal

        """
        name = match.group("name")
        attrs = (match.group("attrs") or "").strip()

        if name in SELF_CLOSING_TAGS:
            is_figure = name == "img" and self._stands_alone(text, match.start(), match.end())
            return TagToken(name, attrs, "", is_figure, match.start()), match.end()

        closing_pos = self._find_closing_tag_position(text, match)
        if closing_pos is None:
            if self.context.options.strict_mode:
                raise TagParseError(f"Unclosed [{name}] tag at position {match.start()}", tag_name=name)
            logger.warning(f"Unclosed [{name}] tag at position {match.start()}, keeping it as text")
            return None, match.end()

        body = text[match.end() : closing_pos]
        return TagToken(name, attrs, body, False, match.start()), closing_pos + len(f"[/{name}]")

    def _find_closing_tag_position(self, text: str, match: re.Match[str]) -> Optional[int]:
        """Find the position of the closing tag for an opening tag match.

        Raw-body tags end at the first closing tag. Other tags were paired
        with their closing tag, counting nested tags of the same name, when
        parsing started.

        Returns
        -------
        int or None
            Position of the closing tag start, or None if not found

        """
        name = match.group("name")
        if name in RAW_BODY_TAGS:
            return self._find_raw_closing(text, match.end(), name)
        return self._closing_positions.get(match.start())

    def _find_raw_closing(self, text: str, start_pos: int, tag_name: str) -> Optional[int]:
        """Find the first ``[/tag_name]`` at or after ``start_pos``."""
        closing_tag = f"[/{tag_name}]"

        last = self._last_raw_closing.get(tag_name)
        if last is None:
            last = self._last_raw_closing[tag_name] = text.rfind(closing_tag)
        if last < start_pos:
            return None

        return text.find(closing_tag, start_pos)

    def _pair_closing_tags(self, text: str) -> dict[int, int]:
        """Pair every counted opening tag in ``text`` with its closing tag.

        A single pass keeps a stack of open positions per tag name, so each
        closing tag closes the innermost open tag of its name. Raw bodies are
        skipped, and closing tags written inside them do not count.

        Parameters
        ----------
        text : str
            Text to scan

        Returns
        -------
        dict of int to int
            Opening tag start to closing tag start; unclosed tags are absent

        """
        pairs: dict[int, int] = {}
        open_tags: dict[str, list[int]] = {}
        pos = 0

        while True:
            mark = self.TAG_MARK_PATTERN.search(text, pos)
            if not mark:
                return pairs

            name = mark.group(2)
            pos = mark.end()
            if name not in KNOWN_TAGS:
                continue

            if mark.group(1) == "/":
                stack = open_tags.get(name)
                if stack and text.startswith(f"[/{name}]", mark.start()):
                    pairs[stack.pop()] = mark.start()
                continue

            opening = self.OPEN_TAG_PATTERN.match(text, mark.start())
            if not opening:
                continue
            pos = opening.end()

            if name in SELF_CLOSING_TAGS:
                continue
            if name in RAW_BODY_TAGS:
                closing_pos = self._find_raw_closing(text, pos, name)
                if closing_pos is not None:
                    pos = closing_pos + len(f"[/{name}]")
                continue

            open_tags.setdefault(name, []).append(mark.start())

    @staticmethod
    def _stands_alone(text: str, start: int, end: int) -> bool:
        """Return True if nothing but whitespace shares the line with text[start:end]."""
        line_start = text.rfind("\n", 0, start) + 1
        line_end = text.find("\n", end)
        if line_end == -1:
            line_end = len(text)
        return not text[line_start:start].strip() and not text[end:line_end].strip()

    def _parse_token(self, token: TagToken) -> Node:
        from lessonmark.parsers.tags import TagParser

        return TagParser(token, self.context).parse()

    @staticmethod
    def _flush(literal_buffer: list[str], result: list[Node]) -> None:
        if literal_buffer:
            literal = "".join(literal_buffer)
            if literal:
                result.append(Text(content=literal))
            literal_buffer.clear()


def parse_body(text: str, context: ParseContext) -> list[Node]:
    """Parse ``text`` in ``context``; see ``BodyParser``."""
    return BodyParser(text, context).parse()
