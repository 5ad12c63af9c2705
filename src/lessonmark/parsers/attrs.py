#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/lessonmark/parsers/attrs.py
"""Tag attribute string parser.

Turns the raw attribute part of a tag, e.g. ``src="task/solution" height=300 play``,
into an ordered mapping of parameter names to string values. Values may be
double-quoted, single-quoted or bare; a parameter written without a value is
a flag and maps to the empty string.
"""

from __future__ import annotations

import logging
import re

logger = logging.getLogger(__name__)


class AttributeParser:
    """Parse a raw tag attribute string.

    Parameters
    ----------
    raw_attrs : str
        Attribute string as written between the tag name and ``]``

    Examples
    --------
        >>> AttributeParser('src="demo" height=300 play').parse()
        {'src': 'demo', 'height': '300', 'play': ''}

    """

    ATTR_PATTERN = re.compile(
        r"""
        (?P<name>[A-Za-z_][\w-]*)
        (?:
            \s*=\s*
            (?:
                "(?P<double>[^"]*)"
              | '(?P<single>[^']*)'
              | (?P<bare>[^\s"']+)
            )
        )?
        """,
        re.VERBOSE,
    )

    def __init__(self, raw_attrs: str):
        self.raw_attrs = raw_attrs or ""

    def parse(self) -> dict[str, str]:
        """Parse the attribute string.

        Returns
        -------
        dict of str to str
            Parameters in first-appearance order. For a repeated name the
            first occurrence wins.

        """
        params: dict[str, str] = {}

        for match in self.ATTR_PATTERN.finditer(self.raw_attrs):
            name = match.group("name")
            value = next((v for v in match.group("double", "single", "bare") if v is not None), "")

            if name in params:
                logger.debug(f"Ignoring repeated attribute {name!r}")
                continue
            params[name] = value

        return params


def parse_attributes(raw_attrs: str) -> dict[str, str]:
    """Parse a raw attribute string; see ``AttributeParser``."""
    return AttributeParser(raw_attrs).parse()
