#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Security utilities for lessonmark tag rules.

Functions
---------
- has_protocol: Check whether a ``src`` value is protocol-qualified
- is_relative_src: Check a ``src`` value against the relative-path policy
- validate_relative_src: Raise a tag error for a ``src`` that breaks the policy
- parse_leading_int: Parse an integer prefix the way authors write sizes
"""

import logging
import re
from typing import Optional

from lessonmark.constants import PROTOCOL_SEPARATOR, RELATIVE_SRC_ERROR
from lessonmark.exceptions import TagParseError

logger = logging.getLogger(__name__)

_LEADING_INT_PATTERN = re.compile(r"\s*([+-]?\d+)")


def has_protocol(src: str) -> bool:
    """Check if a ``src`` value names a protocol.

    Examples
    --------
    >>> has_protocol("https://example.com/demo")
    True
    >>> has_protocol("task/solution")
    False

    """
    return PROTOCOL_SEPARATOR in src


def is_relative_src(src: str) -> bool:
    """Check if a ``src`` value is relative to the lesson.

    A value is relative when it neither starts with ``/`` nor contains a
    protocol separator.

    Examples
    --------
    >>> is_relative_src("dir/file")
    True
    >>> is_relative_src("/etc/passwd")
    False
    >>> is_relative_src("http://example.com")
    False

    """
    return not src.startswith("/") and not has_protocol(src)


def validate_relative_src(src: str) -> str:
    """Return ``src`` unchanged if it passes the relative-path policy.

    Raises
    ------
    TagParseError
        If ``src`` is absolute or protocol-qualified

    """
    if not is_relative_src(src):
        logger.debug(f"Rejected non-relative src {src!r}")
        raise TagParseError(RELATIVE_SRC_ERROR)
    return src


def parse_leading_int(value: str) -> Optional[int]:
    """Parse the integer at the start of ``value``, ignoring any trailing text.

    Returns None when ``value`` does not start with a number.

    Examples
    --------
    >>> parse_leading_int("300px")
    300
    >>> parse_leading_int("tall") is None
    True

    """
    match = _LEADING_INT_PATTERN.match(value)
    return int(match.group(1)) if match else None
