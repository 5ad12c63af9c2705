"""lessonmark - parse tag-based lesson markup into a presentation node tree.

lessonmark reads the bracket-tag markup authors use to write tutorial
articles, tasks and comments (``[smart]``, ``[js src="..."]``, ``[img]``,
``[compare]`` and so on) and produces a tree of presentation nodes plus a
small piece of document metadata. A separate renderer turns the tree into
HTML.

Trust is part of every parse. Site editors are trusted: their ``[head]``
markup reaches the page head, their images keep every attribute and their
iframes may be any height. Untrusted authors write the same markup but get a
safer rendition of it.

Examples
--------
Parse a document written by an untrusted author:

    >>> from lessonmark import parse_document
    >>> result = parse_document('[warn]Mind the [key Ctrl][/warn]', trusted=False)
    >>> result.nodes[0].attrs["class"]
    'important important_warn'

Collect libraries declared by a trusted editor:

    >>> result = parse_document("[libs]\\nd3\\nlodash\\n[/libs]", trusted=True)
    >>> list(result.metadata.libs)
    ['d3', 'lodash']

See Also
--------
lessonmark.ast : Node definitions, visitors and serialization
lessonmark.parsers : Body, tag and attribute parsers

"""

#  Copyright (c) 2025 Tom Villani, Ph.D.

import sys

if sys.version_info < (3, 10):
    raise ImportError(
        "lessonmark requires Python 3.10 or later. "
        f"You are using Python {sys.version_info.major}.{sys.version_info.minor}."
    )

__version__ = "1.0.0"

from lessonmark.api import ParseResult, parse_document, parse_file
from lessonmark.context import Metadata, ParseContext
from lessonmark.exceptions import (
    ConfigurationError,
    LessonmarkError,
    NestingDepthError,
    ParsingError,
    SecurityError,
    TagParseError,
    UnknownTagError,
    ValidationError,
)
from lessonmark.options import ParserOptions

__all__ = [
    "__version__",
    "parse_document",
    "parse_file",
    "ParseResult",
    "ParseContext",
    "Metadata",
    "ParserOptions",
    "LessonmarkError",
    "ValidationError",
    "ConfigurationError",
    "ParsingError",
    "TagParseError",
    "UnknownTagError",
    "SecurityError",
    "NestingDepthError",
]
