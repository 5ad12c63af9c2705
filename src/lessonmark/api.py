"""The major exported API functions for parsing lesson markup."""

#  Copyright (c) 2025 Tom Villani, Ph.D.
# src/lessonmark/api.py
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional, Union

from lessonmark.ast import Node
from lessonmark.ast.serialization import result_to_dict
from lessonmark.context import Metadata, ParseContext
from lessonmark.exceptions import ConfigurationError, LessonmarkError, ParsingError
from lessonmark.options import ParserOptions
from lessonmark.parsers.body import BodyParser

logger = logging.getLogger(__name__)


@dataclass
class ParseResult:
    """Output of a document parse: the node tree and its metadata.

    Parameters
    ----------
    nodes : list of Node
        Top-level nodes in document order
    metadata : Metadata
        Head fragments, libraries and importance collected from the document

    """

    nodes: list[Node] = field(default_factory=list)
    metadata: Metadata = field(default_factory=Metadata)

    def to_dict(self) -> dict[str, Any]:
        """Convert to the JSON-ready hand-off record."""
        return result_to_dict(self.nodes, self.metadata)


def parse_document(
    text: str,
    *,
    trusted: Optional[bool],
    export: bool = False,
    options: Optional[ParserOptions] = None,
    **kwargs: Any,
) -> ParseResult:
    """Parse a lesson document into a node tree.

    Each call gets its own ParseContext and Metadata, so documents may be
    parsed concurrently from several threads.

    Parameters
    ----------
    text : str
        Lesson markup
    trusted : bool
        Whether the author is trusted. Passing None is a configuration error.
    export : bool, default False
        Render for static export instead of the live site
    options : ParserOptions, optional
        Pre-configured parser options
    kwargs : Any
        Individual parser options that override settings in ``options``

    Returns
    -------
    ParseResult
        Nodes and metadata for the document

    Raises
    ------
    ConfigurationError
        If ``trusted`` is missing or options are invalid
    UnknownTagError
        If a tag has no rule; the whole document fails
    NestingDepthError
        If markup is nested deeper than ``max_nesting_depth``
    ParsingError
        On any other parsing failure

    Examples
    --------
        >>> result = parse_document("[libs]\\nd3\\n[/libs]Hello", trusted=True)
        >>> list(result.metadata.libs)
        ['d3']

    """
    if not isinstance(trusted, bool):
        raise ConfigurationError(
            "parse_document requires an explicit trusted flag",
            parameter_name="trusted",
            parameter_value=trusted,
        )

    final_options = options or ParserOptions()
    if kwargs:
        final_options = final_options.create_updated(**kwargs)

    context = ParseContext(trusted=trusted, export=export, options=final_options, metadata=Metadata())
    logger.debug(f"Parsing document ({len(text)} chars, trusted={trusted}, export={export})")

    try:
        nodes = BodyParser(text, context).parse()
    except LessonmarkError:
        raise
    except Exception as e:
        raise ParsingError(f"Document parsing failed: {e!r}", parsing_stage="document", original_error=e) from e

    return ParseResult(nodes=nodes, metadata=context.metadata)


def parse_file(
    path: Union[str, Path],
    *,
    trusted: Optional[bool],
    export: bool = False,
    options: Optional[ParserOptions] = None,
    **kwargs: Any,
) -> ParseResult:
    """Read a UTF-8 lesson file and parse it; see ``parse_document``."""
    text = Path(path).read_text(encoding="utf-8")
    return parse_document(text, trusted=trusted, export=export, options=options, **kwargs)
