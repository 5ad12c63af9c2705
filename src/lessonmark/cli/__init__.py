"""Command-line interface for the lessonmark lesson markup parser.

The CLI parses one lesson document and prints its node tree, either as the
JSON record a renderer consumes or as a tree for reading in a terminal.

Configuration Files
-------------------
Parser options are read from ``.lessonmark.toml``, ``.lessonmark.yaml``,
``.lessonmark.yml``, ``.lessonmark.json`` or the ``[tool.lessonmark]`` table
of ``pyproject.toml``, found in the current directory, one of its parents or
the home directory. ``LESSONMARK_CONFIG`` names a file explicitly, and
``--config`` overrides both. Command-line options override the file.

Examples
--------
Parse an article as its trusted editor would see it::

    $ lessonmark article.md --trusted

Show the tree of a comment read from stdin::

    $ cat comment.md | lessonmark - --format tree

Parse for static export with resources on a CDN::

    $ lessonmark task.md --trusted --export --static-host https://static.example.org

"""

#  Copyright (c) 2025 Tom Villani, Ph.D.

import argparse
import logging
import sys
from pathlib import Path
from typing import Any, Optional

from lessonmark import __version__
from lessonmark.api import ParseResult, parse_document
from lessonmark.cli.config import discover_config_file, load_config_file, options_from_config
from lessonmark.cli.output import build_tree, format_json, should_use_rich_output
from lessonmark.constants import SUPPORTED_LOCALES
from lessonmark.exceptions import LessonmarkError, ParsingError, SecurityError, ValidationError
from lessonmark.logging_utils import configure_logging
from lessonmark.options import ParserOptions

logger = logging.getLogger(__name__)

__all__ = ["main", "create_parser", "get_exit_code_for_exception"]

EXIT_SUCCESS = 0
EXIT_ERROR = 1
EXIT_VALIDATION_ERROR = 3
EXIT_FILE_ERROR = 4
EXIT_PARSING_ERROR = 6
EXIT_SECURITY_ERROR = 8

# CLI flags that map directly onto ParserOptions fields
_OPTION_ARGUMENTS = ("static_host", "resource_web_root", "locale", "max_nesting_depth")


def get_exit_code_for_exception(exception: Exception) -> int:
    """Map an exception to a CLI exit code.

    Parameters
    ----------
    exception : Exception
        The exception to map

    Returns
    -------
    int
        Exit code for the exception type

    """
    if isinstance(exception, SecurityError):
        return EXIT_SECURITY_ERROR
    if isinstance(exception, ValidationError):
        return EXIT_VALIDATION_ERROR
    if isinstance(exception, ParsingError):
        return EXIT_PARSING_ERROR
    if isinstance(exception, OSError):
        return EXIT_FILE_ERROR
    return EXIT_ERROR


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the lessonmark command."""
    parser = argparse.ArgumentParser(
        prog="lessonmark",
        description="Parse lesson markup into a presentation node tree.",
    )
    parser.add_argument("input", help="Lesson markup file to parse, or '-' to read from stdin")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    trust_group = parser.add_argument_group("document")
    trust_group.add_argument(
        "--trusted",
        action="store_true",
        help="Parse as a trusted editor: enables [head], [libs] and [importance] and unrestricted images",
    )
    trust_group.add_argument("--export", action="store_true", help="Render for static export instead of the live site")

    options_group = parser.add_argument_group("parser options")
    options_group.add_argument("--static-host", help="Host serving static lesson resources")
    options_group.add_argument("--resource-web-root", help="Web path of the lesson's resources on the static host")
    options_group.add_argument("--locale", choices=SUPPORTED_LOCALES, help="Language of default titles and labels")
    options_group.add_argument(
        "--strict",
        action="store_true",
        default=None,
        help="Fail on the first malformed tag instead of rendering an error placeholder",
    )
    options_group.add_argument("--max-nesting-depth", type=int, help="Maximum tag nesting depth")
    options_group.add_argument("--config", help="Path to a configuration file (JSON, TOML or YAML)")
    options_group.add_argument("--no-config", action="store_true", help="Do not search for a configuration file")

    output_group = parser.add_argument_group("output")
    output_group.add_argument(
        "--format", choices=("json", "tree"), default="json", help="Output format (default: json)"
    )
    output_group.add_argument("--indent", type=int, default=2, help="JSON indentation, 0 for compact output")
    output_group.add_argument("-o", "--out", help="Write output to this file instead of stdout")

    logging_group = parser.add_argument_group("logging")
    logging_group.add_argument(
        "--log-level",
        choices=("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"),
        default="WARNING",
        help="Logging level (default: WARNING)",
    )
    logging_group.add_argument("--log-file", help="Also write log records to this file")
    logging_group.add_argument("--trace", action="store_true", help="Verbose logging with timestamps and logger names")

    return parser


def _load_options(parsed_args: argparse.Namespace) -> ParserOptions:
    """Merge the configuration file and command-line flags into parser options.

    Raises
    ------
    argparse.ArgumentTypeError
        If the configuration file cannot be loaded
    ConfigurationError
        If a configured value is invalid

    """
    config: dict[str, Any] = {}
    if parsed_args.config:
        config = load_config_file(parsed_args.config)
    elif not parsed_args.no_config:
        config_path = discover_config_file()
        if config_path:
            logger.info(f"Using configuration file {config_path}")
            config = load_config_file(config_path)

    options = options_from_config(config)

    overrides = {name: getattr(parsed_args, name) for name in _OPTION_ARGUMENTS if getattr(parsed_args, name) is not None}
    if parsed_args.strict:
        overrides["strict_mode"] = True
    if overrides:
        options = options.create_updated(**overrides)
    return options


def _read_input(source: str) -> str:
    if source == "-":
        return sys.stdin.read()
    return Path(source).read_text(encoding="utf-8")


def _write_output(result: ParseResult, parsed_args: argparse.Namespace) -> None:
    label = "stdin" if parsed_args.input == "-" else parsed_args.input

    if parsed_args.format == "tree":
        from rich.console import Console

        if parsed_args.out:
            with open(parsed_args.out, "w", encoding="utf-8") as f:
                Console(file=f, no_color=True).print(build_tree(result, label))
        else:
            Console(force_terminal=should_use_rich_output(sys.stdout)).print(build_tree(result, label))
        return

    text = format_json(result, indent=parsed_args.indent or None)
    if parsed_args.out:
        Path(parsed_args.out).write_text(text + "\n", encoding="utf-8")
    else:
        print(text)


def main(argv: Optional[list[str]] = None) -> int:
    """Run the lessonmark command.

    Parameters
    ----------
    argv : list of str, optional
        Command-line arguments, defaults to ``sys.argv[1:]``

    Returns
    -------
    int
        Process exit code

    """
    parser = create_parser()
    parsed_args = parser.parse_args(argv)

    configure_logging(
        parsed_args.log_level,
        log_file=parsed_args.log_file,
        trace_mode=parsed_args.trace,
        use_rich=should_use_rich_output(sys.stderr),
    )

    try:
        options = _load_options(parsed_args)
    except argparse.ArgumentTypeError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_VALIDATION_ERROR
    except LessonmarkError as e:
        print(f"Error: {e}", file=sys.stderr)
        return get_exit_code_for_exception(e)

    try:
        text = _read_input(parsed_args.input)
    except (OSError, UnicodeDecodeError) as e:
        print(f"Error: cannot read {parsed_args.input}: {e}", file=sys.stderr)
        return EXIT_FILE_ERROR

    try:
        result = parse_document(text, trusted=parsed_args.trusted, export=parsed_args.export, options=options)
    except LessonmarkError as e:
        logger.debug("Parse failed", exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return get_exit_code_for_exception(e)

    try:
        _write_output(result, parsed_args)
    except OSError as e:
        print(f"Error: cannot write {parsed_args.out}: {e}", file=sys.stderr)
        return EXIT_FILE_ERROR

    return EXIT_SUCCESS
