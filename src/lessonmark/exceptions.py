#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Custom exceptions for the lessonmark library.

This module defines the exception classes raised while turning lesson markup
into a node tree. The hierarchy separates integration bugs, tag-local
failures that the tag parser can recover from, and failures that must abort
the whole document.

Exception Hierarchy
-------------------
- LessonmarkError (base exception)

  - ValidationError (parameter/option validation)
    - ConfigurationError (missing trust flag, incomplete rule table)

  - ParsingError (markup parsing failures)
    - TagParseError (recoverable, scoped to one tag)
    - UnknownTagError (no rule for a tag name, aborts the document)

  - SecurityError (security violations)
    - NestingDepthError (markup nested deeper than allowed)

"""

from typing import Any


class LessonmarkError(Exception):
    """Base exception class for all lessonmark-specific errors.

    Parameters
    ----------
    message : str
        Human-readable description of the error
    original_error : Exception, optional
        The original exception that caused this error, if applicable

    Attributes
    ----------
    message : str
        The error message
    original_error : Exception or None
        The wrapped original exception, if any

    """

    def __init__(self, message: str, original_error: Exception | None = None):
        """Initialize the error with a message and optional original exception."""
        super().__init__(message)
        self.message = message
        self.original_error = original_error


class ValidationError(LessonmarkError):
    """Exception raised for invalid input parameters or options.

    Parameters
    ----------
    message : str
        Description of the validation error
    parameter_name : str, optional
        Name of the invalid parameter
    parameter_value : any, optional
        The invalid value that was provided
    original_error : Exception, optional
        The original exception that caused this error

    """

    def __init__(
        self,
        message: str,
        parameter_name: str | None = None,
        parameter_value: Any = None,
        original_error: Exception | None = None,
    ):
        """Initialize the validation error with parameter details."""
        super().__init__(message, original_error=original_error)
        self.parameter_name = parameter_name
        self.parameter_value = parameter_value


class ConfigurationError(ValidationError):
    """Exception raised when lessonmark is wired up incorrectly.

    This is never expected during normal operation. It signals a caller bug
    such as a parse context without a trust flag, or a tag table that names
    a tag with no rule behind it.
    """


class ParsingError(LessonmarkError):
    """Exception raised when markup parsing fails.

    Parameters
    ----------
    message : str
        Description of the parsing failure
    parsing_stage : str, optional
        The stage of parsing where the error occurred
    original_error : Exception, optional
        The underlying exception that caused the parsing failure

    """

    def __init__(self, message: str, parsing_stage: str | None = None, original_error: Exception | None = None):
        """Initialize the parsing error."""
        super().__init__(message, original_error)
        self.parsing_stage = parsing_stage


class TagParseError(ParsingError):
    """Recoverable failure scoped to a single tag.

    Raised for a missing required parameter, a disallowed absolute or
    protocol-qualified ``src``, or malformed tag content. The tag parser
    turns it into an ``ErrorPlaceholder`` node unless strict mode is on.

    Parameters
    ----------
    message : str
        Human-readable description shown in place of the tag
    tag_name : str, optional
        Name of the offending tag; filled in by the tag parser when omitted

    """

    def __init__(self, message: str, tag_name: str | None = None, original_error: Exception | None = None):
        """Initialize the tag error."""
        super().__init__(message, parsing_stage="tag", original_error=original_error)
        self.tag_name = tag_name


class UnknownTagError(ParsingError):
    """Exception raised when a tag name has no block, source or named rule.

    Unlike ``TagParseError`` this is never converted into a placeholder; it
    aborts the whole document parse.

    Parameters
    ----------
    tag_name : str
        The unrecognised tag name

    """

    def __init__(self, tag_name: str):
        """Initialize the unknown tag error."""
        super().__init__(f"Unknown tag: {tag_name}", parsing_stage="dispatch")
        self.tag_name = tag_name


class SecurityError(LessonmarkError):
    """Base exception for security violations.

    Parameters
    ----------
    message : str
        Description of the security violation
    original_error : Exception, optional
        The original exception that caused this error

    """


class NestingDepthError(SecurityError):
    """Exception raised when markup is nested deeper than the configured limit.

    Parameters
    ----------
    max_depth : int
        The limit that was exceeded

    """

    def __init__(self, max_depth: int):
        """Initialize the nesting depth error."""
        super().__init__(f"Markup nesting exceeds the maximum depth of {max_depth}")
        self.max_depth = max_depth
