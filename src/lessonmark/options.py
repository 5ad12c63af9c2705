"""Parser options for lessonmark.

This module defines the static configuration shared by every document parse:
where static resources live, which language default titles are written in,
and the hardening limits applied to untrusted content.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass, field, fields, replace
from typing import Any, Mapping

if sys.version_info >= (3, 11):
    from typing import Self
else:
    from typing_extensions import Self

from lessonmark.constants import (
    DEFAULT_LOCALE,
    DEFAULT_MAX_NESTING_DEPTH,
    DEFAULT_RESOURCE_WEB_ROOT,
    DEFAULT_STATIC_HOST,
    DEFAULT_STRICT_MODE,
    LOCALIZED_STRINGS,
    SUPPORTED_LOCALES,
    UNTRUSTED_IFRAME_MIN_HEIGHT,
    Locale,
)
from lessonmark.exceptions import ConfigurationError


@dataclass(frozen=True)
class CloneFrozenMixin:
    """Mixin providing frozen dataclass cloning capabilities."""

    def create_updated(self, **kwargs: Any) -> Self:
        """Create a new instance with updated field values.

        Parameters
        ----------
        **kwargs : Any
            Field names and their new values

        Returns
        -------
        Self
            New instance with specified fields updated

        """
        return replace(self, **kwargs)


@dataclass(frozen=True)
class ParserOptions(CloneFrozenMixin):
    """Static configuration for parsing lesson markup.

    Parameters
    ----------
    static_host : str, default ""
        Host serving static lesson resources, e.g. ``"https://static.example.org"``
    resource_web_root : str, default ""
        Web path of the current lesson's resources on the static host
    locale : {"ru", "en"}, default "ru"
        Language of default block titles and generated labels
    strict_mode : bool, default False
        Raise tag errors instead of rendering an inline error placeholder
    max_nesting_depth : int, default 64
        Deepest allowed tag nesting before the parse is aborted
    untrusted_iframe_min_height : int, default 800
        Smallest explicit iframe height an untrusted author may request

    Examples
    --------
        >>> options = ParserOptions(static_host="https://static.example.org", locale="en")
        >>> strict = options.create_updated(strict_mode=True)

    """

    static_host: str = field(
        default=DEFAULT_STATIC_HOST,
        metadata={"help": "Host serving static lesson resources", "importance": "core"},
    )
    resource_web_root: str = field(
        default=DEFAULT_RESOURCE_WEB_ROOT,
        metadata={"help": "Web path of the lesson's resources on the static host", "importance": "core"},
    )
    locale: Locale = field(
        default=DEFAULT_LOCALE,
        metadata={
            "help": "Language of default titles and labels",
            "choices": list(SUPPORTED_LOCALES),
            "importance": "core",
        },
    )
    strict_mode: bool = field(
        default=DEFAULT_STRICT_MODE,
        metadata={"help": "Raise tag errors instead of rendering error placeholders", "importance": "advanced"},
    )
    max_nesting_depth: int = field(
        default=DEFAULT_MAX_NESTING_DEPTH,
        metadata={"help": "Maximum tag nesting depth", "type": int, "importance": "security"},
    )
    untrusted_iframe_min_height: int = field(
        default=UNTRUSTED_IFRAME_MIN_HEIGHT,
        metadata={"help": "Minimum explicit iframe height for untrusted content", "type": int, "importance": "security"},
    )

    def __post_init__(self) -> None:
        """Validate option values.

        Raises
        ------
        ConfigurationError
            If any field value is outside its valid range.

        """
        for name in ("max_nesting_depth", "untrusted_iframe_min_height"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise ConfigurationError(
                    f"{name} must be an integer, got {type(value).__name__}",
                    parameter_name=name,
                    parameter_value=value,
                )
        if self.locale not in LOCALIZED_STRINGS:
            raise ConfigurationError(
                f"Unsupported locale {self.locale!r}, expected one of {', '.join(SUPPORTED_LOCALES)}",
                parameter_name="locale",
                parameter_value=self.locale,
            )
        if self.max_nesting_depth <= 0:
            raise ConfigurationError(
                f"max_nesting_depth must be positive, got {self.max_nesting_depth}",
                parameter_name="max_nesting_depth",
                parameter_value=self.max_nesting_depth,
            )
        if self.untrusted_iframe_min_height < 0:
            raise ConfigurationError(
                f"untrusted_iframe_min_height must not be negative, got {self.untrusted_iframe_min_height}",
                parameter_name="untrusted_iframe_min_height",
                parameter_value=self.untrusted_iframe_min_height,
            )

    def text(self, key: str) -> str:
        """Return the localized string ``key`` for the configured locale."""
        return LOCALIZED_STRINGS[self.locale][key]

    @classmethod
    def field_names(cls) -> frozenset[str]:
        """Return the names of all configurable fields."""
        return frozenset(f.name for f in fields(cls))

    @classmethod
    def from_mapping(cls, values: Mapping[str, Any]) -> ParserOptions:
        """Build options from a plain mapping, e.g. a loaded config file.

        Raises
        ------
        ConfigurationError
            If the mapping contains keys that are not option fields.

        """
        unknown = sorted(set(values) - cls.field_names())
        if unknown:
            raise ConfigurationError(
                f"Unknown parser option(s): {', '.join(unknown)}",
                parameter_name=unknown[0],
                parameter_value=values[unknown[0]],
            )
        return cls(**dict(values))
