#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Constants and default values for the lessonmark library.

This module centralizes the tag tables, localized strings and default
configuration values used across lessonmark. The tag tables are static
configuration: the tokenizer only recognises names listed here, and the tag
parser checks at import time that every named tag has a rule.

Constants are organized by category:
1. Type Definitions - Literal types and type aliases
2. Tag Tables - Block, source, named and self-closing tag names
3. Localization - Default titles and labels per locale
4. Security Constants - Trust-dependent limits
5. Parser Defaults - Default option values
"""

from __future__ import annotations

from typing import Literal

# =============================================================================
# Type Definitions
# =============================================================================

Locale = Literal["ru", "en"]
OutputFormat = Literal["json", "tree"]

# =============================================================================
# Tag Tables
# =============================================================================

# Admonition blocks rendered with a header and a content section
BLOCK_TAGS: frozenset[str] = frozenset({"smart", "warn", "ponder"})

# Code listings handed to the renderer verbatim as SourceEmbed nodes
SOURCE_TAGS: frozenset[str] = frozenset(
    {
        "js",
        "html",
        "css",
        "coffee",
        "php",
        "json",
        "http",
        "java",
        "ruby",
        "scss",
        "sql",
        "svg",
        "xml",
        "python",
        "sh",
        "markup",
    }
)

# Tags handled by a dedicated rule in lessonmark.parsers.tags
NAMED_TAGS: frozenset[str] = frozenset(
    {
        "demo",
        "head",
        "libs",
        "importance",
        "edit",
        "cut",
        "key",
        "summary",
        "iframe",
        "quote",
        "hide",
        "pre",
        "compare",
        "online",
        "offline",
        "img",
        "example",
    }
)

# Tags written without a body or closing tag, e.g. [cut] or [img src="a.png"]
SELF_CLOSING_TAGS: frozenset[str] = frozenset({"cut", "key", "importance", "iframe", "img", "example", "demo"})

# Tags whose body is taken up to the first closing tag without tokenizing it
RAW_BODY_TAGS: frozenset[str] = frozenset({"pre", "head", "libs", "edit"}) | SOURCE_TAGS

KNOWN_TAGS: frozenset[str] = BLOCK_TAGS | SOURCE_TAGS | NAMED_TAGS

# Parameters an untrusted author may set on [img]
UNTRUSTED_IMG_ATTRIBUTES: tuple[str, ...] = ("src", "width", "height")

# =============================================================================
# Localization
# =============================================================================

LOCALIZED_STRINGS: dict[str, dict[str, str]] = {
    "ru": {
        "block_title.smart": "На заметку:",
        "block_title.warn": "Важно:",
        "block_title.ponder": "Вопрос:",
        "demo.open": "Демо в новом окне",
        "demo.run": "Запустить демо",
        "compare.pros": "Достоинства",
        "compare.cons": "Недостатки",
    },
    "en": {
        "block_title.smart": "Please note:",
        "block_title.warn": "Important:",
        "block_title.ponder": "Question:",
        "demo.open": "Demo in new window",
        "demo.run": "Run the demo",
        "compare.pros": "Advantages",
        "compare.cons": "Drawbacks",
    },
}

SUPPORTED_LOCALES: tuple[str, ...] = tuple(LOCALIZED_STRINGS)

# =============================================================================
# Security Constants
# =============================================================================

# Untrusted iframes never get a smaller explicit height than this
UNTRUSTED_IFRAME_MIN_HEIGHT = 800

RELATIVE_SRC_ERROR = "src must be relative, protocol not allowed"
PROTOCOL_SEPARATOR = "://"

IFRAME_RESIZE_ONLOAD = (
    'require("client/head").iframeResize(this, function(err,height) { if (height) this.style.height = height })'
)
DEMO_RUN_ONCLICK = "runDemo(this)"

# =============================================================================
# Parser Defaults
# =============================================================================

DEFAULT_LOCALE: Locale = "ru"
DEFAULT_STRICT_MODE = False
DEFAULT_MAX_NESTING_DEPTH = 64
DEFAULT_STATIC_HOST = ""
DEFAULT_RESOURCE_WEB_ROOT = ""

# Serialization schema version for JSON hand-off
AST_SCHEMA_VERSION = 1

# Configuration discovery
CONFIG_ENV_VAR = "LESSONMARK_CONFIG"
CONFIG_FILENAMES: tuple[str, ...] = (".lessonmark.toml", ".lessonmark.yaml", ".lessonmark.yml", ".lessonmark.json")
