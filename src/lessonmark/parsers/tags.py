#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/lessonmark/parsers/tags.py
"""Tag classification and per-tag rules.

This module turns one tag token into one presentation node. Tags fall into
three groups: admonition blocks, source listings, and tags with a dedicated
rule registered in this module. What a tag produces can depend on the trust
level of its author: trusted editors may inject page head markup, pass any
image attribute through or set small iframe heights, while untrusted authors
get a safer rendition of the same markup.

Node attrs built here are not checked by a sanitizer downstream, so every
rule must make sure that what it emits is safe for the context's trust level.
"""

from __future__ import annotations

import logging
import re
from typing import Callable

from lessonmark.ast import (
    CompositeElement,
    CutMarker,
    EditLink,
    Element,
    ErrorPlaceholder,
    ExampleEmbed,
    Fragment,
    ImageTag,
    KeyLabel,
    Node,
    SourceEmbed,
    Text,
    VerbatimText,
)
from lessonmark.constants import (
    BLOCK_TAGS,
    DEMO_RUN_ONCLICK,
    IFRAME_RESIZE_ONLOAD,
    NAMED_TAGS,
    SOURCE_TAGS,
    UNTRUSTED_IMG_ATTRIBUTES,
)
from lessonmark.context import ParseContext
from lessonmark.exceptions import ConfigurationError, TagParseError, UnknownTagError
from lessonmark.parsers.attrs import parse_attributes
from lessonmark.parsers.body import BodyParser
from lessonmark.parsers.tokens import TagToken
from lessonmark.utils.security import has_protocol, parse_leading_int, validate_relative_src

logger = logging.getLogger(__name__)

TagRule = Callable[["TagParser"], Node]

_RULES: dict[str, TagRule] = {}


def tag_rule(name: str) -> Callable[[TagRule], TagRule]:
    """Register the decorated method as the rule for tag ``name``."""

    def decorator(func: TagRule) -> TagRule:
        if name in _RULES:
            raise ConfigurationError(f"Duplicate rule for tag {name!r}")
        _RULES[name] = func
        return func

    return decorator


class TagParser:
    """Interpret a single tag token.

    Parameters
    ----------
    token : TagToken
        The tag to interpret
    context : ParseContext
        Context of the document being parsed

    Raises
    ------
    ConfigurationError
        If the context has no trust flag

    Examples
    --------
        >>> context = ParseContext(trusted=False)
        >>> TagParser(TagToken("img", 'src="a.png" onclick="x"'), context).parse()
        ImageTag(attrs={'src': 'a.png'}, is_figure=False)

    """

    def __init__(self, token: TagToken, context: ParseContext):
        if not isinstance(context.trusted, bool):
            raise ConfigurationError(
                "Parse context must have a trusted flag",
                parameter_name="trusted",
                parameter_value=context.trusted,
            )

        self.token = token
        self.name = token.name
        self.params_string = token.attrs
        self.body = token.body
        self.context = context
        self.options = context.options
        self.trusted = context.trusted

        self.params = parse_attributes(self.params_string)

    def parse(self) -> Node:
        """Interpret the tag.

        Every branch passes through the same recovery boundary: a
        ``TagParseError`` becomes an ``ErrorPlaceholder`` so the rest of the
        document still renders, unless ``strict_mode`` is set.

        Returns
        -------
        Node
            The node for this tag, or an ErrorPlaceholder

        Raises
        ------
        UnknownTagError
            If the tag is neither a block, a source listing, nor a named rule
        TagParseError
            In strict mode, if the tag is malformed

        """
        rule = self._resolve_rule()

        try:
            return rule(self)
        except TagParseError as e:
            if e.tag_name is None:
                e.tag_name = self.name
            if self.options.strict_mode:
                raise
            logger.warning(f"[{e.tag_name}] {e.message}")
            return ErrorPlaceholder(tag_name=e.tag_name, message=e.message)

    def _resolve_rule(self) -> TagRule:
        if self.name in BLOCK_TAGS:
            return TagParser._parse_block
        if self.name in SOURCE_TAGS:
            return TagParser._parse_source

        rule = _RULES.get(self.name)
        if rule is None:
            raise UnknownTagError(self.name)

        logger.debug(f"Dispatching [{self.name}] to {rule.__name__}")
        return rule

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _parse_markup(self, text: str) -> tuple[Node, ...]:
        """Parse ``text`` as nested markup one level deeper."""
        return tuple(BodyParser(text, self.context.nested()).parse())

    def _require_param(self, param_name: str) -> str:
        value = self.params.get(param_name)
        if not value:
            raise TagParseError(f"{self.name}: attribute required {param_name}")
        return value

    # ------------------------------------------------------------------
    # Block and source tags
    # ------------------------------------------------------------------

    def _parse_block(self) -> Node:
        header: list[Node] = []
        if self.params.get("header"):
            header.append(Element("span", "", {"class": "important__type"}))
            header.append(
                CompositeElement("h3", self._parse_markup(self.params["header"]), {"class": "important__title"})
            )
        else:
            title = self.options.text(f"block_title.{self.name}")
            header.append(Element("span", title, {"class": "important__type"}))

        return CompositeElement(
            "div",
            (
                CompositeElement("div", tuple(header), {"class": "important__header"}),
                CompositeElement("div", self._parse_markup(self.body), {"class": "important__content"}),
            ),
            {"class": f"important important_{self.name}"},
        )

    def _parse_source(self) -> Node:
        src = self.params.get("src")
        if src:
            validate_relative_src(src)

        return SourceEmbed(kind=self.name, body=self.body, src=src, params=dict(self.params))

    # ------------------------------------------------------------------
    # Named rules
    # ------------------------------------------------------------------

    @tag_rule("demo")
    def _parse_demo(self) -> Node:
        src = self.params.get("src")
        if src:
            return Element("a", self.options.text("demo.open"), {"href": src + "/", "target": "_blank"})

        return Element("button", self.options.text("demo.run"), {"onclick": DEMO_RUN_ONCLICK})

    @tag_rule("head")
    def _parse_head(self) -> Node:
        if self.trusted:
            self.context.metadata.append_head(self.body)
        return Text("")

    @tag_rule("libs")
    def _parse_libs(self) -> Node:
        if self.trusted:
            for line in self.body.split("\n"):
                lib = line.strip()
                if lib:
                    self.context.metadata.add_lib(lib)
        return Text("")

    @tag_rule("importance")
    def _parse_importance(self) -> Node:
        if self.trusted:
            importance = parse_leading_int(self.params_string)
            if importance is None:
                raise TagParseError(f"importance: expected a number, got {self.params_string.strip()!r}")
            self.context.metadata.set_importance(importance)
        return Text("")

    @tag_rule("edit")
    def _parse_edit(self) -> Node:
        src = validate_relative_src(self._require_param("src"))
        return EditLink(body=self.body, attrs={"src": src})

    @tag_rule("cut")
    def _parse_cut(self) -> Node:
        return CutMarker()

    @tag_rule("key")
    def _parse_key(self) -> Node:
        return KeyLabel(self.params_string.strip())

    @tag_rule("summary")
    def _parse_summary(self) -> Node:
        content = CompositeElement("div", self._parse_markup(self.body), {"class": "summary__content"})
        return CompositeElement("div", (content,), {"class": "summary"})

    @tag_rule("iframe")
    def _parse_iframe(self) -> Node:
        src = self._require_param("src")

        if has_protocol(src) and not self.trusted:
            raise TagParseError("protocol not allowed")

        attrs = {
            "class": "result__iframe",
            "data-trusted": "1" if self.trusted else "0",
        }

        if self.params.get("height"):
            height = parse_leading_int(self.params["height"])
            if height is None:
                raise TagParseError(f"iframe: height must be a number, got {self.params['height']!r}")
            if not self.trusted:
                height = max(height, self.options.untrusted_iframe_min_height)
            attrs["style"] = f"height: {height}px"
        else:
            attrs["data-autoresize"] = "1"
            attrs["onload"] = IFRAME_RESIZE_ONLOAD

        # [iframe src="dir"] is a resource on the static host,
        # [iframe src="/ajax/service"] is a dynamic service on the site itself
        if not src.startswith("/") and not has_protocol(src):
            src = f"{self.context.static_host}{self.context.resource_web_root}/{src}"

        attrs["src"] = src + "/"

        if "play" in self.params:
            attrs["data-play"] = "1"
        if "link" in self.params:
            attrs["data-external"] = "1"
        if "zip" in self.params:
            attrs["data-zip"] = "1"

        return Element("iframe", "", attrs)

    @tag_rule("quote")
    def _parse_quote(self) -> Node:
        children = list(self._parse_markup(self.body))

        if self.params.get("author"):
            children.append(Element("div", self.params["author"], {"class": "quote-author"}))

        content = CompositeElement("div", tuple(children), {"class": "quote-author"})
        return CompositeElement("div", (content,), {"class": "quote"})

    @tag_rule("hide")
    def _parse_hide(self) -> Node:
        children: list[Node] = []

        if self.params.get("text"):
            link_text = self._parse_markup(self.params["text"])
            children.append(CompositeElement("a", link_text, {"class": "hide-link", "href": "javascript:;"}))

        children.append(CompositeElement("div", self._parse_markup(self.body), {"class": "hide-content"}))
        return CompositeElement("div", tuple(children), {"class": "hide-close"})

    @tag_rule("pre")
    def _parse_pre(self) -> Node:
        return VerbatimText(self.body)

    @tag_rule("compare")
    def _parse_compare(self) -> Node:
        pros: list[Node] = []
        cons: list[Node] = []

        for part in re.split(r"\n+", self.body):
            item = part.strip()
            if not item:
                continue
            if item[0] == "+":
                pros.append(CompositeElement("li", self._parse_markup(item[1:]), {"class": "plus"}))
            elif item[0] == "-":
                cons.append(CompositeElement("li", self._parse_markup(item[1:]), {"class": "minus"}))
            else:
                raise TagParseError("compare items should start with either + or -")

        with_titles = bool(pros) and bool(cons)
        columns: list[Node] = []

        for items, title_key, column_class in (
            (pros, "compare.pros", "balance__pluses"),
            (cons, "compare.cons", "balance__minuses"),
        ):
            if not items:
                continue
            if with_titles:
                items.insert(0, Element("h3", self.options.text(title_key), {"class": "balance__title"}))
            column = CompositeElement("ul", tuple(items), {"class": "balance__list"})
            columns.append(CompositeElement("div", (column,), {"class": column_class}))

        balance_class = "balance" if with_titles else "balance balance_single"
        content = CompositeElement("div", tuple(columns), {"class": "balance__content"})
        return CompositeElement("div", (content,), {"class": balance_class})

    @tag_rule("online")
    def _parse_online(self) -> Node:
        if self.context.export:
            return Text("")
        return Fragment(self._parse_markup(self.body))

    @tag_rule("offline")
    def _parse_offline(self) -> Node:
        if not self.context.export:
            return Text("")
        return Fragment(self._parse_markup(self.body))

    @tag_rule("img")
    def _parse_img(self) -> Node:
        self._require_param("src")

        if self.trusted:
            attrs = dict(self.params)
        else:
            attrs = {key: self.params[key] for key in UNTRUSTED_IMG_ATTRIBUTES if key in self.params}

        return ImageTag(attrs=attrs, is_figure=self.token.is_figure)

    @tag_rule("example")
    def _parse_example(self) -> Node:
        validate_relative_src(self._require_param("src"))
        return ExampleEmbed(params=dict(self.params))


def _check_rule_table() -> None:
    """Check that every named tag has exactly one rule and no rule is orphaned."""
    missing = NAMED_TAGS - _RULES.keys()
    extra = _RULES.keys() - NAMED_TAGS
    overlap = NAMED_TAGS & (BLOCK_TAGS | SOURCE_TAGS)
    if missing or extra or overlap:
        raise ConfigurationError(
            "Tag rule table is inconsistent: "
            f"missing={sorted(missing)}, unregistered={sorted(extra)}, shadowed={sorted(overlap)}"
        )


_check_rule_table()


def parse_tag(token: TagToken, context: ParseContext) -> Node:
    """Interpret one tag token in ``context``; see ``TagParser``."""
    return TagParser(token, context).parse()
