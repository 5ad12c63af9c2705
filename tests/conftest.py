"""Pytest configuration and shared fixtures for the lessonmark test suite."""

import pytest

from lessonmark.context import Metadata, ParseContext
from lessonmark.options import ParserOptions
from lessonmark.parsers.tags import TagParser
from lessonmark.parsers.tokens import TagToken


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests - fast, isolated component tests")
    config.addinivalue_line("markers", "integration: Integration tests - component interaction tests")
    config.addinivalue_line("markers", "cli: Tests related to command-line interface")
    config.addinivalue_line("markers", "security: Tests of trust-dependent behavior")


@pytest.fixture
def options() -> ParserOptions:
    """Options with a static host and resource root set."""
    return ParserOptions(static_host="https://static.example.org", resource_web_root="/lesson/intro")


@pytest.fixture
def trusted_context(options: ParserOptions) -> ParseContext:
    """Context for a document written by a site editor."""
    return ParseContext(trusted=True, options=options, metadata=Metadata())


@pytest.fixture
def untrusted_context(options: ParserOptions) -> ParseContext:
    """Context for a document written by an end user."""
    return ParseContext(trusted=False, options=options, metadata=Metadata())


@pytest.fixture
def parse_tag():
    """Parse a single tag token in a given context.

    Usage: ``parse_tag(context, "img", 'src="a.png"', body="", is_figure=False)``
    """

    def _parse(context: ParseContext, name: str, attrs: str = "", body: str = "", is_figure: bool = False):
        return TagParser(TagToken(name, attrs, body, is_figure), context).parse()

    return _parse
