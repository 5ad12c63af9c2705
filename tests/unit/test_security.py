"""Unit tests for source path and number helpers."""

import pytest

from lessonmark.constants import RELATIVE_SRC_ERROR
from lessonmark.exceptions import TagParseError
from lessonmark.utils.security import has_protocol, is_relative_src, parse_leading_int, validate_relative_src


@pytest.mark.unit
@pytest.mark.security
class TestRelativeSrcPolicy:
    """Tests for the relative path policy."""

    @pytest.mark.parametrize("src", ["task", "task/solution", "../shared/a.png", "a.js?v=1"])
    def test_relative(self, src):
        assert is_relative_src(src)
        assert validate_relative_src(src) == src

    @pytest.mark.parametrize(
        "src", ["/etc/passwd", "//cdn.example/x", "http://example.com", "javascript://x", "x/data://y"]
    )
    def test_not_relative(self, src):
        assert not is_relative_src(src)

        with pytest.raises(TagParseError) as exc_info:
            validate_relative_src(src)

        assert exc_info.value.message == RELATIVE_SRC_ERROR

    def test_has_protocol(self):
        assert has_protocol("https://example.com")
        assert not has_protocol("mailto:someone@example.com")


@pytest.mark.unit
class TestParseLeadingInt:
    """Tests for integer prefix parsing."""

    @pytest.mark.parametrize(
        "value,expected",
        [("300", 300), (" 42 ", 42), ("300px", 300), ("-5", -5), ("+7", 7), ("", None), ("px300", None)],
    )
    def test_values(self, value, expected):
        assert parse_leading_int(value) == expected
