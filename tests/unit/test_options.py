"""Unit tests for parser options."""

import pytest

from lessonmark.exceptions import ConfigurationError
from lessonmark.options import ParserOptions


@pytest.mark.unit
class TestParserOptions:
    """Tests for ParserOptions defaults and validation."""

    def test_defaults(self):
        options = ParserOptions()

        assert options.static_host == ""
        assert options.resource_web_root == ""
        assert options.locale == "ru"
        assert options.strict_mode is False
        assert options.max_nesting_depth == 64
        assert options.untrusted_iframe_min_height == 800

    def test_create_updated_returns_new_instance(self):
        options = ParserOptions()
        updated = options.create_updated(locale="en", strict_mode=True)

        assert updated.locale == "en"
        assert updated.strict_mode is True
        assert options.locale == "ru"

    def test_create_updated_validates(self):
        with pytest.raises(ConfigurationError):
            ParserOptions().create_updated(max_nesting_depth=0)

    def test_unsupported_locale(self):
        with pytest.raises(ConfigurationError) as exc_info:
            ParserOptions(locale="fr")  # type: ignore[arg-type]

        assert exc_info.value.parameter_name == "locale"
        assert exc_info.value.parameter_value == "fr"

    @pytest.mark.parametrize("value", [0, -1])
    def test_non_positive_depth(self, value):
        with pytest.raises(ConfigurationError):
            ParserOptions(max_nesting_depth=value)

    @pytest.mark.parametrize("value", ["64", 6.4, True])
    def test_depth_must_be_int(self, value):
        with pytest.raises(ConfigurationError):
            ParserOptions(max_nesting_depth=value)  # type: ignore[arg-type]

    def test_negative_iframe_height(self):
        with pytest.raises(ConfigurationError):
            ParserOptions(untrusted_iframe_min_height=-1)

    def test_text_uses_locale(self):
        assert ParserOptions().text("compare.pros") == "Достоинства"
        assert ParserOptions(locale="en").text("compare.pros") == "Advantages"

    def test_from_mapping(self):
        options = ParserOptions.from_mapping({"locale": "en", "static_host": "https://cdn.example"})

        assert options == ParserOptions(locale="en", static_host="https://cdn.example")

    def test_from_mapping_rejects_unknown_keys(self):
        with pytest.raises(ConfigurationError, match="colour"):
            ParserOptions.from_mapping({"colour": "red"})

    def test_field_metadata_has_help(self):
        import dataclasses

        for field in dataclasses.fields(ParserOptions):
            assert field.metadata.get("help"), field.name
