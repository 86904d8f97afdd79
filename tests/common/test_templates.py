"""
Unit tests for the template catalog.
"""

import pytest

from album_builder.common import (
    TEMPLATES,
    Template,
    UnsupportedTemplateError,
    get_template,
    supported_template_keys,
)


class TestTemplateCatalog:
    """Tests for catalog lookup."""

    def test_supported_keys_when_listed_then_catalog_order(self):
        assert list(supported_template_keys()) == ["a4", "a5", "a6", "b5", "b6"]

    def test_get_template_when_a4_then_known_dimensions(self):
        # Act
        template = get_template("a4")

        # Assert
        assert template.name == "A4"
        assert template.size == (2976, 4175)
        assert template.safe_inset == 44

    def test_get_template_when_none_then_default_a4(self):
        assert get_template(None) is TEMPLATES["a4"]

    def test_get_template_when_upper_case_then_found(self):
        assert get_template(" B6 ").key == "b6"

    def test_get_template_when_unknown_then_raises(self):
        with pytest.raises(UnsupportedTemplateError, match="letter"):
            get_template("letter")

    def test_unsupported_template_error_is_key_error(self):
        assert issubclass(UnsupportedTemplateError, KeyError)


class TestTemplate:
    """Tests for Template validation."""

    def test_init_when_non_positive_size_then_raises(self):
        with pytest.raises(ValueError, match="positive size"):
            Template("x", "X", 0, 100, 0)

    def test_init_when_negative_inset_then_raises(self):
        with pytest.raises(ValueError, match="safe_inset"):
            Template("x", "X", 100, 100, -1)

    def test_templates_are_immutable(self):
        with pytest.raises(AttributeError):
            TEMPLATES["a4"].width = 10
