"""Common definitions shared across the toolkit."""

from __future__ import annotations

from .templates import (
    Template,
    TEMPLATES,
    DEFAULT_TEMPLATE_KEY,
    get_template,
    supported_template_keys,
    UnsupportedTemplateError,
)

__all__ = [
    "Template",
    "TEMPLATES",
    "DEFAULT_TEMPLATE_KEY",
    "get_template",
    "supported_template_keys",
    "UnsupportedTemplateError",
]
