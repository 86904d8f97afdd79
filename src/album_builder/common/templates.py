"""
Module: common.templates

Purpose:
    Static catalog of printable page presets. Each template fixes the page
    raster size and the safe-area inset reserved at every edge.

Key Functions:
    - get_template(): Look up a template by key
    - supported_template_keys(): List all template keys in catalog order

Key Classes:
    - Template: Immutable page preset
    - UnsupportedTemplateError: Raised for unknown keys

Dependencies:
    - dataclasses (std)

Used By:
    - album_builder.builder.layout.tiles: Content area calculation
    - album_builder.builder.output.compositor: Page surface size
    - album_builder.cli: --template choices
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, Optional

__all__ = [
    "Template",
    "TEMPLATES",
    "DEFAULT_TEMPLATE_KEY",
    "get_template",
    "supported_template_keys",
    "UnsupportedTemplateError",
]


class UnsupportedTemplateError(KeyError):
    """Template key is not in the catalog."""
    pass


@dataclass(frozen=True)
class Template:
    """
    Page preset (immutable).

    Attributes:
        key: Catalog key (e.g., "a4")
        name: Human-readable name (e.g., "A4")
        width: Page raster width in pixels
        height: Page raster height in pixels
        safe_inset: Margin reserved at every edge, in pixels. Also the
            unit used to place the page number (two insets from the edge).

    Example:
        >>> get_template("a5").width
        2122
    """
    key: str
    name: str
    width: int
    height: int
    safe_inset: int

    def __post_init__(self) -> None:
        """Validate preset on construction."""
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"Template {self.key!r} must have positive size")
        if self.safe_inset < 0:
            raise ValueError(f"safe_inset must be non-negative: {self.safe_inset}")

    @property
    def size(self) -> tuple[int, int]:
        """(width, height) in pixels."""
        return self.width, self.height


TEMPLATES: Dict[str, Template] = {
    "a4": Template("a4", "A4", 2976, 4175, 44),
    "a5": Template("a5", "A5", 2122, 2976, 44),
    "a6": Template("a6", "A6", 1530, 2122, 44),
    "b5": Template("b5", "B5", 2591, 3624, 44),
    "b6": Template("b6", "B6", 1846, 2591, 44),
}

DEFAULT_TEMPLATE_KEY = "a4"


def supported_template_keys() -> Iterable[str]:
    """
    Return all template keys in catalog order.

    Example:
        >>> list(supported_template_keys())
        ['a4', 'a5', 'a6', 'b5', 'b6']
    """
    return list(TEMPLATES)


def get_template(key: Optional[str]) -> Template:
    """
    Get template by key.

    Args:
        key: Template key, case-insensitive. If None, uses the default (A4).

    Returns:
        The matching Template.

    Raises:
        UnsupportedTemplateError: If the key is not in the catalog.
    """
    normalized = (key or DEFAULT_TEMPLATE_KEY).strip().lower()
    try:
        return TEMPLATES[normalized]
    except KeyError:
        raise UnsupportedTemplateError(
            f"Unknown template {key!r}; expected one of: "
            f"{', '.join(supported_template_keys())}"
        ) from None
