"""
Module: builder.output.overlay

Purpose:
    Stamp the page number onto a composed page. The number alternates
    between the bottom-right and bottom-left corners by page parity,
    starting from the configured corner.

Key Functions:
    - is_right_aligned(): Which corner a page's number goes in
    - number_anchor(): Baseline anchor point for a page's number
    - apply_page_number(): Draw the number onto a surface

Dependencies:
    - builder.output.surface: Surface
    - album_builder.core.models: LayoutOptions, NumberCorner

Used By:
    - builder.output.compositor: After all tiles are drawn
"""

from __future__ import annotations

import logging
from typing import Tuple

from album_builder.common.templates import Template
from album_builder.core.models import LayoutOptions, NumberCorner

from .surface import Surface

logger = logging.getLogger(__name__)


def is_right_aligned(page_index: int, corner: NumberCorner) -> bool:
    """
    Whether the page number goes in the right-hand corner.

    Even pages use the configured corner, odd pages the opposite one.

    Example:
        >>> [is_right_aligned(i, NumberCorner.RIGHT_BOTTOM) for i in range(3)]
        [True, False, True]
    """
    return (page_index % 2 == 0) == (corner is NumberCorner.RIGHT_BOTTOM)


def number_anchor(template: Template, right_aligned: bool) -> Tuple[int, int]:
    """
    Baseline anchor of the page number, two safe insets in from the corner.

    Returns:
        (x, y) in pixels; x is where the text ends (right) or starts (left)
    """
    inset = template.safe_inset * 2
    x = template.width - inset if right_aligned else inset
    y = template.height - inset
    return x, y


def apply_page_number(
    surface: Surface,
    page_index: int,
    options: LayoutOptions,
    template: Template,
) -> int:
    """
    Draw the page number for ``page_index`` onto the surface.

    Args:
        surface: Composed page surface
        page_index: 0-based page index
        options: Numbering start, corner, size and colour
        template: Page preset (anchor geometry)

    Returns:
        The number that was drawn (start_number + page_index)
    """
    number = options.start_number + page_index
    right = is_right_aligned(page_index, options.number_corner)
    anchor = number_anchor(template, right)

    surface.draw_text(
        str(number),
        anchor,
        size=options.number_size,
        color=options.number_color,
        align="right" if right else "left",
    )
    logger.debug(f"Stamped page number {number} at {anchor} ({'right' if right else 'left'})")
    return number
