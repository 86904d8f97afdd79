"""
Module: builder.layout.models

Purpose:
    Data models for page layout.
    Immutable dataclasses describing tile geometry, page slices and
    tile placements.

Key Classes:
    - TileGeometry: Uniform cell size and tiles-per-page for a run
    - PageSlice: Contiguous range of input images assigned to one page
    - TilePlacement: One cell positioned on a page

Dependencies:
    - dataclasses (std)

Used By:
    - builder.layout.tiles: Creates TileGeometry and TilePlacements
    - builder.layout.paginator: Creates PageSlices
    - builder.output.compositor: Draws placements
"""

from __future__ import annotations

import math
from dataclasses import dataclass


def round_px(value: float) -> int:
    """Round a pixel coordinate half-up (0.5 goes to 1, 1.5 to 2)."""
    return math.floor(value + 0.5)


@dataclass(frozen=True)
class TileGeometry:
    """
    Uniform grid geometry for one run (immutable).

    All tiles share the same size; tile_height keeps the reference image's
    proportions and may be fractional.

    Attributes:
        tile_width: Cell width in pixels
        tile_height: Cell height in pixels (tile_width * reference ratio)
        columns: Cells per row
        rows: Rows that fit on a page
        max_per_page: columns * rows; 0 means no valid layout

    Example:
        >>> geometry = TileGeometry(1000, 1000.0, columns=2, rows=3, max_per_page=6)
        >>> geometry.cell_size
        (1000, 1000)
    """

    tile_width: int
    tile_height: float
    columns: int
    rows: int
    max_per_page: int

    @property
    def has_layout(self) -> bool:
        """True if at least one tile fits on a page."""
        return self.max_per_page > 0

    @property
    def cell_size(self) -> tuple[int, int]:
        """Nominal (width, height) in whole pixels, rounded half-up."""
        return self.tile_width, round_px(self.tile_height)


@dataclass(frozen=True)
class PageSlice:
    """
    Images assigned to one page: input offsets [start, stop).

    Attributes:
        index: Page index (0-indexed)
        start: First input offset (inclusive)
        stop: Last input offset (exclusive)

    Example:
        >>> page = PageSlice(index=2, start=12, stop=13)
        >>> page.length, page.filename
        (1, 'page_3.png')
    """

    index: int
    start: int
    stop: int

    @property
    def length(self) -> int:
        """Number of images on this page."""
        return self.stop - self.start

    @property
    def filename(self) -> str:
        """Output filename, 1-based: page_<index+1>.png."""
        return f"page_{self.index + 1}.png"

    def number(self, start_number: int) -> int:
        """Displayed page number for a numbering that starts at start_number."""
        return start_number + self.index


@dataclass(frozen=True)
class TilePlacement:
    """
    A cell positioned on a page.

    Attributes:
        slot: Slice-local index of the image (0-indexed)
        left: X offset from page left (in pixels)
        top: Y offset from page top (in pixels)
        width: Cell width
        height: Cell height
    """

    slot: int
    left: int
    top: int
    width: int
    height: int

    @property
    def box(self) -> tuple[int, int, int, int]:
        """(left, top, right, bottom) in pixels."""
        return self.left, self.top, self.left + self.width, self.top + self.height

    @property
    def rect(self) -> tuple[int, int, int, int]:
        """(left, top, width, height) in pixels, as Surface.draw_image takes it."""
        return self.left, self.top, self.width, self.height
