"""
Module: builder.layout.tiles

Purpose:
    Tile layout engine. Derives the uniform cell size and the number of
    tiles per page from a template, the layout options and the aspect
    ratio of one reference image, and positions cells on a page.

Key Functions:
    - calculate_tile_geometry(): Template + options + ratio -> TileGeometry
    - place_tiles(): Cell positions for the images of one page

Algorithm:
    1. Content area = page minus safe inset and padding on both sides
    2. Tile width = (content width - column gaps) / columns, floored
    3. Tile height = tile width * reference ratio
    4. Rows = how many tile heights fit once the row gaps between
       them are taken out
    5. max_per_page = columns * rows

Dependencies:
    - builder.layout.models: TileGeometry, TilePlacement
    - album_builder.common.templates: Template
    - album_builder.core.models: LayoutOptions

Used By:
    - builder.controller: Export pipeline
    - builder.output.compositor: Tile drawing
    - album_builder.cli
"""

from __future__ import annotations

import logging
import math
from typing import List

from album_builder.common.templates import Template
from album_builder.core.models import LayoutOptions

from .models import TileGeometry, TilePlacement, round_px

logger = logging.getLogger(__name__)


def calculate_tile_geometry(
    template: Template,
    options: LayoutOptions,
    reference_aspect_ratio: float,
) -> TileGeometry:
    """
    Compute uniform tile geometry for a run.

    Total over its numeric domain: any combination that leaves no room
    (non-positive content area, zero-height tiles, a non-finite ratio)
    yields max_per_page == 0 instead of raising.

    Args:
        template: Page preset
        options: Clamped layout options
        reference_aspect_ratio: height / width of the reference image

    Returns:
        TileGeometry for the run

    Example:
        >>> square = Template("sq", "Square", 2000, 3000, 0)
        >>> options = LayoutOptions(columns=2, row_gap=0, column_gap=0,
        ...                         padding_x=0, padding_y=0)
        >>> calculate_tile_geometry(square, options, 1.0).max_per_page
        6
    """
    columns = options.columns
    content_width = template.width - template.safe_inset * 2 - options.padding_x * 2
    content_height = template.height - template.safe_inset * 2 - options.padding_y * 2

    column_gaps = max(columns - 1, 0)
    tile_width = math.floor((content_width - options.column_gap * column_gaps) / columns)

    ratio = reference_aspect_ratio
    if not math.isfinite(ratio) or ratio <= 0:
        logger.warning(f"Unusable reference aspect ratio {ratio!r}, no tiles fit")
        ratio = 0.0
    tile_height = tile_width * ratio

    rows = _fit_rows(content_height, tile_height, options.row_gap)
    if tile_width <= 0 or content_width <= 0:
        rows = 0

    geometry = TileGeometry(
        tile_width=tile_width,
        tile_height=tile_height,
        columns=columns,
        rows=rows,
        max_per_page=columns * rows,
    )
    logger.debug(
        f"Tile geometry for {template.name}: {tile_width}x{tile_height:.2f}px, "
        f"{columns} cols x {rows} rows = {geometry.max_per_page} per page"
    )
    return geometry


def _fit_rows(content_height: int, tile_height: float, row_gap: int) -> int:
    """
    Number of rows that fit, accounting for the gaps between them.

    Rows are first counted ignoring gaps; that count fixes how many gaps
    are subtracted before counting again.
    """
    if tile_height <= 0 or content_height <= 0:
        return 0
    rows_ignoring_gaps = math.floor(content_height / tile_height)
    row_gaps = max(rows_ignoring_gaps - 1, 0)
    rows = math.floor((content_height - row_gap * row_gaps) / tile_height)
    return max(rows, 0)


def place_tiles(
    count: int,
    geometry: TileGeometry,
    options: LayoutOptions,
    template: Template,
) -> List[TilePlacement]:
    """
    Position the first ``count`` cells of a page, row by row.

    Slot i sits at column i mod columns and row i // columns. Both edges
    of a cell are rounded half-up to whole pixels and the height is taken
    between them, so adjacent rows never overlap. With a fractional tile
    height, cell heights may differ by one pixel.

    Args:
        count: Number of images on the page
        geometry: Tile geometry for the run
        options: Layout options (gaps, paddings, columns)
        template: Page preset (safe inset)

    Returns:
        Placements in slot order
    """
    origin_x = template.safe_inset + options.padding_x
    origin_y = template.safe_inset + options.padding_y

    placements: List[TilePlacement] = []
    for slot in range(count):
        col = slot % options.columns
        row = slot // options.columns
        x = origin_x + col * (geometry.tile_width + options.column_gap)
        y = origin_y + row * (geometry.tile_height + options.row_gap)
        placements.append(TilePlacement(
            slot=slot,
            left=round_px(x),
            top=round_px(y),
            width=geometry.tile_width,
            height=round_px(y + geometry.tile_height) - round_px(y),
        ))
    return placements
