"""
Module: builder.layout

Purpose:
    Tile geometry and pagination for album building.
    Converts a template, options and a reference image ratio into a
    uniform grid, and the input sequence into page slices.

Key Functions:
    - calculate_tile_geometry(): Tile size and tiles per page
    - place_tiles(): Cell positions on one page
    - plan_pages(): Page slices for the input sequence

Key Classes:
    - TileGeometry: Uniform grid for one run
    - PageSlice: Images assigned to one page
    - TilePlacement: One positioned cell

Used By:
    - builder.controller: Export pipeline
    - builder.output.compositor: Page drawing
"""

from .models import TileGeometry, PageSlice, TilePlacement
from .tiles import calculate_tile_geometry, place_tiles
from .paginator import plan_pages

__all__ = [
    # Models
    "TileGeometry",
    "PageSlice",
    "TilePlacement",
    # Functions
    "calculate_tile_geometry",
    "place_tiles",
    "plan_pages",
]
