"""
Module: builder

Purpose:
    Album building pipeline. Lays a sequence of images out on a uniform
    tile grid, renders each page with its page number, and packages the
    pages as a single preview image or a ZIP archive.

Key Functions:
    - calculate_tile_geometry(): Tile size and tiles per page
    - plan_pages(): Page slices for the input sequence
    - compose_page(): Render one page
    - generate_album(): Main entry point for export
    - build_album(): Export from raw inputs

Key Classes:
    - TileGeometry, PageSlice: Layout models
    - AlbumArtifact: Output of a run
    - StatusEvent, Phase, CancelToken: Run reporting and control
    - AlbumError and subclasses: Failures

Dependencies:
    - PIL: Image decoding, drawing, encoding
    - album_builder.core.models: LayoutOptions, ImageAsset

Used By:
    - album_builder.cli: Command-line interface
"""

from .errors import (
    AlbumError,
    InvalidLayoutError,
    DecodeError,
    EncodeError,
    GenerationCancelled,
)
from .events import Phase, StatusEvent, CancelToken, format_progress
from .layout import TileGeometry, PageSlice, calculate_tile_geometry, plan_pages
from .output import RenderedPage, compose_page
from .controller import (
    AlbumArtifact,
    generate_album,
    generate_single_page,
    generate_full_album,
    build_album,
)

__all__ = [
    # Errors
    "AlbumError",
    "InvalidLayoutError",
    "DecodeError",
    "EncodeError",
    "GenerationCancelled",
    # Events
    "Phase",
    "StatusEvent",
    "CancelToken",
    "format_progress",
    # Layout
    "TileGeometry",
    "PageSlice",
    "calculate_tile_geometry",
    "plan_pages",
    # Output
    "RenderedPage",
    "compose_page",
    # Controller
    "AlbumArtifact",
    "generate_album",
    "generate_single_page",
    "generate_full_album",
    "build_album",
]
