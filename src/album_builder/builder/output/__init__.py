"""
Module: builder.output

Purpose:
    Page rendering and artifact packaging for the album builder.
    Draws pages onto raster surfaces and bundles them into an archive.

Key Functions:
    - compose_page(): Render one page to PNG bytes
    - apply_page_number(): Stamp the alternating page number

Key Classes:
    - Surface / PillowSurface: Drawing capability
    - RenderedPage: One encoded page
    - AlbumArchive: In-memory ZIP of pages

Dependencies:
    - PIL: Drawing and encoding
    - zipfile (std): Archives

Used By:
    - builder.controller: Pipeline orchestration
"""

from .surface import Surface, SurfaceFactory, PillowSurface, pillow_surface, load_bold_font
from .overlay import apply_page_number, is_right_aligned, number_anchor
from .compositor import RenderedPage, compose_page
from .zip_writer import AlbumArchive, ALBUM_ARCHIVE_NAME

__all__ = [
    "Surface",
    "SurfaceFactory",
    "PillowSurface",
    "pillow_surface",
    "load_bold_font",
    "apply_page_number",
    "is_right_aligned",
    "number_anchor",
    "RenderedPage",
    "compose_page",
    "AlbumArchive",
    "ALBUM_ARCHIVE_NAME",
]
