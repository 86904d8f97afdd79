"""
Module: builder.output.compositor

Purpose:
    Render one page of the album: fill the background, draw each image of
    the page's slice into its grid cell, stamp the page number, and encode
    the result to PNG bytes.

Key Functions:
    - compose_page(): Main page composition function

Key Classes:
    - RenderedPage: Encoded output of one page

Algorithm:
    Strictly sequential within a page:
    1. Allocate a template-sized surface filled with the background colour
    2. For each image in slice order: decode, draw stretched into its
       cell, release the decoded image before the next decode
    3. Stamp the page number in the alternating bottom corner
    4. Encode to PNG and release the surface

Dependencies:
    - builder.layout: PageSlice, TileGeometry, place_tiles
    - builder.images: ImageDecoder, PillowDecoder
    - builder.output.surface: Surface, pillow_surface
    - builder.output.overlay: apply_page_number

Used By:
    - builder.controller: Export pipeline
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Sequence

from album_builder.common.templates import Template
from album_builder.core.models import ImageAsset, LayoutOptions

from ..errors import EncodeError
from ..events import CancelToken
from ..images import ImageDecoder, PillowDecoder
from ..layout import PageSlice, TileGeometry, place_tiles
from .overlay import apply_page_number
from .surface import SurfaceFactory, pillow_surface

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RenderedPage:
    """
    Encoded output of one composed page (immutable).

    Attributes:
        index: Page index (0-indexed)
        number: Page number printed on the page
        filename: Archive/download name, page_<index+1>.png
        data: PNG bytes
    """
    index: int
    number: int
    filename: str
    data: bytes

    def __repr__(self) -> str:
        return f"RenderedPage({self.filename!r}, number={self.number}, {len(self.data)} bytes)"


def compose_page(
    page: PageSlice,
    assets: Sequence[ImageAsset],
    geometry: TileGeometry,
    options: LayoutOptions,
    template: Template,
    *,
    decoder: Optional[ImageDecoder] = None,
    surface_factory: Optional[SurfaceFactory] = None,
    cancel_token: Optional[CancelToken] = None,
) -> RenderedPage:
    """
    Compose one page and encode it.

    Every image is forced into the uniform cell size; images whose own
    aspect ratio differs from the reference image are stretched.

    Args:
        page: Slice of ``assets`` that belongs on this page
        assets: Full input sequence of the run
        geometry: Tile geometry for the run
        options: Layout options
        template: Page preset
        decoder: Image decoder (default PillowDecoder)
        surface_factory: Surface constructor (default PillowSurface)
        cancel_token: Checked before each tile is drawn

    Returns:
        RenderedPage with PNG bytes

    Raises:
        DecodeError: If any image on the page fails to decode
        EncodeError: If the finished page cannot be encoded
        GenerationCancelled: If the token is cancelled mid-page
    """
    decoder = decoder or PillowDecoder()
    surface_factory = surface_factory or pillow_surface
    page_assets = assets[page.start:page.stop]
    placements = place_tiles(len(page_assets), geometry, options, template)

    with surface_factory(template.width, template.height) as surface:
        surface.fill(options.background_color)

        for asset, placement in zip(page_assets, placements):
            if cancel_token is not None:
                cancel_token.raise_if_cancelled()
            with decoder.open(asset) as image:
                surface.draw_image(image, placement.rect)
            logger.debug(
                f"Page {page.index + 1}: drew {asset.filename} at "
                f"({placement.left}, {placement.top})"
            )

        number = apply_page_number(surface, page.index, options, template)

        try:
            data = surface.encode()
        except (OSError, ValueError) as e:
            raise EncodeError(page.index, str(e)) from e

    logger.debug(f"Composed {page.filename}: {page.length} tiles, {len(data)} bytes")
    return RenderedPage(
        index=page.index,
        number=number,
        filename=page.filename,
        data=data,
    )
