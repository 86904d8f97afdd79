"""
Module: builder.controller

Purpose:
    Orchestrate the album export pipeline.
    Plan pages → Compose each page → Package (single image or archive)

Key Functions:
    - generate_album(): Shared pipeline for both modes
    - generate_single_page(): Preview mode, first page as page_1.png
    - generate_full_album(): Batch mode, every page in album.zip
    - build_album(): Convenience entry point from raw inputs

Key Classes:
    - AlbumArtifact: Downloadable output of a run

Dependencies:
    - builder.layout: Tile geometry and pagination
    - builder.output: Page composition and archiving
    - builder.events: Status events and cancellation

Used By:
    - album_builder.cli: Command-line trigger
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, Optional, Sequence, Tuple

from album_builder.common.templates import Template, get_template
from album_builder.core.models import ImageAsset, LayoutOptions

from .errors import AlbumError, InvalidLayoutError
from .events import CancelToken, EventCallback, Phase, StatusEvent
from .images import ImageDecoder, PillowDecoder, reference_aspect_ratio
from .layout import PageSlice, TileGeometry, calculate_tile_geometry, plan_pages
from .output import (
    ALBUM_ARCHIVE_NAME,
    AlbumArchive,
    RenderedPage,
    SurfaceFactory,
    compose_page,
)

logger = logging.getLogger(__name__)

PNG_MEDIA_TYPE = "image/png"
ZIP_MEDIA_TYPE = "application/zip"


@dataclass(frozen=True)
class AlbumArtifact:
    """
    Downloadable output of a generation run (immutable).

    Attributes:
        filename: page_1.png (single-page mode) or album.zip (batch mode)
        data: File contents
        media_type: MIME type of data
        page_count: Number of pages composed into the artifact

    Example:
        >>> artifact = generate_full_album(assets, options, template, geometry)
        >>> artifact.filename, artifact.page_count
        ('album.zip', 3)
    """
    filename: str
    data: bytes
    media_type: str
    page_count: int

    def write_to(self, directory: Path) -> Path:
        """
        Write the artifact into a directory, creating it if needed.

        Returns:
            Path of the written file
        """
        directory = Path(directory)
        directory.mkdir(parents=True, exist_ok=True)
        path = directory / self.filename
        path.write_bytes(self.data)
        logger.info(f"Wrote {self.filename} ({len(self.data)} bytes) to {directory}")
        return path

    def __repr__(self) -> str:
        return f"AlbumArtifact({self.filename!r}, pages={self.page_count}, {len(self.data)} bytes)"


def generate_album(
    assets: Sequence[ImageAsset],
    options: LayoutOptions,
    template: Template,
    geometry: TileGeometry,
    *,
    single_page_only: bool = False,
    on_event: Optional[EventCallback] = None,
    cancel_token: Optional[CancelToken] = None,
    decoder: Optional[ImageDecoder] = None,
    surface_factory: Optional[SurfaceFactory] = None,
) -> AlbumArtifact:
    """
    Run the export pipeline for one generation request.

    Pipeline:
    1. Plan pages (truncated to the first page in single-page mode)
    2. Report STARTED; the caller disables its triggers until a
       terminal event arrives
    3. Compose pages in order, reporting PAGE_COMPLETE after each
    4. Return page_1.png, or all pages bundled as album.zip
    5. Report COMPLETE, or ABORTED with the error before re-raising

    The pipeline is not reentrant: callers must not start a second run
    until the first has reported a terminal event.

    Args:
        assets: Ordered input images
        options: Clamped layout options
        template: Page preset
        geometry: Tile geometry computed for this template/options/ratio
        single_page_only: Compose only the first page as a preview
        on_event: Receives StatusEvents
        cancel_token: Checked between pages and between tiles
        decoder: Image decoder (default PillowDecoder)
        surface_factory: Surface constructor (default PillowSurface)

    Returns:
        AlbumArtifact

    Raises:
        InvalidLayoutError: If no tile fits on a page
        DecodeError: If any input image fails to decode
        EncodeError: If a page fails to encode
        GenerationCancelled: If the token was cancelled
    """
    emit = on_event or _ignore_event
    assets = tuple(assets)
    pages = plan_pages(len(assets), geometry.max_per_page, single_page_only)
    decoder = decoder or PillowDecoder()
    start_time = time.perf_counter()

    if not pages:
        error = InvalidLayoutError(
            f"No image fits on a {template.name} page with these options "
            f"(tile {geometry.tile_width}x{geometry.tile_height:.0f}px)"
        )
        logger.error(str(error))
        emit(StatusEvent(Phase.ABORTED, page_count=0, error=error))
        raise error

    mode = "single page" if single_page_only else "full album"
    logger.info(
        f"Starting {mode} generation: {len(assets)} images, "
        f"{len(pages)} pages, {geometry.max_per_page} per page"
    )
    emit(StatusEvent(Phase.STARTED, page_count=len(pages)))

    rendered = _render_pages(
        assets, pages, options, template, geometry,
        emit=emit,
        cancel_token=cancel_token,
        decoder=decoder,
        surface_factory=surface_factory,
    )
    try:
        if single_page_only:
            artifact = _export_single(rendered)
        else:
            artifact = _export_archive(rendered)
    except Exception as e:
        logger.error(f"Album generation aborted: {e}")
        emit(StatusEvent(Phase.ABORTED, page_count=len(pages), error=e))
        raise

    elapsed = time.perf_counter() - start_time
    logger.info(f"Generated {artifact.filename} with {artifact.page_count} pages in {elapsed:.2f}s")
    emit(StatusEvent(Phase.COMPLETE, page_count=len(pages)))
    return artifact


def generate_single_page(
    assets: Sequence[ImageAsset],
    options: LayoutOptions,
    template: Template,
    geometry: TileGeometry,
    **kwargs,
) -> AlbumArtifact:
    """Compose only the first page and return it as page_1.png."""
    return generate_album(assets, options, template, geometry, single_page_only=True, **kwargs)


def generate_full_album(
    assets: Sequence[ImageAsset],
    options: LayoutOptions,
    template: Template,
    geometry: TileGeometry,
    **kwargs,
) -> AlbumArtifact:
    """Compose every page and return them bundled as album.zip."""
    return generate_album(assets, options, template, geometry, single_page_only=False, **kwargs)


def build_album(
    assets: Sequence[ImageAsset],
    options: LayoutOptions,
    template_key: Optional[str] = None,
    *,
    single_page_only: bool = False,
    **kwargs,
) -> Tuple[AlbumArtifact, TileGeometry]:
    """
    Build an album from raw inputs.

    Looks up the template, takes the reference aspect ratio from the first
    image, computes the tile geometry and runs generate_album().

    Args:
        assets: Ordered input images (at least one)
        options: Clamped layout options
        template_key: Catalog key (default A4)
        single_page_only: Preview mode
        **kwargs: Forwarded to generate_album()

    Returns:
        Tuple of (artifact, geometry used)

    Raises:
        AlbumError: If there are no images or generation fails
        UnsupportedTemplateError: If the template key is unknown
    """
    if not assets:
        raise AlbumError("No images to lay out")

    template = get_template(template_key)
    ratio = reference_aspect_ratio(assets[0], kwargs.get("decoder"))
    geometry = calculate_tile_geometry(template, options, ratio)
    artifact = generate_album(
        assets, options, template, geometry,
        single_page_only=single_page_only,
        **kwargs,
    )
    return artifact, geometry


def _render_pages(
    assets: Tuple[ImageAsset, ...],
    pages: Tuple[PageSlice, ...],
    options: LayoutOptions,
    template: Template,
    geometry: TileGeometry,
    *,
    emit: EventCallback,
    cancel_token: Optional[CancelToken],
    decoder: ImageDecoder,
    surface_factory: Optional[SurfaceFactory],
) -> Iterator[RenderedPage]:
    """
    Compose planned pages one at a time, in page order.

    Lazy: each page is composed only when the consumer asks for it, so
    at most one page surface exists at a time.
    """
    page_count = len(pages)
    for page in pages:
        if cancel_token is not None:
            cancel_token.raise_if_cancelled()

        rendered = compose_page(
            page, assets, geometry, options, template,
            decoder=decoder,
            surface_factory=surface_factory,
            cancel_token=cancel_token,
        )
        emit(StatusEvent(Phase.PAGE_COMPLETE, page_index=page.index, page_count=page_count))
        yield rendered


def _export_single(rendered: Iterator[RenderedPage]) -> AlbumArtifact:
    page = next(rendered)
    return AlbumArtifact(
        filename=page.filename,
        data=page.data,
        media_type=PNG_MEDIA_TYPE,
        page_count=1,
    )


def _export_archive(rendered: Iterator[RenderedPage]) -> AlbumArtifact:
    with AlbumArchive() as archive:
        for page in rendered:
            archive.add_page(page)
        data = archive.finalize()
        page_count = len(archive.names)
    return AlbumArtifact(
        filename=ALBUM_ARCHIVE_NAME,
        data=data,
        media_type=ZIP_MEDIA_TYPE,
        page_count=page_count,
    )


def _ignore_event(event: StatusEvent) -> None:
    pass
