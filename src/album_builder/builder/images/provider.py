"""
Module: builder.images.provider

Purpose:
    Decoding capability for input images, plus input filtering and
    loading. The compositor only sees the ImageDecoder interface, so tests
    can swap in a decoder that fails on purpose.

Key Functions:
    - is_supported_image(): Extension check (jpg, jpeg, png, gif)
    - filter_image_files(): Keep supported paths, preserving order
    - load_image_assets(): Read supported files into ImageAssets
    - reference_aspect_ratio(): height / width of one image

Key Classes:
    - ImageDecoder: Abstract interface for decoding
    - PillowDecoder: Standard Pillow-backed decoder

Dependencies:
    - PIL: Image decoding
    - album_builder.core.models: ImageAsset

Used By:
    - builder.output.compositor: Tile drawing
    - builder.controller: Export pipeline
    - album_builder.cli: Input collection
"""

from __future__ import annotations

import io
import logging
from abc import ABC, abstractmethod
from contextlib import contextmanager
from pathlib import Path
from typing import ContextManager, Iterable, Iterator, List, Optional

from PIL import Image, ImageOps, UnidentifiedImageError

from album_builder.core.models import ImageAsset

from ..errors import DecodeError

logger = logging.getLogger(__name__)

SUPPORTED_EXTENSIONS = ("jpg", "jpeg", "png", "gif")


class ImageDecoder(ABC):
    """
    Abstract interface for decoding input images.

    Implementations must release the decoded pixels when the context
    exits, so at most one decoded image is alive per decode-draw cycle.
    """

    @abstractmethod
    def open(self, asset: ImageAsset) -> ContextManager[Image.Image]:
        """
        Decode an asset for the duration of a ``with`` block.

        Args:
            asset: Image to decode

        Returns:
            Context manager yielding the decoded PIL Image

        Raises:
            DecodeError: If the bytes are not a readable image
        """


class PillowDecoder(ImageDecoder):
    """
    Decoder backed by Pillow.

    Forces a full decode on entry (Pillow is lazy) so corrupt data fails
    here rather than halfway through drawing, and closes the image on exit.
    The EXIF orientation is applied, so the yielded image has the size and
    rotation a viewer would show.

    Example:
        >>> with PillowDecoder().open(asset) as img:
        ...     img.size
        (640, 480)
    """

    @contextmanager
    def open(self, asset: ImageAsset) -> Iterator[Image.Image]:
        try:
            image = Image.open(io.BytesIO(asset.data))
            image.load()
            ImageOps.exif_transpose(image, in_place=True)
        except (UnidentifiedImageError, OSError, SyntaxError, ValueError, Image.DecompressionBombError) as e:
            raise DecodeError(asset.filename, str(e)) from e
        try:
            yield image
        finally:
            image.close()


def is_supported_image(name: str) -> bool:
    """
    Check whether a filename has a supported image extension.

    Example:
        >>> is_supported_image("holiday.JPG")
        True
        >>> is_supported_image("notes.txt")
        False
    """
    _, dot, ext = str(name).rpartition(".")
    return bool(dot) and ext.lower() in SUPPORTED_EXTENSIONS


def filter_image_files(paths: Iterable[Path]) -> List[Path]:
    """Keep only paths with a supported image extension, in input order."""
    return [Path(p) for p in paths if is_supported_image(Path(p).name)]


def load_image_assets(paths: Iterable[Path]) -> List[ImageAsset]:
    """
    Read supported image files into assets, preserving order.

    Unsupported extensions are skipped. Files are not decoded here.

    Raises:
        OSError: If a supported file cannot be read
    """
    paths = list(paths)
    selected = filter_image_files(paths)
    skipped = len(paths) - len(selected)
    if skipped:
        logger.info(f"Skipped {skipped} file(s) without a supported image extension")
    return [ImageAsset.from_path(path) for path in selected]


def reference_aspect_ratio(
    asset: ImageAsset,
    decoder: Optional[ImageDecoder] = None,
) -> float:
    """
    height / width of one image, used to size every tile of a run.

    Args:
        asset: Reference image (normally the first image added)
        decoder: Decoder to use (default PillowDecoder)

    Raises:
        DecodeError: If the image cannot be decoded or has no width
    """
    decoder = decoder or PillowDecoder()
    with decoder.open(asset) as image:
        width, height = image.size
    if width <= 0:
        raise DecodeError(asset.filename, "image has zero width")
    return height / width
