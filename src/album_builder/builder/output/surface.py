"""
Module: builder.output.surface

Purpose:
    Raster surface capability used by the page compositor: fill, draw a
    stretched image into a rectangle, draw aligned text, encode to PNG bytes.
    PillowSurface is the real backend; tests substitute a recorder.

Key Classes:
    - Surface: Abstract drawable page
    - PillowSurface: Pillow-backed RGB page

Key Functions:
    - pillow_surface(): Default SurfaceFactory

Dependencies:
    - PIL: Drawing, fonts and PNG encoding

Used By:
    - builder.output.compositor: Page composition
    - builder.output.overlay: Page-number text
"""

from __future__ import annotations

import io
import logging
from abc import ABC, abstractmethod
from functools import lru_cache
from typing import Callable, Literal, Tuple

from PIL import Image, ImageDraw, ImageFont

logger = logging.getLogger(__name__)

TextAlign = Literal["left", "right"]

# Bold faces first; the page number is drawn bold
_BOLD_FONT_OPTIONS = (
    "arialbd.ttf",          # Arial Bold (Windows)
    "Arial Bold.ttf",       # Arial Bold (Mac)
    "DejaVuSans-Bold.ttf",  # DejaVu Sans Bold (Linux)
    "LiberationSans-Bold.ttf",
)


class Surface(ABC):
    """
    Abstract drawable page of a fixed pixel size.

    Draw calls are applied in call order; later draws cover earlier ones.
    """

    @property
    @abstractmethod
    def size(self) -> Tuple[int, int]:
        """(width, height) in pixels."""

    @abstractmethod
    def fill(self, color: str) -> None:
        """Fill the whole surface with a colour."""

    @abstractmethod
    def draw_image(self, image: Image.Image, rect: Tuple[int, int, int, int]) -> None:
        """
        Draw an image stretched to exactly fill a rectangle.

        Args:
            image: Decoded source image (not modified)
            rect: (left, top, width, height) in pixels, unlike the
                (left, top, right, bottom) of TilePlacement.box
        """

    @abstractmethod
    def draw_text(
        self,
        text: str,
        position: Tuple[int, int],
        *,
        size: int,
        color: str,
        align: TextAlign,
    ) -> None:
        """
        Draw bold text whose baseline sits at position[1].

        align="right" puts the end of the text at position[0],
        align="left" puts its start there.
        """

    @abstractmethod
    def encode(self) -> bytes:
        """Encode the surface as PNG bytes."""

    def close(self) -> None:
        """Release the surface's pixel buffer."""

    def __enter__(self) -> Surface:
        return self

    def __exit__(self, *args) -> None:
        self.close()


SurfaceFactory = Callable[[int, int], Surface]


class PillowSurface(Surface):
    """
    RGB page backed by a Pillow image.

    Example:
        >>> with PillowSurface(200, 100) as surface:
        ...     surface.fill("#ffffff")
        ...     png = surface.encode()
    """

    def __init__(self, width: int, height: int) -> None:
        self._image = Image.new("RGB", (width, height))
        self._draw = ImageDraw.Draw(self._image)

    @property
    def size(self) -> Tuple[int, int]:
        return self._image.size

    @property
    def image(self) -> Image.Image:
        """Underlying Pillow image (for inspection)."""
        return self._image

    def fill(self, color: str) -> None:
        self._draw.rectangle((0, 0, self._image.width, self._image.height), fill=color)

    def draw_image(self, image: Image.Image, rect: Tuple[int, int, int, int]) -> None:
        left, top, width, height = rect
        if width <= 0 or height <= 0:
            return
        # Composite transparency over what is already on the page
        rgba = image.convert("RGBA")
        try:
            resized = rgba.resize((width, height), Image.Resampling.LANCZOS)
        finally:
            rgba.close()
        try:
            self._image.paste(resized, (left, top), resized)
        finally:
            resized.close()

    def draw_text(
        self,
        text: str,
        position: Tuple[int, int],
        *,
        size: int,
        color: str,
        align: TextAlign,
    ) -> None:
        font = load_bold_font(size)
        x, y = position
        if isinstance(font, ImageFont.FreeTypeFont):
            anchor = "rs" if align == "right" else "ls"
            self._draw.text((x, y), text, fill=color, font=font, anchor=anchor)
            return

        # Bitmap fonts do not support anchors: align the text box by hand
        left, top, right, bottom = self._draw.textbbox((0, 0), text, font=font)
        text_x = x - (right - left) if align == "right" else x
        self._draw.text((text_x - left, y - bottom), text, fill=color, font=font)

    def encode(self) -> bytes:
        buf = io.BytesIO()
        self._image.save(buf, format="PNG")
        return buf.getvalue()

    def close(self) -> None:
        self._image.close()


def pillow_surface(width: int, height: int) -> Surface:
    """Default SurfaceFactory: a PillowSurface of the given size."""
    return PillowSurface(width, height)


@lru_cache(maxsize=8)
def load_bold_font(size: int) -> ImageFont.ImageFont | ImageFont.FreeTypeFont:
    """
    Load a bold font for text rendering.

    Falls back to Pillow's bundled default font at the requested size
    when no bold TrueType face is installed.

    Args:
        size: Font size in pixels

    Returns:
        Font object
    """
    for font_name in _BOLD_FONT_OPTIONS:
        try:
            return ImageFont.truetype(font_name, size)
        except (IOError, OSError):
            continue

    logger.warning("Could not load a bold TrueType font, using default")
    return ImageFont.load_default(size=size)
