"""
Module: assets

Purpose:
    Provides the ImageAsset dataclass - one input image (filename plus raw
    encoded bytes) as handed over by the caller. The core only reads it.

Key Functions:
    - ImageAsset.from_path(path): Read an image file into an asset
    - ImageAsset.extension: Lower-cased filename extension

Dependencies:
    - dataclasses (std)
    - pathlib (std)

Used By:
    - album_builder.builder.images.provider: Decoding and loading
    - album_builder.builder.output.compositor: Tile drawing
    - album_builder.builder.controller: Export pipeline
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class ImageAsset:
    """
    Input image handle (immutable).

    Attributes:
        filename: Display name of the image, used in error messages
        data: Raw encoded bytes (JPEG, PNG or GIF)

    Example:
        >>> asset = ImageAsset.from_path(Path("photos/cat.jpg"))
        >>> asset.extension
        'jpg'
    """

    filename: str
    data: bytes

    @classmethod
    def from_path(cls, path: Path) -> ImageAsset:
        """
        Read an image file into an asset.

        Raises:
            OSError: If the file cannot be read
        """
        path = Path(path)
        return cls(filename=path.name, data=path.read_bytes())

    @property
    def extension(self) -> str:
        """Extension after the last dot, lower-cased ("" if none)."""
        _, dot, ext = self.filename.rpartition(".")
        return ext.lower() if dot else ""

    def __repr__(self) -> str:
        """Concise representation that omits the raw bytes."""
        return f"ImageAsset({self.filename!r}, {len(self.data)} bytes)"
