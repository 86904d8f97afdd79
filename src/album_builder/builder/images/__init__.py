"""
Module: builder.images

Purpose:
    Image access abstractions for the album pipeline.
    Provides a clean decoding interface and input file handling.

Key Classes:
    - ImageDecoder: Abstract interface for decoding
    - PillowDecoder: Standard Pillow decoder

Key Functions:
    - load_image_assets(): Read supported files into assets
    - reference_aspect_ratio(): Ratio of the reference image

Used By:
    - builder.output.compositor: Page composition
    - builder.controller: Export pipeline
"""

from .provider import (
    ImageDecoder,
    PillowDecoder,
    SUPPORTED_EXTENSIONS,
    is_supported_image,
    filter_image_files,
    load_image_assets,
    reference_aspect_ratio,
)

__all__ = [
    "ImageDecoder",
    "PillowDecoder",
    "SUPPORTED_EXTENSIONS",
    "is_supported_image",
    "filter_image_files",
    "load_image_assets",
    "reference_aspect_ratio",
]
