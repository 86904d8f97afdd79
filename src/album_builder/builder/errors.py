"""
Module: builder.errors

Purpose:
    Exception hierarchy for album generation. Every failure aborts the
    whole run; none is retried internally.

Key Classes:
    - AlbumError: Base class for generation failures
    - InvalidLayoutError: No tile fits on a page
    - DecodeError: An input image could not be decoded
    - EncodeError: A composed page could not be encoded
    - GenerationCancelled: The caller cancelled the run

Used By:
    - builder.images.provider: Raises DecodeError
    - builder.output.compositor: Raises DecodeError/EncodeError
    - builder.controller: Raises InvalidLayoutError, GenerationCancelled
"""

from __future__ import annotations

from typing import Optional


class AlbumError(Exception):
    """Error during album generation."""
    pass


class InvalidLayoutError(AlbumError):
    """The template/options/aspect-ratio combination fits zero tiles per page."""
    pass


class DecodeError(AlbumError):
    """An input image failed to decode."""

    def __init__(self, filename: str, reason: Optional[str] = None) -> None:
        self.filename = filename
        message = f"Could not decode image {filename!r}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class EncodeError(AlbumError):
    """A composed page failed to encode."""

    def __init__(self, page_index: int, reason: Optional[str] = None) -> None:
        self.page_index = page_index
        message = f"Could not encode page {page_index + 1}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class GenerationCancelled(AlbumError):
    """Generation was cancelled before it finished."""
    pass
