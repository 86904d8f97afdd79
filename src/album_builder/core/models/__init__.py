"""
Core Models Package

Immutable, validated data models shared by every stage of the album
pipeline. All models are frozen dataclasses so a run can never mutate the
caller's input or the options it was started with.
"""

from .assets import ImageAsset
from .options import LayoutOptions, NumberCorner, fix_min_count, MINIMUMS

__all__ = [
    "ImageAsset",
    "LayoutOptions",
    "NumberCorner",
    "fix_min_count",
    "MINIMUMS",
]
