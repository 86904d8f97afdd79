"""
Module: options

Purpose:
    Provides the LayoutOptions dataclass - the user-tunable grid, spacing,
    background and page-numbering settings for one album run. Raw input
    (form fields, settings files, CLI flags) is clamped exactly once, in
    LayoutOptions.from_raw(); every later stage trusts the values.

Key Functions:
    - fix_min_count(value, minimum): Floor a raw numeric value and clamp it
    - LayoutOptions.from_raw(data): Build options from untrusted input
    - LayoutOptions.to_dict(): Serialize for JSON

Key Classes:
    - NumberCorner: Corner the first page number is stamped in
    - LayoutOptions: Immutable layout settings

Dependencies:
    - PIL.ImageColor: Colour validation
    - dataclasses (std)

Used By:
    - album_builder.builder.layout.tiles
    - album_builder.builder.output.compositor
    - album_builder.settings
    - album_builder.cli
"""

from __future__ import annotations

import math
import re
from dataclasses import asdict, dataclass, fields
from enum import Enum
from typing import Any, Mapping

from PIL import ImageColor


class NumberCorner(str, Enum):
    """Bottom corner used for the first page number; later pages alternate."""
    RIGHT_BOTTOM = "right-bottom"
    LEFT_BOTTOM = "left-bottom"

    def __str__(self) -> str:
        return self.value


# Leading sign and digits; anything after them is ignored
_LEADING_INT = re.compile(r"\s*([+-]?\d+)")

# Minimum accepted value for each integer field
MINIMUMS: dict[str, int] = {
    "columns": 1,
    "row_gap": 0,
    "column_gap": 0,
    "padding_y": 0,
    "padding_x": 0,
    "start_number": 1,
    "number_size": 1,
}


def fix_min_count(value: Any, minimum: int) -> int:
    """
    Read a raw value as an integer and raise it to ``minimum``.

    Numbers are floored. Text is read up to the first non-digit, so "12px"
    gives 12, "3.9" gives 3 and "1e3" gives 1. Anything without a leading
    integer (empty form fields, "abc", None, NaN) collapses to the minimum.

    Example:
        >>> fix_min_count("3.7", 1)
        3
        >>> fix_min_count(-5, 0)
        0
        >>> fix_min_count("", 1)
        1
    """
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        if not math.isfinite(value):
            return minimum
        count = math.floor(value)
    else:
        match = _LEADING_INT.match(str(value))
        if match is None:
            return minimum
        count = int(match.group(1))
    return count if count > minimum else minimum


def _check_color(name: str, value: str) -> None:
    try:
        ImageColor.getrgb(value)
    except (ValueError, AttributeError) as e:
        raise ValueError(f"{name} is not a valid colour: {value!r}") from e


@dataclass(frozen=True)
class LayoutOptions:
    """
    Layout settings for one album run (immutable).

    All numeric fields are integers at or above their minimum (see MINIMUMS).
    Construct from untrusted input with from_raw(); the constructor only
    validates and never clamps.

    Attributes:
        columns: Tiles per row (>= 1)
        row_gap: Vertical gap between rows in pixels (>= 0)
        column_gap: Horizontal gap between columns in pixels (>= 0)
        padding_y: Extra top/bottom inset beyond the template safe inset (>= 0)
        padding_x: Extra left/right inset beyond the template safe inset (>= 0)
        background_color: Page fill colour (any PIL colour string)
        start_number: Number printed on the first page (>= 1)
        number_corner: Corner of the first page number
        number_size: Page number font size in pixels (>= 1)
        number_color: Page number colour (any PIL colour string)

    Example:
        >>> LayoutOptions.from_raw({"columns": "0", "row_gap": "-4"}).columns
        1
    """

    columns: int = 2
    row_gap: int = 32
    column_gap: int = 32
    padding_y: int = 100
    padding_x: int = 100
    background_color: str = "#ffffff"
    start_number: int = 1
    number_corner: NumberCorner = NumberCorner.RIGHT_BOTTOM
    number_size: int = 36
    number_color: str = "#6c6c6c"

    def __post_init__(self) -> None:
        """Validate options on construction."""
        for name, minimum in MINIMUMS.items():
            value = getattr(self, name)
            if not isinstance(value, int) or isinstance(value, bool):
                raise ValueError(f"{name} must be an integer: {value!r}")
            if value < minimum:
                raise ValueError(f"{name} must be >= {minimum}: {value}")
        if not isinstance(self.number_corner, NumberCorner):
            # Accept the plain string value and normalise it
            object.__setattr__(self, "number_corner", NumberCorner(self.number_corner))
        _check_color("background_color", self.background_color)
        _check_color("number_color", self.number_color)

    @classmethod
    def from_raw(cls, data: Mapping[str, Any]) -> LayoutOptions:
        """
        Build options from untrusted input, clamping numeric fields.

        Unknown keys are ignored and missing keys keep their defaults.

        Args:
            data: Mapping of field name to raw value (strings, floats, ...)

        Returns:
            LayoutOptions with every numeric field floored and clamped

        Raises:
            ValueError: If a colour or the number corner is not recognised
        """
        known = {f.name for f in fields(cls)}
        values: dict[str, Any] = {}
        for name, raw in data.items():
            if name not in known or raw is None:
                continue
            if name in MINIMUMS:
                values[name] = fix_min_count(raw, MINIMUMS[name])
            elif name == "number_corner":
                values[name] = NumberCorner(str(raw).strip().lower())
            else:
                values[name] = str(raw).strip()
        return cls(**values)

    def merged(self, overrides: Mapping[str, Any]) -> LayoutOptions:
        """Return a copy with raw overrides applied through from_raw() clamping."""
        present = {name: raw for name, raw in overrides.items() if raw is not None}
        if not present:
            return self
        return LayoutOptions.from_raw({**self.to_dict(), **present})

    def to_dict(self) -> dict:
        """
        Serialize to dictionary for JSON storage.

        Returns:
            Dict of field name to value, with number_corner as its string value
        """
        data = asdict(self)
        data["number_corner"] = self.number_corner.value
        return data
