"""
Unit tests for LayoutOptions and boundary clamping.
"""

import math

import pytest

from album_builder.core.models import LayoutOptions, NumberCorner, fix_min_count


class TestFixMinCount:
    """Tests for raw numeric clamping."""

    @pytest.mark.parametrize(
        "raw, minimum, expected",
        [
            ("3", 1, 3),
            ("3.9", 1, 3),
            (2.5, 0, 2),
            ("-4", 0, 0),
            (0, 1, 1),
            ("", 1, 1),
            ("abc", 0, 0),
            (None, 1, 1),
            (math.nan, 0, 0),
            (math.inf, 1, 1),
            ("12px", 0, 12),
            ("1e3", 1, 1),
            (" 7 ", 1, 7),
            ("+5", 1, 5),
            ("px12", 0, 0),
            (True, 1, 1),
        ],
    )
    def test_fix_min_count(self, raw, minimum, expected):
        assert fix_min_count(raw, minimum) == expected


class TestLayoutOptionsDefaults:
    """Tests for default values."""

    def test_defaults_when_created_then_standard_presets(self):
        options = LayoutOptions()

        assert options.columns == 2
        assert options.row_gap == 32
        assert options.column_gap == 32
        assert options.padding_y == 100
        assert options.padding_x == 100
        assert options.background_color == "#ffffff"
        assert options.start_number == 1
        assert options.number_corner is NumberCorner.RIGHT_BOTTOM
        assert options.number_size == 36
        assert options.number_color == "#6c6c6c"


class TestLayoutOptionsFromRaw:
    """Tests for LayoutOptions.from_raw()."""

    def test_from_raw_when_below_minimums_then_clamped(self):
        # Arrange
        raw = {
            "columns": "0",
            "row_gap": "-10",
            "column_gap": -1,
            "padding_y": "-5",
            "padding_x": "x",
            "start_number": "0",
            "number_size": "0",
        }

        # Act
        options = LayoutOptions.from_raw(raw)

        # Assert
        assert options.columns == 1
        assert options.row_gap == 0
        assert options.column_gap == 0
        assert options.padding_y == 0
        assert options.padding_x == 0
        assert options.start_number == 1
        assert options.number_size == 1

    def test_from_raw_when_fractional_then_floored(self):
        options = LayoutOptions.from_raw({"columns": "3.7", "row_gap": 12.9})

        assert options.columns == 3
        assert options.row_gap == 12

    def test_from_raw_when_unknown_keys_then_ignored(self):
        options = LayoutOptions.from_raw({"template": "a5", "columns": 4})

        assert options.columns == 4

    def test_from_raw_when_corner_string_then_enum(self):
        options = LayoutOptions.from_raw({"number_corner": "Left-Bottom"})

        assert options.number_corner is NumberCorner.LEFT_BOTTOM

    def test_from_raw_when_unknown_corner_then_raises(self):
        with pytest.raises(ValueError):
            LayoutOptions.from_raw({"number_corner": "top-left"})

    def test_from_raw_when_invalid_colour_then_raises(self):
        with pytest.raises(ValueError, match="background_color"):
            LayoutOptions.from_raw({"background_color": "not-a-colour"})


class TestLayoutOptionsValidation:
    """Tests for constructor validation (no clamping)."""

    def test_init_when_below_minimum_then_raises(self):
        with pytest.raises(ValueError, match="columns must be >= 1"):
            LayoutOptions(columns=0)

    def test_init_when_not_integer_then_raises(self):
        with pytest.raises(ValueError, match="row_gap must be an integer"):
            LayoutOptions(row_gap=1.5)

    def test_init_when_corner_string_then_normalised(self):
        options = LayoutOptions(number_corner="left-bottom")

        assert options.number_corner is NumberCorner.LEFT_BOTTOM


class TestLayoutOptionsSerialization:
    """Tests for to_dict() and merged()."""

    def test_to_dict_when_round_tripped_then_equal(self):
        # Arrange
        options = LayoutOptions(columns=3, number_corner=NumberCorner.LEFT_BOTTOM)

        # Act
        data = options.to_dict()

        # Assert
        assert data["number_corner"] == "left-bottom"
        assert LayoutOptions.from_raw(data) == options

    def test_merged_when_none_values_then_unchanged(self):
        options = LayoutOptions(columns=3)

        assert options.merged({"columns": None, "row_gap": None}) == options

    def test_merged_when_overrides_then_clamped_and_applied(self):
        options = LayoutOptions(columns=3, row_gap=10)

        merged = options.merged({"columns": "-2", "number_color": "black"})

        assert merged.columns == 1
        assert merged.row_gap == 10
        assert merged.number_color == "black"
