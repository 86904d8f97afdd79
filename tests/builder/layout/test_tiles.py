"""
Unit tests for the tile layout engine.
"""

import math

import pytest

from album_builder.builder.layout import (
    TileGeometry,
    calculate_tile_geometry,
    place_tiles,
)
from album_builder.common.templates import Template, get_template
from album_builder.core.models import LayoutOptions


def _bare_options(**overrides):
    values = dict(columns=2, row_gap=0, column_gap=0, padding_x=0, padding_y=0)
    values.update(overrides)
    return LayoutOptions(**values)


@pytest.fixture
def plain_template():
    """2000x3000 page with no safe inset."""
    return Template("plain", "Plain", 2000, 3000, 0)


class TestCalculateTileGeometry:
    """Tests for calculate_tile_geometry()."""

    def test_square_tiles_when_two_columns_then_three_rows(self, plain_template):
        # Act
        geometry = calculate_tile_geometry(plain_template, _bare_options(), 1.0)

        # Assert
        assert geometry.tile_width == 1000
        assert geometry.tile_height == 1000
        assert geometry.rows == 3
        assert geometry.max_per_page == 6

    def test_safe_inset_and_padding_when_present_then_shrink_content(self):
        # Arrange
        template = Template("t", "T", 1000, 1000, 50)
        options = _bare_options(columns=1, padding_x=100, padding_y=100)

        # Act
        geometry = calculate_tile_geometry(template, options, 0.5)

        # Assert
        # content = 1000 - 100 - 200 = 700 both ways
        assert geometry.tile_width == 700
        assert geometry.tile_height == 350
        assert geometry.rows == 2
        assert geometry.max_per_page == 2

    def test_column_gap_when_present_then_tile_width_floored(self, plain_template):
        geometry = calculate_tile_geometry(plain_template, _bare_options(columns=3, column_gap=10), 1.0)

        # (2000 - 2*10) / 3 = 660
        assert geometry.tile_width == 660

    def test_row_gap_when_it_pushes_last_row_out_then_one_less_row(self, plain_template):
        # Three 1000px rows fit exactly with no gap; two gaps of 1px break that
        geometry = calculate_tile_geometry(plain_template, _bare_options(row_gap=1), 1.0)

        assert geometry.rows == 2
        assert geometry.max_per_page == 4

    def test_fractional_tile_height_when_ratio_not_round_then_kept(self, plain_template):
        geometry = calculate_tile_geometry(plain_template, _bare_options(columns=3), 0.75)

        assert geometry.tile_width == 666
        assert geometry.tile_height == pytest.approx(499.5)
        assert geometry.cell_size == (666, 500)

    def test_default_a4_when_portrait_image_then_known_grid(self):
        # Arrange
        template = get_template("a4")

        # Act
        geometry = calculate_tile_geometry(template, LayoutOptions(), 4 / 3)

        # Assert
        # content width = 2976 - 88 - 200 = 2688, tile = (2688 - 32) / 2 = 1328
        assert geometry.tile_width == 1328
        # content height = 4175 - 88 - 200 = 3887, tile height 1770.67 -> 2 rows
        assert geometry.rows == 2
        assert geometry.max_per_page == 4

    def test_tall_image_when_taller_than_page_then_zero_per_page(self, plain_template):
        geometry = calculate_tile_geometry(plain_template, _bare_options(columns=1), 5.0)

        assert geometry.rows == 0
        assert geometry.max_per_page == 0
        assert geometry.has_layout is False

    def test_paddings_when_larger_than_page_then_zero_not_error(self, plain_template):
        geometry = calculate_tile_geometry(plain_template, _bare_options(padding_x=1500), 1.0)

        assert geometry.max_per_page == 0

    def test_tile_height_when_rounds_to_zero_then_zero_rows(self, plain_template):
        geometry = calculate_tile_geometry(plain_template, _bare_options(), 0.0)

        assert geometry.tile_height == 0
        assert geometry.max_per_page == 0

    @pytest.mark.parametrize("ratio", [math.nan, math.inf, -1.0])
    def test_ratio_when_unusable_then_zero_per_page(self, plain_template, ratio):
        geometry = calculate_tile_geometry(plain_template, _bare_options(), ratio)

        assert geometry.max_per_page == 0

    def test_huge_row_gap_when_applied_then_never_negative(self, plain_template):
        geometry = calculate_tile_geometry(plain_template, _bare_options(columns=20, row_gap=100000), 1.0)

        assert geometry.rows >= 0
        assert geometry.max_per_page >= 0

    def test_same_inputs_when_repeated_then_same_geometry(self, plain_template):
        options = _bare_options(columns=3, row_gap=7, column_gap=5)

        first = calculate_tile_geometry(plain_template, options, 1.3)
        second = calculate_tile_geometry(plain_template, options, 1.3)

        assert first == second


class TestPlaceTiles:
    """Tests for place_tiles()."""

    def test_place_tiles_when_grid_then_row_major_positions(self):
        # Arrange
        template = Template("t", "T", 1000, 1000, 10)
        options = _bare_options(columns=2, column_gap=20, row_gap=30, padding_x=5, padding_y=15)
        geometry = TileGeometry(tile_width=100, tile_height=50.0, columns=2, rows=2, max_per_page=4)

        # Act
        placements = place_tiles(3, geometry, options, template)

        # Assert
        assert [(p.left, p.top) for p in placements] == [
            (15, 25),    # col 0, row 0
            (135, 25),   # col 1, row 0: 15 + 100 + 20
            (15, 105),   # col 0, row 1: 25 + 50 + 30
        ]
        assert all((p.width, p.height) == (100, 50) for p in placements)
        assert [p.slot for p in placements] == [0, 1, 2]

    def test_place_tiles_when_fractional_height_then_rounded(self):
        template = Template("t", "T", 1000, 1000, 0)
        geometry = TileGeometry(tile_width=100, tile_height=33.4, columns=1, rows=3, max_per_page=3)

        placements = place_tiles(3, geometry, _bare_options(columns=1), template)

        assert [p.top for p in placements] == [0, 33, 67]
        assert placements[2].box == (0, 67, 100, 100)
        assert placements[2].rect == (0, 67, 100, 33)

    def test_place_tiles_when_half_pixel_height_then_rows_abut_without_overlap(self):
        # Arrange
        template = Template("t", "T", 1000, 2000, 0)
        geometry = TileGeometry(tile_width=666, tile_height=499.5, columns=1, rows=3, max_per_page=3)

        # Act
        placements = place_tiles(3, geometry, _bare_options(columns=1), template)

        # Assert
        assert [(p.top, p.height) for p in placements] == [(0, 500), (500, 499), (999, 500)]
        for upper, lower in zip(placements, placements[1:]):
            assert upper.box[3] == lower.top

    def test_cell_size_when_half_pixel_then_rounds_up(self):
        assert TileGeometry(100, 0.5, 1, 1, 1).cell_size == (100, 1)
        assert TileGeometry(100, 2.5, 1, 1, 1).cell_size == (100, 3)

    def test_place_tiles_when_zero_count_then_empty(self, plain_template):
        geometry = TileGeometry(1000, 1000.0, 2, 3, 6)

        assert place_tiles(0, geometry, _bare_options(), plain_template) == []
