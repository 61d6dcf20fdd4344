"""Tests for gutter row estimation."""

import pytest

from codewin._buffer import Line
from codewin._layout import estimate_rows, measure_current_height, rows_for_height, wrapped_rows
from codewin._lexer import tokenize


def _line(length: int) -> Line:
    return Line(tuple(tokenize("x" * length)))


class TestWrappedRows:
    @pytest.mark.parametrize(
        "length, expected",
        [(0, 1), (1, 1), (59, 1), (60, 1), (61, 2), (120, 2), (121, 3)],
    )
    def test_boundaries(self, length, expected):
        assert wrapped_rows(length, 60) == expected


class TestRowsForHeight:
    """Pixel heights are converted with a 24px row unit, floored at one row."""

    @pytest.mark.parametrize(
        "height, expected",
        [(0, 1), (10, 1), (24, 1), (25, 2), (48, 2), (72, 3)],
    )
    def test_rounding(self, height, expected):
        assert rows_for_height(height, 24) == expected


class TestMeasureCurrentHeight:
    def test_empty_line_is_one_row(self):
        assert measure_current_height("", 60) == 1

    def test_cursor_spills_onto_next_row(self):
        assert measure_current_height("x" * 59, 60) == 1
        assert measure_current_height("x" * 60, 60) == 2

    def test_scaled_by_row_height(self):
        assert measure_current_height("x" * 60, 60, row_height=24) == 48


class TestEstimateRows:
    def test_only_current_line(self):
        assert estimate_rows(0, [], 1, 1, 60) == 1

    def test_prologue_counts_one_row_each(self):
        assert estimate_rows(6, [], 1, 1, 60) == 7

    def test_full_width_line_is_one_row(self):
        assert estimate_rows(6, [_line(60)], 1, 1, 60) == 8

    def test_one_over_full_width_is_two_rows(self):
        assert estimate_rows(6, [_line(61)], 1, 1, 60) == 9

    def test_empty_committed_line_still_takes_a_row(self):
        assert estimate_rows(0, [Line(), Line()], 1, 1, 60) == 3

    def test_measured_height_in_pixels(self):
        assert estimate_rows(6, [_line(10)], 50, 24, 60) == 6 + 1 + 3
