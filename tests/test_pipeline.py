"""Tests for the render pipeline and surfaces."""

import json

import numpy as np
import pytest

from heatgrid.core.color_scale import ColorScale
from heatgrid.core.matrix import format_data
from heatgrid.layout.label_layout import STICKY_CLASS, LabelLayoutEngine
from heatgrid.layout.planner import LayoutPlanner
from heatgrid.render.pipeline import (
    DIMMED_OPACITY,
    cell_opacity,
    format_value,
    render_frame,
    text_color,
    update_label_classes,
)
from heatgrid.render.surface import AggSurface, RecordingSurface, rgba_string
from heatgrid.widget.selection import SelectionState


def _alpha(fill: str) -> float:
    return float(fill[len("rgba("):-1].split(",")[3])


def _render(matrix, selection=None, show_values=False, surface=None, width=200, height=200):
    geometry = LayoutPlanner().plan(
        width, height, matrix.nrow, matrix.ncol,
        has_row_labels=matrix.rows is not None,
        has_col_labels=matrix.columns is not None,
    )
    color_scale = ColorScale(zmin=matrix.zmin, zmax=matrix.zmax)
    selection = selection or SelectionState()
    surface = surface or RecordingSurface()
    labels = LabelLayoutEngine.compute(geometry, matrix.rows, matrix.columns)
    render_frame(matrix, geometry, color_scale, selection, surface, labels, show_values)
    return surface, labels, color_scale


class TestCellOpacity:
    def test_empty_selection_full(self, labeled_matrix):
        s = SelectionState()
        assert all(cell_opacity(e, s) == 1.0 for e in labeled_matrix.entries)

    def test_row_or_column_spotlight(self, labeled_matrix):
        s = SelectionState()
        s.toggle_row(0)
        s.toggle_col(2)
        for e in labeled_matrix.entries:
            expected = 1.0 if (e.x == 2 or e.y == 0) else DIMMED_OPACITY
            assert cell_opacity(e, s) == expected


class TestTextColor:
    def test_lower_half_black(self):
        assert text_color(1.0, 0.0, 10.0, 1.0) == (0, 0, 0, 1.0)

    def test_midpoint_goes_black(self):
        assert text_color(5.0, 0.0, 10.0, 1.0)[:3] == (0, 0, 0)

    def test_upper_half_white(self):
        assert text_color(6.0, 0.0, 10.0, 1.0)[:3] == (255, 255, 255)

    def test_midpoint_with_offset_range(self):
        # midpoint of [10, 20] is 15
        assert text_color(14.0, 10.0, 20.0, 1.0)[:3] == (0, 0, 0)
        assert text_color(16.0, 10.0, 20.0, 1.0)[:3] == (255, 255, 255)

    def test_dimmed_text_fades_to_a_fifth(self):
        assert text_color(1.0, 0.0, 10.0, 0.2)[3] == pytest.approx(0.04)
        assert text_color(9.0, 0.0, 10.0, 0.2)[3] == pytest.approx(0.04)


class TestFormatValue:
    def test_integers_without_decimal(self):
        assert format_value(3.0) == "3"

    def test_fraction(self):
        assert format_value(2.5) == "2.5"

    def test_large_integer_keeps_every_digit(self):
        assert format_value(1234567.0) == "1234567"

    def test_fraction_keeps_full_precision(self):
        assert format_value(0.1234567) == "0.1234567"
        assert format_value(-1e-06) == "-1e-06"


class TestRenderFrame:
    def test_commands(self, square_matrix):
        surface, _, cs = _render(square_matrix)
        cmds = surface.commands
        assert cmds[0] == {"op": "clear", "width": 200.0, "height": 200.0}
        rects = [c for c in cmds if c["op"] == "rect"]
        assert len(rects) == 4
        assert rects[1]["x"] == 100.0 and rects[1]["y"] == 0.0
        assert rects[1]["width"] == 100.0
        assert rects[0]["stroke"] == "rgba(255,255,255,1)"
        assert rects[0]["fill"] == rgba_string((*cs(1.0), 1.0))
        assert rects[3]["fill"] == rgba_string((*cs(4.0), 1.0))

    def test_no_text_without_values(self, square_matrix):
        surface, _, _ = _render(square_matrix)
        assert not [c for c in surface.commands if c["op"] == "text"]

    def test_value_text(self, square_matrix):
        surface, _, _ = _render(square_matrix, show_values=True)
        texts = [c for c in surface.commands if c["op"] == "text"]
        assert [t["text"] for t in texts] == ["1", "2", "3", "4"]
        assert texts[0]["x"] == 50.0 and texts[0]["y"] == 50.0
        # midpoint of [1, 4] is 2.5
        assert texts[1]["fill"].startswith("rgba(0,0,0")
        assert texts[2]["fill"].startswith("rgba(255,255,255")

    def test_column_spotlight(self, labeled_matrix):
        selection = SelectionState()
        selection.toggle_col(1)
        surface, _, _ = _render(labeled_matrix, selection, width=520, height=520)
        rects = [c for c in surface.commands if c["op"] == "rect"]
        for entry, rect in zip(labeled_matrix.entries, rects):
            assert _alpha(rect["fill"]) == (1.0 if entry.x == 1 else 0.2)

    def test_nan_cell_has_no_text(self, nan_matrix):
        surface, _, _ = _render(nan_matrix, show_values=True)
        texts = [c["text"] for c in surface.commands if c["op"] == "text"]
        assert texts == ["1", "3", "5", "6"]
        rects = [c for c in surface.commands if c["op"] == "rect"]
        assert rects[1]["fill"] == "rgba(200,200,200,1)"

    def test_idempotent_commands(self, labeled_matrix):
        selection = SelectionState()
        selection.toggle_row(2)
        surface, labels, cs = _render(labeled_matrix, selection, show_values=True, width=520, height=520)
        first = surface.to_json()
        geometry = LayoutPlanner().plan(520, 520, 3, 4, True, True)
        render_frame(labeled_matrix, geometry, cs, selection, surface, labels, True)
        assert surface.to_json() == first
        assert json.loads(first)[0]["op"] == "clear"


class TestLabelClasses:
    def test_sticky_follows_selection(self, labeled_matrix):
        selection = SelectionState()
        selection.toggle_row(1)
        _, labels, _ = _render(labeled_matrix, selection, width=520, height=520)
        sticky = [(lb.axis, lb.index) for lb in labels if lb.has_class(STICKY_CLASS)]
        assert sticky == [("row", 1)]

    def test_cleared_selection_removes_sticky(self, labeled_matrix):
        selection = SelectionState()
        selection.toggle_col(3)
        _, labels, _ = _render(labeled_matrix, selection, width=520, height=520)
        selection.clear()
        update_label_classes(labels, selection)
        assert not any(lb.has_class(STICKY_CLASS) for lb in labels)


class TestAggSurface:
    def test_pixel_output(self, square_matrix):
        surface, _, cs = _render(square_matrix, surface=AggSurface(200, 200))
        pixels = surface.to_array()
        assert pixels.shape == (200, 200, 4)
        np.testing.assert_allclose(pixels[50, 50, :3], cs(1.0), atol=1)
        np.testing.assert_allclose(pixels[150, 150, :3], cs(4.0), atol=1)
        assert pixels[50, 50, 3] == 255

    def test_dimmed_alpha(self, square_matrix):
        selection = SelectionState()
        selection.toggle_row(0)
        surface, _, _ = _render(square_matrix, selection, surface=AggSurface(200, 200))
        pixels = surface.to_array()
        assert pixels[50, 50, 3] == 255
        assert abs(int(pixels[150, 50, 3]) - 51) <= 2

    def test_idempotent_pixels(self, labeled_matrix):
        selection = SelectionState()
        selection.toggle_col(0)
        surface = AggSurface(520, 520)
        _, labels, cs = _render(
            labeled_matrix, selection, show_values=True, surface=surface, width=520, height=520,
        )
        first = surface.to_array()
        geometry = LayoutPlanner().plan(520, 520, 3, 4, True, True)
        render_frame(labeled_matrix, geometry, cs, selection, surface, labels, True)
        np.testing.assert_array_equal(surface.to_array(), first)

    def test_resizes_to_canvas(self, labeled_matrix):
        surface = AggSurface(520, 520)
        _render(labeled_matrix, surface=surface, width=520, height=520)
        # 3 rows x 4 columns of 100 px cells
        assert surface.to_array().shape == (300, 400, 4)

    def test_save_png(self, tmp_path, square_matrix):
        surface, _, _ = _render(square_matrix, surface=AggSurface(200, 200))
        out = tmp_path / "grid.png"
        surface.save_png(out)
        assert out.read_bytes()[:8] == b"\x89PNG\r\n\x1a\n"


class TestRapidStateChanges:
    def test_each_frame_matches_final_state(self):
        matrix = format_data({"matrix": [[1, 2, 3], [4, 5, 6], [7, 8, 9]]})
        selection = SelectionState()
        surface = RecordingSurface()
        for index in [0, 1, 1, 2, 0, 0, 2]:
            selection.toggle_row(index)
            _render(matrix, selection, surface=surface)
            rects = [c for c in surface.commands if c["op"] == "rect"]
            assert len(rects) == 9
            for entry, rect in zip(matrix.entries, rects):
                assert _alpha(rect["fill"]) == (
                    1.0 if selection.is_empty() or entry.y in selection.selected_rows else 0.2
                )
