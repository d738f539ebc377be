"""Render pipeline: full repaint of the cell grid and label highlight classes.

Every call is a complete redraw from the current state, so rendering twice
without a state change produces the same output.
"""

from __future__ import annotations

import logging
import math
from typing import Iterable

import numpy as np

from ..core.color_scale import ColorScale
from ..core.matrix import FormattedMatrix, MatrixEntry
from ..layout.label_layout import COLUMN, ROW, STICKY_CLASS, AxisLabel
from ..layout.planner import ViewGeometry
from ..widget.selection import SelectionState
from .surface import BLACK, WHITE, Surface

logger = logging.getLogger(__name__)


FULL_OPACITY = 1.0
DIMMED_OPACITY = 0.2
DIMMED_TEXT_FACTOR = 0.2  # text on a dimmed cell fades to a fifth of the cell's opacity


def cell_opacity(entry: MatrixEntry, selection: SelectionState) -> float:
    """Spotlight opacity: a selected row OR a selected column stays lit."""
    if selection.is_empty():
        return FULL_OPACITY
    return FULL_OPACITY if selection.is_lit(entry.x, entry.y) else DIMMED_OPACITY


def format_value(z: float) -> str:
    """Cell value text: whole numbers without a decimal point, otherwise the
    shortest repr that round-trips (``1234567``, ``2.5``, ``1e-06``).
    """
    z = float(z)
    if z.is_integer():
        return str(int(z))
    return repr(z)


def text_color(z: float, zmin: float, zmax: float, opacity: float) -> tuple[int, int, int, float]:
    """Black text on the lower half of the value range, white on the upper."""
    rgb = BLACK if z <= (zmin + zmax) / 2 else WHITE
    alpha = opacity * DIMMED_TEXT_FACTOR if opacity < FULL_OPACITY else opacity
    return (*rgb, alpha)


def update_label_classes(labels: Iterable[AxisLabel], selection: SelectionState) -> None:
    """Mark the label of the selected row/column (if any) as sticky-highlighted."""
    rows = selection.selected_rows
    cols = selection.selected_cols
    for label in labels:
        selected = rows if label.axis == ROW else cols if label.axis == COLUMN else []
        label.set_class(STICKY_CLASS, bool(selected) and label.index == selected[0])


def render_frame(
    matrix: FormattedMatrix,
    geometry: ViewGeometry,
    color_scale: ColorScale,
    selection: SelectionState,
    surface: Surface,
    labels: Iterable[AxisLabel] = (),
    show_values: bool = False,
) -> None:
    """Repaint the whole grid onto ``surface`` from the current view state.

    Parameters
    ----------
    matrix : FormattedMatrix
        Cells to paint.
    geometry : ViewGeometry
        Cell positions, stroke width and font sizes.
    color_scale : ColorScale
        Current value → color mapping (palette and zoom).
    selection : SelectionState
        Current spotlight.
    surface : Surface
        Drawing target; cleared first.
    labels : iterable of AxisLabel
        Axis labels whose sticky-highlight class is refreshed.
    show_values : bool
        Draw each cell's value centered in the cell.
    """
    update_label_classes(labels, selection)

    surface.clear(geometry.canvas_width, geometry.canvas_height)

    colors = color_scale.map_array(np.array([e.z for e in matrix.entries], dtype=np.float64))
    stroke = (*WHITE, 1.0)

    for entry, rgb in zip(matrix.entries, colors):
        opacity = cell_opacity(entry, selection)
        rect = geometry.cell_rect(entry.x, entry.y)
        surface.fill_rect(
            rect,
            fill=(int(rgb[0]), int(rgb[1]), int(rgb[2]), opacity),
            stroke=stroke,
            line_width=geometry.stroke_width,
        )

        if show_values and not math.isnan(entry.z):
            cx, cy = rect.center
            surface.fill_text(
                format_value(entry.z),
                cx,
                cy,
                color=text_color(entry.z, matrix.zmin, matrix.zmax, opacity),
                font_size=geometry.cell_font_size,
            )

    logger.debug(
        "Rendered %d cells (rows=%s, cols=%s, palette=%s, zoom=%g)",
        len(matrix.entries),
        selection.selected_rows,
        selection.selected_cols,
        color_scale.palette_name,
        color_scale.zoom,
    )
