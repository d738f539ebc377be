"""MatrixView: the heatmap visualization component.

Owns the formatted data, the view state (color scale, selection, labels)
and the geometry, and draws onto an injected surface. Hosts construct it
with ``width, height, surface, data, options`` and call :meth:`init`.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Mapping

import pandas as pd

from .core.color_scale import DEFAULT_PALETTE, ColorScale
from .core.matrix import FormattedMatrix, format_data
from .interaction.controller import DEFAULT_ZOOM_FLOOR, InteractionController
from .layout.label_layout import AxisLabel, LabelLayoutEngine
from .layout.planner import DEFAULT_LABEL_MARGIN, LayoutPlanner, ViewGeometry
from .render.pipeline import render_frame
from .render.surface import Surface
from .widget.selection import SelectionState

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ViewOptions:
    """Rendering options.

    labels : draw each cell's value inside the cell.
    label_margin : pixels reserved for row/column axis labels.
    zoom_floor : lowest contrast zoom reachable with the down arrow.
    """

    labels: bool = True
    label_margin: float = DEFAULT_LABEL_MARGIN
    zoom_floor: float = DEFAULT_ZOOM_FLOOR


class MatrixView:
    """Interactive heatmap of one FormattedMatrix on one surface."""

    def __init__(
        self,
        width: float,
        height: float,
        surface: Surface,
        data: FormattedMatrix,
        options: ViewOptions | None = None,
    ) -> None:
        self._width = float(width)
        self._height = float(height)
        self._surface = surface
        self._data = data
        self._options = options or ViewOptions()
        self._planner = LayoutPlanner(label_margin=self._options.label_margin)
        self._selection = SelectionState()
        self._color_scale = ColorScale(
            data.colormap_name or DEFAULT_PALETTE, zmin=data.zmin, zmax=data.zmax
        )
        self._geometry: ViewGeometry | None = None
        self._labels: list[AxisLabel] = []
        self._controller = InteractionController(self, zoom_floor=self._options.zoom_floor)

    # --- Host contract ---

    @staticmethod
    def format_data(raw: Mapping[str, Any] | pd.DataFrame) -> FormattedMatrix:
        """Validate raw input and convert it to a FormattedMatrix."""
        return format_data(raw)

    def init(self) -> None:
        """First render."""
        self.render()

    def render(self) -> None:
        """Full render: recompute layout and labels, then repaint.

        A degenerate layout (empty matrix or no room in the viewport) is
        logged and leaves the surface untouched.
        """
        data = self._data
        self._geometry = self._planner.plan(
            self._width,
            self._height,
            data.nrow,
            data.ncol,
            has_row_labels=data.rows is not None,
            has_col_labels=data.columns is not None,
        )
        if self._geometry is None:
            self._labels = []
            logger.warning("Nothing to render for a %dx%d matrix", data.nrow, data.ncol)
            return
        self._labels = LabelLayoutEngine.compute(self._geometry, data.rows, data.columns)
        self.redraw()

    def redraw(self) -> None:
        """Repaint with the current geometry; no layout recompute."""
        if self._geometry is None:
            logger.debug("Redraw skipped: no geometry")
            return
        render_frame(
            self._data,
            self._geometry,
            self._color_scale,
            self._selection,
            self._surface,
            labels=self._labels,
            show_values=self.show_values,
        )

    def update_data(self, data: FormattedMatrix) -> None:
        """Replace the matrix wholesale and re-render.

        The color scale is rebuilt for the new value range, keeping the
        current zoom and, unless the new data names a colormap, the
        current palette. The selection is kept, minus any row or column
        index the new data no longer has.
        """
        if not isinstance(data, FormattedMatrix):
            raise TypeError(
                f"update_data expects a FormattedMatrix, got {type(data).__name__}. "
                "Call format_data() first."
            )
        palette = data.colormap_name or self._color_scale.palette_name
        zoom = self._color_scale.zoom
        self._data = data
        self._color_scale = ColorScale(palette, zmin=data.zmin, zmax=data.zmax)
        self._color_scale.set_zoom(zoom)
        self._controller.sync_palette()
        self._drop_stale_selection()
        self.render()

    def _drop_stale_selection(self) -> None:
        """Deselect a row or column index that the current data no longer has."""
        selection = self._selection
        rows = [i for i in selection.selected_rows if i < self._data.nrow]
        cols = [i for i in selection.selected_cols if i < self._data.ncol]
        if rows != selection.selected_rows or cols != selection.selected_cols:
            logger.debug(
                "Dropping out-of-range selection rows=%s cols=%s",
                selection.selected_rows,
                selection.selected_cols,
            )
            selection.update(rows, cols)

    def append_data(self, data: FormattedMatrix) -> None:
        """Append rows below the current matrix and re-render."""
        self.update_data(self._data.append(data))

    # --- State ---

    @property
    def data(self) -> FormattedMatrix:
        return self._data

    @property
    def width(self) -> float:
        return self._width

    @property
    def height(self) -> float:
        return self._height

    @property
    def options(self) -> ViewOptions:
        return self._options

    @property
    def surface(self) -> Surface:
        return self._surface

    @property
    def geometry(self) -> ViewGeometry | None:
        return self._geometry

    @property
    def color_scale(self) -> ColorScale:
        return self._color_scale

    @property
    def selection(self) -> SelectionState:
        return self._selection

    @property
    def labels(self) -> list[AxisLabel]:
        return self._labels

    @property
    def controller(self) -> InteractionController:
        return self._controller

    @property
    def show_values(self) -> bool:
        """Per-data ``labels`` flag wins over the view option."""
        if self._data.labels is not None:
            return self._data.labels
        return self._options.labels

    def find_label(self, axis: Any, index: Any) -> AxisLabel | None:
        for label in self._labels:
            if label.axis == axis and label.index == index:
                return label
        return None
