"""Heatmap: the main user-facing API (builder pattern)."""

from __future__ import annotations

import logging
import pathlib
from dataclasses import replace
from typing import Any, Callable, Sequence

import pandas as pd

from .core.color_scale import DEFAULT_PALETTE
from .core.matrix import FormattedMatrix, format_data
from .core.validation import validate_colormap_name
from .render.surface import AggSurface, RecordingSurface, Surface
from .view import MatrixView, ViewOptions

logger = logging.getLogger(__name__)


DEFAULT_WIDTH = 600.0
DEFAULT_HEIGHT = 600.0


class Heatmap:
    """Interactive heatmap builder.

    Usage::

        import heatgrid as hg

        hm = hg.Heatmap([[1, 2], [3, 4]], rows=["a", "b"], columns=["x", "y"])
        hm.set_colormap("Blues").set_size(400, 400)
        hm.show()

        # Click labels to spotlight a row/column, double-click to reset,
        # up/down arrows for contrast, left/right arrows for palette.
        print(hm.selection)
        hm.on_select(lambda rows, cols: print(rows, cols))
    """

    def __init__(
        self,
        data: Any,
        rows: Sequence[str] | None = None,
        columns: Sequence[str] | None = None,
        colormap: str | None = None,
    ) -> None:
        self._data = self._format(data, rows, columns, colormap)
        self._width = DEFAULT_WIDTH
        self._height = DEFAULT_HEIGHT
        self._options = ViewOptions()
        self._callbacks: list[Callable[[list, list], Any]] = []

        # Live view behind the widget (created on show())
        self._view: MatrixView | None = None
        self._widget = None

    @staticmethod
    def _format(
        data: Any,
        rows: Sequence[str] | None,
        columns: Sequence[str] | None,
        colormap: str | None,
    ) -> FormattedMatrix:
        if isinstance(data, FormattedMatrix):
            return data
        if isinstance(data, pd.DataFrame):
            formatted = format_data(data)
            raw = {
                "matrix": data,
                "rows": rows if rows is not None else formatted.rows,
                "columns": columns if columns is not None else formatted.columns,
                "colormap": colormap,
            }
        else:
            raw = {"matrix": data, "rows": rows, "columns": columns, "colormap": colormap}
        return format_data(raw)

    @property
    def data(self) -> FormattedMatrix:
        return self._data

    # --- Configuration ---

    def set_colormap(self, name: str = DEFAULT_PALETTE) -> Heatmap:
        """Set the starting palette (any matplotlib colormap name).

        Arrow-key cycling moves through Purples, Blues, Greens, Oranges,
        Reds and Greys.
        """
        validate_colormap_name(name)
        self._data = self._replace(colormap_name=name)
        return self

    def set_size(self, width: float | None = None, height: float | None = None) -> Heatmap:
        """Set the viewport size in pixels (default 600 x 600)."""
        if width is not None:
            if width <= 0:
                raise ValueError(f"width must be positive, got {width}.")
            self._width = float(width)
        if height is not None:
            if height <= 0:
                raise ValueError(f"height must be positive, got {height}.")
            self._height = float(height)
        return self

    def set_value_labels(self, show: bool = True) -> Heatmap:
        """Draw (or hide) each cell's value inside the cell."""
        self._options = ViewOptions(
            labels=show,
            label_margin=self._options.label_margin,
            zoom_floor=self._options.zoom_floor,
        )
        self._data = self._replace(labels=None)
        return self

    def set_label_margin(self, margin: float) -> Heatmap:
        """Pixels reserved for row/column labels (default 120)."""
        if margin < 0:
            raise ValueError(f"margin must be non-negative, got {margin}.")
        self._options = ViewOptions(
            labels=self._options.labels,
            label_margin=float(margin),
            zoom_floor=self._options.zoom_floor,
        )
        return self

    def set_zoom_floor(self, floor: float) -> Heatmap:
        """Lowest contrast zoom reachable with the down arrow (default -3)."""
        if floor > 0:
            raise ValueError(f"floor must be <= 0, got {floor}.")
        self._options = ViewOptions(
            labels=self._options.labels,
            label_margin=self._options.label_margin,
            zoom_floor=float(floor),
        )
        return self

    def _replace(self, **changes: Any) -> FormattedMatrix:
        return replace(self._data, **changes)

    # --- Data ---

    def update(
        self,
        data: Any,
        rows: Sequence[str] | None = None,
        columns: Sequence[str] | None = None,
    ) -> Heatmap:
        """Replace the matrix. A shown widget re-renders in place."""
        self._data = self._format(data, rows, columns, self._data.colormap_name)
        if self._widget is not None:
            self._widget.update_data(self._data)
        return self

    def append(self, data: Any, rows: Sequence[str] | None = None) -> Heatmap:
        """Append rows below the matrix. A shown widget re-renders in place."""
        extra = self._format(data, rows, self._data.columns, self._data.colormap_name)
        self._data = self._data.append(extra)
        if self._widget is not None:
            self._widget.update_data(self._data)
        return self

    # --- Display ---

    def _build_view(self, surface: Surface) -> MatrixView:
        view = MatrixView(self._width, self._height, surface, self._data, self._options)
        for cb in self._callbacks:
            view.selection.on_select(cb)
        return view

    def show(self) -> Any:
        """Render the heatmap in Jupyter. Returns the widget."""
        from .widget.heatmap_widget import HeatmapWidget

        self._view = self._build_view(RecordingSurface())
        self._view.init()
        self._widget = HeatmapWidget(self._view)
        return self._widget

    def _snapshot_view(self, surface: Surface) -> MatrixView:
        """A fresh view carrying over the live view's selection, palette and zoom."""
        view = MatrixView(self._width, self._height, surface, self._data, self._options)
        if self._view is not None:
            live = self._view
            view.color_scale.set_palette(live.color_scale.palette_name)
            view.color_scale.set_zoom(live.color_scale.zoom)
            view.controller.sync_palette()
            view.selection.update(live.selection.selected_rows, live.selection.selected_cols)
        view.init()
        return view

    def to_png(self, path: str | pathlib.Path) -> None:
        """Rasterize the cell grid (without axis labels) to a PNG file."""
        view = self._snapshot_view(AggSurface(self._width, self._height))
        if view.geometry is None:
            raise ValueError(
                f"Viewport {self._width:g}x{self._height:g} is too small to draw "
                f"a {self._data.nrow}x{self._data.ncol} matrix."
            )
        view.surface.save_png(path)
        logger.info("Wrote PNG to %s", path)

    def to_html(self, path: str | pathlib.Path, title: str = "heatgrid") -> None:
        """Export the heatmap as a standalone HTML file."""
        from .export.html_export import HTMLExporter

        HTMLExporter.export(self._snapshot_view(RecordingSurface()), path, title=title)

    # --- Selection ---

    @property
    def selection(self) -> dict[str, list]:
        """Current selection: {rows: [...], cols: [...]}."""
        if self._view is None:
            return {"rows": [], "cols": []}
        return self._view.selection.value

    def on_select(self, callback: Callable[[list, list], Any]) -> Heatmap:
        """Register a callback: fn(selected_rows, selected_cols) called on selection."""
        self._callbacks.append(callback)
        if self._view is not None:
            self._view.selection.on_select(callback)
        return self
