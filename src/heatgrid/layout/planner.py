"""LayoutPlanner: viewport size + matrix shape → ViewGeometry."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from ..core.position_scale import OrdinalScale
from .geometry import Margins, Rect

logger = logging.getLogger(__name__)


DEFAULT_LABEL_MARGIN = 120.0
MIN_AXIS_FONT_SIZE = 8.0
MAX_AXIS_FONT_SIZE = 14.0
MIN_STROKE_WIDTH = 0.1
STROKE_THINNING = 0.00009  # per cell


@dataclass(frozen=True)
class ViewGeometry:
    """Pixel layout of one rendered matrix."""

    cell_size: float
    x_scale: OrdinalScale
    y_scale: OrdinalScale
    canvas_width: float
    canvas_height: float
    stroke_width: float
    axis_font_size: float
    cell_font_size: float
    margins: Margins = Margins()

    @property
    def canvas_rect(self) -> Rect:
        """Canvas placement inside the container."""
        return Rect(self.margins.left, self.margins.top, self.canvas_width, self.canvas_height)

    def cell_rect(self, x: int, y: int) -> Rect:
        """Canvas-local rectangle of the cell at column ``x``, row ``y``."""
        return Rect(self.x_scale(x), self.y_scale(y), self.x_scale.band, self.y_scale.band)

    def to_dict(self) -> dict:
        """Serialize for JSON transfer to JS."""
        return {
            "cellSize": self.cell_size,
            "canvasWidth": self.canvas_width,
            "canvasHeight": self.canvas_height,
            "strokeWidth": self.stroke_width,
            "axisFontSize": self.axis_font_size,
            "cellFontSize": self.cell_font_size,
            "margin": self.margins.to_dict(),
            "nRows": len(self.y_scale),
            "nCols": len(self.x_scale),
        }


def stroke_width_for(nrow: int, ncol: int) -> float:
    """Gridline width: thins out with cell count but never vanishes."""
    return max(1.0 - STROKE_THINNING * nrow * ncol, MIN_STROKE_WIDTH)


class LayoutPlanner:
    """Derives cell size, canvas size, stroke width and font sizes.

    Cells are square. When there are more columns than rows the cell size
    is the largest that fits both axes; otherwise it is set by the rows.
    """

    def __init__(
        self,
        label_margin: float = DEFAULT_LABEL_MARGIN,
        min_axis_font: float = MIN_AXIS_FONT_SIZE,
        max_axis_font: float = MAX_AXIS_FONT_SIZE,
    ) -> None:
        self._label_margin = label_margin
        self._min_axis_font = min_axis_font
        self._max_axis_font = max_axis_font

    @property
    def label_margin(self) -> float:
        return self._label_margin

    def margins_for(self, has_row_labels: bool, has_col_labels: bool) -> Margins:
        return Margins(
            left=self._label_margin if has_row_labels else 0.0,
            top=self._label_margin if has_col_labels else 0.0,
        )

    def plan(
        self,
        width: float,
        height: float,
        nrow: int,
        ncol: int,
        has_row_labels: bool = False,
        has_col_labels: bool = False,
    ) -> ViewGeometry | None:
        """Compute the geometry, or None when there is nothing to draw.

        Returns None for an empty matrix or a viewport too small to hold
        a single pixel of cell.
        """
        if nrow <= 0 or ncol <= 0:
            logger.warning("Skipping layout for degenerate matrix shape (%d, %d)", nrow, ncol)
            return None

        margins = self.margins_for(has_row_labels, has_col_labels)
        avail_height = height - margins.top
        avail_width = width - margins.left

        if ncol > nrow:
            size = min(avail_height / nrow, avail_width / ncol)
        else:
            size = avail_height / nrow

        if not size > 0:
            logger.warning(
                "Skipping layout: viewport %gx%g leaves no room for a %dx%d matrix",
                width, height, nrow, ncol,
            )
            return None

        x_scale = OrdinalScale(ncol, size)
        y_scale = OrdinalScale(nrow, size)
        # (size * 72 / 96) / 5 and / 2.5: pixel → point conversion, then scaled
        axis_font = min(max(size * 0.15, self._min_axis_font), self._max_axis_font)
        cell_font = size * 0.3

        geometry = ViewGeometry(
            cell_size=size,
            x_scale=x_scale,
            y_scale=y_scale,
            canvas_width=x_scale.range_extent,
            canvas_height=y_scale.range_extent,
            stroke_width=stroke_width_for(nrow, ncol),
            axis_font_size=axis_font,
            cell_font_size=cell_font,
            margins=margins,
        )
        logger.debug("Planned %dx%d layout with cell size %.3g", nrow, ncol, size)
        return geometry
