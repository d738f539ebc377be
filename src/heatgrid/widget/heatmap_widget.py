"""HeatmapWidget: anywidget bridge for Jupyter rendering.

The Python MatrixView does all layout, color mapping and painting onto a
RecordingSurface; the browser module replays the recorded commands onto a
``<canvas>``, draws the SVG axis labels and forwards pointer/keyboard
events back here as custom messages.
"""

from __future__ import annotations

import logging
import pathlib
from typing import Any

import anywidget
import traitlets

from ..interaction.controller import CONSUMED_KEYS
from ..render.surface import RecordingSurface
from ..view import MatrixView
from .serializers import serialize_config, serialize_frame

logger = logging.getLogger(__name__)

_JS_DIR = pathlib.Path(__file__).parent.parent / "js"

HOVER_EVENTS = frozenset({"mouseover", "mouseout"})

WIDGET_CSS = """
.hg-container {
  position: relative;
  outline: none;
  font-family: "Open Sans", verdana, arial, sans-serif;
}
.hg-container svg {
  position: absolute;
  top: 0;
  left: 0;
}
.hg-container canvas {
  display: block;
}
.axis-label {
  fill: #555;
  cursor: pointer;
  user-select: none;
}
.axis-label.selected {
  fill: #111;
  font-weight: 600;
}
.axis-label.selected-sticky {
  fill: #000;
  font-weight: 700;
}
"""


class HeatmapWidget(anywidget.AnyWidget):
    """Jupyter widget for one interactive MatrixView.

    Communicates with JS via traitlets and custom messages:
    - frame_json: Python → JS, the latest rendered frame
    - config_json: Python → JS, static settings (keys to preventDefault)
    - custom messages: JS → Python, pointer and keyboard events
    """

    _esm = traitlets.Unicode("").tag(sync=True)
    _css = traitlets.Unicode("").tag(sync=True)

    frame_json = traitlets.Unicode("{}").tag(sync=True)
    config_json = traitlets.Unicode("{}").tag(sync=True)

    def __init__(self, view: MatrixView, **kwargs: Any) -> None:
        if not isinstance(view.surface, RecordingSurface):
            raise TypeError(
                "HeatmapWidget needs a MatrixView drawing on a RecordingSurface, "
                f"got {type(view.surface).__name__}."
            )
        super().__init__(
            _esm=self._build_esm(),
            _css=WIDGET_CSS,
            config_json=serialize_config(consumedKeys=sorted(CONSUMED_KEYS)),
            **kwargs,
        )
        self._view = view
        if view.geometry is None:
            view.init()
        self.sync_frame()
        self.on_msg(self._on_message)

    @staticmethod
    def _build_esm() -> str:
        """Read the browser module source."""
        return (_JS_DIR / "heatmap.js").read_text(encoding="utf-8")

    @property
    def view(self) -> MatrixView:
        return self._view

    def sync_frame(self) -> None:
        """Push the view's current frame to JS."""
        view = self._view
        self.frame_json = serialize_frame(
            view.width,
            view.height,
            view.geometry,
            view.surface,
            view.labels,
            view.color_scale,
        )

    def _on_message(self, widget: Any, content: Any, buffers: Any) -> None:
        """Handle an event message from JS, then push the new frame.

        Hover only toggles a label class, which the browser already did on
        its own node, so no frame is pushed for it.
        """
        if not isinstance(content, dict):
            logger.warning("Ignoring non-dict widget message %r", content)
            return
        handled = self._view.controller.dispatch(content)
        if handled and content.get("type") not in HOVER_EVENTS:
            self.sync_frame()

    def update_data(self, data) -> None:
        """Replace the matrix (a FormattedMatrix) and push the re-rendered frame."""
        self._view.update_data(data)
        self.sync_frame()

    def append_data(self, data) -> None:
        """Append rows (a FormattedMatrix) and push the re-rendered frame."""
        self._view.append_data(data)
        self.sync_frame()
