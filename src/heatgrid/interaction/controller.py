"""InteractionController: pointer/keyboard events → state mutation → repaint."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Mapping

from ..core.color_scale import PALETTES
from ..layout.label_layout import COLUMN, HOVER_CLASS, ROW, AxisLabel

if TYPE_CHECKING:
    from ..view import MatrixView

logger = logging.getLogger(__name__)


ZOOM_STEP = 0.05
ZOOM_MAX = 0.4
DEFAULT_ZOOM_FLOOR = -3.0

# DOM key names and their legacy keyCode equivalents.
KEY_UP = "ArrowUp"
KEY_DOWN = "ArrowDown"
KEY_LEFT = "ArrowLeft"
KEY_RIGHT = "ArrowRight"
_KEY_CODES = {38: KEY_UP, 40: KEY_DOWN, 37: KEY_LEFT, 39: KEY_RIGHT}
CONSUMED_KEYS = frozenset(_KEY_CODES.values())


def normalize_key(key: str | int) -> str | None:
    """Return the arrow key name for a DOM key name or keyCode, else None."""
    if isinstance(key, int):
        return _KEY_CODES.get(key)
    return key if key in CONSUMED_KEYS else None


class InteractionController:
    """Applies user gestures to the view's selection and color scale.

    Every gesture that changes state triggers ``view.redraw()``: a repaint
    with the current geometry, never a layout recompute. Hover only toggles
    a label class.
    """

    def __init__(self, view: MatrixView, zoom_floor: float = DEFAULT_ZOOM_FLOOR) -> None:
        if zoom_floor > 0:
            raise ValueError(f"zoom_floor must be <= 0, got {zoom_floor}.")
        self._view = view
        self._zoom_floor = zoom_floor
        self._palette_index = 0
        self.sync_palette()

    def sync_palette(self) -> None:
        """Point the palette cycle at the view's current palette.

        A palette outside the cycle list starts the cycle from the first entry.
        """
        name = self._view.color_scale.palette_name
        self._palette_index = PALETTES.index(name) if name in PALETTES else 0

    @property
    def palette_index(self) -> int:
        return self._palette_index

    @property
    def zoom_floor(self) -> float:
        return self._zoom_floor

    # --- Pointer ---

    def label_mouseover(self, label: AxisLabel) -> None:
        label.set_class(HOVER_CLASS, True)

    def label_mouseout(self, label: AxisLabel) -> None:
        label.set_class(HOVER_CLASS, False)

    def label_click(self, axis: str, index: int) -> None:
        """Toggle the clicked row or column in the selection and repaint."""
        selection = self._view.selection
        if axis == ROW:
            selection.toggle_row(index)
        elif axis == COLUMN:
            selection.toggle_col(index)
        else:
            raise ValueError(f"Unknown label axis '{axis}'. Use '{ROW}' or '{COLUMN}'.")
        self._view.redraw()

    def background_dblclick(self) -> None:
        """Reset: clear both selections and repaint."""
        self._view.selection.clear()
        self._view.redraw()

    # --- Keyboard ---

    def keydown(self, key: str | int) -> bool:
        """Handle a key press. Returns True if the key was consumed.

        Up/Down step the contrast zoom; Left/Right cycle the palette.
        Other keys are ignored.
        """
        name = normalize_key(key)
        if name in (KEY_UP, KEY_DOWN):
            self._step_zoom(ZOOM_STEP if name == KEY_UP else -ZOOM_STEP)
        elif name in (KEY_LEFT, KEY_RIGHT):
            self._step_palette(1 if name == KEY_RIGHT else -1)
        else:
            return False
        self._view.redraw()
        return True

    def _step_zoom(self, delta: float) -> None:
        color_scale = self._view.color_scale
        # round() keeps repeated 0.05 steps from drifting past the clamps
        zoom = round(color_scale.zoom + delta, 10)
        zoom = min(max(zoom, self._zoom_floor), ZOOM_MAX)
        color_scale.set_zoom(zoom)
        logger.debug("Zoom set to %g", zoom)

    def _step_palette(self, step: int) -> None:
        self._palette_index = (self._palette_index + step) % len(PALETTES)
        self._view.color_scale.set_palette(PALETTES[self._palette_index])
        logger.debug("Palette set to %s", PALETTES[self._palette_index])

    # --- Browser messages ---

    def dispatch(self, event: Mapping[str, Any]) -> bool:
        """Route a browser event message to the matching handler.

        Messages look like ``{"type": "click", "axis": "row", "index": 2}``,
        ``{"type": "dblclick"}`` or ``{"type": "keydown", "key": "ArrowUp"}``.
        Returns True if the event was handled.
        """
        kind = event.get("type")
        if kind == "keydown":
            return self.keydown(event.get("key", event.get("keyCode")))
        if kind == "dblclick":
            self.background_dblclick()
            return True
        if kind in ("click", "mouseover", "mouseout"):
            label = self._view.find_label(event.get("axis"), event.get("index"))
            if label is None:
                logger.warning("Ignoring %s on unknown label %r", kind, dict(event))
                return False
            if kind == "click":
                self.label_click(label.axis, label.index)
            elif kind == "mouseover":
                self.label_mouseover(label)
            else:
                self.label_mouseout(label)
            return True
        logger.warning("Ignoring unknown event type %r", kind)
        return False
