"""Drawing surfaces the render pipeline paints on.

Coordinates are canvas-local pixels with the origin at the top-left.
Colors are ``(r, g, b, alpha)`` with 0-255 channels and alpha in [0, 1].
"""

from __future__ import annotations

import abc
import json
import pathlib

import numpy as np

from ..layout.geometry import Rect

RGBA = tuple[int, int, int, float]

WHITE = (255, 255, 255)
BLACK = (0, 0, 0)

# A power of two keeps width / dpi * dpi exact; Agg truncates figure pixel sizes.
DEFAULT_DPI = 64.0


def rgba_string(color: RGBA) -> str:
    """CSS ``rgba(...)`` string for a color tuple."""
    r, g, b, a = color
    return f"rgba({int(r)},{int(g)},{int(b)},{float(a):g})"


class Surface(abc.ABC):
    """The canvas-2D subset used by the render pipeline."""

    @abc.abstractmethod
    def clear(self, width: float, height: float) -> None:
        """Erase everything in the ``width`` x ``height`` canvas region."""

    @abc.abstractmethod
    def fill_rect(self, rect: Rect, fill: RGBA, stroke: RGBA, line_width: float) -> None:
        """Fill and then stroke a rectangle."""

    @abc.abstractmethod
    def fill_text(self, text: str, x: float, y: float, color: RGBA, font_size: float) -> None:
        """Draw monospace text centered on ``(x, y)``."""


class RecordingSurface(Surface):
    """Records draw calls as JSON-ready commands for the browser to replay."""

    def __init__(self) -> None:
        self._commands: list[dict] = []

    @property
    def commands(self) -> list[dict]:
        return list(self._commands)

    def clear(self, width: float, height: float) -> None:
        # A clear makes every earlier command invisible, so drop them.
        self._commands = [{"op": "clear", "width": width, "height": height}]

    def fill_rect(self, rect: Rect, fill: RGBA, stroke: RGBA, line_width: float) -> None:
        self._commands.append({
            "op": "rect",
            **rect.to_dict(),
            "fill": rgba_string(fill),
            "stroke": rgba_string(stroke),
            "lineWidth": line_width,
        })

    def fill_text(self, text: str, x: float, y: float, color: RGBA, font_size: float) -> None:
        self._commands.append({
            "op": "text",
            "text": text,
            "x": x,
            "y": y,
            "fill": rgba_string(color),
            "fontSize": font_size,
        })

    def to_json(self) -> str:
        return json.dumps(self._commands)


class AggSurface(Surface):
    """Rasterizes draw calls into an RGBA pixel buffer with matplotlib's Agg backend."""

    def __init__(self, width: float, height: float, dpi: float = DEFAULT_DPI) -> None:
        from matplotlib.backends.backend_agg import FigureCanvasAgg
        from matplotlib.figure import Figure

        self._dpi = dpi
        self._figure = Figure(figsize=(width / dpi, height / dpi), dpi=dpi)
        self._figure.patch.set_alpha(0.0)
        self._canvas = FigureCanvasAgg(self._figure)
        self._height = float(height)
        self._transform = self._build_transform()

    def _build_transform(self):
        from matplotlib.transforms import Affine2D

        # Agg display space has its origin at the bottom-left.
        return Affine2D().scale(1.0, -1.0).translate(0.0, self._height)

    def _points(self, pixels: float) -> float:
        return pixels * 72.0 / self._dpi

    @staticmethod
    def _mpl_color(color: RGBA) -> tuple[float, float, float, float]:
        r, g, b, a = color
        return (r / 255.0, g / 255.0, b / 255.0, float(a))

    def clear(self, width: float, height: float) -> None:
        self._figure.clear()
        if (width, height) != self.size:
            self._figure.set_size_inches(width / self._dpi, height / self._dpi)
            self._height = float(height)
            self._transform = self._build_transform()

    @property
    def size(self) -> tuple[float, float]:
        w, h = self._figure.get_size_inches()
        return (w * self._dpi, h * self._dpi)

    def fill_rect(self, rect: Rect, fill: RGBA, stroke: RGBA, line_width: float) -> None:
        from matplotlib.patches import Rectangle

        patch = Rectangle(
            (rect.x, rect.y),
            rect.width,
            rect.height,
            transform=self._transform,
            facecolor=self._mpl_color(fill),
            edgecolor=self._mpl_color(stroke),
            linewidth=self._points(line_width),
        )
        self._figure.add_artist(patch)

    def fill_text(self, text: str, x: float, y: float, color: RGBA, font_size: float) -> None:
        self._figure.text(
            x,
            y,
            text,
            transform=self._transform,
            ha="center",
            va="center",
            family="monospace",
            fontsize=self._points(font_size),
            color=self._mpl_color(color),
        )

    def to_array(self) -> np.ndarray:
        """Render and return the (height, width, 4) uint8 RGBA pixel buffer."""
        self._canvas.draw()
        return np.asarray(self._canvas.buffer_rgba()).copy()

    def save_png(self, path: str | pathlib.Path) -> None:
        self._figure.savefig(path, format="png", dpi=self._dpi)
