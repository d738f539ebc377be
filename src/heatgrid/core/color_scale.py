"""ColorScale: piecewise-linear value → color mapping over a 9-swatch palette."""

from __future__ import annotations

import numpy as np

from .validation import validate_colormap_name

# Palette cycle order for the left/right arrow keys.
PALETTES = ("Purples", "Blues", "Greens", "Oranges", "Reds", "Greys")
DEFAULT_PALETTE = PALETTES[0]


def palette_swatches(name: str, n: int) -> np.ndarray:
    """Sample ``n`` evenly spaced swatches from a matplotlib colormap as (n, 3) uint8."""
    import matplotlib.pyplot as plt

    validate_colormap_name(name)
    cmap = plt.get_cmap(name)
    rgba_float = cmap(np.linspace(0.0, 1.0, n))
    return np.round(rgba_float[:, :3] * 255).astype(np.uint8)


class ColorScale:
    """Maps values to RGB colors by interpolating between 9 domain knots.

    The domain spans ``[zmin + extent * zoom, zmax - extent * zoom]``
    (``extent = zmax - zmin``): a positive zoom narrows it and raises
    contrast, a negative zoom widens it. The range is the palette's
    swatches. Changing the palette never touches the domain, and changing
    the zoom never touches the range.
    """

    __slots__ = ("_zmin", "_zmax", "_zoom", "_palette_name", "_domain", "_range", "_nan_color")

    N_KNOTS = 9

    def __init__(
        self,
        palette_name: str = DEFAULT_PALETTE,
        zmin: float = 0.0,
        zmax: float = 1.0,
        nan_color: tuple[int, int, int] = (200, 200, 200),
    ) -> None:
        self._zmin = float(zmin)
        self._zmax = float(zmax)
        self._zoom = 0.0
        self._nan_color = nan_color
        self._palette_name = palette_name
        self._range = palette_swatches(palette_name, self.N_KNOTS)
        self._domain = self._build_domain()

    def _build_domain(self) -> np.ndarray:
        extent = self._zmax - self._zmin
        return np.linspace(
            self._zmin + extent * self._zoom,
            self._zmax - extent * self._zoom,
            self.N_KNOTS,
        )

    @property
    def domain(self) -> np.ndarray:
        """The 9 value knots, ascending."""
        return self._domain.copy()

    @property
    def range(self) -> np.ndarray:
        """The 9 palette swatches as (9, 3) uint8 RGB."""
        return self._range.copy()

    @property
    def zmin(self) -> float:
        return self._zmin

    @property
    def zmax(self) -> float:
        return self._zmax

    @property
    def zoom(self) -> float:
        return self._zoom

    @property
    def palette_name(self) -> str:
        return self._palette_name

    @property
    def nan_color(self) -> tuple[int, int, int]:
        return self._nan_color

    def set_zoom(self, zoom: float) -> None:
        """Set the zoom scalar and recompute the domain."""
        self._zoom = float(zoom)
        self._domain = self._build_domain()

    def set_palette(self, name: str) -> None:
        """Swap the range to another palette; the domain is kept."""
        self._range = palette_swatches(name, self.N_KNOTS)
        self._palette_name = name

    def map_array(self, values: np.ndarray) -> np.ndarray:
        """Map an array of values to (n, 3) uint8 RGB, clamping outside the domain."""
        values = np.asarray(values, dtype=np.float64).ravel()
        out = np.empty((len(values), 3), dtype=np.uint8)
        nan = np.isnan(values)
        out[nan] = self._nan_color
        finite = values[~nan]
        if self._domain[-1] <= self._domain[0]:
            out[~nan] = self._range[0]
            return out
        for channel in range(3):
            # np.interp clamps to the end values outside the knots
            out[~nan, channel] = np.round(
                np.interp(finite, self._domain, self._range[:, channel].astype(np.float64))
            ).astype(np.uint8)
        return out

    def __call__(self, value: float) -> tuple[int, int, int]:
        r, g, b = self.map_array(np.array([value]))[0]
        return (int(r), int(g), int(b))

    def to_dict(self) -> dict:
        """Serialize for JSON transfer to JS."""
        return {
            "palette": self._palette_name,
            "zoom": self._zoom,
            "domain": self._domain.tolist(),
            "range": self._range.tolist(),
            "zmin": self._zmin,
            "zmax": self._zmax,
        }

    def __repr__(self) -> str:
        return (
            f"ColorScale(palette={self._palette_name!r}, "
            f"domain=[{self._domain[0]:g}, {self._domain[-1]:g}], zoom={self._zoom:g})"
        )
