"""OrdinalScale: row/column index → pixel band."""

from __future__ import annotations

import numpy as np


class OrdinalScale:
    """Maps indices ``0..n-1`` to contiguous, equal-width pixel bands.

    Bands have no padding: band ``i`` starts at ``offset + i * band``.
    """

    __slots__ = ("_n", "_band", "_offset")

    def __init__(self, n: int, band: float, offset: float = 0.0) -> None:
        if n < 0:
            raise ValueError(f"OrdinalScale needs a non-negative size, got {n}.")
        self._n = n
        self._band = float(band)
        self._offset = float(offset)

    def __call__(self, index: int) -> float:
        if not 0 <= index < self._n:
            raise IndexError(f"Index {index} outside scale domain [0, {self._n}).")
        return self._offset + index * self._band

    def __len__(self) -> int:
        return self._n

    @property
    def band(self) -> float:
        """Width of one band in pixels."""
        return self._band

    @property
    def offset(self) -> float:
        return self._offset

    @property
    def range_extent(self) -> float:
        """Total pixel span of all bands."""
        return self._n * self._band

    @property
    def positions(self) -> np.ndarray:
        """Pixel start position of every band."""
        return self._offset + np.arange(self._n, dtype=np.float64) * self._band

    def center(self, index: int) -> float:
        return self(index) + self._band / 2

    def index_at(self, pixel: float) -> int | None:
        """Map a pixel coordinate back to a band index, or None outside the bands."""
        if self._n == 0 or self._band <= 0:
            return None
        idx = int(np.floor((pixel - self._offset) / self._band))
        if idx < 0 or idx >= self._n:
            return None
        return idx

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, OrdinalScale):
            return NotImplemented
        return (self._n, self._band, self._offset) == (other._n, other._band, other._offset)

    def __hash__(self) -> int:
        return hash((self._n, self._band, self._offset))

    def __repr__(self) -> str:
        return f"OrdinalScale(n={self._n}, band={self._band:g}, offset={self._offset:g})"
