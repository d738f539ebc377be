"""Data model, scales and validation."""

from .color_scale import PALETTES, ColorScale
from .matrix import FormattedMatrix, MatrixEntry, format_data
from .position_scale import OrdinalScale

__all__ = [
    "PALETTES",
    "ColorScale",
    "FormattedMatrix",
    "MatrixEntry",
    "format_data",
    "OrdinalScale",
]
