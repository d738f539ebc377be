"""Render pipeline and drawing surfaces."""

from .pipeline import cell_opacity, render_frame
from .surface import AggSurface, RecordingSurface, Surface

__all__ = [
    "cell_opacity",
    "render_frame",
    "AggSurface",
    "RecordingSurface",
    "Surface",
]
