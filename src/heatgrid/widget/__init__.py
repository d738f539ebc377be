"""Jupyter widget bridge. HeatmapWidget lives in .heatmap_widget."""

from .selection import SelectionState

__all__ = ["SelectionState"]
