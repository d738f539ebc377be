"""Layout planning: cell geometry and axis label placement."""

from .geometry import Margins, Rect
from .label_layout import AxisLabel, LabelLayoutEngine
from .planner import LayoutPlanner, ViewGeometry

__all__ = [
    "Margins",
    "Rect",
    "AxisLabel",
    "LabelLayoutEngine",
    "LayoutPlanner",
    "ViewGeometry",
]
