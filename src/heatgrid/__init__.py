"""heatgrid: interactive canvas heatmaps with keyboard contrast and palette control."""

from ._version import __version__
from .api import Heatmap
from .core.matrix import FormattedMatrix, MatrixEntry, format_data
from .render.surface import AggSurface, RecordingSurface
from .view import MatrixView, ViewOptions

__all__ = [
    "__version__",
    "Heatmap",
    "FormattedMatrix",
    "MatrixEntry",
    "format_data",
    "AggSurface",
    "RecordingSurface",
    "MatrixView",
    "ViewOptions",
]
