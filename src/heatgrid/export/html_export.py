"""HTMLExporter: standalone HTML snapshot of a rendered view."""

from __future__ import annotations

import logging
import pathlib

import jinja2

from ..render.surface import RecordingSurface
from ..view import MatrixView
from ..widget.heatmap_widget import WIDGET_CSS, HeatmapWidget
from ..widget.serializers import serialize_frame

logger = logging.getLogger(__name__)

_TEMPLATE_DIR = pathlib.Path(__file__).parent / "templates"


class HTMLExporter:
    """Export the current frame of a view as a self-contained HTML file.

    The page embeds the browser module and the frame inline. With no
    Python kernel behind it, label hover still highlights but clicks and
    keys do nothing.
    """

    @staticmethod
    def render_html(view: MatrixView, title: str = "heatgrid") -> str:
        if not isinstance(view.surface, RecordingSurface):
            raise TypeError(
                "HTML export needs a MatrixView drawing on a RecordingSurface, "
                f"got {type(view.surface).__name__}."
            )
        if view.geometry is None:
            view.init()

        frame_json = serialize_frame(
            view.width,
            view.height,
            view.geometry,
            view.surface,
            view.labels,
            view.color_scale,
        )
        env = jinja2.Environment(
            loader=jinja2.FileSystemLoader(str(_TEMPLATE_DIR)),
            autoescape=False,  # We're generating JS, not user content
        )
        template = env.get_template("standalone.html.j2")
        return template.render(
            title=title,
            frame_json=frame_json,
            js_source=HeatmapWidget._build_esm(),
            css_source=WIDGET_CSS,
        )

    @staticmethod
    def export(view: MatrixView, path: str | pathlib.Path, title: str = "heatgrid") -> None:
        """Write the standalone HTML file."""
        path = pathlib.Path(path)
        path.write_text(HTMLExporter.render_html(view, title=title), encoding="utf-8")
        logger.info("Wrote HTML snapshot to %s", path)
