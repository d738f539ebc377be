"""Tests for the standalone HTML export."""

import json
import re

import pytest

from heatgrid.export.html_export import HTMLExporter
from heatgrid.render.surface import AggSurface
from heatgrid.view import MatrixView


def _embedded_frame(html: str) -> dict:
    match = re.search(r"const frameJson = (\".*?\");\n", html, re.S)
    assert match is not None
    return json.loads(json.loads(match.group(1)))


class TestHTMLExport:
    def test_file_written(self, tmp_path, make_view, labeled_matrix):
        out = tmp_path / "grid.html"
        HTMLExporter.export(make_view(labeled_matrix, 520, 520), out)
        assert out.exists()
        html = out.read_text(encoding="utf-8")
        assert html.startswith("<!DOCTYPE html>")
        assert "export default" in html
        assert ".axis-label" in html

    def test_title_is_escaped(self, make_view, square_matrix):
        html = HTMLExporter.render_html(make_view(square_matrix, 200, 200), title="a <b> test")
        assert "<title>a &lt;b&gt; test</title>" in html

    def test_embeds_current_frame(self, make_view, labeled_matrix):
        view = make_view(labeled_matrix, 520, 520)
        view.controller.label_click("row", 2)
        frame = _embedded_frame(HTMLExporter.render_html(view))
        assert [lb["text"] for lb in frame["labels"] if lb["axis"] == "row"] == [
            "gene_A", "gene_B", "gene_C",
        ]
        assert frame["commands"] == view.surface.commands
        sticky = [lb["index"] for lb in frame["labels"] if "selected-sticky" in lb["className"]]
        assert sticky == [2]

    def test_script_close_tag_in_label_stays_inside_string(self, make_view):
        fm = MatrixView.format_data({"matrix": [[1, 2]], "columns": ["</script>", "ok"]})
        html = HTMLExporter.render_html(make_view(fm, 400, 400))
        assert html.count("</script>") == 1

    def test_uninitialized_view(self, square_matrix):
        from heatgrid.render.surface import RecordingSurface

        view = MatrixView(200, 200, RecordingSurface(), square_matrix)
        frame = _embedded_frame(HTMLExporter.render_html(view))
        assert frame["geometry"]["cellSize"] == 100

    def test_raster_view_rejected(self, square_matrix):
        view = MatrixView(200, 200, AggSurface(200, 200), square_matrix)
        with pytest.raises(TypeError, match="RecordingSurface"):
            HTMLExporter.render_html(view)
