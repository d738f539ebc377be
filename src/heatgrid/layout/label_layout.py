"""Placement of row/column axis labels and their DOM class lists."""

from __future__ import annotations

from dataclasses import dataclass, field

from .planner import ViewGeometry

ROW = "row"
COLUMN = "column"

HOVER_CLASS = "selected"
STICKY_CLASS = "selected-sticky"

# Column labels sit at 80% of the top margin, tilted up to the right.
COLUMN_LABEL_ROTATION = -60.0
LABEL_INSET = 0.8


@dataclass(eq=False)
class AxisLabel:
    """One axis label text node: fixed placement, mutable class list."""

    axis: str
    index: int
    text: str
    x: float
    y: float
    font_size: float
    anchor: str = "start"
    rotation: float = 0.0
    classes: set[str] = field(default_factory=set)

    @property
    def base_classes(self) -> tuple[str, str]:
        return ("axis-label", f"{self.axis}-label")

    def set_class(self, name: str, on: bool) -> None:
        if on:
            self.classes.add(name)
        else:
            self.classes.discard(name)

    def has_class(self, name: str) -> bool:
        return name in self.classes

    def class_string(self) -> str:
        """Full ``class`` attribute value."""
        return " ".join([*self.base_classes, *sorted(self.classes)])

    def to_dict(self) -> dict:
        return {
            "axis": self.axis,
            "index": self.index,
            "text": self.text,
            "x": self.x,
            "y": self.y,
            "fontSize": self.font_size,
            "anchor": self.anchor,
            "rotation": self.rotation,
            "className": self.class_string(),
        }


class LabelLayoutEngine:
    """Computes label placement from the view geometry."""

    @staticmethod
    def compute(
        geometry: ViewGeometry,
        rows: tuple[str, ...] | None = None,
        columns: tuple[str, ...] | None = None,
    ) -> list[AxisLabel]:
        """Build labels for every row and column that has text.

        Coordinates are container-local: row labels are right-aligned at
        80% of the left margin and vertically centered on their row;
        column labels start at 80% of the top margin above the center of
        their column.
        """
        left = geometry.margins.left
        top = geometry.margins.top
        font_size = geometry.axis_font_size
        labels: list[AxisLabel] = []

        if columns is not None:
            for i, text in enumerate(columns):
                labels.append(AxisLabel(
                    axis=COLUMN,
                    index=i,
                    text=text,
                    x=left + geometry.x_scale.center(i),
                    y=top * LABEL_INSET,
                    font_size=font_size,
                    anchor="start",
                    rotation=COLUMN_LABEL_ROTATION,
                ))
        if rows is not None:
            for i, text in enumerate(rows):
                labels.append(AxisLabel(
                    axis=ROW,
                    index=i,
                    text=text,
                    x=left * LABEL_INSET,
                    y=top + geometry.y_scale.center(i),
                    font_size=font_size,
                    anchor="end",
                ))
        return labels
