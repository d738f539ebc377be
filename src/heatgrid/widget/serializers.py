"""Serializers: convert view state to JS-transferable JSON."""

from __future__ import annotations

import json
from typing import Any, Iterable

from ..core.color_scale import ColorScale
from ..layout.label_layout import AxisLabel
from ..layout.planner import ViewGeometry
from ..render.surface import RecordingSurface


def serialize_geometry(geometry: ViewGeometry | None) -> dict | None:
    return geometry.to_dict() if geometry is not None else None


def serialize_labels(labels: Iterable[AxisLabel]) -> list[dict]:
    return [label.to_dict() for label in labels]


def serialize_frame(
    width: float,
    height: float,
    geometry: ViewGeometry | None,
    surface: RecordingSurface,
    labels: Iterable[AxisLabel],
    color_scale: ColorScale,
) -> str:
    """Serialize everything the browser needs to draw one frame as a JSON string."""
    return json.dumps({
        "width": width,
        "height": height,
        "geometry": serialize_geometry(geometry),
        "commands": surface.commands if geometry is not None else [],
        "labels": serialize_labels(labels),
        "colorScale": color_scale.to_dict(),
    })


def serialize_config(**extra: Any) -> str:
    """Serialize static widget config as a JSON string."""
    return json.dumps(extra)
