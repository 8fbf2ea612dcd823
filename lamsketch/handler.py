"""Exchange of laminate sketches with drawing data: polylines and splines in model space."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable

from lamsketch.geometry import Ori, Point, RawPolyline, remove_extra_dots_all

SKETCH_LAYER_NAME = "SketchLayer"
SKETCH_LAYER_COLOR = 1  # red
COLOR_BY_LAYER = 256

_IMPORT_EPSILON = 1e-4


@dataclass
class PolylineEntity:
    """A polyline entity of a drawing (plain or lightweight)."""

    vertices: list[Point] = field(default_factory=list)
    color: int = COLOR_BY_LAYER
    layer: str = "0"


@dataclass
class SplineEntity:
    """A spline entity of a drawing, described by its control points."""

    control_points: list[Point] = field(default_factory=list)
    color: int = COLOR_BY_LAYER
    layer: str = "0"


@dataclass
class DrawingData:
    """Contents of a drawing: model-space entities and named blocks of entities."""

    entities: list[Any] = field(default_factory=list)
    blocks: dict[str, list[Any]] = field(default_factory=dict)

    @property
    def blocks_count(self) -> int:
        return len(self.blocks)

    @property
    def entities_count(self) -> int:
        return len(self.entities)


def ori_from_color(color: int) -> Ori:
    """Lay-up direction encoded by an entity colour: yellow is 90, blue is 0, anything else other."""
    if color == 2:
        return Ori.PERP
    if color == 5:
        return Ori.ZERO
    return Ori.OTHER


def convert_data_to_raw_sketch(data: DrawingData) -> list[RawPolyline]:
    """Raw sketch from the polylines and splines of model space, with collinear points dropped."""
    result: list[RawPolyline] = []
    for entity in data.entities:
        if isinstance(entity, PolylineEntity):
            points = entity.vertices
        elif isinstance(entity, SplineEntity):
            points = entity.control_points
        else:
            continue
        result.append(RawPolyline([Point(p.x, p.y) for p in points],
                                  ori_from_color(entity.color)))
    return remove_extra_dots_all(result, _IMPORT_EPSILON)


def convert_raw_sketch_to_data(sketch: Iterable[RawPolyline], data: DrawingData) -> None:
    """Append every polyline of the sketch to model space on the sketch layer."""
    data.entities.extend(
        PolylineEntity(vertices=list(raw.polyline), layer=SKETCH_LAYER_NAME)
        for raw in sketch
    )