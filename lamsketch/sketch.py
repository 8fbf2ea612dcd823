"""Building a layered laminate sketch from raw drawing polylines."""

from __future__ import annotations

import copy
import sys
from dataclasses import dataclass, replace
from itertools import chain
from typing import Iterable, Sequence

from lamsketch.geometry import (
    Point,
    Polygon,
    RawPolyline,
    calculate_bisector,
    find_segments_intersection,
    get_perpendicular_point,
    is_line_intersects_polyline,
    is_parallel_lines,
    is_polyline_point_in_polygon,
    offset_polyline,
    points_approximately_equal,
    remove_self_intersections,
)
from lamsketch.layers import LaminateData, Layer, Node, NodePos

# No laminate has a single ply thicker than this, so it is enough for every probe.
_PROBE_OFFSET = 3.0
_CONNECT_EPSILON = 1e-4


def is_upper_polyline(polyline: Sequence[Point], raw_sketch: Iterable[RawPolyline]) -> bool:
    """True if no other polyline of the sketch lies just above the given one."""
    offset = remove_self_intersections(offset_polyline(polyline, _PROBE_OFFSET))
    if not polyline or not offset:
        return False

    others = [layer.polyline for layer in raw_sketch if layer.polyline is not polyline]
    for other in others:
        if (is_line_intersects_polyline(polyline[0], offset[0], other)
                or is_line_intersects_polyline(polyline[-1], offset[-1], other)):
            return False

    polygon = Polygon(polyline)
    polygon.add_polyline(reversed(offset))
    return not any(is_polyline_point_in_polygon(other, polygon) for other in others)


@dataclass
class Borders:
    """Bounding box of a raw sketch."""

    left: float = 0.0
    bottom: float = 0.0
    right: float = 0.0
    top: float = 0.0


def get_borders(raw_sketch: Iterable[RawPolyline]) -> Borders:
    borders = Borders(left=sys.float_info.max, bottom=sys.float_info.max,
                      right=sys.float_info.min, top=sys.float_info.min)
    for point in chain.from_iterable(layer.polyline for layer in raw_sketch):
        borders.left = min(borders.left, point.x)
        borders.bottom = min(borders.bottom, point.y)
        borders.right = max(borders.right, point.x)
        borders.top = max(borders.top, point.y)
    return borders


def move_raw_sketch_to_zero(raw_sketch: Sequence[RawPolyline]) -> tuple[float, float]:
    """Move the sketch in place so its bounding box starts at the origin; return (width, height)."""
    borders = get_borders(raw_sketch)
    for layer in raw_sketch:
        layer.polyline[:] = [Point(p.x - borders.left, p.y - borders.bottom)
                             for p in layer.polyline]
    return borders.right - borders.left, borders.top - borders.bottom


def start_point_optimization(raw_sketch: Iterable[RawPolyline]) -> None:
    """Reverse, in place, every polyline that runs from right to left."""
    for layer in raw_sketch:
        if layer.polyline and layer.polyline[0].x > layer.polyline[-1].x:
            layer.polyline.reverse()


def get_upper_plies(raw_sketch: Sequence[RawPolyline]) -> list[RawPolyline]:
    return [layer for layer in raw_sketch if is_upper_polyline(layer.polyline, raw_sketch)]


@dataclass
class _UnusedNode:
    pos: NodePos
    tied: bool = False


def _try_connect(intersection: Point | None, first: Node, second: Node,
                 connectable: Node) -> tuple[bool, bool]:
    """Link connectable to first or second if the intersection hits one of them."""
    if intersection is None:
        return False, False

    is_first = points_approximately_equal(intersection, first.point, _CONNECT_EPSILON)
    is_second = points_approximately_equal(intersection, second.point, _CONNECT_EPSILON)
    if not is_first and not is_second:
        return False, False

    target = first if is_first else second
    if target.top_pos is None and connectable.bottom_pos is None:
        target.top_pos = connectable.pos
        connectable.bottom_pos = target.pos
        return is_first, is_second
    return False, False


def _connect_line_with_nodes(first: Node, second: Node, data: LaminateData,
                             unused: list[_UnusedNode]) -> None:
    """Link free nodes of the layers above to the segment first-second."""
    for entry in unused:
        node_pos = entry.pos
        connectable = data.get_node(node_pos)
        if connectable.bottom_pos is not None:
            continue

        is_first_node = data.is_first_node_in_ply(node_pos)
        is_last_node = data.is_last_node_in_ply(node_pos)

        neighbors: list[Node] = []
        if not is_first_node:
            neighbors.append(data.get_node(replace(node_pos, node_pos=node_pos.node_pos - 1)))
        if not is_last_node:
            neighbors.append(data.get_node(replace(node_pos, node_pos=node_pos.node_pos + 1)))

        if not is_first_node and not is_last_node:
            left, right = neighbors
            bisector = (
                calculate_bisector(left.point, connectable.point, right.point, _PROBE_OFFSET),
                calculate_bisector(left.point, connectable.point, right.point, -_PROBE_OFFSET),
            )
            is_first, is_second = _try_connect(
                find_segments_intersection(first.point, second.point, *bisector, _CONNECT_EPSILON),
                first, second, connectable)
            if is_first or is_second:
                entry.tied = True
                if is_second:
                    return
                continue

        intersections: list[Point] = []
        connected = False
        for neighbor in neighbors:
            perpendicular = (
                get_perpendicular_point(connectable.point, neighbor.point, _PROBE_OFFSET),
                get_perpendicular_point(connectable.point, neighbor.point, -_PROBE_OFFSET),
            )
            intersection = find_segments_intersection(first.point, second.point,
                                                      *perpendicular, _CONNECT_EPSILON)
            is_first, is_second = _try_connect(intersection, first, second, connectable)
            if is_first or is_second:
                entry.tied = True
                if is_second:
                    return
                connected = True
                break
            if intersection is not None:
                intersections.append(intersection)
        if connected or not intersections:
            continue

        point = intersections[0]
        if len(intersections) == 2 and is_parallel_lines(first.point, second.point,
                                                         connectable.point, neighbors[1].point):
            point = intersections[1]

        new_node = data.insert_node(second.pos, Node(point=point, pos=second.pos))
        new_node.top_pos = connectable.pos
        connectable.bottom_pos = new_node.pos
        entry.tied = True
        second = new_node


def _connect_nodes(ply, data: LaminateData, unused: list[_UnusedNode]) -> None:
    index = 1
    while index < len(ply):
        _connect_line_with_nodes(ply[index - 1], ply[index], data, unused)
        index += 1


def _add_layer(upper_plies: Iterable[RawPolyline], data: LaminateData,
               unused: list[_UnusedNode]) -> None:
    ordered = sorted(upper_plies, key=lambda raw: raw.polyline[0].x)

    layer_pos = len(data)
    new_layer: Layer = data.add_layer()

    for raw in ordered:
        ply_pos = len(new_layer)
        new_ply = new_layer.add_ply()
        new_ply.ori = raw.ori
        for node_pos, point in enumerate(raw.polyline):
            new_ply.add_node(Node(point=point, pos=NodePos(layer_pos, ply_pos, node_pos)))
        if layer_pos != 0:
            _connect_nodes(new_ply, data, unused)

    unused[:] = [entry for entry in unused if not entry.tied]
    unused.extend(_UnusedNode(NodePos(layer_pos, ply_pos, node_pos))
                  for ply_pos, ply in enumerate(new_layer)
                  for node_pos in range(len(ply)))


def convert_raw_sketch(raw_sketch: Iterable[RawPolyline]) -> LaminateData:
    """Peel the sketch from the top down into layers; empty data if it cannot be done.

    The polylines given are reoriented in place.
    """
    remaining = list(raw_sketch)
    result = LaminateData()
    start_point_optimization(remaining)

    unused: list[_UnusedNode] = []
    while remaining:
        upper = get_upper_plies(remaining)
        if not upper:
            return LaminateData()
        _add_layer(upper, result, unused)
        taken = {id(raw) for raw in upper}
        remaining = [raw for raw in remaining if id(raw) not in taken]

    result.reverse_layers()
    return result


def scale_layers(data: LaminateData, scale: float) -> None:
    for layer in data:
        for ply in layer:
            for node in ply:
                node.point = Point(node.point.x * scale, node.point.y * scale)


class Sketch:
    """A laminate sketch built from raw polylines."""

    DEFAULT_WIDTH = 200

    def __init__(self) -> None:
        self._original = LaminateData()
        self._optimized = LaminateData()
        self._width = 0.0
        self._height = 0.0

    @property
    def width(self) -> float:
        return self._width

    @property
    def height(self) -> float:
        return self._height

    @property
    def is_empty(self) -> bool:
        return len(self._original) == 0

    @property
    def layers(self) -> list[Layer]:
        return self._optimized.layers

    def raw_sketch(self) -> list[RawPolyline]:
        """The plies of the sketch as raw polylines, ready to be written to a drawing."""
        return [RawPolyline([node.point for node in ply], ply.ori)
                for layer in self._optimized
                for ply in layer]

    def fill_sketch(self, raw_sketch: Sequence[RawPolyline]) -> bool:
        """Build the sketch from raw polylines; False if they do not form a laminate."""
        self._width, self._height = move_raw_sketch_to_zero(raw_sketch)
        data = convert_raw_sketch(raw_sketch)
        if not len(data):
            return False
        self._original = data
        self.optimize_for_width(self.DEFAULT_WIDTH)
        return True

    def scale_sketch(self, scale: float) -> None:
        scale_layers(self._optimized, scale)

    def optimize_for_width(self, width: int) -> None:
        """Rebuild the displayed sketch from the original one."""
        self._optimized = copy.deepcopy(self._original)