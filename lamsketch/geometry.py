"""Planar geometry primitives and tolerant comparisons used by the sketch builder."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum
from itertools import pairwise
from typing import Iterable, Sequence

Polyline = list["Point"]


@dataclass(frozen=True, eq=False)
class Point:
    """A point in the plane. Equality is tolerant to rounding noise."""

    x: float = 0.0
    y: float = 0.0

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Point):
            return NotImplemented
        tolerance = max(1.0, abs(self.x), abs(other.x), abs(self.y), abs(other.y)) * 1e-9
        return abs(self.x - other.x) < tolerance and abs(self.y - other.y) < tolerance


class Ori(Enum):
    """Lay-up direction of a ply segment."""

    NO_ORI = "no_ori"
    ZERO = "zero"  # 0 degrees
    PERP = "perp"  # 90 degrees
    OTHER = "other"  # +-45 and any other angle


@dataclass
class RawPolyline:
    """A polyline read from a drawing, together with its lay-up direction."""

    polyline: list[Point] = field(default_factory=list)
    ori: Ori = Ori.ZERO

    def __len__(self) -> int:
        return len(self.polyline)


class Polygon:
    """A closed polygon given by its vertices in order."""

    def __init__(self, points: Iterable[Point] = ()) -> None:
        self._points: list[Point] = list(points)

    def add_point(self, point: Point) -> None:
        self._points.append(point)

    def add_polyline(self, polyline: Iterable[Point]) -> None:
        self._points.extend(polyline)

    @property
    def points(self) -> tuple[Point, ...]:
        return tuple(self._points)

    def __len__(self) -> int:
        return len(self._points)

    def __iter__(self):
        return iter(self._points)

    def __repr__(self) -> str:
        return f"Polygon({self._points!r})"


def approximately_equal(lhs: float, rhs: float,
                        abs_epsilon: float = 1e-12, rel_epsilon: float = 1e-9) -> bool:
    """Compare two numbers with an absolute, then a relative tolerance."""
    diff = abs(lhs - rhs)
    if diff <= abs_epsilon:
        return True
    return diff <= rel_epsilon * max(abs(lhs), abs(rhs))


def points_approximately_equal(lhs: Point, rhs: Point,
                               abs_epsilon: float = 1e-12, rel_epsilon: float = 1e-7) -> bool:
    return (approximately_equal(lhs.x, rhs.x, abs_epsilon, rel_epsilon)
            and approximately_equal(lhs.y, rhs.y, abs_epsilon, rel_epsilon))


def polylines_approximately_equal(lhs: Sequence[Point], rhs: Sequence[Point],
                                  abs_epsilon: float = 1e-12, rel_epsilon: float = 1e-7) -> bool:
    if len(lhs) != len(rhs):
        return False
    return all(points_approximately_equal(a, b, abs_epsilon, rel_epsilon)
               for a, b in zip(lhs, rhs))


def is_zero(value: float, abs_epsilon: float = 1e-12, rel_epsilon: float = 1e-9) -> bool:
    return abs(value) <= max(abs_epsilon, rel_epsilon * abs(value))


def is_less_or_equal(lhs: float, rhs: float,
                     abs_epsilon: float = 1e-12, rel_epsilon: float = 1e-9) -> bool:
    return lhs <= rhs or approximately_equal(lhs, rhs, abs_epsilon, rel_epsilon)


def is_greater_or_equal(lhs: float, rhs: float,
                        abs_epsilon: float = 1e-12, rel_epsilon: float = 1e-9) -> bool:
    return lhs >= rhs or approximately_equal(lhs, rhs, abs_epsilon, rel_epsilon)


def is_strictly_less(lhs: float, rhs: float,
                     abs_epsilon: float = 1e-12, rel_epsilon: float = 1e-9) -> bool:
    return lhs < rhs and not approximately_equal(lhs, rhs, abs_epsilon, rel_epsilon)


def is_strictly_greater(lhs: float, rhs: float,
                        abs_epsilon: float = 1e-12, rel_epsilon: float = 1e-8) -> bool:
    return lhs > rhs and not approximately_equal(lhs, rhs, abs_epsilon, rel_epsilon)


def grad_to_rad(grad: float) -> float:
    return math.pi * grad / 180.0


def rad_to_grad(rad: float) -> float:
    return rad * 180.0 / math.pi


def line_slope(p1: Point, p2: Point) -> float:
    """Angle of the segment p1-p2 in radians."""
    return math.atan2(p2.y - p1.y, p2.x - p1.x)


def slope_components(p1: Point, p2: Point) -> tuple[float, float]:
    """Return (dy, dx) of the segment p1-p2."""
    return p2.y - p1.y, p2.x - p1.x


def is_collinear(a: Point, b: Point, c: Point,
                 abs_epsilon: float = 1e-12, rel_epsilon: float = 1e-8) -> bool:
    area = (b.x - a.x) * (c.y - a.y) - (b.y - a.y) * (c.x - a.x)
    return approximately_equal(area, 0.0, abs_epsilon, rel_epsilon)


def is_parallel_lines(p1: Point, p2: Point, p3: Point, p4: Point,
                      abs_epsilon: float = 1e-12, rel_epsilon: float = 1e-8) -> bool:
    denominator = (p4.x - p3.x) * (p2.y - p1.y) - (p2.x - p1.x) * (p4.y - p3.y)
    return is_zero(denominator, abs_epsilon, rel_epsilon)


def find_segments_intersection(p1: Point, p2: Point, p3: Point, p4: Point,
                               abs_epsilon: float = 1e-12,
                               rel_epsilon: float = 1e-8) -> Point | None:
    """Intersection point of segments p1-p2 and p3-p4, or None."""
    denominator = (p4.x - p3.x) * (p2.y - p1.y) - (p2.x - p1.x) * (p4.y - p3.y)
    if is_zero(denominator):
        return None

    t = ((p4.x - p3.x) * (p3.y - p1.y) - (p3.x - p1.x) * (p4.y - p3.y)) / denominator
    u = ((p2.x - p1.x) * (p3.y - p1.y) - (p2.y - p1.y) * (p3.x - p1.x)) / denominator

    def within(value: float) -> bool:
        return (is_greater_or_equal(value, 0.0, abs_epsilon, rel_epsilon)
                and is_less_or_equal(value, 1.0, abs_epsilon, rel_epsilon))

    if within(t) and within(u):
        return Point(p1.x + t * (p2.x - p1.x), p1.y + t * (p2.y - p1.y))
    return None


def find_lines_intersection(p1: Point, p2: Point, q1: Point, q2: Point) -> Point | None:
    """Intersection of the infinite lines through p1-p2 and q1-q2, or None if parallel."""
    dx1 = p2.x - p1.x
    dy1 = p2.y - p1.y
    dx2 = q2.x - q1.x
    dy2 = q2.y - q1.y

    det = dx1 * dy2 - dy1 * dx2
    if is_zero(det):
        return None

    t = ((q1.x - p1.x) * dy2 - (q1.y - p1.y) * dx2) / det
    return Point(p1.x + dx1 * t, p1.y + dy1 * t)


def is_point_in_polygon(test: Point, polygon: Polygon) -> bool:
    """True if the point is inside the polygon or on its boundary."""
    points = polygon.points
    if not points:
        return False

    is_inside = False
    previous = points[:-1]
    for p1, p2 in zip(points, (points[-1], *previous)):
        if approximately_equal(test.x, p1.x) and approximately_equal(test.y, p1.y):
            return True

        if is_zero(p1.x - p2.x):
            if (is_zero(test.x - p1.x)
                    and is_greater_or_equal(test.y, min(p1.y, p2.y))
                    and is_less_or_equal(test.y, max(p1.y, p2.y))):
                return True
            continue

        if is_less_or_equal(test.x, min(p1.x, p2.x)) or test.x > max(p1.x, p2.x):
            continue

        t = (test.x - p1.x) / (p2.x - p1.x)
        y_intersect = p1.y + t * (p2.y - p1.y)

        if is_zero(y_intersect - test.y):
            return True
        if y_intersect > test.y:
            is_inside = not is_inside

    return is_inside


def get_perpendicular_point(start: Point, end: Point, offset: float) -> Point:
    """Point at distance offset from start, perpendicular to start-end, to its left."""
    dx = end.x - start.x
    dy = end.y - start.y
    length = math.hypot(dx, dy)
    if is_zero(length):
        return start
    return Point(start.x - dy / length * offset, start.y + dx / length * offset)


def offset_polyline(polyline: Sequence[Point], offset: float) -> list[Point]:
    """Shift a polyline by offset to the left of its direction; [] if it cannot be done."""
    if len(polyline) < 2:
        return []

    last = len(polyline) - 1
    result: list[Point] = []
    for i, current in enumerate(polyline):
        if i in (0, last):
            neighbor = polyline[1] if i == 0 else polyline[i - 1]
            if current == neighbor:
                return []
            result.append(get_perpendicular_point(current, neighbor,
                                                  offset if i == 0 else -offset))
            continue

        prev = polyline[i - 1]
        nxt = polyline[i + 1]
        if current == nxt:
            return []

        p_prev1 = result[-1]
        p_prev2 = get_perpendicular_point(current, prev, -offset)
        p_next1 = get_perpendicular_point(current, nxt, offset)
        p_next2 = get_perpendicular_point(nxt, current, -offset)

        intersection = find_lines_intersection(p_prev1, p_prev2, p_next1, p_next2)
        if intersection is None:
            intersection = Point((p_prev1.x + p_next1.x) / 2, (p_prev1.y + p_next1.y) / 2)
        result.append(intersection)

    return result


def _remove_one_intersection(polyline: list[Point]) -> list[Point] | None:
    n = len(polyline)
    if n < 4:
        return None
    for i in range(n - 1):
        for j in range(i + 2, n - 1):
            intersection = find_segments_intersection(polyline[i], polyline[i + 1],
                                                      polyline[j], polyline[j + 1])
            if intersection is not None:
                return [*polyline[:i + 1], intersection, *polyline[j + 1:]]
    return None


def remove_self_intersections(polyline: Sequence[Point]) -> list[Point]:
    """Cut out the loops of a self-intersecting polyline."""
    current = list(polyline)
    while True:
        reduced = _remove_one_intersection(current)
        if reduced is None:
            return current
        current = reduced
        if len(current) <= 3:
            return current


def is_line_intersects_polyline(begin: Point, end: Point, polyline: Sequence[Point]) -> bool:
    return any(find_segments_intersection(begin, end, a, b) is not None
               for a, b in pairwise(polyline))


def is_polyline_point_in_polygon(polyline: Iterable[Point], polygon: Polygon) -> bool:
    """True if any point of the polyline lies inside the polygon."""
    return any(is_point_in_polygon(point, polygon) for point in polyline)


def distance_between_points(p1: Point, p2: Point) -> float:
    return math.hypot(p1.x - p2.x, p1.y - p2.y)


def remove_extra_dots(raw_polyline: RawPolyline,
                      abs_epsilon: float = 1e-12, rel_epsilon: float = 1e-7) -> RawPolyline:
    """Drop intermediate points that are collinear with their neighbours."""
    if not raw_polyline.polyline:
        return RawPolyline()

    first, *rest = raw_polyline.polyline
    points = [first]
    for point in rest:
        if len(points) >= 2 and is_collinear(points[-2], points[-1], point,
                                             abs_epsilon, rel_epsilon):
            points.pop()
        points.append(point)
    return RawPolyline(points, raw_polyline.ori)


def remove_extra_dots_all(data: Iterable[RawPolyline],
                          abs_epsilon: float = 1e-12,
                          rel_epsilon: float = 1e-7) -> list[RawPolyline]:
    return [remove_extra_dots(item, abs_epsilon, rel_epsilon) for item in data]


def calculate_bisector(a: Point, b: Point, c: Point, length: float) -> Point:
    """End point of the bisector of angle a-b-c, drawn from b with the given length."""
    ba_x, ba_y = a.x - b.x, a.y - b.y
    bc_x, bc_y = c.x - b.x, c.y - b.y

    len_ba = math.sqrt(ba_x * ba_x + ba_y * ba_y)
    len_bc = math.sqrt(bc_x * bc_x + bc_y * bc_y)
    if is_zero(len_ba) or is_zero(len_bc):
        return b

    dir_x = ba_x / len_ba + bc_x / len_bc
    dir_y = ba_y / len_ba + bc_y / len_bc

    dir_length = math.sqrt(dir_x * dir_x + dir_y * dir_y)
    if dir_length == 0:
        return b

    return Point(b.x + dir_x / dir_length * length, b.y + dir_y / dir_length * length)