"""Planar geometry kernel shared by the linkage and partition engines.

Points are plain ``(x, y)`` tuples; every tolerance is passed in explicitly
so the callers can route a single configured epsilon through all predicates.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import IntEnum
from typing import List, Optional, Sequence, Tuple

Point = Tuple[float, float]

DOWN: Point = (0.0, -1.0)


def as_point(value: Sequence[float]) -> Point:
    """Coerce ``value`` into a finite ``(x, y)`` tuple.

    A trailing ``z`` component is accepted and dropped; all work happens on
    the ``z = 0`` plane.
    """

    if len(value) not in (2, 3):
        raise ValueError(f"expected 2 coordinates, got {len(value)}")
    x, y = float(value[0]), float(value[1])
    if not (math.isfinite(x) and math.isfinite(y)):
        raise ValueError(f"coordinates must be finite, got ({x}, {y})")
    return x, y


def vec(a: Point, b: Point) -> Point:
    return b[0] - a[0], b[1] - a[1]


def add(a: Point, b: Point) -> Point:
    return a[0] + b[0], a[1] + b[1]


def scale(v: Point, factor: float) -> Point:
    return v[0] * factor, v[1] * factor


def dot(a: Point, b: Point) -> float:
    return a[0] * b[0] + a[1] * b[1]


def cross(a: Point, b: Point) -> float:
    return a[0] * b[1] - a[1] * b[0]


def norm(v: Point) -> float:
    return math.hypot(v[0], v[1])


def distance(a: Point, b: Point) -> float:
    return math.hypot(b[0] - a[0], b[1] - a[1])


def midpoint(a: Point, b: Point) -> Point:
    return (a[0] + b[0]) * 0.5, (a[1] + b[1]) * 0.5


def rotate90(v: Point) -> Point:
    return -v[1], v[0]


def normalized(v: Point, eps: float = 0.0) -> Optional[Point]:
    """Return the unit vector along ``v`` or ``None`` when ``|v| <= eps``."""

    length = norm(v)
    if length <= eps or length == 0.0:
        return None
    return v[0] / length, v[1] / length


def orientation(a: Point, b: Point, p: Point) -> float:
    """Signed doubled area of ``(a, b, p)``; positive when ``p`` is left of ``a -> b``."""

    return (b[0] - a[0]) * (p[1] - a[1]) - (b[1] - a[1]) * (p[0] - a[0])


def side_of_line(a: Point, b: Point, p: Point, eps: float) -> int:
    """Return ``1`` (left), ``-1`` (right) or ``0`` (on the line within ``eps``)."""

    value = orientation(a, b, p)
    if abs(value) < eps:
        return 0
    return 1 if value > 0.0 else -1


@dataclass(frozen=True)
class CircleIntersection:
    """Local-frame description of two intersecting circles.

    ``x`` is the signed distance from the first centre along the baseline to
    the chord midpoint, ``y`` half the chord length.
    """

    exists: bool
    x: float = 0.0
    y: float = 0.0

    def points(self, origin: Point, toward: Point) -> Optional[Tuple[Point, Point]]:
        """Rebuild both world-space intersections, left of the baseline first."""

        if not self.exists:
            return None
        unit = normalized(vec(origin, toward))
        if unit is None:
            return None
        perp = rotate90(unit)
        foot = add(origin, scale(unit, self.x))
        return add(foot, scale(perp, self.y)), add(foot, scale(perp, -self.y))


def circle_circle_intersection(d: float, r1: float, r2: float, eps: float = 0.0) -> CircleIntersection:
    """Intersect a circle of radius ``r1`` at the origin with one of radius ``r2`` at distance ``d``.

    Intersections exist iff ``|r1 - r2| <= d <= r1 + r2`` (with ``eps``
    slack). Concentric circles never yield a discrete pair.
    """

    if d <= eps or d == 0.0:
        return CircleIntersection(False)
    if d < abs(r1 - r2) - eps or d > r1 + r2 + eps:
        return CircleIntersection(False)
    x = (d * d + r1 * r1 - r2 * r2) / (2.0 * d)
    y = math.sqrt(max(0.0, r1 * r1 - x * x))
    return CircleIntersection(True, x, y)


def circle_intersection_points(
    origin: Point, r1: float, other: Point, r2: float, eps: float = 0.0
) -> Optional[Tuple[Point, Point]]:
    data = circle_circle_intersection(distance(origin, other), r1, r2, eps)
    return data.points(origin, other)


def project_onto_line(point: Point, a: Point, b: Point) -> Point:
    """Orthogonal projection of ``point`` on the infinite line through ``a`` and ``b``."""

    direction = vec(a, b)
    length_sq = dot(direction, direction)
    if length_sq == 0.0:
        return a
    t = dot(vec(a, point), direction) / length_sq
    return add(a, scale(direction, t))


def nearest_point_on_segment(point: Point, a: Point, b: Point) -> Point:
    direction = vec(a, b)
    length_sq = dot(direction, direction)
    if length_sq == 0.0:
        return a
    t = dot(vec(a, point), direction) / length_sq
    t = min(1.0, max(0.0, t))
    return add(a, scale(direction, t))


class Axis(IntEnum):
    X = 0
    Y = 1


@dataclass(frozen=True)
class Interval:
    lo: float
    hi: float

    def contains(self, value: float, eps: float = 0.0) -> bool:
        return self.lo - eps <= value <= self.hi + eps


def best_projection_axis(a: Point, b: Point, eps: float) -> Optional[Axis]:
    """Pick the coordinate axis along which segment ``a-b`` has the larger extent.

    Returns ``None`` for a degenerate segment (both extents within ``eps``).
    """

    dx = abs(b[0] - a[0])
    dy = abs(b[1] - a[1])
    if max(dx, dy) <= eps:
        return None
    return Axis.X if dx >= dy else Axis.Y


def project_segment_to_axis(a: Point, b: Point, axis: Axis) -> Interval:
    lo, hi = sorted((a[axis], b[axis]))
    return Interval(lo, hi)


def line_line_intersection(
    p1: Point, p2: Point, q1: Point, q2: Point, eps: float
) -> Optional[Point]:
    """Intersect the infinite lines ``p1-p2`` and ``q1-q2``; ``None`` when parallel."""

    r = vec(p1, p2)
    s = vec(q1, q2)
    denom = cross(r, s)
    if abs(denom) < eps or denom == 0.0:
        return None
    t = cross(vec(p1, q1), s) / denom
    return add(p1, scale(r, t))


def _line_segment_intersection(
    a: Point, b: Point, s1: Point, s2: Point, eps: float
) -> Optional[Point]:
    r = vec(a, b)
    s = vec(s1, s2)
    denom = cross(r, s)
    if abs(denom) < eps or denom == 0.0:
        return None
    qp = vec(a, s1)
    t = cross(qp, s) / denom
    u = cross(qp, r) / denom
    if -eps <= u <= 1.0 + eps:
        return add(a, scale(r, t))
    return None


@dataclass(frozen=True)
class Rect:
    """Axis-aligned rectangle, e.g. the visible part of the plane."""

    left: float
    bottom: float
    right: float
    top: float

    @classmethod
    def around(cls, centre: Point, width: float, height: float) -> "Rect":
        return cls(
            centre[0] - width / 2.0,
            centre[1] - height / 2.0,
            centre[0] + width / 2.0,
            centre[1] + height / 2.0,
        )

    def edges(self) -> List[Tuple[Point, Point]]:
        top_left = (self.left, self.top)
        top_right = (self.right, self.top)
        bottom_right = (self.right, self.bottom)
        bottom_left = (self.left, self.bottom)
        return [
            (top_left, top_right),
            (top_right, bottom_right),
            (bottom_right, bottom_left),
            (bottom_left, top_left),
        ]


def clip_line_to_rect(a: Point, b: Point, rect: Rect, eps: float) -> Optional[Tuple[Point, Point]]:
    """Return where the infinite line ``a-b`` enters and leaves ``rect``.

    The pair is ordered along ``a -> b``. ``None`` when the line misses the
    rectangle, only grazes a corner, or ``a`` and ``b`` coincide.
    """

    direction = normalized(vec(a, b), eps)
    if direction is None:
        return None
    hits: List[Point] = []
    for s1, s2 in rect.edges():
        hit = _line_segment_intersection(a, b, s1, s2, eps)
        if hit is None:
            continue
        if any(distance(hit, known) <= max(eps, 1e-12) for known in hits):
            continue
        hits.append(hit)
    if len(hits) < 2:
        return None
    hits.sort(key=lambda p: dot(vec(a, p), direction))
    return hits[0], hits[1]


def degrees_ccw_from_down(v: Point) -> float:
    """Angle of ``v`` in degrees, counter-clockwise from ``(0, -1)``, in ``(-180, 180]``."""

    return math.degrees(math.atan2(cross(DOWN, v), dot(DOWN, v)))


def wrap_degrees(angle: float) -> float:
    """Wrap ``angle`` into ``(-180, 180]``."""

    wrapped = math.fmod(angle, 360.0)
    if wrapped <= -180.0:
        wrapped += 360.0
    elif wrapped > 180.0:
        wrapped -= 360.0
    return wrapped


__all__ = [
    "Axis",
    "CircleIntersection",
    "DOWN",
    "Interval",
    "Point",
    "Rect",
    "add",
    "as_point",
    "best_projection_axis",
    "circle_circle_intersection",
    "circle_intersection_points",
    "clip_line_to_rect",
    "cross",
    "degrees_ccw_from_down",
    "distance",
    "dot",
    "line_line_intersection",
    "midpoint",
    "nearest_point_on_segment",
    "norm",
    "normalized",
    "orientation",
    "project_onto_line",
    "project_segment_to_axis",
    "rotate90",
    "scale",
    "side_of_line",
    "vec",
    "wrap_degrees",
]
