"""Closed-form kinematics of a four-joint loop inside a closed chain.

Of two opposing joints in a closed 4-bar loop, at most one can have an
active limit on how far apart its neighbours may swing, and likewise at most
one on how close they may fold. When one joint reaches such a limit the
opposite pair is collinear, i.e. at its own extreme distance, and can keep
turning through the other half of its range.
"""

from __future__ import annotations

import logging
import math
from typing import Optional, Tuple

from ..geometry import (
    Point,
    add,
    circle_circle_intersection,
    degrees_ccw_from_down,
    distance,
    normalized,
    scale,
    vec,
)
from ..logging_utils import apply_debug_logging
from .model import AngleRange, AngularRanges, DragSnapshot

logger = logging.getLogger(__name__)

TOO_FAR_COLOR = "red"
TOO_NEAR_COLOR = "yellow"


def angular_ranges_from_lengths(
    pivot: Point,
    alternative: Point,
    pivot_to_adjacent: float,
    adjacent_to_opposite: float,
    opposite_to_alternative: float,
    alternative_to_pivot: float,
    eps: float,
    *,
    pivot_index: int = 0,
) -> AngularRanges:
    """Return the exclusion wedges for the adjacent joint swinging around ``pivot``.

    The adjacent joint stays on the circle of radius ``pivot_to_adjacent``
    around the pivot. The opposite joint can only close the loop while the
    adjacent-to-alternative distance lies in
    ``[|adjacent_to_opposite - opposite_to_alternative|, adjacent_to_opposite + opposite_to_alternative]``;
    each bound is a circle around the alternative joint whose crossings with
    the adjacent circle give a wedge boundary.
    """

    far = circle_circle_intersection(
        alternative_to_pivot,
        pivot_to_adjacent,
        adjacent_to_opposite + opposite_to_alternative,
        eps,
    )
    near = circle_circle_intersection(
        alternative_to_pivot,
        pivot_to_adjacent,
        abs(adjacent_to_opposite - opposite_to_alternative),
        eps,
    )

    pivot_to_alternative = vec(pivot, alternative)
    too_far = AngleRange.hidden(TOO_FAR_COLOR)
    too_near = AngleRange.hidden(TOO_NEAR_COLOR)
    if far.exists:
        width = 360.0 - 2.0 * math.degrees(math.atan2(far.y, far.x))
        too_far = AngleRange(
            degrees_ccw_from_down(scale(pivot_to_alternative, -1.0)), width, True, TOO_FAR_COLOR
        )
    if near.exists:
        width = 2.0 * math.degrees(math.atan2(near.y, near.x))
        too_near = AngleRange(degrees_ccw_from_down(pivot_to_alternative), width, True, TOO_NEAR_COLOR)
    return AngularRanges(pivot_index, too_far, too_near)


def compute_angular_range(
    pivot: Point,
    adjacent: Point,
    opposite: Point,
    alternative: Point,
    eps: float,
    *,
    pivot_index: int = 0,
) -> AngularRanges:
    return angular_ranges_from_lengths(
        pivot,
        alternative,
        distance(pivot, adjacent),
        distance(adjacent, opposite),
        distance(opposite, alternative),
        distance(alternative, pivot),
        eps,
        pivot_index=pivot_index,
    )


def opposite_candidates(
    adjacent: Point,
    alternative: Point,
    adjacent_to_opposite: float,
    opposite_to_alternative: float,
    eps: float,
) -> Optional[Tuple[Point, Point]]:
    """Both placements of the opposite joint closing the loop, or ``None``."""

    span = distance(adjacent, alternative)
    lower = abs(adjacent_to_opposite - opposite_to_alternative)
    upper = adjacent_to_opposite + opposite_to_alternative
    if span < lower - eps or span > upper + eps:
        return None
    data = circle_circle_intersection(span, adjacent_to_opposite, opposite_to_alternative, eps)
    return data.points(adjacent, alternative)


def choose_continuous(candidates: Tuple[Point, Point], previous: Point) -> Point:
    """Pick the candidate nearest ``previous``; ties go to the second one."""

    first, second = candidates
    if distance(second, previous) <= distance(first, previous):
        return second
    return first


def solve_bar_drag(
    snapshot: DragSnapshot,
    pointer: Point,
    previous_opposite: Point,
    eps: float,
) -> Optional[Tuple[Point, Point]]:
    """Resolve one drag frame of ``snapshot.half_bar`` toward ``pointer``.

    Returns the new ``(adjacent, opposite)`` positions, or ``None`` when the
    loop cannot close in that direction.
    """

    direction = normalized(vec(snapshot.pivot, pointer), eps)
    if direction is None:
        return None
    adjacent = add(snapshot.pivot, scale(direction, snapshot.pivot_to_adjacent))
    candidates = opposite_candidates(
        adjacent,
        snapshot.alternative,
        snapshot.adjacent_to_opposite,
        snapshot.opposite_to_alternative,
        eps,
    )
    if candidates is None:
        return None
    return adjacent, choose_continuous(candidates, previous_opposite)


apply_debug_logging(globals(), logger=logger, skip={"choose_continuous"})


__all__ = [
    "TOO_FAR_COLOR",
    "TOO_NEAR_COLOR",
    "angular_ranges_from_lengths",
    "choose_continuous",
    "compute_angular_range",
    "opposite_candidates",
    "solve_bar_drag",
]
