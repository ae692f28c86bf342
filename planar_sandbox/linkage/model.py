"""Value types for the closed-chain linkage solver."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

from ..geometry import Point, degrees_ccw_from_down, wrap_degrees


class LinkageConfigurationError(ValueError):
    """Raised when a linkage cannot be initialised from the supplied joints."""


class PartKind(str, Enum):
    JOINT = "joint"
    HALF_BAR = "half_bar"


@dataclass(frozen=True)
class HalfBar:
    """One half of the bar between ``pivot`` and ``adjacent``, owned by ``pivot``.

    ``opposite`` and ``alternative`` complete the four-joint loop that a drag
    of this half-bar moves through: pivot, adjacent, opposite, alternative.
    """

    index: int
    pivot: int
    adjacent: int
    opposite: int
    alternative: int

    @property
    def bar(self) -> int:
        """Index of the full bar, i.e. of its first joint in chain order."""

        forward = self.index % 2 == 0
        return self.pivot if forward else self.adjacent

    @classmethod
    def forward(cls, joint: int, count: int) -> "HalfBar":
        return cls(
            2 * joint,
            joint,
            (joint + 1) % count,
            (joint + 2) % count,
            (joint + 3) % count,
        )

    @classmethod
    def backward(cls, joint: int, count: int) -> "HalfBar":
        return cls(
            2 * joint + 1,
            joint,
            (joint - 1) % count,
            (joint - 2) % count,
            (joint - 3) % count,
        )


@dataclass(frozen=True)
class HalfBarGeometry:
    """Render-facing placement of a half-bar: anchor, unit direction, half length."""

    half_bar: HalfBar
    anchor: Point
    direction: Point
    half_length: float

    @property
    def end(self) -> Point:
        return (
            self.anchor[0] + self.direction[0] * self.half_length,
            self.anchor[1] + self.direction[1] * self.half_length,
        )


@dataclass(frozen=True)
class AngleRange:
    """Angular wedge around a pivot.

    ``center_degrees`` is measured counter-clockwise from "down" and
    ``width_degrees`` spans the whole wedge.
    """

    center_degrees: float
    width_degrees: float
    visible: bool
    color: str

    @property
    def half_width_degrees(self) -> float:
        return self.width_degrees / 2.0

    @property
    def active(self) -> bool:
        return self.visible and self.width_degrees > 1e-9

    def contains_direction(self, direction: Point, eps: float = 0.0) -> bool:
        """Return ``True`` when ``direction`` points strictly inside the wedge."""

        if not self.active:
            return False
        offset = abs(wrap_degrees(degrees_ccw_from_down(direction) - self.center_degrees))
        return offset < self.half_width_degrees - eps

    @classmethod
    def hidden(cls, color: str) -> "AngleRange":
        return cls(0.0, 0.0, False, color)


@dataclass(frozen=True)
class AngularRanges:
    """The two complementary exclusion wedges of one pivot.

    ``too_far`` covers the adjacent-joint directions for which the opposite
    pair cannot stretch far enough; ``too_near`` those for which it cannot
    fold short enough.
    """

    pivot: int
    too_far: AngleRange
    too_near: AngleRange

    def reachable(self, direction: Point, eps: float = 0.0) -> bool:
        return not (
            self.too_far.contains_direction(direction, eps)
            or self.too_near.contains_direction(direction, eps)
        )


@dataclass(frozen=True)
class DragResult:
    """Outcome of a single constrained drag step."""

    accepted: bool
    adjacent: Point
    opposite: Point


@dataclass(frozen=True)
class Hover:
    kind: Optional[PartKind]
    index: Optional[int] = None
    distance: float = float("inf")

    @property
    def is_empty(self) -> bool:
        return self.kind is None


@dataclass(frozen=True)
class DragSnapshot:
    """Positions and distances captured when a half-bar drag begins."""

    half_bar: HalfBar
    pivot: Point
    adjacent: Point
    opposite: Point
    alternative: Point
    pivot_to_adjacent: float
    adjacent_to_opposite: float
    opposite_to_alternative: float
    alternative_to_pivot: float

    @property
    def positions(self) -> Tuple[Point, Point, Point, Point]:
        return self.pivot, self.adjacent, self.opposite, self.alternative


__all__ = [
    "AngleRange",
    "AngularRanges",
    "DragResult",
    "DragSnapshot",
    "HalfBar",
    "HalfBarGeometry",
    "Hover",
    "LinkageConfigurationError",
    "PartKind",
]
