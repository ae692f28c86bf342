"""Value types for the seven-point partition search."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple


class PartitionConfigurationError(ValueError):
    """Raised when the partition points cannot be read as planar coordinates."""


@dataclass(frozen=True)
class LineCandidate:
    """Directed line through points ``start`` and ``end``; "right" follows ``start -> end``."""

    start: int
    end: int

    def __post_init__(self) -> None:
        if self.start == self.end:
            raise ValueError(f"line needs two distinct points, got ({self.start}, {self.end})")

    def same_endpoints(self, other: "LineCandidate") -> bool:
        return {self.start, self.end} == {other.start, other.end}

    def reversed(self) -> "LineCandidate":
        return LineCandidate(self.end, self.start)

    def __str__(self) -> str:
        return f"{self.start}->{self.end}"


@dataclass(frozen=True)
class LineClassification:
    """How a directed line splits the points that do not define it."""

    line: LineCandidate
    left: int
    right: int
    on_line: int
    qualifies: bool
    signature: Tuple[bool, ...]

    @property
    def split(self) -> Tuple[int, int]:
        return self.left, self.right

    @property
    def signature_mask(self) -> int:
        """Bitmask of the canonical inclusion signature (point ``k`` -> bit ``k``)."""

        mask = 0
        for index, included in enumerate(self.signature):
            if included:
                mask |= 1 << index
        return mask


@dataclass(frozen=True)
class PartitionTriple:
    """Three lines whose right half-planes give every point its own code."""

    lines: Tuple[LineCandidate, LineCandidate, LineCandidate]
    codes: Tuple[int, ...]

    @property
    def missing_codes(self) -> Tuple[int, ...]:
        return tuple(code for code in range(8) if code not in self.codes)

    def code_of(self, point: int) -> int:
        return self.codes[point]

    def region_of(self, code: int) -> Optional[int]:
        """Index of the point carrying ``code``, if any."""

        for point, value in enumerate(self.codes):
            if value == code:
                return point
        return None


__all__ = [
    "LineCandidate",
    "LineClassification",
    "PartitionConfigurationError",
    "PartitionTriple",
]
