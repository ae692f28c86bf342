"""Pure predicates over directed lines through pairs of input points."""

from __future__ import annotations

import logging
from typing import FrozenSet, Sequence, Tuple

import numpy as np

from ..geometry import line_line_intersection, norm
from ..logging_utils import apply_debug_logging
from .model import LineCandidate, LineClassification

logger = logging.getLogger(__name__)

# Left/right counts of the five non-defining points that make a line useful.
QUALIFYING_SPLITS: FrozenSet[Tuple[int, int]] = frozenset({(2, 3), (3, 2), (1, 4), (4, 1)})


def _point(coords: np.ndarray, index: int) -> Tuple[float, float]:
    return float(coords[index, 0]), float(coords[index, 1])


def orientations(coords: np.ndarray, line: LineCandidate) -> np.ndarray:
    """``cross(b - a, p - a)`` for every point ``p``; positive means left of ``a -> b``."""

    a = coords[line.start]
    direction = coords[line.end] - a
    offsets = coords - a
    return direction[0] * offsets[:, 1] - direction[1] * offsets[:, 0]


def right_half_plane_mask(coords: np.ndarray, line: LineCandidate, eps: float) -> np.ndarray:
    """Points in the closed right half-plane of ``line`` (boundary within ``eps`` included)."""

    return orientations(coords, line) <= eps


def canonical_signature(mask: Sequence[bool]) -> Tuple[bool, ...]:
    """Complement inclusion patterns marking more than half the points.

    A line and its complement describe the same cut, so both map to the
    pattern with the smaller marked side.
    """

    values = tuple(bool(v) for v in mask)
    if sum(values) > len(values) // 2:
        return tuple(not v for v in values)
    return values


def split_counts(coords: np.ndarray, line: LineCandidate, eps: float) -> Tuple[int, int, int]:
    """Count ``(left, right, on_line)`` among the points not defining ``line``."""

    values = orientations(coords, line)
    others = np.ones(len(coords), dtype=bool)
    others[[line.start, line.end]] = False
    values = values[others]
    on_line = np.abs(values) < eps
    left = int(np.count_nonzero((values > 0.0) & ~on_line))
    right = int(np.count_nonzero((values <= 0.0) & ~on_line))
    return left, right, int(np.count_nonzero(on_line))


def is_qualifying_split(left: int, right: int, on_line: int) -> bool:
    """2-3 or 1-4 splits qualify, also after nudging the on-line points to one side."""

    if (left, right) in QUALIFYING_SPLITS:
        return True
    if on_line > 0:
        return (left + on_line, right) in QUALIFYING_SPLITS or (left, right + on_line) in QUALIFYING_SPLITS
    return False


def classify_line(coords: np.ndarray, line: LineCandidate, eps: float) -> LineClassification:
    left, right, on_line = split_counts(coords, line, eps)
    signature = canonical_signature(right_half_plane_mask(coords, line, eps))
    return LineClassification(
        line=line,
        left=left,
        right=right,
        on_line=on_line,
        qualifies=is_qualifying_split(left, right, on_line),
        signature=signature,
    )


def max_distance_from_origin(coords: np.ndarray) -> float:
    if not len(coords):
        return 0.0
    return float(np.max(np.hypot(coords[:, 0], coords[:, 1])))


def pair_compatible(
    coords: np.ndarray,
    first: LineCandidate,
    second: LineCandidate,
    eps: float,
    radius_factor: float,
) -> bool:
    """Provisional pairing filter for two qualifying lines.

    Distinct lines pair up unless they cross farther from the origin than
    ``radius_factor`` times the farthest input point. Parallel lines pass.
    """

    if first.same_endpoints(second):
        return False
    hit = line_line_intersection(
        _point(coords, first.start),
        _point(coords, first.end),
        _point(coords, second.start),
        _point(coords, second.end),
        eps,
    )
    if hit is None:
        return True
    return norm(hit) <= radius_factor * max_distance_from_origin(coords)


def inclusion_codes(coords: np.ndarray, lines: Sequence[LineCandidate], eps: float) -> np.ndarray:
    """Per-point code with bit ``k`` set when the point lies right of ``lines[k]``."""

    codes = np.zeros(len(coords), dtype=int)
    for bit, line in enumerate(lines):
        codes |= right_half_plane_mask(coords, line, eps).astype(int) << bit
    return codes


def induces_unique_partition(
    coords: np.ndarray,
    first: LineCandidate,
    second: LineCandidate,
    third: LineCandidate,
    eps: float,
) -> bool:
    codes = inclusion_codes(coords, (first, second, third), eps)
    return len(np.unique(codes)) == len(codes)


apply_debug_logging(globals(), logger=logger, skip={"orientations", "right_half_plane_mask"})


__all__ = [
    "QUALIFYING_SPLITS",
    "canonical_signature",
    "classify_line",
    "inclusion_codes",
    "induces_unique_partition",
    "is_qualifying_split",
    "max_distance_from_origin",
    "orientations",
    "pair_compatible",
    "right_half_plane_mask",
    "split_counts",
]
