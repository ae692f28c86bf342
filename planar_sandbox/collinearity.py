"""Detection of degenerate (collinear) point configurations."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from itertools import combinations
from typing import List, Sequence, Tuple

import numpy as np

from .geometry import Point

logger = logging.getLogger(__name__)

Triple = Tuple[int, int, int]


@dataclass
class CollinearityReport:
    """Outcome of a collinearity scan over a point set."""

    triples: List[Triple] = field(default_factory=list)

    @property
    def collinear(self) -> bool:
        return bool(self.triples)

    def involves(self, index: int) -> bool:
        return any(index in triple for triple in self.triples)


def _triple_index_array(count: int) -> np.ndarray:
    if count < 3:
        return np.empty((0, 3), dtype=int)
    return np.array(list(combinations(range(count), 3)), dtype=int)


def triple_areas(points: Sequence[Point]) -> Tuple[np.ndarray, np.ndarray]:
    """Return every index triple ``i < j < k`` and its ``cross(pj - pi, pk - pi)``."""

    coords = np.asarray(points, dtype=float).reshape(-1, 2)
    triples = _triple_index_array(len(coords))
    if not len(triples):
        return triples, np.empty(0, dtype=float)
    p1 = coords[triples[:, 0]]
    v1 = coords[triples[:, 1]] - p1
    v2 = coords[triples[:, 2]] - p1
    return triples, v1[:, 0] * v2[:, 1] - v1[:, 1] * v2[:, 0]


def find_collinear_triples(points: Sequence[Point], eps: float) -> CollinearityReport:
    """Scan every unordered triple for ``|cross| < eps``."""

    triples, areas = triple_areas(points)
    mask = np.abs(areas) < eps
    report = CollinearityReport([tuple(int(v) for v in row) for row in triples[mask]])
    if report.collinear:
        logger.warning(
            "Detected %d collinear triple(s) among %d points: %s",
            len(report.triples),
            len(points),
            report.triples[:5],
        )
    return report


def has_collinear_triple(points: Sequence[Point], eps: float) -> bool:
    _, areas = triple_areas(points)
    return bool(np.any(np.abs(areas) < eps))


__all__ = [
    "CollinearityReport",
    "Triple",
    "find_collinear_triples",
    "has_collinear_triple",
    "triple_areas",
]
