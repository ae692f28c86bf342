"""Search for three lines that give each of seven points its own region."""

from __future__ import annotations

import logging
from itertools import combinations
from typing import Dict, List, Optional, Sequence, Tuple

import numpy as np

from ..collinearity import Triple, find_collinear_triples, has_collinear_triple
from ..config import PARTITION_POINT_COUNT, GeometryConfig, resolve_config
from ..geometry import Point, as_point
from . import lines
from .display import compose_visibility
from .model import LineCandidate, LineClassification, PartitionConfigurationError, PartitionTriple

logger = logging.getLogger(__name__)


class PartitionSearch:
    """Brute-force partition search over a fixed set of seven points.

    Every point move recomputes collinearity, the qualifying lines and the
    solution list from scratch. With any collinear triple, or a point count
    other than seven, the search yields no solutions.
    """

    def __init__(
        self,
        points: Sequence[Sequence[float]],
        *,
        config: Optional[GeometryConfig] = None,
    ) -> None:
        self.config = resolve_config(config)
        try:
            coords = [as_point(p) for p in points]
        except (TypeError, ValueError) as exc:
            raise PartitionConfigurationError(f"invalid point position: {exc}") from exc
        if len(coords) != PARTITION_POINT_COUNT:
            logger.warning(
                "Partition search expects %d points, got %d; no solutions will be produced",
                PARTITION_POINT_COUNT,
                len(coords),
            )

        self._points = np.array(coords, dtype=float).reshape(-1, 2)
        self.collinear_triples: List[Triple] = []
        self.qualifying: List[LineClassification] = []
        self.solutions: List[PartitionTriple] = []
        self.selected_index = 0
        self.recompute()

    @property
    def points(self) -> List[Point]:
        return [(float(x), float(y)) for x, y in self._points]

    @property
    def point_count(self) -> int:
        return len(self._points)

    @property
    def collinear(self) -> bool:
        return bool(self.collinear_triples)

    @property
    def qualifying_lines(self) -> List[LineCandidate]:
        return [classification.line for classification in self.qualifying]

    def recompute(self) -> List[PartitionTriple]:
        self.check_collinear()
        return self.find_valid_triples()

    def check_collinear(self) -> bool:
        """Refresh the collinear-triple list; ``True`` suspends the search."""

        report = find_collinear_triples(self.points, self.config.epsilon)
        self.collinear_triples = report.triples
        return report.collinear

    def candidate_lines(self) -> List[LineCandidate]:
        count = self.point_count
        return [LineCandidate(i, j) for i in range(count) for j in range(count) if i != j]

    def classify_line(self, start: int, end: int) -> LineClassification:
        return lines.classify_line(self._points, LineCandidate(start, end), self.config.epsilon)

    def classify_all(self) -> List[LineClassification]:
        eps = self.config.epsilon
        return [lines.classify_line(self._points, line, eps) for line in self.candidate_lines()]

    def _deduplicated_qualifying(self) -> List[LineClassification]:
        seen: Dict[Tuple[bool, ...], LineCandidate] = {}
        kept: List[LineClassification] = []
        for classification in self.classify_all():
            if not classification.qualifies:
                continue
            if classification.signature in seen:
                continue
            seen[classification.signature] = classification.line
            kept.append(classification)
        return kept

    def pair_compatible(self, first: LineCandidate, second: LineCandidate) -> bool:
        return lines.pair_compatible(
            self._points,
            first,
            second,
            self.config.epsilon,
            self.config.compatibility_radius_factor,
        )

    def inclusion_codes(self, chosen: Sequence[LineCandidate]) -> Tuple[int, ...]:
        codes = lines.inclusion_codes(self._points, chosen, self.config.epsilon)
        return tuple(int(code) for code in codes)

    def induces_unique_partition(
        self, first: LineCandidate, second: LineCandidate, third: LineCandidate
    ) -> bool:
        return lines.induces_unique_partition(self._points, first, second, third, self.config.epsilon)

    def find_valid_triples(self) -> List[PartitionTriple]:
        """Enumerate every pairwise-compatible triple of qualifying lines with distinct codes.

        Resets the selection to the first solution.
        """

        self.solutions = []
        self.selected_index = 0
        if self.point_count != PARTITION_POINT_COUNT or self.collinear:
            self.qualifying = []
            return self.solutions

        eps = self.config.epsilon
        self.qualifying = self._deduplicated_qualifying()
        candidates = self.qualifying_lines
        count = len(candidates)
        if count < 3:
            logger.info("Found %d qualifying line(s); no triples to test", count)
            return self.solutions

        compatible = np.zeros((count, count), dtype=bool)
        for a, b in combinations(range(count), 2):
            compatible[a, b] = compatible[b, a] = self.pair_compatible(candidates[a], candidates[b])

        masks = np.array(
            [lines.right_half_plane_mask(self._points, line, eps) for line in candidates],
            dtype=int,
        )
        triples = np.array(list(combinations(range(count), 3)), dtype=int)
        keep = (
            compatible[triples[:, 0], triples[:, 1]]
            & compatible[triples[:, 0], triples[:, 2]]
            & compatible[triples[:, 1], triples[:, 2]]
        )
        triples = triples[keep]
        codes = masks[triples[:, 0]] + 2 * masks[triples[:, 1]] + 4 * masks[triples[:, 2]]
        distinct = np.all(np.diff(np.sort(codes, axis=1), axis=1) != 0, axis=1)

        for (a, b, c), row in zip(triples[distinct], codes[distinct]):
            self.solutions.append(
                PartitionTriple(
                    (candidates[a], candidates[b], candidates[c]),
                    tuple(int(code) for code in row),
                )
            )

        logger.info(
            "Found %d qualifying line(s), %d compatible pair(s), %d solution(s)",
            count,
            int(np.count_nonzero(np.triu(compatible))),
            len(self.solutions),
        )
        return self.solutions

    def find_closest_point(self, position: Sequence[float]) -> Tuple[int, float]:
        point = np.asarray(as_point(position), dtype=float)
        distances = np.linalg.norm(self._points - point, axis=1)
        index = int(np.argmin(distances))
        return index, float(distances[index])

    def move_point(self, index: int, position: Sequence[float], *, reject_collinear: bool = False) -> bool:
        """Move point ``index`` and rerun the search.

        With ``reject_collinear`` a move that would leave three points on a
        line is refused and ``False`` is returned.
        """

        target = as_point(position)
        if reject_collinear:
            trial = self._points.copy()
            trial[index] = target
            if has_collinear_triple(trial, self.config.epsilon):
                logger.debug("Refused move of point %d to %s: collinear triple", index, target)
                return False
        self._points[index] = target
        self.recompute()
        return True

    @property
    def selected_solution(self) -> Optional[PartitionTriple]:
        if not self.solutions:
            return None
        return self.solutions[self.selected_index]

    def next_solution(self) -> Optional[PartitionTriple]:
        if not self.solutions:
            return None
        self.selected_index = (self.selected_index + 1) % len(self.solutions)
        return self.selected_solution

    def previous_solution(self) -> Optional[PartitionTriple]:
        if not self.solutions:
            return None
        self.selected_index = (self.selected_index - 1) % len(self.solutions)
        return self.selected_solution

    def solution_summary(self) -> str:
        if not self.solutions:
            return "No Solutions."
        return f"Solution {self.selected_index + 1} out of {len(self.solutions)}."

    def visible_lines(self, *, hide_non_debug: bool = False) -> List[LineClassification]:
        """Classified lines a renderer should draw."""

        return [
            classification
            for classification in self.classify_all()
            if compose_visibility(
                classification,
                should_show=[lambda c: not self.collinear and c.qualifies],
                force_hidden=[lambda _: hide_non_debug],
            )
        ]


__all__ = ["PartitionSearch"]
