"""Interactive closed-chain linkage solver."""

from __future__ import annotations

import logging
from typing import List, Optional, Sequence, Tuple

import numpy as np

from ..config import SUPPORTED_JOINT_COUNTS, GeometryConfig, resolve_config
from ..geometry import (
    Point,
    add,
    as_point,
    best_projection_axis,
    distance,
    midpoint,
    normalized,
    project_onto_line,
    project_segment_to_axis,
    scale,
    vec,
)
from .kinematics import compute_angular_range, solve_bar_drag
from .model import (
    AngularRanges,
    DragResult,
    DragSnapshot,
    HalfBar,
    HalfBarGeometry,
    Hover,
    LinkageConfigurationError,
    PartKind,
)
from .relax import RelaxResult, relax_bar_lengths

logger = logging.getLogger(__name__)


class LinkageSolver:
    """Owns the joints of one closed chain and resolves drags against it.

    Joint ``i`` is joined by bar ``i`` to joint ``(i + 1) mod N``. Dragging a
    joint is a free move; dragging a half-bar swings its adjacent joint about
    the pivot and re-places the opposite joint so every other bar keeps its
    length.
    """

    def __init__(
        self,
        positions: Sequence[Sequence[float]],
        *,
        joint_count: Optional[int] = None,
        config: Optional[GeometryConfig] = None,
    ) -> None:
        self.config = resolve_config(config)
        count = len(positions)
        if joint_count is not None and count != joint_count:
            raise LinkageConfigurationError(f"{joint_count} joints are required, got {count}")
        if count not in SUPPORTED_JOINT_COUNTS:
            supported = " or ".join(str(n) for n in SUPPORTED_JOINT_COUNTS)
            raise LinkageConfigurationError(f"{supported} joints are required, got {count}")
        try:
            coords = [as_point(p) for p in positions]
        except (TypeError, ValueError) as exc:
            raise LinkageConfigurationError(f"invalid joint position: {exc}") from exc

        self._positions = np.array(coords, dtype=float)
        self.half_bars: List[HalfBar] = []
        for joint in range(count):
            self.half_bars.append(HalfBar.forward(joint, count))
            self.half_bars.append(HalfBar.backward(joint, count))
        self.rest_lengths: List[float] = self.bar_lengths()

        self._snapshot: Optional[DragSnapshot] = None
        self._last_adjacent: Optional[Point] = None
        self._last_opposite: Optional[Point] = None

        logger.info(
            "Initialised linkage with %d joints, bar lengths=%s",
            count,
            [round(length, 6) for length in self.rest_lengths],
        )

    @property
    def joint_count(self) -> int:
        return len(self._positions)

    @property
    def positions(self) -> List[Point]:
        return [(float(x), float(y)) for x, y in self._positions]

    def position(self, index: int) -> Point:
        x, y = self._positions[index]
        return float(x), float(y)

    def _set_position(self, index: int, point: Point) -> None:
        self._positions[index] = point

    def next_index(self, index: int) -> int:
        return (index + 1) % self.joint_count

    def prev_index(self, index: int) -> int:
        return (index - 1) % self.joint_count

    def bar_lengths(self) -> List[float]:
        return [
            distance(self.position(i), self.position(self.next_index(i)))
            for i in range(self.joint_count)
        ]

    def _record_rest_lengths(self, joint: int) -> None:
        for bar in (self.prev_index(joint), joint):
            self.rest_lengths[bar] = distance(self.position(bar), self.position(self.next_index(bar)))

    def half_bar(self, index: int) -> HalfBar:
        return self.half_bars[index]

    def update_all_bars(self) -> List[HalfBarGeometry]:
        """Recompute every half-bar's anchor, direction and half length."""

        placements: List[HalfBarGeometry] = []
        for half_bar in self.half_bars:
            pivot = self.position(half_bar.pivot)
            offset = scale(vec(pivot, self.position(half_bar.adjacent)), 0.5)
            half_length = float(np.hypot(*offset))
            direction = normalized(offset) or (1.0, 0.0)
            placements.append(HalfBarGeometry(half_bar, pivot, direction, half_length))
        return placements

    def find_closest_joint(self, position: Sequence[float]) -> Tuple[int, float]:
        point = np.asarray(as_point(position), dtype=float)
        distances = np.linalg.norm(self._positions - point, axis=1)
        index = int(np.argmin(distances))
        return index, float(distances[index])

    def find_closest_bar(self, position: Sequence[float]) -> Optional[Tuple[HalfBar, float]]:
        """Nearest half-bar whose pick segment contains the foot of the perpendicular."""

        point = as_point(position)
        eps = self.config.epsilon
        best: Optional[Tuple[HalfBar, float]] = None
        for half_bar in self.half_bars:
            start = self.position(half_bar.pivot)
            end = midpoint(start, self.position(half_bar.adjacent))
            axis = best_projection_axis(start, end, eps)
            if axis is None:
                logger.warning("Degenerate half-bar %d skipped during bar query", half_bar.index)
                continue
            foot = project_onto_line(point, start, end)
            if not project_segment_to_axis(start, end, axis).contains(foot[axis]):
                continue
            gap = distance(foot, point)
            if best is None or gap < best[1]:
                best = (half_bar, gap)
        return best

    def pick(
        self,
        position: Sequence[float],
        *,
        joint_radius: Optional[float] = None,
        bar_radius: Optional[float] = None,
    ) -> Hover:
        """Classify what the pointer hovers: a joint first, then a half-bar."""

        joint_radius = self.config.joint_pick_radius if joint_radius is None else joint_radius
        bar_radius = self.config.bar_pick_radius if bar_radius is None else bar_radius
        joint, joint_distance = self.find_closest_joint(position)
        if joint_distance < joint_radius:
            return Hover(PartKind.JOINT, joint, joint_distance)
        closest_bar = self.find_closest_bar(position)
        if closest_bar is not None and closest_bar[1] <= bar_radius:
            return Hover(PartKind.HALF_BAR, closest_bar[0].index, closest_bar[1])
        return Hover(None)

    def compute_angular_range(self, half_bar: HalfBar) -> AngularRanges:
        """Exclusion wedges for ``half_bar``'s adjacent joint around its pivot."""

        return compute_angular_range(
            self.position(half_bar.pivot),
            self.position(half_bar.adjacent),
            self.position(half_bar.opposite),
            self.position(half_bar.alternative),
            self.config.epsilon,
            pivot_index=half_bar.pivot,
        )

    def move_joint(self, index: int, position: Sequence[float], *, relax: bool = False) -> Optional[RelaxResult]:
        """Place joint ``index`` at ``position``.

        A plain move is unconstrained and adopts the two touched bars' new
        lengths as their rest lengths. With ``relax`` the other joints are
        moved instead so every bar keeps its rest length.
        """

        target = as_point(position)
        self._set_position(index, target)
        if not relax:
            self._record_rest_lengths(index)
            return None

        result = relax_bar_lengths(self._positions, self.rest_lengths, pinned=[index])
        self._positions = result.positions
        if not result.success:
            logger.warning(
                "Relaxing after moving joint %d left max bar error %.3e", index, result.max_residual
            )
        return result

    def adjust_bar_length(self, half_bar: HalfBar, delta: float) -> bool:
        """Lengthen (or shorten) ``half_bar``'s bar by ``delta``, moving only its adjacent joint."""

        pivot = self.position(half_bar.pivot)
        adjacent = self.position(half_bar.adjacent)
        direction = normalized(vec(pivot, adjacent), self.config.epsilon)
        if direction is None:
            logger.warning("Cannot resize degenerate bar %d", half_bar.bar)
            return False
        new_length = distance(pivot, adjacent) + delta
        if new_length <= self.config.epsilon:
            logger.debug("Refusing to shrink bar %d to length %.6g", half_bar.bar, new_length)
            return False
        self._set_position(half_bar.adjacent, add(pivot, scale(direction, new_length)))
        self._record_rest_lengths(half_bar.adjacent)
        return True

    def scroll_bar(self, half_bar: HalfBar, scroll: float) -> bool:
        if abs(scroll) <= self.config.scroll_dead_zone:
            return False
        return self.adjust_bar_length(half_bar, scroll * self.config.scroll_length_rate)

    @property
    def dragging(self) -> bool:
        return self._snapshot is not None

    @property
    def drag_snapshot(self) -> Optional[DragSnapshot]:
        return self._snapshot

    def begin_bar_drag(self, half_bar: HalfBar) -> DragSnapshot:
        pivot = self.position(half_bar.pivot)
        adjacent = self.position(half_bar.adjacent)
        opposite = self.position(half_bar.opposite)
        alternative = self.position(half_bar.alternative)
        self._snapshot = DragSnapshot(
            half_bar=half_bar,
            pivot=pivot,
            adjacent=adjacent,
            opposite=opposite,
            alternative=alternative,
            pivot_to_adjacent=distance(pivot, adjacent),
            adjacent_to_opposite=distance(adjacent, opposite),
            opposite_to_alternative=distance(opposite, alternative),
            alternative_to_pivot=distance(alternative, pivot),
        )
        self._last_adjacent = adjacent
        self._last_opposite = opposite
        logger.debug("Begin drag of half-bar %d (pivot %d)", half_bar.index, half_bar.pivot)
        return self._snapshot

    def drag_bar(self, pointer: Sequence[float]) -> DragResult:
        """Advance the active half-bar drag toward ``pointer``.

        When the loop cannot close the step is rejected and the joints stay
        at the last accepted placement.
        """

        snapshot = self._snapshot
        if snapshot is None or self._last_adjacent is None or self._last_opposite is None:
            raise RuntimeError("drag_bar called without begin_bar_drag")

        solved = solve_bar_drag(snapshot, as_point(pointer), self._last_opposite, self.config.epsilon)
        if solved is None:
            logger.debug("Rejected drag step toward %s; holding last valid state", pointer)
            accepted = False
            adjacent, opposite = self._last_adjacent, self._last_opposite
        else:
            accepted = True
            adjacent, opposite = solved

        self._last_adjacent = adjacent
        self._last_opposite = opposite
        self._set_position(snapshot.half_bar.adjacent, adjacent)
        self._set_position(snapshot.half_bar.opposite, opposite)
        return DragResult(accepted, adjacent, opposite)

    def end_bar_drag(self) -> None:
        self._snapshot = None
        self._last_adjacent = None
        self._last_opposite = None

    def restore_before_drag(self) -> None:
        snapshot = self._snapshot
        if snapshot is None:
            return
        half_bar = snapshot.half_bar
        for index, point in zip(
            (half_bar.pivot, half_bar.adjacent, half_bar.opposite, half_bar.alternative),
            snapshot.positions,
        ):
            self._set_position(index, point)
        self._last_adjacent = snapshot.adjacent
        self._last_opposite = snapshot.opposite


__all__ = ["LinkageSolver"]
