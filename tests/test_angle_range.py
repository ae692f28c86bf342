import math

import numpy as np
import pytest

from planar_sandbox.geometry import degrees_ccw_from_down, wrap_degrees
from planar_sandbox.linkage import AngleRange, LinkageSolver, angular_ranges_from_lengths

LIMITED_QUAD = [(0.0, 0.0), (1.0, 0.0), (2.5, math.sqrt(1.75)), (4.0, 0.0)]


def _random_quads(seed: int, count: int):
    rng = np.random.default_rng(seed)
    for _ in range(count):
        yield [tuple(row) for row in rng.uniform(-1.0, 1.0, size=(4, 2))]


def test_too_far_wedge_for_short_crank():
    solver = LinkageSolver(LIMITED_QUAD)

    ranges = solver.compute_angular_range(solver.half_bar(0))

    theta = math.degrees(math.atan2(math.sqrt(1.0 - 0.125 ** 2), 0.125))
    assert ranges.pivot == 0
    assert ranges.too_far.visible
    assert ranges.too_far.color == "red"
    assert ranges.too_far.center_degrees == pytest.approx(-90.0)
    assert ranges.too_far.width_degrees == pytest.approx(360.0 - 2.0 * theta)
    assert not ranges.too_near.visible
    assert ranges.too_near.color == "yellow"


def test_wedges_agree_with_drag_acceptance():
    solver = LinkageSolver(LIMITED_QUAD)
    half_bar = solver.half_bar(0)
    ranges = solver.compute_angular_range(half_bar)
    wedge = ranges.too_far
    solver.begin_bar_drag(half_bar)

    for degrees in range(0, 360, 5):
        direction = (math.cos(math.radians(degrees)), math.sin(math.radians(degrees)))
        offset = abs(wrap_degrees(degrees_ccw_from_down(direction) - wedge.center_degrees))
        if abs(offset - wedge.half_width_degrees) < 1.0:
            continue
        result = solver.drag_bar(direction)
        assert result.accepted is ranges.reachable(direction)
        solver.restore_before_drag()


def test_square_has_no_active_wedges():
    solver = LinkageSolver([(0.0, 0.0), (1.0, 0.0), (1.0, 1.0), (0.0, 1.0)])

    for half_bar in solver.half_bars:
        ranges = solver.compute_angular_range(half_bar)
        assert not ranges.too_far.active
        assert not ranges.too_near.active


@pytest.mark.parametrize("seed", [0, 1, 2])
def test_at_most_one_opposing_joint_is_limited(seed):
    for quad in _random_quads(seed, 200):
        solver = LinkageSolver(quad)
        for first, second in ((0, 4), (2, 6)):
            a = solver.compute_angular_range(solver.half_bar(first))
            b = solver.compute_angular_range(solver.half_bar(second))
            assert not (a.too_far.active and b.too_far.active)
            assert not (a.too_near.active and b.too_near.active)


def test_too_far_limits_switch_with_bar_sums():
    # Pivot 0 is limited when its own two bars outweigh the far pair.
    limited = angular_ranges_from_lengths((0.0, 0.0), (4.0, 0.0), 1.0, 2.0, 2.0, 4.0, 1e-6)
    free = angular_ranges_from_lengths((0.0, 0.0), (4.0, 0.0), 1.0, 3.0, 3.0, 4.0, 1e-6)

    assert limited.too_far.active
    assert not free.too_far.active


def test_angle_range_membership():
    wedge = AngleRange(center_degrees=0.0, width_degrees=90.0, visible=True, color="red")

    assert wedge.half_width_degrees == 45.0
    assert wedge.contains_direction((0.0, -1.0))
    assert wedge.contains_direction((0.5, -1.0))
    assert not wedge.contains_direction((1.0, 0.0))
    assert not AngleRange.hidden("red").contains_direction((0.0, -1.0))
