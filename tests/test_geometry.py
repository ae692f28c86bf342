import math

import pytest

from planar_sandbox.geometry import (
    Axis,
    Rect,
    as_point,
    best_projection_axis,
    circle_circle_intersection,
    circle_intersection_points,
    clip_line_to_rect,
    degrees_ccw_from_down,
    distance,
    line_line_intersection,
    nearest_point_on_segment,
    side_of_line,
    wrap_degrees,
)


@pytest.mark.parametrize(
    "d, r1, r2, exists",
    [
        (1.0, 1.0, 1.0, True),
        (2.0, 1.0, 1.0, True),
        (3.0, 1.0, 1.0, False),
        (0.5, 2.0, 1.0, False),
        (1.0, 2.0, 1.0, True),
        (0.0, 1.0, 1.0, False),
    ],
)
def test_circle_intersection_existence_follows_triangle_inequality(d, r1, r2, exists):
    assert circle_circle_intersection(d, r1, r2).exists is exists


def test_circle_intersection_local_frame_values():
    data = circle_circle_intersection(2.0, 1.5, 1.5)

    assert data.exists
    assert data.x == pytest.approx(1.0)
    assert data.y == pytest.approx(math.sqrt(1.25))


def test_tangent_circles_touch_at_single_point():
    data = circle_circle_intersection(2.0, 1.0, 1.0)

    assert data.exists
    assert data.x == pytest.approx(1.0)
    assert data.y == pytest.approx(0.0)


def test_reconstructed_points_lie_on_both_circles():
    origin = (0.5, -1.0)
    other = (2.0, 1.5)
    r1, r2 = 2.5, 1.75

    left, right = circle_intersection_points(origin, r1, other, r2)

    for point in (left, right):
        assert distance(point, origin) == pytest.approx(r1)
        assert distance(point, other) == pytest.approx(r2)
    assert side_of_line(origin, other, left, 1e-9) == 1
    assert side_of_line(origin, other, right, 1e-9) == -1


def test_circle_intersection_points_none_when_apart():
    assert circle_intersection_points((0.0, 0.0), 1.0, (5.0, 0.0), 1.0) is None


def test_nearest_point_on_segment_clamps_to_endpoints():
    assert nearest_point_on_segment((2.0, 1.0), (0.0, 0.0), (1.0, 0.0)) == pytest.approx((1.0, 0.0))
    assert nearest_point_on_segment((-3.0, 1.0), (0.0, 0.0), (1.0, 0.0)) == pytest.approx((0.0, 0.0))
    assert nearest_point_on_segment((0.5, 2.0), (0.0, 0.0), (1.0, 0.0)) == pytest.approx((0.5, 0.0))


def test_best_projection_axis_prefers_larger_extent():
    assert best_projection_axis((0.0, 0.0), (3.0, 1.0), 1e-6) is Axis.X
    assert best_projection_axis((0.0, 0.0), (0.1, 2.0), 1e-6) is Axis.Y
    assert best_projection_axis((1.0, 1.0), (1.0, 1.0 + 1e-9), 1e-6) is None


def test_line_line_intersection_and_parallel_lines():
    hit = line_line_intersection((0.0, 0.0), (1.0, 1.0), (0.0, 1.0), (1.0, 0.0), 1e-9)
    assert hit == pytest.approx((0.5, 0.5))

    assert line_line_intersection((0.0, 0.0), (1.0, 0.0), (0.0, 1.0), (2.0, 1.0), 1e-9) is None


def test_clip_line_to_rect_orders_hits_along_direction():
    view = Rect(-2.0, -1.0, 2.0, 1.0)

    forward = clip_line_to_rect((0.0, 0.0), (1.0, 0.0), view, 1e-9)
    backward = clip_line_to_rect((1.0, 0.0), (0.0, 0.0), view, 1e-9)

    assert forward is not None and backward is not None
    assert forward[0] == pytest.approx((-2.0, 0.0))
    assert forward[1] == pytest.approx((2.0, 0.0))
    assert backward[0] == pytest.approx((2.0, 0.0))
    assert backward[1] == pytest.approx((-2.0, 0.0))


def test_clip_line_to_rect_misses_and_degenerate():
    view = Rect.around((0.0, 0.0), 4.0, 2.0)

    assert clip_line_to_rect((0.0, 5.0), (1.0, 5.0), view, 1e-9) is None
    assert clip_line_to_rect((0.3, 0.3), (0.3, 0.3), view, 1e-9) is None


def test_rect_around_centre():
    view = Rect.around((1.0, 2.0), 4.0, 2.0)

    assert (view.left, view.bottom, view.right, view.top) == (-1.0, 1.0, 3.0, 3.0)
    assert len(view.edges()) == 4


@pytest.mark.parametrize(
    "vector, expected",
    [
        ((0.0, -1.0), 0.0),
        ((1.0, 0.0), 90.0),
        ((-1.0, 0.0), -90.0),
        ((0.0, 1.0), 180.0),
        ((1.0, -1.0), 45.0),
    ],
)
def test_degrees_counter_clockwise_from_down(vector, expected):
    assert degrees_ccw_from_down(vector) == pytest.approx(expected)


@pytest.mark.parametrize(
    "angle, expected",
    [(270.0, -90.0), (-180.0, 180.0), (540.0, 180.0), (45.0, 45.0), (-190.0, 170.0)],
)
def test_wrap_degrees(angle, expected):
    assert wrap_degrees(angle) == pytest.approx(expected)


def test_as_point_accepts_planar_and_spatial_input():
    assert as_point((1, 2)) == (1.0, 2.0)
    assert as_point([1.5, -2.0, 0.0]) == (1.5, -2.0)


@pytest.mark.parametrize("value", [(1.0,), (1.0, 2.0, 3.0, 4.0), (float("nan"), 0.0), (0.0, float("inf"))])
def test_as_point_rejects_malformed_input(value):
    with pytest.raises(ValueError):
        as_point(value)
