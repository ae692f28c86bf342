import pytest

from planar_sandbox.geometry import Rect
from planar_sandbox.partition import LineCandidate, compose_visibility, line_view_segment, palette_color, palette_slot
from planar_sandbox.partition.display import PALETTE


@pytest.mark.parametrize(
    "mask, slot, alpha",
    [
        (0, 0, 1.0),
        (12, 12, 1.0),
        (13, 0, 0.5 ** 0.25),
        (27, 1, 0.25 ** 0.25),
        (127, 10, (1.0 / 2 ** 9) ** 0.25),
    ],
)
def test_palette_slot_wraps_and_fades(mask, slot, alpha):
    assert palette_slot(mask) == (slot, pytest.approx(alpha))


def test_palette_has_thirteen_entries():
    assert len(PALETTE) == 13
    assert palette_color(3) == ("yellow", (1.0, 1.0, 0.0), 1.0)


def test_palette_slot_rejects_negative_masks():
    with pytest.raises(ValueError):
        palette_slot(-1)


def test_compose_visibility_any_show_and_no_force_hidden():
    always = lambda item: True
    never = lambda item: False

    assert compose_visibility("line", [never, always])
    assert not compose_visibility("line", [never])
    assert not compose_visibility("line", [])
    assert not compose_visibility("line", [always], force_hidden=[always])
    assert compose_visibility("line", [always], force_hidden=[never])


def test_line_view_segment_spans_view():
    points = [(1.0, 0.0), (6.0, 0.0), (0.0, 6.0)]

    segment = line_view_segment(points, LineCandidate(0, 1), Rect(-10.0, -10.0, 10.0, 10.0), 1e-9)

    assert segment is not None
    assert segment[0] == pytest.approx((-10.0, 0.0))
    assert segment[1] == pytest.approx((10.0, 0.0))

    assert line_view_segment(points, LineCandidate(0, 1), Rect(-1.0, 1.0, 1.0, 2.0), 1e-9) is None
