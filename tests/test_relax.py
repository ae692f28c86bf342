import numpy as np
import pytest

from planar_sandbox.linkage import bar_length_errors, relax_bar_lengths

SQUARE = np.array([(0.0, 0.0), (1.0, 0.0), (1.0, 1.0), (0.0, 1.0)])


def test_bar_length_errors_wrap_around_chain():
    errors = bar_length_errors(SQUARE, [1.0, 1.0, 1.0, 0.5])

    assert errors == pytest.approx([0.0, 0.0, 0.0, 0.5])


def test_relax_keeps_pinned_joint_and_restores_lengths():
    moved = SQUARE.copy()
    moved[2] = (1.3, 1.2)

    result = relax_bar_lengths(moved, [1.0, 1.0, 1.0, 1.0], pinned=[2])

    assert result.success
    assert result.max_residual < 1e-6
    assert result.iterations > 0
    assert tuple(result.positions[2]) == pytest.approx((1.3, 1.2))
    assert bar_length_errors(result.positions, [1.0] * 4) == pytest.approx([0.0] * 4, abs=1e-6)
    assert tuple(moved[0]) == (0.0, 0.0)


def test_relax_with_every_joint_pinned_is_a_no_op():
    result = relax_bar_lengths(SQUARE, [1.0, 1.0, 1.0, 2.0], pinned=range(4))

    assert result.success
    assert result.notes == ["all joints pinned"]
    assert result.max_residual == pytest.approx(1.0)
    np.testing.assert_allclose(result.positions, SQUARE)


def test_relax_rejects_mismatched_rest_lengths():
    with pytest.raises(ValueError):
        relax_bar_lengths(SQUARE, [1.0, 1.0], pinned=[0])
