import pytest

from planar_sandbox import LinkageSolver, PartitionSearch
from planar_sandbox.config import GeometryConfig, get_geometry_config, set_geometry_config


@pytest.fixture
def restore_config():
    saved = get_geometry_config()
    yield
    set_geometry_config(saved)


def test_defaults():
    config = GeometryConfig()

    assert config.epsilon == 1e-6
    assert config.compatibility_radius_factor == 2.0
    assert config.joint_pick_radius == 0.1
    assert config.bar_pick_radius == 0.1


@pytest.mark.parametrize(
    "kwargs",
    [{"epsilon": -1e-9}, {"compatibility_radius_factor": 0.0}, {"compatibility_radius_factor": -2.0}],
)
def test_invalid_values_are_rejected(kwargs):
    with pytest.raises(ValueError):
        GeometryConfig(**kwargs)


def test_get_returns_independent_copy(restore_config):
    config = get_geometry_config()
    config.epsilon = 0.5

    assert get_geometry_config().epsilon == 1e-6


def test_set_changes_default_for_new_solvers(restore_config):
    set_geometry_config(GeometryConfig(epsilon=1e-3))
    solver = LinkageSolver([(0.0, 0.0), (1.0, 0.0), (1.0, 1.0), (0.0, 1.0)])

    set_geometry_config(GeometryConfig(epsilon=1e-2))

    assert solver.config.epsilon == 1e-3


def test_explicit_config_is_copied():
    config = GeometryConfig(epsilon=1e-4)
    search = PartitionSearch([(0.0, 0.0)] * 3, config=config)

    config.epsilon = 1.0

    assert search.config.epsilon == 1e-4
