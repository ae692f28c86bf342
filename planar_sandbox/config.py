"""Configuration helpers shared by the linkage and partition engines."""

from __future__ import annotations

import copy
from dataclasses import dataclass
from typing import Optional

SUPPORTED_JOINT_COUNTS = (4, 7)
PARTITION_POINT_COUNT = 7


@dataclass
class GeometryConfig:
    """Numeric knobs fixed at solver construction.

    ``epsilon`` is the single tolerance used for every on-line, parallel,
    collinear and triangle-inequality predicate.
    """

    epsilon: float = 1e-6
    compatibility_radius_factor: float = 2.0
    joint_pick_radius: float = 0.1
    bar_pick_radius: float = 0.1
    scroll_length_rate: float = 0.1
    scroll_dead_zone: float = 0.01

    def __post_init__(self) -> None:
        if self.epsilon < 0.0:
            raise ValueError(f"epsilon must be non-negative, got {self.epsilon!r}")
        if self.compatibility_radius_factor <= 0.0:
            raise ValueError(
                f"compatibility_radius_factor must be positive, got {self.compatibility_radius_factor!r}"
            )


_GEOMETRY_CONFIG = GeometryConfig()


def get_geometry_config() -> GeometryConfig:
    return copy.deepcopy(_GEOMETRY_CONFIG)


def set_geometry_config(config: GeometryConfig) -> None:
    global _GEOMETRY_CONFIG
    _GEOMETRY_CONFIG = copy.deepcopy(config)


def resolve_config(config: Optional[GeometryConfig]) -> GeometryConfig:
    """Return a private copy of ``config`` or of the module default."""

    if config is None:
        return get_geometry_config()
    return copy.deepcopy(config)


__all__ = [
    "GeometryConfig",
    "PARTITION_POINT_COUNT",
    "SUPPORTED_JOINT_COUNTS",
    "get_geometry_config",
    "resolve_config",
    "set_geometry_config",
]
