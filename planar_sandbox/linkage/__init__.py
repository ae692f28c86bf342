"""Closed-chain linkage solver with continuity-preserving bar drags."""

from .kinematics import (
    angular_ranges_from_lengths,
    choose_continuous,
    compute_angular_range,
    opposite_candidates,
    solve_bar_drag,
)
from .model import (
    AngleRange,
    AngularRanges,
    DragResult,
    DragSnapshot,
    HalfBar,
    HalfBarGeometry,
    Hover,
    LinkageConfigurationError,
    PartKind,
)
from .relax import RelaxResult, bar_length_errors, relax_bar_lengths
from .solver import LinkageSolver

__all__ = [
    "AngleRange",
    "AngularRanges",
    "DragResult",
    "DragSnapshot",
    "HalfBar",
    "HalfBarGeometry",
    "Hover",
    "LinkageConfigurationError",
    "LinkageSolver",
    "PartKind",
    "RelaxResult",
    "angular_ranges_from_lengths",
    "bar_length_errors",
    "choose_continuous",
    "compute_angular_range",
    "opposite_candidates",
    "relax_bar_lengths",
    "solve_bar_drag",
]
