"""Least-squares restoration of bar rest lengths after a free joint move."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable, List, Sequence

import numpy as np
from scipy.optimize import least_squares

logger = logging.getLogger(__name__)


@dataclass
class RelaxResult:
    positions: np.ndarray
    success: bool
    max_residual: float
    iterations: int = 0
    notes: List[str] = field(default_factory=list)


def bar_length_errors(positions: np.ndarray, rest_lengths: Sequence[float]) -> np.ndarray:
    """Signed ``length - rest`` for every bar ``i -> (i + 1) mod N``."""

    coords = np.asarray(positions, dtype=float)
    edges = np.roll(coords, -1, axis=0) - coords
    return np.hypot(edges[:, 0], edges[:, 1]) - np.asarray(rest_lengths, dtype=float)


def relax_bar_lengths(
    positions: np.ndarray,
    rest_lengths: Sequence[float],
    pinned: Iterable[int],
    *,
    tol: float = 1e-12,
    max_nfev: int = 200,
) -> RelaxResult:
    """Move the unpinned joints until every bar regains its rest length.

    The trust-region steps start from the current placement, so the answer
    stays on the branch the chain is already in.
    """

    start = np.array(positions, dtype=float, copy=True)
    count = len(start)
    if len(rest_lengths) != count:
        raise ValueError(f"expected {count} rest lengths, got {len(rest_lengths)}")
    pinned_set = {int(i) % count for i in pinned}
    free = [i for i in range(count) if i not in pinned_set]
    if not free:
        errors = bar_length_errors(start, rest_lengths)
        return RelaxResult(start, True, float(np.max(np.abs(errors))), 0, ["all joints pinned"])

    scale = max(float(np.max(rest_lengths)), 1.0)
    initial = start[free].ravel()

    def residuals(params: np.ndarray) -> np.ndarray:
        coords = start.copy()
        coords[free] = params.reshape(-1, 2)
        return bar_length_errors(coords, rest_lengths) / scale

    result = least_squares(residuals, initial, method="trf", xtol=tol, ftol=tol, max_nfev=max_nfev)

    relaxed = start.copy()
    relaxed[free] = result.x.reshape(-1, 2)
    max_residual = float(np.max(np.abs(bar_length_errors(relaxed, rest_lengths))))
    notes = [] if result.success else ["least_squares did not converge"]
    logger.info(
        "Relaxed %d free joint(s): success=%s max_residual=%.3e nfev=%d",
        len(free),
        result.success,
        max_residual,
        result.nfev,
    )
    return RelaxResult(relaxed, bool(result.success), max_residual, int(result.nfev), notes)


__all__ = ["RelaxResult", "bar_length_errors", "relax_bar_lengths"]
