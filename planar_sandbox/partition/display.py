"""Render-facing helpers: colour hints, visibility rules and view clipping."""

from __future__ import annotations

from typing import Callable, Iterable, Optional, Sequence, Tuple, TypeVar

import numpy as np

from ..geometry import Point, Rect, clip_line_to_rect
from .model import LineCandidate

T = TypeVar("T")

Color = Tuple[float, float, float]

# RGB triples indexed by inclusion-mask slot.
PALETTE: Tuple[Tuple[str, Color], ...] = (
    ("red", (1.0, 0.0, 0.0)),
    ("green", (0.0, 1.0, 0.0)),
    ("blue", (0.0, 0.0, 1.0)),
    ("yellow", (1.0, 1.0, 0.0)),
    ("magenta", (1.0, 0.0, 1.0)),
    ("cyan", (0.0, 1.0, 1.0)),
    ("orange", (1.0, 0.5, 0.0)),
    ("purple", (0.5, 0.0, 1.0)),
    ("spring green", (0.0, 1.0, 0.5)),
    ("rose", (1.0, 0.0, 0.5)),
    ("chartreuse", (0.5, 1.0, 0.0)),
    ("azure", (0.0, 0.5, 1.0)),
    ("white", (1.0, 1.0, 1.0)),
)


def palette_slot(mask: int) -> Tuple[int, float]:
    """Map an inclusion bitmask to ``(palette index, alpha)``.

    Masks sharing a palette entry are told apart by a fading alpha.
    """

    if mask < 0:
        raise ValueError(f"inclusion mask must be non-negative, got {mask}")
    size = len(PALETTE)
    alpha = (1.0 / 2 ** (mask // size)) ** 0.25
    return mask % size, alpha


def palette_color(mask: int) -> Tuple[str, Color, float]:
    slot, alpha = palette_slot(mask)
    name, rgb = PALETTE[slot]
    return name, rgb, alpha


def compose_visibility(
    item: T,
    should_show: Iterable[Callable[[T], bool]],
    force_hidden: Iterable[Callable[[T], bool]] = (),
) -> bool:
    """Visible when any show predicate holds and no force-hidden predicate does."""

    if any(rule(item) for rule in force_hidden):
        return False
    return any(rule(item) for rule in should_show)


def line_view_segment(
    points: Sequence[Point],
    line: LineCandidate,
    view: Rect,
    eps: float,
) -> Optional[Tuple[Point, Point]]:
    """Portion of ``line`` inside ``view`` for drawing, or ``None`` when off screen."""

    coords = np.asarray(points, dtype=float)
    start = (float(coords[line.start, 0]), float(coords[line.start, 1]))
    end = (float(coords[line.end, 0]), float(coords[line.end, 1]))
    return clip_line_to_rect(start, end, view, eps)


__all__ = [
    "PALETTE",
    "compose_visibility",
    "line_view_segment",
    "palette_color",
    "palette_slot",
]
