"""Seven-point partition search by three qualifying lines."""

from .display import PALETTE, compose_visibility, line_view_segment, palette_color, palette_slot
from .lines import (
    canonical_signature,
    classify_line,
    inclusion_codes,
    induces_unique_partition,
    is_qualifying_split,
    pair_compatible,
)
from .model import LineCandidate, LineClassification, PartitionConfigurationError, PartitionTriple
from .search import PartitionSearch

__all__ = [
    "LineCandidate",
    "LineClassification",
    "PALETTE",
    "PartitionConfigurationError",
    "PartitionSearch",
    "PartitionTriple",
    "canonical_signature",
    "classify_line",
    "compose_visibility",
    "inclusion_codes",
    "induces_unique_partition",
    "is_qualifying_split",
    "line_view_segment",
    "pair_compatible",
    "palette_color",
    "palette_slot",
]
