from .geometry import (
    CircleIntersection,
    Rect,
    circle_circle_intersection,
    clip_line_to_rect,
    line_line_intersection,
    nearest_point_on_segment,
    best_projection_axis,
)
from .collinearity import CollinearityReport, find_collinear_triples, has_collinear_triple
from .config import GeometryConfig, get_geometry_config, set_geometry_config
from .linkage import (
    AngleRange,
    AngularRanges,
    DragResult,
    HalfBar,
    LinkageConfigurationError,
    LinkageSolver,
    RelaxResult,
)
from .partition import (
    LineCandidate,
    LineClassification,
    PartitionConfigurationError,
    PartitionSearch,
    PartitionTriple,
    compose_visibility,
    palette_slot,
)

__all__ = [
    'CircleIntersection',
    'Rect',
    'circle_circle_intersection',
    'clip_line_to_rect',
    'line_line_intersection',
    'nearest_point_on_segment',
    'best_projection_axis',
    'CollinearityReport',
    'find_collinear_triples',
    'has_collinear_triple',
    'GeometryConfig',
    'get_geometry_config',
    'set_geometry_config',
    'AngleRange',
    'AngularRanges',
    'DragResult',
    'HalfBar',
    'LinkageConfigurationError',
    'LinkageSolver',
    'RelaxResult',
    'LineCandidate',
    'LineClassification',
    'PartitionConfigurationError',
    'PartitionSearch',
    'PartitionTriple',
    'compose_visibility',
    'palette_slot',
]
