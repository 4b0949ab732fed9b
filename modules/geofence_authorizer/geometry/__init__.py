"""Planar geometry primitives and pluggable containment engines."""

from .point_in_polygon import (
    Position,
    to_position,
    to_ring,
    is_point_in_polygon,
    boundary_ring,
    candidate_vertices,
)
from .engines import (
    GeometryEngine,
    PlanarVertexEngine,
    ShapelyIntersectionEngine,
    create_geometry_engine,
)

__all__ = [
    'Position',
    'to_position',
    'to_ring',
    'is_point_in_polygon',
    'boundary_ring',
    'candidate_vertices',
    'GeometryEngine',
    'PlanarVertexEngine',
    'ShapelyIntersectionEngine',
    'create_geometry_engine',
]
