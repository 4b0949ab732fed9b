"""Geometry Engines for Geofence Containment

A geometry engine answers one question for the authorizer: does a candidate
geometry count as inside a boundary ring? Keeping it behind an interface lets
the authorization policy stay the same while the containment semantics are
swapped (e.g. for true intersection, or a geodesic implementation).
"""

from abc import ABC, abstractmethod
from typing import List

from shapely.errors import GEOSException
from shapely.geometry import LineString, Point, Polygon
from shapely.geometry.base import BaseGeometry
from shapely.validation import make_valid

from ..exceptions import GeometryError
from ..models import GeoJSONGeometry
from .point_in_polygon import Position, candidate_vertices, is_point_in_polygon


class GeometryEngine(ABC):
    """Containment capability used by the geofence authorizer."""

    name: str = "abstract"

    @abstractmethod
    def contains(self, ring: List[Position], candidate: GeoJSONGeometry) -> bool:
        """Check whether ``candidate`` counts as inside the boundary ``ring``.

        Raises:
            GeometryError: If either geometry cannot be evaluated
        """


class PlanarVertexEngine(GeometryEngine):
    """Planar ray-casting on the candidate's vertices.

    A candidate matches when any one of its vertices lies inside the ring.
    Lines or polygons that cross a boundary without a vertex inside it, and
    polygons that enclose a boundary entirely, are not detected.
    """

    name = "planar"

    def contains(self, ring: List[Position], candidate: GeoJSONGeometry) -> bool:
        for vertex in candidate_vertices(candidate.type, candidate.coordinates):
            if is_point_in_polygon(vertex, ring):
                return True
        return False


class ShapelyIntersectionEngine(GeometryEngine):
    """True planar intersection computed with shapely.

    Detects crossings and enclosures the vertex engine misses. Invalid
    (e.g. self-intersecting) boundary rings are repaired with ``make_valid``
    before testing.
    """

    name = "shapely"

    def contains(self, ring: List[Position], candidate: GeoJSONGeometry) -> bool:
        vertices = candidate_vertices(candidate.type, candidate.coordinates)
        if len(ring) < 3:
            return False

        try:
            boundary = Polygon(ring)
            if not boundary.is_valid:
                boundary = make_valid(boundary)
            return boundary.intersects(self._candidate_shape(candidate.type, vertices))
        except (GEOSException, ValueError) as e:
            raise GeometryError(
                f"Could not evaluate {candidate.type} against boundary: {e}",
                {"engine": self.name}
            )

    @staticmethod
    def _candidate_shape(geometry_type: str, vertices: List[Position]) -> BaseGeometry:
        # Degenerate lines and polygons collapse to the simplest shape their vertices allow
        if geometry_type == "Polygon" and len(vertices) >= 3:
            return Polygon(vertices)
        if geometry_type != "Point" and len(vertices) >= 2:
            return LineString(vertices)
        return Point(vertices[0])


_ENGINES = {
    PlanarVertexEngine.name: PlanarVertexEngine,
    ShapelyIntersectionEngine.name: ShapelyIntersectionEngine,
}


def create_geometry_engine(name: str = "planar") -> GeometryEngine:
    """Create a geometry engine by its configured name.

    Raises:
        ValueError: If no engine is registered under ``name``
    """
    try:
        return _ENGINES[name]()
    except KeyError:
        raise ValueError(f"Unknown geometry engine '{name}'. Available: {sorted(_ENGINES)}")
