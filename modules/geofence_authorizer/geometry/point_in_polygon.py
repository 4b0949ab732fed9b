"""Planar point-in-polygon test and GeoJSON coordinate coercion.

Coordinates are ``[longitude, latitude]`` pairs treated as planar x/y values.
The containment test is the even-odd (ray-casting) rule: a ray is cast from
the point in the +x direction and every edge it crosses toggles the result.

Coercion helpers raise :class:`GeometryError` on malformed input so that the
caller can decide whether a failure aborts a whole evaluation or a single
boundary test.
"""

import math
from numbers import Real
from typing import Any, List, Sequence, Tuple

from ..exceptions import GeometryError

Position = Tuple[float, float]


def to_position(value: Any) -> Position:
    """Coerce a GeoJSON position into an ``(x, y)`` tuple.

    A position is a sequence of two or three finite numbers; an optional
    third value (altitude) is ignored.

    Raises:
        GeometryError: If the value is not a valid position
    """
    if isinstance(value, (str, bytes)) or not isinstance(value, Sequence):
        raise GeometryError(f"Position must be a coordinate pair, got {type(value).__name__}")

    if len(value) not in (2, 3):
        raise GeometryError(f"Position must have 2 or 3 values, got {len(value)}")

    x, y = value[0], value[1]
    for ordinate in (x, y):
        if isinstance(ordinate, bool) or not isinstance(ordinate, Real):
            raise GeometryError(f"Position values must be numbers, got {ordinate!r}")
        if not math.isfinite(ordinate):
            raise GeometryError(f"Position values must be finite, got {ordinate!r}")

    return float(x), float(y)


def to_ring(value: Any) -> List[Position]:
    """Coerce a sequence of positions into a ring of ``(x, y)`` tuples.

    The ring may or may not repeat its first vertex at the end. An empty
    sequence yields an empty ring.

    Raises:
        GeometryError: If the value is not a sequence of valid positions
    """
    if isinstance(value, (str, bytes)) or not isinstance(value, Sequence):
        raise GeometryError(f"Ring must be a sequence of positions, got {type(value).__name__}")
    return [to_position(vertex) for vertex in value]


def is_point_in_polygon(point: Any, ring: Any) -> bool:
    """Test whether a point lies inside a polygon ring using the even-odd rule.

    Args:
        point: ``[lon, lat]`` position
        ring: Sequence of ``[lon, lat]`` positions; the ring is closed
            implicitly by the edge from the last vertex back to the first

    Returns:
        True if the point is inside the ring. Rings with fewer than three
        vertices contain nothing. Points exactly on an edge or vertex get
        whatever the even-odd rule yields for them.

    Raises:
        GeometryError: If the point or ring is malformed
    """
    x, y = to_position(point)
    vertices = to_ring(ring)

    if len(vertices) < 3:
        return False

    inside = False
    j = len(vertices) - 1
    for i in range(len(vertices)):
        xi, yi = vertices[i]
        xj, yj = vertices[j]

        # (yi > y) != (yj > y) guarantees yi != yj, so the division is safe
        if (yi > y) != (yj > y):
            x_intercept = (xj - xi) * (y - yi) / (yj - yi) + xi
            if x < x_intercept:
                inside = not inside

        j = i

    return inside


def boundary_ring(coordinates: Any) -> List[Position]:
    """Extract the outer ring of a Polygon's coordinates.

    Only the first ring is used; holes are not modeled.

    Raises:
        GeometryError: If the coordinates hold no ring
    """
    if isinstance(coordinates, (str, bytes)) or not isinstance(coordinates, Sequence) or not coordinates:
        raise GeometryError("Polygon coordinates must contain at least one ring")
    return to_ring(coordinates[0])


def candidate_vertices(geometry_type: str, coordinates: Any) -> List[Position]:
    """List the vertices of a candidate geometry that containment is sampled on.

    Points yield their single position, LineStrings every vertex in order and
    Polygons every vertex of their outer ring.

    Raises:
        GeometryError: For unsupported types, or missing or empty coordinates
    """
    if coordinates is None:
        raise GeometryError(f"{geometry_type} geometry has no coordinates")

    if geometry_type == "Point":
        return [to_position(coordinates)]

    if geometry_type == "LineString":
        vertices = to_ring(coordinates)
    elif geometry_type == "Polygon":
        vertices = boundary_ring(coordinates)
    else:
        raise GeometryError(f"Unsupported candidate geometry type: {geometry_type}")

    if not vertices:
        raise GeometryError(f"{geometry_type} geometry has no vertices")
    return vertices
