"""Geofence Authorizer

Decides whether a field-created geometry falls within one of a team's
assigned boundary polygons, and which boundary it belongs to.

Boundaries are tested strictly in the order given and the first match wins;
no attempt is made to find the smallest or best enclosing boundary. A
boundary whose geometry cannot be evaluated counts as no match for that
boundary only. The authorizer is a pure function of its inputs: it performs
no I/O, keeps no state between calls, and never mutates the boundaries or the
candidate geometry.
"""

from typing import Any, Iterable, List, Optional, Union

from pydantic import ValidationError

from ..exceptions import GeometryError, NoBoundariesAssignedError, NotPermittedError
from ..geometry import GeometryEngine, PlanarVertexEngine, boundary_ring, create_geometry_engine
from ..models import AuthorizationResult, Boundary, GeofenceConfig, GeoJSONGeometry

GeometryInput = Union[GeoJSONGeometry, dict, str]
BoundaryInput = Union[Boundary, dict]


class GeofenceAuthorizer:
    """Containment policy over a team's ordered boundary list.

    Args:
        engine: Containment engine; defaults to planar vertex sampling
    """

    def __init__(self, engine: Optional[GeometryEngine] = None):
        self.engine = engine or PlanarVertexEngine()

    @classmethod
    def from_config(cls, config: GeofenceConfig) -> "GeofenceAuthorizer":
        """Create an authorizer using the configured geometry engine."""
        return cls(create_geometry_engine(config.geometry_engine))

    def authorize(self, candidate: GeometryInput,
                  boundaries: Iterable[BoundaryInput]) -> AuthorizationResult:
        """Authorize a candidate geometry against assigned boundaries.

        Args:
            candidate: Point, LineString or Polygon geometry of the new feature
            boundaries: The team's assigned boundaries, in evaluation order

        Returns:
            AuthorizationResult; ``permitted`` is False when every boundary
            was evaluated (or skipped) without a match

        Raises:
            NoBoundariesAssignedError: If ``boundaries`` is empty; no test is run
            GeometryError: If no boundary could be evaluated because of
                malformed candidate or boundary geometry
        """
        boundaries = list(boundaries)
        if not boundaries:
            raise NoBoundariesAssignedError()

        geometry = self._as_geometry(candidate)

        evaluated = 0
        skipped = 0
        errors: List[str] = []

        for index, item in enumerate(boundaries):
            try:
                boundary = self._as_boundary(item)
                if boundary.geometry is None:
                    raise GeometryError(f"Boundary {boundary.id} has no geometry")
                if not boundary.geometry.is_polygon():
                    skipped += 1
                    continue
                ring = boundary_ring(boundary.geometry.coordinates)
                matched = self.engine.contains(ring, geometry)
            except GeometryError as e:
                errors.append(f"boundary[{index}]: {e}")
                continue

            evaluated += 1
            if matched:
                return AuthorizationResult(
                    permitted=True,
                    matched_boundary_id=boundary.id,
                    boundaries_evaluated=evaluated,
                    boundaries_skipped=skipped,
                    evaluation_errors=errors,
                )

        if evaluated == 0 and errors:
            raise GeometryError(
                "Geometry could not be evaluated against any assigned boundary",
                {"geometry_type": geometry.type, "boundaries": len(boundaries)},
                errors=errors,
            )

        return AuthorizationResult(
            permitted=False,
            boundaries_evaluated=evaluated,
            boundaries_skipped=skipped,
            evaluation_errors=errors,
        )

    def enforce(self, candidate: GeometryInput,
                boundaries: Iterable[BoundaryInput]) -> AuthorizationResult:
        """Authorize and raise if the geometry is not permitted.

        Raises:
            NotPermittedError: If no boundary contains the geometry
            NoBoundariesAssignedError: If ``boundaries`` is empty
            GeometryError: If no boundary could be evaluated
        """
        result = self.authorize(candidate, boundaries)
        if not result.permitted:
            raise NotPermittedError(
                "Cannot create features outside assigned parcel area",
                {"boundaries_evaluated": result.boundaries_evaluated}
            )
        return result

    @staticmethod
    def _as_geometry(candidate: Any) -> GeoJSONGeometry:
        if isinstance(candidate, GeoJSONGeometry):
            return candidate
        try:
            if isinstance(candidate, str):
                return GeoJSONGeometry.model_validate_json(candidate)
            return GeoJSONGeometry.model_validate(candidate)
        except ValidationError as e:
            raise GeometryError(f"Malformed candidate geometry: {e.error_count()} validation error(s)",
                                {"detail": e.errors()[0]["msg"]})

    @staticmethod
    def _as_boundary(item: Any) -> Boundary:
        if isinstance(item, Boundary):
            return item
        try:
            return Boundary.model_validate(item)
        except ValidationError as e:
            raise GeometryError(f"Malformed boundary document: {e.errors()[0]['msg']}")
