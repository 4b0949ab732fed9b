"""Geofence Data Models

Pydantic models for boundaries, candidate feature geometries, authorization
results and the feature creation request/response passed between the route
layer and the authorizer.
"""

import json
from enum import Enum
from typing import Any, Dict, List, Literal, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, ValidationError, field_validator

from src.exceptions import FieldOpsConfigurationError


class GeometryType(str, Enum):
    """GeoJSON geometry types understood by the authorizer."""
    POINT = "Point"
    LINE_STRING = "LineString"
    POLYGON = "Polygon"


class UserRole(str, Enum):
    """Roles of users submitting features."""
    SUPERVISOR = "Supervisor"
    FIELD = "Field"


class GeoJSONGeometry(BaseModel):
    """GeoJSON-like geometry document.

    The shape of ``coordinates`` is not validated on construction; it is
    checked when the geometry is evaluated against a boundary.
    """
    model_config = ConfigDict(frozen=True)

    type: str = Field(..., description="GeoJSON geometry type, e.g. Point, LineString, Polygon")
    coordinates: Any = Field(None, description="GeoJSON coordinates array")

    def is_polygon(self) -> bool:
        """Check whether this geometry is a Polygon."""
        return self.type == GeometryType.POLYGON.value


def _parse_geometry_document(value: Any) -> Any:
    # Geometry may be stored as serialized JSON text
    if isinstance(value, str):
        try:
            return json.loads(value)
        except json.JSONDecodeError as e:
            raise ValueError(f"Geometry is not valid JSON: {e}")
    return value


def _normalize_id(value: Any) -> Any:
    if value is None or isinstance(value, str):
        return value
    if isinstance(value, bool):
        raise ValueError("Identifier must not be a boolean")
    return str(value)


class Boundary(BaseModel):
    """Boundary polygon that supervisors assign to a field team.

    Accepts documents in the stored camelCase shape (``_id``, ``assignedTo``)
    as well as snake_case field names.
    """
    model_config = ConfigDict(frozen=True)

    id: str = Field(..., validation_alias=AliasChoices("id", "_id"), description="Boundary identifier")
    name: Optional[str] = Field(None, description="Display name of the boundary")
    geometry: Optional[GeoJSONGeometry] = Field(None, description="Boundary geometry, expected to be a Polygon")
    assigned_to: Optional[str] = Field(None, validation_alias=AliasChoices("assigned_to", "assignedTo"),
                                       description="Team the boundary is assigned to")
    status: Optional[str] = Field(None, description="Boundary workflow status")

    @field_validator('id', 'assigned_to', mode='before')
    @classmethod
    def normalize_identifiers(cls, v: Any) -> Any:
        """Store identifiers (ObjectIds, integers) as strings."""
        return _normalize_id(v)

    @field_validator('geometry', mode='before')
    @classmethod
    def parse_geometry(cls, v: Any) -> Any:
        """Accept geometry stored as a JSON-encoded string."""
        return _parse_geometry_document(v)

    def is_assigned_to(self, team_id: Optional[str]) -> bool:
        """Check whether the boundary is assigned to the given team."""
        return team_id is not None and self.assigned_to == str(team_id)


class AuthorizationResult(BaseModel):
    """Outcome of testing a candidate geometry against a team's boundaries."""
    model_config = ConfigDict(frozen=True)

    permitted: bool = Field(..., description="Whether the geometry falls within an assigned boundary")
    matched_boundary_id: Optional[str] = Field(None, description="First boundary, in order, that matched")
    boundaries_evaluated: int = Field(0, ge=0, description="Polygon boundaries tested successfully")
    boundaries_skipped: int = Field(0, ge=0, description="Non-polygon boundaries that were not tested")
    evaluation_errors: List[str] = Field(default_factory=list,
                                         description="Boundary tests that failed on malformed geometry")

    def get_decision_summary(self) -> str:
        """Get human-readable decision summary."""
        if self.permitted:
            return f"permitted (boundary {self.matched_boundary_id})"
        return (f"not permitted ({self.boundaries_evaluated} evaluated, "
                f"{self.boundaries_skipped} skipped, {len(self.evaluation_errors)} errors)")


class FeatureCreationRequest(BaseModel):
    """Feature-creation request as received from the route layer."""
    geometry: GeoJSONGeometry = Field(..., description="Candidate geometry of the new feature")
    user_role: UserRole = Field(UserRole.FIELD, validation_alias=AliasChoices("user_role", "userRole"),
                                description="Role of the submitting user")
    team_id: Optional[str] = Field(None, validation_alias=AliasChoices("team_id", "teamId"),
                                   description="Team of the submitting user")
    boundary_id: Optional[str] = Field(None, validation_alias=AliasChoices("boundary_id", "boundaryId"),
                                       description="Boundary explicitly chosen by the user")
    properties: Dict[str, Any] = Field(default_factory=dict, description="Remaining feature attributes")

    @field_validator('team_id', 'boundary_id', mode='before')
    @classmethod
    def normalize_identifiers(cls, v: Any) -> Any:
        """Store identifiers as strings."""
        return _normalize_id(v)

    @field_validator('geometry', mode='before')
    @classmethod
    def parse_geometry(cls, v: Any) -> Any:
        """Accept geometry sent as a JSON-encoded string."""
        return _parse_geometry_document(v)


class AuthorizedFeature(BaseModel):
    """Feature ready to persist, stamped with its boundary and team."""

    geometry: GeoJSONGeometry
    properties: Dict[str, Any] = Field(default_factory=dict)
    boundary_id: Optional[str] = None
    team_id: Optional[str] = None
    authorization: AuthorizationResult

    def to_record(self) -> Dict[str, Any]:
        """Build the document handed to the feature store."""
        record = dict(self.properties)
        record["geometry"] = self.geometry.model_dump()
        if self.boundary_id is not None:
            record["boundaryId"] = self.boundary_id
        if self.team_id is not None:
            record["teamId"] = self.team_id
        return record


class GeofenceConfig(BaseModel):
    """Configuration settings for geofence authorization.

    Validation model for the ``authorization`` section of
    environment_config.json.
    """
    geometry_engine: Literal["planar", "shapely"] = Field("planar", description="Containment engine name")
    bypass_roles: List[str] = Field(default_factory=lambda: [UserRole.SUPERVISOR.value],
                                    description="Roles allowed to create features anywhere")
    require_boundary_id: bool = Field(False, description="Reject field requests without an explicit boundary")
    boundary_fetch_attempts: int = Field(3, ge=1, description="Attempts when loading team boundaries")
    boundary_fetch_wait_seconds: float = Field(1.0, ge=0, description="Wait between boundary load attempts")

    @classmethod
    def from_config_loader(cls, config_loader, environment: str) -> "GeofenceConfig":
        """Load and validate the authorization section for an environment.

        Raises:
            FieldOpsConfigurationError: If the section fails validation
        """
        section = config_loader.get_section(environment, "authorization")
        try:
            return cls(**section)
        except ValidationError as e:
            raise FieldOpsConfigurationError(
                f"Invalid authorization configuration: {e}",
                {"environment": environment}
            )
