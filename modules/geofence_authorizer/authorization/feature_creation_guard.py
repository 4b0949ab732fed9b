"""Feature Creation Guard

Runs the feature creation workflow around the geofence authorizer: loads the
submitting team's boundaries, applies role and explicit-boundary rules,
authorizes the geometry, stamps the new feature with its boundary and team,
and only then hands it to the feature store.
"""

import logging
from typing import Any, Dict, List, Optional, Union

from pydantic import ValidationError
from tenacity import Retrying, before_sleep_log, retry_if_exception_type, stop_after_attempt, wait_fixed

from src.exceptions import (
    FieldOpsBaseException,
    FieldOpsConfigurationError,
    FieldOpsConnectionError,
    FieldOpsProcessingError,
    FieldOpsValidationError,
)
from ..exceptions import NoBoundariesAssignedError, NotPermittedError
from ..models import AuthorizationResult, AuthorizedFeature, Boundary, FeatureCreationRequest, GeofenceConfig
from ..stores import BoundaryStore, FeatureStore
from .geofence_authorizer import GeofenceAuthorizer

logger = logging.getLogger(__name__)

RequestInput = Union[FeatureCreationRequest, Dict[str, Any]]


def http_status_for(error: Exception) -> int:
    """Map a workflow error to the HTTP status the route layer should return."""
    status = getattr(error, "http_status", None)
    if status is not None:
        return status
    if isinstance(error, FieldOpsValidationError):
        return 400
    if isinstance(error, FieldOpsConnectionError):
        return 503
    return 500


class FeatureCreationGuard:
    """Authorization gate in front of feature persistence.

    Args:
        boundary_store: Source of the team's assigned boundaries
        feature_store: Destination for authorized features (optional when
            only ``authorize_feature`` is used)
        config: Authorization settings; defaults apply when omitted
        authorizer: Containment policy; built from ``config`` when omitted
    """

    def __init__(self, boundary_store: BoundaryStore,
                 feature_store: Optional[FeatureStore] = None,
                 config: Optional[GeofenceConfig] = None,
                 authorizer: Optional[GeofenceAuthorizer] = None):
        self.boundary_store = boundary_store
        self.feature_store = feature_store
        self.config = config or GeofenceConfig()
        self.authorizer = authorizer or GeofenceAuthorizer.from_config(self.config)

        logger.debug(f"FeatureCreationGuard initialized with {self.authorizer.engine.name} engine")

    def authorize_feature(self, request: RequestInput) -> AuthorizedFeature:
        """Authorize a feature creation request.

        Returns:
            AuthorizedFeature stamped with the matched boundary and the team

        Raises:
            NotPermittedError: Geometry outside the team's boundaries, or an
                explicit boundary that is not assigned to the team
            NoBoundariesAssignedError: The team has no boundaries assigned
            GeometryError: Geometry could not be evaluated against any boundary
            FieldOpsValidationError: The request itself is malformed
        """
        request = self._as_request(request)

        if request.user_role.value in self.config.bypass_roles:
            logger.info(f"{request.user_role.value} request bypasses boundary restrictions")
            return AuthorizedFeature(
                geometry=request.geometry,
                properties=request.properties,
                boundary_id=request.boundary_id,
                team_id=request.team_id,
                authorization=AuthorizationResult(permitted=True, matched_boundary_id=request.boundary_id),
            )

        if self.config.require_boundary_id and not request.boundary_id:
            raise NotPermittedError("Field users must specify a boundary for feature creation")

        boundaries = self._load_team_boundaries(request.team_id)
        if not boundaries:
            logger.warning(f"Team {request.team_id} has no assigned boundaries")
            raise NoBoundariesAssignedError(context={"team_id": request.team_id})

        if request.boundary_id:
            boundaries = [b for b in boundaries if b.id == request.boundary_id]
            if not boundaries:
                logger.warning(f"Boundary {request.boundary_id} is not assigned to team {request.team_id}")
                raise NotPermittedError(
                    "Cannot create features outside assigned parcel area",
                    {"boundary_id": request.boundary_id, "team_id": request.team_id}
                )

        try:
            result = self.authorizer.enforce(request.geometry, boundaries)
        except NotPermittedError:
            logger.warning(f"{request.geometry.type} from team {request.team_id} is outside its boundaries")
            raise

        logger.info(f"{request.geometry.type} from team {request.team_id} {result.get_decision_summary()}")
        return AuthorizedFeature(
            geometry=request.geometry,
            properties=request.properties,
            boundary_id=result.matched_boundary_id,
            team_id=request.team_id,
            authorization=result,
        )

    def create_feature(self, request: RequestInput) -> Dict[str, Any]:
        """Authorize a request and persist the feature only if it is permitted.

        Returns:
            The document returned by the feature store

        Raises:
            FieldOpsConfigurationError: If no feature store is configured
            FieldOpsProcessingError: If the feature store fails unexpectedly
            Any error raised by ``authorize_feature``; the store is not called
        """
        if self.feature_store is None:
            raise FieldOpsConfigurationError("No feature store configured for feature creation")

        authorized = self.authorize_feature(request)

        try:
            return self.feature_store.create_feature(authorized.to_record())
        except FieldOpsBaseException:
            raise
        except Exception as e:
            raise FieldOpsProcessingError(
                f"Failed to persist feature: {e}",
                {"boundary_id": authorized.boundary_id}
            ) from e

    def _load_team_boundaries(self, team_id: Optional[str]) -> List[Boundary]:
        if team_id is None:
            return []

        retrying = Retrying(
            stop=stop_after_attempt(self.config.boundary_fetch_attempts),
            wait=wait_fixed(self.config.boundary_fetch_wait_seconds),
            retry=retry_if_exception_type((ConnectionError, FieldOpsConnectionError)),
            before_sleep=before_sleep_log(logger, logging.WARNING),
            reraise=True,
        )
        return list(retrying(self.boundary_store.get_boundaries_for_team, team_id))

    @staticmethod
    def _as_request(request: RequestInput) -> FeatureCreationRequest:
        if isinstance(request, FeatureCreationRequest):
            return request
        try:
            return FeatureCreationRequest.model_validate(request)
        except ValidationError as e:
            raise FieldOpsValidationError(
                f"Invalid feature creation request: {e.error_count()} validation error(s)",
                {"detail": e.errors()[0]["msg"]}
            )
