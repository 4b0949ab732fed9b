"""Data models for geofence authorization."""

from .geofence_models import (
    GeometryType,
    UserRole,
    GeoJSONGeometry,
    Boundary,
    AuthorizationResult,
    FeatureCreationRequest,
    AuthorizedFeature,
    GeofenceConfig,
)

__all__ = [
    'GeometryType',
    'UserRole',
    'GeoJSONGeometry',
    'Boundary',
    'AuthorizationResult',
    'FeatureCreationRequest',
    'AuthorizedFeature',
    'GeofenceConfig',
]
