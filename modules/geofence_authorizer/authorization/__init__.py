"""Geofence authorization: containment policy, error taxonomy and the
feature creation workflow built on top of them."""

from ..exceptions import NotPermittedError, NoBoundariesAssignedError, GeometryError
from .geofence_authorizer import GeofenceAuthorizer
from .feature_creation_guard import FeatureCreationGuard, http_status_for

__all__ = [
    'NotPermittedError',
    'NoBoundariesAssignedError',
    'GeometryError',
    'GeofenceAuthorizer',
    'FeatureCreationGuard',
    'http_status_for',
]
