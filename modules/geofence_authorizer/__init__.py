"""Geofence Authorizer Module

Decides whether field-created features (points, lines, polygons) fall within
the boundaries assigned to the submitting team, and which boundary a new
feature belongs to.
"""

from .exceptions import NotPermittedError, NoBoundariesAssignedError, GeometryError
from .geometry import is_point_in_polygon
from .authorization import GeofenceAuthorizer, FeatureCreationGuard, http_status_for

__all__ = [
    'NotPermittedError',
    'NoBoundariesAssignedError',
    'GeometryError',
    'is_point_in_polygon',
    'GeofenceAuthorizer',
    'FeatureCreationGuard',
    'http_status_for',
]

__version__ = "1.0.0"
