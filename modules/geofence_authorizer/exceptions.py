"""Geofence Authorization Exceptions

Extends the framework exception hierarchy with the three authorization
outcomes a caller must tell apart: a legitimate denial, a team without
boundaries, and geometry that could not be evaluated at all.
"""

from typing import Any, Dict, List, Optional

from src.exceptions import FieldOpsAuthorizationError, FieldOpsValidationError


class NotPermittedError(FieldOpsAuthorizationError):
    """Candidate geometry does not intersect any assigned boundary."""

    http_status = 403


class NoBoundariesAssignedError(FieldOpsAuthorizationError):
    """The submitting team has no boundaries assigned."""

    http_status = 403

    def __init__(self, message: str = "No boundaries are assigned to your team; contact a supervisor",
                 context: Optional[Dict[str, Any]] = None):
        super().__init__(message, context)


class GeometryError(FieldOpsValidationError):
    """Candidate or boundary geometry is malformed and could not be evaluated."""

    http_status = 422

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None,
                 errors: Optional[List[str]] = None):
        super().__init__(message, context)
        self.errors = errors or []
