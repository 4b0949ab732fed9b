"""
Custom exception classes for the Field Operations Geofence system.

This module defines domain-specific exceptions to provide clear error handling
and debugging information throughout the system.
"""

from typing import Optional, Dict, Any


class FieldOpsBaseException(Exception):
    """Base exception class for all field operations exceptions."""
    
    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.context = context or {}
    
    def __str__(self) -> str:
        if self.context:
            context_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            return f"{self.message} (Context: {context_str})"
        return self.message


class FieldOpsConfigurationError(FieldOpsBaseException):
    """
    Exception raised when configuration loading or validation fails.
    
    This exception is raised when:
    - Configuration files are missing or invalid
    - Environment configuration is malformed
    - Required configuration values are missing
    """
    pass


class FieldOpsValidationError(FieldOpsBaseException):
    """
    Exception raised when data validation fails.
    
    This exception is raised when:
    - Geometry documents are malformed
    - Configuration sections fail schema validation
    """
    pass


class FieldOpsAuthorizationError(FieldOpsBaseException):
    """
    Exception raised when a user action is not authorized.
    
    This exception is raised when:
    - A geometry falls outside the team's assigned boundaries
    - A team has no boundaries assigned
    """
    pass


class FieldOpsConnectionError(FieldOpsBaseException):
    """
    Exception raised when a backing store cannot be reached.
    
    This exception is raised when:
    - Network connection issues
    - Store unavailable
    - Connection timeouts
    """
    pass


class FieldOpsProcessingError(FieldOpsBaseException):
    """Exception raised when feature processing fails for a non-validation reason."""
    pass
