"""
Custom exceptions for the Field Operations Geofence system.

This module provides domain-specific exception classes for error handling
and debugging throughout the system.
"""

from .custom_exceptions import (
    FieldOpsBaseException,
    FieldOpsConfigurationError,
    FieldOpsValidationError,
    FieldOpsAuthorizationError,
    FieldOpsConnectionError,
    FieldOpsProcessingError,
)

__all__ = [
    "FieldOpsBaseException",
    "FieldOpsConfigurationError",
    "FieldOpsValidationError",
    "FieldOpsAuthorizationError",
    "FieldOpsConnectionError",
    "FieldOpsProcessingError",
]
