"""
Utility modules for the Field Operations Geofence system.

Logging setup and helpers shared by the processing modules.
"""

from .logging_setup import setup_logging, get_logger, log_performance

__all__ = ["setup_logging", "get_logger", "log_performance"]
