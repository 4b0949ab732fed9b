"""
Field Operations Framework Core Package

This package contains the shared infrastructure for the field operations
tracker: configuration loading, the exception hierarchy and logging setup
used by the processing modules.
"""

__version__ = "1.0.0"
