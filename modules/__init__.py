"""Field Operations Processing Modules

This package contains the processing modules of the field operations tracker.
Each module provides the business logic for one aspect of field work on top
of the shared framework in ``src``.
"""
