"""Persistence collaborator contracts for geofence authorization."""

from .boundary_store import BoundaryStore, FeatureStore, InMemoryBoundaryStore

__all__ = ['BoundaryStore', 'FeatureStore', 'InMemoryBoundaryStore']
