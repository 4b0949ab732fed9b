"""Boundary and Feature Store Interfaces

Contracts for the persistence collaborators the feature creation workflow
calls into, plus an in-memory boundary store used by the CLI and tests.
"""

import json
import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional

from pydantic import ValidationError

from src.exceptions import FieldOpsConfigurationError
from ..models import Boundary

logger = logging.getLogger(__name__)


class BoundaryStore(ABC):
    """Read access to boundaries."""

    @abstractmethod
    def get_boundaries_for_team(self, team_id: Optional[str]) -> List[Boundary]:
        """Return the boundaries assigned to ``team_id`` in a stable order."""

    @abstractmethod
    def get_boundary(self, boundary_id: str) -> Optional[Boundary]:
        """Return a single boundary, or None if it does not exist."""


class FeatureStore(ABC):
    """Write access for authorized features."""

    @abstractmethod
    def create_feature(self, record: Dict[str, Any]) -> Dict[str, Any]:
        """Persist a feature document and return the stored document."""


class InMemoryBoundaryStore(BoundaryStore):
    """Boundary store backed by a list, preserving insertion order."""

    def __init__(self, boundaries: Optional[Iterable[Boundary]] = None):
        self._boundaries: List[Boundary] = list(boundaries or [])

    def add(self, boundary: Boundary) -> None:
        self._boundaries.append(boundary)

    def get_boundaries_for_team(self, team_id: Optional[str]) -> List[Boundary]:
        if team_id is None:
            return []
        return [b for b in self._boundaries if b.is_assigned_to(team_id)]

    def get_boundary(self, boundary_id: str) -> Optional[Boundary]:
        for boundary in self._boundaries:
            if boundary.id == str(boundary_id):
                return boundary
        return None

    def __len__(self) -> int:
        return len(self._boundaries)

    @classmethod
    def from_documents(cls, documents: Any) -> "InMemoryBoundaryStore":
        """Build a store from a GeoJSON FeatureCollection or a list of boundary documents.

        FeatureCollection members take their id from the feature ``id`` or the
        ``id``/``_id`` property; ``name``, ``assignedTo`` and ``status`` are read
        from the properties.

        Documents are validated one at a time. A document whose only defect is
        its geometry is kept without geometry, so the authorizer reports it as
        an evaluation error for that boundary; any other invalid document is
        logged and skipped.

        Raises:
            FieldOpsConfigurationError: If the documents are not a FeatureCollection or a list
        """
        if isinstance(documents, dict) and documents.get("type") == "FeatureCollection":
            documents = [cls._feature_to_document(f) for f in documents.get("features", [])]

        if not isinstance(documents, list):
            raise FieldOpsConfigurationError(
                "Boundaries must be a FeatureCollection or a list of boundary documents"
            )

        boundaries = []
        for index, document in enumerate(documents):
            boundary = cls._load_document(index, document)
            if boundary is not None:
                boundaries.append(boundary)

        logger.debug(f"Loaded {len(boundaries)} boundaries")
        return cls(boundaries)

    @classmethod
    def from_file(cls, path: str) -> "InMemoryBoundaryStore":
        """Load boundaries from a JSON or GeoJSON file.

        Raises:
            FieldOpsConfigurationError: If the file is missing or not valid JSON
        """
        file_path = Path(path)
        if not file_path.exists():
            raise FieldOpsConfigurationError(f"Boundaries file not found: {file_path}")

        try:
            with open(file_path, 'r') as f:
                documents = json.load(f)
        except json.JSONDecodeError as e:
            raise FieldOpsConfigurationError(
                f"Invalid JSON in boundaries file: {str(e)}",
                {"path": str(file_path)}
            )

        store = cls.from_documents(documents)
        logger.info(f"Loaded {len(store)} boundaries from {file_path}")
        return store

    @staticmethod
    def _feature_to_document(feature: Dict[str, Any]) -> Dict[str, Any]:
        properties = dict(feature.get("properties") or {})
        document = {
            "id": feature.get("id", properties.get("id", properties.get("_id"))),
            "geometry": feature.get("geometry"),
        }
        for key in ("name", "assignedTo", "status"):
            if key in properties:
                document[key] = properties[key]
        return document

    @staticmethod
    def _load_document(index: int, document: Any) -> Optional[Boundary]:
        try:
            return Boundary.model_validate(document)
        except ValidationError as e:
            errors = e.errors()

        if isinstance(document, dict) and all(err["loc"][:1] == ("geometry",) for err in errors):
            logger.warning(f"Boundary document {index} has unreadable geometry: {errors[0]['msg']}")
            return Boundary.model_validate({**document, "geometry": None})

        logger.warning(f"Skipping invalid boundary document {index}: {errors[0]['msg']}")
        return None
