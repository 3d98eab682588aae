"""Base class for entity extractors."""

from abc import ABC, abstractmethod
from typing import Any

from flutterflow_yaml.domain.enums import EntityKind
from flutterflow_yaml.domain.models import DocumentMapping
from flutterflow_yaml.kind_detector import KindDetector, derive_name


class BaseExtractor(ABC):
    """Projects documents of one entity kind into normalized records.

    Subclasses set ``kind`` and implement ``build_record``. Records are plain
    dicts holding ``path``, ``name`` and ``definition`` plus kind-specific
    projections; a missing projection is an empty container, never ``None``.
    """

    kind: EntityKind

    def __init__(self, detector: KindDetector | None = None):
        self.detector = detector or KindDetector()

    def extract(self, documents: DocumentMapping) -> list[dict[str, Any]]:
        """Return one record per matching document, in mapping order."""
        records = []
        for path, document in documents.items():
            if self.detector.matches(path, document, self.kind):
                records.extend(self.build_records(path, document))
        return records

    def build_records(self, path: str, document: dict[str, Any]) -> list[dict[str, Any]]:
        wrapper = self.detector.detect(path, document).wrapper_key
        definition = document[wrapper]
        return [self.build_record(path, self.resolve_name(definition, path), definition)]

    @abstractmethod
    def build_record(self, path: str, name: str, definition: dict[str, Any]) -> dict[str, Any]:
        """Build the normalized record for one entity."""

    @staticmethod
    def resolve_name(definition: dict[str, Any], path: str) -> str:
        """Explicit ``name`` field, else the filename stem."""
        return definition.get('name') or derive_name(path)

    @staticmethod
    def _get(definition: Any, key: str, default: Any) -> Any:
        """Field value, or ``default`` when the field is absent or null."""
        if not isinstance(definition, dict):
            return default
        value = definition.get(key)
        return default if value is None else value
