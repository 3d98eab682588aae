"""
Extractor for database collections.

Collections come in two layouts that may coexist in one project:

- one document per collection under ``collections/`` wrapped in
  ``collectionDefinition``
- a single ``collections.yaml`` holding ``collections: {name: schema}``

Records from both layouts are concatenated in mapping order. Names are not
de-duplicated: a collection defined in both layouts yields two records.
"""

from typing import Any, Dict, List

from flutterflow_yaml.domain.constants import COLLECTIONS_INDEX_KEY
from flutterflow_yaml.domain.enums import EntityKind
from flutterflow_yaml.domain.models import DocumentMapping
from flutterflow_yaml.extractors.base_extractor import BaseExtractor


class CollectionExtractor(BaseExtractor):
    """Extracts collections from both the per-file and the index layout."""

    kind = EntityKind.COLLECTION

    def extract(self, documents: DocumentMapping) -> List[Dict[str, Any]]:
        records = []
        for path, document in documents.items():
            detection = self.detector.detect(path, document)
            if not detection.matched:
                continue
            if detection.kind == EntityKind.COLLECTION:
                records.extend(self.build_records(path, document))
            elif detection.kind == EntityKind.COLLECTION_INDEX:
                records.extend(self.build_index_records(path, document))
        return records

    def build_index_records(self, path: str, document: Dict[str, Any]) -> List[Dict[str, Any]]:
        return [
            self.build_record(path, str(name), definition)
            for name, definition in document[COLLECTIONS_INDEX_KEY].items()
        ]

    def build_record(self, path: str, name: str, definition: Dict[str, Any]) -> Dict[str, Any]:
        return {
            'path': path,
            'name': name,
            'definition': definition,
            'fields': self._get(definition, 'fields', []),
            'indexes': self._get(definition, 'indexes', []),
        }
