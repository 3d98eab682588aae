"""Extractor for FlutterFlow components."""

from typing import Any, Dict

from flutterflow_yaml.domain.enums import EntityKind
from flutterflow_yaml.extractors.base_extractor import BaseExtractor


class ComponentExtractor(BaseExtractor):
    """Extracts ``componentDefinition`` documents under ``components/``."""

    kind = EntityKind.COMPONENT

    def build_record(self, path: str, name: str, definition: Dict[str, Any]) -> Dict[str, Any]:
        return {
            'path': path,
            'name': name,
            'definition': definition,
            'properties': self._get(definition, 'properties', {}),
            'widgets': self._get(definition, 'widgets', []),
        }
