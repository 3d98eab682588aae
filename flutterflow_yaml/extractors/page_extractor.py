"""Extractor for FlutterFlow pages."""

from typing import Any, Dict

from flutterflow_yaml.domain.enums import EntityKind
from flutterflow_yaml.extractors.base_extractor import BaseExtractor


class PageExtractor(BaseExtractor):
    """Extracts ``pageDefinition`` documents under ``pages/``.

    ``route`` is carried as-is and may be ``None`` for pages that never
    declared one.
    """

    kind = EntityKind.PAGE

    def build_record(self, path: str, name: str, definition: Dict[str, Any]) -> Dict[str, Any]:
        return {
            'path': path,
            'name': name,
            'route': definition.get('route'),
            'definition': definition,
            'widgets': self._get(definition, 'widgets', []),
            'actions': self._get(definition, 'actions', []),
        }
