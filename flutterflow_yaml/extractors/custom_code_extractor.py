"""
Extractors for FlutterFlow custom code.

Custom code lives under ``custom_code/`` in three flavours, each with its own
wrapper key:

- ``custom_code/actions/*``    -> ``actionDefinition``
- ``custom_code/functions/*``  -> ``functionDefinition``
- ``custom_code/widgets/*``    -> ``widgetDefinition``

Actions and functions expose ``parameters``; widgets expose ``properties``.
"""

from typing import Any, Dict

from flutterflow_yaml.domain.enums import EntityKind
from flutterflow_yaml.extractors.base_extractor import BaseExtractor


class CustomActionExtractor(BaseExtractor):
    """Extracts custom actions."""

    kind = EntityKind.CUSTOM_ACTION

    def build_record(self, path: str, name: str, definition: Dict[str, Any]) -> Dict[str, Any]:
        return {
            'path': path,
            'name': name,
            'definition': definition,
            'code': self._get(definition, 'code', ''),
            'parameters': self._get(definition, 'parameters', []),
        }


class CustomFunctionExtractor(CustomActionExtractor):
    """Extracts custom functions. Same record shape as actions."""

    kind = EntityKind.CUSTOM_FUNCTION


class CustomWidgetExtractor(BaseExtractor):
    """Extracts custom widgets."""

    kind = EntityKind.CUSTOM_WIDGET

    def build_record(self, path: str, name: str, definition: Dict[str, Any]) -> Dict[str, Any]:
        return {
            'path': path,
            'name': name,
            'definition': definition,
            'code': self._get(definition, 'code', ''),
            'properties': self._get(definition, 'properties', []),
        }
