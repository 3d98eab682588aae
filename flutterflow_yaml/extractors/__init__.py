"""FlutterFlow entity extractors."""

from flutterflow_yaml.extractors.base_extractor import BaseExtractor
from flutterflow_yaml.extractors.component_extractor import ComponentExtractor
from flutterflow_yaml.extractors.page_extractor import PageExtractor
from flutterflow_yaml.extractors.custom_code_extractor import (
    CustomActionExtractor,
    CustomFunctionExtractor,
    CustomWidgetExtractor,
)
from flutterflow_yaml.extractors.collection_extractor import CollectionExtractor
from flutterflow_yaml.extractors.app_state_extractor import AppStateExtractor

__all__ = [
    'BaseExtractor', 'ComponentExtractor', 'PageExtractor',
    'CustomActionExtractor', 'CustomFunctionExtractor',
    'CustomWidgetExtractor', 'CollectionExtractor', 'AppStateExtractor',
]
