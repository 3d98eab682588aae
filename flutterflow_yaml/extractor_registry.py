"""Registry of entity extractors, plus module-level extraction helpers."""

from typing import Any

from flutterflow_yaml.domain.enums import EntityKind
from flutterflow_yaml.domain.models import DocumentMapping
from flutterflow_yaml.extractors import (
    AppStateExtractor,
    BaseExtractor,
    CollectionExtractor,
    ComponentExtractor,
    CustomActionExtractor,
    CustomFunctionExtractor,
    CustomWidgetExtractor,
    PageExtractor,
)


class ExtractorRegistry:
    """Maps entity kinds to their extractors."""

    def __init__(self):
        self._extractors: dict[EntityKind, BaseExtractor] = {}
        self._register_default_extractors()

    def _register_default_extractors(self) -> None:
        self.register_extractor(EntityKind.COMPONENT, ComponentExtractor())
        self.register_extractor(EntityKind.PAGE, PageExtractor())
        self.register_extractor(EntityKind.CUSTOM_ACTION, CustomActionExtractor())
        self.register_extractor(EntityKind.CUSTOM_FUNCTION, CustomFunctionExtractor())
        self.register_extractor(EntityKind.CUSTOM_WIDGET, CustomWidgetExtractor())
        self.register_extractor(EntityKind.COLLECTION, CollectionExtractor())

    def get_extractor(self, kind: EntityKind) -> BaseExtractor:
        if kind not in self._extractors:
            raise KeyError(f"No extractor registered for {kind.value}")
        return self._extractors[kind]

    def register_extractor(self, kind: EntityKind, extractor: BaseExtractor) -> None:
        self._extractors[kind] = extractor

    def get_supported_kinds(self) -> list[EntityKind]:
        return list(self._extractors.keys())


_registry = ExtractorRegistry()


def extract_components(documents: DocumentMapping) -> list[dict[str, Any]]:
    return _registry.get_extractor(EntityKind.COMPONENT).extract(documents)


def extract_pages(documents: DocumentMapping) -> list[dict[str, Any]]:
    return _registry.get_extractor(EntityKind.PAGE).extract(documents)


def extract_custom_code(documents: DocumentMapping) -> dict[str, list[dict[str, Any]]]:
    """Custom actions, functions and widgets grouped by flavour."""
    return {
        'actions': _registry.get_extractor(EntityKind.CUSTOM_ACTION).extract(documents),
        'functions': _registry.get_extractor(EntityKind.CUSTOM_FUNCTION).extract(documents),
        'widgets': _registry.get_extractor(EntityKind.CUSTOM_WIDGET).extract(documents),
    }


def extract_database_collections(documents: DocumentMapping) -> list[dict[str, Any]]:
    return _registry.get_extractor(EntityKind.COLLECTION).extract(documents)


def extract_app_state(documents: DocumentMapping) -> dict[str, Any] | None:
    return AppStateExtractor().extract(documents)
