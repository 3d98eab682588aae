"""Kind detection for FlutterFlow project documents."""

from typing import Any, Callable

from flutterflow_yaml.domain.constants import (
    APP_STATE_PATHS,
    COLLECTIONS_INDEX_FILE,
    COLLECTIONS_INDEX_KEY,
    CUSTOM_CODE_FOLDER,
    KIND_ALIASES,
    NAME_EXTENSIONS,
    WRAPPER_KEYS,
)
from flutterflow_yaml.domain.enums import EntityKind
from flutterflow_yaml.domain.models import KindDetectionResult

# (folders, filename, path) -> bool
PathPredicate = Callable[[list[str], str, str], bool]


def split_path(path: str) -> tuple[list[str], str]:
    """Split a document path into its folder segments and filename."""
    parts = path.split('/')
    return parts[:-1], parts[-1]


def derive_name(path: str) -> str:
    """Entity name implied by a path: the filename without its YAML extension."""
    _, filename = split_path(path)
    for ext in NAME_EXTENSIONS:
        if filename.endswith(ext):
            return filename[:-len(ext)]
    return filename


def _custom_code(subfolder: str) -> PathPredicate:
    return lambda folders, filename, path: CUSTOM_CODE_FOLDER in folders and subfolder in folders


class KindDetector:
    """Determines the entity kind of a document from its path and wrapper key."""

    # Evaluated top to bottom; the first rule that matches decides the kind.
    RULES: list[tuple[PathPredicate, EntityKind]] = [
        (_custom_code('actions'), EntityKind.CUSTOM_ACTION),
        (_custom_code('functions'), EntityKind.CUSTOM_FUNCTION),
        (_custom_code('widgets'), EntityKind.CUSTOM_WIDGET),
        (lambda folders, filename, path: 'collections' in folders, EntityKind.COLLECTION),
        (lambda folders, filename, path: filename == COLLECTIONS_INDEX_FILE, EntityKind.COLLECTION_INDEX),
        (lambda folders, filename, path: 'components' in folders, EntityKind.COMPONENT),
        (lambda folders, filename, path: 'pages' in folders, EntityKind.PAGE),
        (lambda folders, filename, path: path in APP_STATE_PATHS, EntityKind.APP_STATE),
    ]

    def classify(self, path: str) -> EntityKind:
        """Classify a path by convention alone."""
        folders, filename = split_path(path)
        for predicate, kind in self.RULES:
            if predicate(folders, filename, path):
                return kind
        return EntityKind.UNRECOGNIZED

    def detect(self, path: str, document: Any) -> KindDetectionResult:
        """Classify a path and check the document carries the kind's wrapper."""
        kind = self.classify(path)

        if kind == EntityKind.UNRECOGNIZED:
            return KindDetectionResult(path, kind)

        if kind == EntityKind.APP_STATE:
            return KindDetectionResult(path, kind, None, isinstance(document, dict))

        if kind == EntityKind.COLLECTION_INDEX:
            wrapper_key = COLLECTIONS_INDEX_KEY
        else:
            wrapper_key = WRAPPER_KEYS[kind]

        matched = isinstance(document, dict) and isinstance(document.get(wrapper_key), dict)
        return KindDetectionResult(path, kind, wrapper_key, matched)

    def matches(self, path: str, document: Any, kind: EntityKind) -> bool:
        """True when the document contributes an entity of ``kind``."""
        result = self.detect(path, document)
        return result.matched and result.kind == kind


def parse_kind(value: str | EntityKind) -> EntityKind:
    """Resolve a kind given as an enum, enum value or common alias."""
    if isinstance(value, EntityKind):
        return value
    key = value.strip().lower().replace('-', '_')
    if key in KIND_ALIASES:
        return KIND_ALIASES[key]
    try:
        return EntityKind(key)
    except ValueError:
        raise ValueError(f"Unknown entity kind: {value}") from None
