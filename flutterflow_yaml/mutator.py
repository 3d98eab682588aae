"""
Structural mutations over a document mapping.

Every operation returns a new mapping and leaves its input untouched. The
returned mapping shares unaffected documents with the input; touched
documents are replaced by new dicts. Callers must not edit documents in place
when other holders of the original mapping exist.
"""

import logging
from typing import Any

from flutterflow_yaml.domain.constants import (
    COLLECTIONS_INDEX_KEY,
    DOCUMENT_EXTENSION,
    KIND_TO_FOLDER,
    WRAPPER_KEYS,
)
from flutterflow_yaml.domain.enums import EntityKind
from flutterflow_yaml.domain.models import DocumentMapping, EntityNotFoundError, UpdateResult
from flutterflow_yaml.kind_detector import KindDetector, derive_name

logger = logging.getLogger(__name__)

_detector = KindDetector()


def shallow_merge(base: Any, patch: dict[str, Any]) -> dict[str, Any]:
    """Merge ``patch`` over ``base`` one level deep.

    Top-level keys of ``patch`` replace like-named keys of ``base``; nested
    values are replaced whole, not merged. Keys only in ``base`` are kept.
    Neither argument is modified.
    """
    merged = dict(base) if isinstance(base, dict) else {}
    merged.update(patch or {})
    return merged


def _identity_matches(path: str, definition: dict[str, Any], identifier: str) -> bool:
    return definition.get('name') == identifier or derive_name(path) == identifier


def apply_update(documents: DocumentMapping, kind: EntityKind, identifier: str,
                 patch: dict[str, Any]) -> UpdateResult:
    """Shallow-merge ``patch`` into every entity of ``kind`` named ``identifier``.

    An entity matches when its wrapper's ``name`` or its filename stem equals
    ``identifier``. All matches are updated. Collections also match entries of
    the ``collections.yaml`` index by key.
    """
    if kind not in WRAPPER_KEYS:
        raise ValueError(f"Cannot update entities of kind {kind.value}")

    updated = dict(documents)
    matched_paths: list[str] = []

    for path, document in documents.items():
        detection = _detector.detect(path, document)
        if not detection.matched:
            continue

        if detection.kind == kind:
            definition = document[detection.wrapper_key]
            if _identity_matches(path, definition, identifier):
                updated[path] = {**document, detection.wrapper_key: shallow_merge(definition, patch)}
                matched_paths.append(path)

        elif kind == EntityKind.COLLECTION and detection.kind == EntityKind.COLLECTION_INDEX:
            entries = document[COLLECTIONS_INDEX_KEY]
            # extraction names index entries by str(key)
            keys = [key for key in entries if str(key) == identifier]
            if keys:
                new_entries = dict(entries)
                for key in keys:
                    new_entries[key] = shallow_merge(entries[key], patch)
                updated[path] = {**document, COLLECTIONS_INDEX_KEY: new_entries}
                matched_paths.append(path)

    if not matched_paths:
        logger.debug("No %s named %r; mapping unchanged", kind.value, identifier)
        return UpdateResult(dict(documents))

    return UpdateResult(updated, matched_paths)


def update_entity(documents: DocumentMapping, kind: EntityKind, identifier: str,
                  patch: dict[str, Any], strict: bool = False) -> DocumentMapping:
    """Return a mapping with ``patch`` merged into the named entity.

    A miss returns an equal mapping unless ``strict`` is set, in which case
    ``EntityNotFoundError`` is raised.
    """
    result = apply_update(documents, kind, identifier, patch)
    if strict and not result.matched:
        raise EntityNotFoundError(kind, identifier)
    return result.mapping


def entity_path(kind: EntityKind, name: str) -> str:
    """Canonical path for a new entity of ``kind``."""
    if kind not in KIND_TO_FOLDER:
        raise ValueError(f"Cannot add entities of kind {kind.value}")
    return f"{KIND_TO_FOLDER[kind]}/{name}{DOCUMENT_EXTENSION}"


def add_entity(documents: DocumentMapping, kind: EntityKind, name: str,
               definition: dict[str, Any] | None) -> DocumentMapping:
    """Insert a new entity at its canonical path, replacing any document there.

    The explicit ``name`` overrides a ``name`` field inside ``definition``.
    """
    path = entity_path(kind, name)
    body = {key: value for key, value in (definition or {}).items() if key != 'name'}
    if path in documents:
        logger.debug("Overwriting existing document at %s", path)
    return {**documents, path: {WRAPPER_KEYS[kind]: {'name': name, **body}}}


def update_component(documents: DocumentMapping, name: str, updates: dict[str, Any]) -> DocumentMapping:
    return update_entity(documents, EntityKind.COMPONENT, name, updates)


def update_page(documents: DocumentMapping, name: str, updates: dict[str, Any]) -> DocumentMapping:
    return update_entity(documents, EntityKind.PAGE, name, updates)


def add_custom_action(documents: DocumentMapping, name: str, definition: dict[str, Any]) -> DocumentMapping:
    return add_entity(documents, EntityKind.CUSTOM_ACTION, name, definition)


def add_custom_function(documents: DocumentMapping, name: str, definition: dict[str, Any]) -> DocumentMapping:
    return add_entity(documents, EntityKind.CUSTOM_FUNCTION, name, definition)


def add_database_collection(documents: DocumentMapping, name: str, definition: dict[str, Any]) -> DocumentMapping:
    return add_entity(documents, EntityKind.COLLECTION, name, definition)
