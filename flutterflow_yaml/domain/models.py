"""Shared data models used across the toolkit."""

from dataclasses import dataclass, field
from typing import Any

from flutterflow_yaml.domain.enums import EntityKind

# Document path -> parsed YAML document
DocumentMapping = dict[str, Any]


@dataclass
class KindDetectionResult:
    """Classification of a single document path."""

    path: str
    kind: EntityKind
    wrapper_key: str | None = None
    matched: bool = False


@dataclass
class UpdateResult:
    """Outcome of an update: the new mapping plus the paths it touched."""

    mapping: DocumentMapping
    matched_paths: list[str] = field(default_factory=list)

    @property
    def matched(self) -> bool:
        return bool(self.matched_paths)


class EntityNotFoundError(LookupError):
    """Raised by strict updates when no entity carries the identifier."""

    def __init__(self, kind: EntityKind, identifier: str):
        self.kind = kind
        self.identifier = identifier
        super().__init__(f"No {kind.value} named '{identifier}' found")
