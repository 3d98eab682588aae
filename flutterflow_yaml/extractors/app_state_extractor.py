"""Extractor for the app state singleton."""

from typing import Any, Dict, Optional

from flutterflow_yaml.domain.constants import APP_STATE_PATHS
from flutterflow_yaml.domain.models import DocumentMapping


class AppStateExtractor:
    """Reads app-level state from the first reserved path that holds a document.

    Returns ``None`` when the project has no app state rather than an empty
    record.
    """

    SECTIONS = ('variables', 'dataTypes', 'constants')

    def extract(self, documents: DocumentMapping) -> Optional[Dict[str, Any]]:
        for path in APP_STATE_PATHS:
            document = documents.get(path)
            if isinstance(document, dict):
                return {
                    section: [] if document.get(section) is None else document[section]
                    for section in self.SECTIONS
                }
        return None
