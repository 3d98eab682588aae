"""Bundle codec for FlutterFlow project YAML archives.

A bundle is the base64 text of a ZIP archive whose entries are YAML
documents. Decoding yields a document mapping of ``path -> parsed document``;
encoding turns such a mapping back into a bundle.
"""
import base64
import binascii
import io
import logging
import zipfile
import zlib

import yaml

from flutterflow_yaml.domain.constants import DOCUMENT_EXTENSION
from flutterflow_yaml.domain.models import DocumentMapping

logger = logging.getLogger(__name__)


class BundleError(Exception):
    """Base error for bundle encoding and decoding."""
    pass


class DecodeError(BundleError):
    """Error decoding a bundle."""

    def __init__(self, message: str, blob_size: int, entry: str | None = None):
        self.blob_size = blob_size
        self.entry = entry
        detail = f"{message} (bundle size: {blob_size} chars"
        if entry:
            detail += f", entry: {entry}"
        super().__init__(detail + ")")


class EncodeError(BundleError):
    """Error encoding a document mapping."""

    def __init__(self, message: str, path: str | None = None):
        self.path = path
        super().__init__(f"{message} (path: {path})" if path else message)


class _NoAliasDumper(yaml.SafeDumper):
    """Safe dumper that never emits anchors for shared sub-documents."""

    def ignore_aliases(self, data):
        return True


class BundleCodec:
    """Converts between bundles and document mappings."""

    def __init__(self, compression: int = zipfile.ZIP_DEFLATED):
        self.compression = compression

    def decode(self, blob: str) -> DocumentMapping:
        """Decode a base64 ZIP bundle into a document mapping.

        Only non-directory entries ending in ``.yaml`` are parsed; anything
        else in the archive is skipped. A failure anywhere aborts the whole
        decode.
        """
        blob_size = len(blob)
        try:
            raw = base64.b64decode(''.join(blob.split()), validate=True)
        except (binascii.Error, ValueError) as e:
            raise DecodeError(f"Invalid base64: {e}", blob_size) from e

        try:
            archive = zipfile.ZipFile(io.BytesIO(raw), 'r')
        except (zipfile.BadZipFile, ValueError, NotImplementedError, UnicodeDecodeError, EOFError) as e:
            raise DecodeError(f"Invalid archive: {e}", blob_size) from e

        documents: DocumentMapping = {}
        with archive:
            for info in archive.infolist():
                if info.is_dir() or not info.filename.endswith(DOCUMENT_EXTENSION):
                    continue
                try:
                    content = archive.read(info).decode('utf-8')
                    documents[info.filename] = yaml.safe_load(content)
                except (zipfile.BadZipFile, UnicodeDecodeError, yaml.YAMLError) as e:
                    raise DecodeError(f"Failed to read entry: {e}", blob_size, info.filename) from e
                # encrypted entries raise RuntimeError, bad header offsets ValueError
                except (zlib.error, EOFError, NotImplementedError, RuntimeError, ValueError) as e:
                    raise DecodeError(f"Corrupt archive entry: {e}", blob_size, info.filename) from e

        logger.debug("Decoded %d documents from %d-char bundle", len(documents), blob_size)
        return documents

    def encode(self, documents: DocumentMapping) -> str:
        """Encode a document mapping into a base64 ZIP bundle."""
        buffer = io.BytesIO()
        with zipfile.ZipFile(buffer, 'w', compression=self.compression) as archive:
            for path, document in documents.items():
                archive.writestr(path, self.dump_document(document, path))

        blob = base64.b64encode(buffer.getvalue()).decode('ascii')
        logger.debug("Encoded %d documents into %d-char bundle", len(documents), len(blob))
        return blob

    @staticmethod
    def dump_document(document, path: str | None = None) -> str:
        """Serialize one parsed document to YAML text."""
        try:
            return yaml.dump(
                document,
                Dumper=_NoAliasDumper,
                indent=2,
                width=float('inf'),
                allow_unicode=True,
                default_flow_style=False,
                sort_keys=False,
            )
        except (yaml.YAMLError, TypeError) as e:
            raise EncodeError(f"Cannot serialize document: {e}", path) from e


_default_codec = BundleCodec()


def decode(blob: str) -> DocumentMapping:
    """Decode a bundle with the default codec."""
    return _default_codec.decode(blob)


def encode(documents: DocumentMapping) -> str:
    """Encode a document mapping with the default codec."""
    return _default_codec.encode(documents)
