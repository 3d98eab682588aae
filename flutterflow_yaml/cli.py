"""CLI for flutterflow-yaml."""

import argparse
import json
import os
import sys
from dataclasses import dataclass

import yaml

from flutterflow_yaml.bundle_codec import BundleCodec, BundleError
from flutterflow_yaml.domain.constants import DOCUMENT_EXTENSION, KIND_TO_FOLDER
from flutterflow_yaml.domain.models import DocumentMapping
from flutterflow_yaml.extractor_registry import (
    extract_app_state,
    extract_components,
    extract_custom_code,
    extract_database_collections,
    extract_pages,
)

EXTRACTORS = {
    'components': extract_components,
    'pages': extract_pages,
    'custom-code': extract_custom_code,
    'collections': extract_database_collections,
    'app-state': extract_app_state,
}


@dataclass
class UnpackResult:
    """Result summary of an unpack operation."""

    documents_written: int
    output_dir: str


def read_bundle(bundle_path: str) -> DocumentMapping:
    with open(bundle_path, encoding='utf-8') as f:
        return BundleCodec().decode(f.read())


def unpack_bundle(bundle_path: str, output_dir: str) -> UnpackResult:
    """Bundle file -> one YAML file per document under ``output_dir``."""
    documents = read_bundle(bundle_path)
    root = os.path.abspath(output_dir)

    for rel_path, document in documents.items():
        target = os.path.abspath(os.path.join(root, rel_path))
        if os.path.commonpath([root, target]) != root:
            raise ValueError(f"Entry escapes output directory: {rel_path}")
        os.makedirs(os.path.dirname(target), exist_ok=True)
        with open(target, 'w', encoding='utf-8') as f:
            f.write(BundleCodec.dump_document(document, rel_path))

    return UnpackResult(documents_written=len(documents), output_dir=output_dir)


def pack_directory(input_dir: str, output_path: str) -> int:
    """Every ``.yaml`` file under ``input_dir`` -> bundle file. Returns the document count."""
    documents: DocumentMapping = {}
    for root, dirs, files in os.walk(input_dir):
        dirs.sort()
        for file in sorted(files):
            if not file.endswith(DOCUMENT_EXTENSION):
                continue
            full_path = os.path.join(root, file)
            rel_path = os.path.relpath(full_path, input_dir).replace(os.sep, '/')
            with open(full_path, encoding='utf-8') as f:
                documents[rel_path] = yaml.safe_load(f)

    with open(output_path, 'w', encoding='utf-8') as f:
        f.write(BundleCodec().encode(documents))
    return len(documents)


def main(argv=None):
    parser = argparse.ArgumentParser(prog='flutterflow-yaml', description='FlutterFlow project YAML toolkit')
    subparsers = parser.add_subparsers(dest='command')

    unpack_parser = subparsers.add_parser('unpack', help='Decode a bundle into YAML files')
    unpack_parser.add_argument('bundle', help='File containing the base64 bundle')
    unpack_parser.add_argument('output', help='Output directory')

    pack_parser = subparsers.add_parser('pack', help='Encode a directory of YAML files into a bundle')
    pack_parser.add_argument('input', help='Directory containing YAML files')
    pack_parser.add_argument('output', help='Bundle file to write')

    extract_parser = subparsers.add_parser('extract', help='Print entities from a bundle as JSON')
    extract_parser.add_argument('kind', choices=sorted(EXTRACTORS), help='What to extract')
    extract_parser.add_argument('bundle', help='File containing the base64 bundle')
    extract_parser.add_argument('--no-pretty', action='store_true', help='Disable pretty printing')

    subparsers.add_parser('kinds', help='List entity kinds and their folders')

    args = parser.parse_args(argv)

    try:
        if args.command == 'unpack':
            result = unpack_bundle(args.bundle, args.output)
            print(f"Done! Wrote {result.documents_written} documents")
            print(f"Output: {result.output_dir}")

        elif args.command == 'pack':
            if not os.path.isdir(args.input):
                print(f"Error: {args.input} is not a directory", file=sys.stderr)
                sys.exit(1)
            count = pack_directory(args.input, args.output)
            print(f"Done! Packed {count} documents into {args.output}")

        elif args.command == 'extract':
            records = EXTRACTORS[args.kind](read_bundle(args.bundle))
            print(json.dumps(records, indent=None if args.no_pretty else 2, ensure_ascii=False, default=str))

        elif args.command == 'kinds':
            for kind, folder in KIND_TO_FOLDER.items():
                print(f"  {kind.value:<16} {folder}/")

        else:
            parser.print_help()

    except (OSError, ValueError, yaml.YAMLError, BundleError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == '__main__':
    main()
