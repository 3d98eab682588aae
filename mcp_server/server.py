"""
FlutterFlow MCP Server.

Exposes FlutterFlow project configuration (components, pages, custom code,
database collections, app state) to LLM clients via the Model Context
Protocol, and lets them push validated YAML changes back to the project.

Usage:
    python -m mcp_server.server [--token TOKEN] [--base-url URL] [--timeout SECONDS]

    FLUTTERFLOW_API_TOKEN is required unless --token is given.
    FLUTTERFLOW_API_BASE_URL optionally overrides the API endpoint.
"""

from __future__ import annotations

import logging
import sys
from typing import Any, Callable

from mcp.server.fastmcp import FastMCP

from flutterflow_yaml import mutator
from flutterflow_yaml.bundle_codec import decode, encode
from flutterflow_yaml.domain.models import DocumentMapping
from flutterflow_yaml.extractor_registry import (
    extract_app_state,
    extract_components,
    extract_custom_code,
    extract_database_collections,
    extract_pages,
)
from mcp_server.flutterflow_client import ClientConfig, HttpProjectService, ProjectService

logger = logging.getLogger(__name__)

# ── Globals ─────────────────────────────────────────────────────────────

_service: ProjectService | None = None
mcp = FastMCP("flutterflow")


def _project_service() -> ProjectService:
    if _service is None:
        raise RuntimeError("Project service not initialized")
    return _service


def _resolve_project_id(project_id: str | None, project_name: str | None) -> str:
    """Use the given id, or look the project up by case-insensitive name."""
    if project_id:
        return project_id
    if project_name:
        resolved = _project_service().get_project_id_by_name(project_name)
        if not resolved:
            raise ValueError(f"Project not found: {project_name}")
        return resolved
    raise ValueError("Either project_id or project_name must be provided")


def _load_documents(project_id: str) -> DocumentMapping:
    return decode(_project_service().download_project_yaml(project_id))


def _push_change(project_id: str, change: Callable[[DocumentMapping], DocumentMapping],
                 commit_message: str | None) -> dict:
    """Download, mutate, re-encode and submit a project's YAML bundle."""
    ds = _project_service()
    documents = change(_load_documents(project_id))
    result = ds.update_project_yaml(project_id, encode(documents), commit_message)
    return result.model_dump(exclude_none=True)


# ── Tools: projects ─────────────────────────────────────────────────────


@mcp.tool()
def list_projects() -> list[dict]:
    """List all FlutterFlow projects in your account.

    Call this first to discover project ids and names.
    """
    return [p.model_dump(exclude_none=True) for p in _project_service().list_projects()]


@mcp.tool()
def get_project_by_name(project_name: str) -> dict:
    """Find a FlutterFlow project by its name and get project details.

    Args:
        project_name: Project name (case-insensitive exact match).
    """
    project = _project_service().get_project_by_name(project_name)
    if project is None:
        raise ValueError(f"Project not found: {project_name}")
    return project.model_dump(exclude_none=True)


@mcp.tool()
def get_project_files(project_id: str | None = None, project_name: str | None = None) -> list[str]:
    """Get the list of YAML files in a FlutterFlow project.

    Args:
        project_id: The FlutterFlow project ID.
        project_name: Alternative to project_id; case-insensitive project name.
    """
    return _project_service().get_project_files(_resolve_project_id(project_id, project_name))


@mcp.tool()
def download_project_yaml(project_id: str | None = None, project_name: str | None = None,
                          file_names: list[str] | None = None) -> str:
    """Download a project's YAML configuration as a base64-encoded ZIP.

    Args:
        project_id: The FlutterFlow project ID.
        project_name: Alternative to project_id; case-insensitive project name.
        file_names: Optional specific files to download. Defaults to all files.
    """
    return _project_service().download_project_yaml(
        _resolve_project_id(project_id, project_name), file_names,
    )


# ── Tools: reading entities ─────────────────────────────────────────────


@mcp.tool()
def get_components(project_id: str | None = None, project_name: str | None = None) -> list[dict]:
    """Extract and list all custom components from a FlutterFlow project.

    Args:
        project_id: The FlutterFlow project ID.
        project_name: Alternative to project_id; case-insensitive project name.
    """
    return extract_components(_load_documents(_resolve_project_id(project_id, project_name)))


@mcp.tool()
def get_pages(project_id: str | None = None, project_name: str | None = None) -> list[dict]:
    """Extract and list all pages (with routes, widgets and actions).

    Args:
        project_id: The FlutterFlow project ID.
        project_name: Alternative to project_id; case-insensitive project name.
    """
    return extract_pages(_load_documents(_resolve_project_id(project_id, project_name)))


@mcp.tool()
def get_custom_code(project_id: str | None = None, project_name: str | None = None) -> dict:
    """Extract all custom code: actions, functions and widgets.

    Args:
        project_id: The FlutterFlow project ID.
        project_name: Alternative to project_id; case-insensitive project name.
    """
    return extract_custom_code(_load_documents(_resolve_project_id(project_id, project_name)))


@mcp.tool()
def get_database_collections(project_id: str | None = None, project_name: str | None = None) -> list[dict]:
    """Extract database collections with their fields and indexes.

    Args:
        project_id: The FlutterFlow project ID.
        project_name: Alternative to project_id; case-insensitive project name.
    """
    return extract_database_collections(_load_documents(_resolve_project_id(project_id, project_name)))


@mcp.tool()
def get_app_state(project_id: str | None = None, project_name: str | None = None) -> dict | None:
    """Extract app state variables, data types and constants.

    Returns null when the project defines no app state.

    Args:
        project_id: The FlutterFlow project ID.
        project_name: Alternative to project_id; case-insensitive project name.
    """
    return extract_app_state(_load_documents(_resolve_project_id(project_id, project_name)))


# ── Tools: changing entities ────────────────────────────────────────────


@mcp.tool()
def update_component(component_name: str, updates: dict[str, Any], project_id: str | None = None,
                     project_name: str | None = None, commit_message: str | None = None) -> dict:
    """Update a component's definition and push the change.

    Fields in `updates` replace like-named top-level fields of the component
    definition; other fields are kept. An unknown component name leaves the
    project unchanged.

    Args:
        component_name: Component name (or its file name without extension).
        updates: Top-level definition fields to set.
        project_id: The FlutterFlow project ID.
        project_name: Alternative to project_id; case-insensitive project name.
        commit_message: Optional commit message.
    """
    pid = _resolve_project_id(project_id, project_name)
    return _push_change(pid, lambda docs: mutator.update_component(docs, component_name, updates), commit_message)


@mcp.tool()
def update_page(page_name: str, updates: dict[str, Any], project_id: str | None = None,
                project_name: str | None = None, commit_message: str | None = None) -> dict:
    """Update a page's definition and push the change.

    Args:
        page_name: Page name (or its file name without extension).
        updates: Top-level definition fields to set.
        project_id: The FlutterFlow project ID.
        project_name: Alternative to project_id; case-insensitive project name.
        commit_message: Optional commit message.
    """
    pid = _resolve_project_id(project_id, project_name)
    return _push_change(pid, lambda docs: mutator.update_page(docs, page_name, updates), commit_message)


@mcp.tool()
def add_custom_action(action_name: str, action_definition: dict[str, Any], project_id: str | None = None,
                      project_name: str | None = None, commit_message: str | None = None) -> dict:
    """Add (or replace) a custom action, including its code and parameters.

    Args:
        action_name: Name of the custom action.
        action_definition: Definition fields, e.g. code and parameters.
        project_id: The FlutterFlow project ID.
        project_name: Alternative to project_id; case-insensitive project name.
        commit_message: Optional commit message.
    """
    pid = _resolve_project_id(project_id, project_name)
    return _push_change(
        pid, lambda docs: mutator.add_custom_action(docs, action_name, action_definition), commit_message,
    )


@mcp.tool()
def add_custom_function(function_name: str, function_definition: dict[str, Any], project_id: str | None = None,
                        project_name: str | None = None, commit_message: str | None = None) -> dict:
    """Add (or replace) a custom function, including its code and parameters.

    Args:
        function_name: Name of the custom function.
        function_definition: Definition fields, e.g. code and parameters.
        project_id: The FlutterFlow project ID.
        project_name: Alternative to project_id; case-insensitive project name.
        commit_message: Optional commit message.
    """
    pid = _resolve_project_id(project_id, project_name)
    return _push_change(
        pid, lambda docs: mutator.add_custom_function(docs, function_name, function_definition), commit_message,
    )


@mcp.tool()
def add_database_collection(collection_name: str, collection_definition: dict[str, Any],
                            project_id: str | None = None, project_name: str | None = None,
                            commit_message: str | None = None) -> dict:
    """Add (or replace) a database collection, including fields and indexes.

    Args:
        collection_name: Name of the collection.
        collection_definition: Definition fields, e.g. fields and indexes.
        project_id: The FlutterFlow project ID.
        project_name: Alternative to project_id; case-insensitive project name.
        commit_message: Optional commit message.
    """
    pid = _resolve_project_id(project_id, project_name)
    return _push_change(
        pid, lambda docs: mutator.add_database_collection(docs, collection_name, collection_definition),
        commit_message,
    )


# ── Tools: raw bundles ──────────────────────────────────────────────────


@mcp.tool()
def validate_project_yaml(yaml_content: str, project_id: str | None = None,
                          project_name: str | None = None) -> dict:
    """Validate a YAML bundle before updating a project.

    Args:
        yaml_content: Base64-encoded ZIP containing the YAML files.
        project_id: The FlutterFlow project ID.
        project_name: Alternative to project_id; case-insensitive project name.
    """
    pid = _resolve_project_id(project_id, project_name)
    return _project_service().validate_project_yaml(pid, yaml_content).model_dump()


@mcp.tool()
def update_project_yaml(yaml_content: str, project_id: str | None = None, project_name: str | None = None,
                        commit_message: str | None = None) -> dict:
    """Update a project with a new YAML bundle.

    Args:
        yaml_content: Base64-encoded ZIP containing the YAML files.
        project_id: The FlutterFlow project ID.
        project_name: Alternative to project_id; case-insensitive project name.
        commit_message: Optional commit message.
    """
    pid = _resolve_project_id(project_id, project_name)
    result = _project_service().update_project_yaml(pid, yaml_content, commit_message)
    return result.model_dump(exclude_none=True)


# ── Entry point ─────────────────────────────────────────────────────────

def main():
    import argparse

    env = ClientConfig.from_env()

    parser = argparse.ArgumentParser(description="FlutterFlow MCP Server")
    parser.add_argument("--token", default=env.token, help="API token (default: $FLUTTERFLOW_API_TOKEN)")
    parser.add_argument("--base-url", default=env.base_url, help=f"API base URL (default: {env.base_url})")
    parser.add_argument("--timeout", type=float, default=env.timeout, help="Request timeout in seconds")
    parser.add_argument("--log-level", default="INFO", help="Logging level (default: INFO)")

    args = parser.parse_args()

    # stdout carries the MCP stdio transport
    logging.basicConfig(
        stream=sys.stderr,
        level=args.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    global _service
    try:
        _service = HttpProjectService(ClientConfig(token=args.token, base_url=args.base_url, timeout=args.timeout))
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    logger.info("FlutterFlow MCP Server running on stdio")
    mcp.run(transport="stdio")


if __name__ == "__main__":
    main()
