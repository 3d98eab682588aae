"""
FlutterFlow project API client.

Provides a uniform interface to the remote project service: listing
projects and their files, downloading a project's YAML bundle, and
validating or submitting a modified bundle.
"""

from __future__ import annotations

import json
import logging
import os
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any
from urllib.error import HTTPError, URLError
from urllib.request import Request, urlopen

from pydantic import ValidationError

from mcp_server.models import (
    FileNamesResponse,
    Project,
    ProjectsResponse,
    UpdateResponse,
    ValidationResult,
)

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://api.flutterflow.io/v2"
DEFAULT_TIMEOUT = 30.0


class FlutterFlowAPIError(Exception):
    """A remote call failed or returned an unexpected payload."""

    def __init__(self, message: str, status: int | None = None):
        self.status = status
        super().__init__(message)


@dataclass
class ClientConfig:
    """Connection settings for the project API."""

    token: str = field(default="", repr=False)
    base_url: str = DEFAULT_BASE_URL
    timeout: float = DEFAULT_TIMEOUT

    @classmethod
    def from_env(cls) -> ClientConfig:
        return cls(
            token=os.environ.get("FLUTTERFLOW_API_TOKEN", ""),
            base_url=os.environ.get("FLUTTERFLOW_API_BASE_URL", "") or DEFAULT_BASE_URL,
        )


class ProjectService(ABC):
    """Abstract interface to the remote project service."""

    @abstractmethod
    def list_projects(self) -> list[Project]:
        """Return all projects visible to the account."""

    @abstractmethod
    def get_project_files(self, project_id: str) -> list[str]:
        """Return the YAML file names of a project."""

    @abstractmethod
    def download_project_yaml(self, project_id: str, file_names: list[str] | None = None) -> str:
        """Return the project's bundle (base64 ZIP of YAML files)."""

    @abstractmethod
    def validate_project_yaml(self, project_id: str, yaml_content: str) -> ValidationResult:
        """Ask the service to validate a bundle without applying it."""

    @abstractmethod
    def update_project_yaml(self, project_id: str, yaml_content: str,
                            commit_message: str | None = None) -> UpdateResponse:
        """Apply a bundle to the project."""

    def get_project_by_name(self, project_name: str) -> Project | None:
        """Find a project by case-insensitive exact name."""
        wanted = project_name.lower()
        for project in self.list_projects():
            if project.name.lower() == wanted:
                return project
        return None

    def get_project_id_by_name(self, project_name: str) -> str | None:
        project = self.get_project_by_name(project_name)
        return project.projectId if project else None


class HttpProjectService(ProjectService):
    """Talks to the FlutterFlow API over HTTPS with a bearer token."""

    def __init__(self, config: ClientConfig):
        if not config.token:
            raise ValueError("FLUTTERFLOW_API_TOKEN environment variable is required")
        self._config = config
        self._base_url = config.base_url.rstrip("/")

    def _headers(self) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {self._config.token}",
            "Content-Type": "application/json",
            "Accept": "application/json",
        }

    def _request(self, operation: str, method: str, endpoint: str,
                 body: dict[str, Any] | None = None) -> Any:
        """Send a request and return the decoded JSON body (or raw text)."""
        url = f"{self._base_url}{endpoint}"
        data = json.dumps(body).encode("utf-8") if body is not None else None
        req = Request(url, data=data, headers=self._headers(), method=method)
        logger.debug("%s %s", method, url)
        try:
            with urlopen(req, timeout=self._config.timeout) as resp:
                raw = resp.read()
        except HTTPError as e:
            logger.warning("%s failed with HTTP %s", operation, e.code)
            raise FlutterFlowAPIError(
                f"Failed to {operation}: {self._http_error_message(e)}", status=e.code,
            ) from e
        except (URLError, TimeoutError) as e:
            logger.warning("%s failed: %s", operation, e)
            raise FlutterFlowAPIError(f"Failed to {operation}: {getattr(e, 'reason', e)}") from e

        try:
            text = raw.decode("utf-8")
        except UnicodeDecodeError as e:
            raise FlutterFlowAPIError(f"Failed to {operation}: response is not valid UTF-8") from e
        try:
            return json.loads(text)
        except json.JSONDecodeError:
            return text

    @staticmethod
    def _http_error_message(error: HTTPError) -> str:
        """Prefer the body's ``message``, then ``error``, then the status line."""
        try:
            payload = json.loads(error.read().decode("utf-8"))
        except (ValueError, OSError, AttributeError):
            payload = None
        if isinstance(payload, dict):
            for key in ("message", "error"):
                if payload.get(key):
                    return str(payload[key])
        return f"{error.code}: {error.reason}"

    @staticmethod
    def _parse(operation: str, model, payload: Any):
        try:
            return model.model_validate(payload)
        except ValidationError as e:
            raise FlutterFlowAPIError(f"Failed to {operation}: unexpected response: {e}") from e

    def list_projects(self) -> list[Project]:
        op = "list projects"
        payload = self._request(op, "GET", "/l/listProjects")
        return self._parse(op, ProjectsResponse, payload).entries

    def get_project_files(self, project_id: str) -> list[str]:
        op = "get project files"
        payload = self._request(op, "POST", "/listPartitionedFileNames", {"projectId": project_id})
        return self._parse(op, FileNamesResponse, payload).fileNames

    def download_project_yaml(self, project_id: str, file_names: list[str] | None = None) -> str:
        op = "download project YAML"
        body: dict[str, Any] = {"projectId": project_id}
        if file_names:
            body["fileNames"] = file_names
        payload = self._request(op, "POST", "/projectYamls", body)
        if isinstance(payload, str):
            return payload
        if isinstance(payload, dict) and isinstance(payload.get("content"), str):
            return payload["content"]
        raise FlutterFlowAPIError(f"Failed to {op}: Unexpected response format")

    def validate_project_yaml(self, project_id: str, yaml_content: str) -> ValidationResult:
        op = "validate project YAML"
        payload = self._request(op, "POST", "/validateProjectYaml", {
            "projectId": project_id,
            "yamlContent": yaml_content,
        })
        return self._parse(op, ValidationResult, payload)

    def update_project_yaml(self, project_id: str, yaml_content: str,
                            commit_message: str | None = None) -> UpdateResponse:
        op = "update project YAML"
        body: dict[str, Any] = {"projectId": project_id, "yamlContent": yaml_content}
        if commit_message:
            body["commitMessage"] = commit_message
        payload = self._request(op, "POST", "/updateProjectByYaml", body)
        if not isinstance(payload, dict):
            payload = {"message": str(payload)}
        return self._parse(op, UpdateResponse, payload)
