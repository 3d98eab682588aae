"""Response models for the FlutterFlow project API."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class Project(BaseModel):
    """A project entry from ``listProjects``."""

    model_config = ConfigDict(extra="allow")

    projectId: str
    name: str
    description: str | None = None
    metadata: Any | None = None


class ProjectsResponse(BaseModel):
    entries: list[Project]


class FileNamesResponse(BaseModel):
    fileNames: list[str]


class ValidationResult(BaseModel):
    """Outcome of ``validateProjectYaml``. Missing lists default to empty."""

    valid: bool
    errors: list[str] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)


class UpdateResponse(BaseModel):
    """Outcome of ``updateProjectByYaml``. Extra fields are kept."""

    model_config = ConfigDict(extra="allow")

    success: bool | None = None
    message: str | None = None
    commitId: str | None = None
