"""Pydantic v2 models for the declarative project description.

A :class:`Project` names the stack, where its artifacts go, and the ordered
datastore and runtime instances it contains.  It is the only input of the
artifact generator and the document persisted as ``stackgen.yaml``.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Optional

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator, model_validator

from stackgen.catalog import (
    DatastoreKind,
    RuntimeKind,
    datastore_info,
    runtime_info,
)
from stackgen.errors import ConfigDecodeError, UnknownFrameworkError


# ---------------------------------------------------------------------------
# Instances
# ---------------------------------------------------------------------------

class Datastore(BaseModel):
    """A configured database or cache instance."""

    kind: DatastoreKind = Field(..., description="Catalog kind")
    name: str = Field(..., min_length=1, description="Service name, defaults to the kind")
    tag: str = Field(..., min_length=1, description="Image version tag")
    port: int = Field(..., ge=1, le=65535, description="Port exposed on the host")
    internal_port: int = Field(..., ge=1, le=65535, description="Canonical port inside the container")

    @model_validator(mode="before")
    @classmethod
    def _fill_catalog_defaults(cls, data: Any) -> Any:
        if not isinstance(data, dict) or "kind" not in data:
            return data
        info = datastore_info(DatastoreKind(data["kind"]))
        filled = dict(data)
        filled.setdefault("name", info.kind.value)
        filled.setdefault("tag", info.default_tag)
        filled.setdefault("port", info.default_port)
        filled.setdefault("internal_port", info.default_port)
        return filled

    @property
    def volume_name(self) -> str:
        """The persistent-data volume owned by this instance."""
        return f"{self.name}-data"

    @property
    def auxiliary_volumes(self) -> list[str]:
        """Extra named volumes beyond the data volume (graph logs)."""
        if self.kind is DatastoreKind.NEO4J:
            return [f"{self.name}-logs"]
        return []

    @property
    def volumes(self) -> list[str]:
        return [self.volume_name, *self.auxiliary_volumes]


class Runtime(BaseModel):
    """A configured application container built from source."""

    kind: RuntimeKind = Field(..., description="Catalog kind")
    name: str = Field(..., min_length=1, description="Service name, e.g. 'node-app'")
    framework: str = Field(..., description="Framework chosen from the kind's list")
    port: int = Field(..., ge=1, le=65535, description="Port exposed on the host")
    internal_port: int = Field(..., ge=1, le=65535, description="Canonical port inside the container")
    build_context: str = Field(..., min_length=1, description="Directory holding the source and Dockerfile")
    dockerfile: str = Field(default="Dockerfile")
    depends_on: list[str] = Field(
        default_factory=list,
        description="Datastore names present when the runtime was added",
    )

    @model_validator(mode="before")
    @classmethod
    def _fill_catalog_defaults(cls, data: Any) -> Any:
        if not isinstance(data, dict) or "kind" not in data:
            return data
        info = runtime_info(RuntimeKind(data["kind"]))
        filled = dict(data)
        filled.setdefault("name", f"{info.kind.value}-app")
        if not filled.get("framework"):
            filled["framework"] = info.default_framework
        filled.setdefault("port", info.default_port)
        filled.setdefault("internal_port", info.default_port)
        filled.setdefault("build_context", filled["name"])
        return filled

    @model_validator(mode="after")
    def _check_framework(self) -> "Runtime":
        info = runtime_info(self.kind)
        if self.framework not in info.frameworks:
            raise UnknownFrameworkError(
                self.kind.value, self.framework, list(info.frameworks)
            )
        return self


# ---------------------------------------------------------------------------
# Project
# ---------------------------------------------------------------------------

class Project(BaseModel):
    """The declarative description of one local development stack."""

    name: str = Field(..., min_length=1, description="Prefix for every derived resource name")
    output_dir: str = Field(default=".", description="Directory the artifacts are written to")
    datastores: list[Datastore] = Field(default_factory=list)
    runtimes: list[Runtime] = Field(default_factory=list)
    profile: Optional[str] = Field(default=None, description="Preset the project was seeded from")

    @field_validator("name")
    @classmethod
    def _strip_name(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("project name must not be blank")
        return value

    @model_validator(mode="after")
    def _check_unique_names(self) -> "Project":
        for label, names in (
            ("datastore", [ds.name for ds in self.datastores]),
            ("runtime", [rt.name for rt in self.runtimes]),
        ):
            seen: set[str] = set()
            for name in names:
                if name in seen:
                    raise ValueError(f"duplicate {label} name: {name}")
                seen.add(name)
        return self

    # -- Convenience accessors ---------------------------------------------

    @property
    def network_name(self) -> str:
        return f"{self.name}-network"

    def datastore_names(self) -> list[str]:
        return [ds.name for ds in self.datastores]

    def runtime_names(self) -> list[str]:
        return [rt.name for rt in self.runtimes]

    # -- Serialisation -----------------------------------------------------

    def to_yaml(self) -> str:
        """Render the project as a ``stackgen.yaml`` document."""
        data = self.model_dump(mode="json", exclude_none=True)
        return yaml.safe_dump(data, sort_keys=False, default_flow_style=False)

    @classmethod
    def from_yaml(cls, text: str, source: str = "") -> "Project":
        """Decode a ``stackgen.yaml`` document.

        Raises:
            ConfigDecodeError: If the text is not YAML, is not a mapping, or
                does not describe a valid project.
        """
        try:
            data = yaml.safe_load(text)
        except yaml.YAMLError as exc:
            raise ConfigDecodeError(f"invalid YAML: {exc}", source) from exc
        if not isinstance(data, dict):
            raise ConfigDecodeError("expected a mapping at the top level", source)
        try:
            return cls.model_validate(data)
        except (ValidationError, ValueError) as exc:
            raise ConfigDecodeError(f"invalid project definition: {exc}", source) from exc


def save_project(project: Project, path: str | Path) -> Path:
    """Write *project* to *path* as YAML and return the resolved path."""
    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(project.to_yaml(), encoding="utf-8")
    return target


def load_project(path: str | Path) -> Project:
    """Read a previously saved project document.

    Raises:
        ConfigDecodeError: If the file is missing or cannot be decoded.
    """
    source = Path(path)
    try:
        raw = source.read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        raise ConfigDecodeError("config file not found", str(source)) from exc
    return Project.from_yaml(raw, str(source))
