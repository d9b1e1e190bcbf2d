"""Docker Compose document model and YAML rendering.

Services are kept in insertion order (datastores first, then runtimes) so
that rendering an unchanged project always produces the same bytes.
"""

from __future__ import annotations

from typing import Any, Optional

import yaml
from pydantic import BaseModel, Field

COMPOSE_HEADER = """\
# Generated by stackgen - Local Development Environment Generator
# For local development and testing only.
# Review configurations before any production use.
#
# Usage:
#   docker compose up -d      # Start all services
#   docker compose down       # Stop all services
#   docker compose logs -f    # View logs
#

"""

RESTART_POLICY = "unless-stopped"


# ---------------------------------------------------------------------------
# Models
# ---------------------------------------------------------------------------

class ComposeHealth(BaseModel):
    """A service ``healthcheck`` block."""

    test: list[str] = Field(..., description="Probe command, e.g. ['CMD-SHELL', '...']")
    interval: str = Field(default="10s")
    timeout: str = Field(default="5s")
    retries: int = Field(default=5, ge=1)
    start_period: str = Field(default="10s")


class ComposeBuild(BaseModel):
    """A service ``build`` block."""

    context: str
    dockerfile: str = Field(default="Dockerfile")


class ComposeService(BaseModel):
    """One entry under ``services:``."""

    image: Optional[str] = None
    build: Optional[ComposeBuild] = None
    container_name: Optional[str] = None
    command: Optional[str] = None
    ports: list[str] = Field(default_factory=list)
    volumes: list[str] = Field(default_factory=list)
    environment: dict[str, str] = Field(default_factory=dict)
    env_file: list[str] = Field(default_factory=list)
    depends_on: list[str] = Field(default_factory=list)
    networks: list[str] = Field(default_factory=list)
    healthcheck: Optional[ComposeHealth] = None
    restart: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        """Compose mapping with unset and empty fields dropped."""
        return {
            key: value
            for key, value in self.model_dump(exclude_none=True).items()
            if value not in ([], {})
        }


class ComposeFile(BaseModel):
    """The whole ``docker-compose.yml`` document."""

    services: dict[str, ComposeService] = Field(default_factory=dict)
    volumes: dict[str, dict[str, Any]] = Field(default_factory=dict)
    networks: dict[str, dict[str, Any]] = Field(default_factory=dict)

    def add_bridge_network(self, name: str) -> None:
        self.networks[name] = {"driver": "bridge"}

    def add_volume(self, name: str) -> None:
        self.volumes.setdefault(name, {})

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "services": {name: svc.to_dict() for name, svc in self.services.items()},
        }
        if self.volumes:
            data["volumes"] = self.volumes
        if self.networks:
            data["networks"] = self.networks
        return data


# ---------------------------------------------------------------------------
# Rendering
# ---------------------------------------------------------------------------

def render_compose(compose: ComposeFile) -> str:
    """Serialise *compose* to YAML, prefixed with the disclosure header."""
    body = yaml.safe_dump(
        compose.to_dict(),
        sort_keys=False,
        default_flow_style=False,
        width=4096,
    )
    return COMPOSE_HEADER + body
