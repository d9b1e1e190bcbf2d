"""Unit tests for the compose document model (stackgen.generator.compose)."""

from __future__ import annotations

import pytest
import yaml

from stackgen.generator.compose import (
    COMPOSE_HEADER,
    ComposeBuild,
    ComposeFile,
    ComposeHealth,
    ComposeService,
    render_compose,
)

pytestmark = pytest.mark.unit


class TestComposeService:
    def test_empty_fields_dropped(self):
        data = ComposeService(image="redis:7-alpine").to_dict()
        assert data == {"image": "redis:7-alpine"}

    def test_nested_blocks(self):
        service = ComposeService(
            build=ComposeBuild(context="./api"),
            healthcheck=ComposeHealth(test=["CMD", "true"], start_period="5s"),
            depends_on=["postgres"],
        )
        data = service.to_dict()
        assert data["build"] == {"context": "./api", "dockerfile": "Dockerfile"}
        assert data["healthcheck"]["start_period"] == "5s"
        assert data["healthcheck"]["retries"] == 5
        assert data["depends_on"] == ["postgres"]
        assert "image" not in data

    def test_key_order_follows_fields(self):
        service = ComposeService(
            image="postgres:16-alpine",
            container_name="p-postgres",
            ports=["5432:5432"],
            restart="unless-stopped",
        )
        assert list(service.to_dict()) == ["image", "container_name", "ports", "restart"]


class TestComposeFile:
    def test_network_and_volumes(self):
        compose = ComposeFile()
        compose.add_bridge_network("p-network")
        compose.add_volume("postgres-data")
        compose.add_volume("postgres-data")
        data = compose.to_dict()
        assert data["networks"] == {"p-network": {"driver": "bridge"}}
        assert data["volumes"] == {"postgres-data": {}}

    def test_empty_sections_omitted(self):
        assert ComposeFile().to_dict() == {"services": {}}


class TestRenderCompose:
    def test_header_then_yaml(self):
        compose = ComposeFile(services={"redis": ComposeService(image="redis:7-alpine")})
        text = render_compose(compose)
        assert text.startswith(COMPOSE_HEADER)
        assert yaml.safe_load(text) == {"services": {"redis": {"image": "redis:7-alpine"}}}

    def test_header_mentions_local_use(self):
        assert "For local development and testing only." in COMPOSE_HEADER

    def test_service_order_preserved(self):
        compose = ComposeFile()
        for name in ("zeta", "alpha", "mid"):
            compose.services[name] = ComposeService(image=f"{name}:latest")
        assert list(yaml.safe_load(render_compose(compose))["services"]) == ["zeta", "alpha", "mid"]

    def test_empty_volume_renders_as_mapping(self):
        compose = ComposeFile()
        compose.add_volume("data")
        assert "data: {}" in render_compose(compose)
