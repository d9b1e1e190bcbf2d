"""Unit tests for env records and rendering (stackgen.generator.env)."""

from __future__ import annotations

import pytest

from stackgen.generator.env import (
    ENV_EXAMPLE_HEADER,
    ENV_HEADER,
    EnvVar,
    placeholder,
    quote_secret,
    render_env,
    render_env_example,
)

pytestmark = pytest.mark.unit


@pytest.fixture
def records() -> list[EnvVar]:
    return [
        EnvVar(key="REDIS_PASSWORD", value="abc123", description="Redis password", secret=True),
        EnvVar(key="NODE_ENV", value="development", description="Node environment (node-app)"),
        EnvVar(key="PLAIN", value="x"),
    ]


class TestPlaceholder:
    def test_format(self):
        assert placeholder("REDIS_PASSWORD") == "<your-redis-password>"

    def test_single_word(self):
        assert placeholder("TOKEN") == "<your-token>"


class TestRenderEnv:
    def test_header_and_values(self, records):
        text = render_env(records)
        assert text.startswith(ENV_HEADER)
        assert "# Redis password\nREDIS_PASSWORD='abc123'\n" in text
        assert "NODE_ENV=development" in text

    def test_no_comment_without_description(self, records):
        lines = render_env(records).splitlines()
        index = lines.index("PLAIN=x")
        assert lines[index - 1] == "NODE_ENV=development"

    def test_secret_with_dollar_is_quoted(self):
        text = render_env([EnvVar(key="MSSQL_SA_PASSWORD", value="Pv9$hDR19Iv", secret=True)])
        assert "MSSQL_SA_PASSWORD='Pv9$hDR19Iv'\n" in text

    def test_quote_in_secret_is_escaped(self):
        assert quote_secret("a'b") == "'a\\'b'"

    def test_trailing_newline(self, records):
        assert render_env(records).endswith("PLAIN=x\n")

    def test_empty(self):
        assert render_env([]) == ENV_HEADER + "\n"


class TestRenderEnvExample:
    def test_secrets_redacted(self, records):
        text = render_env_example(records)
        assert text.startswith(ENV_EXAMPLE_HEADER)
        assert "REDIS_PASSWORD=<your-redis-password>" in text
        assert "abc123" not in text

    def test_public_values_kept(self, records):
        assert "NODE_ENV=development" in render_env_example(records)

    def test_same_keys_in_both(self, records):
        def keys(text: str) -> list[str]:
            return [
                line.split("=", 1)[0]
                for line in text.splitlines()
                if line and not line.startswith("#")
            ]

        assert keys(render_env(records)) == keys(render_env_example(records))
