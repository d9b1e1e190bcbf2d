"""Environment-variable records and their two text projections.

The generator collects a single ordered list of :class:`EnvVar` records.
:func:`render_env` writes live values, single-quoting secrets;
:func:`render_env_example` writes the same keys with secrets replaced by
placeholders.
"""

from __future__ import annotations

from collections.abc import Iterable

from pydantic import BaseModel, ConfigDict, Field

ENV_HEADER = (
    "# Generated by stackgen - For local development only\n"
    "# WARNING: Do not commit this file to version control\n"
)

ENV_EXAMPLE_HEADER = (
    "# Environment variables for stackgen\n"
    "# Copy this file to .env and fill in the values\n"
)


class EnvVar(BaseModel):
    """A single environment variable destined for the ``.env`` files."""

    model_config = ConfigDict(frozen=True)

    key: str = Field(..., description="Variable name")
    value: str = Field(..., description="Live value written to .env")
    description: str = Field(default="", description="Comment line above the variable")
    secret: bool = Field(default=False, description="Redacted in .env.example")


def placeholder(key: str) -> str:
    """Placeholder token for a redacted variable, e.g. ``<your-redis-password>``."""
    return f"<your-{key.lower().replace('_', '-')}>"


def quote_secret(value: str) -> str:
    """Single-quote *value* so Compose reads it literally (no ``$`` interpolation)."""
    return "'" + value.replace("'", "\\'") + "'"


def _render(header: str, variables: Iterable[EnvVar], redact: bool) -> str:
    lines = [header]
    for var in variables:
        if var.description:
            lines.append(f"# {var.description}")
        if not var.secret:
            value = var.value
        elif redact:
            value = placeholder(var.key)
        else:
            value = quote_secret(var.value)
        lines.append(f"{var.key}={value}")
    return "\n".join(lines) + "\n"


def render_env(variables: Iterable[EnvVar]) -> str:
    """Render the secret-bearing ``.env`` document."""
    return _render(ENV_HEADER, variables, redact=False)


def render_env_example(variables: Iterable[EnvVar]) -> str:
    """Render the redacted ``.env.example`` document."""
    return _render(ENV_EXAMPLE_HEADER, variables, redact=True)
