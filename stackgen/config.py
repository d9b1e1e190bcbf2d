"""stackgen runtime settings.

Typed defaults for the command-line front end.  Settings are a Pydantic v2
model so they are validated at construction time; environment variables are
read by :meth:`Settings.from_env` and explicit CLI flags override them.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, ValidationError

from stackgen.errors import SettingsError
from stackgen.generator.bundle import COMPOSE_FILE
from stackgen.generator.passwords import DEFAULT_PASSWORD_LENGTH

DEFAULT_CONFIG_FILE = "stackgen.yaml"

_TRUTHY = {"1", "true", "yes", "on"}


class Settings(BaseModel):
    """Options shared by every stackgen command."""

    config_file: Path = Field(default=Path(DEFAULT_CONFIG_FILE))
    output_dir: Path = Field(default=Path("."))
    compose_file_name: str = Field(default=COMPOSE_FILE, min_length=1)
    password_length: int = Field(
        default=DEFAULT_PASSWORD_LENGTH,
        ge=12,
        le=128,
        multiple_of=2,
        description="Length of every generated credential",
    )
    force: bool = Field(default=False, description="Overwrite files without asking")
    dry_run: bool = Field(default=False, description="Print artifacts instead of writing them")

    @classmethod
    def from_env(cls) -> "Settings":
        """Build ``Settings`` from environment variables.

        Recognised variables (all optional):
            STACKGEN_CONFIG, STACKGEN_OUTPUT_DIR, STACKGEN_PASSWORD_LENGTH,
            STACKGEN_FORCE.

        Raises:
            SettingsError: If a variable holds an invalid value.
        """
        kwargs: dict[str, Any] = {}
        if os.environ.get("STACKGEN_CONFIG"):
            kwargs["config_file"] = Path(os.environ["STACKGEN_CONFIG"])
        if os.environ.get("STACKGEN_OUTPUT_DIR"):
            kwargs["output_dir"] = Path(os.environ["STACKGEN_OUTPUT_DIR"])
        if os.environ.get("STACKGEN_PASSWORD_LENGTH"):
            raw = os.environ["STACKGEN_PASSWORD_LENGTH"]
            try:
                kwargs["password_length"] = int(raw)
            except ValueError:
                raise SettingsError(
                    f"STACKGEN_PASSWORD_LENGTH must be an integer, got {raw!r}"
                ) from None
        if os.environ.get("STACKGEN_FORCE"):
            kwargs["force"] = os.environ["STACKGEN_FORCE"].strip().lower() in _TRUTHY
        try:
            return cls(**kwargs)
        except ValidationError as exc:
            raise SettingsError(f"invalid settings from environment: {exc}") from exc
