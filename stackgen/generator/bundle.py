"""In-memory staging of generated artifacts.

An :class:`OutputBundle` is built fresh by every generation call and is not
modified afterwards.  It can be previewed as text or persisted to a directory;
a failed write leaves the bundle untouched.
"""

from __future__ import annotations

import asyncio
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

from stackgen.errors import BundleWriteError
from stackgen.generator.compose import ComposeFile
from stackgen.generator.env import EnvVar

COMPOSE_FILE = "docker-compose.yml"
ENV_FILE = ".env"
ENV_EXAMPLE_FILE = ".env.example"
GITIGNORE_FILE = ".gitignore"
DOCKERFILE = "Dockerfile"


class OutputBundle(BaseModel):
    """Every text artifact generated for one project."""

    model_config = ConfigDict(frozen=True)

    compose: ComposeFile = Field(..., description="Structured orchestration document")
    env_vars: tuple[EnvVar, ...] = Field(default=(), description="Records behind both env files")
    compose_yaml: str
    env_file: str
    env_example: str
    gitignore: str
    dockerfiles: dict[str, str] = Field(
        default_factory=dict,
        description="Runtime instance name -> build recipe text",
    )

    def files(self, compose_name: str = COMPOSE_FILE) -> dict[str, str]:
        """Relative output path -> content, in write order."""
        result = {
            compose_name: self.compose_yaml,
            ENV_FILE: self.env_file,
            ENV_EXAMPLE_FILE: self.env_example,
            GITIGNORE_FILE: self.gitignore,
        }
        for name, content in self.dockerfiles.items():
            result[f"{name}/{DOCKERFILE}"] = content
        return result

    def preview(self, compose_name: str = COMPOSE_FILE) -> str:
        """Plain-text rendering of every file, for dry runs."""
        sections = [
            f"=== {path} ===\n{content}"
            for path, content in self.files(compose_name).items()
        ]
        return "\n".join(sections)

    async def write_to_dir(
        self,
        directory: str | Path,
        compose_name: str = COMPOSE_FILE,
    ) -> list[Path]:
        """Write every artifact below *directory*.

        Build recipes go into a subdirectory named after their runtime.

        Returns:
            The written paths, in write order.

        Raises:
            BundleWriteError: If a directory or file cannot be written.
        """
        root = Path(directory)
        written: list[Path] = []
        for rel, content in self.files(compose_name).items():
            out = root / rel
            try:
                await asyncio.to_thread(_write_file, out, content)
            except OSError as exc:
                raise BundleWriteError(f"failed to write {out}: {exc}", str(out)) from exc
            written.append(out)
        return written


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

def _write_file(path: Path, content: str) -> None:
    """Synchronous helper: create parent dirs and write content."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
