"""Jinja2 template rendering for build recipes and the ignore list.

Provides the TemplateRenderer class which loads Jinja2 templates from the
``stackgen/generator/templates/`` directory.  The template bodies are opaque
to the generator: it only chooses which one to render for a runtime kind and
supplies the framework, port and naming context.
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, StrictUndefined, select_autoescape

from stackgen.catalog import RuntimeKind


# ---------------------------------------------------------------------------
# Template directory discovery
# ---------------------------------------------------------------------------

_DEFAULT_TEMPLATE_DIR = Path(__file__).parent / "templates"

GITIGNORE_TEMPLATE = "gitignore.j2"


def dockerfile_template(kind: RuntimeKind) -> str:
    """Template path of the build recipe for a runtime kind."""
    return f"dockerfiles/{RuntimeKind(kind).value}.Dockerfile.j2"


# ---------------------------------------------------------------------------
# TemplateRenderer
# ---------------------------------------------------------------------------


class TemplateRenderer:
    """Renders Jinja2 templates for generated artifacts.

    Templates are ``.j2`` files loaded from a configurable template
    directory.  Templates are rendered with a context dictionary that
    typically contains the project name, the runtime instance name, the
    selected framework and the container port.
    """

    def __init__(self, template_dir: str | Path | None = None) -> None:
        if template_dir is None:
            template_dir = _DEFAULT_TEMPLATE_DIR
        self.template_dir = Path(template_dir)
        self.env = Environment(
            loader=FileSystemLoader(str(self.template_dir)),
            autoescape=select_autoescape([]),
            undefined=StrictUndefined,
            keep_trailing_newline=True,
            trim_blocks=True,
            lstrip_blocks=True,
        )
        self.env.filters["slugify"] = _slugify_filter

    # -- Single template rendering -----------------------------------------

    def render(self, template_path: str, context: dict[str, Any]) -> str:
        """Render a single template with the provided context.

        Args:
            template_path: Path relative to the template directory (e.g.
                ``"dockerfiles/go.Dockerfile.j2"``).
            context: Dictionary of variables available inside the template.

        Returns:
            The rendered template content as a string.
        """
        template = self.env.get_template(template_path)
        return template.render(**context)

    # -- Artifact helpers --------------------------------------------------

    def render_dockerfile(self, kind: RuntimeKind, context: dict[str, Any]) -> str:
        """Render the build recipe for a runtime of *kind*."""
        return self.render(dockerfile_template(kind), context)

    def render_gitignore(self) -> str:
        """Render the fixed ignore list written beside the compose file."""
        return self.render(GITIGNORE_TEMPLATE, {})


# ---------------------------------------------------------------------------
# Jinja2 custom filters
# ---------------------------------------------------------------------------

def _slugify_filter(value: str) -> str:
    """Convert a string to a URL/filename-safe slug."""
    slug = re.sub(r"[^a-z0-9]+", "-", value.lower().strip())
    return slug.strip("-")
