"""Artifact generation engine.

Turns a :class:`~stackgen.models.Project` into an
:class:`~stackgen.generator.bundle.OutputBundle`.  Generation is synchronous
and keeps no state between calls: two runs over the same project produce the
same compose document and the same env keys, differing only in freshly drawn
secrets.
"""

from __future__ import annotations

from stackgen.generator.bundle import OutputBundle
from stackgen.generator.compose import ComposeFile, render_compose
from stackgen.generator.env import EnvVar, render_env, render_env_example
from stackgen.generator.passwords import DEFAULT_PASSWORD_LENGTH
from stackgen.generator.services import (
    SynthesisContext,
    synthesize_datastore,
    synthesize_runtime,
)
from stackgen.generator.templates import TemplateRenderer
from stackgen.models import Project


class ArtifactGenerator:
    """Generates the compose file, env files, ignore list and Dockerfiles.

    Attributes:
        project: The project being rendered; never modified.
        renderer: Template renderer supplying build recipes and the ignore list.
        password_length: Length of every generated credential.
    """

    def __init__(
        self,
        project: Project,
        renderer: TemplateRenderer | None = None,
        password_length: int = DEFAULT_PASSWORD_LENGTH,
    ) -> None:
        self.project = project
        self.renderer = renderer or TemplateRenderer()
        self.password_length = password_length

    def generate(self) -> OutputBundle:
        """Run one full generation.

        Raises:
            RandomSourceError: If credentials cannot be drawn; no bundle is
                returned in that case.
        """
        project = self.project
        ctx = SynthesisContext(
            project_name=project.name,
            network=project.network_name,
            password_length=self.password_length,
        )

        compose = ComposeFile()
        compose.add_bridge_network(ctx.network)
        env_vars: list[EnvVar] = []
        dockerfiles: dict[str, str] = {}

        for ds in project.datastores:
            artifacts = synthesize_datastore(ds, ctx)
            compose.services[ds.name] = artifacts.service
            for volume in artifacts.volumes:
                compose.add_volume(volume)
            env_vars.extend(artifacts.env)

        for rt in project.runtimes:
            artifacts = synthesize_runtime(rt, ctx, self.renderer)
            compose.services[rt.name] = artifacts.service
            env_vars.extend(artifacts.env)
            dockerfiles[rt.name] = artifacts.dockerfile

        return OutputBundle(
            compose=compose,
            env_vars=tuple(env_vars),
            compose_yaml=render_compose(compose),
            env_file=render_env(env_vars),
            env_example=render_env_example(env_vars),
            gitignore=self.renderer.render_gitignore(),
            dockerfiles=dockerfiles,
        )


def generate(
    project: Project,
    renderer: TemplateRenderer | None = None,
    password_length: int = DEFAULT_PASSWORD_LENGTH,
) -> OutputBundle:
    """Convenience wrapper around :meth:`ArtifactGenerator.generate`."""
    return ArtifactGenerator(project, renderer, password_length).generate()
