"""stackgen artifact generator -- turns a Project into compose, env and Dockerfiles.

Quick usage::

    from stackgen.generator import ArtifactGenerator
    from stackgen.profiles import materialize, resolve

    project = materialize(resolve("web-app"), "shop")
    bundle = ArtifactGenerator(project).generate()
    print(bundle.compose_yaml)
"""

from stackgen.generator.bundle import OutputBundle
from stackgen.generator.engine import ArtifactGenerator, generate
from stackgen.generator.templates import TemplateRenderer

__all__ = [
    "ArtifactGenerator",
    "OutputBundle",
    "TemplateRenderer",
    "generate",
]
