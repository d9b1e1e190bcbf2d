"""Shared pytest fixtures for the stackgen test suite.

Provides reusable fixtures for:
- Single-datastore and profile-based projects
- A template renderer bound to the packaged templates
- Temporary output directories
"""

from __future__ import annotations

from pathlib import Path

import pytest

from stackgen.catalog import DatastoreKind, RuntimeKind
from stackgen.generator.templates import TemplateRenderer
from stackgen.models import Datastore, Project, Runtime
from stackgen.profiles import materialize, resolve


# ---------------------------------------------------------------------------
# Projects
# ---------------------------------------------------------------------------

@pytest.fixture
def postgres_project() -> Project:
    """A project with a single PostgreSQL datastore and nothing else."""
    return Project(
        name="testproject",
        datastores=[Datastore(kind=DatastoreKind.POSTGRES)],
    )


@pytest.fixture
def fullstack_project() -> Project:
    """The ``fullstack`` profile: postgres, redis, neo4j, node and go."""
    return materialize(resolve("fullstack"), "shop")


@pytest.fixture
def every_kind_project() -> Project:
    """One instance of every datastore kind and every runtime kind."""
    datastores = [
        Datastore(kind=DatastoreKind.POSTGRES),
        Datastore(kind=DatastoreKind.MYSQL),
        Datastore(kind=DatastoreKind.MSSQL),
        Datastore(kind=DatastoreKind.NEO4J),
        Datastore(kind=DatastoreKind.REDIS),
        Datastore(kind=DatastoreKind.REDIS_STACK, port=6380),
    ]
    names = [ds.name for ds in datastores]
    runtimes = [
        Runtime(kind=RuntimeKind.GO, port=8080, depends_on=names),
        Runtime(kind=RuntimeKind.NODE, depends_on=names),
        Runtime(kind=RuntimeKind.PYTHON, depends_on=names),
        Runtime(kind=RuntimeKind.JAVA, port=9080, depends_on=names),
        Runtime(kind=RuntimeKind.RUST, port=10080, depends_on=names),
        Runtime(kind=RuntimeKind.CSHARP, depends_on=names),
    ]
    return Project(name="everything", datastores=datastores, runtimes=runtimes)


# ---------------------------------------------------------------------------
# Rendering
# ---------------------------------------------------------------------------

@pytest.fixture
def renderer() -> TemplateRenderer:
    """A renderer using the packaged templates."""
    return TemplateRenderer()


@pytest.fixture
def output_dir(tmp_path: Path) -> Path:
    """Empty directory for written artifacts (auto-cleanup)."""
    out = tmp_path / "out"
    out.mkdir()
    yield out
