"""Preset stack profiles.

A profile is a fixed bundle of datastore kinds and ``(runtime, framework)``
pairs that seeds a :class:`~stackgen.models.Project` in one step.
"""

from __future__ import annotations

from dataclasses import dataclass

from stackgen.catalog import DatastoreKind, RuntimeKind, datastore_info, runtime_info
from stackgen.errors import ProfileNotFoundError
from stackgen.generator.ports import RUNTIME_PORT_STEP
from stackgen.models import Datastore, Project, Runtime


@dataclass(frozen=True)
class RuntimeChoice:
    """A runtime kind paired with the framework a profile selects for it."""

    kind: RuntimeKind
    framework: str


@dataclass(frozen=True)
class Profile:
    """A named preset bundle of kinds."""

    name: str
    description: str
    datastores: tuple[DatastoreKind, ...]
    runtimes: tuple[RuntimeChoice, ...]

    def components(self) -> list[str]:
        """Kind names in declaration order, datastores first."""
        return [ds.value for ds in self.datastores] + [rt.kind.value for rt in self.runtimes]


_PROFILES: tuple[Profile, ...] = (
    Profile(
        name="web-app",
        description="Full-stack web application (Node.js + Postgres + Redis)",
        datastores=(DatastoreKind.POSTGRES, DatastoreKind.REDIS),
        runtimes=(RuntimeChoice(RuntimeKind.NODE, "express"),),
    ),
    Profile(
        name="api",
        description="REST API backend (Go + Postgres)",
        datastores=(DatastoreKind.POSTGRES,),
        runtimes=(RuntimeChoice(RuntimeKind.GO, "stdlib"),),
    ),
    Profile(
        name="ml",
        description="Machine learning / data science (Python + Postgres + Redis)",
        datastores=(DatastoreKind.POSTGRES, DatastoreKind.REDIS),
        runtimes=(RuntimeChoice(RuntimeKind.PYTHON, "fastapi"),),
    ),
    Profile(
        name="fullstack",
        description="Complete microservices stack (Node + Go + Postgres + Redis + Neo4j)",
        datastores=(DatastoreKind.POSTGRES, DatastoreKind.REDIS, DatastoreKind.NEO4J),
        runtimes=(
            RuntimeChoice(RuntimeKind.NODE, "express"),
            RuntimeChoice(RuntimeKind.GO, "stdlib"),
        ),
    ),
    Profile(
        name="java-enterprise",
        description="Enterprise Java stack (Spring Boot + Postgres + Redis)",
        datastores=(DatastoreKind.POSTGRES, DatastoreKind.REDIS),
        runtimes=(RuntimeChoice(RuntimeKind.JAVA, "spring-boot"),),
    ),
    Profile(
        name="dotnet",
        description=".NET Core application (C# + SQL Server)",
        datastores=(DatastoreKind.MSSQL,),
        runtimes=(RuntimeChoice(RuntimeKind.CSHARP, "aspnetcore"),),
    ),
    Profile(
        name="rust-api",
        description="High-performance Rust API (Rust + Postgres + Redis)",
        datastores=(DatastoreKind.POSTGRES, DatastoreKind.REDIS),
        runtimes=(RuntimeChoice(RuntimeKind.RUST, "actix-web"),),
    ),
)


def available_profiles() -> list[Profile]:
    """Return every preset in listing order."""
    return list(_PROFILES)


def get_profile(name: str) -> Profile | None:
    """Return the profile called *name*, or ``None``."""
    for profile in _PROFILES:
        if profile.name == name:
            return profile
    return None


def resolve(name: str) -> Profile:
    """Return the profile called *name*.

    Raises:
        ProfileNotFoundError: Carrying the list of valid profile names.
    """
    profile = get_profile(name)
    if profile is None:
        raise ProfileNotFoundError(name, [p.name for p in _PROFILES])
    return profile


def materialize(profile: Profile, project_name: str, output_dir: str = ".") -> Project:
    """Expand *profile* into a concrete :class:`Project`.

    Datastores keep their catalog default port (a profile never lists the
    same kind twice, so they cannot collide with one another).  The N-th
    runtime gets ``default_port + N * 1000``.  Every runtime depends on all
    of the profile's datastores, in declaration order.
    """
    port_offset = 0
    datastores: list[Datastore] = []
    for kind in profile.datastores:
        info = datastore_info(kind)
        datastores.append(
            Datastore(
                kind=kind,
                name=kind.value,
                tag=info.default_tag,
                port=info.default_port + port_offset,
                internal_port=info.default_port,
            )
        )

    depends_on = [ds.name for ds in datastores]

    runtimes: list[Runtime] = []
    for index, choice in enumerate(profile.runtimes):
        info = runtime_info(choice.kind)
        name = f"{choice.kind.value}-app"
        runtimes.append(
            Runtime(
                kind=choice.kind,
                name=name,
                framework=choice.framework,
                port=info.default_port + index * RUNTIME_PORT_STEP,
                internal_port=info.default_port,
                build_context=name,
                depends_on=list(depends_on),
            )
        )

    return Project(
        name=project_name,
        output_dir=output_dir,
        datastores=datastores,
        runtimes=runtimes,
        profile=profile.name,
    )
