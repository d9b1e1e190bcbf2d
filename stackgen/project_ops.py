"""Adding datastores and runtimes to an existing project.

Both operations return a new :class:`~stackgen.models.Project`; the input is
left untouched, including when the addition is rejected.  Callers regenerate
the full output bundle afterwards.
"""

from __future__ import annotations

from pydantic import ValidationError

from stackgen.catalog import DatastoreKind, RuntimeKind, datastore_info, runtime_info
from stackgen.errors import (
    DuplicateComponentError,
    InvalidComponentError,
    UnknownFrameworkError,
)
from stackgen.generator.ports import (
    resolve_datastore_port,
    resolve_runtime_port,
    unique_runtime_name,
)
from stackgen.models import Datastore, Project, Runtime


def add_datastore(
    project: Project,
    kind: DatastoreKind,
    tag: str | None = None,
    port: int | None = None,
) -> Project:
    """Append a datastore of *kind* on the first free port.

    Args:
        project: The current project.
        kind: Datastore kind to add.
        tag: Image tag; defaults to the catalog tag.
        port: Preferred host port; defaults to the catalog port.  Probed
            upwards by one until unused.

    Raises:
        DuplicateComponentError: If the project already has a datastore of
            this kind or with this name.
        InvalidComponentError: If the probed port leaves the valid range.
    """
    kind = DatastoreKind(kind)
    info = datastore_info(kind)
    for ds in project.datastores:
        if ds.kind is kind or ds.name == kind.value:
            raise DuplicateComponentError(
                f"{kind.value} is already in the configuration"
            )

    try:
        datastore = Datastore(
            kind=kind,
            name=kind.value,
            tag=tag or info.default_tag,
            port=resolve_datastore_port(kind, project.datastores, port),
            internal_port=info.default_port,
        )
    except ValidationError as exc:
        raise InvalidComponentError(f"cannot add {kind.value}: {exc}") from exc
    return project.model_copy(
        update={"datastores": [*project.datastores, datastore]}
    )


def add_runtime(
    project: Project,
    kind: RuntimeKind,
    framework: str | None = None,
) -> Project:
    """Append a runtime of *kind*, deduplicating its name and port.

    The new runtime depends on every datastore present right now; datastores
    added later are not retro-fitted.

    Raises:
        UnknownFrameworkError: If *framework* is not offered for *kind*.
        InvalidComponentError: If the probed port leaves the valid range.
    """
    kind = RuntimeKind(kind)
    info = runtime_info(kind)
    chosen = framework or info.default_framework
    if chosen not in info.frameworks:
        raise UnknownFrameworkError(kind.value, chosen, list(info.frameworks))

    name = unique_runtime_name(kind, project.runtime_names())
    try:
        runtime = Runtime(
            kind=kind,
            name=name,
            framework=chosen,
            port=resolve_runtime_port(kind, project.runtimes),
            internal_port=info.default_port,
            build_context=name,
            depends_on=project.datastore_names(),
        )
    except ValidationError as exc:
        raise InvalidComponentError(f"cannot add {name}: {exc}") from exc
    return project.model_copy(
        update={"runtimes": [*project.runtimes, runtime]}
    )
