"""Port and instance-name collision avoidance for the add path.

All probes are greedy, order-dependent linear scans over a set of ports that
is built fresh for each call.  A port freed by removing an instance is not
reclaimed by earlier instances.
"""

from __future__ import annotations

from collections.abc import Iterable

from stackgen.catalog import DatastoreKind, RuntimeKind, datastore_info, runtime_info
from stackgen.models import Datastore, Runtime

DATASTORE_PORT_STEP = 1
RUNTIME_PORT_STEP = 1000


def probe_port(candidate: int, taken: set[int], step: int) -> int:
    """Return the first port at or after *candidate* (stepping by *step*) not in *taken*."""
    if step < 1:
        raise ValueError("step must be >= 1")
    port = candidate
    while port in taken:
        port += step
    return port


def resolve_datastore_port(
    kind: DatastoreKind,
    existing: Iterable[Datastore],
    requested: int | None = None,
) -> int:
    """Pick a host port for a new datastore.

    Starts from *requested* (or the kind's default port) and increments by
    one until the port is unused by *existing*.
    """
    taken = {ds.port for ds in existing}
    candidate = requested if requested is not None else datastore_info(kind).default_port
    return probe_port(candidate, taken, DATASTORE_PORT_STEP)


def resolve_runtime_port(
    kind: RuntimeKind,
    existing: Iterable[Runtime],
    requested: int | None = None,
) -> int:
    """Pick a host port for a new runtime, stepping by 1000 on collision."""
    taken = {rt.port for rt in existing}
    candidate = requested if requested is not None else runtime_info(kind).default_port
    return probe_port(candidate, taken, RUNTIME_PORT_STEP)


def unique_runtime_name(kind: RuntimeKind, existing_names: Iterable[str]) -> str:
    """Return ``<kind>-app``, or ``<kind>-app-N`` with the smallest free N >= 2."""
    names = set(existing_names)
    base = f"{RuntimeKind(kind).value}-app"
    name = base
    counter = 1
    while name in names:
        counter += 1
        name = f"{base}-{counter}"
    return name
