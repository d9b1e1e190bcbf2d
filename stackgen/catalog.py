"""Static registry of the datastore and runtime kinds stackgen can generate.

The kind sets are closed: every member of :class:`DatastoreKind` and
:class:`RuntimeKind` has exactly one catalog entry, and listing order is
stable.  The first framework listed for a runtime is its implicit default.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from stackgen.errors import UnknownKindError


# ---------------------------------------------------------------------------
# Kind enumerations
# ---------------------------------------------------------------------------

class DatastoreKind(str, Enum):
    """Supported databases and caches."""
    POSTGRES = "postgres"
    MYSQL = "mysql"
    MSSQL = "mssql"
    NEO4J = "neo4j"
    REDIS = "redis"
    REDIS_STACK = "redis-stack"


class RuntimeKind(str, Enum):
    """Supported language runtimes."""
    GO = "go"
    NODE = "node"
    PYTHON = "python"
    JAVA = "java"
    RUST = "rust"
    CSHARP = "csharp"


# ---------------------------------------------------------------------------
# Catalog entries
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class DatastoreInfo:
    """Metadata for a datastore kind."""

    kind: DatastoreKind
    display_name: str
    description: str
    default_port: int
    default_tag: str
    edition: str


@dataclass(frozen=True)
class RuntimeInfo:
    """Metadata for a runtime kind."""

    kind: RuntimeKind
    display_name: str
    description: str
    default_port: int
    frameworks: tuple[str, ...]

    @property
    def default_framework(self) -> str:
        return self.frameworks[0]


_DATASTORES: dict[DatastoreKind, DatastoreInfo] = {
    DatastoreKind.POSTGRES: DatastoreInfo(
        kind=DatastoreKind.POSTGRES,
        display_name="PostgreSQL",
        description="Powerful open-source relational database",
        default_port=5432,
        default_tag="16-alpine",
        edition="Official Image",
    ),
    DatastoreKind.MYSQL: DatastoreInfo(
        kind=DatastoreKind.MYSQL,
        display_name="MySQL",
        description="Popular open-source relational database",
        default_port=3306,
        default_tag="8.0",
        edition="Official Image",
    ),
    DatastoreKind.MSSQL: DatastoreInfo(
        kind=DatastoreKind.MSSQL,
        display_name="SQL Server",
        description="Microsoft SQL Server (Developer Edition)",
        default_port=1433,
        default_tag="2022-latest",
        edition="Developer Edition - for development use only",
    ),
    DatastoreKind.NEO4J: DatastoreInfo(
        kind=DatastoreKind.NEO4J,
        display_name="Neo4j",
        description="Graph database for connected data",
        default_port=7474,
        default_tag="5",
        edition="Community Edition",
    ),
    DatastoreKind.REDIS: DatastoreInfo(
        kind=DatastoreKind.REDIS,
        display_name="Redis",
        description="In-memory data store and cache",
        default_port=6379,
        default_tag="7-alpine",
        edition="Community",
    ),
    DatastoreKind.REDIS_STACK: DatastoreInfo(
        kind=DatastoreKind.REDIS_STACK,
        display_name="Redis Stack",
        description="Redis with JSON, Search, TimeSeries modules",
        default_port=6379,
        default_tag="latest",
        edition="Community",
    ),
}

_RUNTIMES: dict[RuntimeKind, RuntimeInfo] = {
    RuntimeKind.GO: RuntimeInfo(
        kind=RuntimeKind.GO,
        display_name="Go",
        description="Fast, statically typed language",
        default_port=8080,
        frameworks=("stdlib", "gin", "fiber", "echo"),
    ),
    RuntimeKind.NODE: RuntimeInfo(
        kind=RuntimeKind.NODE,
        display_name="Node.js",
        description="JavaScript runtime for server-side",
        default_port=3000,
        frameworks=("express", "fastify", "nextjs", "nestjs"),
    ),
    RuntimeKind.PYTHON: RuntimeInfo(
        kind=RuntimeKind.PYTHON,
        display_name="Python",
        description="Versatile scripting language",
        default_port=8000,
        frameworks=("fastapi", "flask", "django"),
    ),
    RuntimeKind.JAVA: RuntimeInfo(
        kind=RuntimeKind.JAVA,
        display_name="Java",
        description="Enterprise-grade JVM language",
        default_port=8080,
        frameworks=("spring-boot", "quarkus", "micronaut"),
    ),
    RuntimeKind.RUST: RuntimeInfo(
        kind=RuntimeKind.RUST,
        display_name="Rust",
        description="Memory-safe systems language",
        default_port=8080,
        frameworks=("actix-web", "axum", "rocket"),
    ),
    RuntimeKind.CSHARP: RuntimeInfo(
        kind=RuntimeKind.CSHARP,
        display_name="C# / .NET",
        description="Microsoft .NET platform",
        default_port=5000,
        frameworks=("aspnetcore", "minimal-api"),
    ),
}


# ---------------------------------------------------------------------------
# Lookups
# ---------------------------------------------------------------------------

def all_datastore_kinds() -> list[DatastoreKind]:
    """Return every datastore kind in listing order."""
    return list(DatastoreKind)


def all_runtime_kinds() -> list[RuntimeKind]:
    """Return every runtime kind in listing order."""
    return list(RuntimeKind)


def datastore_info(kind: DatastoreKind) -> DatastoreInfo:
    return _DATASTORES[DatastoreKind(kind)]


def runtime_info(kind: RuntimeKind) -> RuntimeInfo:
    return _RUNTIMES[RuntimeKind(kind)]


def metadata(kind: DatastoreKind | RuntimeKind) -> DatastoreInfo | RuntimeInfo:
    """Return the catalog entry for either kind family.

    Looking up something outside the two enumerations is a programming error
    and raises ``TypeError``.
    """
    if isinstance(kind, DatastoreKind):
        return _DATASTORES[kind]
    if isinstance(kind, RuntimeKind):
        return _RUNTIMES[kind]
    raise TypeError(f"Not a catalog kind: {kind!r}")


def default_tag(kind: DatastoreKind) -> str:
    """Image tag used when a datastore is created without an explicit version."""
    return datastore_info(kind).default_tag


def default_framework(kind: RuntimeKind) -> str:
    return runtime_info(kind).default_framework


# ---------------------------------------------------------------------------
# Caller-side parsing
# ---------------------------------------------------------------------------

def parse_datastore_kind(value: str) -> DatastoreKind:
    """Convert user input such as ``"Postgres"`` to a :class:`DatastoreKind`.

    Raises:
        UnknownKindError: If *value* names no supported datastore.
    """
    try:
        return DatastoreKind(value.strip().lower())
    except ValueError:
        raise UnknownKindError(
            "datastore", value, [k.value for k in DatastoreKind]
        ) from None


def parse_runtime_kind(value: str) -> RuntimeKind:
    """Convert user input such as ``"node"`` to a :class:`RuntimeKind`.

    Raises:
        UnknownKindError: If *value* names no supported runtime.
    """
    try:
        return RuntimeKind(value.strip().lower())
    except ValueError:
        raise UnknownKindError(
            "runtime", value, [k.value for k in RuntimeKind]
        ) from None
