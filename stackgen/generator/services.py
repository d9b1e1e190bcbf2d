"""Per-kind service synthesis.

Each datastore and runtime kind has its own builder function; the builders
are collected in dispatch tables keyed by kind and the tables are checked
against the kind enumerations at import time, so adding a kind without a
builder fails immediately.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field

from stackgen.catalog import DatastoreKind, RuntimeKind, datastore_info
from stackgen.generator.compose import (
    RESTART_POLICY,
    ComposeBuild,
    ComposeHealth,
    ComposeService,
)
from stackgen.generator.env import EnvVar
from stackgen.generator.passwords import (
    DEFAULT_PASSWORD_LENGTH,
    generate_password,
    generate_strong_password,
)
from stackgen.generator.templates import TemplateRenderer
from stackgen.models import Datastore, Runtime

COMMUNITY_SUFFIX = "-community"
# Secondary host ports sit at the canonical distance from the main host port.
NEO4J_BOLT_PORT = 7687
NEO4J_BOLT_OFFSET = NEO4J_BOLT_PORT - datastore_info(DatastoreKind.NEO4J).default_port
REDIS_INSIGHT_PORT = 8001
REDIS_INSIGHT_OFFSET = REDIS_INSIGHT_PORT - datastore_info(DatastoreKind.REDIS_STACK).default_port


# ---------------------------------------------------------------------------
# Shared types
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class SynthesisContext:
    """Project-wide values every builder needs."""

    project_name: str
    network: str
    password_length: int = DEFAULT_PASSWORD_LENGTH

    def container_name(self, instance: str) -> str:
        return f"{self.project_name}-{instance}"


@dataclass
class DatastoreArtifacts:
    """Output of a datastore builder."""

    service: ComposeService
    env: list[EnvVar]
    volumes: list[str] = field(default_factory=list)


@dataclass
class RuntimeArtifacts:
    """Output of a runtime builder."""

    service: ComposeService
    env: list[EnvVar]
    dockerfile: str


def _health(test: list[str], start_period: str) -> ComposeHealth:
    return ComposeHealth(
        test=test,
        interval="10s",
        timeout="5s",
        retries=5,
        start_period=start_period,
    )


def community_image(tag: str) -> str:
    """Neo4j image reference, always pinned to the community edition."""
    if not tag.endswith(COMMUNITY_SUFFIX):
        tag = f"{tag}{COMMUNITY_SUFFIX}"
    return f"neo4j:{tag}"


# ---------------------------------------------------------------------------
# Datastore builders
# ---------------------------------------------------------------------------

def _postgres(ds: Datastore, ctx: SynthesisContext) -> DatastoreArtifacts:
    password = generate_password(ctx.password_length)
    service = ComposeService(
        image=f"postgres:{ds.tag}",
        container_name=ctx.container_name(ds.name),
        ports=[f"{ds.port}:{ds.internal_port}"],
        volumes=[f"{ds.volume_name}:/var/lib/postgresql/data"],
        environment={
            "POSTGRES_USER": "${POSTGRES_USER:-postgres}",
            "POSTGRES_PASSWORD": "${POSTGRES_PASSWORD}",
            "POSTGRES_DB": "${POSTGRES_DB:-" + ctx.project_name + "}",
        },
        networks=[ctx.network],
        restart=RESTART_POLICY,
        healthcheck=_health(["CMD-SHELL", "pg_isready -U postgres"], "10s"),
    )
    env = [
        EnvVar(key="POSTGRES_USER", value="postgres", description="PostgreSQL username"),
        EnvVar(key="POSTGRES_PASSWORD", value=password, description="PostgreSQL password", secret=True),
        EnvVar(key="POSTGRES_DB", value=ctx.project_name, description="PostgreSQL database name"),
        EnvVar(
            key="DATABASE_URL",
            value=f"postgresql://postgres:{password}@{ds.name}:{ds.internal_port}/{ctx.project_name}",
            description="PostgreSQL connection string",
            secret=True,
        ),
    ]
    return DatastoreArtifacts(service=service, env=env, volumes=ds.volumes)


def _mysql(ds: Datastore, ctx: SynthesisContext) -> DatastoreArtifacts:
    password = generate_password(ctx.password_length)
    root_password = generate_password(ctx.password_length)
    service = ComposeService(
        image=f"mysql:{ds.tag}",
        container_name=ctx.container_name(ds.name),
        ports=[f"{ds.port}:{ds.internal_port}"],
        volumes=[f"{ds.volume_name}:/var/lib/mysql"],
        environment={
            "MYSQL_ROOT_PASSWORD": "${MYSQL_ROOT_PASSWORD}",
            "MYSQL_DATABASE": "${MYSQL_DATABASE:-" + ctx.project_name + "}",
            "MYSQL_USER": "${MYSQL_USER:-app}",
            "MYSQL_PASSWORD": "${MYSQL_PASSWORD}",
        },
        networks=[ctx.network],
        restart=RESTART_POLICY,
        healthcheck=_health(["CMD", "mysqladmin", "ping", "-h", "localhost"], "30s"),
    )
    env = [
        EnvVar(key="MYSQL_ROOT_PASSWORD", value=root_password, description="MySQL root password", secret=True),
        EnvVar(key="MYSQL_DATABASE", value=ctx.project_name, description="MySQL database name"),
        EnvVar(key="MYSQL_USER", value="app", description="MySQL application user"),
        EnvVar(key="MYSQL_PASSWORD", value=password, description="MySQL application password", secret=True),
        EnvVar(
            key="MYSQL_URL",
            value=f"mysql://app:{password}@{ds.name}:{ds.internal_port}/{ctx.project_name}",
            description="MySQL connection string",
            secret=True,
        ),
    ]
    return DatastoreArtifacts(service=service, env=env, volumes=ds.volumes)


def _mssql(ds: Datastore, ctx: SynthesisContext) -> DatastoreArtifacts:
    # SA logins are rejected unless the password meets the complexity policy.
    password = generate_strong_password(ctx.password_length)
    probe = (
        '/opt/mssql-tools18/bin/sqlcmd -C -S localhost -U sa -P "$MSSQL_SA_PASSWORD" '
        '-Q "SELECT 1" || exit 1'
    )
    service = ComposeService(
        image=f"mcr.microsoft.com/mssql/server:{ds.tag}",
        container_name=ctx.container_name(ds.name),
        ports=[f"{ds.port}:{ds.internal_port}"],
        volumes=[f"{ds.volume_name}:/var/opt/mssql"],
        environment={
            "ACCEPT_EULA": "Y",
            "MSSQL_SA_PASSWORD": "${MSSQL_SA_PASSWORD}",
            "MSSQL_PID": "Developer",
        },
        networks=[ctx.network],
        restart=RESTART_POLICY,
        healthcheck=_health(["CMD-SHELL", probe], "30s"),
    )
    env = [
        EnvVar(
            key="MSSQL_SA_PASSWORD",
            value=password,
            description="SQL Server SA password (Developer Edition)",
            secret=True,
        ),
        EnvVar(
            key="MSSQL_URL",
            value=(
                f"Server={ds.name},{ds.internal_port};Database=master;User Id=sa;"
                f"Password={password};TrustServerCertificate=True"
            ),
            description="SQL Server connection string",
            secret=True,
        ),
    ]
    return DatastoreArtifacts(service=service, env=env, volumes=ds.volumes)


def _neo4j(ds: Datastore, ctx: SynthesisContext) -> DatastoreArtifacts:
    password = generate_password(ctx.password_length)
    logs_volume = ds.auxiliary_volumes[0]
    service = ComposeService(
        image=community_image(ds.tag),
        container_name=ctx.container_name(ds.name),
        ports=[
            f"{ds.port}:{ds.internal_port}",
            f"{ds.port + NEO4J_BOLT_OFFSET}:{NEO4J_BOLT_PORT}",
        ],
        volumes=[
            f"{ds.volume_name}:/data",
            f"{logs_volume}:/logs",
        ],
        environment={
            "NEO4J_AUTH": "${NEO4J_AUTH}",
        },
        networks=[ctx.network],
        restart=RESTART_POLICY,
        healthcheck=_health(
            [
                "CMD-SHELL",
                f"wget --no-verbose --tries=1 --spider http://localhost:{ds.internal_port} || exit 1",
            ],
            "30s",
        ),
    )
    env = [
        EnvVar(
            key="NEO4J_AUTH",
            value=f"neo4j/{password}",
            description="Neo4j authentication (Community Edition)",
            secret=True,
        ),
        EnvVar(
            key="NEO4J_URI",
            value=f"bolt://{ds.name}:{NEO4J_BOLT_PORT}",
            description="Neo4j Bolt connection URI",
        ),
    ]
    return DatastoreArtifacts(service=service, env=env, volumes=ds.volumes)


def _redis(ds: Datastore, ctx: SynthesisContext) -> DatastoreArtifacts:
    password = generate_password(ctx.password_length)
    service = ComposeService(
        image=f"redis:{ds.tag}",
        container_name=ctx.container_name(ds.name),
        command="redis-server --appendonly yes --requirepass ${REDIS_PASSWORD}",
        ports=[f"{ds.port}:{ds.internal_port}"],
        volumes=[f"{ds.volume_name}:/data"],
        networks=[ctx.network],
        restart=RESTART_POLICY,
        healthcheck=_health(
            ["CMD", "redis-cli", "--no-auth-warning", "-a", "${REDIS_PASSWORD}", "ping"],
            "5s",
        ),
    )
    env = [
        EnvVar(key="REDIS_PASSWORD", value=password, description="Redis password", secret=True),
        EnvVar(
            key="REDIS_URL",
            value=f"redis://:{password}@{ds.name}:{ds.internal_port}",
            description="Redis connection string",
            secret=True,
        ),
    ]
    return DatastoreArtifacts(service=service, env=env, volumes=ds.volumes)


def _redis_stack(ds: Datastore, ctx: SynthesisContext) -> DatastoreArtifacts:
    password = generate_password(ctx.password_length)
    service = ComposeService(
        image=f"redis/redis-stack:{ds.tag}",
        container_name=ctx.container_name(ds.name),
        ports=[
            f"{ds.port}:{ds.internal_port}",
            f"{ds.port + REDIS_INSIGHT_OFFSET}:{REDIS_INSIGHT_PORT}",
        ],
        volumes=[f"{ds.volume_name}:/data"],
        environment={
            "REDIS_ARGS": "--requirepass ${REDIS_STACK_PASSWORD}",
        },
        networks=[ctx.network],
        restart=RESTART_POLICY,
        healthcheck=_health(
            ["CMD", "redis-cli", "--no-auth-warning", "-a", "${REDIS_STACK_PASSWORD}", "ping"],
            "5s",
        ),
    )
    env = [
        EnvVar(
            key="REDIS_STACK_PASSWORD",
            value=password,
            description="Redis Stack password (Community)",
            secret=True,
        ),
        EnvVar(
            key="REDIS_STACK_URL",
            value=f"redis://:{password}@{ds.name}:{ds.internal_port}",
            description="Redis Stack connection string",
            secret=True,
        ),
    ]
    return DatastoreArtifacts(service=service, env=env, volumes=ds.volumes)


DATASTORE_BUILDERS: dict[DatastoreKind, Callable[[Datastore, SynthesisContext], DatastoreArtifacts]] = {
    DatastoreKind.POSTGRES: _postgres,
    DatastoreKind.MYSQL: _mysql,
    DatastoreKind.MSSQL: _mssql,
    DatastoreKind.NEO4J: _neo4j,
    DatastoreKind.REDIS: _redis,
    DatastoreKind.REDIS_STACK: _redis_stack,
}


# ---------------------------------------------------------------------------
# Runtime builders
# ---------------------------------------------------------------------------

# kind -> (mode variable, mode value, port variable, port value format)
RUNTIME_ENV_CONVENTIONS: dict[RuntimeKind, tuple[str, str, str, str]] = {
    RuntimeKind.GO: ("GO_ENV", "development", "PORT", "{port}"),
    RuntimeKind.NODE: ("NODE_ENV", "development", "PORT", "{port}"),
    RuntimeKind.PYTHON: ("PYTHON_ENV", "development", "PORT", "{port}"),
    RuntimeKind.JAVA: ("JAVA_ENV", "development", "PORT", "{port}"),
    RuntimeKind.RUST: ("RUST_ENV", "development", "PORT", "{port}"),
    RuntimeKind.CSHARP: ("ASPNETCORE_ENVIRONMENT", "Development", "ASPNETCORE_URLS", "http://+:{port}"),
}

_MODE_DESCRIPTIONS: dict[RuntimeKind, tuple[str, str]] = {
    RuntimeKind.GO: ("Go environment", "Application port"),
    RuntimeKind.NODE: ("Node environment", "Application port"),
    RuntimeKind.PYTHON: ("Python environment", "Application port"),
    RuntimeKind.JAVA: ("Java environment", "Application port"),
    RuntimeKind.RUST: ("Rust environment", "Application port"),
    RuntimeKind.CSHARP: (".NET environment", "ASP.NET Core URLs"),
}


def runtime_env(rt: Runtime) -> list[EnvVar]:
    """The mode flag and port binding for *rt*, in its runtime's conventions."""
    mode_key, mode_value, port_key, port_format = RUNTIME_ENV_CONVENTIONS[rt.kind]
    mode_desc, port_desc = _MODE_DESCRIPTIONS[rt.kind]
    return [
        EnvVar(key=mode_key, value=mode_value, description=f"{mode_desc} ({rt.name})"),
        EnvVar(
            key=port_key,
            value=port_format.format(port=rt.internal_port),
            description=f"{port_desc} ({rt.name})",
        ),
    ]


def synthesize_runtime(
    rt: Runtime,
    ctx: SynthesisContext,
    renderer: TemplateRenderer,
) -> RuntimeArtifacts:
    """Build the compose service, env flags and Dockerfile for a runtime."""
    env = runtime_env(rt)
    service = ComposeService(
        build=ComposeBuild(context=f"./{rt.build_context}", dockerfile=rt.dockerfile),
        container_name=ctx.container_name(rt.name),
        ports=[f"{rt.port}:{rt.internal_port}"],
        volumes=[f"./{rt.build_context}:/app"],
        environment={var.key: var.value for var in env},
        env_file=[".env"],
        depends_on=list(rt.depends_on),
        networks=[ctx.network],
        restart=RESTART_POLICY,
    )
    dockerfile = renderer.render_dockerfile(
        rt.kind,
        {
            "project_name": ctx.project_name,
            "name": rt.name,
            "framework": rt.framework,
            "port": rt.internal_port,
        },
    )
    return RuntimeArtifacts(service=service, env=env, dockerfile=dockerfile)


def synthesize_datastore(ds: Datastore, ctx: SynthesisContext) -> DatastoreArtifacts:
    """Dispatch to the builder for ``ds.kind``."""
    return DATASTORE_BUILDERS[ds.kind](ds, ctx)


def _check_exhaustive() -> None:
    missing = [k.value for k in DatastoreKind if k not in DATASTORE_BUILDERS]
    missing += [k.value for k in RuntimeKind if k not in RUNTIME_ENV_CONVENTIONS]
    if missing:
        raise RuntimeError(f"No service builder for: {', '.join(missing)}")


_check_exhaustive()
