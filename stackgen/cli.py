"""stackgen command-line interface.

Usage::

    stackgen init --profile web-app --name shop
    stackgen init -d postgres -d redis -r node:fastify
    stackgen add datastore mysql
    stackgen add runtime go --framework gin
    stackgen generate --dry-run
    stackgen list profiles
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from pathlib import Path

from rich.markup import escape
from rich.prompt import Confirm
from rich.table import Table

from stackgen import __version__
from stackgen.catalog import (
    all_datastore_kinds,
    all_runtime_kinds,
    datastore_info,
    parse_datastore_kind,
    parse_runtime_kind,
    runtime_info,
)
from stackgen.config import Settings
from stackgen.errors import StackgenError
from stackgen.generator import ArtifactGenerator, OutputBundle
from stackgen.models import Project, load_project, save_project
from stackgen.profiles import available_profiles, materialize, resolve
from stackgen.project_ops import add_datastore, add_runtime
from stackgen.utils import (
    console,
    print_error,
    print_section,
    print_success,
    print_summary_table,
    print_warning,
    sanitize_name,
)

DISCLAIMER = (
    "For local development and testing only. "
    "Review configurations before any production use."
)


# ---------------------------------------------------------------------------
# Shared helpers
# ---------------------------------------------------------------------------


def _settings_from_args(args: argparse.Namespace) -> Settings:
    settings = Settings.from_env()
    updates: dict[str, object] = {}
    if args.config:
        updates["config_file"] = Path(args.config)
    if args.dry_run:
        updates["dry_run"] = True
    if args.force:
        updates["force"] = True
    if args.compose_out:
        updates["compose_file_name"] = Path(args.compose_out).name
    return settings.model_copy(update=updates)


def _output_dir(project: Project, args: argparse.Namespace) -> Path:
    if args.compose_out:
        return Path(args.compose_out).parent
    return Path(project.output_dir or ".")


def _print_preview(bundle: OutputBundle, compose_name: str) -> None:
    print_warning("Dry run - previewing generated files:")
    for path, content in bundle.files(compose_name).items():
        print_section(path)
        console.print(content, markup=False, highlight=False)


def _confirm_overwrite(target: Path, settings: Settings, assume_yes: bool = False) -> bool:
    if settings.force or assume_yes or not target.exists():
        return True
    return Confirm.ask(f"File {escape(str(target))} exists. Overwrite?", default=False, console=console)


def _emit(
    project: Project,
    settings: Settings,
    args: argparse.Namespace,
    *,
    assume_yes: bool = False,
    ask: bool = True,
) -> bool:
    """Generate *project* and either preview or write it.  Returns ``False`` if cancelled."""
    bundle = ArtifactGenerator(project, password_length=settings.password_length).generate()
    compose_name = settings.compose_file_name

    if settings.dry_run:
        _print_preview(bundle, compose_name)
        return True

    out_dir = _output_dir(project, args)
    if ask and not _confirm_overwrite(out_dir / compose_name, settings, assume_yes):
        print_warning("Cancelled.")
        return False

    written = asyncio.run(bundle.write_to_dir(out_dir, compose_name))
    print_summary_table(
        {str(path.relative_to(out_dir)): "written" for path in written},
        title=f"Generated files in {out_dir.resolve()}",
    )
    return True


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


def _parse_runtime_spec(spec: str) -> tuple[str, str | None]:
    kind, _, framework = spec.partition(":")
    return kind, framework or None


def cmd_init(args: argparse.Namespace) -> int:
    settings = _settings_from_args(args)
    name = sanitize_name(args.name or Path.cwd().name)
    if not name:
        raise StackgenError("project name is empty after sanitising; pass --name")
    output_dir = args.output or str(settings.output_dir)

    console.print("\n[bold cyan]stackgen[/bold cyan] - Local Development Environment Generator")
    console.print(f"   Project: [yellow]{escape(name)}[/yellow]\n")

    if args.profile:
        profile = resolve(args.profile)
        project = materialize(profile, name, output_dir)
        print_success(f"Using profile: {profile.name}")
        console.print(f"  {escape(profile.description)}\n")
    elif args.datastore or args.runtime:
        project = Project(name=name, output_dir=output_dir)
        for kind in args.datastore or []:
            project = add_datastore(project, parse_datastore_kind(kind))
        for spec in args.runtime or []:
            kind, framework = _parse_runtime_spec(spec)
            project = add_runtime(project, parse_runtime_kind(kind), framework)
    else:
        raise StackgenError(
            "nothing selected: pass --profile, or --datastore/--runtime "
            "(run 'stackgen list' to see the options)"
        )

    if not settings.dry_run:
        config_path = Path(output_dir) / settings.config_file
        save_project(project, config_path)

    if not _emit(project, settings, args, assume_yes=args.yes):
        return 0

    if not settings.dry_run:
        print_success("stackgen configuration generated successfully!")
        console.print("\nNext steps:")
        console.print("[yellow]  1. Review the generated .env file and adjust values as needed[/yellow]")
        console.print("[yellow]  2. Run: docker compose up -d[/yellow]")
        console.print("[yellow]  3. Check status: docker compose ps[/yellow]\n")
    console.print(f"[dim]{DISCLAIMER}[/dim]")
    return 0


def cmd_generate(args: argparse.Namespace) -> int:
    settings = _settings_from_args(args)
    project = load_project(settings.config_file)
    console.print(f"[cyan]Generating from {escape(str(settings.config_file))}...[/cyan]")
    if _emit(project, settings, args) and not settings.dry_run:
        print_success("Configuration regenerated successfully!")
    return 0


def cmd_add(args: argparse.Namespace) -> int:
    settings = _settings_from_args(args)
    project = load_project(settings.config_file)
    category = args.category.lower()

    if category in ("datastore", "ds", "d"):
        kind = parse_datastore_kind(args.kind)
        project = add_datastore(project, kind, tag=args.tag)
        added = project.datastores[-1]
        label = f"{datastore_info(kind).display_name} (port {added.port})"
    elif category in ("runtime", "rt", "r"):
        kind = parse_runtime_kind(args.kind)
        project = add_runtime(project, kind, args.framework)
        added = project.runtimes[-1]
        label = f"{runtime_info(kind).display_name} [{added.framework}] as {added.name} (port {added.port})"
    else:
        raise StackgenError(f"unknown category: {args.category}. Use: datastore or runtime")

    if not settings.dry_run:
        save_project(project, settings.config_file)
    _emit(project, settings, args, ask=False)
    if not settings.dry_run:
        print_success(f"Added {label}")
    return 0


def _list_datastores() -> None:
    table = Table(title="Available Datastores", header_style="bold cyan")
    table.add_column("TYPE", style="yellow", no_wrap=True)
    table.add_column("DESCRIPTION")
    table.add_column("PORT", justify="right")
    table.add_column("EDITION", style="dim")
    for kind in all_datastore_kinds():
        info = datastore_info(kind)
        table.add_row(kind.value, info.description, str(info.default_port), info.edition)
    console.print(table)


def _list_runtimes() -> None:
    table = Table(title="Available Runtimes", header_style="bold cyan")
    table.add_column("TYPE", style="yellow", no_wrap=True)
    table.add_column("DESCRIPTION")
    table.add_column("PORT", justify="right")
    table.add_column("FRAMEWORKS", style="dim")
    for kind in all_runtime_kinds():
        info = runtime_info(kind)
        table.add_row(kind.value, info.description, str(info.default_port), ", ".join(info.frameworks))
    console.print(table)


def _list_profiles() -> None:
    table = Table(title="Available Profiles", header_style="bold cyan")
    table.add_column("PROFILE", style="yellow", no_wrap=True)
    table.add_column("DESCRIPTION")
    table.add_column("COMPONENTS", style="dim")
    for profile in available_profiles():
        table.add_row(profile.name, profile.description, " + ".join(profile.components()))
    console.print(table)
    console.print("[dim]  Use: stackgen init --profile <name>[/dim]")


_LISTERS = {
    "datastores": _list_datastores,
    "datastore": _list_datastores,
    "ds": _list_datastores,
    "runtimes": _list_runtimes,
    "runtime": _list_runtimes,
    "rt": _list_runtimes,
    "profiles": _list_profiles,
    "profile": _list_profiles,
    "p": _list_profiles,
}


def cmd_list(args: argparse.Namespace) -> int:
    if not args.category:
        _list_datastores()
        _list_runtimes()
        _list_profiles()
        return 0
    lister = _LISTERS.get(args.category.lower())
    if lister is None:
        raise StackgenError(
            f"unknown category: {args.category}. Use: datastores, runtimes, or profiles"
        )
    lister()
    return 0


# ---------------------------------------------------------------------------
# Parser
# ---------------------------------------------------------------------------


def build_parser() -> argparse.ArgumentParser:
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--config", default=None, help="config file (default: ./stackgen.yaml)")
    common.add_argument("--dry-run", action="store_true", help="print files instead of writing them")
    common.add_argument("--force", "-f", action="store_true", help="overwrite existing files without prompting")
    common.add_argument("--compose-out", default=None, help="output path for docker-compose.yml")

    parser = argparse.ArgumentParser(
        prog="stackgen",
        description="Generate Docker Compose configurations for local development",
        epilog=DISCLAIMER,
    )
    parser.add_argument("--version", action="version", version=f"stackgen {__version__}")
    sub = parser.add_subparsers(dest="command", required=True)

    init = sub.add_parser("init", parents=[common], help="create a new configuration")
    init.add_argument("--name", "--stack-name", "-n", default=None, help="project name (default: current directory name)")
    init.add_argument("--output", "-o", default=None, help="output directory")
    init.add_argument("--profile", "-p", default=None, help="preset profile (see 'stackgen list profiles')")
    init.add_argument("--datastore", "-d", action="append", metavar="KIND", help="datastore to include (repeatable)")
    init.add_argument("--runtime", "-r", action="append", metavar="KIND[:FRAMEWORK]", help="runtime to include (repeatable)")
    init.add_argument("--yes", "-y", action="store_true", help="skip confirmation prompts")
    init.set_defaults(func=cmd_init)

    for name, help_text in (
        ("generate", "regenerate files from stackgen.yaml"),
        ("render", "alias for generate"),
    ):
        gen = sub.add_parser(name, parents=[common], help=help_text)
        gen.set_defaults(func=cmd_generate)

    add = sub.add_parser("add", parents=[common], help="add a datastore or runtime")
    add.add_argument("category", help="datastore | runtime")
    add.add_argument("kind", help="kind to add, e.g. postgres or node")
    add.add_argument("--framework", default=None, help="runtime framework (default: first listed)")
    add.add_argument("--tag", default=None, help="datastore image tag")
    add.set_defaults(func=cmd_add)

    lst = sub.add_parser("list", help="list datastores, runtimes or profiles")
    lst.add_argument("category", nargs="?", default=None)
    lst.set_defaults(func=cmd_list)

    return parser


def run(argv: list[str] | None = None) -> int:
    """Parse *argv*, dispatch, and return a process exit code."""
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        return args.func(args)
    except StackgenError as exc:
        print_error(f"Error: {exc}")
        return 1


def main() -> None:
    """CLI entry point for ``stackgen`` and ``python -m stackgen``."""
    sys.exit(run())


if __name__ == "__main__":
    main()
