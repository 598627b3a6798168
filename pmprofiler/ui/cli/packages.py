"""
CLI commands for package manager detection and safe yarn invocation.

Thin wrappers over ``pmprofiler.core.services``.
"""

from __future__ import annotations

import json
import sys
from pathlib import Path

import click

from pmprofiler.core.config.loader import ConfigError
from pmprofiler.core.models.profile import ManagerKind
from pmprofiler.core.services.shell_ops import SubprocessFailed
from pmprofiler.core.services.version_classifier import LockfileVersionNotFound

# Errors a command reports as a one-line message instead of a traceback
_REPORTED_ERRORS = (ConfigError, LockfileVersionNotFound, SubprocessFailed, ValueError)


def _project_root(ctx: click.Context) -> Path:
    return ctx.obj.get("project_root") or Path.cwd()


def _fail(error: Exception) -> None:
    click.secho(f"❌ {error}", fg="red", err=True)
    sys.exit(1)


# ── Detect ──────────────────────────────────────────────────────


@click.command()
@click.option(
    "--lockfile", "-l",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="Classify this lockfile instead of auto-detecting one.",
)
@click.option(
    "--kind", "-k",
    type=click.Choice([k.value for k in ManagerKind]),
    default=None,
    help="Package manager owning --lockfile (default: from its filename).",
)
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def detect(ctx: click.Context, lockfile: Path | None, kind: str | None, as_json: bool) -> None:
    """Identify the package manager and major version from a lockfile."""
    from pmprofiler.core.services.version_classifier import (
        identify_manager,
        lockfile_kind,
        profile_project,
    )

    try:
        if lockfile is not None:
            resolved_kind = kind or lockfile_kind(lockfile)
            if resolved_kind is None:
                raise click.UsageError(f"Cannot tell which package manager owns {lockfile.name}; pass --kind.")
            profile = identify_manager(lockfile.read_text(encoding="utf-8"), resolved_kind)
        else:
            profile = profile_project(_project_root(ctx))
    except _REPORTED_ERRORS as e:
        _fail(e)

    if profile is None:
        if as_json:
            click.echo(json.dumps(None))
        else:
            click.secho("⚠️  No lockfile found", fg="yellow")
        return

    if as_json:
        click.echo(json.dumps({**profile.model_dump(mode="json"), "label": profile.label}, indent=2))
        return

    click.secho(f"📦 {profile.kind.value} {profile.major_version}", fg="cyan", bold=True)


# ── Yarn berry ──────────────────────────────────────────────────


@click.command(name="yarn-version")
@click.pass_context
def yarn_version(ctx: click.Context) -> None:
    """Print the major version of the yarn binary in effect."""
    from pmprofiler.core.services.yarn_session import ConfiguratorSession

    try:
        major = ConfiguratorSession(_project_root(ctx)).resolve_yarn_major_version()
    except _REPORTED_ERRORS as e:
        _fail(e)
    click.echo(str(major))


@click.command()
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def features(ctx: click.Context, as_json: bool) -> None:
    """Show yarn berry features (zero-install, offline cache, scripts)."""
    from pmprofiler.core.services.berry_features import berry_args
    from pmprofiler.core.services.yarn_session import ConfiguratorSession

    try:
        flags = ConfiguratorSession(_project_root(ctx)).features()
    except _REPORTED_ERRORS as e:
        _fail(e)

    args = berry_args(flags)
    if as_json:
        click.echo(json.dumps({**flags.model_dump(), "args": args}, indent=2))
        return

    click.secho(f"🧶 yarn {flags.major_version}", fg="cyan", bold=True)
    for name, value in flags.model_dump().items():
        if name == "major_version":
            continue
        icon = "✅" if value else "❌"
        click.echo(f"   {icon} {name}")
    click.echo(f"   Args: {' '.join(args) or '(none)'}")


@click.command()
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def plan(ctx: click.Context, as_json: bool) -> None:
    """List the yarn config changes applied before every yarn command."""
    from pmprofiler.core.services.yarn_session import ConfiguratorSession

    try:
        mutations = ConfiguratorSession(_project_root(ctx)).planned_mutations()
    except _REPORTED_ERRORS as e:
        _fail(e)

    if as_json:
        click.echo(json.dumps([m.model_dump() for m in mutations], indent=2))
        return

    for mutation in mutations:
        click.echo(mutation.command)


@click.command()
@click.argument("commands", nargs=-1, required=True)
@click.pass_context
def run(ctx: click.Context, commands: tuple[str, ...]) -> None:
    """Run yarn commands after applying the safety configuration.

    Each argument is one shell command, e.g.:

        pmprofiler run "yarn up lodash --mode=update-lockfile"
    """
    from pmprofiler.core.services.yarn_session import run_package_manager_commands

    try:
        outputs = run_package_manager_commands(commands, project_root=_project_root(ctx))
    except _REPORTED_ERRORS as e:
        _fail(e)

    for output in outputs:
        if output:
            click.echo(output)
