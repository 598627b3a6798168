"""
pmprofiler — CLI entrypoint.

Usage:
    python -m pmprofiler.main --help
    pmprofiler detect
    pmprofiler --root path/to/app plan
"""

from __future__ import annotations

import os
from pathlib import Path

import click

from pmprofiler import __version__
from pmprofiler.core.observability.logging_config import (
    LOG_FILE_VAR,
    resolve_level,
    setup_logging,
)


@click.group()
@click.version_option(version=__version__, prog_name="pmprofiler")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output.")
@click.option("--debug", is_flag=True, help="Enable debug logging (very verbose).")
@click.option(
    "--root",
    "-C",
    "project_root",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    default=None,
    help="Project directory (default: current directory).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: bool,
    quiet: bool,
    debug: bool,
    project_root: Path | None,
) -> None:
    """Package manager profiler — detect npm/yarn/pnpm versions, run yarn safely."""
    ctx.ensure_object(dict)
    ctx.obj["project_root"] = project_root.resolve() if project_root else None

    # ── Logging setup (once, at process start) ──────────────────
    setup_logging(
        level=resolve_level(debug=debug, verbose=verbose, quiet=quiet),
        log_file=os.environ.get(LOG_FILE_VAR),
    )


# ── Command registration ────────────────────────────────────────

from pmprofiler.ui.cli.packages import detect, features, plan, run, yarn_version  # noqa: E402

cli.add_command(detect)
cli.add_command(features)
cli.add_command(plan)
cli.add_command(run)
cli.add_command(yarn_version)


if __name__ == "__main__":
    cli()
