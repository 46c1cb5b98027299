"""
CLI commands for workspace lifecycle hooks.

Thin wrappers over ``phpjs_env.core.services.workspace_hooks``.
"""

from __future__ import annotations

import json
import sys
from pathlib import Path

import click


@click.group()
def workspace() -> None:
    """Workspace lifecycle hooks — dependency refresh on start."""


@workspace.command("update")
@click.option(
    "--dir",
    "project_dir",
    type=click.Path(exists=True, file_okay=False),
    default=".",
    help="Project directory (default: current directory).",
)
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
def update(project_dir: str, as_json: bool) -> None:
    """Update Composer and pnpm dependencies when their manifests exist."""
    from phpjs_env.core.services.workspace_hooks import refresh_dependencies

    if not as_json:
        click.echo("Updating dependencies...")
    results = refresh_dependencies(Path(project_dir))
    failed = any(r.failed for r in results)

    if as_json:
        click.echo(json.dumps([r.model_dump() for r in results], indent=2))
        if failed:
            sys.exit(1)
        return

    for r in results:
        if r.status == "skipped":
            click.echo(r.output)
        elif r.failed:
            click.secho(f"❌ {r.step}: {r.error}", fg="red")
        else:
            click.secho(f"✅ {r.step}: {r.output}", fg="green")

    if failed:
        sys.exit(1)
