"""
CLI commands for the declarative environment descriptors.

Thin wrappers over ``phpjs_env.core.services.descriptor_generate``.
"""

from __future__ import annotations

import json
import sys
from pathlib import Path

import click


def _resolve_project_root(ctx: click.Context) -> Path:
    """Resolve project root from context or CWD."""
    config_path: Path | None = ctx.obj.get("config_path")
    if config_path is None:
        from phpjs_env.core.config.loader import find_config_file

        config_path = find_config_file()
    return config_path.parent.resolve() if config_path else Path.cwd()


def _emit(ctx: click.Context, results: list[dict], write: bool, force: bool, as_json: bool) -> None:
    """Preview or write every generated file, then exit on any error."""
    project_root = _resolve_project_root(ctx)

    errors = [r["error"] for r in results if "error" in r]
    if errors:
        if as_json:
            click.echo(json.dumps({"error": "; ".join(errors)}, indent=2))
        else:
            for err in errors:
                click.secho(f"❌ {err}", fg="red")
        sys.exit(1)

    files = [f for r in results for f in r["files"]]

    if not write:
        if as_json:
            click.echo(json.dumps({"files": files}, indent=2))
            return
        for file_data in files:
            click.secho(f"📄 Preview: {file_data['path']} ({file_data['descriptor']})", fg="cyan", bold=True)
            click.echo(f"   Reason: {file_data['reason']}")
            click.echo("─" * 60)
            click.echo(file_data["content"], nl=False)
            click.echo("─" * 60)
        click.secho("   (use --write to save to disk)", fg="yellow")
        return

    from phpjs_env.core.services.descriptor_generate import write_generated_file

    written = []
    failed = False
    for file_data in files:
        wr = write_generated_file(project_root, {**file_data, "overwrite": force})
        written.append(wr)
        if "error" in wr:
            failed = True
            if not as_json:
                click.secho(f"❌ {wr['error']}", fg="red")
        elif as_json:
            continue
        elif wr["written"]:
            click.secho(f"✅ Written: {wr['path']}", fg="green", bold=True)
        else:
            click.echo(f"👍 Up to date: {wr['path']}")

    if as_json:
        click.echo(json.dumps({"written": written}, indent=2))
    if failed:
        sys.exit(1)


_write_opt = click.option("--write", is_flag=True, help="Write to disk (default: preview only).")
_force_opt = click.option("--force", is_flag=True, help="Overwrite existing files.")
_json_opt = click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")


@click.group()
def generate() -> None:
    """Generate the workspace (Nix) and dev container descriptors."""


@generate.command("nix")
@_write_opt
@_force_opt
@_json_opt
@click.pass_context
def gen_nix(ctx: click.Context, write: bool, force: bool, as_json: bool) -> None:
    """Generate .idx/dev.nix for the managed cloud workspace."""
    from phpjs_env.core.services.descriptor_generate import generate_workspace
    from phpjs_env.main import load_setup_config

    config = load_setup_config(ctx)
    _emit(ctx, [generate_workspace(config.workspace)], write, force, as_json)


@generate.command("devcontainer")
@_write_opt
@_force_opt
@_json_opt
@click.pass_context
def gen_devcontainer(ctx: click.Context, write: bool, force: bool, as_json: bool) -> None:
    """Generate .devcontainer/Dockerfile and devcontainer.json."""
    from phpjs_env.core.services.descriptor_generate import generate_container
    from phpjs_env.main import load_setup_config

    config = load_setup_config(ctx)
    _emit(ctx, [generate_container(config.container)], write, force, as_json)


@generate.command("all")
@_write_opt
@_force_opt
@_json_opt
@click.pass_context
def gen_all(ctx: click.Context, write: bool, force: bool, as_json: bool) -> None:
    """Generate both descriptors."""
    from phpjs_env.core.services.descriptor_generate import (
        generate_container,
        generate_workspace,
    )
    from phpjs_env.main import load_setup_config

    config = load_setup_config(ctx)
    results = [generate_workspace(config.workspace), generate_container(config.container)]
    _emit(ctx, results, write, force, as_json)
