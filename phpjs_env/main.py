"""
phpjs-env — CLI entrypoint.

Usage:
    python -m phpjs_env.main --help
    sudo phpjs-env setup
    phpjs-env preflight
    phpjs-env generate all --write
"""

from __future__ import annotations

import json
import sys
from pathlib import Path

import click

from phpjs_env import __version__
from phpjs_env.core.observability.logging_config import setup_logging


def load_setup_config(ctx: click.Context):
    """Load phpjs-env.yml for the current invocation, exiting on errors."""
    from phpjs_env.core.config.loader import ConfigError, load_config

    try:
        return load_config(ctx.obj.get("config_path"))
    except ConfigError as e:
        click.secho(f"❌ {e}", fg="red")
        sys.exit(1)


@click.group()
@click.version_option(version=__version__, prog_name="phpjs-env")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output.")
@click.option("--debug", is_flag=True, help="Enable debug logging (very verbose).")
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=False),
    default=None,
    help="Path to phpjs-env.yml (default: auto-detect).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: bool,
    quiet: bool,
    debug: bool,
    config_path: str | None,
) -> None:
    """phpjs-env — bootstrap a PHP + Node.js development environment."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet
    ctx.obj["debug"] = debug
    ctx.obj["config_path"] = Path(config_path) if config_path else None

    # ── Logging setup (once, at process start) ──────────────────
    level = None
    if debug:
        level = "DEBUG"
    elif verbose:
        level = "INFO"
    elif quiet:
        level = "ERROR"
    setup_logging(level=level)


@cli.command()
@click.option(
    "--log-file",
    type=click.Path(dir_okay=False),
    default=None,
    help="Setup log file (default: /var/log/phpjs-dev-environment-setup.log).",
)
@click.pass_context
def setup(ctx: click.Context, log_file: str | None) -> None:
    """Install the PHP + Node.js toolchain on this Debian host (run with sudo)."""
    from phpjs_env.core.services.host_setup.orchestration import SetupProcedure

    config = load_setup_config(ctx)
    settings = config.settings
    if log_file:
        settings = settings.model_copy(update={"log_file": log_file})

    procedure = SetupProcedure(settings, answers=config.answers)
    sys.exit(procedure.run())


@cli.command()
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def preflight(ctx: click.Context, as_json: bool) -> None:
    """Check the host against the setup preconditions without changing it."""
    from phpjs_env.core.services.host_setup.orchestration import run_preflight

    config = load_setup_config(ctx)
    results = run_preflight(config.settings)
    failed = any(r.failed for r in results)

    if as_json:
        click.echo(json.dumps([r.model_dump() for r in results], indent=2))
        if failed:
            sys.exit(1)
        return

    icons = {"ok": ("✅", "green"), "skipped": ("⚠️ ", "yellow"), "failed": ("❌", "red")}
    click.secho("🔍 Preflight", fg="cyan", bold=True)
    for r in results:
        icon, color = icons[r.status]
        click.secho(f"   {icon} {r.step:<16} {r.error or r.output}", fg=color)
    click.echo()

    if failed:
        click.secho("❌ Setup would stop at a failed check.", fg="red", bold=True)
        sys.exit(1)
    click.secho("✅ Ready for setup.", fg="green", bold=True)


@cli.command("node-version")
@click.option(
    "--channel",
    type=click.Choice(["lts", "current"], case_sensitive=False),
    default="lts",
    show_default=True,
    help="Release channel.",
)
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def node_version(ctx: click.Context, channel: str, as_json: bool) -> None:
    """Show the newest Node.js release on a channel."""
    from phpjs_env.core.services.host_setup.domain.errors import SetupError
    from phpjs_env.core.services.host_setup.execution import HttpFetcher, latest_node_release

    settings = load_setup_config(ctx).settings
    channel = channel.lower()
    fetcher = HttpFetcher(timeout=settings.http_timeout)

    try:
        version, major = latest_node_release(fetcher, settings.node_release_index_url, channel)
    except SetupError as e:
        if as_json:
            click.echo(json.dumps({"error": str(e), "channel": channel}, indent=2))
        else:
            click.secho(f"❌ {e}", fg="red")
        sys.exit(1)

    if as_json:
        click.echo(json.dumps({"channel": channel, "version": version, "major": major}, indent=2))
        return

    click.secho(f"🟢 Node.js {channel}: {version}", fg="green", bold=True)
    click.echo(f"   Major: {major}")


# ── Register sub-command groups from phpjs_env/ui/cli/ ────────────

from phpjs_env.ui.cli.generate import generate
from phpjs_env.ui.cli.workspace import workspace

cli.add_command(generate)
cli.add_command(workspace)


if __name__ == "__main__":
    cli()
