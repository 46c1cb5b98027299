"""
L4 Execution — Per-user tool installs.

These run as the operator who invoked ``sudo``, never as root, so the
tools land in that user's home directory.
"""

from __future__ import annotations

import shlex

from phpjs_env.core.services.host_setup.execution.subprocess_runner import CommandRunner

PNPM_HOME_EXPORTS = 'export PNPM_HOME="$HOME/.local/share/pnpm" && export PATH="$PNPM_HOME:$PATH"'

MANUAL_STEPS: tuple[str, ...] = (
    "1. curl -fsSL https://get.pnpm.io/install.sh | sh -",
    "2. pnpm install -g playwright",
    "3. playwright install --with-deps",
)


def install_pnpm(runner: CommandRunner, user: str, install_url: str) -> None:
    """Run pnpm's standalone installer for ``user``."""
    runner.run_as_user(user, f"curl -fsSL {shlex.quote(install_url)} | sh -")


def install_playwright(runner: CommandRunner, user: str) -> None:
    """Install Playwright globally with pnpm, then its browsers and OS deps."""
    runner.run_as_user(
        user,
        f"{PNPM_HOME_EXPORTS} && pnpm install -g playwright && playwright install --with-deps",
    )


def configure_git(
    runner: CommandRunner,
    user: str,
    *,
    name: str,
    email: str,
    credential_helper: str,
) -> None:
    """Write name, email and credential helper to the user's global Git config."""
    for key, value in (
        ("user.name", name),
        ("user.email", email),
        ("credential.helper", credential_helper),
    ):
        runner.run(["sudo", "-u", user, "-H", "git", "config", "--global", key, value])
