"""
L4 Execution — APT operations.

Every call goes through ``CommandRunner`` and therefore aborts the
procedure on the first failing apt invocation.
"""

from __future__ import annotations

import logging
from pathlib import Path

from phpjs_env.core.services.host_setup.execution.host_files import write_file
from phpjs_env.core.services.host_setup.execution.subprocess_runner import CommandRunner

logger = logging.getLogger(__name__)


class AptClient:
    """The apt front-end plus signed third-party source registration."""

    def __init__(self, runner: CommandRunner, binary: str = "apt"):
        self.runner = runner
        self.binary = binary

    def update(self) -> None:
        self.runner.run([self.binary, "update"])

    def upgrade(self) -> None:
        self.runner.run([self.binary, "upgrade", "-y"])

    def full_upgrade(self) -> None:
        self.runner.run([self.binary, "full-upgrade", "-y"])

    def install(self, packages: list[str], *, no_recommends: bool = False) -> None:
        """Install ``packages`` in one apt transaction."""
        if not packages:
            return
        cmd = [self.binary, "install", "-y"]
        if no_recommends:
            cmd.append("--no-install-recommends")
        self.runner.run(cmd + list(packages))

    def autoremove(self) -> None:
        self.runner.run([self.binary, "autoremove", "-y"])

    def clean(self) -> None:
        self.runner.run([self.binary, "clean", "-y"])

    def add_keyring(self, armored_key: bytes, keyring: str | Path) -> None:
        """Dearmor a downloaded signing key into ``keyring``.

        Equivalent to ``curl KEY | gpg --dearmor -o KEYRING``.
        """
        keyring = Path(keyring)
        keyring.parent.mkdir(parents=True, exist_ok=True)
        self.runner.run(
            ["gpg", "--dearmor", "--yes", "-o", str(keyring)],
            input_data=armored_key,
        )
        logger.info("Installed signing key %s", keyring)

    def write_source(self, list_file: str | Path, source_line: str) -> None:
        """Write a one-line ``.list`` file, replacing any previous content."""
        write_file(list_file, source_line + "\n")
        logger.info("Wrote APT source %s", list_file)
