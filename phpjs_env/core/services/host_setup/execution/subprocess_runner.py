"""
L4 Execution — Core subprocess runner.

Every command that changes the host goes through ``CommandRunner``.
Fail-fast: any non-zero exit raises ``CommandError``; nothing here
retries. The read-only probes in ``detection/`` call ``subprocess`` on
their own and report failure as a negative answer instead.
"""

from __future__ import annotations

import logging
import os
import shlex
import subprocess
import time

from phpjs_env.core.services.host_setup.domain.errors import CommandError

logger = logging.getLogger(__name__)

# Keep at most this much of captured output on errors
_TAIL = 2000


class CommandRunner:
    """Run host commands, raising on failure.

    By default the child inherits the terminal, so apt progress and
    prompts reach the operator unchanged. ``capture=True`` collects
    stdout for callers that need it.
    """

    def run(
        self,
        cmd: list[str],
        *,
        capture: bool = False,
        input_data: bytes | None = None,
        env_overrides: dict[str, str] | None = None,
        cwd: str | None = None,
        timeout: int | None = None,
    ) -> str:
        """Run ``cmd`` and return its stdout (``""`` when not captured).

        Args:
            cmd: Command list for ``subprocess.run()``.
            capture: Capture stdout/stderr instead of inheriting them.
            input_data: Bytes piped to stdin (e.g. a key for ``gpg --dearmor``).
            env_overrides: Extra env vars merged over the current environment.
            cwd: Working directory for the command.
            timeout: Seconds before ``TimeoutExpired``; None waits forever.

        Raises:
            CommandError: Non-zero exit, missing binary or timeout.
        """
        env = os.environ.copy()
        if env_overrides:
            env.update(env_overrides)

        logger.debug("Executing: %s (cwd=%s)", shlex.join(cmd), cwd)
        start = time.monotonic()
        try:
            result = subprocess.run(
                cmd,
                input=input_data,
                capture_output=capture or input_data is not None,
                env=env,
                cwd=cwd,
                timeout=timeout,
            )
        except FileNotFoundError as exc:
            raise CommandError(cmd, 127, stderr=str(exc)) from exc
        except subprocess.TimeoutExpired as exc:
            raise CommandError(cmd, -1, stderr=f"timed out after {timeout}s") from exc

        elapsed_ms = int((time.monotonic() - start) * 1000)
        stdout = _decode(result.stdout)
        stderr = _decode(result.stderr)

        if result.returncode != 0:
            logger.debug("Failed after %dms: exit %d", elapsed_ms, result.returncode)
            raise CommandError(
                cmd,
                result.returncode,
                stderr=stderr[-_TAIL:],
                stdout=stdout[-_TAIL:],
            )

        logger.debug("Finished in %dms", elapsed_ms)
        return stdout

    def run_as_user(
        self,
        user: str,
        script: str,
        *,
        capture: bool = False,
    ) -> str:
        """Run a bash snippet as ``user`` with that user's HOME."""
        return self.run(["sudo", "-u", user, "-H", "bash", "-c", script], capture=capture)


def _decode(data: bytes | None) -> str:
    if not data:
        return ""
    return data.decode("utf-8", errors="replace")
