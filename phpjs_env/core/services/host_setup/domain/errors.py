"""
L1 Domain — Setup error taxonomy.

Every hard stop in the host procedure is one of these. The procedure's
``run()`` catches ``SetupError``, logs it, and exits with status 1;
nothing below it retries or rolls back.
"""

from __future__ import annotations


class SetupError(Exception):
    """Base class for every fatal condition of the host procedure."""


class PreconditionError(SetupError):
    """The host cannot run the procedure (privilege, apt, disk space).

    Raised before any mutation of the host.
    """


class ResolutionError(SetupError):
    """A required dynamic value could not be determined.

    No fallback value is ever substituted.
    """


class IntegrityError(SetupError):
    """A downloaded artifact did not match its published checksum."""

    def __init__(self, message: str, *, expected: str = "", actual: str = ""):
        super().__init__(message)
        self.expected = expected
        self.actual = actual


class FetchError(SetupError):
    """A download endpoint could not be reached or returned an error."""

    def __init__(self, message: str, *, url: str = ""):
        super().__init__(message)
        self.url = url


class CommandError(SetupError):
    """An external command exited non-zero (or could not be started)."""

    def __init__(
        self,
        cmd: list[str],
        returncode: int,
        stderr: str = "",
        stdout: str = "",
    ):
        self.cmd = list(cmd)
        self.returncode = returncode
        self.stderr = stderr
        self.stdout = stdout
        detail = stderr.strip().splitlines()[-1] if stderr.strip() else ""
        message = f"Command failed (exit {returncode}): {' '.join(self.cmd)}"
        if detail:
            message += f" — {detail}"
        super().__init__(message)
