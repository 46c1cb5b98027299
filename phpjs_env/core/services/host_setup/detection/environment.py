"""
L3 Detection — Host environment probes.

OS identification, installed commands, architecture and the invoking
user's Git identity. Never mutates anything.
"""

from __future__ import annotations

import logging
import platform
import shutil
import subprocess
from pathlib import Path

logger = logging.getLogger(__name__)

# ``uname -m`` → dpkg architecture, for hosts without dpkg on PATH
_DPKG_ARCH_MAP: dict[str, str] = {
    "x86_64": "amd64",
    "aarch64": "arm64",
    "armv7l": "armhf",
    "i686": "i386",
    "i386": "i386",
}


def read_os_release(path: str | Path = "/etc/os-release") -> dict[str, str]:
    """Parse an os-release file into a dict.

    Returns::

        {"ID": "debian", "VERSION_CODENAME": "bookworm", ...}

    A missing or unreadable file gives ``{}``.
    """
    result: dict[str, str] = {}
    try:
        text = Path(path).read_text(encoding="utf-8")
    except OSError:
        return result

    for raw in text.splitlines():
        line = raw.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        key, value = line.split("=", 1)
        value = value.strip()
        if len(value) >= 2 and value[0] == value[-1] and value[0] in "\"'":
            value = value[1:-1]
        result[key.strip()] = value
    return result


def is_debian(os_release: dict[str, str]) -> bool:
    return os_release.get("ID") == "debian"


def command_available(name: str) -> bool:
    """True when ``name`` resolves on PATH."""
    return shutil.which(name) is not None


def dpkg_architecture() -> str:
    """Debian architecture name of the host (``amd64``, ``arm64``, ...)."""
    if shutil.which("dpkg"):
        try:
            r = subprocess.run(
                ["dpkg", "--print-architecture"],
                capture_output=True, text=True, timeout=10,
            )
            if r.returncode == 0 and r.stdout.strip():
                return r.stdout.strip()
        except (subprocess.TimeoutExpired, OSError) as exc:
            logger.warning("dpkg --print-architecture failed: %s", exc)
    machine = platform.machine()
    return _DPKG_ARCH_MAP.get(machine, machine.lower())


def git_identity_configured(user: str) -> bool:
    """True when ``user`` already has both user.name and user.email set.

    Reads the user's global Git config through ``sudo -u``.
    """
    for key in ("user.name", "user.email"):
        try:
            r = subprocess.run(
                ["sudo", "-u", user, "-H", "git", "config", "--global", key],
                capture_output=True, text=True, timeout=10,
            )
        except (subprocess.TimeoutExpired, OSError) as exc:
            logger.warning("Cannot read git %s for %s: %s", key, user, exc)
            return False
        if r.returncode != 0 or not r.stdout.strip():
            return False
    return True
