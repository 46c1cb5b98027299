"""
L3 Detection — Precondition probes.

Read-only checks run before the procedure touches the host:
privilege, invoking user, package manager presence, free disk space.
"""

from __future__ import annotations

import logging
import os
import shutil
from collections.abc import Mapping

logger = logging.getLogger(__name__)

_BYTES_PER_GB = 1024 * 1024 * 1024


def is_elevated() -> bool:
    """True when the effective UID is root."""
    return os.geteuid() == 0


def invoking_user(environ: Mapping[str, str] | None = None) -> str | None:
    """The user who ran ``sudo``, or None when it cannot be determined.

    Only ``SUDO_USER`` is consulted. ``root`` counts as a real answer:
    the per-user steps then run for root.
    """
    env = os.environ if environ is None else environ
    user = env.get("SUDO_USER", "").strip()
    return user or None


def has_package_manager(name: str = "apt") -> bool:
    """True when the package manager binary is on PATH."""
    return shutil.which(name) is not None


def available_disk_gb(path: str = "/") -> int:
    """Free space on the filesystem holding ``path``, in whole GiB, rounded down."""
    usage = shutil.disk_usage(path)
    gb = usage.free // _BYTES_PER_GB
    logger.debug("Disk free on %s: %d bytes (%d GiB)", path, usage.free, gb)
    return int(gb)
