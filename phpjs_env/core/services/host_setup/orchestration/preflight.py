"""
L5 Orchestration — Read-only preflight report.

Runs the precondition probes without stopping at the first failure and
without touching the host, so an operator can see every blocker at once
before running the real procedure.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping

from phpjs_env.core.models.settings import SetupSettings
from phpjs_env.core.models.step import StepResult
from phpjs_env.core.services.host_setup.detection.environment import (
    is_debian,
    read_os_release,
)
from phpjs_env.core.services.host_setup.detection.preconditions import (
    available_disk_gb,
    has_package_manager,
    invoking_user,
    is_elevated,
)

logger = logging.getLogger(__name__)


def run_preflight(
    settings: SetupSettings | None = None,
    environ: Mapping[str, str] | None = None,
) -> list[StepResult]:
    """Evaluate every precondition.

    Hard checks (privilege, package manager, disk) report ``failed``;
    the soft ones (invoking user, OS family) report ``skipped`` when they
    would put the procedure into a degraded path.
    """
    s = settings or SetupSettings()
    env = os.environ if environ is None else environ
    results: list[StepResult] = []

    if is_elevated():
        results.append(StepResult.success("root", "Running as root"))
    else:
        results.append(StepResult.failure("root", "This script must be run as root. Please use 'sudo'."))

    user = invoking_user(env)
    if user:
        results.append(StepResult.success("user", f"Invoking user: {user}", metadata={"user": user}))
    else:
        results.append(StepResult.skip(
            "user", "Cannot determine the original user. Per-user steps will be skipped.",
        ))

    if has_package_manager(s.package_manager):
        results.append(StepResult.success("package_manager", f"{s.package_manager} found"))
    else:
        results.append(StepResult.failure(
            "package_manager", f"'{s.package_manager}' package manager not found",
        ))

    try:
        available = available_disk_gb(s.disk_check_path)
    except OSError as exc:
        results.append(StepResult.failure("disk", f"Cannot read free space of {s.disk_check_path}: {exc}"))
    else:
        meta = {"available_gb": available, "required_gb": s.required_disk_gb}
        if available >= s.required_disk_gb:
            results.append(StepResult.success("disk", f"{available}GB available", metadata=meta))
        else:
            results.append(StepResult.failure(
                "disk",
                f"Insufficient disk space. Requires ~{s.required_disk_gb}GB, "
                f"but only {available}GB is available.",
                metadata=meta,
            ))

    os_release = read_os_release(s.os_release)
    os_id = os_release.get("ID", "unknown")
    if is_debian(os_release):
        codename = os_release.get("VERSION_CODENAME", "")
        results.append(StepResult.success(
            "os", f"Debian {codename}".strip(), metadata={"id": os_id, "codename": codename},
        ))
    else:
        results.append(StepResult.skip(
            "os", f"OS is '{os_id}', not Debian; the release upgrade will be skipped.",
            metadata={"id": os_id},
        ))

    logger.debug("Preflight: %s", [(r.step, r.status) for r in results])
    return results
