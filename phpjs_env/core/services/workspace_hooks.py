"""
Workspace hooks — the on-start dependency refresh.

Same behaviour as the ``onStart.update`` shell hook of the workspace
descriptor: update Composer dependencies when ``composer.json`` exists,
then pnpm dependencies when ``package.json`` exists. Like the ``&&``
chain it replaces, a failing update stops the refresh.
"""

from __future__ import annotations

import logging
from pathlib import Path

from phpjs_env.core.models.step import StepResult
from phpjs_env.core.services.host_setup.domain.errors import CommandError
from phpjs_env.core.services.host_setup.execution.subprocess_runner import CommandRunner

logger = logging.getLogger(__name__)

# (step name, manifest, command, skip message)
_UPDATERS: tuple[tuple[str, str, list[str], str], ...] = (
    (
        "composer",
        "composer.json",
        ["composer", "update"],
        "⏩ Skipping composer: composer.json not found.",
    ),
    (
        "pnpm",
        "package.json",
        ["pnpm", "update", "--latest"],
        "⏩ Skipping pnpm: package.json not found.",
    ),
)


def refresh_dependencies(
    project_dir: str | Path,
    runner: CommandRunner | None = None,
) -> list[StepResult]:
    """Update the project's PHP and JS dependencies in place.

    Returns one result per updater that was reached. A failed update is
    the last entry.
    """
    project_dir = Path(project_dir)
    runner = runner or CommandRunner()
    results: list[StepResult] = []

    for step, manifest, cmd, skip_message in _UPDATERS:
        if not (project_dir / manifest).is_file():
            results.append(StepResult.skip(step, skip_message))
            continue

        logger.info("Running %s in %s", " ".join(cmd), project_dir)
        try:
            runner.run(cmd, cwd=str(project_dir))
        except CommandError as exc:
            results.append(StepResult.failure(
                step, str(exc), metadata={"returncode": exc.returncode},
            ))
            break
        results.append(StepResult.success(step, f"{' '.join(cmd)} finished"))

    return results
