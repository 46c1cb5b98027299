"""
Descriptor generation — render and write the declarative environments.

Thin service layer over ``generators/``: validates, wraps results in
plain dicts for the CLI, and writes files under a project root.
"""

from __future__ import annotations

import logging
from pathlib import Path

from phpjs_env.core.models.descriptor import ContainerDescriptor, WorkspaceDescriptor

logger = logging.getLogger(__name__)


def generate_workspace(descriptor: WorkspaceDescriptor | None = None) -> dict:
    """Render ``.idx/dev.nix``.

    Returns:
        {"ok": True, "files": [GeneratedFile dict]} or {"error": "..."}
    """
    from phpjs_env.core.services.generators.nix_workspace import generate_dev_nix

    try:
        result = generate_dev_nix(descriptor or WorkspaceDescriptor())
    except ValueError as exc:
        return {"error": str(exc)}
    return {"ok": True, "files": [result.model_dump()]}


def generate_container(descriptor: ContainerDescriptor | None = None) -> dict:
    """Render ``.devcontainer/Dockerfile`` and ``devcontainer.json``.

    Returns:
        {"ok": True, "files": [GeneratedFile dict, ...]} or {"error": "..."}
    """
    from phpjs_env.core.services.generators.devcontainer import generate_devcontainer

    try:
        results = generate_devcontainer(descriptor or ContainerDescriptor())
    except ValueError as exc:
        return {"error": str(exc)}
    return {"ok": True, "files": [f.model_dump() for f in results]}


def write_generated_file(project_root: Path, file_data: dict) -> dict:
    """Write one generated descriptor under ``project_root``.

    ``file_data`` is a ``GeneratedFile`` dict; its ``overwrite`` flag
    decides whether an existing file with different content is replaced.
    A file whose content already matches is left untouched.

    Returns:
        {"ok": True, "path": ..., "written": bool} or
        {"error": ..., "path": ..., "written": False}
    """
    rel_path = file_data.get("path", "")
    content = file_data.get("content", "")
    if not rel_path or not content:
        return {"error": "Missing path or content"}

    root = Path(project_root).resolve()
    target = (root / rel_path).resolve()
    if not target.is_relative_to(root):
        return {"error": f"Refusing to write outside the project: {rel_path}",
                "path": rel_path, "written": False}

    if target.is_file():
        if target.read_text(encoding="utf-8", errors="replace") == content:
            logger.debug("Unchanged: %s", target)
            return {"ok": True, "path": rel_path, "written": False}
        if not file_data.get("overwrite", False):
            return {"error": f"File already exists: {rel_path} (use --force to replace)",
                    "path": rel_path, "written": False}

    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(content, encoding="utf-8")
    logger.info("Wrote %s (%d lines)", target, content.count("\n"))
    return {"ok": True, "path": rel_path, "written": True}
