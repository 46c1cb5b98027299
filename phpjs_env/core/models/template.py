"""
GeneratedFile — one rendered descriptor file, not yet on disk.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel


class GeneratedFile(BaseModel):
    """Output of ``generators/``.

    ``path`` is relative to the project root (``.idx/dev.nix``,
    ``.devcontainer/Dockerfile``). Writers leave an existing file alone
    unless ``overwrite`` is set.
    """

    path: str
    content: str
    descriptor: Literal["workspace", "container"]
    overwrite: bool = False
    reason: str = ""
