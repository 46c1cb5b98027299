"""
Descriptor models — the two declarative deployment paths.

``WorkspaceDescriptor`` describes a managed cloud workspace (rendered to
``.idx/dev.nix``); ``ContainerDescriptor`` describes a dev container
(rendered to ``.devcontainer/Dockerfile`` + ``devcontainer.json``).
Neither is executed by this package — external platforms consume them.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from phpjs_env.core.services.host_setup.data.packages import (
    ESSENTIAL_PACKAGES,
    PHP_PACKAGES,
)

# ── Workspace (Nix) ─────────────────────────────────────────────

DEFAULT_NIX_PACKAGES: tuple[str, ...] = (
    "cacert",
    "curl",
    "git",
    "nodejs_latest",
    "pnpm",
    "php",
    "php.packages.composer",
    "zip",
)

DEFAULT_ON_START_UPDATE = (
    "echo 'Updating dependencies...' && "
    "if [ -f composer.json ]; then composer update; "
    "else echo '⏩ Skipping composer: composer.json not found.'; fi && "
    "if [ -f package.json ]; then pnpm update --latest; "
    "else echo '⏩ Skipping pnpm: package.json not found.'; fi"
)


class PreviewProcess(BaseModel):
    """One web preview run by the workspace platform."""

    command: list[str]
    manager: str = "web"
    env: dict[str, str] = Field(default_factory=dict)


class WorkspaceDescriptor(BaseModel):
    """Package set and lifecycle hooks of the managed workspace."""

    channel: str = "unstable"
    packages: list[str] = Field(default_factory=lambda: list(DEFAULT_NIX_PACKAGES))
    env: dict[str, str] = Field(default_factory=dict)
    extensions: list[str] = Field(default_factory=list)
    previews_enabled: bool = True
    previews: dict[str, PreviewProcess] = Field(default_factory=dict)
    on_create: dict[str, str] = Field(default_factory=dict)
    on_start: dict[str, str] = Field(
        default_factory=lambda: {"update": DEFAULT_ON_START_UPDATE},
    )


# ── Container ───────────────────────────────────────────────────

DEFAULT_VSCODE_EXTENSIONS: tuple[str, ...] = (
    "bmewburn.vscode-intelephense-client",
    "xdebug.php-debug",
    "dbaeumer.vscode-eslint",
    "esbenp.prettier-vscode",
    "ms-playwright.playwright",
)

DEFAULT_POST_CREATE = (
    "if [ -f composer.json ]; then composer install; fi && "
    "if [ -f package.json ]; then pnpm install; fi"
)


class ContainerDescriptor(BaseModel):
    """Base image, packages and editor customisations of the dev container."""

    name: str = "PHP + Node.js"
    base_image: str = "mcr.microsoft.com/devcontainers/base:bookworm"
    apt_packages: list[str] = Field(default_factory=lambda: list(ESSENTIAL_PACKAGES))
    php_packages: list[str] = Field(default_factory=lambda: list(PHP_PACKAGES))
    node_channel: str = "lts"   # "lts", "current" or a major version ("22")
    extensions: list[str] = Field(default_factory=lambda: list(DEFAULT_VSCODE_EXTENSIONS))
    settings: dict[str, Any] = Field(
        default_factory=lambda: {
            "php.validate.executablePath": "/usr/bin/php",
            "editor.formatOnSave": True,
        },
    )
    forward_ports: list[int] = Field(default_factory=list)
    post_create_command: str = DEFAULT_POST_CREATE
    remote_user: str = "vscode"
