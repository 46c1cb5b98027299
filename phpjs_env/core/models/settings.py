"""
Setup settings — every path, URL and threshold the host procedure touches.

The defaults reproduce a stock Debian host. Tests and operators override
individual fields through ``phpjs-env.yml`` (see ``core.config.loader``)
instead of patching module constants.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

from phpjs_env.core.models.descriptor import ContainerDescriptor, WorkspaceDescriptor
from phpjs_env.core.services.host_setup.data.constants import (
    COMPOSER_INSTALLER_URL,
    COMPOSER_SIGNATURE_URL,
    DEFAULT_LOG_FILE,
    ELECTRON_OZONE_LINE,
    GAI_PRECEDENCE_LINE,
    HTTP_CONNECT_TIMEOUT,
    MICROSOFT_KEY_URL,
    NODE_RELEASE_INDEX_URL,
    NODESOURCE_KEY_URL,
    PNPM_INSTALL_URL,
    REQUIRED_DISK_GB,
)
from phpjs_env.core.services.host_setup.data.packages import (
    ESSENTIAL_PACKAGES,
    PHP_PACKAGES,
)


class SetupAnswers(BaseModel):
    """Pre-seeded answers for the interactive prompts.

    ``None`` means "ask the operator". Anything set here is used as if
    it had been typed at the prompt.
    """

    os_upgrade: bool | None = None
    install_vscode: bool | None = None
    node_channel: Literal["lts", "current"] | None = None
    configure_git: bool | None = None
    git_name: str | None = None
    git_email: str | None = None


class SetupSettings(BaseModel):
    """Host procedure configuration."""

    # ── Run log ──
    log_file: str = DEFAULT_LOG_FILE

    # ── Preconditions ──
    package_manager: str = "apt"
    required_disk_gb: int = REQUIRED_DISK_GB
    disk_check_path: str = "/"

    # ── Host files ──
    gai_conf: str = "/etc/gai.conf"
    environment_file: str = "/etc/environment"
    os_release: str = "/etc/os-release"
    apt_sources_list: str = "/etc/apt/sources.list"
    apt_sources_dir: str = "/etc/apt/sources.list.d"
    keyrings_dir: str = "/etc/apt/keyrings"
    gai_precedence_line: str = GAI_PRECEDENCE_LINE
    electron_ozone_line: str = ELECTRON_OZONE_LINE

    # ── Release upgrade ──
    upgrade_from_codename: str = "bookworm"
    upgrade_to_codename: str = "trixie"

    # ── Network ──
    http_timeout: int = HTTP_CONNECT_TIMEOUT
    node_release_index_url: str = NODE_RELEASE_INDEX_URL
    nodesource_key_url: str = NODESOURCE_KEY_URL
    microsoft_key_url: str = MICROSOFT_KEY_URL
    composer_signature_url: str = COMPOSER_SIGNATURE_URL
    composer_installer_url: str = COMPOSER_INSTALLER_URL
    pnpm_install_url: str = PNPM_INSTALL_URL

    # ── Packages ──
    essential_packages: list[str] = Field(default_factory=lambda: list(ESSENTIAL_PACKAGES))
    php_packages: list[str] = Field(default_factory=lambda: list(PHP_PACKAGES))

    # ── Composer ──
    work_dir: str = "."
    composer_install_dir: str = "/usr/local/bin"

    # ── Git ──
    git_credential_helper: str = "cache --timeout=2592000"

    # ── Cleanup ──
    temp_dirs: list[str] = Field(default_factory=lambda: ["/tmp", "/var/tmp"])


class SetupConfig(BaseModel):
    """Top-level document of ``phpjs-env.yml``."""

    settings: SetupSettings = Field(default_factory=SetupSettings)
    answers: SetupAnswers = Field(default_factory=SetupAnswers)
    workspace: WorkspaceDescriptor = Field(default_factory=WorkspaceDescriptor)
    container: ContainerDescriptor = Field(default_factory=ContainerDescriptor)
