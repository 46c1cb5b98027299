"""
L0 Data — Module-level constants.

Pure data. No logic. No imports beyond stdlib.
"""

from __future__ import annotations

# Append-only run log, one timestamped line per event.
DEFAULT_LOG_FILE = "/var/log/phpjs-dev-environment-setup.log"

# Free space required on the root filesystem, in whole GiB.
REQUIRED_DISK_GB = 5

# Seconds to wait for a connection to any download endpoint.
HTTP_CONNECT_TIMEOUT = 15

USER_AGENT = "phpjs-env/0.1"

# ── Host file lines (check-then-append) ──────────────────────────

# Prefer IPv4-mapped addresses over IPv6 in getaddrinfo().
GAI_PRECEDENCE_LINE = "precedence ::ffff:0:0/96 100"

# Let Electron apps (VS Code) pick Wayland when available.
ELECTRON_OZONE_LINE = "ELECTRON_OZONE_PLATFORM_HINT=auto"

# ── Endpoints ────────────────────────────────────────────────────

NODE_RELEASE_INDEX_URL = "https://nodejs.org/dist/index.json"
NODESOURCE_KEY_URL = "https://deb.nodesource.com/gpgkey/nodesource-repo.gpg.key"
MICROSOFT_KEY_URL = "https://packages.microsoft.com/keys/microsoft.asc"
COMPOSER_SIGNATURE_URL = "https://composer.github.io/installer.sig"
COMPOSER_INSTALLER_URL = "https://getcomposer.org/installer"
PNPM_INSTALL_URL = "https://get.pnpm.io/install.sh"

# ── Debian releases ──────────────────────────────────────────────

# Codename → release number, for operator-facing upgrade prompts.
DEBIAN_RELEASES: dict[str, str] = {
    "bullseye": "11",
    "bookworm": "12",
    "trixie": "13",
    "forky": "14",
}
