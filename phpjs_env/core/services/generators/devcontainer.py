"""
Dev container generator — produce ``.devcontainer/Dockerfile`` and
``.devcontainer/devcontainer.json`` from a ContainerDescriptor.

The Dockerfile mirrors the host setup: essentials and PHP from apt,
Node.js from NodeSource, Composer behind the same SHA-384 signature
check, pnpm and Playwright through npm.
"""

from __future__ import annotations

import json
import re

from phpjs_env.core.models.descriptor import ContainerDescriptor
from phpjs_env.core.models.template import GeneratedFile
from phpjs_env.core.services.host_setup.data.constants import (
    COMPOSER_INSTALLER_URL,
    COMPOSER_SIGNATURE_URL,
)

DOCKERFILE_PATH = ".devcontainer/Dockerfile"
DEVCONTAINER_JSON_PATH = ".devcontainer/devcontainer.json"

_NODE_CHANNEL_RE = re.compile(r"^(lts|current|\d+)$")

# Debian package names: lowercase alnum plus . + -
_APT_PACKAGE_RE = re.compile(r"^[a-z0-9][a-z0-9.+-]*$")


def node_setup_script(channel: str) -> str:
    """NodeSource setup script name for ``channel`` (``setup_lts.x``, ``setup_22.x``).

    Raises:
        ValueError: ``channel`` is not lts, current or a major number.
    """
    normalized = channel.strip().lower()
    if not _NODE_CHANNEL_RE.match(normalized):
        raise ValueError(f"Invalid Node.js channel: {channel!r}")
    return f"setup_{normalized}.x"


def _apt_block(packages: list[str]) -> str:
    return " \\\n        ".join(packages)


def render_dockerfile(descriptor: ContainerDescriptor) -> str:
    """Render the container build file.

    Raises:
        ValueError: Invalid Node.js channel or apt package name.
    """
    setup_script = node_setup_script(descriptor.node_channel)
    packages = [*descriptor.apt_packages, *descriptor.php_packages]
    bad = [p for p in packages if not _APT_PACKAGE_RE.match(p)]
    if bad:
        raise ValueError(f"Invalid apt package name(s): {', '.join(bad)}")

    return f"""\
# Dev container for a PHP + Node.js toolchain.
# Generated by phpjs-env; regenerate with: phpjs-env generate devcontainer --write --force
FROM {descriptor.base_image}

ENV DEBIAN_FRONTEND=noninteractive

# ── Essentials + PHP ────────────────────────────────────────────
RUN apt-get update \\
    && apt-get install -y --no-install-recommends \\
        {_apt_block(packages)} \\
    && rm -rf /var/lib/apt/lists/*

# ── Node.js (NodeSource) ────────────────────────────────────────
RUN curl -fsSL https://deb.nodesource.com/{setup_script} | bash - \\
    && apt-get install -y --no-install-recommends nodejs \\
    && npm install -g npm@latest pnpm \\
    && rm -rf /var/lib/apt/lists/*

# ── Composer (signature-checked) ────────────────────────────────
RUN EXPECTED="$(curl -fsSL {COMPOSER_SIGNATURE_URL})" \\
    && curl -fsSL -o /tmp/composer-setup.php {COMPOSER_INSTALLER_URL} \\
    && ACTUAL="$(sha384sum /tmp/composer-setup.php | cut -d' ' -f1)" \\
    && if [ "$EXPECTED" != "$ACTUAL" ]; then \\
        echo 'ERROR: Invalid Composer installer checksum' >&2; \\
        rm -f /tmp/composer-setup.php; \\
        exit 1; \\
    fi \\
    && php /tmp/composer-setup.php --install-dir=/usr/local/bin --filename=composer \\
    && rm -f /tmp/composer-setup.php

# ── Playwright (system deps as root, browsers per user) ─────────
RUN npx --yes playwright install-deps \\
    && rm -rf /var/lib/apt/lists/*

USER {descriptor.remote_user}

RUN npx --yes playwright install
"""


def render_devcontainer_json(descriptor: ContainerDescriptor) -> str:
    """Render the container descriptor read by the editor."""
    data: dict = {
        "name": descriptor.name,
        "build": {"dockerfile": "Dockerfile", "context": ".."},
        "customizations": {
            "vscode": {
                "extensions": list(descriptor.extensions),
                "settings": dict(descriptor.settings),
            },
        },
        "remoteUser": descriptor.remote_user,
    }
    if descriptor.forward_ports:
        data["forwardPorts"] = list(descriptor.forward_ports)
    if descriptor.post_create_command:
        data["postCreateCommand"] = descriptor.post_create_command
    return json.dumps(data, indent=2, ensure_ascii=False) + "\n"


def generate_devcontainer(descriptor: ContainerDescriptor) -> list[GeneratedFile]:
    """Generate both dev container files.

    Raises:
        ValueError: See ``render_dockerfile``.
    """
    return [
        GeneratedFile(
            path=DOCKERFILE_PATH,
            content=render_dockerfile(descriptor),
            descriptor="container",
            overwrite=False,
            reason=f"Dev container image (Node.js {descriptor.node_channel})",
        ),
        GeneratedFile(
            path=DEVCONTAINER_JSON_PATH,
            content=render_devcontainer_json(descriptor),
            descriptor="container",
            overwrite=False,
            reason=f"Dev container config ({len(descriptor.extensions)} extensions)",
        ),
    ]
