"""
L1 Domain — Node.js release selection (pure).

Works on the parsed ``https://nodejs.org/dist/index.json`` document: a
list of release objects, newest first, where ``lts`` is either ``false``
or the LTS codename (``"Jod"``, ``"Iron"``, ...).
"""

from __future__ import annotations

from typing import Any

LTS = "lts"
CURRENT = "current"

CHANNELS = (LTS, CURRENT)


def parse_channel(raw: str) -> str | None:
    """Normalise an operator answer to a channel name.

    Accepts ``LTS`` and ``Current`` in any letter case, nothing else.

    Returns:
        ``"lts"``, ``"current"`` or ``None`` for an invalid answer.
    """
    value = raw.strip().lower()
    if value in CHANNELS:
        return value
    return None


def select_release(index: list[dict[str, Any]], channel: str) -> str:
    """Return the version string of the newest release on ``channel``.

    LTS picks the first entry whose ``lts`` field is truthy; Current picks
    the first entry whose ``lts`` is falsy or missing.

    Returns:
        The ``version`` field (``"v22.5.0"``), or ``""`` when nothing
        matches or the matching entry carries no version.
    """
    if channel not in CHANNELS:
        raise ValueError(f"Unknown Node.js channel: {channel!r}")

    want_lts = channel == LTS
    for entry in index:
        if not isinstance(entry, dict):
            continue
        if bool(entry.get("lts")) == want_lts:
            version = entry.get("version") or ""
            return str(version)
    return ""


def major_version(version: str) -> str:
    """Extract the major number: ``"v22.5.0"`` → ``"22"``."""
    return version.strip().removeprefix("v").split(".", 1)[0]


def nodesource_source_line(major: str, keyring: str) -> str:
    """APT source line for the NodeSource repository of one major version."""
    return (
        f"deb [signed-by={keyring}] "
        f"https://deb.nodesource.com/node_{major}.x nodistro main"
    )
