"""
L4 Execution — Host configuration file edits.

Check-then-append is the only idempotence mechanism: re-running a step
never duplicates a line, but a line present in a different form is not
recognised (see ``domain.line_match``).
"""

from __future__ import annotations

import logging
import shutil
from pathlib import Path

from phpjs_env.core.services.host_setup.domain.line_match import line_present

logger = logging.getLogger(__name__)


def ensure_line(path: str | Path, line: str, *, anchored: bool = False) -> bool:
    """Append ``line`` to ``path`` unless it is already there.

    Args:
        path: Target file. A missing file is treated as empty and created.
        line: Exact text to look for and append.
        anchored: Require a line starting with ``line`` rather than a
            substring anywhere in the file.

    Returns:
        True if the line was appended, False if it was already present.
    """
    target = Path(path)
    try:
        content = target.read_text(encoding="utf-8")
    except FileNotFoundError:
        content = ""

    if line_present(content, line, anchored=anchored):
        logger.debug("Line already present in %s: %s", target, line)
        return False

    prefix = "\n" if content and not content.endswith("\n") else ""
    target.parent.mkdir(parents=True, exist_ok=True)
    with target.open("a", encoding="utf-8") as f:
        f.write(f"{prefix}{line}\n")
    logger.info("Appended to %s: %s", target, line)
    return True


def replace_in_file(path: str | Path, old: str, new: str) -> int:
    """Replace every occurrence of ``old`` with ``new`` in place.

    Returns:
        Number of replacements made. The file is only rewritten when > 0.
    """
    target = Path(path)
    content = target.read_text(encoding="utf-8")
    count = content.count(old)
    if count:
        target.write_text(content.replace(old, new), encoding="utf-8")
    logger.info("Replaced %d occurrence(s) of %r in %s", count, old, target)
    return count


def write_file(path: str | Path, content: str | bytes) -> None:
    """Create or truncate ``path`` with ``content``, creating parent dirs."""
    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    if isinstance(content, bytes):
        target.write_bytes(content)
    else:
        target.write_text(content, encoding="utf-8")


def clear_directory(path: str | Path) -> int:
    """Remove everything inside ``path`` but keep the directory itself.

    Entries that vanish or cannot be removed (sockets held by running
    services, for example) are logged and left behind.

    Returns:
        Number of entries removed.
    """
    root = Path(path)
    if not root.is_dir():
        return 0

    removed = 0
    for entry in root.iterdir():
        try:
            if entry.is_dir() and not entry.is_symlink():
                shutil.rmtree(entry)
            else:
                entry.unlink()
            removed += 1
        except FileNotFoundError:
            continue
        except OSError as exc:
            logger.warning("Could not remove %s: %s", entry, exc)
    return removed
