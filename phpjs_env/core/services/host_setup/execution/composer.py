"""
L4 Execution — Signature-checked Composer installer.

The published SHA-384 is fetched first, the installer second, and the
installer is only executed when the locally computed digest matches.
On mismatch the downloaded file is removed before raising.
"""

from __future__ import annotations

import hashlib
import logging
from pathlib import Path
from typing import Any

from phpjs_env.core.services.host_setup.domain.errors import IntegrityError
from phpjs_env.core.services.host_setup.execution.download import HttpFetcher
from phpjs_env.core.services.host_setup.execution.host_files import write_file
from phpjs_env.core.services.host_setup.execution.subprocess_runner import CommandRunner

logger = logging.getLogger(__name__)

INSTALLER_FILENAME = "composer-setup.php"

CHECKSUM_MISMATCH = "❌ ERROR: Invalid Composer installer checksum"


def file_digest(path: Path, algo: str = "sha384") -> str:
    """Hex digest of a file, read in chunks."""
    h = hashlib.new(algo)
    with open(path, "rb") as f:
        for chunk in iter(lambda: f.read(8192), b""):
            h.update(chunk)
    return h.hexdigest()


def install_composer(
    fetcher: HttpFetcher,
    runner: CommandRunner,
    *,
    signature_url: str,
    installer_url: str,
    work_dir: str | Path = ".",
    install_dir: str = "/usr/local/bin",
) -> dict[str, Any]:
    """Download, verify and run the Composer installer.

    Returns::

        {"sha384": "...", "installer": "/path/composer-setup.php",
         "install_dir": "/usr/local/bin"}

    Raises:
        FetchError: Either download failed (nothing executed).
        IntegrityError: Digest mismatch (installer deleted, not executed).
        CommandError: The installer itself failed (installer deleted).
    """
    expected = fetcher.fetch_text(signature_url).strip()

    installer = Path(work_dir) / INSTALLER_FILENAME
    write_file(installer, fetcher.fetch_bytes(installer_url))

    actual = file_digest(installer)
    if actual != expected:
        installer.unlink(missing_ok=True)
        logger.warning(
            "Composer installer digest mismatch: expected=%s actual=%s",
            expected, actual,
        )
        raise IntegrityError(CHECKSUM_MISMATCH, expected=expected, actual=actual)

    try:
        runner.run([
            "php", str(installer),
            f"--install-dir={install_dir}",
            "--filename=composer",
        ])
    finally:
        installer.unlink(missing_ok=True)

    return {
        "sha384": actual,
        "installer": str(installer),
        "install_dir": install_dir,
    }
