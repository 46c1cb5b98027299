"""
Tests for the signature-checked Composer installer.
"""

import hashlib
from pathlib import Path

import pytest

from conftest import COMPOSER_PAYLOAD, FakeFetcher, RecordingRunner

from phpjs_env.core.services.host_setup.domain.errors import (
    CommandError,
    FetchError,
    IntegrityError,
)
from phpjs_env.core.services.host_setup.execution.composer import (
    CHECKSUM_MISMATCH,
    INSTALLER_FILENAME,
    file_digest,
    install_composer,
)

SIG_URL = "https://composer.github.io/installer.sig"
INSTALLER_URL = "https://getcomposer.org/installer"


def _fetcher(signature: str) -> FakeFetcher:
    return FakeFetcher({SIG_URL: signature, INSTALLER_URL: COMPOSER_PAYLOAD})


def _install(fetcher, runner, work_dir: Path) -> dict:
    return install_composer(
        fetcher,
        runner,
        signature_url=SIG_URL,
        installer_url=INSTALLER_URL,
        work_dir=work_dir,
        install_dir="/usr/local/bin",
    )


class TestFileDigest:
    def test_sha384(self, tmp_path: Path):
        path = tmp_path / "f"
        path.write_bytes(b"abc")
        assert file_digest(path) == hashlib.sha384(b"abc").hexdigest()


class TestInstallComposer:
    def test_matching_signature_runs_installer(self, tmp_path: Path):
        digest = hashlib.sha384(COMPOSER_PAYLOAD).hexdigest()
        runner = RecordingRunner()
        result = _install(_fetcher(digest + "\n"), runner, tmp_path)

        installer = tmp_path / INSTALLER_FILENAME
        assert runner.calls == [[
            "php", str(installer), "--install-dir=/usr/local/bin", "--filename=composer",
        ]]
        assert result["sha384"] == digest
        assert not installer.exists()

    def test_signature_fetched_before_installer(self, tmp_path: Path):
        fetcher = _fetcher(hashlib.sha384(COMPOSER_PAYLOAD).hexdigest())
        _install(fetcher, RecordingRunner(), tmp_path)
        assert fetcher.requested == [SIG_URL, INSTALLER_URL]

    def test_mismatch_never_executes_and_removes_file(self, tmp_path: Path):
        runner = RecordingRunner()
        with pytest.raises(IntegrityError) as exc_info:
            _install(_fetcher("0" * 96), runner, tmp_path)

        assert str(exc_info.value) == CHECKSUM_MISMATCH
        assert exc_info.value.expected == "0" * 96
        assert runner.calls == []
        assert not (tmp_path / INSTALLER_FILENAME).exists()

    def test_failed_installer_is_removed(self, tmp_path: Path):
        runner = RecordingRunner(fail_on={("php",): 1})
        with pytest.raises(CommandError):
            _install(_fetcher(hashlib.sha384(COMPOSER_PAYLOAD).hexdigest()), runner, tmp_path)
        assert not (tmp_path / INSTALLER_FILENAME).exists()

    def test_signature_unreachable(self, tmp_path: Path):
        runner = RecordingRunner()
        with pytest.raises(FetchError):
            _install(FakeFetcher({INSTALLER_URL: COMPOSER_PAYLOAD}), runner, tmp_path)
        assert runner.calls == []
        assert not (tmp_path / INSTALLER_FILENAME).exists()
