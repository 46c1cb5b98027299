"""
Shared test fixtures and configuration.

Host setup tests never touch the real machine: every host file lives
under ``tmp_path``, commands go to ``RecordingRunner``, downloads come
from ``FakeFetcher`` and prompts from ``ScriptedPrompter``.
"""

from __future__ import annotations

import hashlib
import io
import json
from pathlib import Path
from types import SimpleNamespace
from unittest.mock import patch

import pytest

from phpjs_env.core.models.settings import SetupSettings
from phpjs_env.core.observability.logging_config import RunLog
from phpjs_env.core.services.host_setup.domain.errors import CommandError, FetchError
from phpjs_env.core.services.host_setup.execution.subprocess_runner import CommandRunner
from phpjs_env.core.services.host_setup.orchestration.prompter import Prompter

PROCEDURE = "phpjs_env.core.services.host_setup.orchestration.procedure"

NODE_INDEX = [
    {"version": "v23.3.0", "lts": False},
    {"version": "v22.12.0", "lts": "Jod"},
    {"version": "v23.2.0", "lts": False},
    {"version": "v20.18.1", "lts": "Iron"},
]

COMPOSER_PAYLOAD = b"<?php // composer installer\n"


# ── Fakes ───────────────────────────────────────────────────────


class RecordingRunner(CommandRunner):
    """CommandRunner that records argv lists instead of spawning processes.

    ``fail_on`` maps a command prefix (tuple) to the exit code to fail with.
    """

    def __init__(self, fail_on: dict[tuple[str, ...], int] | None = None):
        self.calls: list[list[str]] = []
        self.kwargs: list[dict] = []
        self.fail_on = fail_on or {}

    def run(self, cmd, **kwargs) -> str:
        self.calls.append(list(cmd))
        self.kwargs.append(kwargs)
        for prefix, code in self.fail_on.items():
            if tuple(cmd[: len(prefix)]) == prefix:
                raise CommandError(cmd, code, stderr="simulated failure")
        return ""

    def commands(self) -> list[str]:
        return [" ".join(c) for c in self.calls]


class FakeFetcher:
    """Serves canned responses by URL; unknown URLs raise FetchError."""

    def __init__(self, responses: dict[str, object]):
        self.responses = responses
        self.requested: list[str] = []

    def fetch_bytes(self, url: str) -> bytes:
        self.requested.append(url)
        if url not in self.responses:
            raise FetchError(f"Failed to fetch {url}: not found", url=url)
        body = self.responses[url]
        if isinstance(body, bytes):
            return body
        if isinstance(body, str):
            return body.encode()
        return json.dumps(body).encode()

    def fetch_text(self, url: str) -> str:
        return self.fetch_bytes(url).decode()

    def fetch_json(self, url: str):
        return json.loads(self.fetch_bytes(url))


class ScriptedPrompter(Prompter):
    """Answers prompts from a fixed list, recording each question."""

    def __init__(self, answers: list[str] | None = None):
        self.answers = list(answers or [])
        self.questions: list[str] = []

    def ask(self, question: str) -> str:
        self.questions.append(question)
        if not self.answers:
            raise AssertionError(f"Unexpected prompt: {question}")
        return self.answers.pop(0)


# ── Fixtures ────────────────────────────────────────────────────


@pytest.fixture
def project_root() -> Path:
    """Return the project root directory."""
    return Path(__file__).parent.parent


@pytest.fixture
def host_root(tmp_path: Path) -> Path:
    """A fake Debian bookworm filesystem under tmp_path."""
    etc = tmp_path / "etc"
    (etc / "apt" / "sources.list.d").mkdir(parents=True)
    (etc / "os-release").write_text(
        'PRETTY_NAME="Debian GNU/Linux 12 (bookworm)"\n'
        "ID=debian\n"
        "VERSION_CODENAME=bookworm\n"
    )
    (etc / "apt" / "sources.list").write_text(
        "deb http://deb.debian.org/debian bookworm main\n"
        "deb http://security.debian.org/debian-security bookworm-security main\n"
    )
    (etc / "gai.conf").write_text("# Configuration for getaddrinfo(3).\n")
    (etc / "environment").write_text("")
    for name in ("tmp", "var-tmp", "work"):
        (tmp_path / name).mkdir()
    return tmp_path


@pytest.fixture
def settings(host_root: Path) -> SetupSettings:
    """SetupSettings pointing every host path into host_root."""
    etc = host_root / "etc"
    return SetupSettings(
        log_file=str(host_root / "log" / "setup.log"),
        disk_check_path=str(host_root),
        gai_conf=str(etc / "gai.conf"),
        environment_file=str(etc / "environment"),
        os_release=str(etc / "os-release"),
        apt_sources_list=str(etc / "apt" / "sources.list"),
        apt_sources_dir=str(etc / "apt" / "sources.list.d"),
        keyrings_dir=str(etc / "apt" / "keyrings"),
        work_dir=str(host_root / "work"),
        temp_dirs=[str(host_root / "tmp"), str(host_root / "var-tmp")],
    )


@pytest.fixture
def fetcher(settings: SetupSettings) -> FakeFetcher:
    """Every endpoint the procedure uses, with a matching Composer signature."""
    return FakeFetcher({
        settings.node_release_index_url: NODE_INDEX,
        settings.nodesource_key_url: b"-----BEGIN PGP PUBLIC KEY BLOCK-----nodesource",
        settings.microsoft_key_url: b"-----BEGIN PGP PUBLIC KEY BLOCK-----microsoft",
        settings.composer_signature_url: hashlib.sha384(COMPOSER_PAYLOAD).hexdigest() + "\n",
        settings.composer_installer_url: COMPOSER_PAYLOAD,
    })


@pytest.fixture
def runner() -> RecordingRunner:
    return RecordingRunner()


@pytest.fixture
def log_stream() -> io.StringIO:
    return io.StringIO()


@pytest.fixture
def run_log(settings: SetupSettings, log_stream: io.StringIO):
    log = RunLog(settings.log_file, stream=log_stream)
    yield log
    log.close()


@pytest.fixture
def host():
    """Patch the host probes used by the procedure to a healthy root host."""
    with (
        patch(f"{PROCEDURE}.is_elevated", return_value=True) as elevated,
        patch(f"{PROCEDURE}.has_package_manager", return_value=True) as pm,
        patch(f"{PROCEDURE}.available_disk_gb", return_value=10) as disk,
        patch(f"{PROCEDURE}.command_available", return_value=False) as cmd,
        patch(f"{PROCEDURE}.dpkg_architecture", return_value="amd64") as arch,
        patch(f"{PROCEDURE}.git_identity_configured", return_value=False) as git,
    ):
        yield SimpleNamespace(
            is_elevated=elevated,
            has_package_manager=pm,
            available_disk_gb=disk,
            command_available=cmd,
            dpkg_architecture=arch,
            git_identity_configured=git,
        )
