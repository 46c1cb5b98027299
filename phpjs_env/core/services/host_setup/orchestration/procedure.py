"""
L5 Orchestration — The host setup procedure.

A strictly sequential list of steps run once, as root, on a Debian host:

    preconditions → gai.conf → system/release upgrade → essentials
    → VS Code (optional) → Node.js channel → NodeSource + nodejs
    → pnpm + Playwright (per user) → PHP → Composer (verified)
    → Git identity (per user) → Electron hint → cleanup → summary

Fail-fast: the first ``SetupError`` ends the run with exit status 1.
Nothing is retried and nothing already applied is rolled back. The
only degraded path is an unknown invoking user, which skips the
per-user steps and carries on.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from pathlib import Path

from phpjs_env.core.models.settings import SetupAnswers, SetupSettings
from phpjs_env.core.observability.logging_config import RunLog
from phpjs_env.core.services.host_setup.data.constants import DEBIAN_RELEASES
from phpjs_env.core.services.host_setup.detection.environment import (
    command_available,
    dpkg_architecture,
    git_identity_configured,
    is_debian,
    read_os_release,
)
from phpjs_env.core.services.host_setup.detection.preconditions import (
    available_disk_gb,
    has_package_manager,
    invoking_user,
    is_elevated,
)
from phpjs_env.core.services.host_setup.domain.answers import is_yes
from phpjs_env.core.services.host_setup.domain.errors import (
    PreconditionError,
    ResolutionError,
    SetupError,
)
from phpjs_env.core.services.host_setup.domain.node_release import (
    LTS,
    nodesource_source_line,
    parse_channel,
)
from phpjs_env.core.services.host_setup.execution.apt import AptClient
from phpjs_env.core.services.host_setup.execution.composer import install_composer
from phpjs_env.core.services.host_setup.execution.download import HttpFetcher
from phpjs_env.core.services.host_setup.execution.host_files import (
    clear_directory,
    ensure_line,
    replace_in_file,
)
from phpjs_env.core.services.host_setup.execution.node_index import latest_node_release
from phpjs_env.core.services.host_setup.execution.subprocess_runner import CommandRunner
from phpjs_env.core.services.host_setup.execution.user_tools import (
    MANUAL_STEPS,
    configure_git,
    install_playwright,
    install_pnpm,
)
from phpjs_env.core.services.host_setup.orchestration.prompter import (
    ClickPrompter,
    Prompter,
)

logger = logging.getLogger(__name__)

CRITICAL_EXIT_MESSAGE = "⚠️ Critical error occurred. Exiting setup."

VSCODE_REPO = "https://packages.microsoft.com/repos/code stable main"


def _release_label(codename: str) -> str:
    number = DEBIAN_RELEASES.get(codename)
    if number:
        return f"Debian {number} ({codename.capitalize()})"
    return f"Debian {codename.capitalize()}"


class SetupProcedure:
    """One run of the host setup.

    Every collaborator is injectable so the procedure can be driven
    without a real terminal, network or apt.
    """

    def __init__(
        self,
        settings: SetupSettings | None = None,
        *,
        answers: SetupAnswers | None = None,
        prompter: Prompter | None = None,
        runner: CommandRunner | None = None,
        fetcher: HttpFetcher | None = None,
        environ: Mapping[str, str] | None = None,
        log: RunLog | None = None,
    ):
        self.settings = settings or SetupSettings()
        self.answers = answers or SetupAnswers()
        self.prompter = prompter or ClickPrompter()
        self.runner = runner or CommandRunner()
        self.fetcher = fetcher or HttpFetcher(timeout=self.settings.http_timeout)
        self.environ = os.environ if environ is None else environ
        self.log = log or RunLog(self.settings.log_file)
        self.apt = AptClient(self.runner, binary=self.settings.package_manager)

        self.user: str | None = None
        self.node_channel: str | None = None
        self.node_version: str = ""
        self.node_major: str = ""

    # ── Entry point ─────────────────────────────────────────────

    def run(self) -> int:
        """Execute every step in order.

        Returns:
            0 on full success, 1 after any fatal setup error.
        """
        try:
            self.execute()
        except SetupError as exc:
            message = str(exc)
            if message:
                self.log.error(message)
            self.log.error(CRITICAL_EXIT_MESSAGE)
            logger.debug("Setup aborted", exc_info=True)
            return 1
        finally:
            self.log.close()
        return 0

    def execute(self) -> None:
        """Run the steps, raising on the first fatal error."""
        self.log("🚀 Starting system setup...")
        self.check_preconditions()
        self.configure_ipv4_precedence()
        self.upgrade_system()
        self.install_essentials()
        self.install_vscode()
        self.choose_node_channel()
        self.resolve_node_version()
        self.install_nodejs()
        self.install_user_tools()
        self.install_php()
        self.install_composer()
        self.configure_git()
        self.configure_electron_hint()
        self.cleanup()
        self.summary()

    # ── Answers ─────────────────────────────────────────────────

    def _answer(self, key: str, question: str) -> str:
        preset = getattr(self.answers, key)
        if preset is not None:
            logger.debug("Using preset answer for %s", key)
            return preset
        return self.prompter.ask(question)

    def _confirm(self, key: str, question: str) -> bool:
        preset = getattr(self.answers, key)
        if preset is not None:
            logger.debug("Using preset answer for %s: %s", key, preset)
            return bool(preset)
        return is_yes(self.prompter.ask(f"{question} [y/N]"))

    # ── 1. Preconditions ────────────────────────────────────────

    def check_preconditions(self) -> None:
        """Privilege, invoking user, package manager, disk space — in that order."""
        s = self.settings

        if not is_elevated():
            raise PreconditionError("❌ This script must be run as root. Please use 'sudo'.")

        # Root from here on: the run log may now be written to disk.
        self.log.attach_file()

        self.user = invoking_user(self.environ)
        if self.user is None:
            self.log.warning(
                "⚠️  Cannot determine the original user. Git configuration will be skipped."
            )

        self.log(f"🔍 Checking for {s.package_manager.upper()} package manager...")
        if not has_package_manager(s.package_manager):
            raise PreconditionError(
                f"❌ This script requires the '{s.package_manager}' package manager "
                "and cannot continue."
            )
        self.log(f"👍 {s.package_manager.upper()} command found.")

        self.log("🔍 Checking for sufficient disk space...")
        available = available_disk_gb(s.disk_check_path)
        if available < s.required_disk_gb:
            raise PreconditionError(
                f"❌ Insufficient disk space. Requires ~{s.required_disk_gb}GB, "
                f"but only {available}GB is available."
            )
        self.log(f"👍 Available disk space: {available}GB. Proceeding...")

    # ── 2. Host adjustments ─────────────────────────────────────

    def configure_ipv4_precedence(self) -> None:
        path = self.settings.gai_conf
        if ensure_line(path, self.settings.gai_precedence_line):
            self.log(f"🔧 Set IPv4-mapped IPv6 addresses to default precedence in {path}.")
        else:
            self.log(f"👍 IPv4 precedence already set in {path}.")

    def configure_electron_hint(self) -> None:
        path = self.settings.environment_file
        line = self.settings.electron_ozone_line
        self.log(f"Adding {line} to {path}...")
        if ensure_line(path, line, anchored=True):
            self.log(f"✅ Added {line.split('=', 1)[0]} to {path}.")
        else:
            self.log(f"ℹ️ {line.split('=', 1)[0]} already present in {path}.")

    # ── 3. System / release upgrade ─────────────────────────────

    def upgrade_system(self) -> None:
        s = self.settings
        os_release = read_os_release(s.os_release)

        if not is_debian(os_release):
            self.log("ℹ️  OS is not Debian. Skipping the release upgrade prompt.")
            self.log("Performing standard system update...")
            self._standard_update()
            return

        old, new = s.upgrade_from_codename, s.upgrade_to_codename
        question = (
            "This is a Debian system. Do you want to upgrade from "
            f"{_release_label(old)} to {_release_label(new)}?"
        )
        if self._confirm("os_upgrade", question):
            self.log(f"🚀 Upgrading from {old.capitalize()} to {new.capitalize()}...")
            if not Path(s.apt_sources_list).is_file():
                raise SetupError(f"❌ APT sources list not found: {s.apt_sources_list}")
            replace_in_file(s.apt_sources_list, old, new)
            self.apt.update()
            self.apt.full_upgrade()
        else:
            self.log("Skipping Debian release upgrade. Continuing with a standard system update...")
            self._standard_update()

    def _standard_update(self) -> None:
        self.apt.update()
        self.apt.upgrade()

    # ── 4. Packages ─────────────────────────────────────────────

    def install_essentials(self) -> None:
        self.log("📦 Installing essential packages...")
        self.apt.install(self.settings.essential_packages, no_recommends=True)

    def install_vscode(self) -> None:
        if command_available("code"):
            self.log("👍 Visual Studio Code is already installed.")
            return

        if not self._confirm("install_vscode", "Do you want to install Visual Studio Code?"):
            self.log("Skipping Visual Studio Code installation.")
            return

        self.log("📦 Installing Visual Studio Code...")
        s = self.settings
        keyring = str(Path(s.keyrings_dir) / "microsoft.gpg")
        self.apt.add_keyring(self.fetcher.fetch_bytes(s.microsoft_key_url), keyring)
        self.apt.write_source(
            Path(s.apt_sources_dir) / "vscode.list",
            f"deb [arch={dpkg_architecture()} signed-by={keyring}] {VSCODE_REPO}",
        )
        self.apt.update()
        self.apt.install(["code"])

    def install_php(self) -> None:
        self.log("📦 Installing PHP and required extensions...")
        self.apt.install(self.settings.php_packages, no_recommends=True)

    # ── 5. Node.js ──────────────────────────────────────────────

    def choose_node_channel(self) -> str:
        """Ask until the operator names a valid channel."""
        self.log("🔧 Preparing to add Node.js repository...")
        while True:
            raw = self._answer(
                "node_channel",
                "Install the latest Node.js 'LTS' or 'Current' release? [LTS/Current]",
            )
            channel = parse_channel(raw)
            if channel is not None:
                break
            self.log("❌ Invalid choice. Please enter 'LTS' or 'Current'.")

        label = "LTS" if channel == LTS else "Current"
        self.log(f"👍 Selected latest '{label}' release.")
        self.node_channel = channel
        return channel

    def resolve_node_version(self) -> str:
        """Look up the newest version on the chosen channel."""
        if self.node_channel is None:
            raise ResolutionError("❌ No Node.js channel selected.")

        self.log("🔍 Finding latest version number from nodejs.org...")
        version, major = latest_node_release(
            self.fetcher, self.settings.node_release_index_url, self.node_channel,
        )
        self.node_version = version
        self.node_major = major
        self.log(f"✅ Found version: {version}. Using major version: {major}")
        return version

    def install_nodejs(self) -> None:
        s = self.settings
        keyring = str(Path(s.keyrings_dir) / "nodesource.gpg")

        self.log("Adding NodeSource GPG key...")
        self.apt.add_keyring(self.fetcher.fetch_bytes(s.nodesource_key_url), keyring)

        self.log(f"Adding Node.js v{self.node_major} repository...")
        self.apt.write_source(
            Path(s.apt_sources_dir) / "nodesource.list",
            nodesource_source_line(self.node_major, keyring),
        )

        self.log("Updating package lists for Node.js...")
        self.apt.update()

        self.log("📦 Installing Node.js...")
        self.apt.install(["nodejs"], no_recommends=True)

        self.log("Upgrading npm and installing pnpm globally...")
        self.runner.run(["npm", "install", "-g", "npm@latest"])

    # ── 6. Per-user tools ───────────────────────────────────────

    def install_user_tools(self) -> None:
        self.log("📦 Installing pnpm using the official script (to avoid memory issues)...")
        if self.user is None:
            self.log.warning(
                "⚠️ Could not determine original user. Skipping pnpm and Playwright installation."
            )
            self.log("To install manually, run as a regular user in this order:")
            for step in MANUAL_STEPS:
                self.log(step)
            return

        install_pnpm(self.runner, self.user, self.settings.pnpm_install_url)
        self.log(f"👍 pnpm installed for user '{self.user}'.")

        self.log(f"📦 Installing Playwright globally for user '{self.user}'...")
        install_playwright(self.runner, self.user)
        self.log("👍 Playwright and its browsers installed globally.")
        self.log(
            "ℹ️ A new terminal session may be needed for 'pnpm' and 'playwright' "
            "commands to be available in your path."
        )

    # ── 7. Composer ─────────────────────────────────────────────

    def install_composer(self) -> None:
        s = self.settings
        self.log("📦 Installing Composer...")
        install_composer(
            self.fetcher,
            self.runner,
            signature_url=s.composer_signature_url,
            installer_url=s.composer_installer_url,
            work_dir=s.work_dir,
            install_dir=s.composer_install_dir,
        )
        self.log("👍 Composer installed successfully.")

    # ── 8. Git identity ─────────────────────────────────────────

    def configure_git(self) -> None:
        user = self.user
        if user is None:
            self.log("Skipping Git configuration because the original user could not be determined.")
            return

        if git_identity_configured(user):
            self.log(f"Git is already configured for '{user}'.")
            return

        question = "Do you want to configure Git with your name, email, and credential helper?"
        if not self._confirm("configure_git", question):
            self.log("Skipping Git configuration.")
            return

        name = self._answer("git_name", "Enter your full name for Git:")
        email = self._answer("git_email", "Enter your email for Git:")

        self.log(f"🔧 Configuring Git for user '{user}'...")
        configure_git(
            self.runner,
            user,
            name=name,
            email=email,
            credential_helper=self.settings.git_credential_helper,
        )
        self.log("👍 Git has been configured.")

    # ── 9. Cleanup & summary ────────────────────────────────────

    def cleanup(self) -> None:
        self.log("🧹 Cleaning up...")
        self.apt.autoremove()
        self.apt.clean()
        for temp_dir in self.settings.temp_dirs:
            clear_directory(temp_dir)

    def summary(self) -> None:
        self.log("✅ System setup is complete!")
        self.log("A reboot is recommended to ensure all changes take effect.")
        self.log("You can reboot now by running: sudo reboot")
