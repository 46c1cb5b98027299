"""
Tests for the on-start dependency refresh.
"""

from pathlib import Path

from conftest import RecordingRunner

from phpjs_env.core.services.workspace_hooks import refresh_dependencies


class TestRefreshDependencies:
    def test_both_manifests(self, tmp_path: Path):
        (tmp_path / "composer.json").write_text("{}")
        (tmp_path / "package.json").write_text("{}")
        runner = RecordingRunner()

        results = refresh_dependencies(tmp_path, runner)

        assert runner.calls == [["composer", "update"], ["pnpm", "update", "--latest"]]
        assert all(kw["cwd"] == str(tmp_path) for kw in runner.kwargs)
        assert [(r.step, r.status) for r in results] == [("composer", "ok"), ("pnpm", "ok")]

    def test_no_manifests_skips_with_messages(self, tmp_path: Path):
        runner = RecordingRunner()
        results = refresh_dependencies(tmp_path, runner)

        assert runner.calls == []
        assert [r.status for r in results] == ["skipped", "skipped"]
        assert results[0].output == "⏩ Skipping composer: composer.json not found."
        assert results[1].output == "⏩ Skipping pnpm: package.json not found."

    def test_only_package_json(self, tmp_path: Path):
        (tmp_path / "package.json").write_text("{}")
        runner = RecordingRunner()
        results = refresh_dependencies(tmp_path, runner)
        assert runner.calls == [["pnpm", "update", "--latest"]]
        assert results[0].status == "skipped"
        assert results[1].ok

    def test_failure_stops_chain(self, tmp_path: Path):
        (tmp_path / "composer.json").write_text("{}")
        (tmp_path / "package.json").write_text("{}")
        runner = RecordingRunner(fail_on={("composer",): 2})

        results = refresh_dependencies(tmp_path, runner)

        assert runner.calls == [["composer", "update"]]
        assert len(results) == 1
        assert results[0].failed
        assert results[0].metadata["returncode"] == 2
