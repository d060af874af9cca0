"""Tests for the sync command."""

from pathlib import Path

from click.testing import CliRunner

from flutter_sync.cli.cli import cli
from flutter_sync.core.context import SyncContext
from tests.fakes.shell import FakeShell, failed, sdk_environment


def test_sync_already_in_sync(tmp_path: Path) -> None:
    (tmp_path / "pubspec.yaml").write_text("environment:\n  flutter: 3.19.0\n", encoding="utf-8")
    shell = FakeShell(results=sdk_environment(version="3.19.0"))
    ctx = SyncContext.for_test(shell, tmp_path)

    result = CliRunner().invoke(cli, ["sync"], obj=ctx)

    assert result.exit_code == 0, result.output
    assert "Already in sync" in result.output
    assert shell.mutating_commands == []


def test_sync_switches_channel(tmp_path: Path) -> None:
    shell = FakeShell(results=sdk_environment(version="3.16.0"))
    ctx = SyncContext.for_test(shell, tmp_path)

    result = CliRunner().invoke(cli, ["sync", "-v", "beta"], obj=ctx)

    assert result.exit_code == 0, result.output
    assert "Desired version: beta" in result.output
    assert "flutter channel beta" in result.output
    assert shell.mutating_commands == ["flutter channel beta"]


def test_sync_checks_out_manifest_version(tmp_path: Path) -> None:
    (tmp_path / "pubspec.yaml").write_text("environment:\n  flutter: 3.19.0\n", encoding="utf-8")
    shell = FakeShell(
        results=sdk_environment(version="3.16.0"),
        results_after_mutation=sdk_environment(version="3.19.0"),
    )
    ctx = SyncContext.for_test(shell, tmp_path)

    result = CliRunner().invoke(cli, ["sync"], obj=ctx)

    assert result.exit_code == 0, result.output
    assert "Current status" in result.output
    assert "Updated status" in result.output
    assert "Sync Complete" in result.output
    assert "git checkout 3.19.0" in shell.mutating_commands
    assert "Warning" not in result.output


def test_sync_warns_on_residual_mismatch(tmp_path: Path) -> None:
    shell = FakeShell(results=sdk_environment(version="3.16.0"))
    ctx = SyncContext.for_test(shell, tmp_path)

    result = CliRunner().invoke(cli, ["sync", "--desired-version", "3.19.0"], obj=ctx)

    assert result.exit_code == 0, result.output
    assert "Warning: Flutter reports 3.16.0, expected 3.19.0" in result.output


def test_sync_failure_exits_with_error(tmp_path: Path) -> None:
    results = sdk_environment()
    results["git checkout 3.19.0"] = failed("error: pathspec '3.19.0' did not match", 1)
    shell = FakeShell(results=results)
    ctx = SyncContext.for_test(shell, tmp_path)

    result = CliRunner().invoke(cli, ["sync", "-v", "3.19.0"], obj=ctx)

    assert result.exit_code == 1
    assert "Sync Failed" in result.output
    assert "pathspec" in result.output
    assert "flutter doctor" not in shell.mutating_commands


def test_sync_without_target_version(tmp_path: Path) -> None:
    shell = FakeShell(results=sdk_environment())
    ctx = SyncContext.for_test(shell, tmp_path)

    result = CliRunner().invoke(cli, ["sync"], obj=ctx)

    assert result.exit_code == 1
    assert "No target version known" in result.output
    assert shell.mutating_commands == []


def test_sync_without_git(tmp_path: Path) -> None:
    shell = FakeShell(results=sdk_environment(git_path=None))
    ctx = SyncContext.for_test(shell, tmp_path)

    result = CliRunner().invoke(cli, ["sync", "-v", "3.19.0"], obj=ctx)

    assert result.exit_code == 1
    assert "'git' was not found on PATH" in result.output
    assert shell.mutating_commands == []


def test_sync_dry_run_does_not_mutate(tmp_path: Path) -> None:
    shell = FakeShell(results=sdk_environment(version="3.16.0"))
    ctx = SyncContext.for_test(shell, tmp_path)

    result = CliRunner().invoke(cli, ["sync", "-v", "3.19.0", "--dry-run"], obj=ctx)

    assert result.exit_code == 0, result.output
    assert "[DRY RUN] Would run: git fetch" in result.output
    assert shell.mutating_commands == []
