"""Fake implementation of Shell for testing.

This fake enables testing the probe and the reconciler without spawning
processes or having Flutter and git installed.
"""

import threading
from dataclasses import dataclass
from pathlib import Path

from flutter_sync.core.shell.abc import CommandFailedError, Shell, ShellResult


def ok(output: str = "") -> ShellResult:
    """Successful result with the given output."""
    return ShellResult(output=output, returncode=0)


def failed(output: str = "", returncode: int = 1) -> ShellResult:
    """Failed result with the given output and exit code."""
    return ShellResult(output=output, returncode=returncode)


def sdk_environment(
    *,
    version: str | None = "3.16.0",
    flutter_path: str | None = "/opt/flutter/bin/flutter",
    git_path: str | None = "/usr/bin/git",
) -> dict[str, ShellResult]:
    """Scripted results for a Linux host with Flutter and git on PATH.

    Pass None for any argument to simulate that piece being missing.
    """
    results: dict[str, ShellResult] = {}
    if flutter_path is not None:
        results["which flutter"] = ok(f"{flutter_path}\n")
    else:
        results["which flutter"] = failed()
    if git_path is not None:
        results["which git"] = ok(f"{git_path}\n")
    else:
        results["which git"] = failed()
    if version is not None:
        results["flutter --version"] = ok(
            f"Flutter {version} • channel stable • https://github.com/flutter/flutter.git\n"
            "Framework • revision abc123 • 2024-01-01\n"
            "Engine • revision def456\n"
            "Tools • Dart 3.2.0 • DevTools 2.28.0\n"
        )
    else:
        results["flutter --version"] = failed("sh: 1: flutter: not found", returncode=127)
    return results


@dataclass(frozen=True)
class ShellCall:
    """A recorded call to FakeShell.run()."""

    command_line: str
    cwd: Path | None
    echo: bool


class FakeShell(Shell):
    """In-memory fake implementation of shell operations.

    Constructor Injection:
    - All scripted results are provided via constructor parameters
    - Calls are recorded for assertions

    Commands without a scripted result succeed with empty output.

    Examples:
        # SDK 3.16.0 installed, git available
        >>> shell = FakeShell(results=sdk_environment(version="3.16.0"))

        # SDK reports 3.19.0 once any mutating command has run
        >>> shell = FakeShell(
        ...     results=sdk_environment(version="3.16.0"),
        ...     results_after_mutation=sdk_environment(version="3.19.0"),
        ... )

        # git fetch exits with 128
        >>> shell = FakeShell(results={..., "git fetch": failed("fatal", 128)})
    """

    def __init__(
        self,
        *,
        results: dict[str, ShellResult] | None = None,
        results_after_mutation: dict[str, ShellResult] | None = None,
        launch_failures: set[str] | None = None,
    ) -> None:
        """Initialize fake with scripted command results.

        Args:
            results: Mapping of command line to the result it returns
            results_after_mutation: Results that take precedence once an echoed
                (mutating) command has been run
            launch_failures: Command lines that raise CommandFailedError as if
                the process could not be started
        """
        self._results = results or {}
        self._results_after_mutation = results_after_mutation or {}
        self._launch_failures = launch_failures or set()
        self._calls: list[ShellCall] = []
        self._mutated = False
        self._lock = threading.Lock()

    def run(self, command_line: str, cwd: Path | None = None, echo: bool = False) -> ShellResult:
        with self._lock:
            self._calls.append(ShellCall(command_line, cwd, echo))
            if command_line in self._launch_failures:
                raise CommandFailedError(command_line, "[Errno 2] No such file or directory")
            if echo:
                self._mutated = True
            if self._mutated and command_line in self._results_after_mutation:
                return self._results_after_mutation[command_line]
            return self._results.get(command_line, ok())

    @property
    def calls(self) -> list[ShellCall]:
        """All run() calls in order.

        This property is for test assertions only.
        """
        with self._lock:
            return list(self._calls)

    @property
    def mutating_commands(self) -> list[str]:
        """Command lines of echoed (mutating) calls in order.

        This property is for test assertions only.
        """
        return [call.command_line for call in self.calls if call.echo]
