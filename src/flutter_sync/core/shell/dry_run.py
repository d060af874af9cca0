"""No-op Shell wrapper for dry-run mode.

This module provides a Shell wrapper that prevents execution of mutating
commands while delegating read-only probes to the wrapped implementation.
"""

from pathlib import Path

import click

from flutter_sync.cli.output import user_output
from flutter_sync.core.shell.abc import Shell, ShellResult


class DryRunShell(Shell):
    """Wrapper that prints mutating commands instead of running them.

    Echoed commands are the mutating steps of a sync; captured commands are
    probes. Probes still run so the reported status stays accurate.

    Usage:
        real_shell = RealShell(profile)
        dry_run_shell = DryRunShell(real_shell)

        # Prints "[DRY RUN] Would run: git fetch" and returns success
        dry_run_shell.run("git fetch", cwd=sdk_root, echo=True)
    """

    def __init__(self, wrapped: Shell) -> None:
        """Create a dry-run wrapper around a Shell implementation.

        Args:
            wrapped: The Shell implementation to wrap (usually RealShell or FakeShell)
        """
        self._wrapped = wrapped

    def run(self, command_line: str, cwd: Path | None = None, echo: bool = False) -> ShellResult:
        if not echo:
            return self._wrapped.run(command_line, cwd=cwd, echo=False)

        location = f" (in {cwd})" if cwd is not None else ""
        user_output(click.style("[DRY RUN] ", fg="yellow") + f"Would run: {command_line}{location}")
        return ShellResult(output="", returncode=0)
