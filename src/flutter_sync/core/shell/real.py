"""Production Shell implementation using subprocess."""

import logging
import subprocess
from pathlib import Path

from flutter_sync.core.platform import PlatformProfile
from flutter_sync.core.shell.abc import CommandFailedError, Shell, ShellResult

logger = logging.getLogger(__name__)


class RealShell(Shell):
    """Production implementation using subprocess.

    One subprocess per call, awaited to completion with no timeout.
    """

    def __init__(self, profile: PlatformProfile) -> None:
        self._profile = profile

    def run(self, command_line: str, cwd: Path | None = None, echo: bool = False) -> ShellResult:
        argv = self._profile.shell_argv(command_line)
        logger.debug("Running %s (cwd=%s, echo=%s)", argv, cwd, echo)

        try:
            if echo:
                # Inherit the terminal so long-running steps show progress
                completed = subprocess.run(argv, cwd=cwd, check=False)
                return ShellResult(output="", returncode=completed.returncode)

            completed = subprocess.run(
                argv,
                cwd=cwd,
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
                text=True,
                encoding="utf-8",
                errors="replace",
                check=False,
            )
        except OSError as e:
            raise CommandFailedError(command_line, str(e)) from e

        logger.debug("Exit code %d for %r", completed.returncode, command_line)
        return ShellResult(output=completed.stdout or "", returncode=completed.returncode)
