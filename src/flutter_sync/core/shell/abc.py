"""Shell command execution interface.

This module provides a clean abstraction over running command lines through
the host shell, making the reconciliation engine testable without spawning
real processes.

Architecture:
- Shell: Abstract base class defining the interface
- RealShell: Production implementation using subprocess
- DryRunShell: Wrapper that prints mutating commands instead of running them
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path


class ShellError(Exception):
    """Base class for shell execution failures."""


class UnsupportedPlatformError(ShellError):
    """The host operating system is not Windows, macOS or Linux."""


class CommandFailedError(ShellError):
    """A command could not be launched or exited unsuccessfully."""

    def __init__(self, command_line: str, cause: str) -> None:
        super().__init__(f"Command '{command_line}' failed: {cause}")
        self.command_line = command_line
        self.cause = cause


@dataclass(frozen=True)
class ShellResult:
    """Outcome of a single command invocation.

    Attributes:
        output: Combined stdout and stderr. Empty when the output was echoed
            to the terminal instead of captured.
        returncode: Exit status of the shell process
    """

    output: str
    returncode: int

    @property
    def success(self) -> bool:
        return self.returncode == 0


class Shell(ABC):
    """Abstract interface for running command lines through the host shell.

    All implementations (real and fake) must implement this interface.
    """

    @abstractmethod
    def run(self, command_line: str, cwd: Path | None = None, echo: bool = False) -> ShellResult:
        """Run a command line and wait for it to exit.

        Args:
            command_line: Command line interpreted by the host shell
            cwd: Working directory. Inherits the caller's directory when None.
            echo: Stream output live to the terminal instead of capturing it

        Returns:
            ShellResult with captured output and exit status

        Raises:
            CommandFailedError: If the process could not be launched
        """
        ...

    def run_checked(
        self, command_line: str, cwd: Path | None = None, echo: bool = False
    ) -> ShellResult:
        """Run a command line and raise if it exits with a non-zero status.

        Raises:
            CommandFailedError: If the process could not be launched or failed
        """
        result = self.run(command_line, cwd=cwd, echo=echo)
        if not result.success:
            cause = f"exit code {result.returncode}"
            output = result.output.strip()
            if output:
                cause += f"\n{output}"
            raise CommandFailedError(command_line, cause)
        return result
