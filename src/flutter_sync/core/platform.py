"""Host platform profiles.

Each supported operating system gets a small profile object that knows how to
invoke the host shell, locate executables on PATH, remove directory trees and
install native dependencies. Callers ask the profile instead of branching on
the OS name at every call site.

Architecture:
- PlatformProfile: Abstract base class defining the interface
- WindowsProfile / MacOSProfile / LinuxProfile: Concrete profiles
- detect_platform(): Maps platform.system() to a profile
"""

import platform
import shlex
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path

from flutter_sync.core.shell.abc import UnsupportedPlatformError


@dataclass(frozen=True)
class NativeDependencyStep:
    """A native dependency install command and the directory it runs in."""

    command_line: str
    cwd: Path


class PlatformProfile(ABC):
    """Abstract interface for host-specific command construction."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Short platform identifier (e.g. 'linux')."""
        ...

    @abstractmethod
    def shell_argv(self, command_line: str) -> list[str]:
        """Build the argv that runs command_line through the host shell."""
        ...

    @abstractmethod
    def locate_executable_command(self, executable: str) -> str:
        """Build the command line that prints the PATH location of executable."""
        ...

    @abstractmethod
    def remove_tree_command(self, path: Path) -> str:
        """Build the command line that recursively removes path."""
        ...

    @abstractmethod
    def quote(self, arg: str) -> str:
        """Quote a single argument for the host shell."""
        ...

    def native_dependency_install_step(self, project_dir: Path) -> NativeDependencyStep | None:
        """Return the native dependency install step for this host, if any.

        Only macOS installs native (CocoaPods) dependencies, so the default is None.
        """
        return None


class _PosixProfile(PlatformProfile):
    def shell_argv(self, command_line: str) -> list[str]:
        return ["sh", "-c", command_line]

    def locate_executable_command(self, executable: str) -> str:
        return f"which {self.quote(executable)}"

    def remove_tree_command(self, path: Path) -> str:
        return f"rm -rf {self.quote(str(path))}"

    def quote(self, arg: str) -> str:
        return shlex.quote(arg)


class LinuxProfile(_PosixProfile):
    """Linux host."""

    @property
    def name(self) -> str:
        return "linux"


class MacOSProfile(_PosixProfile):
    """macOS host. Runs `pod install` in the project's ios/ directory."""

    @property
    def name(self) -> str:
        return "macos"

    def native_dependency_install_step(self, project_dir: Path) -> NativeDependencyStep | None:
        return NativeDependencyStep(command_line="pod install", cwd=project_dir / "ios")


class WindowsProfile(PlatformProfile):
    """Windows host using cmd.exe."""

    @property
    def name(self) -> str:
        return "windows"

    def shell_argv(self, command_line: str) -> list[str]:
        return ["cmd", "/C", command_line]

    def locate_executable_command(self, executable: str) -> str:
        return f"where {self.quote(executable)}"

    def remove_tree_command(self, path: Path) -> str:
        return f"rmdir /s /q {self.quote(str(path))}"

    def quote(self, arg: str) -> str:
        if arg and not any(ch in arg for ch in ' \t"&|<>^'):
            return arg
        escaped = arg.replace('"', '""')
        return f'"{escaped}"'


_PROFILES: dict[str, type[PlatformProfile]] = {
    "Windows": WindowsProfile,
    "Darwin": MacOSProfile,
    "Linux": LinuxProfile,
}


def detect_platform(system: str | None = None) -> PlatformProfile:
    """Return the profile for the given (or current) operating system.

    Args:
        system: Value in the format of platform.system(). Defaults to the host.

    Returns:
        PlatformProfile for Windows, macOS or Linux

    Raises:
        UnsupportedPlatformError: If the host is none of the supported platforms
    """
    if system is None:
        system = platform.system()
    profile_cls = _PROFILES.get(system)
    if profile_cls is None:
        raise UnsupportedPlatformError(f"Unsupported platform: {system or 'unknown'}")
    return profile_cls()
