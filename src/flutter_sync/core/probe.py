"""Read-only discovery of the installed Flutter SDK.

Every lookup here is best effort: a missing binary, a failed command or
unexpected output yields None rather than an exception.
"""

import logging
from pathlib import Path

from flutter_sync.core.platform import PlatformProfile
from flutter_sync.core.shell.abc import CommandFailedError, Shell

logger = logging.getLogger(__name__)


def parse_version_output(output: str) -> str | None:
    """Extract the version literal from `flutter --version` output.

    The first line reads like "Flutter 3.19.0 • channel stable • ...", so the
    version is the second whitespace-separated token.

    Args:
        output: Raw command output

    Returns:
        Version string, or None if the first line has fewer than two tokens
    """
    lines = output.splitlines()
    if not lines:
        return None
    tokens = lines[0].split()
    if len(tokens) < 2:
        return None
    version = tokens[1].strip()
    return version or None


def parse_locate_output(output: str) -> Path | None:
    """Extract the executable path from `which`/`where` output.

    `where` may list several matches; the first one wins.

    Args:
        output: Raw command output

    Returns:
        Path of the first match, or None if the first line is blank
    """
    lines = output.splitlines()
    if not lines:
        return None
    located = lines[0].strip()
    if not located:
        return None
    return Path(located)


class EnvironmentProbe:
    """Locates the SDK and reads its self-reported version."""

    def __init__(self, shell: Shell, profile: PlatformProfile, sdk_binary: str = "flutter") -> None:
        self._shell = shell
        self._profile = profile
        self._sdk_binary = sdk_binary

    @property
    def sdk_binary(self) -> str:
        return self._sdk_binary

    def locate(self, executable: str) -> Path | None:
        """Return the PATH location of executable, or None if it can't be found."""
        command_line = self._profile.locate_executable_command(executable)
        try:
            result = self._shell.run(command_line)
        except CommandFailedError as e:
            logger.debug("Could not locate %s: %s", executable, e)
            return None
        if not result.success:
            logger.debug("%s not found on PATH (exit code %d)", executable, result.returncode)
            return None
        return parse_locate_output(result.output)

    def sdk_bin_path(self) -> Path | None:
        """Return the directory containing the SDK launcher."""
        located = self.locate(self._sdk_binary)
        if located is None:
            return None
        return located.parent

    def sdk_root_path(self) -> Path | None:
        """Return the SDK root, the parent of the launcher's directory."""
        bin_path = self.sdk_bin_path()
        if bin_path is None:
            return None
        return bin_path.parent

    def sdk_version(self) -> str | None:
        """Return the version reported by `<sdk> --version`."""
        command_line = f"{self._profile.quote(self._sdk_binary)} --version"
        try:
            result = self._shell.run(command_line)
        except CommandFailedError as e:
            logger.debug("Could not read SDK version: %s", e)
            return None
        if not result.success:
            logger.debug("SDK version command exited with %d", result.returncode)
            return None
        return parse_version_output(result.output)
