"""Reconciliation of the installed SDK with the desired version.

The reconciler moves through these states:

    IDLE -> DETECTING -> COMPARING -> NO_ACTION_NEEDED
                                   -> RECONCILING -> VERIFYING -> DONE

DETECTING and COMPARING may end early in UNAVAILABLE when a required tool is
missing or no target version is known. Mutating steps run strictly in order
and the sequence stops at the first failure. Nothing is rolled back.
"""

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

import click

from flutter_sync.cli.output import user_output
from flutter_sync.core.config import GlobalConfig
from flutter_sync.core.platform import PlatformProfile
from flutter_sync.core.probe import EnvironmentProbe
from flutter_sync.core.shell.abc import CommandFailedError, Shell
from flutter_sync.core.status import Status, collect_status
from flutter_sync.core.workarounds import WORKAROUNDS, Workaround, find_workaround

logger = logging.getLogger(__name__)

CHANNELS = frozenset({"stable", "beta", "main", "master"})


class SyncState(Enum):
    IDLE = "idle"
    DETECTING = "detecting"
    COMPARING = "comparing"
    NO_ACTION_NEEDED = "no_action_needed"
    RECONCILING = "reconciling"
    VERIFYING = "verifying"
    DONE = "done"
    UNAVAILABLE = "unavailable"


@dataclass(frozen=True)
class StepRecord:
    """One mutating command that was executed during a sync."""

    description: str
    command_line: str
    cwd: Path | None
    success: bool
    best_effort: bool = False


@dataclass(frozen=True)
class SyncReport:
    """Result of a sync.

    Attributes:
        state: Terminal state (NO_ACTION_NEEDED, DONE or UNAVAILABLE)
        status: Latest status snapshot (refreshed after any reconciliation)
        desired: Resolved desired version, if one was known
        steps: Mutating commands executed, in order
        error: Cause of the step that aborted the sequence, if any
        missing_tool: Name of the tool that could not be located, if any
        reason: Explanation for UNAVAILABLE
    """

    state: SyncState
    status: Status
    desired: str | None = None
    steps: tuple[StepRecord, ...] = ()
    error: str | None = None
    missing_tool: str | None = None
    reason: str | None = None

    @property
    def ok(self) -> bool:
        return self.state in (SyncState.NO_ACTION_NEEDED, SyncState.DONE) and self.error is None

    @property
    def is_channel(self) -> bool:
        return self.desired in CHANNELS

    @property
    def residual_mismatch(self) -> bool:
        """True when a pinned sync finished but the SDK reports another version."""
        if self.state is not SyncState.DONE or self.error is not None:
            return False
        if self.desired is None or self.is_channel:
            return False
        return self.status.sdk_version != self.desired


def is_channel(desired: str) -> bool:
    """Check whether desired names a release channel rather than a git reference."""
    return desired in CHANNELS


def resolve_desired_version(override: str | None, project_version: str | None) -> str | None:
    """Pick the target version.

    A non-blank override wins over the manifest value.

    Args:
        override: Version passed explicitly by the user
        project_version: Version declared in the project manifest

    Returns:
        The trimmed target version, or None if neither is set
    """
    if override is not None and override.strip():
        return override.strip()
    if project_version is not None and project_version.strip():
        return project_version.strip()
    return None


class Reconciler:
    """Brings the SDK checkout to the desired version.

    Never keeps a Status between calls: sync() reads the one it is given and
    returns a freshly collected one in its report.
    """

    def __init__(
        self,
        *,
        shell: Shell,
        probe: EnvironmentProbe,
        profile: PlatformProfile,
        config: GlobalConfig,
        project_dir: Path,
        workarounds: Mapping[str, Workaround] = WORKAROUNDS,
    ) -> None:
        self._shell = shell
        self._probe = probe
        self._profile = profile
        self._config = config
        self._project_dir = project_dir
        self._workarounds = workarounds

    def refresh_status(self) -> Status:
        return collect_status(self._probe, self._project_dir, self._config.manifest_name)

    def sync(self, status: Status, override: str | None = None) -> SyncReport:
        """Reconcile the SDK with the desired version.

        Args:
            status: Current status snapshot
            override: Explicit desired version, taking precedence over the manifest

        Returns:
            SyncReport describing the terminal state and what was executed
        """
        self._enter(SyncState.DETECTING)
        located_sdk = self._probe.locate(self._config.sdk_binary)
        if located_sdk is None:
            return self._tool_missing(status, self._config.sdk_binary)
        if self._probe.locate(self._config.vcs_binary) is None:
            return self._tool_missing(status, self._config.vcs_binary)

        sdk_root = status.sdk_root_path
        if sdk_root is None:
            sdk_root = located_sdk.parent.parent

        self._enter(SyncState.COMPARING)
        desired = resolve_desired_version(override, status.project_version)
        if desired is None:
            return SyncReport(
                state=SyncState.UNAVAILABLE,
                status=status,
                reason=(
                    "No target version known: pass --desired-version or declare "
                    f"environment.flutter in {self._config.manifest_name}"
                ),
            )

        if desired == status.sdk_version:
            self._enter(SyncState.NO_ACTION_NEEDED)
            return SyncReport(state=SyncState.NO_ACTION_NEEDED, status=status, desired=desired)

        self._enter(SyncState.RECONCILING)
        steps: list[StepRecord] = []
        error: str | None = None
        try:
            if is_channel(desired):
                self._switch_channel(desired, steps)
            else:
                self._checkout_reference(desired, sdk_root, steps)
        except CommandFailedError as e:
            logger.debug("Sequence aborted: %s", e)
            error = str(e)

        self._enter(SyncState.VERIFYING)
        new_status = self.refresh_status()

        self._enter(SyncState.DONE)
        return SyncReport(
            state=SyncState.DONE,
            status=new_status,
            desired=desired,
            steps=tuple(steps),
            error=error,
        )

    def _enter(self, state: SyncState) -> None:
        logger.debug("Entering state %s", state.name)

    def _tool_missing(self, status: Status, tool: str) -> SyncReport:
        return SyncReport(
            state=SyncState.UNAVAILABLE,
            status=status,
            missing_tool=tool,
            reason=f"'{tool}' was not found on PATH",
        )

    def _switch_channel(self, channel: str, steps: list[StepRecord]) -> None:
        sdk = self._profile.quote(self._config.sdk_binary)
        self._run_step(
            f"Switching to channel {channel}",
            f"{sdk} channel {self._profile.quote(channel)}",
            None,
            steps,
        )

    def _checkout_reference(self, reference: str, sdk_root: Path, steps: list[StepRecord]) -> None:
        vcs = self._profile.quote(self._config.vcs_binary)
        sdk = self._profile.quote(self._config.sdk_binary)

        self._run_step("Discarding local changes", f"{vcs} reset --hard", sdk_root, steps)
        self._run_step("Fetching remote refs", f"{vcs} fetch", sdk_root, steps)
        self._run_step(
            f"Checking out {reference}",
            f"{vcs} checkout {self._profile.quote(reference)}",
            sdk_root,
            steps,
        )
        # checkout alone can leave stray files behind
        self._run_step("Cleaning working tree", f"{vcs} reset --hard", sdk_root, steps)

        workaround = find_workaround(reference, self._workarounds)
        if workaround is not None:
            self._apply_workaround(workaround, sdk_root, steps)

        self._run_step("Running doctor", f"{sdk} doctor", self._project_dir, steps)
        self._run_step("Cleaning build cache", f"{sdk} clean", self._project_dir, steps)
        self._run_step("Upgrading dependencies", f"{sdk} pub upgrade", self._project_dir, steps)

        native_step = self._profile.native_dependency_install_step(self._project_dir)
        if native_step is None:
            return
        if not native_step.cwd.is_dir():
            logger.debug("Skipping native dependencies, %s does not exist", native_step.cwd)
            user_output(f"Skipping native dependencies: {native_step.cwd} does not exist")
            return
        self._run_step(
            "Installing native dependencies", native_step.command_line, native_step.cwd, steps
        )

    def _apply_workaround(
        self, workaround: Workaround, sdk_root: Path, steps: list[StepRecord]
    ) -> None:
        user_output(click.style(f"Applying workaround: {workaround.description}", fg="yellow"))
        for relative_path in workaround.relative_paths:
            target = sdk_root.joinpath(*relative_path.parts)
            command_line = self._profile.remove_tree_command(target)
            try:
                self._run_step(f"Removing {target}", command_line, sdk_root, steps, best_effort=True)
            except CommandFailedError as e:
                logger.warning("Workaround for %s failed: %s", workaround.version, e)
                user_output(click.style("Warning: ", fg="yellow") + f"workaround step failed: {e}")

    def _run_step(
        self,
        description: str,
        command_line: str,
        cwd: Path | None,
        steps: list[StepRecord],
        *,
        best_effort: bool = False,
    ) -> None:
        user_output(click.style(f"==> {description}: ", bold=True) + command_line)
        try:
            self._shell.run_checked(command_line, cwd=cwd, echo=True)
        except CommandFailedError:
            steps.append(StepRecord(description, command_line, cwd, False, best_effort))
            raise
        steps.append(StepRecord(description, command_line, cwd, True, best_effort))
