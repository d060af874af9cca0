"""Application context with dependency injection."""

from dataclasses import dataclass
from pathlib import Path

from flutter_sync.core.config import GlobalConfig, load_global_config
from flutter_sync.core.platform import LinuxProfile, PlatformProfile, detect_platform
from flutter_sync.core.probe import EnvironmentProbe
from flutter_sync.core.reconciler import Reconciler
from flutter_sync.core.shell.abc import Shell
from flutter_sync.core.shell.dry_run import DryRunShell
from flutter_sync.core.shell.real import RealShell


@dataclass(frozen=True)
class SyncContext:
    """Immutable context holding all dependencies for flutter-sync operations.

    Created at CLI entry point and threaded through the application.
    cwd is the project directory; it is fixed here once and never changed,
    so every operation reads the same value instead of the process cwd.
    """

    shell: Shell
    profile: PlatformProfile
    config: GlobalConfig
    cwd: Path
    dry_run: bool

    @property
    def probe(self) -> EnvironmentProbe:
        return EnvironmentProbe(self.shell, self.profile, self.config.sdk_binary)

    def reconciler(self) -> Reconciler:
        return Reconciler(
            shell=self.shell,
            probe=self.probe,
            profile=self.profile,
            config=self.config,
            project_dir=self.cwd,
        )

    @staticmethod
    def for_test(
        shell: Shell,
        cwd: Path,
        *,
        profile: PlatformProfile | None = None,
        config: GlobalConfig | None = None,
        dry_run: bool = False,
    ) -> "SyncContext":
        """Create a context around a fake shell with test defaults.

        Args:
            shell: The Shell implementation (usually FakeShell with scripted results)
            cwd: Project directory for the context
            profile: Platform profile (default: LinuxProfile)
            config: Global config (default: GlobalConfig())
            dry_run: Whether to wrap the shell in DryRunShell

        Example:
            >>> shell = FakeShell(results={"flutter --version": ok("Flutter 3.19.0")})
            >>> ctx = SyncContext.for_test(shell, tmp_path)
        """
        if dry_run:
            shell = DryRunShell(shell)
        return SyncContext(
            shell=shell,
            profile=profile if profile is not None else LinuxProfile(),
            config=config if config is not None else GlobalConfig(),
            cwd=cwd,
            dry_run=dry_run,
        )


def create_context(*, cwd: Path | None = None, dry_run: bool = False) -> SyncContext:
    """Create production context with real implementations.

    Args:
        cwd: Project directory. Defaults to the process working directory.
        dry_run: Print mutating commands instead of running them

    Raises:
        UnsupportedPlatformError: If the host is not Windows, macOS or Linux
        ConfigError: If the global config file is invalid
    """
    profile = detect_platform()
    config = load_global_config()

    shell: Shell = RealShell(profile)
    if dry_run:
        shell = DryRunShell(shell)

    project_dir = (cwd if cwd is not None else Path.cwd()).resolve()

    return SyncContext(
        shell=shell,
        profile=profile,
        config=config,
        cwd=project_dir,
        dry_run=dry_run,
    )
