"""Status snapshot of the project and the installed SDK."""

from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from pathlib import Path

from flutter_sync.core.manifest import DEFAULT_MANIFEST_NAME, read_project_version
from flutter_sync.core.probe import EnvironmentProbe


@dataclass(frozen=True)
class Status:
    """Snapshot of everything the reconciler needs to know.

    A refresh always builds a new Status; fields are never updated in place.
    sdk_root_path is derived from sdk_bin_path, so it is always its parent
    when both are set.
    """

    project_version: str | None
    sdk_version: str | None
    sdk_bin_path: Path | None
    sdk_root_path: Path | None

    @staticmethod
    def empty() -> "Status":
        """Status before the first refresh."""
        return Status(
            project_version=None,
            sdk_version=None,
            sdk_bin_path=None,
            sdk_root_path=None,
        )

    @staticmethod
    def from_probes(
        project_version: str | None, sdk_version: str | None, sdk_bin_path: Path | None
    ) -> "Status":
        """Build a Status, deriving the SDK root from the bin path."""
        return Status(
            project_version=project_version,
            sdk_version=sdk_version,
            sdk_bin_path=sdk_bin_path,
            sdk_root_path=sdk_bin_path.parent if sdk_bin_path is not None else None,
        )

    def display_lines(self) -> list[tuple[str, str]]:
        """Label/value pairs for rendering, with 'None' for absent values."""
        return [
            ("Project version", _or_none(self.project_version)),
            ("Flutter version", _or_none(self.sdk_version)),
            ("Flutter path", _or_none(self.sdk_bin_path)),
            ("Flutter root path", _or_none(self.sdk_root_path)),
        ]


def _or_none(value: str | Path | None) -> str:
    return "None" if value is None else str(value)


def collect_status(
    probe: EnvironmentProbe,
    project_dir: Path,
    manifest_name: str = DEFAULT_MANIFEST_NAME,
) -> Status:
    """Refresh the status by running all lookups concurrently.

    The SDK version probe, the SDK location probe and the manifest read are
    independent, so each runs on its own worker thread. This blocks until
    all of them have finished.

    Args:
        probe: Environment probe for the SDK lookups
        project_dir: Directory holding the project manifest
        manifest_name: Manifest file name

    Returns:
        A freshly built Status
    """
    with ThreadPoolExecutor(max_workers=3, thread_name_prefix="status") as executor:
        version_future = executor.submit(probe.sdk_version)
        bin_path_future = executor.submit(probe.sdk_bin_path)
        project_future = executor.submit(read_project_version, project_dir, manifest_name)

        return Status.from_probes(
            project_version=project_future.result(),
            sdk_version=version_future.result(),
            sdk_bin_path=bin_path_future.result(),
        )
