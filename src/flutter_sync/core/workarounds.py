"""Version-keyed remediation steps applied after a checkout."""

from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import PurePosixPath
from types import MappingProxyType


@dataclass(frozen=True)
class Workaround:
    """Extra cleanup for one specific SDK release.

    Attributes:
        version: Exact reference the workaround applies to
        description: Short explanation shown to the user
        relative_paths: Paths under the SDK root to remove
    """

    version: str
    description: str
    relative_paths: tuple[PurePosixPath, ...]


WORKAROUNDS: Mapping[str, Workaround] = MappingProxyType(
    {
        "3.7.0": Workaround(
            version="3.7.0",
            description="Remove stale sky_engine cache left behind by 3.7.0",
            relative_paths=(PurePosixPath("bin/cache/pkg/sky_engine"),),
        ),
    }
)


def find_workaround(
    reference: str, registry: Mapping[str, Workaround] = WORKAROUNDS
) -> Workaround | None:
    """Return the workaround registered for exactly this reference."""
    return registry.get(reference)
