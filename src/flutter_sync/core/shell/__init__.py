from flutter_sync.core.shell.abc import (
    CommandFailedError,
    Shell,
    ShellError,
    ShellResult,
    UnsupportedPlatformError,
)

__all__ = [
    "CommandFailedError",
    "Shell",
    "ShellError",
    "ShellResult",
    "UnsupportedPlatformError",
]
