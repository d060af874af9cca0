"""Global configuration data structures and loading.

Provides immutable global config data loaded from ~/.flutter-sync/config.toml.
Every key is optional; a missing file means all defaults.
"""

import os
import tomllib
from dataclasses import dataclass
from pathlib import Path

from flutter_sync.core.manifest import DEFAULT_MANIFEST_NAME

CONFIG_ENV_VAR = "FLUTTER_SYNC_CONFIG"


class ConfigError(Exception):
    """The config file exists but can't be used."""


@dataclass(frozen=True)
class GlobalConfig:
    """Immutable global configuration data.

    Loaded once at CLI entry point and stored in SyncContext.
    """

    sdk_binary: str = "flutter"
    vcs_binary: str = "git"
    manifest_name: str = DEFAULT_MANIFEST_NAME


def default_config_path() -> Path:
    """Return the config path, honoring the FLUTTER_SYNC_CONFIG override."""
    override = os.environ.get(CONFIG_ENV_VAR)
    if override:
        return Path(override).expanduser()
    return Path.home() / ".flutter-sync" / "config.toml"


def load_global_config(path: Path | None = None) -> GlobalConfig:
    """Load global config from a TOML file.

    Args:
        path: Config file location. Defaults to default_config_path().

    Returns:
        GlobalConfig with file values layered over the defaults

    Raises:
        ConfigError: If the file is not valid TOML or a key has the wrong type
    """
    if path is None:
        path = default_config_path()

    if not path.exists():
        return GlobalConfig()

    try:
        data = tomllib.loads(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, tomllib.TOMLDecodeError) as e:
        raise ConfigError(f"Could not read config file {path}: {e}") from e

    defaults = GlobalConfig()
    return GlobalConfig(
        sdk_binary=_string_value(data, "sdk_binary", defaults.sdk_binary, path),
        vcs_binary=_string_value(data, "vcs_binary", defaults.vcs_binary, path),
        manifest_name=_string_value(data, "manifest_name", defaults.manifest_name, path),
    )


def _string_value(data: dict, key: str, default: str, path: Path) -> str:
    value = data.get(key, default)
    if not isinstance(value, str) or not value.strip():
        raise ConfigError(f"Config key '{key}' in {path} must be a non-empty string")
    return value.strip()
