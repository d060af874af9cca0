"""Tests for global config loading."""

from pathlib import Path

import pytest

from flutter_sync.core.config import (
    CONFIG_ENV_VAR,
    ConfigError,
    GlobalConfig,
    default_config_path,
    load_global_config,
)


def test_missing_file_gives_defaults(tmp_path: Path) -> None:
    config = load_global_config(tmp_path / "config.toml")

    assert config == GlobalConfig()
    assert config.sdk_binary == "flutter"
    assert config.vcs_binary == "git"
    assert config.manifest_name == "pubspec.yaml"


def test_file_values_override_defaults(tmp_path: Path) -> None:
    path = tmp_path / "config.toml"
    path.write_text('sdk_binary = "fvm flutter"\nmanifest_name = "app.yaml"\n', encoding="utf-8")

    config = load_global_config(path)

    assert config == GlobalConfig(
        sdk_binary="fvm flutter", vcs_binary="git", manifest_name="app.yaml"
    )


def test_malformed_toml_raises(tmp_path: Path) -> None:
    path = tmp_path / "config.toml"
    path.write_text("sdk_binary = \n", encoding="utf-8")

    with pytest.raises(ConfigError, match="Could not read config file"):
        load_global_config(path)


@pytest.mark.parametrize("content", ["vcs_binary = 3\n", 'vcs_binary = "  "\n'])
def test_invalid_values_raise(tmp_path: Path, content: str) -> None:
    path = tmp_path / "config.toml"
    path.write_text(content, encoding="utf-8")

    with pytest.raises(ConfigError, match="vcs_binary"):
        load_global_config(path)


def test_env_var_overrides_config_path(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    path = tmp_path / "custom.toml"
    monkeypatch.setenv(CONFIG_ENV_VAR, str(path))

    assert default_config_path() == path


def test_default_config_path_in_home(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)

    assert default_config_path() == Path.home() / ".flutter-sync" / "config.toml"
