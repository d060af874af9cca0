"""Project manifest (pubspec.yaml) reading."""

import logging
from pathlib import Path

import yaml

logger = logging.getLogger(__name__)

DEFAULT_MANIFEST_NAME = "pubspec.yaml"


def read_project_version(
    project_dir: Path, manifest_name: str = DEFAULT_MANIFEST_NAME
) -> str | None:
    """Read the Flutter version declared under `environment.flutter`.

    The manifest is read fresh on every call. A missing, unreadable or
    malformed manifest is treated the same as a missing key.

    Args:
        project_dir: Directory containing the manifest
        manifest_name: Manifest file name

    Returns:
        The declared version as text, or None if it can't be determined
    """
    manifest_path = project_dir / manifest_name
    if not manifest_path.is_file():
        logger.debug("No manifest at %s", manifest_path)
        return None

    try:
        content = manifest_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        logger.debug("Manifest %s is unreadable: %s", manifest_path, e)
        return None

    # BaseLoader keeps scalars as text, so "3.10" doesn't turn into 3.1
    try:
        data = yaml.load(content, Loader=yaml.BaseLoader)
    except yaml.YAMLError as e:
        logger.debug("Manifest %s is malformed: %s", manifest_path, e)
        return None

    if not isinstance(data, dict):
        logger.debug("Manifest %s is not a mapping", manifest_path)
        return None

    environment = data.get("environment")
    if not isinstance(environment, dict):
        return None

    value = environment.get("flutter")
    if value is None or isinstance(value, (dict, list)):
        return None

    version = str(value).strip()
    if not version:
        return None
    return version
