from pathlib import Path
from typing import Any, Dict, Optional
import copy
import logging
import os

import click
import yaml

from . import name


_LOGGER = logging.getLogger(__name__)

SETTINGS_ENVVAR = "PGRAILS_SETTINGS"

Settings = Dict[str, Any]


def default_settings() -> Settings:
    return {
        "current_database": "pg",
        "databases": {
            "pg": {
                "options": {
                    "create": "-w",
                    "drop": "-w",
                    "dump": "-Fc -w",
                    "restore": "-O -w",
                },
                "archive_file": "db/archive.dump",
            }
        },
        "rails": {
            "enabled": True,
            "env": "development",
        },
    }


def settings_path() -> Path:
    if from_env := os.environ.get(SETTINGS_ENVVAR):
        return Path(from_env)
    return Path.home() / f".{name}" / "settings.yml"


def merge_settings(base: Settings, override: Settings) -> Settings:
    """
    Deep-merge ``override`` into a copy of ``base``. Nested mappings are merged
    key by key, every other value in ``override`` replaces the one in ``base``.
    """
    merged = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = merge_settings(merged[key], value)
        else:
            merged[key] = copy.deepcopy(value)
    return merged


def load_settings(path: Optional[Path] = None) -> Settings:
    if path is None:
        path = settings_path()
    defaults = default_settings()

    if not path.is_file():
        _LOGGER.info("No settings file at %s, using defaults", path)
        return defaults

    _LOGGER.debug("Read settings file %s", path)
    try:
        with path.open("r", encoding="utf-8") as fp:
            loaded = yaml.safe_load(fp)
    except (OSError, yaml.YAMLError) as e:
        click.secho(f"Invalid settings file: {path}. Using defaults.", fg="red", err=True)
        _LOGGER.debug("Failed to load %s", path, exc_info=e)
        return defaults

    # An empty file loads as None.
    if loaded is None:
        return defaults
    if not isinstance(loaded, dict):
        click.secho(f"Invalid settings file: {path}. Using defaults.", fg="red", err=True)
        return defaults
    return merge_settings(defaults, loaded)


def write_settings(path: Path, settings: Settings) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as fp:
        yaml.safe_dump(settings, fp, sort_keys=False, default_flow_style=False)
    _LOGGER.debug("Wrote settings file %s", path)
