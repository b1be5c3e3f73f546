from functools import cached_property
from pathlib import Path
from typing import Any, Dict, Optional
import logging

import click
import psycopg
import yaml
from psycopg.conninfo import conninfo_to_dict


_LOGGER = logging.getLogger(__name__)

# database.yml keys by their libpq conninfo counterparts.
conninfo_keys = {
    "host": "host",
    "port": "port",
    "user": "username",
    "password": "password",
    "dbname": "database",
}


class RailsProject:
    """
    The Rails application in ``root``, as far as its database settings go.

    Rails support is switched off when ``config/database.yml`` is missing or
    cannot be parsed, whatever ``enabled`` says.
    """

    root: Path
    env: str
    enabled: bool
    database_config: Dict[str, Any]

    def __init__(
        self,
        root: Optional[Path] = None,
        env: str = "development",
        enabled: bool = True,
    ) -> None:
        self.root = root or Path.cwd()
        self.env = env
        self.enabled = enabled
        self.database_config = {}
        self._load_database_config()

    def __repr__(self) -> str:
        return f"RailsProject(root={self.root}, env={self.env}, enabled={self.enabled})"

    @property
    def database_config_file(self) -> Path:
        return self.root / "config" / "database.yml"

    def _load_database_config(self) -> None:
        if not self.database_config_file.is_file():
            _LOGGER.debug("No %s, Rails support disabled", self.database_config_file)
            self.enabled = False
            return

        try:
            with self.database_config_file.open("r", encoding="utf-8") as fp:
                config = yaml.safe_load(fp)
        except (OSError, yaml.YAMLError) as e:
            click.secho(
                f"Invalid Rails database settings: {self.database_config_file}.",
                fg="red",
                err=True,
            )
            _LOGGER.debug("Failed to load %s", self.database_config_file, exc_info=e)
            self.enabled = False
            return

        if not isinstance(config, dict):
            click.secho(
                f"Invalid Rails database settings: {self.database_config_file}.",
                fg="red",
                err=True,
            )
            self.enabled = False
            return

        _LOGGER.debug("Read Rails database settings from %s", self.database_config_file)
        self.database_config = config

    @cached_property
    def env_settings(self) -> Dict[str, Any]:
        """Settings of the current environment, with a ``url`` entry expanded into its parts."""
        try:
            section = self.database_config[self.env]
        except KeyError as e:
            raise click.UsageError(
                f"No {self.env!r} environment in {self.database_config_file}"
            ) from e
        if not isinstance(section, dict):
            raise click.UsageError(
                f"Invalid {self.env!r} environment in {self.database_config_file}"
            )

        settings: Dict[str, Any] = {}
        if url := section.get("url"):
            settings.update(self._parse_url(url))
        settings.update((k, v) for k, v in section.items() if k != "url")
        return settings

    def _parse_url(self, url: str) -> Dict[str, Any]:
        try:
            params = conninfo_to_dict(url)
        except psycopg.ProgrammingError as e:
            click.secho(f"Ignoring invalid database url for {self.env!r}: {e}", fg="red", err=True)
            return {}
        return {conninfo_keys[k]: v for k, v in params.items() if k in conninfo_keys}

    def get(self, key: str) -> Optional[Any]:
        return self.env_settings.get(key)
