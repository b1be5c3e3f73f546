from typing import Any, Dict, List, Optional, Sequence
import logging

import click

from .actions import Actions
from .rails import RailsProject
from .settings import Settings
from .utils import flag, join_options, positional


_LOGGER = logging.getLogger(__name__)


class AbstractClient:
    id: str
    actions: Actions
    settings: Settings
    rails: RailsProject

    def __init__(self, actions: Actions, settings: Settings, rails: RailsProject):
        self.actions = actions
        self.settings = settings
        self.rails = rails
        super().__init__()

    @property
    def client_settings(self) -> Dict[str, Any]:
        return self.settings["databases"][self.id]

    @property
    def default_options(self) -> Dict[str, str]:
        return self.client_settings.get("options", {})

    @property
    def archive_file(self) -> str:
        return self.client_settings["archive_file"]

    @property
    def rails_enabled(self) -> bool:
        return self.rails.enabled

    def _options(self, operation: str, overrides: Sequence[str]) -> List[Optional[str]]:
        if overrides:
            return list(overrides)
        return [self.default_options.get(operation)]

    def create(self, overrides: Sequence[str] = ()) -> int:
        raise NotImplementedError

    def drop(self, overrides: Sequence[str] = ()) -> int:
        raise NotImplementedError

    def dump(self, overrides: Sequence[str] = ()) -> int:
        raise NotImplementedError

    def restore(self, overrides: Sequence[str] = ()) -> int:
        raise NotImplementedError

    def freshen(self) -> bool:
        raise NotImplementedError

    def import_archive(self) -> bool:
        raise NotImplementedError

    def migrate(self) -> int:
        if not self.rails_enabled:
            self.actions.error(
                "Unable to migrate - This is not a Rails project or Rails support is not enabled."
            )
            return 1
        return self.actions.run("rake db:migrate")

    def seed(self) -> int:
        if not self.rails_enabled:
            self.actions.error(
                "Unable to seed - This is not a Rails project or Rails support is not enabled."
            )
            return 1
        return self.actions.run("rake db:seed")


class PostgreSqlClient(AbstractClient):
    id = "pg"

    @property
    def env(self) -> Dict[str, str]:
        """Environment of the client binaries. The password never goes on the command line."""
        if self.rails_enabled and (password := self.rails.get("password")) is not None:
            return {"PGPASSWORD": str(password)}
        return {}

    def create_options(self, overrides: Sequence[str] = ()) -> str:
        options = self._options("create", overrides)
        if self.rails_enabled:
            r = self.rails
            options += [
                flag("-E", r.get("encoding")),
                flag("-O", r.get("username")),
                flag("-U", r.get("username")),
                flag("-h", r.get("host")),
                flag("-p", r.get("port")),
                positional(r.get("database")),
            ]
        return join_options(options)

    def drop_options(self, overrides: Sequence[str] = ()) -> str:
        options = self._options("drop", overrides)
        if self.rails_enabled:
            r = self.rails
            options += [
                flag("-U", r.get("username")),
                flag("-h", r.get("host")),
                flag("-p", r.get("port")),
                positional(r.get("database")),
            ]
        return join_options(options)

    def dump_options(self, overrides: Sequence[str] = ()) -> str:
        options = self._options("dump", overrides)
        if self.rails_enabled:
            r = self.rails
            options += [
                flag("-U", r.get("username")),
                flag("-p", r.get("port")),
                flag("-f", self.archive_file),
                positional(r.get("database")),
            ]
        return join_options(options)

    def restore_options(self, overrides: Sequence[str] = ()) -> str:
        options = self._options("restore", overrides)
        if self.rails_enabled:
            r = self.rails
            options += [
                flag("-h", r.get("host")),
                flag("-p", r.get("port")),
                flag("-U", r.get("username")),
                flag("-d", r.get("database")),
                positional(self.archive_file),
            ]
        return join_options(options)

    def command(self, binary: str, options: str) -> str:
        return f"{binary} {options}" if options else binary

    def create(self, overrides: Sequence[str] = ()) -> int:
        return self.actions.run(self.command("createdb", self.create_options(overrides)), env=self.env)

    def drop(self, overrides: Sequence[str] = ()) -> int:
        return self.actions.run(self.command("dropdb", self.drop_options(overrides)), env=self.env)

    def dump(self, overrides: Sequence[str] = ()) -> int:
        return self.actions.run(self.command("pg_dump", self.dump_options(overrides)), env=self.env)

    def restore(self, overrides: Sequence[str] = ()) -> int:
        return self.actions.run(self.command("pg_restore", self.restore_options(overrides)), env=self.env)

    def freshen(self) -> bool:
        """Drop, create, migrate and seed. True when every step succeeded."""
        returncodes = [self.drop(), self.create(), self.migrate(), self.seed()]
        return all(rc == 0 for rc in returncodes)

    def import_archive(self) -> bool:
        """Drop, create, restore from the archive file and migrate. True when every step succeeded."""
        returncodes = [self.drop(), self.create(), self.restore(), self.migrate()]
        return all(rc == 0 for rc in returncodes)


clients = {c.id: c for c in [PostgreSqlClient]}


def load_client(actions: Actions, settings: Settings, rails: RailsProject) -> AbstractClient:
    client_id = settings.get("current_database")
    try:
        cls = clients[client_id]
    except KeyError as e:
        raise click.UsageError(
            f"Unknown database client {client_id!r}. Supported: {', '.join(sorted(clients))}"
        ) from e
    if client_id not in settings.get("databases", {}):
        raise click.UsageError(f"Missing databases.{client_id} section in settings")
    _LOGGER.debug("Use database client %s", client_id)
    return cls(actions, settings, rails)
