from importlib import resources
from pathlib import Path
from string import Template
from typing import List, Optional
import logging

import click

from .actions import Actions
from .client import AbstractClient
from .utils import migration_name


_LOGGER = logging.getLogger(__name__)

migrate_path = Path("db", "migrate")
old_migrate_path = Path("db", "migrate-old")
new_migrate_path = Path("db", "migrate-new")
generators_path = Path("lib", "generators")
generator_path = generators_path / "remigrate"
generator_file = generator_path / "remigrate_generator.rb"


class Remigration:
    """
    Rebuilds the database from a new migration history while keeping its data.

    The workflow is split into steps that are run one by one, so that the
    new migrations in ``db/migrate-new`` can be edited in between:

    1. ``setup`` backs up ``db/migrate`` and creates the working copy.
    2. ``generator`` writes a Rails generator that recreates the migrations.
    3. ``execute`` dumps, drops, recreates, migrates and restores the data.
    4. ``clean`` or ``restore`` removes the support files again.
    """

    client: AbstractClient

    def __init__(self, client: AbstractClient) -> None:
        self.client = client

    @property
    def actions(self) -> Actions:
        return self.client.actions

    def new_migrations(self) -> List[Path]:
        return self.actions.glob(f"{new_migrate_path.as_posix()}/*.rb")

    def setup(self) -> None:
        if not self.actions.exists(migrate_path):
            raise click.UsageError(f"No {migrate_path} directory in {self.actions.root}")
        self.actions.info("Setting up project for remigration...")
        # Backup
        self.actions.directory(migrate_path, old_migrate_path)
        # Working copy
        self.actions.directory(migrate_path, new_migrate_path)
        self.actions.info("Database remigration setup complete.")

    def generator(self) -> None:
        if self.actions.exists(generator_file):
            if self.actions.yes("Existing generator detected. Overwrite and lose all changes?"):
                self.actions.remove(generator_path)
                self.build_generator()
            else:
                self.actions.info("Remigration generator aborted.")
        else:
            self.build_generator()

    def render_generator(self) -> str:
        template = Template(
            resources.files("pgrails").joinpath("templates", "remigrate_generator.rb").read_text("utf-8")
        )
        lines = [f'    copy_migration "{migration_name(p)}"' for p in self.new_migrations()]
        _LOGGER.debug("Render remigrate generator for %d migrations", len(lines))
        return template.substitute(migrations="\n".join(lines))

    def build_generator(self) -> None:
        self.actions.run("rails generate generator remigrate")
        self.actions.create_file(generator_file, self.render_generator())

    def generated_migration(self, name: str) -> Optional[Path]:
        for path in self.actions.glob(f"{migrate_path.as_posix()}/*.rb"):
            if migration_name(path) == name:
                return path
        return None

    def execute(self) -> None:
        for path in (old_migrate_path, new_migrate_path):
            if not self.actions.exists(path):
                raise click.UsageError(
                    f"No {path} directory in {self.actions.root}. Run remigrate --setup first."
                )
        self.actions.info("Remigrating the database...")
        client = self.client

        # Dump, drop, and recreate the database.
        if not self.actions.exists(client.archive_file):
            if client.dump() != 0:
                raise click.ClickException(
                    f"Remigration aborted. Unable to dump the database to {client.archive_file}."
                )
        client.drop()
        client.create()

        # Replace the existing migrations with generated ones.
        self.actions.remove(migrate_path)
        self.actions.empty_directory(migrate_path)
        self.actions.run("rails generate remigrate")

        # Carry the edited content over to the generated files, matched by name.
        for source in self.new_migrations():
            name = migration_name(source)
            source = source.relative_to(self.actions.root)
            generated = self.generated_migration(name)
            if generated is None:
                self.actions.say_status("skip", f"{source} (no generated migration)", color="yellow")
                continue
            self.actions.copy_file(source, generated.relative_to(self.actions.root))

        client.migrate()

        # Data only, the schema comes from the new migrations.
        client.restore(["-a -O -w"])
        self.actions.info("Remigration complete.")

    def _remove_generator(self) -> None:
        self.actions.remove(generator_path)
        self.actions.remove_if_empty(generators_path)

    def clean(self) -> None:
        if not self.actions.yes("Cleaning of remigration support files is non-recoverable. Continue?"):
            self.actions.info("Remigration cleanup aborted.")
            return
        self.actions.info("Cleaning up excess remigration files...")
        self.actions.remove(old_migrate_path)
        self.actions.remove(new_migrate_path)
        self._remove_generator()
        self.actions.remove(self.client.archive_file)
        self.actions.info("Remigration cleanup complete.")

    def restore(self) -> None:
        if not self.actions.exists(old_migrate_path):
            raise click.UsageError(f"No {old_migrate_path} directory to restore from in {self.actions.root}")
        self.actions.info("Reverting all remigration changes...")
        self.actions.remove(migrate_path)
        self.actions.directory(old_migrate_path, migrate_path)
        self.actions.remove(old_migrate_path)
        self.actions.remove(new_migrate_path)
        self._remove_generator()
        self.actions.info(
            "Remigration revert complete - Database migrations restored to original state."
        )
