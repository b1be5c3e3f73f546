import click

from ..groups import root
from ..utils import Session, pass_session


@root.command("import")
@pass_session
def import_archive(session: Session):
    """Import archive data into current database (drop, create, restore and migrate)."""
    if not session.actions.yes("All data in current database will be completely overwritten. Continue?"):
        session.actions.info("Database import aborted.")
        return

    client = session.client
    if not session.actions.exists(client.archive_file):
        raise click.ClickException(
            f"Import aborted. Unable to find archive file: {client.archive_file}."
        )

    if not client.import_archive():
        raise click.exceptions.Exit(1)
    session.actions.info("Database import complete.")
