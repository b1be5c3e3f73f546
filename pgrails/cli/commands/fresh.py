import click

from ..groups import root
from ..utils import Session, pass_session


@root.command()
@pass_session
def fresh(session: Session):
    """Create fresh database from scratch (drop, create, migrate and seed)."""
    if not session.actions.yes(
        "The current database will be completely destroyed and rebuilt from scratch. Continue?"
    ):
        session.actions.info("Database rebuild aborted.")
        return
    if not session.client.freshen():
        raise click.exceptions.Exit(1)
    session.actions.info("Database rebuilt.")
