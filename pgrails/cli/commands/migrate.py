from ..groups import root
from ..utils import Session, pass_session


@root.command()
@pass_session
def migrate(session: Session):
    """Execute migrations for current database."""
    if session.client.migrate() == 0:
        session.actions.info("Database migrated.")
