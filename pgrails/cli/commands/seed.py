from ..groups import root
from ..utils import Session, pass_session


@root.command()
@pass_session
def seed(session: Session):
    """Load the seed data into current database."""
    if session.client.seed() == 0:
        session.actions.info("Database seeded.")
