import typing

from ..groups import root
from ..utils import Session, pass_session, pass_through_context, pass_through_overrides


@root.command(context_settings=pass_through_context)
@pass_through_overrides
@pass_session
def create(session: Session, overrides: typing.List[str]):
    """Create new database."""
    if session.client.create(overrides) == 0:
        session.actions.info("Database created.")
