import typing

from ..groups import root
from ..utils import Session, pass_session, pass_through_context, pass_through_overrides


@root.command(context_settings=pass_through_context)
@pass_through_overrides
@pass_session
def drop(session: Session, overrides: typing.List[str]):
    """Drop current database."""
    if not session.actions.yes("All data in current database will be completely destroyed. Continue?"):
        session.actions.info("Database drop aborted.")
        return
    if session.client.drop(overrides) == 0:
        session.actions.info("Database dropped.")
