import typing

from ..groups import root
from ..utils import Session, pass_session, pass_through_context, pass_through_overrides


@root.command(context_settings=pass_through_context)
@pass_through_overrides
@pass_session
def restore(session: Session, overrides: typing.List[str]):
    """Restore current database from archive file."""
    if not session.actions.yes("All data in current database will be completely overwritten. Continue?"):
        session.actions.info("Database restore aborted.")
        return
    if session.client.restore(overrides) == 0:
        session.actions.info("Database restored.")
