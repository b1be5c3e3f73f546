import typing

from ..groups import root
from ..utils import Session, pass_session, pass_through_context, pass_through_overrides


@root.command(context_settings=pass_through_context)
@pass_through_overrides
@pass_session
def dump(session: Session, overrides: typing.List[str]):
    """Dump current database to archive file."""
    if session.client.dump(overrides) == 0:
        session.actions.info(f"Archive created: {session.client.archive_file}")
