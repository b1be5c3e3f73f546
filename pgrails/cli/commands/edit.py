import click

from ..groups import root
from ..utils import Session, pass_session
from ...settings import default_settings, write_settings


@root.command()
@pass_session
def edit(session: Session):
    """Edit settings in default editor."""
    path = session.settings_path
    actions = session.actions
    if not path.is_file():
        actions.say_status("create", str(path))
        if not actions.pretend:
            write_settings(path, default_settings())

    actions.info("Launching editor...")
    if not actions.pretend:
        click.edit(filename=str(path))
    actions.info("Editor launched.")
