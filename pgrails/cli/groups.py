from pathlib import Path
from typing import Dict, Optional
import logging

import click

from .. import __version__, label
from ..actions import Actions
from ..settings import SETTINGS_ENVVAR
from .utils import Session


class AliasedGroup(click.Group):
    """A group that also accepts the single-letter shorthand of its commands."""

    aliases: Dict[str, str] = {
        "c": "create",
        "D": "drop",
        "d": "dump",
        "r": "restore",
        "F": "fresh",
        "i": "import",
        "m": "migrate",
        "s": "seed",
        "M": "remigrate",
        "e": "edit",
    }

    def get_command(self, ctx, cmd_name):
        return super().get_command(ctx, self.aliases.get(cmd_name, cmd_name))

    def resolve_command(self, ctx, args):
        # Always report the full command name.
        _, cmd, args = super().resolve_command(ctx, args)
        return cmd.name if cmd else None, cmd, args


@click.group(cls=AliasedGroup)
@click.option(
    "settings_file",
    "--settings",
    type=click.Path(file_okay=True, dir_okay=False, path_type=Path),
    envvar=SETTINGS_ENVVAR,
    default=None,
    help="Settings file (default: ~/.pgrails/settings.yml).",
)
@click.option("rails_env", "--env", envvar="RAILS_ENV", default=None, help="Rails environment.")
@click.option("--yes", "-y", is_flag=True, default=False, help="Answer yes to every confirmation.")
@click.option("--pretend", "-p", is_flag=True, default=False, help="Print what would be done, change nothing.")
@click.option("--quiet", "-q", is_flag=True, default=False, help="Suppress status output.")
@click.option("--verbose", is_flag=True, default=False, help="Log debug messages to stderr.")
@click.version_option(__version__, prog_name=label, message="%(prog)s %(version)s")
@click.pass_context
def root(
    ctx: click.Context,
    settings_file: Optional[Path],
    rails_env: Optional[str],
    yes: bool,
    pretend: bool,
    quiet: bool,
    verbose: bool,
):
    """Command line interface for PostgreSQL databases of Rails projects."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)-1s %(name)s %(message)s",
    )
    ctx.obj = Session(
        settings_file=settings_file,
        rails_env=rails_env,
        actions=Actions(pretend=pretend, quiet=quiet, assume_yes=yes),
    )


@root.result_callback()
@click.pass_obj
def exit_on_failures(session: Session, *args, **kwargs):
    if session.actions.failures:
        raise click.exceptions.Exit(1)
