import click

from ..groups import root
from ..utils import Session
from ...remigration import Remigration


@root.command()
@click.option("--setup", "-s", is_flag=True, default=False, help="Prepare existing migrations for remigration.")
@click.option(
    "--generator",
    "-g",
    is_flag=True,
    default=False,
    help="Create the remigration generator from the new migrations (as created during setup).",
)
@click.option("--execute", "-e", is_flag=True, default=False, help="Execute the remigration.")
@click.option(
    "--clean",
    "-c",
    is_flag=True,
    default=False,
    help="Remove the files created during the setup and generator steps.",
)
@click.option(
    "--restore",
    "-r",
    is_flag=True,
    default=False,
    help="Revert migrations to their original state (reverses setup).",
)
@click.pass_context
def remigrate(ctx: click.Context, setup: bool, generator: bool, execute: bool, clean: bool, restore: bool):
    """Rebuild current database from new migrations."""
    if not any((setup, generator, execute, clean, restore)):
        click.echo(ctx.get_help())
        return

    session = ctx.find_object(Session)
    remigration = Remigration(session.client)

    # One step per invocation, in workflow order.
    if setup:
        remigration.setup()
    elif generator:
        remigration.generator()
    elif execute:
        remigration.execute()
    elif clean:
        remigration.clean()
    else:
        remigration.restore()
