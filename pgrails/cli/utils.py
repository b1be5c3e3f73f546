from dataclasses import dataclass
from functools import cached_property
from pathlib import Path
from typing import List, Optional, Tuple
import shlex

import click

from ..actions import Actions
from ..client import AbstractClient, load_client
from ..rails import RailsProject
from ..settings import Settings, load_settings, settings_path


@dataclass
class Session:
    """Everything a command needs, loaded on first use."""

    settings_file: Optional[Path]
    rails_env: Optional[str]
    actions: Actions

    @cached_property
    def settings_path(self) -> Path:
        return self.settings_file or settings_path()

    @cached_property
    def settings(self) -> Settings:
        return load_settings(self.settings_path)

    @cached_property
    def rails(self) -> RailsProject:
        rails_settings = self.settings.get("rails") or {}
        return RailsProject(
            root=self.actions.root,
            env=self.rails_env or rails_settings.get("env", "development"),
            enabled=bool(rails_settings.get("enabled", True)),
        )

    @cached_property
    def client(self) -> AbstractClient:
        return load_client(self.actions, self.settings, self.rails)


pass_session = click.make_pass_decorator(Session)


def join_overrides(ctx, param, tokens: Tuple[str, ...]) -> List[str]:
    """
    A single token is taken as an option string of its own (``"-a -O -w"``),
    several tokens are shell-quoted so that values with spaces stay intact.
    """
    if len(tokens) > 1:
        return [shlex.join(tokens)]
    return list(tokens)


def pass_through_overrides(f):
    """Collect raw option overrides, e.g. ``pgrails create -T template0``."""
    return click.argument(
        "overrides", nargs=-1, type=click.UNPROCESSED, callback=join_overrides
    )(f)


pass_through_context = dict(ignore_unknown_options=True)
