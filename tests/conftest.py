from pathlib import Path
import shlex
import subprocess

import pytest

from pgrails import actions as actions_module
from pgrails.actions import Actions
from pgrails.client import PostgreSqlClient
from pgrails.rails import RailsProject
from pgrails.settings import default_settings


DATABASE_YML = """\
default: &default
  adapter: postgresql
  encoding: unicode
  username: app
  host: localhost

development:
  <<: *default
  database: app_development

test:
  <<: *default
  database: app_test
  port: 5433
  password: secret
"""


class FakeRun:
    """Stands in for ``subprocess.run`` and records every command."""

    def __init__(self):
        self.calls = []
        self.returncodes = {}
        self.side_effects = {}

    def __call__(self, args, cwd=None, env=None, check=False, **kwargs):
        command = shlex.join(args)
        self.calls.append(dict(args=list(args), cwd=cwd, env=env))
        if effect := self.side_effects.get(command):
            effect(Path(cwd))
        return subprocess.CompletedProcess(args, self.returncodes.get(command, 0))

    @property
    def commands(self):
        return [shlex.join(c["args"]) for c in self.calls]


@pytest.fixture
def fake_run(monkeypatch):
    fake = FakeRun()
    monkeypatch.setattr(actions_module.subprocess, "run", fake)
    return fake


@pytest.fixture
def rails_app(tmp_path, monkeypatch) -> Path:
    tmp_path.joinpath("config").mkdir()
    tmp_path.joinpath("config", "database.yml").write_text(DATABASE_YML, encoding="utf-8")
    migrate = tmp_path / "db" / "migrate"
    migrate.mkdir(parents=True)
    migrate.joinpath("20200101000000_create_users.rb").write_text("# users\n", encoding="utf-8")
    migrate.joinpath("20200102000000_add_email_to_users.rb").write_text("# email\n", encoding="utf-8")
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def actions(rails_app) -> Actions:
    return Actions(root=rails_app, assume_yes=True, quiet=True)


@pytest.fixture
def client(rails_app, actions) -> PostgreSqlClient:
    rails = RailsProject(root=rails_app, env="development")
    return PostgreSqlClient(actions, default_settings(), rails)
