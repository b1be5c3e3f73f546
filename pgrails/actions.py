from pathlib import Path
from typing import List, Mapping, Optional
import logging
import os
import shlex
import shutil
import subprocess

import click


_LOGGER = logging.getLogger(__name__)


class Actions:
    """
    Runs external commands and touches files on behalf of the commands,
    printing one status line per action.

    Paths are relative to ``root``. With ``pretend`` nothing is run or written,
    only the status lines are printed. Failed commands are collected in
    ``failures`` instead of stopping the caller.
    """

    root: Path
    pretend: bool
    quiet: bool
    assume_yes: bool
    failures: List[tuple[str, int]]

    def __init__(
        self,
        root: Optional[Path] = None,
        pretend: bool = False,
        quiet: bool = False,
        assume_yes: bool = False,
    ) -> None:
        self.root = root or Path.cwd()
        self.pretend = pretend
        self.quiet = quiet
        self.assume_yes = assume_yes
        self.failures = []

    def __repr__(self) -> str:
        return f"Actions(root={self.root}, pretend={self.pretend})"

    # Output

    def say_status(self, status: str, message: str, color: str = "green") -> None:
        if self.quiet:
            return
        click.echo(f"{click.style(status.rjust(12), fg=color, bold=True)}  {message}")

    def info(self, message: str) -> None:
        click.echo(message)

    def error(self, message: str) -> None:
        click.secho(message, fg="red", err=True)

    def yes(self, question: str) -> bool:
        if self.assume_yes:
            return True
        return click.confirm(question, default=False)

    # Paths

    def path(self, relative: Path | str) -> Path:
        return self.root / relative

    def exists(self, relative: Path | str) -> bool:
        return self.path(relative).exists()

    def glob(self, pattern: str) -> List[Path]:
        return sorted(self.root.glob(pattern))

    # Commands

    def run(self, command: str, env: Optional[Mapping[str, str]] = None) -> int:
        self.say_status("run", command)
        if self.pretend:
            return 0

        args = shlex.split(command)
        child_env = None
        if env:
            child_env = os.environ.copy()
            child_env.update(env)

        _LOGGER.debug("Run %s in %s", command, self.root)
        try:
            returncode = subprocess.run(args, cwd=self.root, env=child_env, check=False).returncode
        except FileNotFoundError:
            returncode = 127
            _LOGGER.debug("Command not found: %s", args[0])

        if returncode != 0:
            self.say_status("failed", f"{command} (exit status {returncode})", color="red")
            self.failures.append((command, returncode))
        return returncode

    # Files and directories

    def directory(self, source: Path | str, destination: Path | str) -> None:
        self.say_status("directory", f"{destination} (from {source})")
        if self.pretend:
            return
        shutil.copytree(self.path(source), self.path(destination), dirs_exist_ok=True)

    def copy_file(self, source: Path | str, destination: Path | str) -> None:
        self.say_status("copy", f"{destination} (from {source})")
        if self.pretend:
            return
        target = self.path(destination)
        target.parent.mkdir(parents=True, exist_ok=True)
        shutil.copyfile(self.path(source), target)

    def create_file(self, destination: Path | str, content: str) -> None:
        self.say_status("create", str(destination))
        if self.pretend:
            return
        target = self.path(destination)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(content, encoding="utf-8")

    def empty_directory(self, destination: Path | str) -> None:
        self.say_status("create", str(destination))
        if self.pretend:
            return
        self.path(destination).mkdir(parents=True, exist_ok=True)

    def remove(self, relative: Path | str) -> None:
        """Remove a file or a whole directory tree, if it exists."""
        target = self.path(relative)
        if not target.exists() and not target.is_symlink():
            return
        self.say_status("remove", str(relative), color="red")
        if self.pretend:
            return
        if target.is_dir() and not target.is_symlink():
            shutil.rmtree(target)
        else:
            target.unlink()

    def remove_if_empty(self, relative: Path | str) -> None:
        target = self.path(relative)
        if target.is_dir() and not any(target.iterdir()):
            self.remove(relative)
