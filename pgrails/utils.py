from typing import Iterable, Optional
from pathlib import Path
import re
import shlex


leading_timestamp = re.compile(r"^\d+_")


def migration_name(path: Path | str) -> str:
    """
    Name of a Rails migration file without its timestamp prefix and extension,
    e.g. ``20240101120000_create_users.rb`` becomes ``create_users``.
    """
    return leading_timestamp.sub("", Path(path).stem)


def flag(name: str, value: Optional[object]) -> Optional[str]:
    if value is None or value == "":
        return None
    return f"{name} {shlex.quote(str(value))}"


def positional(value: Optional[object]) -> Optional[str]:
    if value is None or value == "":
        return None
    return shlex.quote(str(value))


def join_options(options: Iterable[Optional[str]]) -> str:
    return " ".join(o for o in options if o)
