import pytest

from pgrails.utils import flag, join_options, migration_name, positional


@pytest.mark.parametrize(
    "path,expected",
    [
        ("20200101000000_create_users.rb", "create_users"),
        ("db/migrate-new/20200101000000_add_v2_to_users.rb", "add_v2_to_users"),
        ("create_users.rb", "create_users"),
    ],
)
def test_migration_name(path: str, expected: str):
    assert migration_name(path) == expected


def test_flag_omits_missing_values():
    assert flag("-h", None) is None
    assert flag("-h", "") is None
    assert flag("-p", 5432) == "-p 5432"


def test_flag_quotes_values_with_spaces():
    assert flag("-f", "my dumps/archive.dump") == "-f 'my dumps/archive.dump'"


def test_join_options_skips_empty_parts():
    assert join_options(["-w", None, positional("app"), positional(None)]) == "-w app"
