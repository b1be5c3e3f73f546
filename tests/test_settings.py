from pathlib import Path

import pytest

from pgrails.settings import (
    default_settings,
    load_settings,
    merge_settings,
    settings_path,
    write_settings,
)


def test_missing_file_uses_defaults(tmp_path: Path):
    assert load_settings(tmp_path / "settings.yml") == default_settings()


def test_partial_file_is_merged_over_defaults(tmp_path: Path):
    path = tmp_path / "settings.yml"
    path.write_text(
        "databases:\n  pg:\n    options:\n      dump: -Fc\nrails:\n  env: staging\n",
        encoding="utf-8",
    )
    settings = load_settings(path)
    assert settings["databases"]["pg"]["options"]["dump"] == "-Fc"
    assert settings["databases"]["pg"]["options"]["create"] == "-w"
    assert settings["databases"]["pg"]["archive_file"] == "db/archive.dump"
    assert settings["rails"] == {"enabled": True, "env": "staging"}


@pytest.mark.parametrize("content", ["databases: [unclosed\n", "- just\n- a list\n"])
def test_invalid_file_is_reported_and_defaults_used(tmp_path: Path, capsys, content: str):
    path = tmp_path / "settings.yml"
    path.write_text(content, encoding="utf-8")
    assert load_settings(path) == default_settings()
    assert f"Invalid settings file: {path}" in capsys.readouterr().err


def test_empty_file_uses_defaults(tmp_path: Path):
    path = tmp_path / "settings.yml"
    path.write_text("", encoding="utf-8")
    assert load_settings(path) == default_settings()


def test_merge_does_not_modify_its_inputs():
    base = default_settings()
    override = {"rails": {"enabled": False}}
    merged = merge_settings(base, override)
    assert merged["rails"] == {"enabled": False, "env": "development"}
    assert base == default_settings()
    assert override == {"rails": {"enabled": False}}


def test_written_settings_load_back(tmp_path: Path):
    path = tmp_path / "nested" / "settings.yml"
    settings = default_settings()
    settings["current_database"] = "pg"
    settings["databases"]["pg"]["archive_file"] = "tmp/backup.dump"
    write_settings(path, settings)
    assert load_settings(path) == settings


def test_settings_path_from_environment(monkeypatch, tmp_path: Path):
    monkeypatch.setenv("PGRAILS_SETTINGS", str(tmp_path / "custom.yml"))
    assert settings_path() == tmp_path / "custom.yml"


def test_settings_path_default(monkeypatch, tmp_path: Path):
    monkeypatch.delenv("PGRAILS_SETTINGS", raising=False)
    monkeypatch.setenv("HOME", str(tmp_path))
    assert settings_path() == tmp_path / ".pgrails" / "settings.yml"
