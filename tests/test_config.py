"""Tests for UMMConfig and config.toml."""

import os
from pathlib import Path

import pytest
from pydantic import ValidationError
from ultramodmanager import UMMConfig
from ultramodmanager import UserSettings
from ultramodmanager.config import load_config_file
from ultramodmanager.config import save_config_file


def test_from_paths_layout(tmp_path):
    """Store and host directories are derived from the two roots."""
    config = UMMConfig.from_paths(tmp_path / "umm", tmp_path / "ULTRAKILL")

    assert config.managed_mods_dir == tmp_path / "umm" / "mods"
    assert config.managed_patterns_dir == tmp_path / "umm" / "patterns"
    assert config.host_mods_dir == tmp_path / "ULTRAKILL" / "BepInEx" / "plugins"
    assert config.host_patterns_dir == tmp_path / "ULTRAKILL" / "Cybergrind" / "Patterns"
    assert config.lock_path == tmp_path / "umm" / "ultramodmanager.lock"
    assert config.config_path == tmp_path / "umm" / "config.toml"


def test_relative_paths_rejected():
    with pytest.raises(ValidationError, match="must be absolute"):
        UMMConfig.from_paths(Path("relative"), Path("/games/ULTRAKILL"))


def test_managed_dirs_must_be_inside_root(tmp_path):
    with pytest.raises(ValidationError, match="must be inside managed_root"):
        UMMConfig(
            host_path=tmp_path / "game",
            host_mods_dir=tmp_path / "game" / "mods",
            host_patterns_dir=tmp_path / "game" / "patterns",
            managed_root=tmp_path / "umm",
            managed_mods_dir=tmp_path / "elsewhere",
            managed_patterns_dir=tmp_path / "umm" / "patterns",
        )


def test_config_immutable(tmp_path):
    config = UMMConfig.from_paths(tmp_path / "umm", tmp_path / "game")

    with pytest.raises(ValidationError):
        config.host_path = tmp_path / "other"


def test_resolve_host_path_default(tmp_path):
    """Empty host_path means the default Steam install."""
    resolved = UserSettings().resolve_host_path(tmp_path)

    assert resolved == tmp_path / ".steam" / "steam" / "steamapps" / "common" / "ULTRAKILL"


def test_resolve_host_path_relative_to_home(tmp_path):
    assert UserSettings(host_path="games/UK").resolve_host_path(tmp_path) == tmp_path / "games" / "UK"


def test_resolve_host_path_absolute(tmp_path):
    assert UserSettings(host_path=str(tmp_path / "UK")).resolve_host_path(Path("/unused")) == tmp_path / "UK"


@pytest.mark.parametrize("host_path", ["", "/games/ULTRAKILL", 'C:\\Program Files\\"Steam"'])
def test_config_file_round_trip(tmp_path, host_path):
    """host_path survives save/load unchanged."""
    config_path = tmp_path / "config.toml"

    save_config_file(config_path, UserSettings(host_path=host_path))

    assert load_config_file(config_path).host_path == host_path


def test_config_file_meta_table(tmp_path):
    """Settings are read from the [meta] table."""
    config_path = tmp_path / "config.toml"
    config_path.write_text('[meta]\nhost_path = "/games/UK"\n')

    assert load_config_file(config_path).host_path == "/games/UK"


def test_failed_save_keeps_previous_config(tmp_path, monkeypatch):
    """A config write that fails midway leaves the previous file and no temp file."""
    config_path = tmp_path / "config.toml"
    save_config_file(config_path, UserSettings(host_path="/games/UK"))
    before = config_path.read_bytes()

    def failing_fsync(fd):
        raise OSError(5, "Input/output error")

    monkeypatch.setattr(os, "fsync", failing_fsync)

    with pytest.raises(OSError):
        save_config_file(config_path, UserSettings(host_path="/games/other"))

    assert config_path.read_bytes() == before
    assert [path.name for path in tmp_path.iterdir()] == ["config.toml"]
    assert load_config_file(config_path).host_path == "/games/UK"
