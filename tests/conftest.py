"""Shared fixtures for ultramodmanager tests."""

from pathlib import Path

import pytest
from ultramodmanager import init_environment

HEIGHT_ROWS = ["(10)" + "0" * 15] + ["0123456789012345"] + ["(-3)(2)" + "1" * 14] + ["0" * 16] * 13
PREFAB_ROWS = ["n0p0J0s0H0000000"] + ["0" * 16] * 15
VALID_PATTERN = "\n".join(HEIGHT_ROWS) + "\n\n" + "\n".join(PREFAB_ROWS) + "\n"


@pytest.fixture
def valid_pattern() -> str:
    """A well-formed Cyber Grind pattern."""
    return VALID_PATTERN


@pytest.fixture
def environment(tmp_path):
    """Fresh environment rooted in a temporary home directory."""
    home = tmp_path / "home"
    home.mkdir()
    return init_environment(home=home)


@pytest.fixture
def make_mod(tmp_path):
    """Factory creating a mod source directory with manifest.toml and payload."""

    def _make_mod(mod_id: str = "a", version: str = "1.0.0", files: dict[str, str] | None = None) -> Path:
        mod_dir = tmp_path / "sources" / f"{mod_id}-{version}"
        mod_dir.mkdir(parents=True)
        (mod_dir / "manifest.toml").write_text(
            f"""[mod]
id = "{mod_id}"
name = "Mod {mod_id}"
description = "Test mod {mod_id}"
mod_version = "{version}"
uk_version = "16.0.0"
"""
        )
        for rel_path, content in (files or {"plugin.dll": "binary payload"}).items():
            target = mod_dir / rel_path
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(content)
        return mod_dir

    return _make_mod
