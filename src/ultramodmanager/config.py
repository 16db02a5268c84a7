"""Resolved configuration and the user-editable config file.

UMMConfig is built once per process by the environment resolver and is
read-only afterwards. Only ``host_path`` is user-editable; it lives in
``config.toml`` under the managed root:

    [meta]
    host_path = "/home/me/.steam/steam/steamapps/common/ULTRAKILL"
"""

import logging
import tomllib
from pathlib import Path

import tomli_w
from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic import model_validator

from .utils import write_text_atomic

logger = logging.getLogger(__name__)

CONFIG_FILENAME = "config.toml"
LOCK_FILENAME = "ultramodmanager.lock"

DEFAULT_HOST_PATH = Path(".steam") / "steam" / "steamapps" / "common" / "ULTRAKILL"


def _is_within(path: Path, root: Path) -> bool:
    return path == root or root in path.parents


class UMMConfig(BaseModel):
    """Resolved, absolute locations used by install and projection."""

    model_config = ConfigDict(frozen=True)

    host_path: Path
    host_mods_dir: Path
    host_patterns_dir: Path
    managed_root: Path
    managed_mods_dir: Path
    managed_patterns_dir: Path

    @model_validator(mode="after")
    def _check_layout(self) -> "UMMConfig":
        for field_name in type(self).model_fields:
            path = getattr(self, field_name)
            if not path.is_absolute():
                raise ValueError(f"{field_name} must be absolute: {path}")

        for field_name in ("managed_mods_dir", "managed_patterns_dir"):
            if not _is_within(getattr(self, field_name), self.managed_root):
                raise ValueError(f"{field_name} must be inside managed_root {self.managed_root}")

        for field_name in ("host_mods_dir", "host_patterns_dir"):
            if not _is_within(getattr(self, field_name), self.host_path):
                raise ValueError(f"{field_name} must be inside host_path {self.host_path}")

        return self

    @classmethod
    def from_paths(cls, managed_root: Path, host_path: Path) -> "UMMConfig":
        """Derive the full layout from the managed root and host install path.

        Example:
            >>> config = UMMConfig.from_paths(Path("/home/me/.ultramodmanager"), Path("/games/ULTRAKILL"))
            >>> config.host_mods_dir
            PosixPath('/games/ULTRAKILL/BepInEx/plugins')
        """
        return cls(
            host_path=host_path,
            host_mods_dir=host_path / "BepInEx" / "plugins",
            host_patterns_dir=host_path / "Cybergrind" / "Patterns",
            managed_root=managed_root,
            managed_mods_dir=managed_root / "mods",
            managed_patterns_dir=managed_root / "patterns",
        )

    @property
    def config_path(self) -> Path:
        return self.managed_root / CONFIG_FILENAME

    @property
    def lock_path(self) -> Path:
        return self.managed_root / LOCK_FILENAME


class UserSettings(BaseModel):
    """User-editable fields persisted in config.toml ([meta] table)."""

    host_path: str = ""

    def resolve_host_path(self, home: Path) -> Path:
        """Resolve host_path against home; empty means the default Steam location."""
        if not self.host_path:
            return home / DEFAULT_HOST_PATH
        path = Path(self.host_path).expanduser()
        if not path.is_absolute():
            path = home / path
        return path


def load_config_file(config_path: Path) -> UserSettings:
    """
    Load user settings from config.toml.

    Raises:
        OSError: If the file can't be read
        tomllib.TOMLDecodeError: If the file is not valid TOML
        pydantic.ValidationError: If [meta] fields have the wrong type
    """
    with open(config_path, "rb") as f:
        data = tomllib.load(f)

    meta = data.get("meta", {})
    settings = UserSettings.model_validate(meta)
    logger.debug(f"Loaded config from {config_path}: host_path={settings.host_path!r}")
    return settings


def save_config_file(config_path: Path, settings: UserSettings) -> None:
    """Write user settings to config.toml (full overwrite, by rename).

    Raises:
        OSError: If the file can't be written; the previous file is kept
    """
    write_text_atomic(config_path, tomli_w.dumps({"meta": settings.model_dump()}))
    logger.debug(f"Saved config to {config_path}")
