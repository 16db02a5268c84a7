"""Environment resolver - locate and bootstrap the managed directory.

Call init_environment() once at process start, before any install. It
creates whatever is missing:

    ~/.ultramodmanager/
        config.toml            # [meta] host_path
        ultramodmanager.lock   # installed mods and patterns
        mods/                  # managed mod store
        patterns/              # managed pattern store
"""

import logging
import tomllib
from pathlib import Path

from pydantic import ValidationError

from .config import CONFIG_FILENAME
from .config import UMMConfig
from .config import UserSettings
from .config import load_config_file
from .config import save_config_file
from .exceptions import InitializationError
from .exceptions import WriteFailedError
from .lock import ModLock

logger = logging.getLogger(__name__)

MANAGED_DIRNAME = ".ultramodmanager"


def _load_settings(config_path: Path) -> UserSettings:
    if config_path.is_file():
        try:
            return load_config_file(config_path)
        except OSError as e:
            raise InitializationError(
                f"Unable to read config file {config_path}: {e}", context={"path": str(config_path)}
            ) from e
        except (tomllib.TOMLDecodeError, ValidationError) as e:
            raise InitializationError(
                f"Unable to parse config file {config_path}: {e}", context={"path": str(config_path)}
            ) from e

    settings = UserSettings()
    try:
        save_config_file(config_path, settings)
    except OSError as e:
        raise InitializationError(
            f"Failed to write default config file {config_path}: {e}", context={"path": str(config_path)}
        ) from e
    logger.info(f"Created default config file: {config_path}")
    return settings


def _load_lock(lock_path: Path) -> ModLock:
    if lock_path.is_file():
        try:
            return ModLock.load(lock_path)
        except OSError as e:
            raise InitializationError(
                f"Unable to read lock file {lock_path}: {e}", context={"path": str(lock_path)}
            ) from e
        except (tomllib.TOMLDecodeError, TypeError) as e:
            raise InitializationError(
                f"Unable to parse lock file {lock_path}: {e}", context={"path": str(lock_path)}
            ) from e

    lock = ModLock(lock_path)
    try:
        lock.save()
    except WriteFailedError as e:
        raise InitializationError(
            f"Failed to write default lock file {lock_path}: {e.message}", context={"path": str(lock_path)}
        ) from e
    logger.info(f"Created empty lock file: {lock_path}")
    return lock


def _ensure_dir(path: Path, what: str) -> None:
    if path.exists() and not path.is_dir():
        raise InitializationError(f"The {what} must be a directory: {path}", context={"path": str(path)})
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise InitializationError(f"Unable to create {what} {path}: {e}", context={"path": str(path)}) from e


def init_environment(home: Path | None = None) -> tuple[UMMConfig, ModLock]:
    """
    Resolve configuration and load the lock, creating defaults if absent.

    Args:
        home: Home directory (defaults to Path.home())

    Returns:
        (config, lock) for this process

    Raises:
        InitializationError: If the managed root is not a directory, a
            directory or default file can't be created, or config/lock can't
            be read or parsed

    Example:
        >>> config, lock = init_environment()
        >>> print(f"{len(lock.mods)} mods installed in {config.managed_mods_dir}")
    """
    try:
        home = (home or Path.home()).resolve()
    except RuntimeError as e:
        raise InitializationError(f"Unable to determine home directory: {e}") from e

    managed_root = home / MANAGED_DIRNAME
    _ensure_dir(managed_root, "managed root")

    settings = _load_settings(managed_root / CONFIG_FILENAME)

    try:
        config = UMMConfig.from_paths(managed_root, settings.resolve_host_path(home))
    except ValidationError as e:
        raise InitializationError(f"Invalid configuration: {e}", context={"path": str(managed_root)}) from e

    lock = _load_lock(config.lock_path)

    _ensure_dir(config.managed_mods_dir, "managed mods directory")
    _ensure_dir(config.managed_patterns_dir, "managed patterns directory")

    logger.debug(f"Environment ready: {config.managed_root} (host: {config.host_path})")
    return config, lock
