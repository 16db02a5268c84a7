"""Host projection - expose managed artifacts to ULTRAKILL.

Installed mods live in the managed store; the game loads plugins from
BepInEx/plugins and patterns from Cybergrind/Patterns. Projection places a
symlink (or, where symlinks are unavailable, a copy) there.
"""

import logging
import os
import shutil
import tempfile
from pathlib import Path

from .config import UMMConfig
from .exceptions import CopyFailedError
from .exceptions import ProjectionError
from .lock import ModRecord
from .lock import PatternRecord
from .patterns import PATTERN_EXTENSION
from .protocols import HostProjection
from .replicator import replicate_tree

logger = logging.getLogger(__name__)


class SymlinkProjection:
    """Project by symbolic link (directory-aware for Windows)."""

    def project(self, source: Path, target: Path) -> None:
        os.symlink(source, target, target_is_directory=source.is_dir())


class CopyProjection:
    """Project by materialized copy."""

    def project(self, source: Path, target: Path) -> None:
        if source.is_dir():
            replicate_tree(source, target)
        else:
            shutil.copy2(source, target)


def _can_symlink(probe_dir: Path) -> bool:
    try:
        with tempfile.TemporaryDirectory(dir=probe_dir) as tmpdir:
            link = Path(tmpdir) / "link"
            os.symlink(tmpdir, link, target_is_directory=True)
            return link.is_symlink()
    except (OSError, NotImplementedError) as e:
        logger.debug(f"Symlinks unavailable in {probe_dir}: {e}")
        return False


def select_projection(probe_dir: Path) -> HostProjection:
    """
    Pick the projection for this platform.

    Probes once whether a symlink can be created inside probe_dir (Windows
    without developer mode can't); falls back to copying.

    Args:
        probe_dir: Existing directory to probe in (e.g. the managed root)

    Returns:
        SymlinkProjection or CopyProjection
    """
    if _can_symlink(probe_dir):
        logger.debug("Using symlink projection")
        return SymlinkProjection()
    logger.info("Symlinks not supported here, projecting by copy")
    return CopyProjection()


def _project(source: Path, target: Path, projection: HostProjection) -> Path:
    if not source.exists():
        raise ProjectionError(
            f"Managed artifact not found: {source}",
            context={"source": str(source), "target": str(target)},
        )

    if target.exists() or target.is_symlink():
        raise ProjectionError(
            f"Projection target already exists: {target}",
            context={"source": str(source), "target": str(target)},
        )

    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        projection.project(source, target)
    except (OSError, CopyFailedError) as e:
        raise ProjectionError(
            f"Failed to project {source} to {target}: {e}",
            context={"source": str(source), "target": str(target)},
        ) from e

    logger.info(f"Projected {source.name} into {target.parent}")
    return target


def project_mod(record: ModRecord, config: UMMConfig, projection: HostProjection) -> Path:
    """
    Make an installed mod visible to the game.

    Args:
        record: Installed mod (from install_mod or the lock)
        config: Resolved configuration
        projection: Projection picked by select_projection

    Returns:
        Path of the projected entry in the host mods directory

    Raises:
        ProjectionError: If the managed directory is missing, the target
            exists, or the link/copy fails

    Example:
        >>> projection = select_projection(config.managed_root)
        >>> project_mod(install_mod(source, lock, config), config, projection)
    """
    return _project(
        config.managed_mods_dir / record.name,
        config.host_mods_dir / record.name,
        projection,
    )


def project_pattern(record: PatternRecord, config: UMMConfig, projection: HostProjection) -> Path:
    """Make an installed pattern visible to the game.

    Raises:
        ProjectionError: Same conditions as project_mod
    """
    filename = f"{record.name}{PATTERN_EXTENSION}"
    return _project(
        config.managed_patterns_dir / filename,
        config.host_patterns_dir / filename,
        projection,
    )
