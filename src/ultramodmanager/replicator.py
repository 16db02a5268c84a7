"""Recursive directory copy into the managed store.

Mod directory trees are author-controlled and can be arbitrarily deep, so the
walk uses an explicit work list instead of recursion.
"""

import logging
import os
import shutil
from pathlib import Path

from .exceptions import CopyFailedError

logger = logging.getLogger(__name__)


def replicate_tree(source: Path, destination: Path) -> list[Path]:
    """
    Copy the full tree under source into destination.

    Directories are created before anything beneath them is copied. Regular
    files (including symlinks to files) are copied byte-for-byte with their
    metadata. Anything else (broken symlinks, symlinked directories, FIFOs,
    sockets, devices) is skipped and reported.

    Args:
        source: Directory to copy from
        destination: Directory to copy into (created if missing)

    Returns:
        Source paths that were skipped

    Raises:
        CopyFailedError: On any I/O error. Files already copied are left in
            place; the caller decides how to report them.

    Example:
        >>> skipped = replicate_tree(Path("downloads/mod-a"), Path("~/.ultramodmanager/mods/a@1.0.0"))
    """
    skipped: list[Path] = []
    pending: list[tuple[Path, Path]] = [(source, destination)]
    copied = 0

    while pending:
        src_dir, dst_dir = pending.pop()
        current = src_dir
        try:
            dst_dir.mkdir(parents=True, exist_ok=True)

            with os.scandir(src_dir) as entries:
                for entry in entries:
                    current = Path(entry.path)

                    if entry.is_dir(follow_symlinks=False):
                        pending.append((current, dst_dir / entry.name))
                    elif entry.is_file():
                        shutil.copy2(current, dst_dir / entry.name)
                        copied += 1
                    else:
                        logger.warning(f"Skipping unsupported entry: {current}")
                        skipped.append(current)

        except OSError as e:
            raise CopyFailedError(
                f"Failed to copy {current}: {e}",
                context={"source": str(source), "destination": str(destination), "path": str(current)},
            ) from e

    logger.debug(f"Replicated {copied} files from {source} to {destination} ({len(skipped)} skipped)")
    return skipped
