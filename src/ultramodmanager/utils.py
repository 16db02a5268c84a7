"""Naming helpers for installed artifacts and atomic file replacement.

Naming helpers are pure functions; write_text_atomic is the only I/O here.
"""

import os
import tempfile
from collections.abc import Collection
from pathlib import Path

from .patterns import PATTERN_EXTENSION
from .schema import Manifest


def write_text_atomic(path: Path, text: str) -> None:
    """
    Replace the contents of path with text.

    The text goes to a temporary file next to path, is flushed to disk, and
    is then renamed over path. If anything fails the temporary file is
    removed and path keeps its previous contents.

    Args:
        path: File to replace (its parent directory must exist)
        text: New contents, written as UTF-8 without newline translation

    Raises:
        OSError: If the temporary file can't be written or renamed
    """
    tmp = tempfile.NamedTemporaryFile(
        "w",
        encoding="utf-8",
        newline="",
        dir=path.parent,
        prefix=f".{path.name}.",
        suffix=".tmp",
        delete=False,
    )
    try:
        with tmp as f:
            f.write(text)
            f.flush()
            os.fsync(f.fileno())
        os.replace(tmp.name, path)
    except BaseException:
        Path(tmp.name).unlink(missing_ok=True)
        raise


def mod_dir_name(manifest: Manifest) -> str:
    """Installed directory name for a mod: ``"{id}@{mod_version}"``."""
    return f"{manifest.id}@{manifest.mod_version}"


def pattern_record_name(base_name: str, version: str) -> str:
    """Candidate record name for a pattern: ``"{base_name}@{version}"``."""
    return f"{base_name}@{version}"


def is_safe_name(name: str) -> bool:
    """True if name can be used as a single path component inside a store."""
    return bool(name) and name not in (".", "..") and not any(char in name for char in ("/", "\\", "\x00"))


def strip_pattern_extension(name: str) -> str:
    """Strip a trailing ``.cgp`` (any case) from a requested pattern name.

    Examples:
        >>> strip_pattern_extension("boss.cgp")
        'boss'
        >>> strip_pattern_extension("boss.v2")
        'boss.v2'
    """
    if name.lower().endswith(PATTERN_EXTENSION):
        return name[: -len(PATTERN_EXTENSION)]
    return name


def resolve_unique_name(existing: Collection[str], candidate: str) -> str:
    """
    Find a name not in existing by probing suffixes.

    Returns candidate if free, else the first free ``candidate + "_(n)"`` for
    n = 0, 1, 2, ...

    Args:
        existing: Names already taken
        candidate: Preferred name

    Returns:
        A name not in existing

    Examples:
        >>> resolve_unique_name(set(), "boss@1.0.0")
        'boss@1.0.0'
        >>> resolve_unique_name({"boss@1.0.0", "boss@1.0.0_(0)"}, "boss@1.0.0")
        'boss@1.0.0_(1)'
    """
    if candidate not in existing:
        return candidate

    n = 0
    while f"{candidate}_({n})" in existing:
        n += 1
    return f"{candidate}_({n})"
