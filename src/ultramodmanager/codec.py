"""Manifest codec - TOML and JSON5 descriptor formats.

TOML is the primary, human-editable format (same format as the lock file).
JSON5 is accepted for authors who prefer a relaxed JSON syntax.
"""

import logging
import tomllib
from pathlib import Path

import json5
import tomli_w
from pydantic import ValidationError

from .exceptions import ManifestDecodeError
from .exceptions import ManifestEncodeError
from .schema import Manifest

logger = logging.getLogger(__name__)

TOML = "toml"
JSON5 = "json5"
FORMATS = (TOML, JSON5)

# Descriptor file names in lookup order
MANIFEST_FILENAMES = ("manifest.toml", "manifest.json5", "manifest.json")

_SUFFIX_FORMATS = {
    ".toml": TOML,
    ".json5": JSON5,
    ".json": JSON5,
}


def format_for_path(path: Path) -> str:
    """Map a descriptor file suffix to its codec format.

    Raises:
        ManifestDecodeError: If the suffix is not a known descriptor format
    """
    fmt = _SUFFIX_FORMATS.get(path.suffix.lower())
    if fmt is None:
        raise ManifestDecodeError(
            f"Unsupported manifest format: {path.name}",
            context={"path": str(path)},
        )
    return fmt


def decode_manifest(text: str, fmt: str = TOML) -> Manifest:
    """
    Decode descriptor text into a Manifest.

    Args:
        text: Raw descriptor text
        fmt: "toml" or "json5"

    Returns:
        Decoded manifest

    Raises:
        ManifestDecodeError: If the text is malformed or misses required fields
    """
    try:
        if fmt == TOML:
            data = tomllib.loads(text)
        elif fmt == JSON5:
            data = json5.loads(text)
        else:
            raise ManifestDecodeError(f"Invalid manifest format: {fmt!r}", context={"format": fmt})

        if not isinstance(data, dict):
            raise ManifestDecodeError(
                f"Manifest must be a {fmt} table/object, got {type(data).__name__}",
                context={"format": fmt},
            )

        return Manifest.from_dict(data)

    except ManifestDecodeError:
        raise
    except (tomllib.TOMLDecodeError, ValueError, KeyError, ValidationError) as e:
        # json5 raises plain ValueError; pydantic's ValidationError is one too
        raise ManifestDecodeError(f"Failed to decode {fmt} manifest: {e}", context={"format": fmt}) from e


def encode_manifest(manifest: Manifest, fmt: str = TOML) -> str:
    """
    Encode a Manifest as descriptor text.

    Args:
        manifest: Manifest to serialize
        fmt: "toml" or "json5"

    Returns:
        Descriptor text

    Raises:
        ManifestEncodeError: If the format is unknown or serialization fails
    """
    data = manifest.to_dict()
    try:
        if fmt == TOML:
            return tomli_w.dumps(data)
        if fmt == JSON5:
            return json5.dumps(data, indent=2, quote_keys=True, ensure_ascii=False)
    except (TypeError, ValueError) as e:
        raise ManifestEncodeError(f"Failed to encode {fmt} manifest: {e}", context={"format": fmt}) from e

    raise ManifestEncodeError(f"Invalid manifest format: {fmt!r}", context={"format": fmt})


def find_manifest(mod_dir: Path) -> Path | None:
    """Find the manifest descriptor in a mod directory.

    Returns:
        Path to the first descriptor found (see MANIFEST_FILENAMES), or None
    """
    for filename in MANIFEST_FILENAMES:
        candidate = mod_dir / filename
        if candidate.is_file():
            return candidate
    return None


def read_manifest(path: Path) -> Manifest:
    """Read and decode a descriptor file, picking the format from its suffix.

    Raises:
        ManifestDecodeError: If the file can't be read or decoded
    """
    fmt = format_for_path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ManifestDecodeError(f"Unable to read manifest {path}: {e}", context={"path": str(path)}) from e

    logger.debug(f"Decoding {fmt} manifest: {path}")
    try:
        return decode_manifest(text, fmt)
    except ManifestDecodeError as e:
        e.context.setdefault("path", str(path))
        raise
