"""Mod and pattern installation.

Install order for both artifact kinds:
1. Validate (nothing touches disk until every check passes)
2. Write the artifact into the managed store
3. Append the record to the in-memory lock
4. Rewrite the lock file

The lock file is written last, so a failure at any earlier step leaves it
unchanged. Files already written to the store are not rolled back; they are
logged as orphaned so they can be cleaned up by hand.

Host projection is a separate step (see projection.py).
"""

import logging
from pathlib import Path

from .codec import find_manifest
from .codec import read_manifest
from .config import UMMConfig
from .exceptions import CopyFailedError
from .exceptions import DestinationExistsError
from .exceptions import DuplicateInstallError
from .exceptions import InvalidSourceError
from .exceptions import MissingManifestError
from .exceptions import WriteFailedError
from .lock import ModLock
from .lock import ModRecord
from .lock import PatternRecord
from .patterns import PATTERN_EXTENSION
from .patterns import validate_pattern
from .replicator import replicate_tree
from .semver import parse_version
from .utils import is_safe_name
from .utils import mod_dir_name
from .utils import pattern_record_name
from .utils import resolve_unique_name
from .utils import strip_pattern_extension

logger = logging.getLogger(__name__)


def _commit_mod(lock: ModLock, record: ModRecord, destination: Path) -> None:
    lock.mods.append(record)
    try:
        lock.save()
    except WriteFailedError as e:
        # Keep memory in step with the file on disk
        lock.mods.pop()
        logger.error(f"Lock file not updated; orphaned mod directory left at {destination}")
        e.context["orphaned_path"] = str(destination)
        raise


def _commit_pattern(lock: ModLock, record: PatternRecord, destination: Path) -> None:
    lock.patterns.append(record)
    try:
        lock.save()
    except WriteFailedError as e:
        lock.patterns.pop()
        logger.error(f"Lock file not updated; orphaned pattern file left at {destination}")
        e.context["orphaned_path"] = str(destination)
        raise


def install_mod(source_dir: Path, lock: ModLock, config: UMMConfig) -> ModRecord:
    """
    Install a mod directory into the managed store.

    Process:
    1. Source must be an existing directory
    2. Find manifest descriptor (manifest.toml, manifest.json5, manifest.json)
    3. Decode manifest
    4. Derive installed name "{id}@{mod_version}"
    5. Reject if a record with the same id and version exists
    6. Reject if the destination directory already exists
    7. Copy the tree, append the record, save the lock

    Args:
        source_dir: Mod directory to install from
        lock: Lock state (mutated and saved on success)
        config: Resolved configuration

    Returns:
        The new ModRecord

    Raises:
        InvalidSourceError: Source missing or not a directory, or manifest
            id/mod_version not usable as a directory name
        MissingManifestError: No descriptor in source
        ManifestDecodeError: Descriptor unreadable or malformed
        DuplicateInstallError: Same id and version already installed
        DestinationExistsError: Store directory already present
        CopyFailedError: I/O error while copying
        WriteFailedError: Lock file could not be saved

    Example:
        >>> config, lock = init_environment()
        >>> record = install_mod(Path("downloads/mod-a"), lock, config)
        >>> print(f"Installed {record.name}")
    """
    if not source_dir.is_dir():
        raise InvalidSourceError(
            f"Mod source is not a directory: {source_dir}",
            context={"source": str(source_dir)},
        )

    manifest_path = find_manifest(source_dir)
    if manifest_path is None:
        raise MissingManifestError(
            f"No manifest found in {source_dir}.\nExpected one of: manifest.toml, manifest.json5, manifest.json",
            context={"source": str(source_dir)},
        )

    manifest = read_manifest(manifest_path)
    name = mod_dir_name(manifest)
    logger.debug(f"Mod manifest {manifest_path}: {name}")

    if not is_safe_name(manifest.id) or not is_safe_name(manifest.mod_version):
        raise InvalidSourceError(
            f"Manifest id and mod_version must be non-empty and free of path separators: {name!r}",
            context={"source": str(source_dir), "name": name},
        )

    if lock.has_mod(manifest.id, manifest.mod_version):
        raise DuplicateInstallError(
            f"Mod '{manifest.id}' version {manifest.mod_version} is already installed",
            context={"id": manifest.id, "version": manifest.mod_version},
        )

    destination = config.managed_mods_dir / name
    if destination.exists():
        raise DestinationExistsError(
            f"Install destination already exists: {destination}",
            context={"destination": str(destination)},
        )

    logger.info(f"Installing mod {name} from {source_dir}")
    try:
        skipped = replicate_tree(source_dir, destination)
    except CopyFailedError as e:
        if destination.exists():
            logger.error(f"Copy failed; orphaned partial mod directory left at {destination}")
            e.context["orphaned_path"] = str(destination)
        raise

    if skipped:
        logger.warning(f"Skipped {len(skipped)} unsupported entries while installing {name}")

    record = ModRecord(
        name=name,
        id=manifest.id,
        description=manifest.description,
        version=manifest.mod_version,
        autoload=True,
    )
    _commit_mod(lock, record, destination)

    logger.info(f"Successfully installed mod: {name}")
    return record


def install_pattern(version: str, name: str, content: str, lock: ModLock, config: UMMConfig) -> PatternRecord:
    """
    Install a Cyber Grind pattern into the managed store.

    Process:
    1. Strip ".cgp" from the requested name
    2. Parse the version tag as semver
    3. Validate the pattern content
    4. Candidate name "{base}@{version}"
    5. Add "_(n)" suffix on collision (n = 0, 1, ...)
    6. Write "{resolved}.cgp", append the record, save the lock

    Uniqueness is keyed by the full "{base}@{version}" name: the same pattern
    name at a different version gets no suffix.

    Args:
        version: Semantic version tag
        name: Requested name, with or without ".cgp"
        content: Raw pattern text (stored verbatim)
        lock: Lock state (mutated and saved on success)
        config: Resolved configuration

    Returns:
        The new PatternRecord

    Raises:
        InvalidSourceError: Name is empty or contains path separators
        InvalidVersionError: Version tag is not semver
        ContentValidationError: Content is not a valid pattern
        WriteFailedError: Pattern file or lock file could not be written

    Example:
        >>> record = install_pattern("1.0.0", "boss.cgp", text, lock, config)
        >>> record.name
        'boss@1.0.0'
    """
    base_name = strip_pattern_extension(name)
    if not is_safe_name(base_name):
        raise InvalidSourceError(f"Invalid pattern name: {name!r}", context={"name": name})

    parsed_version = parse_version(version)
    validate_pattern(content)

    candidate = pattern_record_name(base_name, str(parsed_version))
    resolved = resolve_unique_name(lock.pattern_names(), candidate)
    if resolved != candidate:
        logger.debug(f"Pattern name {candidate} taken, using {resolved}")

    destination = config.managed_patterns_dir / f"{resolved}{PATTERN_EXTENSION}"

    logger.info(f"Installing pattern {resolved}")
    existed = destination.exists()
    try:
        destination.parent.mkdir(parents=True, exist_ok=True)
        with open(destination, "w", encoding="utf-8", newline="") as f:
            f.write(content)
    except OSError as e:
        context = {"destination": str(destination)}
        if not existed and destination.exists():
            logger.error(f"Pattern write failed; orphaned partial file left at {destination}")
            context["orphaned_path"] = str(destination)
        raise WriteFailedError(f"Failed to write pattern {destination}: {e}", context=context) from e

    record = PatternRecord(name=resolved, version=version.strip())
    _commit_pattern(lock, record, destination)

    logger.info(f"Successfully installed pattern: {resolved}")
    return record
