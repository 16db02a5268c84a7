"""Lock file management.

The lock file is the single source of truth for what is installed. It is
loaded once per process, mutated in memory by installs, and rewritten in full
after every successful mutation.

Lock format (TOML):

    [[mods]]
    name = "a@1.0.0"
    id = "a"
    description = "Mod A"
    version = "1.0.0"
    autoload = true

    [[patterns]]
    name = "boss@1.0.0"
    version = "1.0.0"
"""

import logging
import tomllib
from dataclasses import asdict
from dataclasses import dataclass
from pathlib import Path

import tomli_w

from .exceptions import WriteFailedError
from .utils import write_text_atomic

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ModRecord:
    """Installed mod entry in the lock file."""

    name: str
    id: str
    description: str
    version: str
    autoload: bool = True

    def to_dict(self) -> dict:
        """Convert to dictionary for TOML serialization."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict) -> "ModRecord":
        """Create from dictionary."""
        return cls(**data)


@dataclass(frozen=True)
class PatternRecord:
    """Installed pattern entry in the lock file."""

    name: str
    version: str

    def to_dict(self) -> dict:
        """Convert to dictionary for TOML serialization."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict) -> "PatternRecord":
        """Create from dictionary."""
        return cls(**data)


class ModLock:
    """
    Lock state with an injected lock file path.

    Records keep insertion (install) order. Uniqueness is enforced by the
    installer before appending:
    - no two mods share both id and version
    - no two patterns share a name
    """

    def __init__(
        self,
        lock_path: Path,
        mods: list[ModRecord] | None = None,
        patterns: list[PatternRecord] | None = None,
    ):
        """Initialize lock state (nothing is read or written).

        Args:
            lock_path: Path to lock file (app determines location)
            mods: Initial mod records
            patterns: Initial pattern records

        Example:
            >>> lock = ModLock.load(Path.home() / ".ultramodmanager" / "ultramodmanager.lock")
        """
        self.lock_path = lock_path
        self.mods: list[ModRecord] = list(mods or [])
        self.patterns: list[PatternRecord] = list(patterns or [])

    @classmethod
    def loads(cls, text: str, lock_path: Path) -> "ModLock":
        """
        Parse lock file text.

        Raises:
            tomllib.TOMLDecodeError: If text is not valid TOML
            TypeError: If a record has missing or unknown fields
        """
        data = tomllib.loads(text)
        mods = [ModRecord.from_dict(entry) for entry in data.get("mods", [])]
        patterns = [PatternRecord.from_dict(entry) for entry in data.get("patterns", [])]
        return cls(lock_path, mods=mods, patterns=patterns)

    @classmethod
    def load(cls, lock_path: Path) -> "ModLock":
        """
        Load lock file from disk.

        Raises:
            OSError: If the file can't be read
            tomllib.TOMLDecodeError: If the file is not valid TOML
            TypeError: If a record has missing or unknown fields
        """
        text = lock_path.read_text(encoding="utf-8")
        lock = cls.loads(text, lock_path)
        logger.debug(f"Loaded {len(lock.mods)} mods and {len(lock.patterns)} patterns from lock file")
        return lock

    def dumps(self) -> str:
        """Serialize the full lock state as TOML."""
        data = {
            "mods": [record.to_dict() for record in self.mods],
            "patterns": [record.to_dict() for record in self.patterns],
        }
        return tomli_w.dumps(data)

    def save(self) -> None:
        """
        Rewrite the lock file in full.

        The new contents replace the file in one rename, so a failed save
        leaves the previous lock file intact.

        Raises:
            WriteFailedError: If the file can't be written. In-memory state
                now differs from the file on disk.
        """
        text = self.dumps()
        try:
            self.lock_path.parent.mkdir(parents=True, exist_ok=True)
            write_text_atomic(self.lock_path, text)
        except OSError as e:
            logger.error(f"Failed to save lock file {self.lock_path}: {e}")
            raise WriteFailedError(
                f"Failed to save lock file: {e}",
                context={"lock_path": str(self.lock_path)},
            ) from e
        logger.debug(f"Saved lock file with {len(self.mods)} mods and {len(self.patterns)} patterns")

    def has_mod(self, mod_id: str, version: str) -> bool:
        """
        Check if a mod with this id and version is recorded.

        Args:
            mod_id: Manifest id
            version: Manifest mod_version

        Returns:
            True if a matching record exists
        """
        return any(record.id == mod_id and record.version == version for record in self.mods)

    def pattern_names(self) -> set[str]:
        """Names of all recorded patterns."""
        return {record.name for record in self.patterns}
