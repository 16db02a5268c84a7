"""Mod manifest schema.

A mod ships a descriptor (manifest.toml or manifest.json5) whose fields live
under a ``mod`` table:

    [mod]
    id = "a"
    name = "Mod A"
    mod_version = "1.0.0"
    ...

Only ``id`` and ``mod_version`` are required; they name the installed
directory and key duplicate detection. Everything else is informational.
"""

from typing import Any

from pydantic import BaseModel
from pydantic import ConfigDict

MANIFEST_TABLE = "mod"


class Manifest(BaseModel):
    """
    Mod metadata from a manifest descriptor.

    No validation is done beyond field presence and type: URLs, checksum and
    date are stored as written by the mod author.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    id: str
    mod_version: str

    name: str = ""
    description: str = ""
    author: str = ""
    source_url: str = ""
    download_url: str = ""
    checksum: str = ""
    icon_path: str = ""

    # RFC 3339 by convention, not parsed
    date: str = ""

    # ULTRAKILL version the mod was built against
    uk_version: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Manifest":
        """
        Build manifest from a decoded descriptor document.

        Args:
            data: Decoded document with a ``mod`` table

        Returns:
            Manifest instance

        Raises:
            KeyError: If the ``mod`` table is missing
            pydantic.ValidationError: If required fields are missing or mistyped
        """
        table = data.get(MANIFEST_TABLE)
        if not isinstance(table, dict):
            raise KeyError(f"[{MANIFEST_TABLE}] table missing in manifest")
        return cls.model_validate(table)

    def to_dict(self) -> dict[str, Any]:
        """Convert to descriptor document (``mod`` table wrapped)."""
        return {MANIFEST_TABLE: self.model_dump()}
