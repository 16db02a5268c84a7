"""Protocols for host projection.

Apps pick one implementation at setup time; the installer never branches on
platform itself.
"""

from pathlib import Path
from typing import Protocol


class HostProjection(Protocol):
    """Protocol for making a managed artifact visible to the host application.

    Implementations:
    - SymlinkProjection: link from the host directory into the managed store
    - CopyProjection: materialized copy for platforms without symlink support
    """

    def project(self, source: Path, target: Path) -> None:
        """Project source (file or directory in the managed store) to target.

        Args:
            source: Existing managed artifact
            target: Path inside the host directory (must not exist)

        Raises:
            OSError: If the link or copy can't be created
        """
        ...
