"""ultramodmanager - Install ULTRAKILL mods and Cyber Grind patterns.

Public API: apps call init_environment() once, then install and project
artifacts against the returned config and lock.
"""

from .codec import decode_manifest
from .codec import encode_manifest
from .config import UMMConfig
from .config import UserSettings
from .environment import init_environment
from .exceptions import ContentValidationError
from .exceptions import CopyFailedError
from .exceptions import DestinationExistsError
from .exceptions import DuplicateInstallError
from .exceptions import InitializationError
from .exceptions import InstallError
from .exceptions import InvalidSourceError
from .exceptions import InvalidVersionError
from .exceptions import ManifestDecodeError
from .exceptions import ManifestEncodeError
from .exceptions import MissingManifestError
from .exceptions import ProjectionError
from .exceptions import UMMError
from .exceptions import WriteFailedError
from .installer import install_mod
from .installer import install_pattern
from .lock import ModLock
from .lock import ModRecord
from .lock import PatternRecord
from .patterns import validate_pattern
from .projection import CopyProjection
from .projection import SymlinkProjection
from .projection import project_mod
from .projection import project_pattern
from .projection import select_projection
from .protocols import HostProjection
from .replicator import replicate_tree
from .schema import Manifest
from .semver import parse_version
from .utils import resolve_unique_name

__all__ = [
    # Environment
    "init_environment",
    "UMMConfig",
    "UserSettings",
    # Manifest
    "Manifest",
    "decode_manifest",
    "encode_manifest",
    # Installation
    "install_mod",
    "install_pattern",
    "replicate_tree",
    "resolve_unique_name",
    "parse_version",
    "validate_pattern",
    # Projection
    "HostProjection",
    "SymlinkProjection",
    "CopyProjection",
    "select_projection",
    "project_mod",
    "project_pattern",
    # Lock file
    "ModLock",
    "ModRecord",
    "PatternRecord",
    # Exceptions
    "UMMError",
    "InitializationError",
    "InstallError",
    "InvalidSourceError",
    "MissingManifestError",
    "ManifestDecodeError",
    "ManifestEncodeError",
    "DuplicateInstallError",
    "DestinationExistsError",
    "CopyFailedError",
    "InvalidVersionError",
    "ContentValidationError",
    "WriteFailedError",
    "ProjectionError",
]
