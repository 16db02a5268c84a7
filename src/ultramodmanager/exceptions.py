"""Mod manager exceptions.

Every failure kind has its own class so callers can branch on type instead of
message text.
"""


class UMMError(Exception):
    """Base exception for mod manager operations."""

    def __init__(self, message: str, context: dict | None = None):
        """Initialize with message and optional context.

        Args:
            message: Human-readable error message
            context: Optional dict with additional context (file paths, etc.)
        """
        super().__init__(message)
        self.message = message
        self.context = context or {}


class InitializationError(UMMError):
    """Managed directory tree, config or lock file could not be set up."""


class ManifestEncodeError(UMMError):
    """Manifest could not be serialized."""


class ProjectionError(UMMError):
    """Managed artifact could not be linked or copied into the host."""


class InstallError(UMMError):
    """Installation of a mod or pattern failed."""


class InvalidSourceError(InstallError):
    """Install source is missing, not a directory, or unusable."""


class MissingManifestError(InstallError):
    """Mod directory has no manifest descriptor."""


class ManifestDecodeError(InstallError):
    """Manifest descriptor could not be decoded."""


class DuplicateInstallError(InstallError):
    """A mod with the same id and version is already installed."""


class DestinationExistsError(InstallError):
    """Install destination already exists in the managed store."""


class CopyFailedError(InstallError):
    """Copying the artifact into the managed store failed."""


class InvalidVersionError(InstallError):
    """Version tag is not a valid semantic version."""


class ContentValidationError(InstallError):
    """Pattern content was rejected by the validator."""

    def __init__(self, message: str, diagnostic: str = "", context: dict | None = None):
        super().__init__(message, context=context)
        self.diagnostic = diagnostic


class WriteFailedError(InstallError):
    """Writing the artifact or the lock file failed."""
