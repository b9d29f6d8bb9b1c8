"""
Exceptions raised while cataloguing or reverting media containers.

Every error carries the path it relates to (when there is one) so the batch
can report it next to the file status. Only ``ExternalToolUnavailable`` and,
unless configured otherwise, ``RenameFailure`` stop a whole batch; the rest
abort the current file and the batch carries on with the next one.
"""
from pathlib import Path


class CatalogError(Exception):
    """Base class for all cataloguing errors."""

    def __init__(self, message: str, path: Path | None = None):
        super().__init__(message)
        self.path = path


class InvalidFilenameStructure(CatalogError):
    """The container name has more tokens than the encoded layout allows (or none at all)."""


class ExternalToolUnavailable(CatalogError):
    """The media probe executable could not be found."""


class ProbeInvocationFailure(CatalogError):
    """Running the media probe or reading its report failed."""


class SidecarMalformed(CatalogError):
    """A sidecar document is missing, too short, or has a bad line at a fixed index."""

    def __init__(self, message: str, path: Path | None = None, field: str | None = None):
        super().__init__(message, path)
        self.field = field


class RenameFailure(CatalogError):
    """The container file could not be renamed."""


class ArtifactDeletionFailure(CatalogError):
    """A sidecar or hash manifest could not be deleted after reverting."""
