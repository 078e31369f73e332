"""
Error types raised while processing and serving bundles.

Filesystem failures are plain ``OSError`` (``IOError``) and are not wrapped.
"""


class BundleError(Exception):
    """Base class for bundle processing and lookup errors."""


class ArchiveCorruptError(BundleError):
    """The source archive cannot be opened or extracted safely."""

    def __init__(self, archive_path, reason: str):
        self.archive_path = archive_path
        self.reason = reason
        super().__init__(f"Archive '{archive_path}' is corrupt: {reason}")


class InstanceNotFoundError(BundleError, LookupError):
    """No manifest or file exists for the requested instance."""


class UnsafePathError(BundleError, ValueError):
    """A requested path would escape the instance root."""
