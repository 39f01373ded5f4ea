"""Exception hierarchy for copy-mapping synchronization."""

from __future__ import annotations


class CopyMappingError(Exception):
    """Base exception for copy-mapping errors."""
    pass


class ConfigRejection(CopyMappingError):
    """A package's copy configuration failed validation.

    Rejections are package-scoped: the synchronizer logs them at debug
    level and moves on to the next package.
    """

    def __init__(self, package: str, reason: str):
        self.package = package
        self.reason = reason
        super().__init__(f"{reason} ({package})")


class HostConfigError(CopyMappingError):
    """Raised when the package manifest cannot be read or is malformed."""
