"""Host package-manager integrations."""

from .manifest import ManifestHost

__all__ = ["ManifestHost"]
