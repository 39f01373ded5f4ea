"""Configuration, data model and errors for copy-mapping."""

from .config import copy_entries, merge_extra, resolve_copy_config, resolve_delete_config
from .errors import ConfigRejection, CopyMappingError, HostConfigError
from .models import CopyEntry, EffectiveConfig, PackageDescriptor, Strategy

__all__ = [
    "ConfigRejection",
    "CopyEntry",
    "CopyMappingError",
    "EffectiveConfig",
    "HostConfigError",
    "PackageDescriptor",
    "Strategy",
    "copy_entries",
    "merge_extra",
    "resolve_copy_config",
    "resolve_delete_config",
]
