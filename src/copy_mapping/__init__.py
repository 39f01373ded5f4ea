"""copy-mapping: copy declared package paths into a project tree.

Packages declare a ``copy-mapping`` in their extra configuration. After an
install or update run the mapped files and directories are copied from the
vendor directory into the project; when a package is removed, its mapped
destinations are deleted again.
"""

from copy_mapping.core.models import EffectiveConfig, PackageDescriptor, Strategy
from copy_mapping.sync.synchronizer import MappingSynchronizer, PackageHost, SyncReport

__version__ = "0.1.0"

__all__ = [
    "EffectiveConfig",
    "MappingSynchronizer",
    "PackageDescriptor",
    "PackageHost",
    "Strategy",
    "SyncReport",
    "__version__",
]
