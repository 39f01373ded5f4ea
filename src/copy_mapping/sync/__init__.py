"""Planning, execution and orchestration of mapped copies."""

from copy_mapping.sync.executor import execute
from copy_mapping.sync.plan import ActionKind, PlannedAction, plan_copy, plan_delete, walk_self_first
from copy_mapping.sync.synchronizer import (
    LifecycleHooks,
    MappingSynchronizer,
    PackageHost,
    SyncReport,
)

__all__ = [
    "ActionKind",
    "LifecycleHooks",
    "MappingSynchronizer",
    "PackageHost",
    "PlannedAction",
    "SyncReport",
    "execute",
    "plan_copy",
    "plan_delete",
    "walk_self_first",
]
