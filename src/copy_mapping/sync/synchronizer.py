"""Mapping synchronizer: copy package paths on install, delete them on removal.

The host package manager drives the synchronizer through the
:class:`LifecycleHooks` methods:

- ``on_packages_updated()`` after an install or update run finished,
  which copies the mapping of every package that declares one.
- ``on_package_removed(package)`` after a package was uninstalled,
  which deletes the destinations of that package's mapping.

Configuration problems are contained per package (logged at debug level,
the package is skipped). Filesystem errors propagate to the caller.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Iterable, Mapping, Protocol, runtime_checkable

from copy_mapping.core.config import copy_entries, resolve_copy_config, resolve_delete_config
from copy_mapping.core.constants import COPY_SOURCE_KEY
from copy_mapping.core.errors import ConfigRejection
from copy_mapping.core.models import PackageDescriptor
from copy_mapping.sync.executor import execute
from copy_mapping.sync.plan import ActionKind, PlannedAction, plan_copy, plan_delete

logger = logging.getLogger(__name__)


@runtime_checkable
class PackageHost(Protocol):
    """What the synchronizer needs from the host package manager."""

    def list_installed_packages(self) -> Iterable[PackageDescriptor]: ...
    def root_extra_config(self) -> Mapping[str, Any]: ...
    def vendor_dir(self) -> Path | str: ...


@runtime_checkable
class LifecycleHooks(Protocol):
    """Callbacks invoked by the host integration layer."""

    def on_packages_updated(self) -> "SyncReport": ...
    def on_package_removed(self, package: PackageDescriptor) -> "SyncReport": ...


@dataclass
class SyncReport:
    """Actions taken (or planned in dry-run mode) during one run."""

    actions: list[PlannedAction] = field(default_factory=list)
    packages: list[str] = field(default_factory=list)
    rejected: dict[str, str] = field(default_factory=dict)
    dry_run: bool = False

    def _of_kind(self, kind: ActionKind) -> list[PlannedAction]:
        return [action for action in self.actions if action.kind is kind]

    @property
    def copied(self) -> list[PlannedAction]:
        return self._of_kind(ActionKind.COPY_FILE)

    @property
    def skipped(self) -> list[PlannedAction]:
        return self._of_kind(ActionKind.SKIP_EXISTING)

    @property
    def ensured(self) -> list[PlannedAction]:
        return self._of_kind(ActionKind.ENSURE_DIR)

    @property
    def removed(self) -> list[PlannedAction]:
        return [
            action
            for action in self.actions
            if action.kind in (ActionKind.REMOVE_FILE, ActionKind.REMOVE_TREE)
        ]


def declares_mapping(package: PackageDescriptor) -> bool:
    """True when the package's own extra block carries a copy mapping."""
    return package.extra.get(COPY_SOURCE_KEY) is not None


class MappingSynchronizer:
    """Copies and removes per-package mapped paths for a host."""

    def __init__(self, host: PackageHost):
        self.host = host

    @property
    def vendor_dir(self) -> Path:
        return Path(self.host.vendor_dir())

    def sync_all(self, dry_run: bool = False) -> SyncReport:
        """Copy the mapping of every installed package that declares one."""
        report = SyncReport(dry_run=dry_run)
        root_extra = self.host.root_extra_config()
        vendor_dir = self.vendor_dir
        for package in self.host.list_installed_packages():
            if not declares_mapping(package):
                continue
            self._copy_package(package, root_extra, vendor_dir, report)
        return report

    def _copy_package(
        self,
        package: PackageDescriptor,
        root_extra: Mapping[str, Any],
        vendor_dir: Path,
        report: SyncReport,
    ) -> None:
        try:
            config = resolve_copy_config(package, root_extra, vendor_dir)
        except ConfigRejection as exc:
            logger.debug("%s", exc)
            report.rejected[package.name] = exc.reason
            return

        report.packages.append(package.name)
        for entry in copy_entries(config, package, vendor_dir):
            actions = plan_copy(entry, config.strategy)
            report.actions.extend(actions)
            if report.dry_run:
                continue
            execute(actions, package.name)
            if entry.source.is_file() and actions[0].kind is ActionKind.SKIP_EXISTING:
                continue
            logger.debug("%s copied to %s. (%s)", entry.source, entry.target, package.name)

    def remove(self, package: PackageDescriptor, dry_run: bool = False) -> SyncReport:
        """Delete every destination of *package*'s mapping.

        Targets that no longer exist are treated as already removed, so
        calling this twice is harmless.
        """
        report = SyncReport(dry_run=dry_run)
        config = resolve_delete_config(package, self.host.root_extra_config())
        if not config.mapping:
            logger.debug("Nothing to delete. (%s)", package.name)
            return report

        report.packages.append(package.name)
        for to in config.mapping.values():
            target = config.target_for(to)
            actions = plan_delete(target)
            report.actions.extend(actions)
            if report.dry_run:
                continue
            execute(actions, package.name)
            logger.debug("%s was deleted. (%s)", target, package.name)
        return report

    def on_packages_updated(self) -> SyncReport:
        return self.sync_all()

    def on_package_removed(self, package: PackageDescriptor) -> SyncReport:
        return self.remove(package)
