"""Planning phase: decide what to create, copy, skip or remove.

Planning reads the live filesystem but never writes to it. The resulting
action lists are handed to :mod:`copy_mapping.sync.executor`. Each mapping
entry is planned right before it is executed, so the skip decision always
sees the effect of earlier entries.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Iterator

from copy_mapping.core.models import CopyEntry, Strategy


class ActionKind(Enum):
    """Kind of filesystem action produced by the planner."""

    ENSURE_DIR = "ensure_dir"
    COPY_FILE = "copy_file"
    SKIP_EXISTING = "skip_existing"
    REMOVE_FILE = "remove_file"
    REMOVE_TREE = "remove_tree"


@dataclass(frozen=True, slots=True)
class PlannedAction:
    """A single planned filesystem action."""

    kind: ActionKind
    target: Path
    source: Path | None = None

    @property
    def writes(self) -> bool:
        return self.kind is not ActionKind.SKIP_EXISTING


def walk_self_first(directory: Path) -> Iterator[Path]:
    """Yield every descendant of *directory*, each directory before its children.

    Entries of one directory are visited in name order.
    """
    for child in sorted(directory.iterdir(), key=lambda p: p.name):
        yield child
        if child.is_dir():
            yield from walk_self_first(child)


def _plan_file(source: Path, target: Path, strategy: Strategy) -> PlannedAction:
    if target.exists() and strategy is not Strategy.FORCE:
        return PlannedAction(ActionKind.SKIP_EXISTING, target, source)
    return PlannedAction(ActionKind.COPY_FILE, target, source)


def plan_copy(entry: CopyEntry, strategy: Strategy) -> list[PlannedAction]:
    """Plan the actions that mirror *entry*'s source at its target.

    A regular file maps to a single copy or skip. A directory maps to an
    ``ENSURE_DIR`` for the target followed by its subtree in self-first
    order; directories are always ensured, files are skipped only when the
    destination exists and the strategy is simple.
    """
    if entry.source.is_file():
        return [_plan_file(entry.source, entry.target, strategy)]

    actions = [PlannedAction(ActionKind.ENSURE_DIR, entry.target)]
    for path in walk_self_first(entry.source):
        destination = entry.target / path.relative_to(entry.source)
        if path.is_dir():
            actions.append(PlannedAction(ActionKind.ENSURE_DIR, destination, path))
        else:
            actions.append(_plan_file(path, destination, strategy))
    return actions


def plan_delete(target: Path) -> list[PlannedAction]:
    """Plan the removal of a previously copied destination path."""
    if target.is_file() and os.access(target, os.W_OK):
        return [PlannedAction(ActionKind.REMOVE_FILE, target)]
    return [PlannedAction(ActionKind.REMOVE_TREE, target)]
