"""Execution phase: apply planned actions to the filesystem.

Filesystem errors are not handled here; they abort the whole run.
"""

from __future__ import annotations

import logging
import shutil
from pathlib import Path
from typing import Iterable

from copy_mapping.core.constants import FILE_PARENT_MODE, TREE_DIR_MODE
from copy_mapping.sync.plan import ActionKind, PlannedAction

logger = logging.getLogger(__name__)


def _make_parents(path: Path, mode: int) -> None:
    """Create every missing ancestor of *path* with *mode*, outermost first."""
    missing = [parent for parent in path.parents if not parent.exists()]
    for parent in reversed(missing):
        parent.mkdir(mode=mode, exist_ok=True)


def execute_action(action: PlannedAction, package: str = "") -> None:
    """Perform a single planned action."""
    target = action.target
    if action.kind is ActionKind.ENSURE_DIR:
        target.mkdir(mode=TREE_DIR_MODE, parents=True, exist_ok=True)
    elif action.kind is ActionKind.COPY_FILE:
        if action.source is None:
            raise ValueError(f"copy action for {target} has no source")
        _make_parents(target, FILE_PARENT_MODE)
        shutil.copyfile(action.source, target)
    elif action.kind is ActionKind.SKIP_EXISTING:
        logger.debug("%s exists and strategy is simple. Not copied. (%s)", target, package)
    elif action.kind is ActionKind.REMOVE_FILE:
        target.unlink()
    elif action.kind is ActionKind.REMOVE_TREE:
        # Absent or non-directory targets are already in the goal state
        if target.is_dir():
            shutil.rmtree(target)


def execute(actions: Iterable[PlannedAction], package: str = "") -> None:
    """Perform *actions* in order."""
    for action in actions:
        execute_action(action, package)
