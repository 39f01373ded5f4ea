"""Resolve a package's effective copy configuration.

The root project's extra block is overlaid with the package's own extra
block (package values win). The ``copy-mapping`` itself is only ever taken
from the package. Each recognized key is parsed individually: the strategy
and root fall back to their defaults, the mapping is either accepted or
rejects the whole package.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any, Mapping

from copy_mapping.core.constants import (
    COPY_SOURCE_KEY,
    DEFAULT_ROOT,
    ROOT_KEY,
    STRATEGY_KEY,
)
from copy_mapping.core.errors import ConfigRejection
from copy_mapping.core.models import CopyEntry, EffectiveConfig, PackageDescriptor, Strategy

logger = logging.getLogger(__name__)


def merge_extra(root_extra: Mapping[str, Any] | None, package: PackageDescriptor) -> dict[str, Any]:
    """Overlay the package extra block on the root project's extra block."""
    merged: dict[str, Any] = dict(root_extra or {})
    merged.pop(COPY_SOURCE_KEY, None)
    merged.update(package.extra)
    return merged


def _parse_mapping(value: object) -> dict[str, str] | None:
    """Return the mapping as an ordered str->str dict, or None if malformed."""
    if not isinstance(value, Mapping):
        return None
    mapping: dict[str, str] = {}
    for source, target in value.items():
        if not isinstance(source, str) or not isinstance(target, str):
            return None
        mapping[source] = target
    return mapping


def source_path(vendor_dir: Path, package: PackageDescriptor, from_path: str) -> Path:
    return vendor_dir / package.install_path_name / from_path.lstrip("/\\")


def resolve_copy_config(
    package: PackageDescriptor,
    root_extra: Mapping[str, Any] | None,
    vendor_dir: Path,
) -> EffectiveConfig:
    """Build and validate the configuration used to copy *package*.

    Validation is all-or-nothing: the first failing check raises
    ``ConfigRejection`` and nothing of the package is copied.

    Args:
        package: Package whose mapping should be applied.
        root_extra: Extra block of the root project.
        vendor_dir: Directory holding installed packages by install name.

    Returns:
        EffectiveConfig ready for planning.

    Raises:
        ConfigRejection: If the root, the mapping, a target or a source is unusable.
    """
    extra = merge_extra(root_extra, package)
    strategy = Strategy.parse(extra.get(STRATEGY_KEY))
    root = extra.get(ROOT_KEY)
    if root is None:
        root = DEFAULT_ROOT

    if (
        not root
        or not isinstance(root, str)
        or not os.path.isdir(root)
        or not os.access(root, os.W_OK)
    ):
        raise ConfigRejection(
            package.name,
            "Root directory you specified does not exist or is not writable. Did not copy.",
        )

    raw_mapping = package.extra.get(COPY_SOURCE_KEY)
    mapping = _parse_mapping(raw_mapping)
    if not mapping:
        raise ConfigRejection(
            package.name,
            "You need to specify target and source folders. Did not copy.",
        )

    config = EffectiveConfig(strategy=strategy, root=root, mapping=mapping)
    for to in mapping.values():
        if not config.is_inside_root(to):
            raise ConfigRejection(
                package.name,
                f"Target '{to}' must name a path inside the root directory. Did not copy.",
            )

    for from_path in mapping:
        source = source_path(vendor_dir, package, from_path)
        if not os.access(source, os.R_OK):
            raise ConfigRejection(
                package.name,
                f"Source {source} unreachable. Did not copy.",
            )

    return config


def resolve_delete_config(
    package: PackageDescriptor,
    root_extra: Mapping[str, Any] | None,
) -> EffectiveConfig:
    """Build the configuration used to remove *package*'s copied paths.

    Never rejects: a malformed root falls back to the default, a
    missing or malformed mapping becomes empty, and entries whose target
    is the root itself or lies outside it are dropped.
    """
    extra = merge_extra(root_extra, package)
    root = extra.get(ROOT_KEY)
    config = EffectiveConfig(
        strategy=Strategy.parse(extra.get(STRATEGY_KEY)),
        root=root if isinstance(root, str) and root else DEFAULT_ROOT,
    )
    for from_path, to in (_parse_mapping(package.extra.get(COPY_SOURCE_KEY)) or {}).items():
        if not config.is_inside_root(to):
            logger.debug("Target %s is not inside the root directory. Not deleted. (%s)", to, package.name)
            continue
        config.mapping[from_path] = to
    return config


def copy_entries(
    config: EffectiveConfig,
    package: PackageDescriptor,
    vendor_dir: Path,
) -> list[CopyEntry]:
    """Resolve the mapping into absolute pairs, in declaration order."""
    return [
        CopyEntry(
            source=source_path(vendor_dir, package, from_path),
            target=config.target_for(to),
        )
        for from_path, to in config.mapping.items()
    ]
