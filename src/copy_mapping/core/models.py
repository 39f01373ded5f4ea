"""Data model shared by the resolver, planner and synchronizer."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any

from copy_mapping.core.constants import DEFAULT_ROOT, FORCE_STRATEGY, SIMPLE_STRATEGY


class Strategy(Enum):
    """Overwrite policy for destination files that already exist."""

    SIMPLE = SIMPLE_STRATEGY  # Keep existing destination files
    FORCE = FORCE_STRATEGY  # Overwrite existing destination files

    @classmethod
    def parse(cls, value: object) -> "Strategy":
        """Return the strategy named by *value*, falling back to SIMPLE."""
        if isinstance(value, str):
            for member in cls:
                if member.value == value:
                    return member
        return cls.SIMPLE


@dataclass(frozen=True, slots=True)
class PackageDescriptor:
    """An installed package as reported by the host package manager."""

    name: str
    install_name: str | None = None
    extra: dict[str, Any] = field(default_factory=dict)

    @property
    def install_path_name(self) -> str:
        """Directory name of the package below the vendor directory."""
        return self.install_name or self.name

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "PackageDescriptor":
        name = data.get("name")
        if not isinstance(name, str) or not name.strip():
            raise ValueError("package entry requires a non-empty 'name'")
        install_name = data.get("install-name")
        extra = data.get("extra")
        return cls(
            name=name.strip(),
            install_name=install_name.strip() if isinstance(install_name, str) and install_name.strip() else None,
            extra=dict(extra) if isinstance(extra, dict) else {},
        )


@dataclass(slots=True)
class EffectiveConfig:
    """Per-package configuration after merging root and package extra."""

    strategy: Strategy = Strategy.SIMPLE
    root: str = DEFAULT_ROOT
    mapping: dict[str, str] = field(default_factory=dict)

    def target_for(self, to: str) -> Path:
        """Destination path for a mapping's ``to`` value.

        ``to`` is always taken relative to ``root``; a leading separator
        on ``to`` does not escape the root.
        """
        return Path(self.root) / to.lstrip("/\\")

    def is_inside_root(self, to: str) -> bool:
        """True when ``to`` names a path strictly below ``root``."""
        base = Path(self.root).resolve()
        target = self.target_for(to).resolve()
        return target != base and target.is_relative_to(base)


@dataclass(frozen=True, slots=True)
class CopyEntry:
    """One resolved (source, destination) pair of a package mapping."""

    source: Path
    target: Path
