"""File-backed package host.

Reads the installed packages, the root project's extra block and the
vendor directory from a manifest file (YAML, or JSON which is valid YAML)::

    vendor-dir: vendor
    extra:
      copy-mapping-root: ./public/
    packages:
      - name: acme/widgets
        extra:
          copy-mapping:
            assets/: widgets/

A relative ``vendor-dir`` is resolved against the manifest's directory.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from copy_mapping.core.constants import DEFAULT_VENDOR_DIR
from copy_mapping.core.errors import HostConfigError
from copy_mapping.core.models import PackageDescriptor

VENDOR_DIR_KEY = "vendor-dir"
EXTRA_KEY = "extra"
PACKAGES_KEY = "packages"


def _plain(value: Any) -> Any:
    """Convert ruamel's round-trip containers into plain dicts and lists."""
    if isinstance(value, dict):
        return {str(key): _plain(item) for key, item in value.items()}
    if isinstance(value, list):
        return [_plain(item) for item in value]
    return value


@dataclass(slots=True)
class ManifestHost:
    """A :class:`~copy_mapping.sync.synchronizer.PackageHost` loaded from disk."""

    packages: list[PackageDescriptor] = field(default_factory=list)
    extra: dict[str, Any] = field(default_factory=dict)
    vendor_path: Path = Path(DEFAULT_VENDOR_DIR)

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None, base_dir: Path) -> "ManifestHost":
        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise HostConfigError("Manifest must be a mapping at the top level")

        vendor = data.get(VENDOR_DIR_KEY, DEFAULT_VENDOR_DIR)
        if not isinstance(vendor, str) or not vendor.strip():
            raise HostConfigError(f"'{VENDOR_DIR_KEY}' must be a non-empty string")

        extra = data.get(EXTRA_KEY) or {}
        if not isinstance(extra, dict):
            raise HostConfigError(f"'{EXTRA_KEY}' must be a mapping")

        raw_packages = data.get(PACKAGES_KEY) or []
        if not isinstance(raw_packages, list):
            raise HostConfigError(f"'{PACKAGES_KEY}' must be a list")

        packages = []
        for index, entry in enumerate(raw_packages):
            if not isinstance(entry, dict):
                raise HostConfigError(f"Package #{index} must be a mapping")
            try:
                packages.append(PackageDescriptor.from_dict(entry))
            except ValueError as exc:
                raise HostConfigError(f"Package #{index}: {exc}") from exc

        return cls(
            packages=packages,
            extra=extra,
            vendor_path=base_dir / vendor.rstrip("/\\"),
        )

    @classmethod
    def from_file(cls, path: Path) -> "ManifestHost":
        """Load a manifest file.

        Raises:
            HostConfigError: If the file is missing, unreadable or cannot be parsed.
        """
        if not path.is_file():
            raise HostConfigError(f"Manifest not found: {path}")

        yaml = YAML()
        try:
            with path.open("r", encoding="utf-8") as handle:
                payload = yaml.load(handle)
        except (YAMLError, UnicodeDecodeError, OSError) as exc:
            raise HostConfigError(f"Failed to read {path}: {exc}") from exc

        return cls.from_dict(_plain(payload), path.parent)

    def list_installed_packages(self) -> list[PackageDescriptor]:
        return list(self.packages)

    def root_extra_config(self) -> dict[str, Any]:
        return dict(self.extra)

    def vendor_dir(self) -> Path:
        return self.vendor_path

    def find_package(self, name: str) -> PackageDescriptor | None:
        for package in self.packages:
            if package.name == name:
                return package
        return None
