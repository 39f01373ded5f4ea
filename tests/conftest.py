from __future__ import annotations

from pathlib import Path
from typing import Any

import pytest

from copy_mapping.core.models import PackageDescriptor
from copy_mapping.host.manifest import ManifestHost


@pytest.fixture()
def vendor_dir(tmp_path: Path) -> Path:
    vendor = tmp_path / "vendor"
    vendor.mkdir()
    return vendor


@pytest.fixture()
def project_root(tmp_path: Path) -> Path:
    root = tmp_path / "project"
    root.mkdir()
    return root


@pytest.fixture()
def make_package(vendor_dir: Path):
    """Create a package under the vendor dir with the given files.

    ``files`` maps paths relative to the package directory to file content.
    """

    def _make(name: str, files: dict[str, str] | None = None, **extra: Any) -> PackageDescriptor:
        package_dir = vendor_dir / name
        package_dir.mkdir(parents=True, exist_ok=True)
        for rel, content in (files or {}).items():
            path = package_dir / rel
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(content, encoding="utf-8")
        return PackageDescriptor(name=name, extra={key.replace("_", "-"): value for key, value in extra.items()})

    return _make


@pytest.fixture()
def make_host(vendor_dir: Path, project_root: Path):
    """Build a ManifestHost whose root extra points at ``project_root``."""

    def _make(*packages: PackageDescriptor, **root_extra: Any) -> ManifestHost:
        extra = {"copy-mapping-root": f"{project_root}/"}
        extra.update({key.replace("_", "-"): value for key, value in root_extra.items()})
        return ManifestHost(packages=list(packages), extra=extra, vendor_path=vendor_dir)

    return _make
