"""Recognized extra-configuration keys and their defaults."""

from __future__ import annotations

COPY_SOURCE_KEY = "copy-mapping"
STRATEGY_KEY = "copy-mapping-strategy"
ROOT_KEY = "copy-mapping-root"

FORCE_STRATEGY = "force"
SIMPLE_STRATEGY = "simple"

DEFAULT_ROOT = "./"
DEFAULT_VENDOR_DIR = "vendor"

# Ancestors of a copied file: rwxr-xr-x
FILE_PARENT_MODE = 0o755
# Mirrored directories inside a copied tree (subject to umask)
TREE_DIR_MODE = 0o777

__all__ = [
    "COPY_SOURCE_KEY",
    "DEFAULT_ROOT",
    "DEFAULT_VENDOR_DIR",
    "FILE_PARENT_MODE",
    "FORCE_STRATEGY",
    "ROOT_KEY",
    "SIMPLE_STRATEGY",
    "STRATEGY_KEY",
    "TREE_DIR_MODE",
]
