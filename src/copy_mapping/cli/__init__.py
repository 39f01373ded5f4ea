"""Command line interface for copy-mapping."""

from .main import app, main

__all__ = ["app", "main"]
