"""Command line interface for docbkx-generator."""

from .app import app

__all__ = ["app"]
