"""CLI commands for docbkx-generator."""

from . import generate, params, config_cmd

__all__ = ["generate", "params", "config_cmd"]
