"""Shared typer options for commands that resolve a GeneratorConfig."""

from pathlib import Path
from typing import Annotated

import typer

from ..config import GeneratorConfig

TypeOption = Annotated[
    str | None,
    typer.Option("--type", "-t", help="Output type, e.g. html, fo, xhtml (default: html)"),
]
XslVersionOption = Annotated[
    str | None,
    typer.Option(
        "--xsl-version",
        "-V",
        help="DocBook XSL version (or DOCBKX_VERSION)",
    ),
]
DistributionOption = Annotated[
    Path | None,
    typer.Option(
        "--distribution",
        "-d",
        help="Distribution zip (default: <base>/lib/docbook-xsl-<version>.zip)",
    ),
]
ConfigFileOption = Annotated[
    Path | None,
    typer.Option("--config", "-c", help="YAML options file"),
]
BaseDirOption = Annotated[
    Path | None,
    typer.Option("--base-dir", help="Project base directory (default: cwd)"),
]
ExcludeOption = Annotated[
    str | None,
    typer.Option("--exclude", "-x", help="Comma separated parameter names to leave out"),
]


def load_config(config_file: Path | None = None, **overrides) -> GeneratorConfig:
    """Resolve env vars, the options file, and command line overrides."""
    return GeneratorConfig.load(config_file, **overrides)
