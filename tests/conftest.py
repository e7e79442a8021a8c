"""Shared fixtures built on the miniature distribution in tests/distribution.py."""

from pathlib import Path

import pytest

from docbkx_generator.config import GeneratorConfig, GeneratorOptions

from .distribution import VERSION, make_distribution


@pytest.fixture
def distribution(tmp_path) -> Path:
    """The miniature distribution at its default location under tmp_path."""
    return make_distribution(tmp_path / "lib" / f"docbook-xsl-{VERSION}.zip")


@pytest.fixture
def make_config(tmp_path, distribution):
    """Factory for resolved configs rooted in tmp_path."""

    def _make(**values) -> GeneratorConfig:
        values.setdefault("version", VERSION)
        values.setdefault("base_directory", tmp_path)
        return GeneratorConfig.from_options(GeneratorOptions().update(**values))

    return _make
