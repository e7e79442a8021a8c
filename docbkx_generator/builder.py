"""Specification builder.

Assembles the immutable Specification from the resolved configuration and
the discovered parameter names:
1. Drop excluded names (before any documentation lookup)
2. Sort the remaining names, so generated sources are reproducible
3. Resolve a description for each name
4. Freeze everything into a Specification
"""

import logging
import re
from typing import Callable, Iterable

from .config import GeneratorConfig, default_class_name
from .descriptions import DescriptionResolver
from .extractor import Transformer, extract_parameter_names
from .locator import build_locator
from .models import Parameter, Specification

logger = logging.getLogger(__name__)

__all__ = [
    "default_class_name",
    "parse_exclusions",
    "select_parameter_names",
    "build_specification",
    "extract_specification",
]

_EXCLUSION_SEPARATOR = re.compile(r",[ ]*")

ParameterResolver = Callable[[str], Parameter]


def parse_exclusions(text: str | None) -> frozenset[str]:
    """Parse a comma separated exclusion list ("a, b,c").

    Empty items are ignored; ``None`` means nothing is excluded.
    """
    if not text:
        return frozenset()
    return frozenset(item for item in _EXCLUSION_SEPARATOR.split(text.strip()) if item)


def select_parameter_names(names: Iterable[str], excluded: Iterable[str]) -> list[str]:
    """Drop excluded names and impose lexicographic order."""
    excluded = frozenset(excluded)
    return sorted(set(names) - excluded)


def build_specification(
    config: GeneratorConfig,
    names: Iterable[str],
    resolve: ParameterResolver,
) -> Specification:
    """Assemble the Specification for a set of discovered parameter names.

    Args:
        config: Resolved generator configuration
        names: Discovered parameter names (any order, may repeat)
        resolve: Maps a name to its Parameter (normally DescriptionResolver)
    """
    selected = select_parameter_names(names, parse_exclusions(config.excluded_properties))
    parameters = tuple(resolve(name) for name in selected)

    spec = Specification(
        output_type=config.output_type,
        stylesheet_location=config.stylesheet_target_location,
        class_name=config.class_name,
        package_name=config.package_name,
        super_class_name=config.super_class_name,
        plugin_suffix=config.plugin_suffix,
        distribution_version=config.version,
        parameters=parameters,
    )
    logger.info("Number of parameters: %d", len(spec.parameters))
    return spec


def extract_specification(
    config: GeneratorConfig,
    transformer: Transformer,
    resolve: ParameterResolver | None = None,
) -> Specification:
    """Discover the parameters of the configured stylesheet and build the Specification.

    Raises:
        ConfigurationError: If the distribution location is not expressible as a URL
        ExtractionError: If the parameter names cannot be determined
    """

    def locate(relative: str) -> str:
        return build_locator(config.distribution, config.source_root_directory, relative)

    names = extract_parameter_names(locate(config.stylesheet_path), transformer)
    if resolve is None:
        resolve = DescriptionResolver(locate)
    return build_specification(config, names, resolve)
