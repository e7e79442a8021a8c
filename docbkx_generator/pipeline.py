"""Generation pipeline (orchestrator).

Runs one generation for one output type:
1. Check the distribution archive exists
2. Discover parameters, mine descriptions, build the Specification
3. Render the Specification into the plugin source file
4. Stage the distribution resources the plugin needs

The source and resource roots in the result are what a host build tool
registers as compile source root and resource directory.
"""

import logging
from dataclasses import dataclass
from pathlib import Path

from .builder import ParameterResolver
from .config import GeneratorConfig
from .errors import ConfigurationError, GeneratorError
from .extractor import Transformer, XsltParameterTransformer
from .models import Specification
from .renderer import Renderer, TemplateRenderer, generate_source
from .stager import StagingReport, resource_includes, stage_resources

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GenerationResult:
    """Artifacts produced by one run."""

    specification: Specification
    source_file: Path
    source_root: Path
    resource_root: Path
    staging: StagingReport


def check_distribution(config: GeneratorConfig) -> None:
    """Fail early when the distribution archive is missing."""
    if not config.distribution.is_file():
        raise ConfigurationError(
            f"DocBook XSL distribution not found: {config.distribution}"
        )


def run(
    config: GeneratorConfig,
    transformer: Transformer | None = None,
    renderer: Renderer | None = None,
    resolve: ParameterResolver | None = None,
) -> GenerationResult:
    """Generate the plugin source and stage resources for one output type.

    Args:
        config: Resolved generator configuration
        transformer: Parameter name transformer (default: packaged XSLT)
        renderer: Source renderer (default: the configured Jinja2 template)
        resolve: Parameter resolver (default: reference page mining)

    Raises:
        GeneratorError: Any fatal failure; nothing further is attempted
    """
    check_distribution(config)
    if transformer is None:
        transformer = XsltParameterTransformer()
    if renderer is None:
        renderer = TemplateRenderer(config.template_name)

    logger.info(
        "Generating %s for %s from %s",
        config.class_name,
        config.output_type,
        config.distribution,
    )
    spec, source_file = generate_source(config, transformer, renderer, resolve)

    try:
        staging = stage_resources(
            config.distribution,
            config.resource_directory,
            resource_includes(config.output_type),
        )
    except GeneratorError:
        source_file.unlink(missing_ok=True)
        raise

    return GenerationResult(
        specification=spec,
        source_file=source_file,
        source_root=config.target_directory,
        resource_root=config.target_resources_directory,
        staging=staging,
    )
