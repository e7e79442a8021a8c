"""docbkx-generator: build-tool plugin sources from DocBook XSL distributions.

Typical use:
    from docbkx_generator import GeneratorConfig, GeneratorOptions, run

    config = GeneratorConfig.from_options(GeneratorOptions(type="fo", version="1.75.2"))
    result = run(config)
    print(result.source_file, result.staging.copied)
"""

__version__ = "0.3.0"

from .config import GeneratorConfig, GeneratorOptions
from .errors import (
    ConfigurationError,
    DescriptionResolutionError,
    ExtractionError,
    GeneratorError,
    RenderError,
    StagingError,
)
from .models import Parameter, Specification
from .pipeline import GenerationResult, run

__all__ = [
    "__version__",
    # Config
    "GeneratorConfig",
    "GeneratorOptions",
    # Models
    "Parameter",
    "Specification",
    # Pipeline
    "GenerationResult",
    "run",
    # Errors
    "GeneratorError",
    "ConfigurationError",
    "ExtractionError",
    "DescriptionResolutionError",
    "RenderError",
    "StagingError",
]
