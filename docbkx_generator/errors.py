"""Error kinds raised by the generator.

Every fatal error derives from GeneratorError so callers (the CLI, a host
build tool) can abort a run with a single except clause. Only
DescriptionResolutionError is recovered inside the pipeline.
"""


class GeneratorError(Exception):
    """Base class for all generator failures."""

    pass


class ConfigurationError(GeneratorError):
    """Required input missing or malformed (archive location, template bundle)."""

    pass


class ExtractionError(GeneratorError):
    """The parameter-name transform could not be applied to the stylesheet."""

    pass


class DescriptionResolutionError(GeneratorError):
    """Documentation for a single parameter could not be located or mined."""

    def __init__(self, parameter: str, message: str):
        super().__init__(f"{parameter}: {message}")
        self.parameter = parameter
        self.reason = message


class RenderError(GeneratorError):
    """Template rendering or source file write failure.

    ``stage`` is "extraction" when the failure happened before the
    specification existed, and "write" when it happened afterwards.
    """

    def __init__(self, message: str, stage: str = "write"):
        super().__init__(message)
        self.stage = stage


class StagingError(GeneratorError):
    """Resource directory creation or entry copy failure."""

    pass
