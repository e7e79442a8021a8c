"""Configuration management for docbkx-generator.

Two-step config system:
- GeneratorOptions: raw, partially filled inputs (every field optional)
- GeneratorConfig: the frozen, fully defaulted configuration of one run

Option resolution order (highest priority first):
1. Programmatic / CLI options
2. YAML options file (passed with --config)
3. Environment variables (DOCBKX_VERSION, DOCBKX_TYPE, DOCBKX_DISTRIBUTION)
4. Defaults derived from the output type and distribution version

Defaults are computed once, in GeneratorConfig.from_options. Nothing
downstream re-checks for missing values.
"""

import logging
import os
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Any

import yaml

from .errors import ConfigurationError

logger = logging.getLogger(__name__)


# =============================================================================
# Defaults
# =============================================================================

DEFAULT_TYPE = "html"
DEFAULT_GROUP_ID = "net.sf.docbook"
DEFAULT_SUPER_CLASS_NAME = "com.agilejava.docbkx.maven.AbstractTransformerMojo"
DEFAULT_STYLESHEET_TARGET_ROOT = "META-INF/docbkx"
DEFAULT_SOURCE_EXTENSION = "java"
DEFAULT_TEMPLATE_NAME = "plugin.java.j2"

# Directory (relative to the resources output) holding the staged distribution
RESOURCE_ROOT = "META-INF/docbkx"

ENV_PREFIX = "DOCBKX_"
_ENV_KEYS = ("version", "type", "distribution")


def default_distribution_name(version: str) -> str:
    """Name of the distribution root directory inside the zip, with trailing '/'."""
    return f"docbook-xsl-{version}/"


def default_class_name(output_type: str) -> str:
    """Default plugin class name for an output type.

    Examples:
        "html" → "DocbkxHtmlMojo"
        "fo" → "DocbkxFoMojo"
        "xhtml-1_1" → "DocbkxXhtml-1_1Mojo"
    """
    return "Docbkx" + output_type[:1].upper() + output_type[1:] + "Mojo"


# =============================================================================
# Raw options
# =============================================================================


@dataclass
class GeneratorOptions:
    """Raw generator inputs. ``None`` means "use the default"."""

    type: str | None = None
    version: str | None = None
    base_directory: Path | None = None
    distribution: Path | None = None
    source_root_directory: str | None = None
    stylesheet_path: str | None = None
    stylesheet_target_root: str | None = None
    stylesheet_target_location: str | None = None
    class_name: str | None = None
    package_name: str | None = None
    group_id: str | None = None
    super_class_name: str | None = None
    plugin_suffix: str | None = None
    excluded_properties: str | None = None
    target_directory: Path | None = None
    target_resources_directory: Path | None = None
    source_extension: str | None = None
    template_name: str | None = None

    def update(self, **values: Any) -> "GeneratorOptions":
        """Overlay every non-None value onto these options (in place)."""
        known = {f.name for f in fields(self)}
        for key, value in values.items():
            if key not in known:
                raise ConfigurationError(f"Unknown option: {key}")
            if value is None:
                continue
            setattr(self, key, _coerce(key, value))
        return self

    def merge(self, other: "GeneratorOptions") -> "GeneratorOptions":
        """Overlay another options object; its non-None values win."""
        return self.update(**asdict(other))

    @classmethod
    def from_env(cls, environ: dict[str, str] | None = None) -> "GeneratorOptions":
        """Read the DOCBKX_* environment variables."""
        environ = os.environ if environ is None else environ
        options = cls()
        for key in _ENV_KEYS:
            if val := environ.get(ENV_PREFIX + key.upper()):
                options.update(**{key: val})
        return options

    @classmethod
    def from_yaml(cls, path: Path | str) -> "GeneratorOptions":
        """Load options from a YAML mapping.

        Keys may use either snake_case or kebab-case.

        Raises:
            ConfigurationError: If the file is unreadable, not a mapping, or
                contains unknown keys.
        """
        path = Path(path)
        try:
            with open(path) as f:
                data = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as exc:
            raise ConfigurationError(f"Failed to load options from {path}: {exc}") from exc

        if not isinstance(data, dict):
            raise ConfigurationError(f"Options file {path} must contain a mapping")

        normalized = {str(k).replace("-", "_"): v for k, v in data.items()}
        return cls().update(**normalized)


def _coerce(key: str, value: Any) -> Any:
    """Coerce YAML/env values into the field's expected type."""
    if key in ("base_directory", "distribution", "target_directory", "target_resources_directory"):
        return Path(value)
    if key == "excluded_properties" and isinstance(value, (list, tuple)):
        return ", ".join(str(v) for v in value)
    if key == "version":
        # YAML reads 1.75 as a float
        return str(value)
    return value


# =============================================================================
# Resolved config
# =============================================================================


@dataclass(frozen=True)
class GeneratorConfig:
    """Fully resolved configuration for one generation run.

    Examples:
        config = GeneratorConfig.from_options(GeneratorOptions(type="fo", version="1.75.2"))
        config.class_name            # "DocbkxFoMojo"
        config.stylesheet_path       # "fo/docbook.xsl"
        config.distribution          # ./lib/docbook-xsl-1.75.2.zip

        # CLI use: env vars + YAML file + explicit overrides
        config = GeneratorConfig.load("docbkx.yaml", type="html")
    """

    output_type: str
    version: str
    distribution: Path
    source_root_directory: str
    stylesheet_path: str
    stylesheet_target_root: str
    stylesheet_target_location: str
    class_name: str
    package_name: str
    super_class_name: str | None
    plugin_suffix: str | None
    excluded_properties: str | None
    target_directory: Path
    target_resources_directory: Path
    source_extension: str = DEFAULT_SOURCE_EXTENSION
    template_name: str = DEFAULT_TEMPLATE_NAME

    @classmethod
    def from_options(cls, options: GeneratorOptions) -> "GeneratorConfig":
        """Apply every defaulting rule once and freeze the result.

        Raises:
            ConfigurationError: If the version is missing or the type is empty.
        """
        if not options.version:
            raise ConfigurationError(
                "The DocBook XSL version is required (--version or DOCBKX_VERSION)"
            )
        version = str(options.version)
        output_type = options.type if options.type is not None else DEFAULT_TYPE
        if not output_type:
            raise ConfigurationError("Output type must not be empty")

        base = options.base_directory or Path.cwd()

        distribution = options.distribution or base / "lib" / f"docbook-xsl-{version}.zip"
        source_root = options.source_root_directory or default_distribution_name(version)
        if not source_root.endswith("/"):
            source_root += "/"

        stylesheet_path = options.stylesheet_path or f"{output_type}/docbook.xsl"
        target_root = options.stylesheet_target_root or DEFAULT_STYLESHEET_TARGET_ROOT
        target_location = (
            options.stylesheet_target_location or f"{target_root}/{stylesheet_path}"
        )

        group_id = options.group_id or DEFAULT_GROUP_ID
        super_class = (
            options.super_class_name
            if options.super_class_name is not None
            else DEFAULT_SUPER_CLASS_NAME
        )

        return cls(
            output_type=output_type,
            version=version,
            distribution=distribution,
            source_root_directory=source_root,
            stylesheet_path=stylesheet_path,
            stylesheet_target_root=target_root,
            stylesheet_target_location=target_location,
            class_name=options.class_name or default_class_name(output_type),
            package_name=options.package_name or group_id,
            super_class_name=super_class or None,
            plugin_suffix=options.plugin_suffix or None,
            excluded_properties=options.excluded_properties,
            target_directory=options.target_directory
            or base / "target" / "generated-sources",
            target_resources_directory=options.target_resources_directory
            or base / "target" / "generated-resources",
            source_extension=(options.source_extension or DEFAULT_SOURCE_EXTENSION).lstrip("."),
            template_name=options.template_name or DEFAULT_TEMPLATE_NAME,
        )

    @classmethod
    def load(cls, config_file: Path | str | None = None, **overrides: Any) -> "GeneratorConfig":
        """Resolve env vars, then the options file, then explicit overrides."""
        options = GeneratorOptions.from_env()
        if config_file is not None:
            options.merge(GeneratorOptions.from_yaml(config_file))
        options.update(**overrides)
        logger.debug("Resolved generator options: %s", options)
        return cls.from_options(options)

    @property
    def resource_directory(self) -> Path:
        """Directory receiving the staged distribution files."""
        return self.target_resources_directory / RESOURCE_ROOT

    def to_dict(self) -> dict[str, Any]:
        """Convert to dict for display."""
        data = asdict(self)
        data["resource_directory"] = self.resource_directory
        return {k: str(v) if isinstance(v, Path) else v for k, v in data.items()}
