"""Rendering of a Specification into plugin source code.

The template is a Jinja2 template shipped in the package's templates/
directory. The Specification is bound as the single template variable
``spec``.
"""

import logging
import re
from pathlib import Path
from typing import Protocol

from jinja2 import Environment, PackageLoader, StrictUndefined, TemplateError

from .builder import ParameterResolver, extract_specification
from .config import DEFAULT_TEMPLATE_NAME, GeneratorConfig
from .errors import ConfigurationError, RenderError
from .extractor import Transformer
from .models import Specification

logger = logging.getLogger(__name__)

TEMPLATE_PACKAGE = "docbkx_generator"
TEMPLATE_DIRECTORY = "templates"

_WORD_SEPARATORS = re.compile(r"[.\-_\s]+")

JAVA_KEYWORDS = frozenset(
    """
    abstract assert boolean break byte case catch char class const continue
    default do double else enum extends false final finally float for goto if
    implements import instanceof int interface long native new null package
    private protected public return short static strictfp super switch
    synchronized this throw throws transient true try void volatile while
    """.split()
)


class Renderer(Protocol):
    """Turns a Specification into source text."""

    def __call__(self, spec: Specification) -> str: ...


def java_identifier(name: str) -> str:
    """Convert a stylesheet parameter name into a camelCase Java field name.

    Examples:
        "admon.graphics" → "admonGraphics"
        "toc.max.depth" → "tocMaxDepth"
        "2d.param" → "_2dParam"
        "default" → "default_"
    """
    words = [w for w in _WORD_SEPARATORS.split(name) if w]
    if not words:
        return "_"
    ident = words[0] + "".join(w[:1].upper() + w[1:] for w in words[1:])
    if not ident[0].isalpha() and ident[0] != "_":
        ident = "_" + ident
    if ident in JAVA_KEYWORDS:
        ident += "_"
    return ident


def field_names(spec: Specification) -> dict[str, str]:
    """Map each parameter name to its Java field name.

    Raises:
        RenderError: If two parameters map to the same field
    """
    fields: dict[str, str] = {}
    owners: dict[str, str] = {}
    for param in spec.parameters:
        ident = java_identifier(param.name)
        if ident in owners:
            raise RenderError(
                f"Parameters {owners[ident]!r} and {param.name!r} both map to field {ident!r}"
            )
        owners[ident] = param.name
        fields[param.name] = ident
    return fields


def javadoc(text: str) -> str:
    """Make text safe to place inside a /** ... */ comment."""
    return text.replace("*/", "*&#47;")


def java_string(text: str) -> str:
    """Escape text for use inside a Java string literal."""
    return text.replace("\\", "\\\\").replace('"', '\\"')


class TemplateRenderer:
    """Renderer backed by a named template from the package template bundle.

    Raises:
        ConfigurationError: If the template bundle or template cannot be loaded
    """

    def __init__(
        self,
        template_name: str = DEFAULT_TEMPLATE_NAME,
        package: str = TEMPLATE_PACKAGE,
        directory: str = TEMPLATE_DIRECTORY,
    ):
        try:
            env = Environment(
                loader=PackageLoader(package, directory),
                undefined=StrictUndefined,
                autoescape=False,
                trim_blocks=True,
                lstrip_blocks=True,
                keep_trailing_newline=True,
            )
            env.filters["java_identifier"] = java_identifier
            env.filters["javadoc"] = javadoc
            env.filters["java_string"] = java_string
            self._template = env.get_template(template_name)
        except (ValueError, ModuleNotFoundError, TemplateError) as exc:
            raise ConfigurationError(
                f"Failed to load template {template_name!r} from {package}/{directory}: {exc}"
            ) from exc
        self.template_name = template_name

    def __call__(self, spec: Specification) -> str:
        field_names(spec)
        try:
            return self._template.render(spec=spec)
        except TemplateError as exc:
            raise RenderError(
                f"Failed to render {self.template_name} for {spec.class_name}: {exc}"
            ) from exc


def source_path(
    target_directory: Path, package_name: str, class_name: str, extension: str
) -> Path:
    """Path of the generated source file.

    Examples:
        source_path(Path("gen"), "net.sf.docbook", "DocbkxHtmlMojo", "java")
        → gen/net/sf/docbook/DocbkxHtmlMojo.java
    """
    return target_directory.joinpath(*package_name.split(".")) / f"{class_name}.{extension}"


def generate_source(
    config: GeneratorConfig,
    transformer: Transformer,
    renderer: Renderer,
    resolve: ParameterResolver | None = None,
) -> tuple[Specification, Path]:
    """Build the Specification, render it, and write the source file.

    Returns:
        (specification, path of the written source file)

    Raises:
        RenderError: With stage "extraction" if I/O failed before the
            specification existed, stage "write" afterwards. Nothing is
            created on disk before the source text has been rendered.
    """
    target_file = source_path(
        config.target_directory,
        config.package_name,
        config.class_name,
        config.source_extension,
    )
    spec: Specification | None = None
    try:
        spec = extract_specification(config, transformer, resolve)
        text = renderer(spec)
        target_file.parent.mkdir(parents=True, exist_ok=True)
        target_file.write_text(text, encoding="utf-8")
    except OSError as exc:
        if spec is None:
            raise RenderError("Failed to read parameters.", stage="extraction") from exc
        raise RenderError(f"Failed to create {target_file}.", stage="write") from exc

    logger.info("Wrote %s (%d parameters)", target_file, len(spec.parameters))
    return spec, target_file
