"""Discovery of global stylesheet parameters.

The discovery itself is an XSLT transform (resources/extract-params.xsl)
that walks the import/include graph of a stylesheet and prints one
parameter name per line. The pipeline only depends on the Transformer
protocol, so the XSLT implementation can be swapped out in tests.
"""

import logging
import zipfile
from importlib import resources
from typing import Protocol

from lxml import etree

from .errors import ConfigurationError, ExtractionError
from .locator import ArchiveResolver, make_parser, parse_locator_document

logger = logging.getLogger(__name__)

TRANSFORMER_RESOURCE = "extract-params.xsl"


class Transformer(Protocol):
    """Maps a stylesheet locator to newline separated parameter names."""

    def __call__(self, stylesheet_locator: str) -> str: ...


class XsltParameterTransformer:
    """Transformer backed by the packaged extract-params.xsl stylesheet.

    Construct once per run; the compiled XSLT is reused for every call.
    """

    def __init__(self, resource: str = TRANSFORMER_RESOURCE):
        self._resolver = ArchiveResolver()
        self._parser = make_parser(self._resolver)
        try:
            source = resources.files("docbkx_generator") / "resources" / resource
            xslt_doc = etree.fromstring(source.read_bytes(), self._parser)
            self._transform = etree.XSLT(xslt_doc)
        except (OSError, etree.XMLSyntaxError, etree.XSLTParseError) as exc:
            raise ConfigurationError(
                f"Failed to create transformer for retrieving parameter names: {exc}"
            ) from exc

    def __call__(self, stylesheet_locator: str) -> str:
        self._resolver.failures.clear()
        try:
            document = parse_locator_document(stylesheet_locator, self._parser)
            result = self._transform(document)
        except (ValueError, KeyError, OSError, zipfile.BadZipFile) as exc:
            raise ExtractionError(
                f"Failed to read stylesheet {stylesheet_locator}: {exc}"
            ) from exc
        except etree.LxmlError as exc:
            raise ExtractionError(
                f"Failed to apply transformer for retrieving parameter names: {exc}"
            ) from exc

        for entry in self._transform.error_log:
            logger.debug("extract-params: %s", entry.message)

        if self._resolver.failures:
            raise ExtractionError(
                "Failed to load stylesheets imported from "
                f"{stylesheet_locator}: {', '.join(self._resolver.failures)}"
            )
        return str(result)


def parse_parameter_names(text: str) -> frozenset[str]:
    """Parse transformer output into a set of names, ignoring blank lines."""
    return frozenset(line.strip() for line in text.splitlines() if line.strip())


def extract_parameter_names(stylesheet_locator: str, transformer: Transformer) -> frozenset[str]:
    """Collect every global parameter name reachable from a stylesheet.

    The result is unordered; an empty set is a legal result for a stylesheet
    without global parameters.

    Raises:
        ExtractionError: If the transformer cannot be applied
    """
    names = parse_parameter_names(transformer(stylesheet_locator))
    logger.debug("Found %d parameter names in %s", len(names), stylesheet_locator)
    return names
