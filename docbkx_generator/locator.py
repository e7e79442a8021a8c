"""Nested locators addressing a single file inside a distribution zip.

Format:
    archive:<archive file URL>!/<root><relative path>

e.g. ``archive:file:///work/lib/docbook-xsl-1.75.2.zip!/docbook-xsl-1.75.2/html/docbook.xsl``

Locators are plain strings so they can serve as base URIs inside lxml; the
ArchiveResolver below then follows xsl:import, xsl:include and document()
references between files of the same archive without extracting it.
"""

import logging
import posixpath
import zipfile
from pathlib import Path
from urllib.parse import unquote, urlparse

from lxml import etree

from .errors import ConfigurationError

logger = logging.getLogger(__name__)

SCHEME = "archive:"
SEPARATOR = "!/"


def archive_url(distribution: Path | str) -> str:
    """Express the physical archive location as an absolute file URL.

    Raises:
        ConfigurationError: If the location cannot be expressed as a URL
    """
    try:
        return Path(distribution).resolve().as_uri()
    except (ValueError, OSError) as exc:
        raise ConfigurationError(
            f"Failed to construct URL for distribution {distribution}: {exc}"
        ) from exc


def build_locator(distribution: Path | str, root: str, relative: str) -> str:
    """Build the locator of ``relative`` inside the distribution root.

    Examples:
        build_locator("lib/docbook-xsl-1.75.2.zip", "docbook-xsl-1.75.2/", "highlighting/foo.xml")
        → "archive:file:///.../lib/docbook-xsl-1.75.2.zip!/docbook-xsl-1.75.2/highlighting/foo.xml"
    """
    if root and not root.endswith("/"):
        root += "/"
    return f"{SCHEME}{archive_url(distribution)}{SEPARATOR}{root}{relative.lstrip('/')}"


def parse_locator(locator: str) -> tuple[Path, str]:
    """Split a locator into (archive path, entry name).

    Tolerates the forms produced by relative URI resolution in libxml2
    (``file:/x``, ``file:///x`` and ``file%3A/x``, ``.`` and ``..`` segments).

    Raises:
        ValueError: If the string is not an archive locator
    """
    if not locator.startswith(SCHEME) or SEPARATOR not in locator:
        raise ValueError(f"Not an archive locator: {locator!r}")
    outer, _, entry = locator[len(SCHEME):].partition(SEPARATOR)

    # libxml2 re-serializes resolved references with the inner colon escaped
    # (archive:file%3A/x.zip!/...), so the outer URL is decoded as a whole
    parsed = urlparse(unquote(outer))
    if parsed.scheme != "file":
        raise ValueError(f"Unsupported archive location: {outer!r}")
    archive = Path(parsed.path)
    if not archive.is_absolute():
        raise ValueError(f"Archive location is not absolute: {outer!r}")

    entry = posixpath.normpath(unquote(entry))
    if entry.startswith("../") or entry in (".", ".."):
        raise ValueError(f"Locator escapes the archive root: {locator!r}")
    return archive, entry


def read_locator(locator: str) -> bytes:
    """Read the bytes of the entry addressed by a locator.

    Raises:
        ValueError: Malformed locator
        KeyError: The entry does not exist in the archive
        OSError, zipfile.BadZipFile: The archive cannot be read
    """
    archive, entry = parse_locator(locator)
    with zipfile.ZipFile(archive) as zf:
        return zf.read(entry)


class ArchiveResolver(etree.Resolver):
    """Serve ``archive:`` URLs to lxml parsers and XSLT document loading.

    Locators that cannot be read are recorded in ``failures`` and left to
    libxml2, which then reports the load as failed.
    """

    def __init__(self):
        super().__init__()
        self.failures: list[str] = []

    def resolve(self, system_url, public_id, context):
        if not system_url or not system_url.startswith(SCHEME):
            return None
        logger.debug("Resolving %s", system_url)
        try:
            data = read_locator(system_url)
        except (ValueError, KeyError, OSError, zipfile.BadZipFile) as exc:
            logger.warning("Failed to resolve %s: %s", system_url, exc)
            self.failures.append(system_url)
            return None
        return self.resolve_string(data, context, base_url=system_url)


def make_parser(resolver: ArchiveResolver | None = None, **kwargs) -> etree.XMLParser:
    """Create an XML parser that can follow archive locators.

    DTD loading and network access stay disabled; DocBook stylesheets and
    parameter reference pages do not need them.
    """
    kwargs.setdefault("no_network", True)
    kwargs.setdefault("load_dtd", False)
    kwargs.setdefault("resolve_entities", False)
    parser = etree.XMLParser(**kwargs)
    parser.resolvers.add(resolver if resolver is not None else ArchiveResolver())
    return parser


def parse_locator_document(locator: str, parser: etree.XMLParser | None = None):
    """Parse the XML entry addressed by a locator, keeping the locator as base URI.

    Raises:
        ValueError, KeyError, OSError, zipfile.BadZipFile: See read_locator
        lxml.etree.XMLSyntaxError: The entry is not well-formed XML
    """
    data = read_locator(locator)
    parser = parser if parser is not None else make_parser()
    root = etree.fromstring(data, parser, base_url=locator)
    return root.getroottree()
