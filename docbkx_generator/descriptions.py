"""Short parameter descriptions mined from the distribution's reference pages.

Every parameter ``name`` is documented in ``params/<name>.xml``, a refentry
whose first section opens with a descriptive paragraph. The first sentence
of that paragraph becomes the description.

Documentation coverage is incomplete by nature, so any failure here is
logged and degrades to an empty description instead of aborting the run.
"""

import logging
import re
import zipfile
from typing import Callable

from lxml import etree

from .errors import DescriptionResolutionError
from .locator import make_parser, parse_locator_document
from .models import Parameter

logger = logging.getLogger(__name__)

# First text node of the first para of the first section (refsect1 in
# DocBook 4 pages, refsection in DocBook 5 ones). Matches on local names so
# namespaced pages work too.
DESCRIPTION_XPATH = etree.XPath(
    "(//*[local-name()='refsect1' or local-name()='refsection'])[1]"
    "/*[local-name()='para'][1]/text()[1]"
)

_WHITESPACE_RUN = re.compile(r"\s+")


def mine_description(text: str) -> str:
    """Reduce a paragraph to its first sentence on a single, whitespace-normalized line.

    Examples:
        "Does X.\\nSee also Y." → "Does X."
        "  Spans\\n   two lines. More." → "Spans two lines."
        "No period here" → "No period here"
        "Tab\\tand  double spaces." → "Tab and double spaces."
    """
    period = text.find(".")
    if period >= 0:
        text = text[: period + 1]
    return _WHITESPACE_RUN.sub(" ", text.strip())


def parameter_documentation_path(name: str) -> str:
    """Path of a parameter's reference page, relative to the distribution root."""
    return f"params/{name}.xml"


class DescriptionResolver:
    """Resolves Parameter descriptions through a locator factory.

    Args:
        locate: Maps a path relative to the distribution root to a locator
            (see locator.build_locator)
    """

    def __init__(self, locate: Callable[[str], str]):
        self._locate = locate
        self._parser = make_parser()

    def describe(self, name: str) -> str:
        """Mine the description of one parameter.

        Raises:
            DescriptionResolutionError: If the page is missing, malformed or
                has no descriptive paragraph
        """
        locator = self._locate(parameter_documentation_path(name))
        try:
            document = parse_locator_document(locator, self._parser)
            nodes = DESCRIPTION_XPATH(document)
        except KeyError as exc:
            raise DescriptionResolutionError(name, f"no entry {locator}") from exc
        except (ValueError, OSError, zipfile.BadZipFile, etree.LxmlError) as exc:
            raise DescriptionResolutionError(name, str(exc)) from exc

        if not nodes:
            raise DescriptionResolutionError(name, "no descriptive paragraph found")
        return mine_description(str(nodes[0]))

    def resolve(self, name: str) -> Parameter:
        """Build the Parameter for ``name``, with an empty description on failure."""
        try:
            description = self.describe(name)
        except DescriptionResolutionError as exc:
            logger.warning("Failed to obtain description for %s: %s", name, exc.reason)
            logger.debug("Description lookup for %s failed", name, exc_info=exc)
            description = ""
        return Parameter(name=name, description=description)

    __call__ = resolve
