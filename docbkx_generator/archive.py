"""Streaming access to entries of a distribution zip.

Entries are selected with Ant-style include patterns, the same dialect the
DocBook build tooling uses:
- ``?`` matches one character other than ``/``
- ``*`` matches zero or more characters other than ``/``
- ``**`` matches zero or more whole path segments

Each matching entry is handed to a visitor together with a stream that is
only valid for the duration of that call.
"""

import logging
import re
import zipfile
from functools import lru_cache
from pathlib import Path
from typing import BinaryIO, Callable, Iterable

from .errors import ConfigurationError

logger = logging.getLogger(__name__)

EntryVisitor = Callable[[str, BinaryIO], None]


@lru_cache(maxsize=128)
def compile_pattern(pattern: str) -> re.Pattern[str]:
    """Translate an Ant-style include pattern into a compiled regex."""
    parts: list[str] = []
    i = 0
    while i < len(pattern):
        if pattern.startswith("**/", i):
            parts.append("(?:.*/)?")
            i += 3
        elif pattern.startswith("/**", i) and i + 3 == len(pattern):
            parts.append("(?:/.*)?")
            i += 3
        elif pattern.startswith("**", i):
            parts.append(".*")
            i += 2
        elif pattern[i] == "*":
            parts.append("[^/]*")
            i += 1
        elif pattern[i] == "?":
            parts.append("[^/]")
            i += 1
        else:
            parts.append(re.escape(pattern[i]))
            i += 1
    return re.compile("".join(parts) + r"\Z")


def matches(pattern: str, name: str) -> bool:
    """Check whether an entry name matches an include pattern.

    Examples:
        matches("*/VERSION", "docbook-xsl-1.75.2/VERSION") → True
        matches("*/html/**", "docbook-xsl-1.75.2/html/docbook.xsl") → True
        matches("*/VERSION", "docbook-xsl-1.75.2/html/VERSION") → False
    """
    return compile_pattern(pattern).match(name) is not None


def matches_any(patterns: Iterable[str], name: str) -> bool:
    """Check whether an entry name matches at least one include pattern."""
    return any(matches(p, name) for p in patterns)


def visit_entries(
    archive: Path | str,
    includes: Iterable[str],
    visitor: EntryVisitor,
) -> int:
    """Visit every archive entry matching one of the include patterns.

    Entries are visited once, in archive order. Non-matching entries are
    skipped without being opened. The stream passed to ``visitor`` is closed
    as soon as the visitor returns or raises; visitors must not keep it.

    Args:
        archive: Path of the zip file
        includes: Ant-style include patterns
        visitor: Called as ``visitor(entry_name, stream)``

    Returns:
        Number of entries visited

    Raises:
        ConfigurationError: If the archive cannot be opened
    """
    patterns = tuple(includes)
    try:
        zf = zipfile.ZipFile(archive)
    except (OSError, zipfile.BadZipFile) as exc:
        raise ConfigurationError(f"Failed to open archive {archive}: {exc}") from exc

    visited = 0
    with zf:
        for info in zf.infolist():
            if not matches_any(patterns, info.filename):
                continue
            with zf.open(info) as stream:
                visitor(info.filename, stream)
            visited += 1

    logger.debug("Visited %d entries of %s", visited, archive)
    return visited
