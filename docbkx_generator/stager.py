"""Staging of distribution resources into the generated resources tree.

Copies the subset of the distribution a generated plugin needs at runtime
(its own stylesheet directory plus the shared common/, lib/ and
highlighting/ directories and the VERSION file) into
``<resources>/META-INF/docbkx``, dropping the versioned root directory.

Existing files are never overwritten, so staging twice against the same
archive leaves the output untouched. Files are written under a ``.part``
name and moved into place once complete, so a failed copy leaves nothing
behind that a later run would mistake for a staged file.
"""

import logging
import os
import shutil
import zipfile
from dataclasses import dataclass
from pathlib import Path, PurePosixPath
from typing import BinaryIO, Iterable

from .archive import visit_entries
from .errors import StagingError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StagingReport:
    """Outcome of one staging run."""

    copied: int
    skipped: int
    directories: int = 0

    @property
    def total(self) -> int:
        return self.copied + self.skipped


def resource_includes(output_type: str) -> tuple[str, ...]:
    """Include patterns for the resources of one output type."""
    return (
        "*/VERSION",
        f"*/{output_type}/**",
        "*/common/**",
        "*/lib/**",
        "*/highlighting/**",
    )


def strip_root(entry_name: str) -> PurePosixPath | None:
    """Drop the first path segment (the distribution root) of an entry name.

    Returns None for the root directory itself. Raises StagingError for
    names that would escape the output directory.
    """
    _, _, rest = entry_name.partition("/")
    if not rest.strip("/"):
        return None
    relative = PurePosixPath(rest)
    if relative.is_absolute() or ".." in relative.parts:
        raise StagingError(f"Refusing to stage {entry_name}: path escapes the output directory")
    return relative


def stage_resources(
    distribution: Path,
    resource_directory: Path,
    includes: Iterable[str],
) -> StagingReport:
    """Copy matching archive entries into ``resource_directory``.

    Raises:
        ConfigurationError: If the archive cannot be opened
        StagingError: If the output root cannot be created or an entry
            cannot be copied (remaining entries are not attempted)
    """
    try:
        resource_directory.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise StagingError(f"Failed to create {resource_directory.absolute()}") from exc

    copied = skipped = directories = 0

    def copy_entry(name: str, stream: BinaryIO) -> None:
        nonlocal copied, skipped, directories
        relative = strip_root(name)
        if relative is None:
            return
        target = resource_directory.joinpath(*relative.parts)
        partial: Path | None = None
        try:
            if name.endswith("/"):
                target.mkdir(parents=True, exist_ok=True)
                directories += 1
                return
            if target.exists():
                logger.debug("Skipping existing %s", target)
                skipped += 1
                return
            target.parent.mkdir(parents=True, exist_ok=True)
            partial = target.with_name(target.name + ".part")
            with open(partial, "wb") as out:
                shutil.copyfileobj(stream, out)
            os.replace(partial, target)
        except (OSError, zipfile.BadZipFile) as exc:
            # CRC errors surface only at the end of the read
            if partial is not None:
                partial.unlink(missing_ok=True)
            raise StagingError(f"Failed to copy {name} to {target}: {exc}") from exc
        copied += 1

    visit_entries(distribution, includes, copy_entry)
    report = StagingReport(copied=copied, skipped=skipped, directories=directories)
    logger.info(
        "Staged %d resources into %s (%d already present)",
        report.copied,
        resource_directory,
        report.skipped,
    )
    return report
