"""Builders for miniature DocBook XSL distribution zips used across tests.

Layout (root ``docbook-xsl-1.75.2/``):
- html/docbook.xsl imports ../common/l10n.xsl and includes param.xsl
- fo/docbook.xsl includes param.xsl and imports ../common/l10n.xsl
- params/*.xml reference pages, some missing or malformed on purpose
- common/, lib/, highlighting/, VERSION and an unrelated directory
"""

import zipfile
from pathlib import Path

VERSION = "1.75.2"
ROOT = f"docbook-xsl-{VERSION}/"

XSL_NS = 'xmlns:xsl="http://www.w3.org/1999/XSL/Transform"'


def stylesheet(body: str) -> str:
    return f'<?xml version="1.0"?>\n<xsl:stylesheet version="1.0" {XSL_NS}>\n{body}\n</xsl:stylesheet>\n'


def refentry(name: str, para: str) -> str:
    """DocBook 4 style reference page."""
    return (
        f'<?xml version="1.0"?>\n<refentry id="{name}">\n'
        f"<refnamediv><refname>{name}</refname><refpurpose>Purpose</refpurpose></refnamediv>\n"
        f"<refsect1><title>Description</title>\n<para>{para}</para>\n"
        "<para>Second paragraph.</para></refsect1>\n"
        "<refsect1><title>Later</title><para>Not this one.</para></refsect1>\n"
        "</refentry>\n"
    )


def refentry_db5(name: str, para: str) -> str:
    """Namespaced DocBook 5 style reference page."""
    return (
        '<?xml version="1.0"?>\n'
        f'<refentry xmlns="http://docbook.org/ns/docbook" version="5.0" xml:id="{name}">\n'
        f"<refnamediv><refname>{name}</refname><refpurpose>Purpose</refpurpose></refnamediv>\n"
        "<refsection><info><title>Description</title></info>\n"
        f"<para>{para}</para></refsection>\n"
        "</refentry>\n"
    )


DISTRIBUTION_FILES: dict[str, str] = {
    "VERSION": "1.75.2\n",
    "html/docbook.xsl": stylesheet(
        '<xsl:import href="../common/l10n.xsl"/>\n'
        '<xsl:include href="param.xsl"/>\n'
        '<xsl:param name="html.stylesheet" select="\'\'"/>\n'
        '<xsl:template name="local"><xsl:param name="local.only"/></xsl:template>'
    ),
    "html/param.xsl": stylesheet(
        '<xsl:param name="admon.graphics" select="0"/>\n'
        '<xsl:param name="toc.max.depth">8</xsl:param>'
    ),
    "fo/docbook.xsl": stylesheet(
        '<xsl:import href="../common/l10n.xsl"/>\n'
        '<xsl:include href="param.xsl"/>'
    ),
    "fo/param.xsl": stylesheet(
        '<xsl:param name="body.font.family" select="\'serif\'"/>\n'
        '<xsl:param name="page.height" select="\'11in\'"/>'
    ),
    "empty/docbook.xsl": stylesheet('<xsl:template match="/"/>'),
    "broken/docbook.xsl": stylesheet('<xsl:include href="missing.xsl"/>'),
    "common/l10n.xsl": stylesheet('<xsl:param name="l10n.gentext.language" select="\'\'"/>'),
    "common/en.xml": "<l:l10n xmlns:l='http://docbook.sourceforge.net/xmlns/l10n/1.0'/>\n",
    "lib/lib.xsl": stylesheet(""),
    "highlighting/foo.xml": "<highlighters/>\n",
    "params/admon.graphics.xml": refentry_db5(
        "admon.graphics",
        "If true (non-zero), admonitions are presented\n  in an alternate style. Default graphics are provided.",
    ),
    "params/toc.max.depth.xml": refentry(
        "toc.max.depth", "Specifies the maximal depth of TOC on all levels."
    ),
    "params/html.stylesheet.xml": refentry("html.stylesheet", "Does X.\nSee also Y."),
    "params/body.font.family.xml": "<refentry><refsect1><para>Unclosed",
    "params/page.height.xml": refentry("page.height", "The height of the physical page"),
    "tools/make/Makefile.DocBook": "# not staged\n",
}


def make_distribution(
    path: Path,
    files: dict[str, str] | None = None,
    root: str = ROOT,
    directories: bool = True,
) -> Path:
    """Write a distribution zip; directory entries come before their files."""
    files = DISTRIBUTION_FILES if files is None else files
    path.parent.mkdir(parents=True, exist_ok=True)
    with zipfile.ZipFile(path, "w") as zf:
        if directories:
            zf.writestr(root, "")
            seen: set[str] = set()
            for name in files:
                parts = name.split("/")[:-1]
                for i in range(1, len(parts) + 1):
                    directory = "/".join(parts[:i]) + "/"
                    if directory not in seen:
                        seen.add(directory)
                        zf.writestr(root + directory, "")
        for name, content in files.items():
            zf.writestr(root + name, content)
    return path
