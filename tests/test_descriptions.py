"""Tests for parameter description mining."""

import logging

import pytest

from docbkx_generator.descriptions import (
    DescriptionResolver,
    mine_description,
    parameter_documentation_path,
)
from docbkx_generator.errors import DescriptionResolutionError
from docbkx_generator.locator import build_locator
from docbkx_generator.models import Parameter

from .distribution import ROOT, make_distribution


@pytest.fixture
def resolver(distribution):
    return DescriptionResolver(lambda relative: build_locator(distribution, ROOT, relative))


class TestMineDescription:
    """Tests for first-sentence extraction."""

    def test_cuts_at_first_period(self):
        assert mine_description("Does X.\nSee also Y.") == "Does X."

    def test_joins_wrapped_lines(self):
        assert mine_description("  Spans\n   two lines. More.") == "Spans two lines."

    def test_without_period_keeps_whole_text(self):
        assert mine_description("  No period here\n") == "No period here"

    def test_empty(self):
        assert mine_description("   ") == ""

    def test_carriage_returns(self):
        assert mine_description("A\r\nB.") == "A B."

    def test_collapses_tabs_and_space_runs(self):
        assert mine_description("Tab\tand   double  spaces. Rest.") == "Tab and double spaces."


def test_documentation_path():
    assert parameter_documentation_path("toc.max.depth") == "params/toc.max.depth.xml"


class TestDescriptionResolver:
    """Tests for DescriptionResolver against the miniature distribution."""

    def test_docbook4_page(self, resolver):
        assert resolver.describe("toc.max.depth") == (
            "Specifies the maximal depth of TOC on all levels."
        )

    def test_docbook5_page_spanning_lines(self, resolver):
        assert resolver.describe("admon.graphics") == (
            "If true (non-zero), admonitions are presented in an alternate style."
        )

    def test_only_first_sentence(self, resolver):
        assert resolver.describe("html.stylesheet") == "Does X."

    def test_no_period(self, resolver):
        assert resolver.describe("page.height") == "The height of the physical page"

    def test_missing_page_raises(self, resolver):
        with pytest.raises(DescriptionResolutionError) as exc_info:
            resolver.describe("l10n.gentext.language")
        assert exc_info.value.parameter == "l10n.gentext.language"
        assert "no entry" in exc_info.value.reason

    def test_malformed_page_raises(self, resolver):
        with pytest.raises(DescriptionResolutionError) as exc_info:
            resolver.describe("body.font.family")
        assert str(exc_info.value).startswith("body.font.family: ")

    def test_resolve_returns_parameter(self, resolver):
        assert resolver.resolve("html.stylesheet") == Parameter(
            name="html.stylesheet", description="Does X."
        )

    def test_resolve_degrades_to_empty_description(self, resolver, caplog):
        with caplog.at_level(logging.WARNING, logger="docbkx_generator"):
            param = resolver("l10n.gentext.language")

        assert param == Parameter(name="l10n.gentext.language", description="")
        assert "Failed to obtain description for l10n.gentext.language" in caplog.text

    def test_page_without_paragraph(self, tmp_path):
        archive = make_distribution(
            tmp_path / "d.zip",
            {"params/bare.xml": "<refentry><refsect1><title>T</title></refsect1></refentry>"},
        )
        resolver = DescriptionResolver(lambda rel: build_locator(archive, ROOT, rel))

        with pytest.raises(DescriptionResolutionError, match="no descriptive paragraph"):
            resolver.describe("bare")
