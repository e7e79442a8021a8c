"""Tests for archive entry visiting and include patterns."""

import zipfile

import pytest

from docbkx_generator.archive import matches, matches_any, visit_entries
from docbkx_generator.errors import ConfigurationError

from .distribution import ROOT, make_distribution


class TestMatches:
    """Tests for Ant-style include patterns."""

    def test_single_star_stays_in_segment(self):
        assert matches("*/VERSION", "docbook-xsl-1.75.2/VERSION")
        assert not matches("*/VERSION", "docbook-xsl-1.75.2/html/VERSION")

    def test_double_star_spans_segments(self):
        assert matches("*/html/**", "docbook-xsl-1.75.2/html/docbook.xsl")
        assert matches("*/html/**", "docbook-xsl-1.75.2/html/sub/dir/file.xsl")

    def test_double_star_matches_directory_itself(self):
        assert matches("*/html/**", "docbook-xsl-1.75.2/html/")
        assert matches("*/html/**", "docbook-xsl-1.75.2/html")

    def test_prefix_is_not_a_match(self):
        assert not matches("*/html/**", "docbook-xsl-1.75.2/xhtml/docbook.xsl")
        assert not matches("*/html/**", "docbook-xsl-1.75.2/html5/docbook.xsl")

    def test_question_mark(self):
        assert matches("*/f?/**", "root/fo/docbook.xsl")
        assert not matches("*/f?/**", "root/foo/docbook.xsl")

    def test_leading_double_star(self):
        assert matches("**/*.xml", "a/b/c.xml")
        assert matches("**/*.xml", "c.xml")

    def test_regex_characters_are_literal(self):
        assert matches("*/a+b.xsl", "root/a+b.xsl")
        assert not matches("*/a+b.xsl", "root/aab.xsl")

    def test_matches_any(self):
        patterns = ["*/VERSION", "*/lib/**"]
        assert matches_any(patterns, "root/lib/lib.xsl")
        assert not matches_any(patterns, "root/params/x.xml")
        assert not matches_any([], "root/VERSION")


class TestVisitEntries:
    """Tests for visit_entries."""

    def test_visits_matching_entries_in_archive_order(self, tmp_path):
        archive = make_distribution(
            tmp_path / "d.zip",
            {"b/two.txt": "2", "a/one.txt": "1", "c/three.txt": "3"},
            directories=False,
        )
        seen = []

        count = visit_entries(
            archive,
            ["*/b/**", "*/a/**"],
            lambda name, stream: seen.append((name, stream.read())),
        )

        assert count == 2
        assert seen == [(ROOT + "b/two.txt", b"2"), (ROOT + "a/one.txt", b"1")]

    def test_each_entry_visited_once_even_if_several_patterns_match(self, tmp_path):
        archive = make_distribution(tmp_path / "d.zip", {"lib/x.xsl": "x"}, directories=False)
        seen = []

        visit_entries(archive, ["*/lib/**", "**/*.xsl"], lambda n, s: seen.append(n))

        assert seen == [ROOT + "lib/x.xsl"]

    def test_non_matching_entries_are_not_opened(self, tmp_path, monkeypatch):
        archive = make_distribution(
            tmp_path / "d.zip", {"keep/x": "x", "skip/y": "y"}, directories=False
        )
        opened = []
        original_open = zipfile.ZipFile.open

        def tracking_open(self, name, *args, **kwargs):
            opened.append(getattr(name, "filename", name))
            return original_open(self, name, *args, **kwargs)

        monkeypatch.setattr(zipfile.ZipFile, "open", tracking_open)
        visit_entries(archive, ["*/keep/**"], lambda n, s: None)

        assert opened == [ROOT + "keep/x"]

    def test_stream_closed_after_visit(self, tmp_path):
        archive = make_distribution(tmp_path / "d.zip", {"a/x": "x"}, directories=False)
        streams = []

        visit_entries(archive, ["**"], lambda n, s: streams.append(s))

        assert streams and all(s.closed for s in streams)

    def test_stream_closed_when_visitor_raises(self, tmp_path):
        archive = make_distribution(tmp_path / "d.zip", {"a/x": "x", "a/y": "y"}, directories=False)
        streams = []

        def failing(name, stream):
            streams.append(stream)
            raise RuntimeError("boom")

        with pytest.raises(RuntimeError):
            visit_entries(archive, ["**"], failing)

        assert len(streams) == 1
        assert streams[0].closed

    def test_missing_archive_is_configuration_error(self, tmp_path):
        with pytest.raises(ConfigurationError, match="Failed to open archive"):
            visit_entries(tmp_path / "nope.zip", ["**"], lambda n, s: None)

    def test_not_a_zip_is_configuration_error(self, tmp_path):
        bogus = tmp_path / "bogus.zip"
        bogus.write_text("not a zip")
        with pytest.raises(ConfigurationError):
            visit_entries(bogus, ["**"], lambda n, s: None)
