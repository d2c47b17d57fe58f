"""
Tests for negotiation/negotiator.py.

Tests cover:
- Decision order: format parameter, path suffix, Accept header, HTML
- Candidate paths and the root fallback
- Not-found and missing-HTML outcomes
"""

import pytest

from oerschema.negotiation import (
    HTML,
    ContentNegotiator,
    ContentReader,
    HtmlMissing,
    TermNotFound,
)
from oerschema.triples import RdfFormat


@pytest.fixture
def negotiator():
    return ContentNegotiator()


@pytest.fixture
def site(tmp_path):
    """A content root with one term in terms/, one at the root and one HTML page."""
    (tmp_path / "terms").mkdir()
    (tmp_path / "terms" / "Course.ttl").write_text("<course> a <Class> .\n")
    (tmp_path / "Lesson.ttl").write_text("<lesson> a <Class> .\n")
    (tmp_path / "Course").mkdir()
    (tmp_path / "Course" / "index.html").write_text("<h1>Course</h1>")
    return tmp_path


class TestDecision:
    """Which representation is picked."""

    @pytest.mark.parametrize(
        "term, accept, format_param, path, expected",
        [
            ("Course", "text/turtle", None, "/Course", "turtle"),
            ("Course", "text/html,text/turtle;q=0.1", None, "/Course", "turtle"),
            ("Course", "TEXT/TURTLE", None, "/Course", "turtle"),
            ("Course", "text/html", "ttl", "/Course", "turtle"),
            ("Course", None, "turtle", "/Course", "turtle"),
            ("Course.ttl", "text/html", None, "/Course.ttl", "turtle"),
            ("Course", "text/html", None, "/Course", HTML),
            ("Course", None, None, None, HTML),
            ("Course", "*/*", None, "/Course", HTML),
        ],
    )
    def test_decision_table(self, negotiator, term, accept, format_param, path, expected):
        decision = negotiator.resolve(term, accept=accept, format_param=format_param, request_path=path)

        assert decision.format == expected
        assert decision.term_name == "Course"

    def test_parameter_wins_over_accept(self):
        negotiator = ContentNegotiator([RdfFormat.TURTLE, RdfFormat.JSONLD])

        decision = negotiator.resolve("Course", accept="text/turtle", format_param="jsonld")

        assert decision.format == "jsonld"
        assert decision.media_type == "application/ld+json"

    def test_disabled_format_falls_through(self, negotiator):
        decision = negotiator.resolve("Course", accept="application/ld+json", format_param="jsonld")

        assert decision.is_html

    def test_suffix_ignores_query_string(self, negotiator):
        decision = negotiator.resolve("Course", request_path="/Course?x=.ttl")

        assert decision.is_html

    def test_turtle_checked_first(self):
        negotiator = ContentNegotiator([RdfFormat.NTRIPLES, RdfFormat.TURTLE, RdfFormat.NTRIPLES])

        assert negotiator.formats == (RdfFormat.TURTLE, RdfFormat.NTRIPLES)
        decision = negotiator.resolve("Course", accept="application/n-triples, text/turtle")
        assert decision.format == "turtle"

    def test_extra_format_by_accept(self):
        negotiator = ContentNegotiator([RdfFormat.TURTLE, RdfFormat.NTRIPLES])

        decision = negotiator.resolve("Course", accept="application/n-triples")

        assert decision.format == "ntriples"
        assert decision.candidate_paths == ("terms/Course.nt", "Course.nt")


class TestCandidates:
    """Where a decision looks for its file."""

    def test_turtle_candidates_in_order(self, negotiator):
        decision = negotiator.resolve("Course", accept="text/turtle")

        assert decision.candidate_paths == ("terms/Course.ttl", "Course.ttl")
        assert decision.media_type == "text/turtle"

    def test_html_candidate(self, negotiator):
        decision = negotiator.resolve("Course", accept="text/html")

        assert decision.candidate_paths == ("Course/index.html",)
        assert decision.media_type == "text/html"


class TestContentReader:
    """Reading the chosen file."""

    def test_terms_directory_first(self, negotiator, site):
        decision = negotiator.resolve("Course", accept="text/turtle")

        content = ContentReader(site).fetch(decision)

        assert content.path == site / "terms" / "Course.ttl"
        assert content.body == b"<course> a <Class> .\n"
        assert content.media_type == "text/turtle"

    def test_falls_back_to_root(self, negotiator, site):
        decision = negotiator.resolve("Lesson", accept="text/turtle")

        content = ContentReader(site).fetch(decision)

        assert content.body == b"<lesson> a <Class> .\n"

    def test_not_found_lists_paths(self, negotiator, site):
        decision = negotiator.resolve("NoSuchTerm", accept="text/turtle")

        with pytest.raises(TermNotFound) as exc_info:
            ContentReader(site).fetch(decision)

        assert str(exc_info.value) == "Turtle representation not found for term: NoSuchTerm"
        assert exc_info.value.paths_tried == [
            str(site / "terms" / "NoSuchTerm.ttl"),
            str(site / "NoSuchTerm.ttl"),
        ]

    def test_html_page(self, negotiator, site):
        decision = negotiator.resolve("Course", accept="text/html")

        content = ContentReader(site).fetch(decision)

        assert content.body == b"<h1>Course</h1>"

    def test_html_missing(self, negotiator, site):
        decision = negotiator.resolve("Lesson", accept="text/html")

        with pytest.raises(HtmlMissing):
            ContentReader(site).fetch(decision)

    def test_outside_root_is_missing(self, negotiator, site):
        (site / "secret.ttl").write_text("nope")
        decision = negotiator.resolve("../secret", accept="text/turtle")

        with pytest.raises(TermNotFound):
            ContentReader(site / "terms").fetch(decision)

    def test_probe(self, negotiator, site):
        decision = negotiator.resolve("Lesson", accept="text/turtle")

        assert ContentReader(site).probe(decision) == {
            str(site / "terms" / "Lesson.ttl"): False,
            str(site / "Lesson.ttl"): True,
        }
