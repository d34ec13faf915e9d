"""
Tests for MIME type / file name matching and content negotiation.
"""

import pytest

from rdfrio.formats import (
    N3,
    NQUADS,
    NTRIPLES,
    RDFXML,
    TRIG,
    TURTLE,
    YARS,
    RDFFormat,
    accept_header,
    match_file_name,
    match_mime_type,
    rank_for_negotiation,
)
from rdfrio.formats.matching import file_extension_of, normalize_mime_type, quality_of


@pytest.mark.unit
class TestMimeTypeMatching:
    """Tests for match_mime_type."""

    FORMATS = (RDFXML, NTRIPLES, TURTLE, NQUADS)

    def test_exact_match(self):
        assert match_mime_type("text/turtle", self.FORMATS) is TURTLE

    def test_parameters_are_stripped(self):
        assert match_mime_type("text/turtle;charset=UTF-8", self.FORMATS) is TURTLE
        assert match_mime_type("  text/turtle ; q=0.5 ", self.FORMATS) is TURTLE

    def test_case_insensitive(self):
        assert match_mime_type("Application/RDF+XML", self.FORMATS) is RDFXML

    def test_secondary_mime_type(self):
        assert match_mime_type("application/x-turtle", self.FORMATS) is TURTLE

    def test_no_match_returns_fallback(self):
        assert match_mime_type("text/html", self.FORMATS) is None
        assert match_mime_type("text/html", self.FORMATS, fallback=NTRIPLES) is NTRIPLES

    def test_empty_candidate_returns_fallback(self):
        assert match_mime_type("", self.FORMATS, fallback=TURTLE) is TURTLE

    def test_first_format_in_order_wins(self):
        first = RDFFormat("First", "text/x-shared")
        second = RDFFormat("Second", "text/x-shared")
        assert match_mime_type("text/x-shared", [first, second]) is first
        assert match_mime_type("text/x-shared", [second, first]) is second

    def test_normalize(self):
        assert normalize_mime_type(" text/plain; charset=us-ascii ") == "text/plain"


@pytest.mark.unit
class TestFileNameMatching:
    """Tests for match_file_name."""

    FORMATS = (RDFXML, NTRIPLES, TURTLE, YARS)

    @pytest.mark.parametrize("name,expected", [
        ("data.ttl", TURTLE),
        ("DATA.TTL", TURTLE),
        ("dir/sub/data.nt", NTRIPLES),
        ("C:\\dumps\\data.owl", RDFXML),
        ("graph.yarsc", YARS),
    ])
    def test_matches(self, name, expected):
        assert match_file_name(name, self.FORMATS) is expected

    def test_unknown_extension_uses_fallback(self):
        assert match_file_name("data.unknownext", self.FORMATS, fallback=RDFXML) is RDFXML
        assert match_file_name("data.unknownext", self.FORMATS) is None

    def test_no_dot_uses_fallback(self):
        assert match_file_name("README", self.FORMATS, fallback=TURTLE) is TURTLE

    def test_dots_in_directories_are_ignored(self):
        assert file_extension_of("archive.d/README") is None
        assert match_file_name("archive.ttl/README", self.FORMATS) is None

    def test_only_last_extension_counts(self):
        assert file_extension_of("data.nt.ttl") == "ttl"
        assert match_file_name("data.ttl.gz", self.FORMATS) is None


@pytest.mark.unit
class TestNegotiation:
    """Tests for rank_for_negotiation and accept_header."""

    def test_full_quality_has_no_q(self):
        assert rank_for_negotiation([TURTLE]) == ["text/turtle", "application/x-turtle"]

    def test_missing_namespace_support_costs_one(self):
        assert rank_for_negotiation([NTRIPLES]) == ["text/plain;q=0.9"]

    def test_missing_context_support_costs_five(self):
        assert quality_of(TURTLE, require_context=True) == 5
        assert rank_for_negotiation([TURTLE], require_context=True) == [
            "text/turtle;q=0.5",
            "application/x-turtle;q=0.5",
        ]

    def test_context_penalty_only_when_required(self):
        assert quality_of(TRIG, require_context=True) == 10
        assert quality_of(TURTLE) == 10

    def test_non_preferred_formats_cost_two(self):
        ranked = rank_for_negotiation([TURTLE, N3], preferred_format=TURTLE)
        assert ranked == [
            "text/turtle",
            "application/x-turtle",
            "text/n3;q=0.8",
            "text/rdf+n3;q=0.8",
        ]

    def test_penalties_add_up(self):
        # no contexts (-5), not preferred (-2), no namespaces (-1)
        assert quality_of(NTRIPLES, require_context=True, preferred_format=TURTLE) == 2

    def test_order_follows_input(self):
        ranked = rank_for_negotiation([NTRIPLES, TURTLE])
        assert ranked == ["text/plain;q=0.9", "text/turtle", "application/x-turtle"]

    def test_deterministic(self):
        formats = [RDFXML, NTRIPLES, TURTLE, NQUADS, TRIG]
        assert rank_for_negotiation(formats, True) == rank_for_negotiation(formats, True)

    def test_accept_header_joins(self):
        assert accept_header([TURTLE, NTRIPLES]) == (
            "text/turtle, application/x-turtle, text/plain;q=0.9"
        )
