"""
Tests for fetching and parsing remote documents.

HTTP is replaced by a mock session; no network access is needed.
"""

from unittest.mock import MagicMock

import pytest
import requests
from rdflib import URIRef

from rdfrio.errors import RioIOError, UnsupportedRDFormatError
from rdfrio.formats import TURTLE
from rdfrio.remote import DEFAULT_TIMEOUT, get_accept_header, parse_url

EX = "http://example.org/"
TTL_DOC = b"<http://example.org/a> <http://example.org/p> <b> .\n"


def make_session(content=b"", content_type="", url=EX + "data", status=200, error=None):
    response = MagicMock()
    response.content = content
    response.headers = {"Content-Type": content_type} if content_type else {}
    response.url = url
    response.status_code = status
    if status >= 400:
        response.raise_for_status.side_effect = requests.exceptions.HTTPError(f"{status} Error")
    session = MagicMock()
    if error is not None:
        session.get.side_effect = error
    else:
        session.get.return_value = response
    return session


@pytest.mark.unit
class TestAcceptHeader:
    def test_lists_registered_parsers(self):
        header = get_accept_header()
        assert "text/turtle" in header
        assert "application/rdf+xml" in header
        assert "application/x-binary-rdf" not in header

    def test_preferred_format_keeps_full_quality(self):
        params = get_accept_header(preferred_format=TURTLE).split(", ")
        assert "text/turtle" in params
        assert "application/rdf+xml;q=0.8" in params

    def test_context_penalty(self):
        params = get_accept_header(require_context=True).split(", ")
        assert "application/x-trig" in params
        assert "text/plain;q=0.4" in params


@pytest.mark.integration
class TestParseURL:
    def test_format_from_content_type(self):
        session = make_session(TTL_DOC, "text/turtle; charset=utf-8")
        model = parse_url(EX + "data", session=session)
        assert len(model) == 1
        # relative IRIs resolve against the final URL
        assert model[0].object == URIRef(EX + "b")

    def test_request_sends_accept_and_timeout(self):
        session = make_session(TTL_DOC, "text/turtle")
        parse_url(EX + "data", session=session, data_format=TURTLE)
        _, kwargs = session.get.call_args
        assert kwargs["timeout"] == DEFAULT_TIMEOUT
        assert "text/turtle" in kwargs["headers"]["Accept"].split(", ")

    def test_format_from_url_extension(self):
        session = make_session(TTL_DOC, "application/octet-stream", url=EX + "dump.ttl")
        assert len(parse_url(EX + "dump.ttl", session=session)) == 1

    def test_explicit_format_skips_detection(self):
        session = make_session(TTL_DOC, "application/octet-stream")
        assert len(parse_url(EX + "data", session=session, data_format=TURTLE)) == 1

    def test_explicit_base_uri(self):
        session = make_session(TTL_DOC, "text/turtle")
        model = parse_url(EX + "data", base_uri="http://other.org/", session=session)
        assert model[0].object == URIRef("http://other.org/b")

    def test_undetectable_format(self):
        session = make_session(TTL_DOC, "application/octet-stream", url=EX + "data")
        with pytest.raises(UnsupportedRDFormatError):
            parse_url(EX + "data", session=session)

    def test_http_error_status(self):
        session = make_session(status=404)
        with pytest.raises(RioIOError):
            parse_url(EX + "missing.nt", session=session)

    @pytest.mark.parametrize(
        "error",
        [
            requests.exceptions.Timeout("slow"),
            requests.exceptions.ConnectionError("refused"),
            requests.exceptions.RequestException("odd"),
        ],
    )
    def test_request_failures(self, error):
        session = make_session(error=error)
        with pytest.raises(RioIOError):
            parse_url(EX + "data.nt", session=session)
