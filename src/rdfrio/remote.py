"""
Remote sources - fetch and parse RDF documents over HTTP.

Builds an Accept header from the registered parsers, resolves the format of
the response from its Content-Type (falling back to the URL's file
extension) and parses the body with rio.parse().

Usage:
    from rdfrio.remote import parse_url

    model = parse_url("https://example.org/data.ttl")
"""

import io
import logging
from typing import Optional, Sequence
from urllib.parse import urlparse

import requests

from . import rio
from .errors import RioIOError, UnsupportedRDFormatError
from .formats.base import RDFFormat
from .formats.matching import accept_header
from .model import Model, Resource
from .plugins.protocols import ParseErrorListener
from .plugins.registry import RDFParserRegistry
from .settings import ParserConfig

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30


def get_accept_header(
    require_context: bool = False, preferred_format: Optional[RDFFormat] = None
) -> str:
    """Accept header listing every MIME type the registered parsers can read."""
    return accept_header(
        RDFParserRegistry.get_instance().keys(), require_context, preferred_format
    )


def _resolve_format(response: requests.Response, url: str) -> RDFFormat:
    content_type = response.headers.get("Content-Type", "")
    if content_type:
        rdf_format = rio.get_parser_format_for_mime_type(content_type)
        if rdf_format is not None:
            return rdf_format
        logger.debug(f"No parser for Content-Type '{content_type}', trying the URL path")
    path = urlparse(url).path
    rdf_format = rio.get_parser_format_for_file_name(path) if path else None
    if rdf_format is None:
        raise UnsupportedRDFormatError(
            f"Cannot determine the RDF format of {url} (Content-Type: '{content_type}')"
        )
    return rdf_format


def parse_url(
    url: str,
    base_uri: Optional[str] = None,
    data_format: Optional[RDFFormat] = None,
    settings: Optional[ParserConfig] = None,
    error_listener: Optional[ParseErrorListener] = None,
    contexts: Sequence[Optional[Resource]] = (),
    require_context: bool = False,
    session: Optional[requests.Session] = None,
    timeout: int = DEFAULT_TIMEOUT,
) -> Model:
    """
    Fetch a document and parse it.

    Args:
        url: Document URL.
        base_uri: Base IRI; defaults to the final URL after redirects.
        data_format: Format to parse with, skipping detection. Also used as
            the preferred format in the Accept header.
        settings: Parser settings.
        error_listener: Receives parse warnings and errors.
        contexts: Contexts to add every statement to.
        require_context: Prefer formats that can carry contexts.
        session: requests session to use; a plain requests.get otherwise.
        timeout: Request timeout in seconds.

    Raises:
        RioIOError: On connection failures, timeouts and HTTP error statuses.
        UnsupportedRDFormatError: If the response format cannot be determined
            or has no parser.
        RDFParseError: If the document is malformed.
    """
    headers = {"Accept": get_accept_header(require_context, data_format)}
    http = session or requests
    logger.info(f"Fetching {url}")
    try:
        response = http.get(url, headers=headers, timeout=timeout)
        response.raise_for_status()
    except requests.exceptions.Timeout as e:
        logger.error(f"Request to {url} timed out after {timeout}s")
        raise RioIOError(f"Request to {url} timed out after {timeout} seconds") from e
    except requests.exceptions.ConnectionError as e:
        logger.error(f"Connection to {url} failed: {e}")
        raise RioIOError(f"Connection to {url} failed: {e}") from e
    except requests.exceptions.RequestException as e:
        logger.error(f"Request to {url} failed: {e}")
        raise RioIOError(f"Request to {url} failed: {e}") from e

    final_url = response.url or url
    rdf_format = data_format or _resolve_format(response, final_url)
    logger.debug(f"Parsing {final_url} as {rdf_format.name}")
    return rio.parse(
        io.BytesIO(response.content),
        base_uri if base_uri is not None else final_url,
        rdf_format,
        settings=settings,
        error_listener=error_listener,
        contexts=contexts,
    )


__all__ = ["get_accept_header", "parse_url", "DEFAULT_TIMEOUT"]
