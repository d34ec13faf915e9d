"""
RDF Format Descriptors

This package describes RDF serializations and resolves them from hints:
- base: RDFFormat, the immutable descriptor of one serialization
- matching: MIME type / file name matching and content negotiation
- builtin: the catalog of known serializations (Turtle, N-Triples, YARS, ...)

Usage:
    from rdfrio.formats import TURTLE, match_mime_type, rank_for_negotiation

    fmt = match_mime_type("text/turtle; charset=utf-8", [TURTLE])
"""

from .base import RDFFormat
from .builtin import (
    BINARY,
    BUILTIN_FORMATS,
    JSONLD,
    N3,
    NQUADS,
    NTRIPLES,
    RDFA,
    RDFJSON,
    RDFXML,
    TRIG,
    TRIX,
    TURTLE,
    YARS,
    for_file_name,
    for_mime_type,
    value_of,
)
from .matching import (
    accept_header,
    match_file_name,
    match_mime_type,
    rank_for_negotiation,
)

__all__ = [
    # Descriptor
    "RDFFormat",
    # Catalog
    "BUILTIN_FORMATS",
    "RDFXML",
    "NTRIPLES",
    "TURTLE",
    "YARS",
    "N3",
    "TRIX",
    "TRIG",
    "BINARY",
    "NQUADS",
    "JSONLD",
    "RDFJSON",
    "RDFA",
    "value_of",
    "for_mime_type",
    "for_file_name",
    # Matching
    "match_mime_type",
    "match_file_name",
    "rank_for_negotiation",
    "accept_header",
]
