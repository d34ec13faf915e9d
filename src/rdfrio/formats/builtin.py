"""
Built-in RDF format descriptors.

Catalog of the serializations rdfrio knows by name. Not every catalogued
format has a parser or writer: see the registries for what can actually be
read or written.
"""

from typing import Iterable, Optional, Tuple

from .base import (
    NO_CONTEXTS,
    NO_NAMESPACES,
    SUPPORTS_CONTEXTS,
    SUPPORTS_NAMESPACES,
    RDFFormat,
)
from .matching import match_file_name, match_mime_type

RDFXML = RDFFormat(
    "RDF/XML",
    ("application/rdf+xml", "application/xml"),
    ("rdf", "rdfs", "owl", "xml"),
    "UTF-8",
    SUPPORTS_NAMESPACES,
    NO_CONTEXTS,
)

NTRIPLES = RDFFormat(
    "N-Triples", "text/plain", "nt", "US-ASCII", NO_NAMESPACES, NO_CONTEXTS
)

TURTLE = RDFFormat(
    "Turtle",
    ("text/turtle", "application/x-turtle"),
    "ttl",
    "UTF-8",
    SUPPORTS_NAMESPACES,
    NO_CONTEXTS,
)

# Property-graph style notation: (node{key:'value'}) and (s)-[p]->(o)
YARS = RDFFormat(
    "YARS",
    ("text/yarsc", "application/x-yarsc"),
    "yarsc",
    "UTF-8",
    NO_NAMESPACES,
    NO_CONTEXTS,
)

N3 = RDFFormat(
    "N3", ("text/n3", "text/rdf+n3"), "n3", "UTF-8", SUPPORTS_NAMESPACES, NO_CONTEXTS
)

TRIX = RDFFormat(
    "TriX",
    "application/trix",
    ("xml", "trix"),
    "UTF-8",
    SUPPORTS_NAMESPACES,
    SUPPORTS_CONTEXTS,
)

TRIG = RDFFormat(
    "TriG", "application/x-trig", "trig", "UTF-8", SUPPORTS_NAMESPACES, SUPPORTS_CONTEXTS
)

BINARY = RDFFormat(
    "BinaryRDF",
    "application/x-binary-rdf",
    "brf",
    None,
    SUPPORTS_NAMESPACES,
    SUPPORTS_CONTEXTS,
)

NQUADS = RDFFormat(
    "N-Quads", "text/x-nquads", "nq", "US-ASCII", NO_NAMESPACES, SUPPORTS_CONTEXTS
)

JSONLD = RDFFormat(
    "JSON-LD",
    "application/ld+json",
    "jsonld",
    "UTF-8",
    SUPPORTS_NAMESPACES,
    SUPPORTS_CONTEXTS,
)

RDFJSON = RDFFormat(
    "RDF/JSON", "application/rdf+json", "rj", "UTF-8", NO_NAMESPACES, SUPPORTS_CONTEXTS
)

RDFA = RDFFormat(
    "RDFa",
    ("application/xhtml+xml", "application/html", "text/html"),
    ("xhtml", "html"),
    "UTF-8",
    SUPPORTS_NAMESPACES,
    NO_CONTEXTS,
)

BUILTIN_FORMATS: Tuple[RDFFormat, ...] = (
    RDFXML,
    NTRIPLES,
    TURTLE,
    YARS,
    N3,
    TRIX,
    TRIG,
    BINARY,
    NQUADS,
    JSONLD,
    RDFJSON,
    RDFA,
)


def value_of(
    format_name: str, formats: Iterable[RDFFormat] = BUILTIN_FORMATS
) -> Optional[RDFFormat]:
    """Look a format up by name, ignoring case."""
    wanted = format_name.strip().lower()
    for fmt in formats:
        if fmt.name.lower() == wanted:
            return fmt
    return None


def for_mime_type(
    mime_type: str, fallback: Optional[RDFFormat] = None
) -> Optional[RDFFormat]:
    """Match a MIME type against the built-in catalog."""
    return match_mime_type(mime_type, BUILTIN_FORMATS, fallback)


def for_file_name(
    file_name: str, fallback: Optional[RDFFormat] = None
) -> Optional[RDFFormat]:
    """Match a file name against the built-in catalog."""
    return match_file_name(file_name, BUILTIN_FORMATS, fallback)
