"""
Built-in format plugins.

The registries bootstrap from the tables below. Native plugins cover
N-Triples, N-Quads and YARS; the remaining formats are served by rdflib.
"""

from typing import List

from ...formats.builtin import JSONLD, N3, NQUADS, NTRIPLES, RDFXML, TRIG, TRIX, TURTLE
from ..protocols import RDFParserFactory, RDFWriterFactory
from .ntriples import (
    NQuadsParserFactory,
    NQuadsWriterFactory,
    NTriplesParserFactory,
    NTriplesWriterFactory,
)
from .rdflib_adapter import RDFLibParserFactory, RDFLibWriterFactory
from .yars import YARSParserFactory, YARSWriterFactory

# rdflib plugin names, keyed by format
RDFLIB_FORMATS = {
    RDFXML: "xml",
    TURTLE: "turtle",
    N3: "n3",
    TRIX: "trix",
    TRIG: "trig",
    JSONLD: "json-ld",
}


def builtin_parser_factories() -> List[RDFParserFactory]:
    """Parser factories in registration order."""
    return [
        RDFLibParserFactory(RDFXML, RDFLIB_FORMATS[RDFXML]),
        NTriplesParserFactory(),
        RDFLibParserFactory(TURTLE, RDFLIB_FORMATS[TURTLE]),
        RDFLibParserFactory(N3, RDFLIB_FORMATS[N3]),
        RDFLibParserFactory(TRIX, RDFLIB_FORMATS[TRIX]),
        RDFLibParserFactory(TRIG, RDFLIB_FORMATS[TRIG]),
        NQuadsParserFactory(),
        RDFLibParserFactory(JSONLD, RDFLIB_FORMATS[JSONLD]),
        YARSParserFactory(),
    ]


def builtin_writer_factories() -> List[RDFWriterFactory]:
    """Writer factories in registration order."""
    return [
        RDFLibWriterFactory(RDFXML, RDFLIB_FORMATS[RDFXML]),
        NTriplesWriterFactory(),
        RDFLibWriterFactory(TURTLE, RDFLIB_FORMATS[TURTLE]),
        RDFLibWriterFactory(N3, RDFLIB_FORMATS[N3]),
        RDFLibWriterFactory(TRIX, RDFLIB_FORMATS[TRIX]),
        RDFLibWriterFactory(TRIG, RDFLIB_FORMATS[TRIG]),
        NQuadsWriterFactory(),
        RDFLibWriterFactory(JSONLD, RDFLIB_FORMATS[JSONLD]),
        YARSWriterFactory(),
    ]


__all__ = [
    "RDFLIB_FORMATS",
    "builtin_parser_factories",
    "builtin_writer_factories",
]
