"""
Plugin infrastructure for rdfrio.

This package holds the parser/writer contracts, the abstract bases format
plugins build on and the registries that map formats to factories.

Usage:
    from rdfrio.plugins import RDFParserRegistry

    registry = RDFParserRegistry.get_instance()
    factory = registry.get(registry.format_for_name("Turtle"))
    parser = factory.get_parser()
"""

from .base import AbstractRDFParser, AbstractRDFWriter, WriterState
from .protocols import (
    ParseErrorListener,
    ParseLocationListener,
    RDFHandler,
    RDFParser,
    RDFParserFactory,
    RDFWriter,
    RDFWriterFactory,
    is_parser_factory,
    is_writer_factory,
)
from .registry import FormatRegistry, RDFParserRegistry, RDFWriterRegistry

__all__ = [
    # Base classes
    "AbstractRDFParser",
    "AbstractRDFWriter",
    "WriterState",
    # Protocols
    "RDFHandler",
    "ParseErrorListener",
    "ParseLocationListener",
    "RDFParser",
    "RDFWriter",
    "RDFParserFactory",
    "RDFWriterFactory",
    "is_parser_factory",
    "is_writer_factory",
    # Registries
    "FormatRegistry",
    "RDFParserRegistry",
    "RDFWriterRegistry",
]
