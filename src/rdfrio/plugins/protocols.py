"""
Protocol Definitions for Parser and Writer Plugins.

This module defines the interfaces a serialization plugs into. Using
protocols allows duck typing while still documenting the contract.

Protocols:
    RDFHandler: Receives the start/namespace/statement/end event stream
    ParseErrorListener: Receives warnings and errors found while parsing
    ParseLocationListener: Receives the parser's position in the input
    RDFParser: Reads one serialization and emits handler events
    RDFWriter: Handler that encodes the events it receives
    RDFParserFactory: Creates fresh parsers for one format
    RDFWriterFactory: Creates fresh writers for one format
"""

from typing import IO, Any, Collection, Optional, Protocol, runtime_checkable

from ..formats.base import RDFFormat
from ..model import Statement, ValueFactory
from ..settings import ParserConfig, RioSetting, WriterConfig


@runtime_checkable
class RDFHandler(Protocol):
    """
    Protocol for consumers of RDF events.

    Events arrive in this order: start_rdf, any number of namespace,
    statement and comment events, end_rdf. A handler raises RDFHandlerError
    to reject an event; the producer must then stop.
    """

    def start_rdf(self) -> None:
        ...

    def end_rdf(self) -> None:
        ...

    def handle_namespace(self, prefix: str, uri: str) -> None:
        ...

    def handle_statement(self, statement: Statement) -> None:
        ...

    def handle_comment(self, comment: str) -> None:
        ...


@runtime_checkable
class ParseErrorListener(Protocol):
    """Protocol for receiving parse problems, with 1-based line and column when known."""

    def warning(self, msg: str, line: Optional[int] = None, column: Optional[int] = None) -> None:
        ...

    def error(self, msg: str, line: Optional[int] = None, column: Optional[int] = None) -> None:
        ...

    def fatal_error(self, msg: str, line: Optional[int] = None, column: Optional[int] = None) -> None:
        ...


@runtime_checkable
class ParseLocationListener(Protocol):
    """Protocol for tracking how far a parser got."""

    def parse_location_update(self, line: int, column: int) -> None:
        ...


@runtime_checkable
class RDFParser(Protocol):
    """
    Protocol for RDF parsers.

    A parser is configured through its attributes, then parse() reads the
    whole input and reports statements to rdf_handler.

    Example implementation:
        class MyParser(AbstractRDFParser):
            @property
            def rdf_format(self) -> RDFFormat:
                return MY_FORMAT

            def _parse(self, reader):
                self.rdf_handler.start_rdf()
                ...
                self.rdf_handler.end_rdf()
    """

    value_factory: ValueFactory
    rdf_handler: Optional[RDFHandler]
    parse_error_listener: Optional[ParseErrorListener]
    parse_location_listener: Optional[ParseLocationListener]
    parser_config: ParserConfig

    @property
    def rdf_format(self) -> RDFFormat:
        ...

    def get_supported_settings(self) -> Collection[RioSetting]:
        ...

    def parse(self, source: IO[Any], base_uri: str = "") -> None:
        """
        Parse a binary or text stream.

        Raises:
            RDFParseError: If the input is malformed.
            RDFHandlerError: If the handler rejects an event.
            OSError: If reading the stream fails.
        """
        ...


@runtime_checkable
class RDFWriter(RDFHandler, Protocol):
    """Protocol for RDF writers: handlers that encode events into an output stream."""

    writer_config: WriterConfig

    @property
    def rdf_format(self) -> RDFFormat:
        ...

    def get_supported_settings(self) -> Collection[RioSetting]:
        ...


@runtime_checkable
class RDFParserFactory(Protocol):
    """Protocol for creating parsers of one format."""

    @property
    def rdf_format(self) -> RDFFormat:
        ...

    def get_parser(self) -> RDFParser:
        ...


@runtime_checkable
class RDFWriterFactory(Protocol):
    """Protocol for creating writers of one format bound to an output stream."""

    @property
    def rdf_format(self) -> RDFFormat:
        ...

    def get_writer(self, out: IO[Any]) -> RDFWriter:
        ...


def is_parser_factory(obj: Any) -> bool:
    """Check if an object implements RDFParserFactory."""
    return isinstance(obj, RDFParserFactory)


def is_writer_factory(obj: Any) -> bool:
    """Check if an object implements RDFWriterFactory."""
    return isinstance(obj, RDFWriterFactory)


__all__ = [
    "RDFHandler",
    "ParseErrorListener",
    "ParseLocationListener",
    "RDFParser",
    "RDFWriter",
    "RDFParserFactory",
    "RDFWriterFactory",
    "is_parser_factory",
    "is_writer_factory",
]
