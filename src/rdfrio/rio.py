"""
Rio facade - one-call parsing and writing.

Resolves formats through the parser and writer registries and runs the
streaming pipeline: input -> parser -> handler events -> Model, and
statements -> writer -> output.

Usage:
    from rdfrio import rio
    from rdfrio.formats import TURTLE, NTRIPLES

    with open("data.ttl", "rb") as f:
        model = rio.parse(f, "http://example.org/", TURTLE)

    with open("data.nt", "wb") as out:
        rio.write(model, out, NTRIPLES)
"""

import logging
from typing import IO, Any, Iterable, Optional, Sequence, Set

from .errors import RDFHandlerError, RioIOError, UnsupportedRDFormatError
from .formats.base import RDFFormat
from .handlers import ContextStatementCollector, ParseErrorLogger
from .model import Model, Resource, Statement, ValueFactory
from .plugins.protocols import ParseErrorListener, RDFHandler, RDFParser, RDFWriter
from .plugins.registry import RDFParserRegistry, RDFWriterRegistry
from .settings import ParserConfig, RioConfig, RioSetting, WriterConfig

logger = logging.getLogger(__name__)


# =============================================================================
# Format lookup
# =============================================================================

def get_parser_format_for_mime_type(
    mime_type: str, fallback: Optional[RDFFormat] = None
) -> Optional[RDFFormat]:
    """Find a parseable format for a MIME type, or fallback."""
    return RDFParserRegistry.get_instance().get_file_format_for_mime_type(mime_type, fallback)


def get_parser_format_for_file_name(
    file_name: str, fallback: Optional[RDFFormat] = None
) -> Optional[RDFFormat]:
    """Find a parseable format for a file name, or fallback."""
    return RDFParserRegistry.get_instance().get_file_format_for_file_name(file_name, fallback)


def get_writer_format_for_mime_type(
    mime_type: str, fallback: Optional[RDFFormat] = None
) -> Optional[RDFFormat]:
    """Find a writable format for a MIME type, or fallback."""
    return RDFWriterRegistry.get_instance().get_file_format_for_mime_type(mime_type, fallback)


def get_writer_format_for_file_name(
    file_name: str, fallback: Optional[RDFFormat] = None
) -> Optional[RDFFormat]:
    """Find a writable format for a file name, or fallback."""
    return RDFWriterRegistry.get_instance().get_file_format_for_file_name(file_name, fallback)


# =============================================================================
# Parser / writer creation
# =============================================================================

def create_parser(
    data_format: RDFFormat, value_factory: Optional[ValueFactory] = None
) -> RDFParser:
    """
    Create a parser for a format.

    Raises:
        UnsupportedRDFormatError: If no parser is registered for the format.
    """
    factory = RDFParserRegistry.get_instance().get(data_format)
    if factory is None:
        raise UnsupportedRDFormatError(
            f"No parser factory available for RDF format {data_format.name}", data_format
        )
    parser = factory.get_parser()
    if value_factory is not None:
        parser.value_factory = value_factory
    return parser


def create_writer(data_format: RDFFormat, out: IO[Any]) -> RDFWriter:
    """
    Create a writer for a format, bound to an output stream.

    Raises:
        UnsupportedRDFormatError: If no writer is registered for the format.
    """
    factory = RDFWriterRegistry.get_instance().get(data_format)
    if factory is None:
        raise UnsupportedRDFormatError(
            f"No writer factory available for RDF format {data_format.name}", data_format
        )
    return factory.get_writer(out)


def _warn_unsupported(config: RioConfig, supported: Iterable[RioSetting], component: str) -> None:
    supported_set: Set[RioSetting] = set(supported)
    for setting in config.settings():
        if setting not in supported_set:
            logger.warning(f"{component} does not support setting '{setting.key}'; it will be ignored")


# =============================================================================
# Parsing
# =============================================================================

def parse(
    source: IO[Any],
    base_uri: str,
    data_format: RDFFormat,
    settings: Optional[ParserConfig] = None,
    value_factory: Optional[ValueFactory] = None,
    error_listener: Optional[ParseErrorListener] = None,
    contexts: Sequence[Optional[Resource]] = (),
) -> Model:
    """
    Parse a stream into a new Model.

    Args:
        source: Binary or text stream. It is not closed.
        base_uri: Base IRI for resolving relative IRIs.
        data_format: Format of the input.
        settings: Parser settings; defaults apply when None.
        value_factory: Factory for the parsed terms and statements.
        error_listener: Receives warnings and errors; defaults to logging them.
        contexts: When given, every statement is added once to each of these
            contexts instead of its own.

    Returns:
        Model holding the statements in document order and the namespace
        declarations.

    Raises:
        UnsupportedRDFormatError: If the format has no parser. Nothing is read.
        RDFParseError: If the input is malformed.
        RioIOError: If reading the stream fails.
        RuntimeError: If the statement collector rejects an event.
    """
    parser = create_parser(data_format, value_factory)
    logger.debug(f"Resolved parser for {data_format.name}")

    config = settings if settings is not None else ParserConfig()
    _warn_unsupported(config, parser.get_supported_settings(), f"{data_format.name} parser")
    parser.parser_config = config
    parser.parse_error_listener = error_listener or ParseErrorLogger()

    model = Model()
    parser.rdf_handler = ContextStatementCollector(model, parser.value_factory, contexts)
    logger.debug(f"Parsing {data_format.name} with base IRI '{base_uri}'")
    try:
        parser.parse(source, base_uri)
    except RDFHandlerError as e:
        logger.debug(f"Parse of {data_format.name} failed in the collector: {e}")
        raise RuntimeError(f"Statement collector rejected an event: {e}") from e
    except OSError as e:
        logger.debug(f"Parse of {data_format.name} failed reading input: {e}")
        raise RioIOError(f"Failed to read {data_format.name} input: {e}") from e
    logger.debug(f"Parsed {len(model)} statements from {data_format.name}")
    return model


# =============================================================================
# Writing
# =============================================================================

def write(
    statements: Iterable[Statement],
    output: IO[Any],
    data_format: RDFFormat,
    settings: Optional[WriterConfig] = None,
) -> None:
    """
    Write statements to a stream.

    When statements is a Model its namespaces are written first.

    Raises:
        UnsupportedRDFormatError: If the format has no writer. Nothing is written.
        RDFHandlerError: If the writer rejects an event.
        RioIOError: If writing to the stream fails.
    """
    writer = create_writer(data_format, output)
    config = settings if settings is not None else WriterConfig()
    _warn_unsupported(config, writer.get_supported_settings(), f"{data_format.name} writer")
    writer.writer_config = config
    try:
        write_to_handler(statements, writer)
    except OSError as e:
        logger.debug(f"Write of {data_format.name} failed: {e}")
        raise RioIOError(f"Failed to write {data_format.name} output: {e}") from e


def write_to_handler(statements: Iterable[Statement], handler: RDFHandler) -> None:
    """
    Report statements to a handler as one document.

    Emits start_rdf, the namespaces of a Model in order, each statement in
    order and end_rdf. A failure stops the stream; end_rdf is not called.
    """
    handler.start_rdf()
    if isinstance(statements, Model):
        for namespace in statements.get_namespaces():
            handler.handle_namespace(namespace.prefix, namespace.name)
    count = 0
    for statement in statements:
        handler.handle_statement(statement)
        count += 1
    handler.end_rdf()
    logger.debug(f"Wrote {count} statements")


__all__ = [
    "get_parser_format_for_mime_type",
    "get_parser_format_for_file_name",
    "get_writer_format_for_mime_type",
    "get_writer_format_for_file_name",
    "create_parser",
    "create_writer",
    "parse",
    "write",
    "write_to_handler",
]
