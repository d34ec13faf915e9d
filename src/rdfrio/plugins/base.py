"""
Base Parser and Writer Classes - Abstract bases for format plugins.

This module defines the AbstractRDFParser and AbstractRDFWriter base classes
that format plugins build on. They carry the plumbing every format needs
(configuration, error reporting, blank node bookkeeping, event ordering) so
that a plugin only implements its grammar.

Usage:
    from rdfrio.plugins.base import AbstractRDFParser

    class MyFormatParser(AbstractRDFParser):
        @property
        def rdf_format(self) -> RDFFormat:
            return MY_FORMAT

        def _parse(self, reader: TextIO) -> None:
            self.rdf_handler.start_rdf()
            for line_no, line in enumerate(reader, start=1):
                ...
            self.rdf_handler.end_rdf()
"""

import io
import logging
import re
from abc import ABC, abstractmethod
from contextlib import contextmanager
from enum import Enum
from typing import IO, Any, Dict, Iterator, NoReturn, Optional, Set, TextIO, Union

from rdflib import BNode, Literal, URIRef

from ..errors import RDFHandlerError, RDFParseError
from ..formats.base import RDFFormat
from ..model import Resource, Statement, ValueFactory, default_value_factory
from ..settings import (
    BasicParserSettings,
    ParserConfig,
    RioSetting,
    WriterConfig,
)
from .protocols import ParseErrorListener, ParseLocationListener, RDFHandler

logger = logging.getLogger(__name__)

LANGUAGE_TAG = re.compile(r"^[a-zA-Z]+(?:-[a-zA-Z0-9]+)*$")


def _input_encoding(rdf_format: RDFFormat) -> str:
    # ASCII formats are read as UTF-8, which accepts every ASCII document
    charset = rdf_format.charset or "UTF-8"
    if charset.upper() in ("US-ASCII", "ASCII"):
        return "UTF-8"
    return charset


class AbstractRDFParser(ABC):
    """
    Abstract base class for RDF parsers.

    Subclasses provide rdf_format and _parse(); parse() takes care of
    decoding binary input with the format's charset, resetting per-document
    state and turning decoding failures into RDFParseError.

    Attributes:
        value_factory: Creates the terms and statements reported.
        rdf_handler: Receives the parsed events; required before parse().
        parse_error_listener: Receives warnings and errors; when None they
            are logged.
        parse_location_listener: Receives position updates.
    """

    def __init__(self, value_factory: Optional[ValueFactory] = None) -> None:
        self.value_factory: ValueFactory = value_factory or default_value_factory()
        self.rdf_handler: Optional[RDFHandler] = None
        self.parse_error_listener: Optional[ParseErrorListener] = None
        self.parse_location_listener: Optional[ParseLocationListener] = None
        self._parser_config = ParserConfig()
        self._base_uri = ""
        self._bnode_ids: Dict[str, BNode] = {}
        self._namespaces: Dict[str, str] = {}

    # =========================================================================
    # Required
    # =========================================================================

    @property
    @abstractmethod
    def rdf_format(self) -> RDFFormat:
        """The format this parser reads."""

    @abstractmethod
    def _parse(self, reader: TextIO) -> None:
        """Parse a whole document from a text stream, reporting to rdf_handler."""

    # =========================================================================
    # Configuration
    # =========================================================================

    @property
    def parser_config(self) -> ParserConfig:
        return self._parser_config

    @parser_config.setter
    def parser_config(self, config: ParserConfig) -> None:
        """
        Install a settings bag.

        Raises:
            RioConfigurationError: If a supported setting holds an invalid value.
        """
        for setting in config.settings():
            if setting in self.get_supported_settings():
                setting.validate(config.get(setting))
        self._parser_config = config

    def get_supported_settings(self) -> Set[RioSetting]:
        return {
            BasicParserSettings.PRESERVE_BNODE_IDS,
            BasicParserSettings.VERIFY_LANGUAGE_TAGS,
        }

    @property
    def base_uri(self) -> str:
        return self._base_uri

    def set_base_uri(self, base_uri: Optional[str]) -> None:
        self._base_uri = base_uri or ""

    # =========================================================================
    # Parsing
    # =========================================================================

    def parse(self, source: IO[Any], base_uri: str = "") -> None:
        """
        Parse a binary or text stream.

        Args:
            source: File-like object. Binary streams are decoded with the
                format's charset (UTF-8 when it has none).
            base_uri: Base IRI for resolving relative IRIs.

        Raises:
            RDFParseError: If the input is malformed.
            RDFHandlerError: If the handler rejects an event.
            OSError: If reading fails.
        """
        if self.rdf_handler is None:
            raise ValueError("No RDF handler set on parser")
        self._clear()
        self.set_base_uri(base_uri)
        with self._text_input(source) as reader:
            try:
                self._parse(reader)
            except UnicodeDecodeError as e:
                self.report_fatal_error(f"Input is not valid {reader.encoding}: {e}")
            finally:
                self._clear()

    @contextmanager
    def _text_input(self, source: IO[Any]) -> Iterator[TextIO]:
        sample = source.read(0)
        if isinstance(sample, str):
            yield source  # type: ignore[misc]
            return
        wrapper = io.TextIOWrapper(source, encoding=_input_encoding(self.rdf_format))
        try:
            yield wrapper
        finally:
            # Leave the caller's stream open
            try:
                wrapper.detach()
            except ValueError:
                pass

    def _clear(self) -> None:
        self._bnode_ids.clear()
        self._namespaces.clear()

    # =========================================================================
    # Value creation
    # =========================================================================

    def resolve_uri(self, value: str) -> URIRef:
        """Create an IRI, resolving it against the base IRI when one is set."""
        return self.value_factory.create_uri(value, base=self._base_uri or None)

    def create_bnode(self, node_id: Optional[str] = None) -> BNode:
        """
        Create a blank node for a document-local label.

        The same label maps to the same node within one document. Labels are
        kept as-is only when PRESERVE_BNODE_IDS is enabled.
        """
        if node_id is None:
            return self.value_factory.create_bnode()
        if self._parser_config.get(BasicParserSettings.PRESERVE_BNODE_IDS):
            return self.value_factory.create_bnode(node_id)
        bnode = self._bnode_ids.get(node_id)
        if bnode is None:
            bnode = self.value_factory.create_bnode()
            self._bnode_ids[node_id] = bnode
        return bnode

    def create_literal(
        self,
        label: str,
        language: Optional[str] = None,
        datatype: Optional[URIRef] = None,
        line: Optional[int] = None,
        column: Optional[int] = None,
    ) -> Literal:
        """Create a literal; malformed language tags are reported and dropped."""
        if language and not LANGUAGE_TAG.match(language):
            msg = f"'{language}' is not a valid language tag"
            if self._parser_config.get(BasicParserSettings.VERIFY_LANGUAGE_TAGS):
                self.report_error(msg, BasicParserSettings.VERIFY_LANGUAGE_TAGS, line, column)
            else:
                self.report_warning(msg, line, column)
            language = None
        return self.value_factory.create_literal(label, datatype=datatype, language=language)

    def create_statement(
        self,
        subject: Resource,
        predicate: URIRef,
        obj: Union[Resource, Literal],
        context: Optional[Resource] = None,
    ) -> Statement:
        return self.value_factory.create_statement(subject, predicate, obj, context)

    def set_namespace(self, prefix: str, uri: str) -> None:
        self._namespaces[prefix] = uri

    def get_namespace(self, prefix: str) -> Optional[str]:
        return self._namespaces.get(prefix)

    # =========================================================================
    # Reporting
    # =========================================================================

    def report_location(self, line: int, column: int) -> None:
        if self.parse_location_listener is not None:
            self.parse_location_listener.parse_location_update(line, column)

    def report_warning(
        self, msg: str, line: Optional[int] = None, column: Optional[int] = None
    ) -> None:
        if self.parse_error_listener is not None:
            self.parse_error_listener.warning(msg, line, column)
        else:
            logger.warning(f"{msg} (line {line}, column {column})")

    def report_error(
        self,
        msg: str,
        setting: RioSetting[bool],
        line: Optional[int] = None,
        column: Optional[int] = None,
    ) -> None:
        """
        Report a recoverable error.

        The error is fatal while the setting is enabled and not listed as
        non-fatal in the parser config; otherwise it is passed to the error
        listener and the caller is expected to recover.

        Raises:
            RDFParseError: If the error is fatal.
        """
        if self._parser_config.get(setting) and not self._parser_config.is_non_fatal(setting):
            self.report_fatal_error(msg, line, column)
        if self.parse_error_listener is not None:
            self.parse_error_listener.error(msg, line, column)
        else:
            logger.error(f"{msg} (line {line}, column {column})")

    def report_fatal_error(
        self, msg: str, line: Optional[int] = None, column: Optional[int] = None
    ) -> NoReturn:
        if self.parse_error_listener is not None:
            self.parse_error_listener.fatal_error(msg, line, column)
        raise RDFParseError(msg, line, column)


class WriterState(Enum):
    """Lifecycle of a writer."""
    IDLE = "idle"
    STARTED = "started"
    WRITING = "writing"
    ENDED = "ended"


class AbstractRDFWriter(ABC):
    """
    Abstract base class for RDF writers.

    Enforces the handler event order and rejects out-of-order calls with
    RDFHandlerError:
    - start_rdf() may be called once
    - no event before start_rdf() or after end_rdf()
    - no namespace after the first statement in formats that carry namespaces

    Output may be a text or binary stream; binary output is encoded with the
    format's charset (UTF-8 when it has none). The stream is never closed.
    """

    def __init__(self, out: IO[Any]) -> None:
        self._output = out
        self._binary = _is_binary_output(out)
        self._encoding = self.rdf_format.charset or "UTF-8"
        self._state = WriterState.IDLE
        self._writer_config = WriterConfig()

    @property
    @abstractmethod
    def rdf_format(self) -> RDFFormat:
        """The format this writer produces."""

    @abstractmethod
    def _write_statement(self, statement: Statement) -> None:
        """Encode one statement."""

    def _write_start(self) -> None:
        pass

    def _write_namespace(self, prefix: str, uri: str) -> None:
        pass

    def _write_comment(self, comment: str) -> None:
        pass

    def _write_end(self) -> None:
        pass

    @property
    def writer_config(self) -> WriterConfig:
        return self._writer_config

    @writer_config.setter
    def writer_config(self, config: WriterConfig) -> None:
        """
        Install a settings bag.

        Raises:
            RioConfigurationError: If a supported setting holds an invalid value.
        """
        for setting in config.settings():
            if setting in self.get_supported_settings():
                setting.validate(config.get(setting))
        self._writer_config = config

    def get_supported_settings(self) -> Set[RioSetting]:
        return set()

    @property
    def state(self) -> WriterState:
        return self._state

    # =========================================================================
    # RDFHandler events
    # =========================================================================

    def start_rdf(self) -> None:
        if self._state is not WriterState.IDLE:
            raise RDFHandlerError("Document writing has already started")
        self._state = WriterState.STARTED
        self._write_start()

    def handle_namespace(self, prefix: str, uri: str) -> None:
        self._check_writing_started()
        if self._state is WriterState.WRITING and self.rdf_format.supports_namespaces:
            raise RDFHandlerError(
                f"Namespace declaration for prefix '{prefix}' after the first statement "
                f"cannot be written in {self.rdf_format.name}"
            )
        self._write_namespace(prefix, uri)

    def handle_statement(self, statement: Statement) -> None:
        self._check_writing_started()
        self._state = WriterState.WRITING
        self._write_statement(statement)

    def handle_comment(self, comment: str) -> None:
        self._check_writing_started()
        self._write_comment(comment)

    def end_rdf(self) -> None:
        self._check_writing_started()
        try:
            self._write_end()
            self._output.flush()
        finally:
            self._state = WriterState.ENDED

    def _check_writing_started(self) -> None:
        if self._state is WriterState.IDLE:
            raise RDFHandlerError("Document writing has not yet started")
        if self._state is WriterState.ENDED:
            raise RDFHandlerError("Document writing has already ended")

    # =========================================================================
    # Output
    # =========================================================================

    def _emit(self, text: str) -> None:
        if self._binary:
            self._output.write(text.encode(self._encoding))
        else:
            self._output.write(text)


def _is_binary_output(out: IO[Any]) -> bool:
    if isinstance(out, io.TextIOBase):
        return False
    if isinstance(out, (io.RawIOBase, io.BufferedIOBase)):
        return True
    return "b" in getattr(out, "mode", "")
