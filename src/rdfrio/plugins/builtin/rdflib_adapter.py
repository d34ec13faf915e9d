"""
rdflib Plugin - Adapters exposing rdflib's parsers and serializers.

rdflib ships complete grammars for Turtle, RDF/XML, N3, TriG, TriX and
JSON-LD. The adapters here load a document into an rdflib graph and replay
it as handler events, and buffer incoming events into a graph that is
serialized on end_rdf(). Neither side streams.
"""

import json
import logging
from typing import Dict, Optional, Set, TextIO, Union
from xml.sax import SAXParseException

from rdflib import Dataset, Graph
from rdflib.exceptions import ParserError
from rdflib.graph import DATASET_DEFAULT_GRAPH_ID
from rdflib.namespace import NamespaceManager
from rdflib.plugins.parsers.notation3 import BadSyntax

from ...formats.base import RDFFormat
from ...model import Statement
from ...settings import RioSetting
from ..base import AbstractRDFParser, AbstractRDFWriter

logger = logging.getLogger(__name__)


def _new_graph(rdf_format: RDFFormat) -> Union[Graph, Dataset]:
    """Fresh graph with no prebound prefixes; a Dataset when the format has contexts."""
    if rdf_format.supports_contexts:
        dataset = Dataset()
        dataset.namespace_manager = NamespaceManager(dataset, bind_namespaces="none")
        return dataset
    return Graph(bind_namespaces="none")


def _error_location(error: Exception) -> Optional[int]:
    if isinstance(error, BadSyntax):
        return error.lines + 1
    if isinstance(error, SAXParseException):
        return error.getLineNumber()
    if isinstance(error, json.JSONDecodeError):
        return error.lineno
    return None


class RDFLibParser(AbstractRDFParser):
    """
    Parser delegating to an rdflib parser plugin.

    The whole document is read before any event is reported. Namespace
    declarations are reported first, then every statement.
    """

    def __init__(self, rdf_format: RDFFormat, rdflib_format: str, value_factory=None) -> None:
        super().__init__(value_factory)
        self._rdf_format = rdf_format
        self.rdflib_format = rdflib_format

    @property
    def rdf_format(self) -> RDFFormat:
        return self._rdf_format

    def get_supported_settings(self) -> Set[RioSetting]:
        # rdflib's parsers have no equivalent of the basic settings
        return set()

    def _parse(self, reader: TextIO) -> None:
        data = reader.read()
        graph = _new_graph(self._rdf_format)
        try:
            graph.parse(
                data=data,
                format=self.rdflib_format,
                publicID=self.base_uri or None,
            )
        except (BadSyntax, SAXParseException, ParserError, ValueError) as e:
            line = _error_location(e)
            logger.debug(f"rdflib failed to parse {self._rdf_format.name}: {e}")
            self.report_fatal_error(f"Invalid {self._rdf_format.name} document: {e}", line)

        handler = self.rdf_handler
        handler.start_rdf()
        for prefix, namespace in graph.namespaces():
            handler.handle_namespace(prefix, str(namespace))
        if isinstance(graph, Dataset):
            for s, p, o, context in graph.quads((None, None, None, None)):
                if context == DATASET_DEFAULT_GRAPH_ID:
                    context = None
                handler.handle_statement(self.create_statement(s, p, o, context))
        else:
            for s, p, o in graph:
                handler.handle_statement(self.create_statement(s, p, o))
        handler.end_rdf()


class RDFLibWriter(AbstractRDFWriter):
    """
    Writer delegating to an rdflib serializer plugin.

    Statements are collected in memory and serialized when end_rdf() is
    called. Contexts are kept for formats that carry them.
    """

    def __init__(self, out, rdf_format: RDFFormat, rdflib_format: str) -> None:
        self._rdf_format = rdf_format
        super().__init__(out)
        self.rdflib_format = rdflib_format
        self._graph = _new_graph(rdf_format)
        self._namespaces: Dict[str, str] = {}

    @property
    def rdf_format(self) -> RDFFormat:
        return self._rdf_format

    def _write_namespace(self, prefix: str, uri: str) -> None:
        self._namespaces[prefix] = uri

    def _write_statement(self, statement: Statement) -> None:
        if isinstance(self._graph, Dataset) and statement.context is not None:
            self._graph.add((statement.subject, statement.predicate, statement.object, statement.context))
        else:
            self._graph.add(statement.triple)

    def _write_end(self) -> None:
        for prefix, uri in self._namespaces.items():
            self._graph.bind(prefix, uri, override=True, replace=True)
        text = self._graph.serialize(format=self.rdflib_format)
        self._emit(text)


class RDFLibParserFactory:
    """Creates RDFLibParser instances for one format."""

    def __init__(self, rdf_format: RDFFormat, rdflib_format: str) -> None:
        self.rdf_format = rdf_format
        self.rdflib_format = rdflib_format

    def get_parser(self) -> RDFLibParser:
        return RDFLibParser(self.rdf_format, self.rdflib_format)

    def __repr__(self) -> str:
        return f"RDFLibParserFactory({self.rdf_format.name!r}, {self.rdflib_format!r})"


class RDFLibWriterFactory:
    """Creates RDFLibWriter instances for one format."""

    def __init__(self, rdf_format: RDFFormat, rdflib_format: str) -> None:
        self.rdf_format = rdf_format
        self.rdflib_format = rdflib_format

    def get_writer(self, out) -> RDFLibWriter:
        return RDFLibWriter(out, self.rdf_format, self.rdflib_format)

    def __repr__(self) -> str:
        return f"RDFLibWriterFactory({self.rdf_format.name!r}, {self.rdflib_format!r})"


__all__ = [
    "RDFLibParser",
    "RDFLibWriter",
    "RDFLibParserFactory",
    "RDFLibWriterFactory",
]
