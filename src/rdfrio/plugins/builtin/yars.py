"""
YARS Plugin - Native parser and writer for the YARS property-graph notation.

A document is a sequence of directives, nodes and edge chains, optionally
separated by commas, with '#' comments running to the end of the line:

    @prefix ex: <http://example.org/>
    @base <http://example.org/>
    (a{v:'1', label:'A'@en})
    (b{v:'2'})
    (a)-[p]->(b)-[ex:q]->(_:c)

Properties inside braces become statements with literal objects; an edge
becomes a statement between two nodes. Terms are <IRI>, _:label, a prefixed
name or a bare name resolved against the base IRI.
"""

import logging
import re
from typing import List, Optional, Set, TextIO, Tuple

from rdflib import BNode, Literal, URIRef
from rdflib.namespace import XSD

from ...formats.base import RDFFormat
from ...formats.builtin import YARS
from ...model import Resource, Statement, Value
from ...settings import BasicWriterSettings, RioSetting, YARSParserSettings
from ..base import AbstractRDFParser, AbstractRDFWriter
from .ntriples import bnode_label, unescape_string

logger = logging.getLogger(__name__)

_SPACE = re.compile(r"(?:\s|,|#[^\n]*)*")
_IRI = re.compile(r"<([^<>\s]*)>")
_BNODE = re.compile(r"_:([A-Za-z0-9_](?:[\w.\-]*[\w\-])?)")
_NAME = re.compile(r"([A-Za-z_][\w\-]*)?:[\w\-]+(?:\.[\w\-]+)*|[A-Za-z_][\w\-]*(?:\.[\w\-]+)*")
_PREFIX_DECL = re.compile(r"([A-Za-z_][\w\-]*)?:")
_DIRECTIVE = re.compile(r"@([A-Za-z]+)")
_LITERAL = re.compile(r"'((?:[^'\\]|\\.)*)'")
_LANG = re.compile(r"@([A-Za-z0-9_\-]+)")


class YARSParser(AbstractRDFParser):
    """
    Parser for YARS documents.

    Syntax errors are fatal and carry the line and column where they were
    found. '@prefix' and '@base' are case-sensitive unless
    CASE_INSENSITIVE_DIRECTIVES is enabled.
    """

    @property
    def rdf_format(self) -> RDFFormat:
        return YARS

    def get_supported_settings(self) -> Set[RioSetting]:
        supported = super().get_supported_settings()
        supported.add(YARSParserSettings.CASE_INSENSITIVE_DIRECTIVES)
        return supported

    def _parse(self, reader: TextIO) -> None:
        self._text = reader.read()
        self._pos = 0
        self.rdf_handler.start_rdf()
        self._skip()
        while self._pos < len(self._text):
            self.report_location(*self._location())
            ch = self._text[self._pos]
            if ch == "@":
                self._parse_directive()
            elif ch == "(":
                self._parse_chain()
            else:
                self._fail(f"Unexpected character '{ch}'")
            self._skip()
        self.rdf_handler.end_rdf()

    # =========================================================================
    # Cursor helpers
    # =========================================================================

    def _location(self, pos: Optional[int] = None) -> Tuple[int, int]:
        pos = self._pos if pos is None else pos
        line = self._text.count("\n", 0, pos) + 1
        column = pos - self._text.rfind("\n", 0, pos)
        return line, column

    def _fail(self, msg: str, pos: Optional[int] = None):
        line, column = self._location(pos)
        self.report_fatal_error(msg, line, column)

    def _skip(self) -> None:
        self._pos = _SPACE.match(self._text, self._pos).end()

    def _skip_blank(self) -> None:
        while self._pos < len(self._text) and self._text[self._pos] in " \t\r\n":
            self._pos += 1

    def _expect(self, token: str) -> None:
        self._skip_blank()
        if not self._text.startswith(token, self._pos):
            self._fail(f"Expected '{token}'")
        self._pos += len(token)

    def _peek(self, token: str) -> bool:
        self._skip_blank()
        return self._text.startswith(token, self._pos)

    # =========================================================================
    # Grammar
    # =========================================================================

    def _parse_directive(self) -> None:
        start = self._pos
        m = _DIRECTIVE.match(self._text, self._pos)
        if m is None:
            self._fail("Expected a directive after '@'")
        word = m.group(1)
        if self.parser_config.get(YARSParserSettings.CASE_INSENSITIVE_DIRECTIVES):
            word = word.lower()
        self._pos = m.end()

        if word == "prefix":
            self._skip_blank()
            decl = _PREFIX_DECL.match(self._text, self._pos)
            if decl is None:
                self._fail("Expected a prefix declaration such as 'ex:'")
            prefix = decl.group(1) or ""
            self._pos = decl.end()
            iri = self._parse_iri_ref()
            self.set_namespace(prefix, str(iri))
            self.rdf_handler.handle_namespace(prefix, str(iri))
        elif word == "base":
            iri = self._parse_iri_ref()
            self.set_base_uri(str(iri))
            logger.debug(f"Base IRI set to {iri}")
        elif word.lower() in ("prefix", "base"):
            self._fail(
                f"Unknown directive '@{m.group(1)}'; enable "
                f"{YARSParserSettings.CASE_INSENSITIVE_DIRECTIVES.key} to accept it",
                start,
            )
        else:
            self._fail(f"Unknown directive '@{m.group(1)}'", start)

        if self._peek("."):
            self._pos += 1

    def _parse_iri_ref(self) -> URIRef:
        self._skip_blank()
        m = _IRI.match(self._text, self._pos)
        if m is None:
            self._fail("Expected an IRI in angle brackets")
        self._pos = m.end()
        try:
            value = unescape_string(m.group(1))
        except ValueError as e:
            self._fail(str(e), m.start())
        return self.resolve_uri(value)

    def _parse_chain(self) -> None:
        subject = self._parse_node()
        while self._peek("-"):
            self._expect("-[")
            predicate = self._parse_term()
            if isinstance(predicate, BNode):
                self._fail("A blank node cannot be used as a predicate")
            self._expect("]->")
            self._skip_blank()
            if not self._text.startswith("(", self._pos):
                self._fail("Expected '(' to start the edge target")
            obj = self._parse_node()
            self.rdf_handler.handle_statement(self.create_statement(subject, predicate, obj))
            subject = obj

    def _parse_node(self) -> Resource:
        self._expect("(")
        subject = self._parse_term()
        if self._peek("{"):
            self._pos += 1
            self._parse_properties(subject)
        self._expect(")")
        return subject

    def _parse_properties(self, subject: Resource) -> None:
        while True:
            self._skip()
            if self._text.startswith("}", self._pos):
                self._pos += 1
                return
            key = self._parse_term()
            if isinstance(key, BNode):
                self._fail("A blank node cannot be used as a property key")
            self._expect(":")
            self._skip_blank()
            value = self._parse_literal()
            self.rdf_handler.handle_statement(self.create_statement(subject, key, value))

    def _parse_term(self) -> Resource:
        self._skip_blank()
        text, pos = self._text, self._pos
        if text.startswith("<", pos):
            return self._parse_iri_ref()
        if text.startswith("_:", pos):
            m = _BNODE.match(text, pos)
            if m is None:
                self._fail("Invalid blank node label")
            self._pos = m.end()
            return self.create_bnode(m.group(1))
        m = _NAME.match(text, pos)
        if m is None or not m.group(0):
            self._fail("Expected an IRI, blank node or name")
        self._pos = m.end()
        name = m.group(0)
        if ":" in name:
            prefix, local = name.split(":", 1)
            namespace = self.get_namespace(prefix)
            if namespace is None:
                self._fail(f"Undeclared prefix '{prefix}'", pos)
            return self.value_factory.create_uri(namespace + local)
        return self.resolve_uri(name)

    def _parse_literal(self) -> Literal:
        start = self._pos
        m = _LITERAL.match(self._text, self._pos)
        if m is None:
            self._fail("Expected a quoted literal")
        self._pos = m.end()
        try:
            label = unescape_string(m.group(1))
        except ValueError as e:
            self._fail(str(e), start)
        line, column = self._location(start)
        if self._text.startswith("@", self._pos):
            lang = _LANG.match(self._text, self._pos)
            if lang is None:
                self._fail("Missing language tag after '@'")
            self._pos = lang.end()
            return self.create_literal(label, language=lang.group(1), line=line, column=column)
        if self._text.startswith("^^", self._pos):
            self._pos += 2
            datatype = self._parse_term()
            if isinstance(datatype, BNode):
                self._fail("A blank node cannot be used as a datatype")
            return self.create_literal(label, datatype=datatype)
        return self.create_literal(label)


# =============================================================================
# Writer
# =============================================================================

def _escape_literal(text: str) -> str:
    return (
        text.replace("\\", "\\\\")
        .replace("'", "\\'")
        .replace("\n", "\\n")
        .replace("\r", "\\r")
        .replace("\t", "\\t")
    )


def encode_term(term: Value) -> str:
    """Render a term in YARS syntax; IRIs are always written in full."""
    if isinstance(term, Literal):
        encoded = f"'{_escape_literal(str(term))}'"
        if term.language:
            return f"{encoded}@{term.language}"
        if term.datatype is not None and term.datatype != XSD.string:
            return f"{encoded}^^<{term.datatype}>"
        return encoded
    if isinstance(term, BNode):
        return f"_:{bnode_label(term)}"
    return f"<{term}>"


class YARSWriter(AbstractRDFWriter):
    """
    Writer for YARS documents.

    Consecutive literal-valued statements about the same subject are merged
    into one node; every other statement becomes an edge. Contexts and
    namespace declarations are not written. With PRETTY_PRINT each item goes
    on its own line, otherwise items are separated by a single space.
    """

    def __init__(self, out) -> None:
        super().__init__(out)
        self._pending_subject: Optional[Resource] = None
        self._pending: List[Tuple[URIRef, Literal]] = []
        self._items_written = 0

    @property
    def rdf_format(self) -> RDFFormat:
        return YARS

    def get_supported_settings(self) -> Set[RioSetting]:
        return {BasicWriterSettings.PRETTY_PRINT}

    def _write_statement(self, statement: Statement) -> None:
        if isinstance(statement.object, Literal):
            if self._pending and self._pending_subject != statement.subject:
                self._flush_node()
            self._pending_subject = statement.subject
            self._pending.append((statement.predicate, statement.object))
            return
        self._flush_node()
        self._write_item(
            f"({encode_term(statement.subject)})"
            f"-[{encode_term(statement.predicate)}]->"
            f"({encode_term(statement.object)})"
        )

    def _write_comment(self, comment: str) -> None:
        self._flush_node()
        if self._items_written and not self._pretty:
            self._emit("\n")
        for line in comment.splitlines() or [""]:
            self._emit(f"# {line}\n")
        self._items_written = 0

    def _write_end(self) -> None:
        self._flush_node()
        if self._items_written and not self._pretty:
            self._emit("\n")

    @property
    def _pretty(self) -> bool:
        return bool(self.writer_config.get(BasicWriterSettings.PRETTY_PRINT))

    def _flush_node(self) -> None:
        if not self._pending:
            return
        properties = ", ".join(f"{encode_term(p)}:{encode_term(o)}" for p, o in self._pending)
        self._write_item(f"({encode_term(self._pending_subject)}{{{properties}}})")
        self._pending = []
        self._pending_subject = None

    def _write_item(self, item: str) -> None:
        if self._pretty:
            self._emit(item + "\n")
        else:
            self._emit((" " if self._items_written else "") + item)
        self._items_written += 1


# =============================================================================
# Factories
# =============================================================================

class YARSParserFactory:
    rdf_format = YARS

    def get_parser(self) -> YARSParser:
        return YARSParser()


class YARSWriterFactory:
    rdf_format = YARS

    def get_writer(self, out) -> YARSWriter:
        return YARSWriter(out)


__all__ = [
    "YARSParser",
    "YARSWriter",
    "YARSParserFactory",
    "YARSWriterFactory",
]
