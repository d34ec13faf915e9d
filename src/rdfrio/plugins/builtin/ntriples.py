"""
N-Triples and N-Quads Plugin - Native line-based parser and writer.

One statement per line:
    <http://example.org/s> <http://example.org/p> "o"@en .
    _:b1 <http://example.org/p> <http://example.org/o> <http://example.org/g> .

Lines starting with '#' are comments and reach the handler through
handle_comment(). The graph term is only accepted by the N-Quads parser.
"""

import logging
import re
from typing import Optional, Set, TextIO, Tuple

from rdflib import BNode, Literal, URIRef
from rdflib.namespace import XSD

from ...formats.base import RDFFormat
from ...formats.builtin import NQUADS, NTRIPLES
from ...model import Resource, Statement, Value
from ...settings import BasicParserSettings, NTriplesParserSettings, RioSetting
from ..base import AbstractRDFParser, AbstractRDFWriter

logger = logging.getLogger(__name__)

SCHEME = re.compile(r"^[A-Za-z][A-Za-z0-9+.\-]*:")
_IRI = re.compile(r"<([^<>\s]*)>")
_BNODE = re.compile(r"_:([A-Za-z0-9_](?:[\w.\-]*[\w\-])?)")
_STRING = re.compile(r'"((?:[^"\\]|\\.)*)"')
_LANG = re.compile(r"@([A-Za-z0-9_\-]+)")
_WS = re.compile(r"[ \t]*")
_BNODE_LABEL = re.compile(r"^[A-Za-z0-9_](?:[A-Za-z0-9_.\-]*[A-Za-z0-9_\-])?$")

_ESCAPES = {
    "t": "\t",
    "b": "\b",
    "n": "\n",
    "r": "\r",
    "f": "\f",
    '"': '"',
    "'": "'",
    "\\": "\\",
}


def unescape_string(text: str) -> str:
    """
    Resolve backslash escapes, including \\uXXXX and \\UXXXXXXXX.

    Raises:
        ValueError: On an unknown or truncated escape sequence.
    """
    if "\\" not in text:
        return text
    out = []
    i = 0
    while i < len(text):
        ch = text[i]
        if ch != "\\":
            out.append(ch)
            i += 1
            continue
        if i + 1 >= len(text):
            raise ValueError("Unterminated escape sequence")
        code = text[i + 1]
        if code in _ESCAPES:
            out.append(_ESCAPES[code])
            i += 2
        elif code in ("u", "U"):
            width = 4 if code == "u" else 8
            digits = text[i + 2:i + 2 + width]
            if len(digits) != width or not all(c in "0123456789abcdefABCDEF" for c in digits):
                raise ValueError(f"Invalid escape sequence '\\{code}{digits}'")
            out.append(chr(int(digits, 16)))
            i += 2 + width
        else:
            raise ValueError(f"Invalid escape sequence '\\{code}'")
    return "".join(out)


def _escape_char(ch: str) -> str:
    cp = ord(ch)
    if cp <= 0xFFFF:
        return f"\\u{cp:04X}"
    return f"\\U{cp:08X}"


def escape_string(text: str) -> str:
    """Escape a literal label so that the result is printable ASCII."""
    out = []
    for ch in text:
        if ch == "\\":
            out.append("\\\\")
        elif ch == '"':
            out.append('\\"')
        elif ch == "\n":
            out.append("\\n")
        elif ch == "\r":
            out.append("\\r")
        elif ch == "\t":
            out.append("\\t")
        elif " " <= ch <= "~":
            out.append(ch)
        else:
            out.append(_escape_char(ch))
    return "".join(out)


def escape_iri(iri: str) -> str:
    return "".join(ch if "!" <= ch <= "~" and ch not in '<>"{}|^`\\' else _escape_char(ch) for ch in iri)


def bnode_label(bnode: BNode) -> str:
    label = str(bnode)
    if _BNODE_LABEL.match(label):
        return label
    return "b" + label.encode("utf-8").hex()


def encode_term(term: Value) -> str:
    """Render a term in N-Triples syntax."""
    if isinstance(term, Literal):
        encoded = f'"{escape_string(str(term))}"'
        if term.language:
            return f"{encoded}@{term.language}"
        if term.datatype is not None and term.datatype != XSD.string:
            return f"{encoded}^^<{escape_iri(str(term.datatype))}>"
        return encoded
    if isinstance(term, BNode):
        return f"_:{bnode_label(term)}"
    return f"<{escape_iri(str(term))}>"


class _LineError(Exception):
    """Malformed line; column is 1-based."""

    def __init__(self, message: str, column: int) -> None:
        super().__init__(message)
        self.message = message
        self.column = column


# =============================================================================
# Parser
# =============================================================================

class NTriplesParser(AbstractRDFParser):
    """
    Streaming N-Triples parser.

    Malformed lines are reported under FAIL_ON_INVALID_LINES; when that
    error is not fatal the line is skipped. Relative IRIs are reported under
    VERIFY_RELATIVE_URIS and otherwise resolved against the base IRI.
    """

    allows_context = False

    @property
    def rdf_format(self) -> RDFFormat:
        return NTRIPLES

    def get_supported_settings(self) -> Set[RioSetting]:
        supported = super().get_supported_settings()
        supported.add(BasicParserSettings.VERIFY_RELATIVE_URIS)
        supported.add(NTriplesParserSettings.FAIL_ON_INVALID_LINES)
        return supported

    def _parse(self, reader: TextIO) -> None:
        handler = self.rdf_handler
        handler.start_rdf()
        for line_no, raw in enumerate(reader, start=1):
            self.report_location(line_no, 1)
            line = raw.rstrip("\r\n")
            try:
                self._parse_line(line, line_no)
            except _LineError as e:
                self.report_error(
                    e.message,
                    NTriplesParserSettings.FAIL_ON_INVALID_LINES,
                    line_no,
                    e.column,
                )
                logger.debug(f"Skipped invalid line {line_no}")
        handler.end_rdf()

    def _parse_line(self, line: str, line_no: int) -> None:
        pos = self._skip_ws(line, 0)
        if pos == len(line):
            return
        if line[pos] == "#":
            self.rdf_handler.handle_comment(line[pos + 1:].strip())
            return

        subject, pos = self._parse_resource(line, pos, line_no, "subject")
        pos = self._skip_ws(line, pos)
        predicate, pos = self._parse_iri(line, pos, line_no, "predicate")
        pos = self._skip_ws(line, pos)
        obj, pos = self._parse_object(line, pos, line_no)
        pos = self._skip_ws(line, pos)

        context: Optional[Resource] = None
        if pos < len(line) and line[pos] != ".":
            if not self.allows_context:
                raise _LineError("Expected '.' after the object", pos + 1)
            context, pos = self._parse_resource(line, pos, line_no, "graph")
            pos = self._skip_ws(line, pos)

        if pos >= len(line) or line[pos] != ".":
            raise _LineError("Expected '.' at the end of the statement", pos + 1)
        pos = self._skip_ws(line, pos + 1)
        comment = None
        if pos < len(line):
            if line[pos] != "#":
                raise _LineError("Unexpected content after '.'", pos + 1)
            comment = line[pos + 1:].strip()

        self.rdf_handler.handle_statement(
            self.create_statement(subject, predicate, obj, context)
        )
        if comment:
            self.rdf_handler.handle_comment(comment)

    @staticmethod
    def _skip_ws(line: str, pos: int) -> int:
        return _WS.match(line, pos).end()

    def _parse_resource(self, line: str, pos: int, line_no: int, role: str) -> Tuple[Resource, int]:
        if line.startswith("_:", pos):
            return self._parse_bnode(line, pos)
        if line.startswith("<", pos):
            return self._parse_iri(line, pos, line_no, role)
        raise _LineError(f"Expected an IRI or blank node as {role}", pos + 1)

    def _parse_bnode(self, line: str, pos: int) -> Tuple[BNode, int]:
        m = _BNODE.match(line, pos)
        if m is None:
            raise _LineError("Invalid blank node label", pos + 1)
        return self.create_bnode(m.group(1)), m.end()

    def _parse_iri(self, line: str, pos: int, line_no: int, role: str) -> Tuple[URIRef, int]:
        m = _IRI.match(line, pos)
        if m is None:
            raise _LineError(f"Expected an IRI as {role}", pos + 1)
        try:
            value = unescape_string(m.group(1))
        except ValueError as e:
            raise _LineError(str(e), pos + 1) from e
        return self._create_iri(value, line_no, pos + 1), m.end()

    def _create_iri(self, value: str, line_no: int, column: int) -> URIRef:
        if SCHEME.match(value):
            return self.value_factory.create_uri(value)
        if self.parser_config.get(BasicParserSettings.VERIFY_RELATIVE_URIS):
            self.report_error(
                f"Relative IRI <{value}> is not allowed in {self.rdf_format.name}",
                BasicParserSettings.VERIFY_RELATIVE_URIS,
                line_no,
                column,
            )
        return self.resolve_uri(value)

    def _parse_object(self, line: str, pos: int, line_no: int) -> Tuple[Value, int]:
        if not line.startswith('"', pos):
            return self._parse_resource(line, pos, line_no, "object")
        m = _STRING.match(line, pos)
        if m is None:
            raise _LineError("Unterminated string literal", pos + 1)
        try:
            label = unescape_string(m.group(1))
        except ValueError as e:
            raise _LineError(str(e), pos + 1) from e
        end = m.end()
        if line.startswith("@", end):
            lang = _LANG.match(line, end)
            if lang is None:
                raise _LineError("Missing language tag after '@'", end + 1)
            literal = self.create_literal(label, language=lang.group(1), line=line_no, column=end + 1)
            return literal, lang.end()
        if line.startswith("^^", end):
            datatype, end = self._parse_iri(line, end + 2, line_no, "datatype")
            return self.create_literal(label, datatype=datatype), end
        return self.create_literal(label), end


class NQuadsParser(NTriplesParser):
    """N-Triples parser that accepts an optional graph term before the '.'."""

    allows_context = True

    @property
    def rdf_format(self) -> RDFFormat:
        return NQUADS


# =============================================================================
# Writer
# =============================================================================

class NTriplesWriter(AbstractRDFWriter):
    """Writes one statement per line; contexts are dropped, namespaces ignored."""

    writes_context = False

    @property
    def rdf_format(self) -> RDFFormat:
        return NTRIPLES

    def _write_statement(self, statement: Statement) -> None:
        parts = [
            encode_term(statement.subject),
            encode_term(statement.predicate),
            encode_term(statement.object),
        ]
        if self.writes_context and statement.context is not None:
            parts.append(encode_term(statement.context))
        self._emit(" ".join(parts) + " .\n")

    def _write_comment(self, comment: str) -> None:
        for line in comment.splitlines() or [""]:
            self._emit(f"# {line.encode('ascii', 'backslashreplace').decode('ascii')}\n")


class NQuadsWriter(NTriplesWriter):
    """Writes the statement's context as the fourth term when it has one."""

    writes_context = True

    @property
    def rdf_format(self) -> RDFFormat:
        return NQUADS


# =============================================================================
# Factories
# =============================================================================

class NTriplesParserFactory:
    rdf_format = NTRIPLES

    def get_parser(self) -> NTriplesParser:
        return NTriplesParser()


class NQuadsParserFactory:
    rdf_format = NQUADS

    def get_parser(self) -> NQuadsParser:
        return NQuadsParser()


class NTriplesWriterFactory:
    rdf_format = NTRIPLES

    def get_writer(self, out) -> NTriplesWriter:
        return NTriplesWriter(out)


class NQuadsWriterFactory:
    rdf_format = NQUADS

    def get_writer(self, out) -> NQuadsWriter:
        return NQuadsWriter(out)


__all__ = [
    "NTriplesParser",
    "NQuadsParser",
    "NTriplesWriter",
    "NQuadsWriter",
    "NTriplesParserFactory",
    "NQuadsParserFactory",
    "NTriplesWriterFactory",
    "NQuadsWriterFactory",
    "unescape_string",
    "escape_string",
    "encode_term",
]
