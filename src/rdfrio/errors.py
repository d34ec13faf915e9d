"""
Error taxonomy for parsing and writing RDF.

Every failure raised by rdfrio is a RioError. The error carries a kind, used to
tell the failure classes apart when catching RioError broadly, and a severity,
used by parsers to decide whether a condition is reported to the error listener
and skipped or raised as fatal.

Usage:
    from rdfrio.errors import RDFParseError, RioError

    try:
        model = rio.parse(stream, base_uri, NTRIPLES)
    except RDFParseError as e:
        print(f"Syntax error at line {e.line}: {e.message}")
    except RioError as e:
        print(f"[{e.kind.value}] {e}")
"""

from enum import Enum
from typing import Any, Optional


class ErrorSeverity(Enum):
    """
    Severity levels for reported errors.

    - WARNING: Suspicious input, parsing continues unchanged.
    - ERROR: Recoverable error, parsing continues when the condition is non-fatal.
    - FATAL_ERROR: Unrecoverable, the operation stops.
    """
    WARNING = "warning"
    ERROR = "error"
    FATAL_ERROR = "fatal_error"


class ErrorKind(Enum):
    """The failure class an error belongs to."""
    UNSUPPORTED_FORMAT = "unsupported_format"
    PARSE = "parse"
    HANDLER = "handler"
    IO = "io"
    CONFIGURATION = "configuration"


class RioError(Exception):
    """
    Base class for all rdfrio errors.

    Attributes:
        message: Human-readable error message.
        kind: Failure class of the error.
        severity: How severe the condition is.
    """

    kind: ErrorKind = ErrorKind.PARSE

    def __init__(
        self,
        message: str,
        severity: ErrorSeverity = ErrorSeverity.FATAL_ERROR,
    ):
        self.message = message
        self.severity = severity
        super().__init__(message)

    @property
    def is_fatal(self) -> bool:
        return self.severity is ErrorSeverity.FATAL_ERROR


class UnsupportedRDFormatError(RioError):
    """Raised when no parser or writer is registered for a format."""

    kind = ErrorKind.UNSUPPORTED_FORMAT

    def __init__(self, message: str, rdf_format: Optional[Any] = None):
        self.rdf_format = rdf_format
        super().__init__(message)


class RDFParseError(RioError):
    """
    Raised when a parser finds malformed input.

    Attributes:
        line: 1-based line number, or None if unknown.
        column: 1-based column number, or None if unknown.
    """

    kind = ErrorKind.PARSE

    def __init__(
        self,
        message: str,
        line: Optional[int] = None,
        column: Optional[int] = None,
        severity: ErrorSeverity = ErrorSeverity.FATAL_ERROR,
    ):
        self.line = line
        self.column = column
        super().__init__(message, severity)

    def __str__(self) -> str:
        if self.line is None:
            return self.message
        location = f"line {self.line}"
        if self.column is not None:
            location += f", column {self.column}"
        return f"{self.message} [{location}]"


class RDFHandlerError(RioError):
    """Raised when a handler or writer rejects an event."""

    kind = ErrorKind.HANDLER


class RioIOError(RioError):
    """Raised when the underlying stream or transport fails."""

    kind = ErrorKind.IO


class RioConfigurationError(RioError):
    """Raised when a setting value is rejected at configuration time."""

    kind = ErrorKind.CONFIGURATION


__all__ = [
    "ErrorSeverity",
    "ErrorKind",
    "RioError",
    "UnsupportedRDFormatError",
    "RDFParseError",
    "RDFHandlerError",
    "RioIOError",
    "RioConfigurationError",
]
