"""
Reusable RDF handlers and parse error listeners.

Components:
- RDFHandlerBase: no-op handler to subclass
- StatementCollector: collects statements and namespaces into lists/dicts
- ContextStatementCollector: adds statements to a Model, optionally
  rewriting them into caller-chosen contexts
- RDFHandlerWrapper: forwards every event to several handlers
- ParseErrorLogger: default listener, logs and never raises
- ParseErrorCollector: listener that keeps what it is told
"""

import logging
from typing import Dict, List, Optional, Sequence

from .errors import ErrorSeverity, RDFParseError
from .model import Model, Resource, Statement, ValueFactory, default_value_factory
from .plugins.protocols import RDFHandler

logger = logging.getLogger(__name__)


class RDFHandlerBase:
    """Handler whose every event is a no-op."""

    def start_rdf(self) -> None:
        pass

    def end_rdf(self) -> None:
        pass

    def handle_namespace(self, prefix: str, uri: str) -> None:
        pass

    def handle_statement(self, statement: Statement) -> None:
        pass

    def handle_comment(self, comment: str) -> None:
        pass


class StatementCollector(RDFHandlerBase):
    """Collects statements into a list and namespaces into a dict."""

    def __init__(
        self,
        statements: Optional[List[Statement]] = None,
        namespaces: Optional[Dict[str, str]] = None,
    ) -> None:
        self.statements: List[Statement] = statements if statements is not None else []
        self.namespaces: Dict[str, str] = namespaces if namespaces is not None else {}

    def clear(self) -> None:
        self.statements.clear()
        self.namespaces.clear()

    def handle_namespace(self, prefix: str, uri: str) -> None:
        self.namespaces[prefix] = uri

    def handle_statement(self, statement: Statement) -> None:
        self.statements.append(statement)


class ContextStatementCollector(RDFHandlerBase):
    """
    Adds parsed statements to a Model.

    When contexts are given, every incoming statement is added once per
    context and its own context is ignored. Otherwise statements are added as
    they come, context included. Namespace declarations go to the model's
    namespace table; a repeated prefix takes the latest name.
    """

    def __init__(
        self,
        model: Model,
        value_factory: Optional[ValueFactory] = None,
        contexts: Sequence[Optional[Resource]] = (),
    ) -> None:
        self._model = model
        self._value_factory = value_factory or default_value_factory()
        self._contexts = tuple(contexts)

    @property
    def model(self) -> Model:
        return self._model

    def handle_namespace(self, prefix: str, uri: str) -> None:
        self._model.set_namespace(prefix, uri)

    def handle_statement(self, statement: Statement) -> None:
        if not self._contexts:
            self._model.append(statement)
            return
        for context in self._contexts:
            self._model.append(
                self._value_factory.create_statement(
                    statement.subject, statement.predicate, statement.object, context
                )
            )


class RDFHandlerWrapper(RDFHandlerBase):
    """Forwards every event to each wrapped handler, in order."""

    def __init__(self, *handlers: RDFHandler) -> None:
        self.handlers = list(handlers)

    def start_rdf(self) -> None:
        for handler in self.handlers:
            handler.start_rdf()

    def end_rdf(self) -> None:
        for handler in self.handlers:
            handler.end_rdf()

    def handle_namespace(self, prefix: str, uri: str) -> None:
        for handler in self.handlers:
            handler.handle_namespace(prefix, uri)

    def handle_statement(self, statement: Statement) -> None:
        for handler in self.handlers:
            handler.handle_statement(statement)

    def handle_comment(self, comment: str) -> None:
        for handler in self.handlers:
            handler.handle_comment(comment)


def _where(line: Optional[int], column: Optional[int]) -> str:
    if line is None:
        return ""
    if column is None:
        return f" [line {line}]"
    return f" [line {line}, column {column}]"


class ParseErrorLogger:
    """Listener that logs what it receives and never raises."""

    def __init__(self, log: Optional[logging.Logger] = None) -> None:
        self._log = log or logger

    def warning(self, msg: str, line: Optional[int] = None, column: Optional[int] = None) -> None:
        self._log.warning(f"{msg}{_where(line, column)}")

    def error(self, msg: str, line: Optional[int] = None, column: Optional[int] = None) -> None:
        self._log.error(f"{msg}{_where(line, column)}")

    def fatal_error(self, msg: str, line: Optional[int] = None, column: Optional[int] = None) -> None:
        self._log.error(f"[Rio fatal] {msg}{_where(line, column)}")


class ParseErrorCollector:
    """Listener that keeps every report as an RDFParseError tagged with its severity."""

    def __init__(self) -> None:
        self.reports: List[RDFParseError] = []

    def _collect(self, severity: ErrorSeverity, msg: str, line, column) -> None:
        self.reports.append(RDFParseError(msg, line, column, severity=severity))

    def warning(self, msg: str, line: Optional[int] = None, column: Optional[int] = None) -> None:
        self._collect(ErrorSeverity.WARNING, msg, line, column)

    def error(self, msg: str, line: Optional[int] = None, column: Optional[int] = None) -> None:
        self._collect(ErrorSeverity.ERROR, msg, line, column)

    def fatal_error(self, msg: str, line: Optional[int] = None, column: Optional[int] = None) -> None:
        self._collect(ErrorSeverity.FATAL_ERROR, msg, line, column)

    def _by_severity(self, severity: ErrorSeverity) -> List[RDFParseError]:
        return [r for r in self.reports if r.severity is severity]

    @property
    def warnings(self) -> List[RDFParseError]:
        return self._by_severity(ErrorSeverity.WARNING)

    @property
    def errors(self) -> List[RDFParseError]:
        return self._by_severity(ErrorSeverity.ERROR)

    @property
    def fatal_errors(self) -> List[RDFParseError]:
        return self._by_severity(ErrorSeverity.FATAL_ERROR)

    def reset(self) -> None:
        self.reports.clear()
