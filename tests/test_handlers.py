"""
Tests for the Model and the stock handlers and error listeners.
"""

import logging

import pytest
from rdflib import Literal

from rdfrio.errors import ErrorSeverity
from rdfrio.handlers import (
    ContextStatementCollector,
    ParseErrorCollector,
    ParseErrorLogger,
    RDFHandlerWrapper,
    StatementCollector,
)
from rdfrio.model import Model, Namespace, Statement

EX = "http://example.org/"


@pytest.mark.unit
class TestModel:
    def test_add_once_per_context(self, ex):
        model = Model()
        model.add(ex("a"), ex("p"), ex("b"), ex("g1"), ex("g2"))
        assert [st.context for st in model] == [ex("g1"), ex("g2")]

    def test_duplicates_kept(self, ex):
        model = Model()
        model.add(ex("a"), ex("p"), ex("b"))
        model.add(ex("a"), ex("p"), ex("b"))
        assert len(model) == 2

    def test_filter(self, ex):
        model = Model([
            Statement(ex("a"), ex("p"), Literal("1")),
            Statement(ex("b"), ex("p"), Literal("2")),
        ])
        assert [st.subject for st in model.filter(subject=ex("b"))] == [ex("b")]
        assert len(model.filter(predicate=ex("p"))) == 2

    def test_namespace_replaced_in_place(self):
        model = Model()
        model.set_namespace("a", EX + "a#")
        model.set_namespace("b", EX + "b#")
        model.set_namespace("a", EX + "new#")
        assert model.get_namespaces() == [Namespace("a", EX + "new#"), Namespace("b", EX + "b#")]

    def test_to_dataset(self, ex):
        model = Model()
        model.set_namespace("ex", EX)
        model.add(ex("a"), ex("p"), ex("b"))
        model.add(ex("a"), ex("p"), ex("c"), ex("g"))
        dataset = model.to_dataset()
        assert (ex("a"), ex("p"), ex("c"), ex("g")) in set(dataset.quads((None, None, None, None)))
        assert ("ex", ex("")) in set(dataset.namespaces())

    def test_equality(self, ex):
        first = Model([Statement(ex("a"), ex("p"), ex("b"))])
        second = Model([Statement(ex("a"), ex("p"), ex("b"))])
        assert first == second
        assert first != Model()


@pytest.mark.unit
class TestCollectors:
    def test_statement_collector(self, ex):
        collector = StatementCollector()
        collector.handle_namespace("ex", EX)
        collector.handle_statement(Statement(ex("a"), ex("p"), ex("b")))
        assert collector.namespaces == {"ex": EX}
        assert len(collector.statements) == 1

    def test_context_collector_without_contexts(self, ex, vf):
        model = Model()
        collector = ContextStatementCollector(model, vf)
        collector.handle_statement(Statement(ex("a"), ex("p"), ex("b"), ex("g")))
        assert [st.context for st in model] == [ex("g")]

    def test_context_collector_fans_out(self, ex, vf):
        model = Model()
        collector = ContextStatementCollector(model, vf, [None, ex("g")])
        collector.handle_statement(Statement(ex("a"), ex("p"), ex("b"), ex("other")))
        assert [st.context for st in model] == [None, ex("g")]

    def test_wrapper_forwards_in_order(self, ex):
        calls = []

        class Tagged(StatementCollector):
            def __init__(self, tag):
                super().__init__()
                self.tag = tag

            def handle_statement(self, statement):
                calls.append(self.tag)

        wrapper = RDFHandlerWrapper(Tagged("first"), Tagged("second"))
        wrapper.start_rdf()
        wrapper.handle_statement(Statement(ex("a"), ex("p"), ex("b")))
        wrapper.end_rdf()
        assert calls == ["first", "second"]


@pytest.mark.unit
class TestErrorListeners:
    def test_collector_sorts_by_severity(self):
        listener = ParseErrorCollector()
        listener.warning("w", 1, 2)
        listener.error("e", 3)
        listener.fatal_error("f")
        assert [r.message for r in listener.warnings] == ["w"]
        assert listener.errors[0].line == 3
        assert listener.fatal_errors[0].severity is ErrorSeverity.FATAL_ERROR
        listener.reset()
        assert listener.reports == []

    def test_logger_includes_location(self, caplog):
        listener = ParseErrorLogger(logging.getLogger("rdfrio.test"))
        with caplog.at_level(logging.WARNING, logger="rdfrio.test"):
            listener.warning("odd", 4, 7)
            listener.fatal_error("broken", 9)
        assert "odd [line 4, column 7]" in caplog.text
        assert "broken [line 9]" in caplog.text
