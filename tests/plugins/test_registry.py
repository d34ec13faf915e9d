"""
Tests for the format registries.

Tests cover:
- Registration, replacement and lookup
- MIME type / file name resolution against registered formats
- Built-in bootstrap order
- Exactly-once bootstrap under concurrent first use
"""

import threading

import pytest

from rdfrio.formats import (
    BINARY,
    JSONLD,
    N3,
    NQUADS,
    NTRIPLES,
    RDFA,
    RDFJSON,
    RDFXML,
    TRIG,
    TRIX,
    TURTLE,
    YARS,
    RDFFormat,
)
from rdfrio.plugins import (
    FormatRegistry,
    RDFParserRegistry,
    RDFWriterRegistry,
    is_parser_factory,
    is_writer_factory,
)

CUSTOM = RDFFormat("Custom", ("text/x-custom",), ("cst",), "UTF-8")


class DummyFactory:
    def __init__(self, rdf_format, tag=""):
        self.rdf_format = rdf_format
        self.tag = tag

    def get_parser(self):
        return None


@pytest.mark.unit
class TestFormatRegistry:
    """Tests for the generic FormatRegistry."""

    def test_register_and_get(self):
        registry = FormatRegistry()
        factory = DummyFactory(TURTLE)
        registry.register(TURTLE, factory)
        assert registry.get(TURTLE) is factory
        assert registry.has(TURTLE)
        assert TURTLE in registry
        assert len(registry) == 1

    def test_missing_format(self):
        registry = FormatRegistry()
        assert registry.get(TURTLE) is None
        assert not registry.has(TURTLE)
        assert "Turtle" not in registry

    def test_last_registration_wins(self, caplog):
        registry = FormatRegistry()
        first = DummyFactory(TURTLE, "first")
        second = DummyFactory(TURTLE, "second")
        registry.register(TURTLE, first)
        with caplog.at_level("WARNING"):
            registry.register(TURTLE, second)
        assert registry.get(TURTLE) is second
        assert len(registry) == 1
        assert "replaced factory for Turtle" in caplog.text

    def test_equal_names_share_a_slot(self):
        registry = FormatRegistry()
        registry.register(TURTLE, DummyFactory(TURTLE, "a"))
        lookalike = RDFFormat("Turtle", "text/x-other")
        registry.register(lookalike, DummyFactory(lookalike, "b"))
        assert registry.get(TURTLE).tag == "b"

    def test_keys_keep_registration_order(self):
        registry = FormatRegistry()
        for fmt in (NTRIPLES, TURTLE, RDFXML):
            registry.register(fmt, DummyFactory(fmt))
        assert registry.keys() == (NTRIPLES, TURTLE, RDFXML)
        assert list(registry) == [NTRIPLES, TURTLE, RDFXML]

    def test_keys_is_a_snapshot(self):
        registry = FormatRegistry()
        registry.register(TURTLE, DummyFactory(TURTLE))
        keys = registry.keys()
        registry.register(NTRIPLES, DummyFactory(NTRIPLES))
        assert keys == (TURTLE,)

    def test_unregister(self):
        registry = FormatRegistry()
        factory = DummyFactory(TURTLE)
        registry.register(TURTLE, factory)
        assert registry.unregister(TURTLE) is factory
        assert registry.unregister(TURTLE) is None
        assert len(registry) == 0

    def test_lookup_by_mime_type_and_file_name(self):
        registry = FormatRegistry()
        registry.register(TURTLE, DummyFactory(TURTLE))
        registry.register(CUSTOM, DummyFactory(CUSTOM))
        assert registry.get_file_format_for_mime_type("text/x-custom; charset=UTF-8") is CUSTOM
        assert registry.get_file_format_for_file_name("dir/file.CST") is CUSTOM
        assert registry.get_file_format_for_file_name("file.nt") is None
        assert registry.get_file_format_for_file_name("file.nt", fallback=TURTLE) is TURTLE

    def test_registry_rejects_invalid_factory(self):
        registry = RDFParserRegistry.get_instance()
        with pytest.raises(TypeError):
            registry.register(CUSTOM, object())
        assert not registry.has(CUSTOM)

    def test_writer_registry_rejects_parser_factory(self):
        with pytest.raises(TypeError):
            RDFWriterRegistry.get_instance().register(CUSTOM, DummyFactory(CUSTOM))

    def test_format_for_name(self):
        registry = FormatRegistry()
        registry.register(TURTLE, DummyFactory(TURTLE))
        assert registry.format_for_name("TURTLE") is TURTLE
        assert registry.format_for_name("N3") is None

    def test_bootstrap_runs_once_before_first_use(self):
        calls = []

        def bootstrap(registry):
            calls.append(1)
            registry.register(TURTLE, DummyFactory(TURTLE))

        registry = FormatRegistry("test", bootstrap)
        assert calls == []
        assert registry.has(TURTLE)
        registry.register(NTRIPLES, DummyFactory(NTRIPLES))
        assert registry.keys() == (TURTLE, NTRIPLES)
        assert calls == [1]

    def test_bootstrap_once_under_concurrency(self):
        calls = []
        gate = threading.Event()

        def bootstrap(registry):
            calls.append(1)
            gate.wait(0.2)
            for fmt in (RDFXML, NTRIPLES, TURTLE):
                registry.register(fmt, DummyFactory(fmt))

        registry = FormatRegistry("test", bootstrap)
        seen = []

        def reader():
            seen.append(registry.keys())

        threads = [threading.Thread(target=reader) for _ in range(8)]
        for t in threads:
            t.start()
        gate.set()
        for t in threads:
            t.join()

        assert calls == [1]
        assert all(keys == (RDFXML, NTRIPLES, TURTLE) for keys in seen)


@pytest.mark.unit
class TestBuiltinRegistries:
    """Tests for the parser and writer singletons."""

    BOOTSTRAP_ORDER = (RDFXML, NTRIPLES, TURTLE, N3, TRIX, TRIG, NQUADS, JSONLD, YARS)

    def test_singletons(self):
        assert RDFParserRegistry.get_instance() is RDFParserRegistry.get_instance()
        assert RDFWriterRegistry.get_instance() is RDFWriterRegistry.get_instance()

    def test_reset_instance(self):
        registry = RDFParserRegistry.get_instance()
        RDFParserRegistry.reset_instance()
        assert RDFParserRegistry.get_instance() is not registry

    def test_parser_bootstrap_order(self):
        assert RDFParserRegistry.get_instance().keys() == self.BOOTSTRAP_ORDER

    def test_writer_bootstrap_order(self):
        assert RDFWriterRegistry.get_instance().keys() == self.BOOTSTRAP_ORDER

    @pytest.mark.parametrize("fmt", [BINARY, RDFJSON, RDFA])
    def test_catalogued_formats_without_factory(self, fmt):
        assert not RDFParserRegistry.get_instance().has(fmt)
        assert not RDFWriterRegistry.get_instance().has(fmt)

    def test_factories_follow_the_protocols(self):
        for factory in (RDFParserRegistry.get_instance().get(f) for f in self.BOOTSTRAP_ORDER):
            assert is_parser_factory(factory)
        for factory in (RDFWriterRegistry.get_instance().get(f) for f in self.BOOTSTRAP_ORDER):
            assert is_writer_factory(factory)

    def test_registered_factory_matches_its_key(self):
        registry = RDFParserRegistry.get_instance()
        for fmt in registry.keys():
            assert registry.get(fmt).rdf_format == fmt

    def test_xml_extension_resolves_to_rdfxml(self):
        registry = RDFParserRegistry.get_instance()
        assert registry.get_file_format_for_file_name("data.xml") is RDFXML

    def test_user_registration_extends_builtins(self):
        registry = RDFParserRegistry.get_instance()
        registry.register(CUSTOM, DummyFactory(CUSTOM))
        assert registry.keys()[-1] == CUSTOM
        assert registry.get_file_format_for_mime_type("text/x-custom") is CUSTOM
