"""
Pytest configuration and fixtures for the test suite.

Defines markers for selective test execution:
    pytest -m unit          # Fast unit tests
    pytest -m integration   # Tests that run parsers, writers and the CLI together
"""

import io
import os
import sys

import pytest

# Add src to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from rdfrio.model import ValueFactory
from rdfrio.plugins.registry import RDFParserRegistry, RDFWriterRegistry

EX = "http://example.org/"


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "unit: Fast unit tests")
    config.addinivalue_line("markers", "integration: Tests that run several components together")


@pytest.fixture(autouse=True)
def fresh_registries():
    """Give every test its own parser and writer registries."""
    RDFParserRegistry.reset_instance()
    RDFWriterRegistry.reset_instance()
    yield
    RDFParserRegistry.reset_instance()
    RDFWriterRegistry.reset_instance()


@pytest.fixture
def vf():
    return ValueFactory()


@pytest.fixture
def ex(vf):
    """Build IRIs in the http://example.org/ namespace."""
    return lambda local: vf.create_uri(EX + local)


@pytest.fixture
def sample_ntriples():
    """Small N-Triples document with a comment, a language tag and a datatype."""
    return (
        "# people\n"
        "<http://example.org/alice> <http://example.org/name> \"Alice\"@en .\n"
        "<http://example.org/alice> <http://example.org/knows> <http://example.org/bob> .\n"
        "<http://example.org/bob> <http://example.org/age> "
        "\"42\"^^<http://www.w3.org/2001/XMLSchema#integer> .\n"
    )


@pytest.fixture
def sample_turtle():
    """Minimal Turtle document with one prefix."""
    return '''
        @prefix ex: <http://example.org/> .

        ex:alice ex:name "Alice" ;
            ex:knows ex:bob .
    '''


@pytest.fixture
def as_bytes():
    """Wrap text in a binary stream."""
    return lambda text: io.BytesIO(text.encode("utf-8"))
