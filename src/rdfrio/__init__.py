"""
rdfrio - RDF parsing and writing framework.

Identifies RDF serializations from MIME types and file names, negotiates
formats for HTTP, and streams statements between pluggable parsers and
writers.

Usage:
    import io
    from rdfrio import rio, NTRIPLES, TURTLE

    model = rio.parse(io.BytesIO(data), "http://example.org/", TURTLE)
    rio.write(model, out, NTRIPLES)
"""

__version__ = "1.0.0"

from . import rio
from .errors import (
    ErrorKind,
    ErrorSeverity,
    RDFHandlerError,
    RDFParseError,
    RioConfigurationError,
    RioError,
    RioIOError,
    UnsupportedRDFormatError,
)
from .formats import (
    BINARY,
    BUILTIN_FORMATS,
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
from .handlers import (
    ContextStatementCollector,
    ParseErrorCollector,
    ParseErrorLogger,
    RDFHandlerBase,
    RDFHandlerWrapper,
    StatementCollector,
)
from .model import Model, Namespace, Statement, ValueFactory
from .plugins import RDFParserRegistry, RDFWriterRegistry
from .settings import (
    BasicParserSettings,
    BasicWriterSettings,
    NTriplesParserSettings,
    ParserConfig,
    RioSetting,
    WriterConfig,
    YARSParserSettings,
)

__all__ = [
    "__version__",
    # Facade
    "rio",
    # Errors
    "ErrorKind",
    "ErrorSeverity",
    "RioError",
    "UnsupportedRDFormatError",
    "RDFParseError",
    "RDFHandlerError",
    "RioIOError",
    "RioConfigurationError",
    # Formats
    "RDFFormat",
    "BUILTIN_FORMATS",
    "RDFXML",
    "NTRIPLES",
    "TURTLE",
    "YARS",
    "N3",
    "TRIX",
    "TRIG",
    "BINARY",
    "NQUADS",
    "JSONLD",
    "RDFJSON",
    "RDFA",
    # Model
    "Statement",
    "Namespace",
    "Model",
    "ValueFactory",
    # Handlers
    "RDFHandlerBase",
    "StatementCollector",
    "ContextStatementCollector",
    "RDFHandlerWrapper",
    "ParseErrorLogger",
    "ParseErrorCollector",
    # Registries
    "RDFParserRegistry",
    "RDFWriterRegistry",
    # Settings
    "RioSetting",
    "ParserConfig",
    "WriterConfig",
    "BasicParserSettings",
    "NTriplesParserSettings",
    "YARSParserSettings",
    "BasicWriterSettings",
]
