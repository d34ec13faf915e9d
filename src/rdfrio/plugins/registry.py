"""
Format Registries - Map RDF formats to parser and writer factories.

A FormatRegistry holds at most one factory per format. The parser and writer
registries are lazily created singletons that fill themselves from the
built-in table on first use and accept further registrations afterwards.

Usage:
    from rdfrio.plugins.registry import RDFParserRegistry

    registry = RDFParserRegistry.get_instance()
    fmt = registry.get_file_format_for_file_name("data.ttl")
    parser = registry.get(fmt).get_parser()
"""

import logging
import threading
from typing import Any, Callable, Dict, Generic, Iterator, Optional, Tuple, TypeVar

from ..formats.base import RDFFormat
from ..formats.matching import match_file_name, match_mime_type
from .protocols import (
    RDFParserFactory,
    RDFWriterFactory,
    is_parser_factory,
    is_writer_factory,
)

logger = logging.getLogger(__name__)

F = TypeVar("F")


class FormatRegistry(Generic[F]):
    """
    Registry of factories keyed by RDFFormat.

    Registration replaces any factory already held for the same format.
    When a factory check is given, register() rejects objects that fail it.
    The optional bootstrap callable runs exactly once, before the first
    read or write, even when several threads race for it. Entries are
    swapped copy-on-write under the lock so that readers never lock and
    always see a complete mapping.
    """

    def __init__(
        self,
        name: str = "registry",
        bootstrap: Optional[Callable[["FormatRegistry[F]"], None]] = None,
        factory_check: Optional[Callable[[Any], bool]] = None,
    ) -> None:
        self.name = name
        self._factory_check = factory_check
        self._entries: Dict[RDFFormat, F] = {}
        # Reentrant so the bootstrap can call register() while holding it
        self._lock = threading.RLock()
        self._bootstrap = bootstrap
        self._bootstrapped = bootstrap is None
        self._bootstrapping = False

    def _ensure_bootstrapped(self) -> None:
        if self._bootstrapped:
            return
        with self._lock:
            if self._bootstrapped or self._bootstrapping:
                return
            self._bootstrapping = True
            try:
                logger.debug(f"Bootstrapping {self.name}")
                self._bootstrap(self)
                self._bootstrapped = True
            finally:
                self._bootstrapping = False

    # =========================================================================
    # Registration
    # =========================================================================

    def register(self, rdf_format: RDFFormat, factory: F) -> None:
        """
        Insert or replace the factory for a format.

        Raises:
            TypeError: If the factory fails the registry's factory check.
        """
        if self._factory_check is not None and not self._factory_check(factory):
            raise TypeError(f"{self.name}: {factory!r} is not a valid factory")
        self._ensure_bootstrapped()
        with self._lock:
            entries = dict(self._entries)
            replaced = rdf_format in entries
            entries[rdf_format] = factory
            self._entries = entries
        if replaced:
            logger.warning(f"{self.name}: replaced factory for {rdf_format.name}")
        else:
            logger.info(f"{self.name}: registered {rdf_format.name}")

    def unregister(self, rdf_format: RDFFormat) -> Optional[F]:
        """Remove the factory for a format, returning it if there was one."""
        self._ensure_bootstrapped()
        with self._lock:
            entries = dict(self._entries)
            factory = entries.pop(rdf_format, None)
            self._entries = entries
        return factory

    # =========================================================================
    # Lookup
    # =========================================================================

    def get(self, rdf_format: RDFFormat) -> Optional[F]:
        self._ensure_bootstrapped()
        return self._entries.get(rdf_format)

    def has(self, rdf_format: RDFFormat) -> bool:
        self._ensure_bootstrapped()
        return rdf_format in self._entries

    def keys(self) -> Tuple[RDFFormat, ...]:
        """Snapshot of the registered formats, in registration order."""
        self._ensure_bootstrapped()
        return tuple(self._entries)

    def get_file_format_for_mime_type(
        self, mime_type: str, fallback: Optional[RDFFormat] = None
    ) -> Optional[RDFFormat]:
        return match_mime_type(mime_type, self.keys(), fallback)

    def get_file_format_for_file_name(
        self, file_name: str, fallback: Optional[RDFFormat] = None
    ) -> Optional[RDFFormat]:
        return match_file_name(file_name, self.keys(), fallback)

    def format_for_name(self, name: str) -> Optional[RDFFormat]:
        """Find a registered format by name, ignoring case."""
        wanted = name.strip().lower()
        for rdf_format in self.keys():
            if rdf_format.name.lower() == wanted:
                return rdf_format
        return None

    def __contains__(self, rdf_format: object) -> bool:
        return isinstance(rdf_format, RDFFormat) and self.has(rdf_format)

    def __len__(self) -> int:
        return len(self.keys())

    def __iter__(self) -> Iterator[RDFFormat]:
        return iter(self.keys())

    def __repr__(self) -> str:
        names = ", ".join(f.name for f in self.keys())
        return f"{self.__class__.__name__}([{names}])"


class RDFParserRegistry(FormatRegistry[RDFParserFactory]):
    """
    Singleton registry of parser factories.

    Use get_instance() rather than creating one directly.
    """

    _instance: Optional["RDFParserRegistry"] = None
    _instance_lock = threading.Lock()

    def __init__(self) -> None:
        super().__init__("parser registry", _bootstrap_parsers, is_parser_factory)

    @classmethod
    def get_instance(cls) -> "RDFParserRegistry":
        if cls._instance is None:
            with cls._instance_lock:
                if cls._instance is None:
                    cls._instance = cls()
        return cls._instance

    @classmethod
    def reset_instance(cls) -> None:
        """
        Reset the singleton instance.

        Primarily for testing purposes.
        """
        with cls._instance_lock:
            cls._instance = None


class RDFWriterRegistry(FormatRegistry[RDFWriterFactory]):
    """
    Singleton registry of writer factories.

    Use get_instance() rather than creating one directly.
    """

    _instance: Optional["RDFWriterRegistry"] = None
    _instance_lock = threading.Lock()

    def __init__(self) -> None:
        super().__init__("writer registry", _bootstrap_writers, is_writer_factory)

    @classmethod
    def get_instance(cls) -> "RDFWriterRegistry":
        if cls._instance is None:
            with cls._instance_lock:
                if cls._instance is None:
                    cls._instance = cls()
        return cls._instance

    @classmethod
    def reset_instance(cls) -> None:
        """
        Reset the singleton instance.

        Primarily for testing purposes.
        """
        with cls._instance_lock:
            cls._instance = None


def _bootstrap_parsers(registry: FormatRegistry[RDFParserFactory]) -> None:
    from .builtin import builtin_parser_factories

    for factory in builtin_parser_factories():
        registry.register(factory.rdf_format, factory)


def _bootstrap_writers(registry: FormatRegistry[RDFWriterFactory]) -> None:
    from .builtin import builtin_writer_factories

    for factory in builtin_writer_factories():
        registry.register(factory.rdf_format, factory)


__all__ = [
    "FormatRegistry",
    "RDFParserRegistry",
    "RDFWriterRegistry",
]
