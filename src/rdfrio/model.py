"""
Statements, statement collections and value construction.

RDF terms are rdflib terms (URIRef, BNode, Literal) so that parsed data can be
handed straight to rdflib-based tooling.

Usage:
    from rdfrio.model import Model, ValueFactory

    vf = ValueFactory()
    model = Model()
    model.add(vf.create_uri("http://example.org/a"),
              vf.create_uri("http://example.org/v"),
              vf.create_literal("1"))
"""

from typing import Iterable, Iterator, List, NamedTuple, Optional, Union

from rdflib import BNode, Dataset, Literal, URIRef
from rdflib.term import Node

Resource = Union[URIRef, BNode]
Value = Union[URIRef, BNode, Literal]


class Statement(NamedTuple):
    """A subject-predicate-object triple with an optional context."""

    subject: Resource
    predicate: URIRef
    object: Value
    context: Optional[Resource] = None

    @property
    def triple(self):
        return (self.subject, self.predicate, self.object)


class Namespace(NamedTuple):
    """A prefix to namespace name binding."""

    prefix: str
    name: str


class ValueFactory:
    """Creates the terms and statements parsers emit."""

    def create_uri(self, value: str, base: Optional[str] = None) -> URIRef:
        if base:
            return URIRef(value, base=base)
        return URIRef(value)

    def create_bnode(self, node_id: Optional[str] = None) -> BNode:
        return BNode(node_id) if node_id else BNode()

    def create_literal(
        self,
        label: str,
        datatype: Optional[URIRef] = None,
        language: Optional[str] = None,
    ) -> Literal:
        if language:
            return Literal(label, lang=language)
        return Literal(label, datatype=datatype)

    def create_statement(
        self,
        subject: Resource,
        predicate: URIRef,
        obj: Value,
        context: Optional[Resource] = None,
    ) -> Statement:
        return Statement(subject, predicate, obj, context)


_DEFAULT_VALUE_FACTORY = ValueFactory()


def default_value_factory() -> ValueFactory:
    """The shared stateless ValueFactory."""
    return _DEFAULT_VALUE_FACTORY


class Model:
    """
    Ordered collection of statements with a namespace table.

    Statements are kept in insertion order, duplicates included. Namespaces
    are keyed by prefix; setting an existing prefix replaces its name but keeps
    its position.
    """

    def __init__(
        self,
        statements: Iterable[Statement] = (),
        namespaces: Optional[Iterable[Namespace]] = None,
    ) -> None:
        self._statements: List[Statement] = list(statements)
        self._namespaces = {}
        for ns in namespaces or ():
            self.set_namespace(ns.prefix, ns.name)

    # =========================================================================
    # Statements
    # =========================================================================

    def add(
        self,
        subject: Resource,
        predicate: URIRef,
        obj: Value,
        *contexts: Optional[Resource],
    ) -> None:
        """Add a triple, once per context, or once without context if none are given."""
        if not contexts:
            self._statements.append(Statement(subject, predicate, obj))
            return
        for context in contexts:
            self._statements.append(Statement(subject, predicate, obj, context))

    def append(self, statement: Statement) -> None:
        self._statements.append(statement)

    def contexts(self) -> List[Optional[Resource]]:
        """Distinct contexts in order of first appearance (None for the default graph)."""
        seen = {}
        for st in self._statements:
            seen.setdefault(st.context, None)
        return list(seen)

    def filter(
        self,
        subject: Optional[Node] = None,
        predicate: Optional[Node] = None,
        obj: Optional[Node] = None,
    ) -> "Model":
        """Statements matching the given terms; None matches anything."""
        return Model(
            (
                st
                for st in self._statements
                if (subject is None or st.subject == subject)
                and (predicate is None or st.predicate == predicate)
                and (obj is None or st.object == obj)
            ),
            self.get_namespaces(),
        )

    # =========================================================================
    # Namespaces
    # =========================================================================

    def set_namespace(self, prefix: str, name: str) -> Namespace:
        ns = Namespace(prefix, str(name))
        self._namespaces[prefix] = ns
        return ns

    def get_namespace(self, prefix: str) -> Optional[Namespace]:
        return self._namespaces.get(prefix)

    def remove_namespace(self, prefix: str) -> Optional[Namespace]:
        return self._namespaces.pop(prefix, None)

    def get_namespaces(self) -> List[Namespace]:
        return list(self._namespaces.values())

    # =========================================================================
    # Interop
    # =========================================================================

    def to_dataset(self) -> Dataset:
        """Copy the statements and namespaces into an rdflib Dataset."""
        dataset = Dataset()
        for ns in self._namespaces.values():
            dataset.bind(ns.prefix, ns.name, override=True, replace=True)
        for st in self._statements:
            if st.context is None:
                dataset.add(st.triple)
            else:
                dataset.add((st.subject, st.predicate, st.object, st.context))
        return dataset

    def __iter__(self) -> Iterator[Statement]:
        return iter(self._statements)

    def __len__(self) -> int:
        return len(self._statements)

    def __contains__(self, item: object) -> bool:
        return item in self._statements

    def __getitem__(self, index: int) -> Statement:
        return self._statements[index]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Model):
            return NotImplemented
        return self._statements == other._statements

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return (
            f"Model(statements={len(self._statements)}, "
            f"namespaces={len(self._namespaces)})"
        )


__all__ = [
    "Resource",
    "Value",
    "Statement",
    "Namespace",
    "ValueFactory",
    "default_value_factory",
    "Model",
]
