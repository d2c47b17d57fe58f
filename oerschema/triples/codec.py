"""
Quad Codec - Expands graph nodes into statements and serializes them.

Supports Turtle, N-Triples, RDF/XML and JSON-LD output. N-Triples is
written directly from the statements as sorted canonical lines; the other
syntaxes go through rdflib with the namespace table bound.
"""

import json
import logging
import re
from dataclasses import dataclass
from typing import Any, Iterable

from rdflib import BNode, Graph, Literal, URIRef
from rdflib.namespace import RDF

from oerschema.errors import OerSchemaError

from .builder import GraphNode, wrap_jsonld
from .formats import RdfFormat
from .namespaces import GraphExpansionError, NamespaceTable

logger = logging.getLogger(__name__)


class SerializationError(OerSchemaError):
    """Raised when one format cannot be produced for one term (or the aggregate)."""

    def __init__(self, fmt: RdfFormat, message: str, term: str | None = None):
        target = f"term '{term}'" if term else "aggregate"
        super().__init__(f"{fmt.value} serialization failed for {target}: {message}")
        self.format = fmt
        self.term = term


# =============================================================================
# STATEMENTS
# =============================================================================


def escape_literal(value: str) -> str:
    """Escape a literal for N-Triples/Turtle short strings (backslash first)."""
    return (
        value.replace("\\", "\\\\")
        .replace('"', '\\"')
        .replace("\n", "\\n")
        .replace("\r", "\\r")
        .replace("\t", "\\t")
    )


# Characters outside the XML 1.0 Char production
XML_INVALID_CHARS = re.compile("[^\t\n\r\x20-\ud7ff\ue000-\ufffd\U00010000-\U0010ffff]")


def _nt_iri(iri: URIRef) -> str:
    try:
        return iri.n3()
    except Exception as e:  # rdflib raises a bare Exception for illegal IRI characters
        raise ValueError(f"Invalid IRI {str(iri)!r}") from e


def _nt_term(term: URIRef | BNode | Literal) -> str:
    if isinstance(term, Literal):
        text = f'"{escape_literal(str(term))}"'
        if term.language:
            return f"{text}@{term.language}"
        if term.datatype:
            return f"{text}^^{_nt_iri(term.datatype)}"
        return text
    if isinstance(term, BNode):
        return f"_:{term}"
    return _nt_iri(term)


@dataclass(frozen=True)
class LinkedDataStatement:
    """A subject-predicate-object statement, optionally in a named graph."""

    subject: URIRef | BNode
    predicate: URIRef
    object: URIRef | BNode | Literal
    graph_name: URIRef | None = None

    def __post_init__(self):
        if isinstance(self.subject, Literal) or not isinstance(self.predicate, URIRef):
            raise ValueError(f"Invalid statement: {self.subject!r} {self.predicate!r}")

    def as_triple(self) -> tuple:
        return (self.subject, self.predicate, self.object)

    def to_ntriples(self) -> str:
        """Canonical N-Triples line (without trailing newline)."""
        return f"{_nt_term(self.subject)} {_nt_iri(self.predicate)} {_nt_term(self.object)} ."


# =============================================================================
# QUAD CODEC
# =============================================================================


class QuadCodec:
    """
    Converts graph nodes to statements and statements to text.

    Args:
        namespaces: Prefix table used for expansion and output bindings
        verify_round_trip: Re-parse every serialization and compare statements
    """

    def __init__(self, namespaces: NamespaceTable | None = None, verify_round_trip: bool = False):
        self.namespaces = namespaces or NamespaceTable()
        self.verify_round_trip = verify_round_trip

    # ------------------------------------------------------------------
    # Expansion
    # ------------------------------------------------------------------

    def to_quads(self, nodes: Iterable[GraphNode]) -> list[LinkedDataStatement]:
        """
        Expand graph nodes into flat statements.

        Raises:
            GraphExpansionError: If any compact IRI uses an unbound prefix
        """
        statements: list[LinkedDataStatement] = []
        for node in nodes:
            statements.extend(self._expand_node(node))
        return statements

    def _expand_node(self, node: GraphNode) -> list[LinkedDataStatement]:
        if "@id" not in node:
            raise ValueError(f"Graph node without @id: {node!r}")

        subject = self.namespaces.expand(node["@id"])
        statements = []
        for key, value in node.items():
            if key in ("@id", "@context"):
                continue
            if key == "@type":
                for type_name in _as_list(value):
                    statements.append(
                        LinkedDataStatement(subject, RDF.type, self.namespaces.expand(type_name))
                    )
                continue

            predicate = self.namespaces.expand(key)
            for item in _as_list(value):
                statements.append(LinkedDataStatement(subject, predicate, self._object(item)))
        return statements

    def _object(self, value: Any) -> URIRef | Literal:
        if isinstance(value, dict):
            if "@id" in value:
                return self.namespaces.expand(value["@id"])
            if "@value" in value:
                if "@language" in value:
                    return Literal(value["@value"], lang=value["@language"])
                if "@type" in value:
                    return Literal(value["@value"], datatype=self.namespaces.expand(value["@type"]))
                return Literal(value["@value"])
            raise ValueError(f"Unsupported value object: {value!r}")
        return Literal(value)

    # ------------------------------------------------------------------
    # Serialization
    # ------------------------------------------------------------------

    def serialize(
        self,
        statements: list[LinkedDataStatement],
        fmt: RdfFormat,
        term: str | None = None,
    ) -> bytes:
        """
        Serialize statements into one concrete syntax.

        Args:
            statements: Statements to write
            fmt: Target format
            term: Term name, for error reporting only

        Returns:
            UTF-8 encoded document

        Raises:
            SerializationError: If rdflib fails or the round-trip check differs
        """
        try:
            if fmt is RdfFormat.NTRIPLES:
                text = self.to_ntriples(statements)
            elif fmt is RdfFormat.JSONLD:
                text = self.to_jsonld(statements)
            elif fmt is RdfFormat.RDFXML:
                text = self.to_rdfxml(statements)
            else:
                text = self._graph(statements).serialize(format="turtle")
        except Exception as e:  # rdflib plugins raise assorted exception types
            raise SerializationError(fmt, str(e), term) from e

        data = text.encode("utf-8")
        if self.verify_round_trip:
            self._verify(statements, data, fmt, term)
        return data

    def to_ntriples(self, statements: list[LinkedDataStatement]) -> str:
        lines = sorted({s.to_ntriples() for s in statements})
        return "".join(line + "\n" for line in lines)

    def to_jsonld(self, statements: list[LinkedDataStatement]) -> str:
        """JSON-LD compacted against the prefix context, in canonical order."""
        context = self.namespaces.context()
        raw = self._graph(statements).serialize(format="json-ld", context=context, auto_compact=True)
        nodes = _jsonld_nodes(json.loads(raw))

        nodes = [_canonical_node(n) for n in nodes]
        nodes.sort(key=lambda n: str(n.get("@id", "")))
        document = wrap_jsonld(nodes, context)
        return json.dumps(document, indent=2, ensure_ascii=False) + "\n"

    def to_rdfxml(self, statements: list[LinkedDataStatement]) -> str:
        """
        RDF/XML in rdf:Description form; literal text is entity-escaped.

        Raises:
            ValueError: If a literal holds a character XML cannot represent
        """
        for statement in statements:
            if isinstance(statement.object, Literal):
                bad = XML_INVALID_CHARS.search(str(statement.object))
                if bad:
                    raise ValueError(
                        f"character U+{ord(bad.group()):04X} in a literal of "
                        f"{statement.subject} is not allowed in XML"
                    )
        return self._graph(statements).serialize(format="xml")

    def _graph(self, statements: list[LinkedDataStatement]) -> Graph:
        graph = Graph(bind_namespaces="core")
        self.namespaces.bind(graph)
        for statement in statements:
            graph.add(statement.as_triple())
        return graph

    # ------------------------------------------------------------------
    # Parsing
    # ------------------------------------------------------------------

    def parse(self, data: bytes | str, fmt: RdfFormat) -> set[LinkedDataStatement]:
        """Read a serialized document back into a statement set."""
        if isinstance(data, bytes):
            data = data.decode("utf-8")
        graph = Graph()
        graph.parse(data=data, format=fmt.rdflib_name)
        return {LinkedDataStatement(s, p, o) for s, p, o in graph}

    def _verify(
        self,
        statements: list[LinkedDataStatement],
        data: bytes,
        fmt: RdfFormat,
        term: str | None,
    ) -> None:
        try:
            parsed = self.parse(data, fmt)
        except Exception as e:  # parser errors surface as several types
            raise SerializationError(fmt, f"output does not parse: {e}", term) from e

        expected = {LinkedDataStatement(s.subject, s.predicate, s.object) for s in statements}
        if parsed != expected:
            missing = len(expected - parsed)
            extra = len(parsed - expected)
            raise SerializationError(
                fmt, f"round trip mismatch ({missing} missing, {extra} unexpected)", term
            )
        logger.debug("Round trip ok for %s (%s, %d statements)", term or "aggregate", fmt.value, len(parsed))


# =============================================================================
# HELPERS
# =============================================================================


def _as_list(value: Any) -> list:
    return value if isinstance(value, list) else [value]


def _jsonld_nodes(document: Any) -> list[dict]:
    """Pull node objects out of whichever shape rdflib produced."""
    if isinstance(document, list):
        return [n for n in document if isinstance(n, dict)]
    if "@graph" in document:
        return list(document["@graph"])
    node = {k: v for k, v in document.items() if k != "@context"}
    return [node] if node else []


def _canonical_node(node: dict) -> dict:
    canonical = {}
    for key in sorted(node, key=lambda k: (not k.startswith("@"), k)):
        value = node[key]
        if isinstance(value, list):
            value = sorted(value, key=lambda v: json.dumps(v, sort_keys=True))
        canonical[key] = value
    return canonical
