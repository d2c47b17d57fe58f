"""
Namespace table - the fixed set of prefixes used across the pipeline.

The vocabulary lives under one base IRI (`oer:` -> http://oerschema.org/ by
default). The same table drives compact IRIs in graph nodes, their
expansion into statements, and prefix bindings in every serialization.
"""

import logging

from rdflib import Graph, Namespace, URIRef
from rdflib.namespace import DCTERMS, OWL, RDF, RDFS, XSD

from oerschema.errors import OerSchemaError

logger = logging.getLogger(__name__)


# =============================================================================
# NAMESPACE DEFINITIONS
# =============================================================================

# OER vocabulary namespace
OER = Namespace("http://oerschema.org/")

# schema.org, in the http form used by the published vocabulary
SCHEMA = Namespace("http://schema.org/")

BUILTIN_PREFIXES: dict[str, str] = {
    "rdf": str(RDF),
    "rdfs": str(RDFS),
    "schema": str(SCHEMA),
    "owl": str(OWL),
    "xsd": str(XSD),
    "dcterms": str(DCTERMS),
}

# Schemes accepted as already-absolute IRIs
ABSOLUTE_SCHEMES = ("http", "https", "urn", "mailto")


class GraphExpansionError(OerSchemaError):
    """Raised when a compact IRI uses a prefix missing from the table."""

    def __init__(self, curie: str, prefix: str):
        super().__init__(f"Undefined namespace prefix '{prefix}' in '{curie}'")
        self.curie = curie
        self.prefix = prefix


class NamespaceTable:
    """
    Ordered prefix -> IRI table with the vocabulary prefix first.

    Args:
        vocab_prefix: Prefix bound to the vocabulary
        vocab_iri: Base IRI of the vocabulary
        extra: Additional prefixes (cannot rebind built-in ones)
    """

    def __init__(
        self,
        vocab_prefix: str = "oer",
        vocab_iri: str = str(OER),
        extra: dict[str, str] | None = None,
    ):
        if vocab_prefix in BUILTIN_PREFIXES:
            raise ValueError(f"Vocabulary prefix '{vocab_prefix}' clashes with a built-in prefix")

        self.vocab_prefix = vocab_prefix
        self.vocab = Namespace(vocab_iri)
        self._prefixes: dict[str, str] = {vocab_prefix: vocab_iri, **BUILTIN_PREFIXES}

        for prefix, iri in (extra or {}).items():
            if prefix in self._prefixes and self._prefixes[prefix] != iri:
                raise ValueError(f"Prefix '{prefix}' is already bound to {self._prefixes[prefix]}")
            self._prefixes[prefix] = iri

    @classmethod
    def from_settings(cls, settings) -> "NamespaceTable":
        ns = settings.namespaces
        return cls(vocab_prefix=ns.vocab_prefix, vocab_iri=ns.vocab_iri, extra=ns.extra)

    @property
    def prefixes(self) -> dict[str, str]:
        return dict(self._prefixes)

    def context(self) -> dict[str, str]:
        """JSON-LD @context mapping each prefix to its IRI."""
        return dict(self._prefixes)

    def term(self, name: str) -> str:
        """Compact IRI of a vocabulary term."""
        return f"{self.vocab_prefix}:{name}"

    def reference(self, value: str) -> str:
        """
        Normalize a schema reference into a compact or absolute IRI.

        Bare names belong to the vocabulary. `prefix:local` values are kept
        as-is and checked later, during expansion.
        """
        if ":" in value:
            return value
        return self.term(value)

    def expand(self, value: str) -> URIRef:
        """
        Expand a compact IRI against the table.

        Raises:
            GraphExpansionError: If the prefix is not bound
        """
        prefix, sep, local = value.partition(":")
        if not sep:
            return URIRef(self.vocab[value])
        if prefix in self._prefixes:
            return URIRef(self._prefixes[prefix] + local)
        if prefix in ABSOLUTE_SCHEMES:
            return URIRef(value)
        raise GraphExpansionError(value, prefix)

    def bind(self, graph: Graph) -> Graph:
        """Bind every prefix on an rdflib graph (replacing rdflib's defaults)."""
        for prefix, iri in self._prefixes.items():
            graph.bind(prefix, Namespace(iri), override=True, replace=True)
        return graph
