"""
Triples Module - RDF graph construction and serialization.

This module turns the loaded vocabulary into linked data.

Components:
- namespaces.py: Prefix table and compact IRI expansion
- builder.py: Converts the schema to JSON-LD graph nodes
- codec.py: Expands nodes into statements and serializes them
- formats.py: Supported formats with extensions and media types
"""

from .builder import GraphBuilder, GraphNode, TermScope, UnknownTermError
from .codec import LinkedDataStatement, QuadCodec, SerializationError, escape_literal
from .formats import PUBLICATION_ORDER, RdfFormat
from .namespaces import OER, SCHEMA, GraphExpansionError, NamespaceTable

__all__ = [
    # Builder
    "GraphBuilder",
    "GraphNode",
    "TermScope",
    "UnknownTermError",
    # Codec
    "LinkedDataStatement",
    "QuadCodec",
    "SerializationError",
    "escape_literal",
    # Formats
    "RdfFormat",
    "PUBLICATION_ORDER",
    # Namespaces
    "OER",
    "SCHEMA",
    "GraphExpansionError",
    "NamespaceTable",
]
