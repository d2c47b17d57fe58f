"""
Graph Builder - Converts the SchemaModel into JSON-LD graph nodes.

Each class becomes an rdfs:Class node and each property an rdf:Property
node. Nodes use compact IRIs from the namespace table, so the same list can
be written out as a JSON-LD document or expanded into statements.
"""

import logging
from dataclasses import dataclass
from typing import Any, Literal

from oerschema.errors import OerSchemaError
from oerschema.schema import ClassDefinition, PropertyDefinition, SchemaModel

from .namespaces import NamespaceTable

logger = logging.getLogger(__name__)

GraphNode = dict[str, Any]


class UnknownTermError(OerSchemaError, KeyError):
    """Raised when a single-term build names a term absent from the schema."""

    def __init__(self, name: str):
        super().__init__(f"Unknown term: {name}")
        self.name = name

    def __str__(self) -> str:
        return self.args[0]


@dataclass(frozen=True)
class TermScope:
    """Build the graph of a single class or property."""

    name: str


Scope = Literal["full"] | TermScope


# =============================================================================
# GRAPH BUILDER
# =============================================================================


class GraphBuilder:
    """
    Builds JSON-LD nodes for the whole schema or for one term.

    Node order is fixed: classes first, then properties, each sorted by
    name. Keys inside a node follow a fixed order as well, and empty values
    are left out rather than written as empty strings or lists.
    """

    def __init__(self, namespaces: NamespaceTable | None = None):
        self.namespaces = namespaces or NamespaceTable()

    def build_graph(self, schema: SchemaModel, scope: Scope = "full") -> list[GraphNode]:
        """
        Build graph nodes for the requested scope.

        Args:
            schema: Loaded vocabulary
            scope: "full" or a TermScope naming one class or property

        Returns:
            List of node dictionaries

        Raises:
            UnknownTermError: If a TermScope names no class or property
        """
        if scope == "full":
            nodes = [self.class_node(name, schema.classes[name]) for name in schema.class_names()]
            nodes += [
                self.property_node(name, schema.properties[name])
                for name in schema.property_names()
            ]
            logger.debug("Built %d nodes for full schema", len(nodes))
            return nodes

        if not isinstance(scope, TermScope):
            raise ValueError(f"Unsupported scope: {scope!r}")

        nodes = []
        if scope.name in schema.classes:
            nodes.append(self.class_node(scope.name, schema.classes[scope.name]))
        if scope.name in schema.properties:
            nodes.append(self.property_node(scope.name, schema.properties[scope.name]))
        if not nodes:
            raise UnknownTermError(scope.name)
        return nodes

    def class_node(self, name: str, definition: ClassDefinition) -> GraphNode:
        node: GraphNode = {
            "@id": self.namespaces.term(name),
            "@type": "rdfs:Class",
            "rdfs:label": definition.label or name,
        }
        if definition.comment:
            node["rdfs:comment"] = definition.comment
        self._add_references(node, "rdfs:subClassOf", definition.sub_class_of)
        self._add_references(node, "schema:property", definition.properties)
        return node

    def property_node(self, name: str, definition: PropertyDefinition) -> GraphNode:
        node: GraphNode = {
            "@id": self.namespaces.term(name),
            "@type": "rdf:Property",
            "rdfs:label": definition.label or name,
        }
        if definition.comment:
            node["rdfs:comment"] = definition.comment
        self._add_references(node, "rdfs:domain", definition.domain)
        self._add_references(node, "rdfs:range", definition.range)
        return node

    def _add_references(self, node: GraphNode, key: str, names: list[str]) -> None:
        # Blank entries in a YAML list are dropped; an all-blank list drops the key
        refs = [{"@id": self.namespaces.reference(n.strip())} for n in names if n and n.strip()]
        if refs:
            node[key] = refs

    def jsonld_document(self, nodes: list[GraphNode]) -> dict[str, Any]:
        """Wrap nodes in a JSON-LD document with this builder's prefix context."""
        return wrap_jsonld(nodes, self.namespaces.context())


def wrap_jsonld(nodes: list[GraphNode], context: dict[str, str]) -> dict[str, Any]:
    """
    Build a JSON-LD document from nodes and a context.

    A single node is merged with the context; several nodes go under
    "@graph".
    """
    if len(nodes) == 1:
        return {"@context": context, **nodes[0]}
    return {"@context": context, "@graph": list(nodes)}
