"""
Supported RDF formats and their file/media metadata.
"""

from enum import Enum


class RdfFormat(str, Enum):
    """Concrete RDF syntaxes the codec can write and read."""

    TURTLE = "turtle"
    NTRIPLES = "ntriples"
    RDFXML = "rdfxml"
    JSONLD = "jsonld"

    @property
    def extension(self) -> str:
        return FORMATS[self]["extension"]

    @property
    def media_type(self) -> str:
        return FORMATS[self]["mime"]

    @property
    def rdflib_name(self) -> str:
        return FORMATS[self]["rdflib"]

    @classmethod
    def from_alias(cls, value: str) -> "RdfFormat | None":
        """Look up a format by name, short alias or file extension ("ttl", ".nt")."""
        return ALIASES.get(value.strip().lower().lstrip("."))


FORMATS = {
    RdfFormat.TURTLE: {"extension": ".ttl", "mime": "text/turtle", "rdflib": "turtle"},
    RdfFormat.NTRIPLES: {"extension": ".nt", "mime": "application/n-triples", "rdflib": "nt"},
    RdfFormat.RDFXML: {"extension": ".rdf", "mime": "application/rdf+xml", "rdflib": "xml"},
    RdfFormat.JSONLD: {"extension": ".jsonld", "mime": "application/ld+json", "rdflib": "json-ld"},
}

ALIASES = {
    "turtle": RdfFormat.TURTLE,
    "ttl": RdfFormat.TURTLE,
    "ntriples": RdfFormat.NTRIPLES,
    "nt": RdfFormat.NTRIPLES,
    "rdfxml": RdfFormat.RDFXML,
    "rdf": RdfFormat.RDFXML,
    "xml": RdfFormat.RDFXML,
    "jsonld": RdfFormat.JSONLD,
    "json-ld": RdfFormat.JSONLD,
}

# Order in which aggregate and per-term files are produced
PUBLICATION_ORDER = (RdfFormat.JSONLD, RdfFormat.TURTLE, RdfFormat.NTRIPLES, RdfFormat.RDFXML)
