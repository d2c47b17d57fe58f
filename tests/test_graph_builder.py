"""
Tests for triples/builder.py graph node construction.
"""

import pytest

from oerschema.schema import schema_from_dict
from oerschema.triples import GraphBuilder, NamespaceTable, TermScope, UnknownTermError


class TestClassNodes:
    """Shape of rdfs:Class nodes."""

    def test_course_without_parents(self, builder):
        schema = schema_from_dict(
            {"classes": {"Course": {"label": "Course", "comment": "A sequence of learning material."}}}
        )

        nodes = builder.build_graph(schema, TermScope("Course"))

        assert nodes == [
            {
                "@id": "oer:Course",
                "@type": "rdfs:Class",
                "rdfs:label": "Course",
                "rdfs:comment": "A sequence of learning material.",
            }
        ]

    def test_label_falls_back_to_name(self, builder, schema):
        (node,) = builder.build_graph(schema, TermScope("Lesson"))
        assert node["rdfs:label"] == "Lesson"

    def test_empty_comment_is_omitted(self, builder, schema):
        (node,) = builder.build_graph(schema, TermScope("Lesson"))
        assert "rdfs:comment" not in node

    def test_empty_lists_are_omitted(self, builder):
        schema = schema_from_dict({"classes": {"Thing": {"subClassOf": [], "properties": ["", " "]}}})

        (node,) = builder.build_graph(schema, TermScope("Thing"))

        assert "rdfs:subClassOf" not in node
        assert "schema:property" not in node

    def test_references_are_iri_nodes(self, builder, schema):
        (course,) = builder.build_graph(schema, TermScope("Course"))
        (action,) = builder.build_graph(schema, TermScope("Action"))

        assert course["schema:property"] == [{"@id": "oer:syllabus"}]
        assert action["rdfs:subClassOf"] == [{"@id": "schema:Action"}]


class TestPropertyNodes:
    """Shape of rdf:Property nodes."""

    def test_domain_and_range(self, builder, schema):
        (node,) = builder.build_graph(schema, TermScope("syllabus"))

        assert node["@id"] == "oer:syllabus"
        assert node["@type"] == "rdf:Property"
        assert node["rdfs:domain"] == [{"@id": "oer:Course"}]
        assert node["rdfs:range"] == [{"@id": "oer:Syllabus"}, {"@id": "schema:Text"}]

    def test_absolute_iri_reference_kept(self, builder):
        schema = schema_from_dict(
            {"properties": {"license": {"range": "http://purl.org/dc/terms/LicenseDocument"}}}
        )

        (node,) = builder.build_graph(schema, TermScope("license"))

        assert node["rdfs:range"] == [{"@id": "http://purl.org/dc/terms/LicenseDocument"}]


class TestScopes:
    """Full and single-term builds."""

    def test_full_scope_order(self, builder, schema):
        nodes = builder.build_graph(schema)

        assert [n["@id"] for n in nodes] == ["oer:Action", "oer:Course", "oer:Lesson", "oer:syllabus"]

    def test_full_scope_is_deterministic(self, builder, schema):
        assert builder.build_graph(schema, "full") == builder.build_graph(schema, "full")

    def test_declaration_order_does_not_matter(self, builder, sample_data):
        reordered = dict(sample_data)
        reordered["classes"] = dict(reversed(list(sample_data["classes"].items())))

        first = builder.build_graph(schema_from_dict(sample_data))
        second = builder.build_graph(schema_from_dict(reordered))

        assert first == second

    def test_unknown_term(self, builder, schema):
        with pytest.raises(UnknownTermError, match="Nonexistent"):
            builder.build_graph(schema, TermScope("Nonexistent"))

    def test_invalid_scope(self, builder, schema):
        with pytest.raises(ValueError):
            builder.build_graph(schema, "partial")

    def test_custom_vocabulary_prefix(self):
        builder = GraphBuilder(NamespaceTable(vocab_prefix="edu", vocab_iri="https://example.edu/"))
        schema = schema_from_dict({"classes": {"Course": {}}})

        (node,) = builder.build_graph(schema)

        assert node["@id"] == "edu:Course"


class TestJsonLdDocument:
    """Wrapping nodes with the prefix context."""

    def test_single_node_merged_with_context(self, builder, schema):
        doc = builder.jsonld_document(builder.build_graph(schema, TermScope("Course")))

        assert doc["@context"]["oer"] == "http://oerschema.org/"
        assert doc["@id"] == "oer:Course"
        assert "@graph" not in doc

    def test_many_nodes_under_graph(self, builder, schema):
        doc = builder.jsonld_document(builder.build_graph(schema))

        assert len(doc["@graph"]) == 4
        assert set(doc["@context"]) >= {"oer", "rdf", "rdfs", "schema", "owl", "xsd", "dcterms"}
