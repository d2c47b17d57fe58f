"""
Tests for schema/loader.py and schema/model.py.

Tests cover:
- Loading from YAML files and mappings
- Permissive handling of draft (null) entries
- Coercion of single references into lists
- Structural errors raised as SchemaLoadError
"""

import pytest

from oerschema.schema import SchemaLoadError, SchemaModel, load_schema, schema_from_dict


class TestLoadSchema:
    """Loading the vocabulary from a file."""

    def test_loads_classes_and_properties(self, schema_file):
        schema = load_schema(schema_file)

        assert isinstance(schema, SchemaModel)
        assert set(schema.classes) == {"Course", "Action", "Lesson"}
        assert set(schema.properties) == {"syllabus"}

    def test_null_entries_are_skipped(self, schema_file):
        schema = load_schema(schema_file)

        assert "Draft" not in schema
        assert "duration" not in schema

    def test_single_reference_becomes_list(self, schema):
        assert schema.classes["Action"].sub_class_of == ["schema:Action"]
        assert schema.properties["syllabus"].domain == ["Course"]
        assert schema.properties["syllabus"].range == ["Syllabus", "schema:Text"]

    def test_missing_optional_fields(self, schema):
        lesson = schema.classes["Lesson"]
        assert lesson.label is None
        assert lesson.properties == []

    def test_missing_file(self, tmp_path):
        with pytest.raises(SchemaLoadError, match="Cannot read"):
            load_schema(tmp_path / "missing.yml")

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "broken.yml"
        path.write_text("classes: [unclosed\n", encoding="utf-8")

        with pytest.raises(SchemaLoadError, match="Invalid YAML"):
            load_schema(path)

    def test_empty_file_is_empty_schema(self, tmp_path):
        path = tmp_path / "empty.yml"
        path.write_text("", encoding="utf-8")

        schema = load_schema(path)
        assert schema.term_count == 0

    def test_shipped_vocabulary_loads(self):
        from pathlib import Path

        shipped = Path(__file__).resolve().parent.parent / "config" / "schema.yml"
        schema = load_schema(shipped)

        assert "Course" in schema.classes
        assert "Rubric" not in schema  # draft entry
        assert schema.classes["Course"].label == "Course"


class TestSchemaFromDict:
    """Structural validation of already-parsed mappings."""

    def test_top_level_must_be_mapping(self):
        with pytest.raises(SchemaLoadError, match="top level"):
            schema_from_dict(["Course"])

    def test_section_must_be_mapping(self):
        with pytest.raises(SchemaLoadError, match="'classes' must be a mapping"):
            schema_from_dict({"classes": ["Course", "Action"]})

    def test_entry_must_be_mapping(self):
        with pytest.raises(SchemaLoadError, match="classes.Course must be a mapping"):
            schema_from_dict({"classes": {"Course": "A course"}})

    def test_wrong_field_shape(self):
        with pytest.raises(SchemaLoadError, match="invalid entry properties.name"):
            schema_from_dict({"properties": {"name": {"domain": {"not": "a list"}}}})

    @pytest.mark.parametrize("name", ["a/b", "..", "back\\slash", "  "])
    def test_rejects_names_unusable_as_file_names(self, name):
        with pytest.raises(SchemaLoadError):
            schema_from_dict({"classes": {name: {"label": "x"}}})

    @pytest.mark.parametrize("name", ["Learning Resource", "Course<1>", 'say"hi"', "a{b}", "tab\tname"])
    def test_rejects_names_unusable_in_iris(self, name):
        with pytest.raises(SchemaLoadError, match="not allowed in an IRI"):
            schema_from_dict({"properties": {name: {}}})

    def test_null_sections(self):
        schema = schema_from_dict({"classes": None, "properties": None})
        assert schema.term_count == 0

    def test_numeric_label_is_text(self):
        schema = schema_from_dict({"classes": {"Year": {"label": 2024}}})
        assert schema.classes["Year"].label == "2024"

    def test_unknown_keys_are_ignored(self):
        schema = schema_from_dict({"classes": {"Course": {"label": "Course", "url": "x"}}})
        assert schema.classes["Course"].label == "Course"

    def test_model_is_frozen(self, schema):
        with pytest.raises(Exception):
            schema.classes["Course"].label = "Changed"

    def test_names_sorted(self, schema):
        assert schema.class_names() == ["Action", "Course", "Lesson"]
        assert schema.term_names() == ["Action", "Course", "Lesson", "syllabus"]
