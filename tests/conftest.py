"""Shared fixtures: a small vocabulary, pipeline components and settings.

The sample schema covers the cases the generator has to normalize: a label
falling back to the term name, an empty comment, a single-string
subClassOf, prefixed references, draft entries without a body, and a
comment with characters that need escaping in every syntax.
"""

import logging

import pytest
import yaml

from oerschema.config.settings import NamespacesConfig, OutputConfig, PathsConfig, ServerConfig, Settings
from oerschema.schema import schema_from_dict
from oerschema.triples import GraphBuilder, NamespaceTable, QuadCodec

TRICKY_COMMENT = 'Outline of a "course".\nSee <Syllabus> & notes\twith a tab and a \\n that is no newline.'

SAMPLE_SCHEMA = {
    "classes": {
        "Course": {
            "label": "Course",
            "comment": "A sequence of learning material.",
            "properties": ["syllabus"],
        },
        "Action": {
            "label": "Action",
            "comment": "An action is something that is done.",
            "subClassOf": "schema:Action",
        },
        "Lesson": {"comment": "", "subClassOf": ["LearningComponent"]},
        "Draft": None,
    },
    "properties": {
        "syllabus": {
            "label": "syllabus",
            "comment": TRICKY_COMMENT,
            "domain": "Course",
            "range": ["Syllabus", "schema:Text"],
        },
        "duration": None,
    },
}


@pytest.fixture
def sample_data():
    """A fresh copy of the sample schema mapping."""
    return yaml.safe_load(yaml.safe_dump(SAMPLE_SCHEMA))


@pytest.fixture
def schema(sample_data):
    return schema_from_dict(sample_data)


@pytest.fixture
def schema_file(tmp_path, sample_data):
    """The sample schema written as YAML."""
    path = tmp_path / "schema.yml"
    path.write_text(yaml.safe_dump(sample_data, sort_keys=False), encoding="utf-8")
    return path


@pytest.fixture
def namespaces():
    return NamespaceTable()


@pytest.fixture
def builder(namespaces):
    return GraphBuilder(namespaces)


@pytest.fixture
def codec(namespaces):
    return QuadCodec(namespaces)


@pytest.fixture
def settings(tmp_path, schema_file):
    """Settings pointing at the sample schema and a temporary output directory."""
    return Settings(
        paths=PathsConfig(schema_file=schema_file, output_dir=tmp_path / "dist"),
        namespaces=NamespacesConfig(),
        output=OutputConfig(verify_round_trip=True),
        server=ServerConfig(),
    )


@pytest.fixture(autouse=True)
def _restore_logging():
    """The CLI's --quiet mode disables logging process-wide."""
    yield
    logging.disable(logging.NOTSET)
