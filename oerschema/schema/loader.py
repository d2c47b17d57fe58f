"""
Schema Loader - Reads the vocabulary YAML into a SchemaModel.

The source is a mapping with two optional top-level keys, `classes` and
`properties`, each a mapping of term name to term attributes. Draft files
often carry placeholder entries with no body; those are skipped.
"""

import logging
from pathlib import Path
from typing import Any, Mapping

import yaml
from pydantic import ValidationError

from oerschema.errors import OerSchemaError

from .model import ClassDefinition, PropertyDefinition, SchemaModel

logger = logging.getLogger(__name__)


class SchemaLoadError(OerSchemaError):
    """Raised when the schema source is unreadable or malformed."""


def load_schema(source: Path | str) -> SchemaModel:
    """
    Load a schema definition from a YAML file.

    Args:
        source: Path to the schema YAML file

    Returns:
        The parsed SchemaModel

    Raises:
        SchemaLoadError: If the file cannot be read or is malformed
    """
    path = Path(source)
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except OSError as e:
        raise SchemaLoadError(f"Cannot read schema file {path}: {e}") from e
    except yaml.YAMLError as e:
        raise SchemaLoadError(f"Invalid YAML in schema file {path}: {e}") from e

    schema = schema_from_dict(data, source_name=str(path))
    logger.info(
        "Loaded schema from %s (%d classes, %d properties)",
        path,
        len(schema.classes),
        len(schema.properties),
    )
    return schema


def schema_from_dict(data: Any, source_name: str = "<mapping>") -> SchemaModel:
    """Build a SchemaModel from an already-parsed mapping."""
    if data is None:
        data = {}
    if not isinstance(data, Mapping):
        raise SchemaLoadError(
            f"{source_name}: expected a mapping at top level, got {type(data).__name__}"
        )

    classes = _read_section(data, "classes", ClassDefinition, source_name)
    properties = _read_section(data, "properties", PropertyDefinition, source_name)
    return SchemaModel(classes=classes, properties=properties)


def _read_section(
    data: Mapping, key: str, model: type[ClassDefinition] | type[PropertyDefinition], source_name: str
) -> dict:
    section = data.get(key)
    if section is None:
        return {}
    if not isinstance(section, Mapping):
        raise SchemaLoadError(
            f"{source_name}: '{key}' must be a mapping, got {type(section).__name__}"
        )

    entries = {}
    for raw_name, body in section.items():
        name = _check_name(raw_name, key, source_name)
        if body is None:
            logger.debug("Skipping empty %s entry '%s'", key, name)
            continue
        if not isinstance(body, Mapping):
            raise SchemaLoadError(
                f"{source_name}: {key}.{name} must be a mapping, got {type(body).__name__}"
            )
        try:
            entries[name] = model.model_validate(dict(body))
        except ValidationError as e:
            raise SchemaLoadError(f"{source_name}: invalid entry {key}.{name}: {e}") from e

    return entries


# Characters that cannot appear in an IRI
IRI_UNSAFE_CHARS = frozenset(' <>"{}|^`')


def _check_name(raw_name: Any, key: str, source_name: str) -> str:
    """Term names become file names and IRI local names."""
    name = str(raw_name) if raw_name is not None else ""
    if not name.strip():
        raise SchemaLoadError(f"{source_name}: empty name in '{key}'")
    if "/" in name or "\\" in name or name in (".", ".."):
        raise SchemaLoadError(f"{source_name}: name '{name}' in '{key}' is not a valid term name")
    unsafe = sorted(IRI_UNSAFE_CHARS.intersection(name) | {c for c in name if c.isspace()})
    if unsafe:
        raise SchemaLoadError(
            f"{source_name}: name '{name}' in '{key}' contains characters not allowed in an IRI: "
            + " ".join(repr(c) for c in unsafe)
        )
    return name
