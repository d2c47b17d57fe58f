"""Schema package: vocabulary model and YAML loader."""

from .loader import SchemaLoadError, load_schema, schema_from_dict
from .model import ClassDefinition, PropertyDefinition, SchemaModel

__all__ = [
    "ClassDefinition",
    "PropertyDefinition",
    "SchemaModel",
    "SchemaLoadError",
    "load_schema",
    "schema_from_dict",
]
