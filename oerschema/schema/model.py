"""
Schema Model - In-memory representation of the OER vocabulary.

Holds the classes and properties declared in the schema YAML. Instances are
frozen: a model is built once per generation run and only read afterwards.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _as_name_list(value: Any) -> Any:
    """Accept a single reference or a list of references."""
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    return value


def _as_text(value: Any) -> Any:
    if value is None or isinstance(value, str):
        return value
    if isinstance(value, (int, float)):
        return str(value)
    return value


class ClassDefinition(BaseModel):
    """A vocabulary class (rdfs:Class)."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    label: str | None = Field(default=None, description="Human readable label")
    comment: str | None = Field(default=None, description="Definition text")
    sub_class_of: list[str] = Field(
        default_factory=list, alias="subClassOf", description="Parent classes"
    )
    properties: list[str] = Field(
        default_factory=list, description="Properties expected on instances"
    )

    @field_validator("sub_class_of", "properties", mode="before")
    @classmethod
    def _coerce_lists(cls, value: Any) -> Any:
        return _as_name_list(value)

    @field_validator("label", "comment", mode="before")
    @classmethod
    def _coerce_text(cls, value: Any) -> Any:
        return _as_text(value)


class PropertyDefinition(BaseModel):
    """A vocabulary property (rdf:Property)."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    label: str | None = Field(default=None, description="Human readable label")
    comment: str | None = Field(default=None, description="Definition text")
    domain: list[str] = Field(default_factory=list, description="Classes using this property")
    range: list[str] = Field(default_factory=list, description="Expected value types")

    @field_validator("domain", "range", mode="before")
    @classmethod
    def _coerce_lists(cls, value: Any) -> Any:
        return _as_name_list(value)

    @field_validator("label", "comment", mode="before")
    @classmethod
    def _coerce_text(cls, value: Any) -> Any:
        return _as_text(value)


class SchemaModel(BaseModel):
    """The whole vocabulary: classes and properties keyed by name."""

    model_config = ConfigDict(frozen=True)

    classes: dict[str, ClassDefinition] = Field(default_factory=dict)
    properties: dict[str, PropertyDefinition] = Field(default_factory=dict)

    def class_names(self) -> list[str]:
        """Class names in publication order (sorted)."""
        return sorted(self.classes)

    def property_names(self) -> list[str]:
        """Property names in publication order (sorted)."""
        return sorted(self.properties)

    def term_names(self) -> list[str]:
        """All term names: classes first, then properties."""
        return self.class_names() + self.property_names()

    def __contains__(self, name: object) -> bool:
        return name in self.classes or name in self.properties

    @property
    def term_count(self) -> int:
        return len(self.classes) + len(self.properties)
