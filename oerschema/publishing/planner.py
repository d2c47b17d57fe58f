"""
Publication Planner - Decides which files to emit for a schema.

Every class and property gets one file per format under `terms/`, and the
whole vocabulary gets aggregate files at the output root. Failures are
isolated: a term whose graph cannot be expanded is skipped as a whole, and
a format that fails to serialize is skipped for that term only.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator, Sequence

from oerschema.errors import OerSchemaError
from oerschema.schema import SchemaModel
from oerschema.triples import (
    PUBLICATION_ORDER,
    GraphBuilder,
    GraphExpansionError,
    GraphNode,
    LinkedDataStatement,
    QuadCodec,
    RdfFormat,
    SerializationError,
)

logger = logging.getLogger(__name__)

TERMS_DIR = "terms"
AGGREGATE_STEM = "schema"


class PathCollisionError(OerSchemaError):
    """Raised when two publication units target the same path."""

    def __init__(self, path: str, first: str | None, second: str | None):
        super().__init__(
            f"Path collision on {path}: "
            f"'{first or AGGREGATE_STEM}' and '{second or AGGREGATE_STEM}'"
        )
        self.path = path


class PublicationScope(str, Enum):
    AGGREGATE = "aggregate"
    PER_TERM = "per_term"


@dataclass(frozen=True)
class PublicationUnit:
    """One file to write: a term (or the aggregate) in one format."""

    term_name: str | None
    format: RdfFormat
    scope: PublicationScope
    path: str
    data: bytes


@dataclass(frozen=True)
class PlanningFailure:
    """A term or term/format combination that could not be produced."""

    term_name: str | None
    format: RdfFormat | None
    kind: str  # "expansion" or "serialization"
    message: str


@dataclass
class PublicationPlan:
    """Units to emit, in publication order, plus the failures met on the way."""

    units: list[PublicationUnit] = field(default_factory=list)
    failures: list[PlanningFailure] = field(default_factory=list)

    def __iter__(self) -> Iterator[PublicationUnit]:
        return iter(self.units)

    def __len__(self) -> int:
        return len(self.units)

    @property
    def paths(self) -> list[str]:
        return [u.path for u in self.units]

    @property
    def has_failures(self) -> bool:
        return bool(self.failures)


# =============================================================================
# PUBLICATION PLANNER
# =============================================================================


class PublicationPlanner:
    """
    Plans per-term and aggregate publication units.

    Args:
        builder: Graph builder (shares the codec's namespace table)
        codec: Statement codec
        formats: Formats to produce, in output order
        aggregate: Whether to produce the `schema.<ext>` files
    """

    def __init__(
        self,
        builder: GraphBuilder | None = None,
        codec: QuadCodec | None = None,
        formats: Sequence[RdfFormat] = PUBLICATION_ORDER,
        aggregate: bool = True,
    ):
        self.builder = builder or GraphBuilder()
        self.codec = codec or QuadCodec(self.builder.namespaces)
        self.formats = tuple(formats)
        self.aggregate = aggregate

    def plan(self, schema: SchemaModel) -> PublicationPlan:
        """
        Plan every unit for the schema.

        Raises:
            PathCollisionError: If two units would be written to the same path
        """
        plan = PublicationPlan()
        aggregate_statements: list[LinkedDataStatement] = []

        terms: list[tuple[str, GraphNode]] = [
            (name, self.builder.class_node(name, schema.classes[name]))
            for name in schema.class_names()
        ]
        terms += [
            (name, self.builder.property_node(name, schema.properties[name]))
            for name in schema.property_names()
        ]
        self._check_paths([name for name, _ in terms])

        for name, node in terms:
            try:
                statements = self.codec.to_quads([node])
            except GraphExpansionError as e:
                logger.error("Skipping term '%s': %s", name, e)
                plan.failures.append(PlanningFailure(name, None, "expansion", str(e)))
                continue

            aggregate_statements.extend(statements)
            for fmt in self.formats:
                path = self.term_path(name, fmt)
                self._add(plan, name, fmt, PublicationScope.PER_TERM, path, statements)

        if self.aggregate:
            for fmt in self.formats:
                path = self.aggregate_path(fmt)
                self._add(plan, None, fmt, PublicationScope.AGGREGATE, path, aggregate_statements)

        logger.info(
            "Planned %d units for %d terms (%d failures)",
            len(plan.units),
            len(terms),
            len(plan.failures),
        )
        return plan

    @staticmethod
    def term_path(name: str, fmt: RdfFormat) -> str:
        return f"{TERMS_DIR}/{name}{fmt.extension}"

    @staticmethod
    def aggregate_path(fmt: RdfFormat) -> str:
        return f"{AGGREGATE_STEM}{fmt.extension}"

    def _check_paths(self, names: list[str]) -> None:
        """Claim every target path up front so collisions abort before any work."""
        claimed: dict[str, str | None] = {}
        targets = [(name, self.term_path(name, fmt)) for name in names for fmt in self.formats]
        if self.aggregate:
            targets += [(None, self.aggregate_path(fmt)) for fmt in self.formats]

        for name, path in targets:
            if path in claimed:
                raise PathCollisionError(path, claimed[path], name)
            claimed[path] = name

    def _add(
        self,
        plan: PublicationPlan,
        name: str | None,
        fmt: RdfFormat,
        scope: PublicationScope,
        path: str,
        statements: list[LinkedDataStatement],
    ) -> None:
        try:
            data = self.codec.serialize(statements, fmt, term=name)
        except SerializationError as e:
            logger.error("%s", e)
            plan.failures.append(PlanningFailure(name, fmt, "serialization", str(e)))
            return

        plan.units.append(
            PublicationUnit(term_name=name, format=fmt, scope=scope, path=path, data=data)
        )
