"""
Generation Pipeline - Complete site generation run.

Orchestrates the flow: schema loading -> graph building -> statement
expansion -> serialization -> file emission.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Any, Sequence

from oerschema.config.settings import Settings, get_settings
from oerschema.publishing import FileEmitter, PublicationPlanner
from oerschema.schema import load_schema
from oerschema.triples import PUBLICATION_ORDER, GraphBuilder, NamespaceTable, QuadCodec, RdfFormat

logger = logging.getLogger(__name__)


# =============================================================================
# GENERATION RESULT
# =============================================================================


@dataclass
class GenerationResult:
    """Result from a complete generation run."""

    # Timing
    started_at: datetime = field(default_factory=datetime.now)
    completed_at: datetime | None = None
    duration_seconds: float = 0.0

    # Schema
    schema_file: str = ""
    classes: int = 0
    properties: int = 0

    # Output
    units_planned: int = 0
    output_dir: str = ""
    output_files: list[str] = field(default_factory=list)

    # Failures: expansion/serialization problems and files that could not be written
    failures: list[str] = field(default_factory=list)
    write_failures: list[str] = field(default_factory=list)

    def finalize(self) -> None:
        """Mark the run as complete and calculate duration."""
        self.completed_at = datetime.now()
        self.duration_seconds = (self.completed_at - self.started_at).total_seconds()

    @property
    def exit_code(self) -> int:
        """0 when everything was produced, 2 when some artifacts are missing."""
        return 2 if (self.failures or self.write_failures) else 0

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "timing": {
                "started_at": self.started_at.isoformat(),
                "completed_at": self.completed_at.isoformat() if self.completed_at else None,
                "duration_seconds": round(self.duration_seconds, 2),
            },
            "schema": {
                "file": self.schema_file,
                "classes": self.classes,
                "properties": self.properties,
            },
            "output": {
                "dir": self.output_dir,
                "planned": self.units_planned,
                "written": len(self.output_files),
                "files": self.output_files,
            },
            "failures": {
                "generation": self.failures,
                "write": self.write_failures,
            },
        }

    def print_summary(self) -> None:
        """Print a summary of the run."""
        print("\n" + "=" * 60)
        print("📊 GENERATION SUMMARY")
        print("=" * 60)
        print(f"\n⏱️  Duration: {self.duration_seconds:.2f}s")
        print(f"\n📂 Schema: {self.schema_file}")
        print(f"   Classes: {self.classes}")
        print(f"   Properties: {self.properties}")
        print(f"\n💾 Output: {self.output_dir}")
        print(f"   Files written: {len(self.output_files)} / {self.units_planned}")

        if self.failures or self.write_failures:
            print(f"\n⚠️  Failures: {len(self.failures) + len(self.write_failures)}")
            for failure in (self.failures + self.write_failures)[:10]:
                print(f"   - {failure}")
        else:
            print("\n✅ All artifacts generated")
        print("=" * 60)


# =============================================================================
# GENERATION PIPELINE
# =============================================================================


class GenerationPipeline:
    """
    Runs one generation pass from schema file to output directory.

    Args:
        settings: Configuration (defaults to the global settings)
        schema_file: Override for settings.paths.schema_file
        output_dir: Override for settings.paths.output_dir
    """

    def __init__(
        self,
        settings: Settings | None = None,
        schema_file: Path | str | None = None,
        output_dir: Path | str | None = None,
    ):
        self.settings = settings or get_settings()
        self.schema_file = Path(schema_file or self.settings.paths.schema_file)
        self.output_dir = Path(output_dir or self.settings.paths.output_dir)

        namespaces = NamespaceTable.from_settings(self.settings)
        self.builder = GraphBuilder(namespaces)
        self.codec = QuadCodec(namespaces, verify_round_trip=self.settings.output.verify_round_trip)

    def formats(self) -> Sequence[RdfFormat]:
        wanted = {RdfFormat(f) for f in self.settings.output.formats}
        return [fmt for fmt in PUBLICATION_ORDER if fmt in wanted]

    def execute(self) -> GenerationResult:
        """
        Run the pipeline.

        Raises:
            SchemaLoadError: If the schema cannot be loaded
            PathCollisionError: If two outputs share a path (nothing is written)
        """
        result = GenerationResult(schema_file=str(self.schema_file), output_dir=str(self.output_dir))

        logger.info("Loading schema from %s", self.schema_file)
        schema = load_schema(self.schema_file)
        result.classes = len(schema.classes)
        result.properties = len(schema.properties)

        planner = PublicationPlanner(
            builder=self.builder,
            codec=self.codec,
            formats=self.formats(),
            aggregate=self.settings.output.aggregate,
        )
        plan = planner.plan(schema)
        result.units_planned = len(plan)
        result.failures = [f.message for f in plan.failures]

        emitter = FileEmitter(self.output_dir)
        written = set(emitter.emit_all(plan))
        for unit in plan:
            if emitter.target(unit) in written:
                result.output_files.append(unit.path)
            else:
                result.write_failures.append(f"could not write {unit.path}")

        result.finalize()
        logger.info(
            "Generation finished: %d files, %d failures in %.2fs",
            len(result.output_files),
            len(result.failures) + len(result.write_failures),
            result.duration_seconds,
        )
        return result
