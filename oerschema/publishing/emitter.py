"""
File Emitter - Writes publication units below the output root.

Writes go to a temporary file in the destination directory and are then
renamed over the target, so readers never see a half-written file. Two
generator runs sharing one output directory are not coordinated: the last
rename wins.
"""

import logging
import os
import tempfile
from pathlib import Path
from typing import Iterable

from .planner import PublicationUnit

logger = logging.getLogger(__name__)


class FileEmitter:
    """
    Persists units to disk.

    Args:
        root: Output directory; unit paths are relative to it
    """

    def __init__(self, root: Path | str):
        self.root = Path(root)

    def target(self, unit: PublicationUnit) -> Path:
        return self.root / unit.path

    def emit(self, unit: PublicationUnit) -> bool:
        """
        Write one unit, replacing any existing file.

        Returns:
            True if the file was written, False on an OS error
        """
        path = self.target(unit)
        tmp_name = None
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            with tempfile.NamedTemporaryFile(
                mode="wb", dir=path.parent, prefix=f".{path.name}.", suffix=".tmp", delete=False
            ) as tmp:
                tmp_name = tmp.name
                tmp.write(unit.data)
            # mkstemp files are private; published files must be world-readable
            os.chmod(tmp_name, 0o644)
            os.replace(tmp_name, path)
        except OSError as e:
            logger.error("Failed to write %s: %s", path, e)
            if tmp_name and os.path.exists(tmp_name):
                os.unlink(tmp_name)
            return False

        logger.debug("Wrote %s (%d bytes)", path, len(unit.data))
        return True

    def emit_all(self, units: Iterable[PublicationUnit]) -> list[Path]:
        """Write units in order; returns the paths that were written."""
        written = []
        for unit in units:
            if self.emit(unit):
                written.append(self.target(unit))
        return written
