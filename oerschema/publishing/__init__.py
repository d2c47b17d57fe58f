"""Publishing package: plans output files and writes them to disk."""

from .emitter import FileEmitter
from .planner import (
    PathCollisionError,
    PlanningFailure,
    PublicationPlan,
    PublicationPlanner,
    PublicationScope,
    PublicationUnit,
)

__all__ = [
    "FileEmitter",
    "PathCollisionError",
    "PlanningFailure",
    "PublicationPlan",
    "PublicationPlanner",
    "PublicationScope",
    "PublicationUnit",
]
