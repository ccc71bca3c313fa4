"""Application layer - use cases and orchestration."""

from .commands import GenerateLayoutCommand, ReplayEditorCommand
from .dtos import LayoutOutput
from .plan import PlanState

__all__ = [
    "GenerateLayoutCommand",
    "LayoutOutput",
    "PlanState",
    "ReplayEditorCommand",
]
