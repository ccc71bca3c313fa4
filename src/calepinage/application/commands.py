"""Application commands (use cases) for plans and layouts."""

from __future__ import annotations

import logging
from dataclasses import replace

from calepinage.application.config.schema import EditorEventLog
from calepinage.application.config.validator import validate_plan
from calepinage.application.dtos import LayoutOutput
from calepinage.application.plan import PlanState
from calepinage.domain.geometry import edge_lengths
from calepinage.domain.layout import TileLayoutEngine
from calepinage.domain.outline_editor import EditorEvent, EditorState, OutlineEditor

logger = logging.getLogger(__name__)


class GenerateLayoutCommand:
    """Command to measure a plan and compute its tile layout."""

    def __init__(self, engine: TileLayoutEngine | None = None) -> None:
        self.engine = engine or TileLayoutEngine()

    def execute(self, plan: PlanState) -> LayoutOutput:
        """Execute the layout command.

        The plan is validated first; blocking errors yield an output with
        an empty layout and the error messages, warnings are passed along.

        Args:
            plan: Plan state to measure and tile.

        Returns:
            LayoutOutput with area, edge labels and layout result.
        """
        validation = validate_plan(plan.to_document())
        output = LayoutOutput(
            outline=plan.editor.points,
            start_point=plan.editor.start_point,
            scale=plan.scale,
            tiles=plan.tiles,
            area=plan.area,
            edges=edge_lengths(plan.editor.points, plan.scale),
            warnings=[f"{w.path}: {w.message}" for w in validation.warnings],
        )

        if not validation.is_valid:
            output.errors = [f"{e.path}: {e.message}" for e in validation.errors]
            logger.info("Plan has %d error(s); layout skipped", len(output.errors))
            return output

        output.result = self.engine.compute(
            plan.editor.points, plan.editor.start_point, plan.tiles, plan.scale
        )
        return output


class ReplayEditorCommand:
    """Command to rebuild an outline from a recorded sequence of editor events."""

    def execute(self, log: EditorEventLog, plan: PlanState | None = None) -> PlanState:
        """Replay ``log`` on top of ``plan`` (or a fresh plan at the log's scale).

        Returns:
            The plan state after the last event.
        """
        if plan is None:
            plan = PlanState(scale=log.scale)
        elif plan.scale != log.scale:
            plan = replace(plan, scale=log.scale)

        editor = OutlineEditor(plan.scale)
        events = [EditorEvent(kind=e.kind, x=e.x, y=e.y) for e in log.events]
        state: EditorState = editor.replay(events, plan.editor)
        logger.debug(
            "Replayed %d events: %s with %d points",
            len(events),
            state.phase.value,
            len(state.points),
        )
        return replace(plan, editor=state)
