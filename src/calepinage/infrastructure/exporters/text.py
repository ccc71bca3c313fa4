"""Plain-text summary exporter."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING, ClassVar

from calepinage.infrastructure.exporters.base import ExporterRegistry
from calepinage.infrastructure.formatters import LayoutSummaryFormatter

if TYPE_CHECKING:
    from calepinage.application.dtos import LayoutOutput


logger = logging.getLogger(__name__)


@ExporterRegistry.register("text")
class TextExporter:
    """Exports the human-readable layout summary.

    Attributes:
        format_name: "text"
        file_extension: "txt"
    """

    format_name: ClassVar[str] = "text"
    file_extension: ClassVar[str] = "txt"

    def __init__(self, include_edges: bool = True) -> None:
        self.formatter = LayoutSummaryFormatter(include_edges=include_edges)

    def export(self, output: LayoutOutput, path: Path) -> None:
        path.write_text(self.export_string(output) + "\n", encoding="utf-8")
        logger.info(f"Exported text summary to {path}")

    def export_string(self, output: LayoutOutput) -> str:
        return self.formatter.format(output)
