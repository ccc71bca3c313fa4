"""Exporter framework for tile layout outputs.

Registered exporters:
- json: Plan, counts and every placed tile as JSON
- svg: Drawing of the outline with its tiles
- text: Human-readable summary

Usage:
    from calepinage.infrastructure.exporters import ExporterRegistry

    exporter = ExporterRegistry.get("svg")()
    exporter.export(output, Path("plan.svg"))
"""

from calepinage.infrastructure.exporters.base import Exporter, ExporterRegistry
from calepinage.infrastructure.exporters.json_export import JsonExporter
from calepinage.infrastructure.exporters.svg import SvgExporter
from calepinage.infrastructure.exporters.text import TextExporter

__all__ = [
    "Exporter",
    "ExporterRegistry",
    "JsonExporter",
    "SvgExporter",
    "TextExporter",
]
