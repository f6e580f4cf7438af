"""Exporter framework for optimization outputs.

This package provides a unified exporter framework with:
- Exporter Protocol: Defines the interface for all exporters
- ExporterRegistry: Central registry for format discovery
- ExportManager: Coordinates multi-format export operations

Registered exporters:
- dxf: DXF drawing of every sheet for CAM software
- json: Wire-format report with project name
- svg: SVG cut diagrams showing piece placements on sheets
- txt: Plain text sheet and waste summary

Usage:
    from cutplan.infrastructure.exporters import ExportManager, ExporterRegistry

    formats = ExporterRegistry.available_formats()

    manager = ExportManager(output_dir=Path("./output"))
    results = manager.export_all(["json", "svg"], output, project_name="kitchen")
"""

from cutplan.infrastructure.exporters.base import (
    Exporter,
    ExporterRegistry,
    ExportManager,
)
from cutplan.infrastructure.exporters.dxf import DxfExporter
from cutplan.infrastructure.exporters.json_report import JsonReportExporter
from cutplan.infrastructure.exporters.summary import SummaryExporter
from cutplan.infrastructure.exporters.svg import SvgExporter

__all__ = [
    "DxfExporter",
    "ExportManager",
    "Exporter",
    "ExporterRegistry",
    "JsonReportExporter",
    "SummaryExporter",
    "SvgExporter",
]
