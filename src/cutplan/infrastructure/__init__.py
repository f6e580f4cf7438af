"""Infrastructure layer - packing engine, parsing, rendering and exporters."""

from .bin_packing import (
    CutOptimizationService,
    LayoutAggregator,
    OptimizationReport,
    OptimizerConfig,
    PlacedPiece,
    SheetLayout,
    ShelfPacker,
    calculate_waste_percentage,
)
from .cut_diagram_renderer import CutDiagramRenderer
from .exporters import (
    DxfExporter,
    Exporter,
    ExporterRegistry,
    ExportManager,
    JsonReportExporter,
    SummaryExporter,
    SvgExporter,
)
from .serialization import report_from_dict, report_to_dict
from .xml_parser import ProjectXmlParser

__all__ = [
    # Packing
    "CutOptimizationService",
    "LayoutAggregator",
    "OptimizationReport",
    "OptimizerConfig",
    "PlacedPiece",
    "SheetLayout",
    "ShelfPacker",
    "calculate_waste_percentage",
    # Parsing and serialization
    "ProjectXmlParser",
    "report_from_dict",
    "report_to_dict",
    # Rendering and export
    "CutDiagramRenderer",
    "DxfExporter",
    "Exporter",
    "ExporterRegistry",
    "ExportManager",
    "JsonReportExporter",
    "SummaryExporter",
    "SvgExporter",
]
