"""Exporter framework for packing results.

Registered exporters:
- dxf: DXF drawing with sheet and piece outlines
- html: Printable HTML cutting plan
- json: Packing result as JSON
- svg: SVG cut diagrams showing piece placements on sheets

Usage:
    from cutplan.infrastructure.exporters import ExportManager, ExporterRegistry

    formats = ExporterRegistry.available_formats()

    manager = ExportManager(output_dir=Path("./output"))
    paths = manager.export_all(["svg", "dxf"], packing_result, project_name="kitchen")
"""

from cutplan.infrastructure.exporters.base import (
    Exporter,
    ExporterRegistry,
    ExportManager,
)

# Import exporters to trigger registration
from cutplan.infrastructure.exporters.dxf import DxfExporter
from cutplan.infrastructure.exporters.json_export import JsonPlanExporter
from cutplan.infrastructure.exporters.print_html import HtmlPrintExporter
from cutplan.infrastructure.exporters.svg import SvgExporter

__all__ = [
    "DxfExporter",
    "Exporter",
    "ExporterRegistry",
    "ExportManager",
    "HtmlPrintExporter",
    "JsonPlanExporter",
    "SvgExporter",
]
