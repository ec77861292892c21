"""Infrastructure layer - packing engine, renderers and exporters."""

from .bin_packing import (
    PackingConfig,
    PackingMetrics,
    PackingResult,
    PackingStatus,
    PlacedPiece,
    PlacementCandidate,
    SheetConfig,
    SheetLayout,
    SheetPacker,
)
from .cut_diagram_renderer import CutDiagramRenderer
from .exporters import (
    DxfExporter,
    Exporter,
    ExporterRegistry,
    ExportManager,
    HtmlPrintExporter,
    JsonPlanExporter,
    SvgExporter,
)
from .formatters import CutPlanFormatter, JsonExporter
from .free_rectangles import FreeRectangleSet
from .metrics import MetricsAggregator, is_efficient
from .packing_orchestrator import PackingOrchestrator, longest_side_key
from .strip_packing import StripPacker, StripResult

__all__ = [
    # Packing engine
    "FreeRectangleSet",
    "MetricsAggregator",
    "PackingConfig",
    "PackingMetrics",
    "PackingOrchestrator",
    "PackingResult",
    "PackingStatus",
    "PlacedPiece",
    "PlacementCandidate",
    "SheetConfig",
    "SheetLayout",
    "SheetPacker",
    "StripPacker",
    "StripResult",
    "is_efficient",
    "longest_side_key",
    # Presentation
    "CutDiagramRenderer",
    "CutPlanFormatter",
    "JsonExporter",
    # Exporter framework
    "DxfExporter",
    "Exporter",
    "ExporterRegistry",
    "ExportManager",
    "HtmlPrintExporter",
    "JsonPlanExporter",
    "SvgExporter",
]
