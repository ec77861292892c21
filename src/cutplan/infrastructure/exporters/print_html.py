"""Printable HTML exporter.

Produces a single self-contained page with the plan summary, per-sheet
piece tables and inline SVG diagrams, laid out for printing one sheet per
page.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, ClassVar

from cutplan.infrastructure.cut_diagram_renderer import CutDiagramRenderer
from cutplan.infrastructure.exporters.base import ExporterRegistry

if TYPE_CHECKING:
    from cutplan.infrastructure.bin_packing import PackingResult


@ExporterRegistry.register("html")
class HtmlPrintExporter:
    """Exports a printable HTML cutting plan."""

    format_name: ClassVar[str] = "html"
    file_extension: ClassVar[str] = "html"

    def __init__(self, title: str = "Cutting Plan", scale: float = 6.0) -> None:
        self.title = title
        self.renderer = CutDiagramRenderer(scale=scale)

    def export(self, result: PackingResult, path: Path) -> None:
        path.write_text(self.export_string(result), encoding="utf-8")

    def export_string(self, result: PackingResult) -> str:
        return self.renderer.render_html(result, title=self.title)
