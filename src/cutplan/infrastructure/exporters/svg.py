"""SVG exporter for cut diagrams."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, ClassVar

from cutplan.infrastructure.cut_diagram_renderer import CutDiagramRenderer
from cutplan.infrastructure.exporters.base import ExporterRegistry

if TYPE_CHECKING:
    from cutplan.infrastructure.bin_packing import PackingResult


@ExporterRegistry.register("svg")
class SvgExporter:
    """SVG exporter for cut layout diagrams.

    Writes all sheets stacked vertically into one SVG document.

    Attributes:
        format_name: Identifier for this export format.
        file_extension: File extension for SVG files.
    """

    format_name: ClassVar[str] = "svg"
    file_extension: ClassVar[str] = "svg"

    def __init__(
        self,
        scale: float = 10.0,
        show_labels: bool = True,
        use_size_colors: bool = True,
    ) -> None:
        self.renderer = CutDiagramRenderer(
            scale=scale,
            show_labels=show_labels,
            use_size_colors=use_size_colors,
        )

    def export(self, result: PackingResult, path: Path) -> None:
        """Write the combined SVG diagram to ``path``."""
        path.write_text(self.export_string(result), encoding="utf-8")

    def export_string(self, result: PackingResult) -> str:
        return self.renderer.render_combined_svg(result)

    def export_individual_sheets(
        self, result: PackingResult, base_path: Path
    ) -> list[Path]:
        """Export one SVG file per sheet.

        Args:
            result: The packing result.
            base_path: Base path for output files. With more than one sheet,
                files are named {stem}_1.svg, {stem}_2.svg, etc.

        Returns:
            List of paths to the created files.
        """
        svgs = self.renderer.render_all_svg(result)
        created_files: list[Path] = []

        for i, svg_content in enumerate(svgs, start=1):
            if len(svgs) == 1:
                file_path = base_path
            else:
                suffix = base_path.suffix or ".svg"
                file_path = base_path.parent / f"{base_path.stem}_{i}{suffix}"
            file_path.write_text(svg_content, encoding="utf-8")
            created_files.append(file_path)

        return created_files
