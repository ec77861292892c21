"""DXF format exporter for sheet layouts.

Generates 2D DXF files (R2010 format) with one sheet outline per sheet and
the placed piece outlines inside it, ready for a CNC panel saw or router.
Sheets are laid out left to right. DXF's y axis points up, so layout
coordinates (origin at the top-left corner, y down) are flipped.
"""

from __future__ import annotations

import logging
from io import StringIO
from pathlib import Path
from typing import TYPE_CHECKING, ClassVar

import ezdxf

from cutplan.infrastructure.exporters.base import ExporterRegistry

if TYPE_CHECKING:
    from ezdxf.document import Drawing
    from ezdxf.layouts import Modelspace

    from cutplan.infrastructure.bin_packing import (
        PackingResult,
        PlacedPiece,
        SheetLayout,
    )


logger = logging.getLogger(__name__)


# Layer configuration for DXF output
LAYERS = {
    "SHEETS": {"color": 8},  # Gray - stock sheet outlines
    "OUTLINE": {"color": 7},  # White - piece outlines
    "LABELS": {"color": 5},  # Blue - text labels
}


@ExporterRegistry.register("dxf")
class DxfExporter:
    """Exports sheet layouts to DXF format.

    Attributes:
        format_name: "dxf"
        file_extension: "dxf"
    """

    format_name: ClassVar[str] = "dxf"
    file_extension: ClassVar[str] = "dxf"

    def __init__(self, units: str = "inches", sheet_spacing: float = 6.0) -> None:
        """Initialize the DXF exporter.

        Args:
            units: Output units - "inches" or "mm".
            sheet_spacing: Gap between sheets, in inches.
        """
        if units not in ("inches", "mm"):
            raise ValueError(f"Invalid units: {units}. Must be 'inches' or 'mm'")
        self.units = units
        self.scale = 25.4 if units == "mm" else 1.0
        self.sheet_spacing = sheet_spacing

    def export(self, result: PackingResult, path: Path) -> None:
        """Write all sheets of the result to one DXF file."""
        if not result.layouts:
            logger.warning("No sheets to export")
        doc = self._build_document(result)
        doc.saveas(path)
        logger.info(f"Exported DXF to {path}")

    def export_string(self, result: PackingResult) -> str:
        """Export the result as DXF text."""
        doc = self._build_document(result)
        stream = StringIO()
        doc.write(stream)
        return stream.getvalue()

    def _build_document(self, result: PackingResult) -> Drawing:
        doc = ezdxf.new("R2010")
        for name, props in LAYERS.items():
            doc.layers.add(name, color=props["color"])

        msp = doc.modelspace()
        offset_x = 0.0
        for layout in result.layouts:
            self._draw_sheet(msp, layout, offset_x)
            offset_x += (layout.sheet_config.width + self.sheet_spacing) * self.scale
        return doc

    def _draw_sheet(self, msp: Modelspace, layout: SheetLayout, offset_x: float) -> None:
        """Draw one sheet outline, its pieces and a sheet title."""
        width = layout.sheet_config.width * self.scale
        height = layout.sheet_config.height * self.scale

        self._draw_rect(msp, offset_x, 0.0, width, height, "SHEETS")
        msp.add_text(
            f"Sheet {layout.sheet_index + 1}",
            height=0.5 * self.scale,
            dxfattribs={"layer": "LABELS", "insert": (offset_x, height + self.scale)},
        )

        for placement in layout.placements:
            self._draw_piece(msp, placement, offset_x, height)

    def _draw_piece(
        self,
        msp: Modelspace,
        placement: PlacedPiece,
        offset_x: float,
        sheet_height: float,
    ) -> None:
        width = placement.placed_width * self.scale
        height = placement.placed_height * self.scale
        x = offset_x + placement.x * self.scale
        # Flip y: layout y runs down from the top edge
        y = sheet_height - placement.y * self.scale - height

        self._draw_rect(msp, x, y, width, height, "OUTLINE")

        text_height = max(
            0.15 * self.scale, min(1.0 * self.scale, min(width, height) * 0.08)
        )
        msp.add_mtext(
            placement.dims_text,
            dxfattribs={
                "layer": "LABELS",
                "char_height": text_height,
                "insert": (x + width / 2, y + height / 2),
                "attachment_point": 5,  # MIDDLE_CENTER
            },
        )

    @staticmethod
    def _draw_rect(
        msp: Modelspace,
        x: float,
        y: float,
        width: float,
        height: float,
        layer: str,
    ) -> None:
        """Draw a closed rectangle with its bottom-left corner at (x, y)."""
        points = [
            (x, y),
            (x + width, y),
            (x + width, y + height),
            (x, y + height),
            (x, y),
        ]
        msp.add_lwpolyline(points, dxfattribs={"layer": layer})


__all__ = ["DxfExporter", "LAYERS"]
