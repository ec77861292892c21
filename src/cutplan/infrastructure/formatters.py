"""Text and JSON formatters for packing results."""

from __future__ import annotations

import json
from typing import Any

from cutplan.domain.value_objects import PieceRequest
from cutplan.infrastructure.bin_packing import (
    PackingConfig,
    PackingResult,
    PlacedPiece,
    SheetLayout,
)
from cutplan.infrastructure.metrics import is_efficient


class CutPlanFormatter:
    """Formats a packing result as a shop cutting plan.

    Identical placements on a sheet are grouped into one line with a count
    and a ``(1-cut)`` / ``(2-cut)`` tag.
    """

    def __init__(self, config: PackingConfig | None = None) -> None:
        self._config = config or PackingConfig()

    def format(self, result: PackingResult) -> str:
        """Format the summary, per-sheet plan and messages as text."""
        metrics = result.metrics
        lines = [
            "CUTTING PLAN",
            "=" * 60,
            f"Total Sheets Needed: {metrics.total_sheets}",
            f"Total Cuts: {metrics.total_cuts}",
            f"Total Edges: {metrics.total_edge_banding}",
            f"Total Waste: {metrics.total_waste_percentage:.1f}%",
        ]

        for layout in result.layouts:
            lines.append("")
            lines.extend(self._format_sheet(layout))

        if result.messages:
            lines.append("")
            lines.append("ISSUES")
            lines.append("-" * 60)
            lines.extend(f"  {message}" for message in result.messages)

        return "\n".join(lines)

    def format_requests(self, requests: list[PieceRequest]) -> str:
        """Format a normalized cut list as a table."""
        if not requests:
            return "No pieces in cut list."

        lines = [
            "CUT LIST",
            "=" * 60,
            f"{'Width':<12} {'Height':<12} {'Qty':<6} {'Edges':<6} {'Cuts'}",
            "-" * 60,
        ]
        for request in requests:
            lines.append(
                f"{request.width_text:<12} {request.height_text:<12} "
                f"{request.quantity:<6} {request.edge_banding_units:<6} "
                f"{self._cut_tag(request)}"
            )
        lines.append("-" * 60)
        lines.append(f"{'TOTAL':<12} {'':<12} {sum(r.quantity for r in requests)}")
        return "\n".join(lines)

    def _format_sheet(self, layout: SheetLayout) -> list[str]:
        header = (
            f"Sheet {layout.sheet_index + 1}: "
            f"{layout.piece_count} pcs, {layout.cut_count} cuts, "
            f"{layout.edge_banding_total} edges, {layout.waste_percentage:.1f}% waste"
        )
        if layout.source == "strip":
            header += " [strip]"

        lines = [header, "-" * 60]
        for (dims, request), count in _group(layout.placements).items():
            edges = request.edge_banding_units
            edge_tag = f" {edges} EDGE" if edges > 0 else ""
            lines.append(
                f"  {count:>3}PCS {dims}{edge_tag} {self._cut_tag(request)}"
            )
        return lines

    def _cut_tag(self, request: PieceRequest) -> str:
        efficient = is_efficient(
            request,
            self._config.efficient_dims,
            self._config.efficiency_tolerance,
        )
        return "(1-cut)" if efficient else "(2-cut)"


def _group(
    placements: tuple[PlacedPiece, ...],
) -> dict[tuple[str, PieceRequest], int]:
    """Count placements sharing the same placed dimensions and request."""
    counts: dict[tuple[str, PieceRequest], int] = {}
    for placement in placements:
        key = (placement.dims_text, placement.item.request)
        counts[key] = counts.get(key, 0) + 1
    return counts


class JsonExporter:
    """Exports packing results as JSON."""

    def to_dict(self, result: PackingResult) -> dict[str, Any]:
        """Convert a packing result to plain JSON-serializable data."""
        metrics = result.metrics
        return {
            "status": result.status.value,
            "strategy": result.strategy,
            "summary": {
                "total_sheets": metrics.total_sheets,
                "total_pieces": metrics.total_pieces,
                "total_cuts": metrics.total_cuts,
                "total_edge_banding": metrics.total_edge_banding,
                "efficient_pieces": metrics.efficient_pieces,
                "inefficient_pieces": metrics.inefficient_pieces,
                "total_waste_percentage": round(metrics.total_waste_percentage, 2),
            },
            "sheets": [self._format_sheet(layout) for layout in result.layouts],
            "warnings": list(result.warnings),
            "errors": list(result.errors),
            "unplaced": self._count_by_request(result),
        }

    def export(self, result: PackingResult) -> str:
        """Export a packing result as a JSON string."""
        return json.dumps(self.to_dict(result), indent=2)

    def _format_sheet(self, layout: SheetLayout) -> dict[str, Any]:
        return {
            "index": layout.sheet_index,
            "source": layout.source,
            "width": layout.sheet_config.width,
            "height": layout.sheet_config.height,
            "cut_count": layout.cut_count,
            "edge_banding_total": layout.edge_banding_total,
            "waste_percentage": round(layout.waste_percentage, 2),
            "placements": [
                {
                    "label": placement.label,
                    "x": placement.x,
                    "y": placement.y,
                    "width": placement.placed_width,
                    "height": placement.placed_height,
                    "rotated": placement.rotated,
                    "request_index": placement.item.request_index,
                }
                for placement in layout.placements
            ],
        }

    @staticmethod
    def _count_by_request(result: PackingResult) -> list[dict[str, Any]]:
        counts: dict[int, int] = {}
        requests: dict[int, PieceRequest] = {}
        for item in result.unplaced:
            counts[item.request_index] = counts.get(item.request_index, 0) + 1
            requests[item.request_index] = item.request
        return [
            {
                "request_index": index,
                "width": requests[index].width,
                "height": requests[index].height,
                "quantity": counts[index],
            }
            for index in sorted(counts)
        ]
