"""Cut and edge-banding metrics for packed sheets."""

from __future__ import annotations

import logging
from typing import Iterable, Sequence

from cutplan.domain.value_objects import PieceRequest
from cutplan.infrastructure.bin_packing import (
    PackingConfig,
    PackingMetrics,
    PlacedPiece,
    SheetLayout,
)

logger = logging.getLogger(__name__)


def is_efficient(
    request: PieceRequest,
    efficient_dims: Iterable[float],
    tolerance: float = 0.01,
) -> bool:
    """Check whether a piece can be produced with a single cut.

    A piece is efficient when its width or height matches one of the
    efficient dimensions (a full sheet side, or a rip of it) within a strict
    tolerance.

    Args:
        request: The piece to classify.
        efficient_dims: Dimensions that need no second cut.
        tolerance: Strict match tolerance in inches.

    Returns:
        True if the piece needs one cut, False if it needs two.
    """
    for dim in efficient_dims:
        if abs(request.width - dim) < tolerance or abs(request.height - dim) < tolerance:
            return True
    return False


class MetricsAggregator:
    """Derives per-sheet and grand-total metrics.

    Attributes:
        config: Packing configuration supplying the efficient dimensions.
    """

    def __init__(self, config: PackingConfig) -> None:
        self.config = config

    def is_efficient(self, request: PieceRequest) -> bool:
        return is_efficient(
            request, self.config.efficient_dims, self.config.efficiency_tolerance
        )

    def cuts_for(self, request: PieceRequest) -> int:
        """Saw cuts needed for one piece: 1 if efficient, else 2."""
        return 1 if self.is_efficient(request) else 2

    def build_layout(
        self,
        sheet_index: int,
        placements: Sequence[PlacedPiece],
        source: str = "general",
    ) -> SheetLayout:
        """Create a SheetLayout with its cut count and edge-banding total."""
        cut_count = sum(self.cuts_for(p.item.request) for p in placements)
        edge_banding = sum(p.item.request.edge_banding_units for p in placements)
        return SheetLayout(
            sheet_index=sheet_index,
            sheet_config=self.config.sheet,
            placements=tuple(placements),
            source=source,
            cut_count=cut_count,
            edge_banding_total=edge_banding,
        )

    def totals(self, layouts: Sequence[SheetLayout]) -> PackingMetrics:
        """Aggregate grand totals across all sheets."""
        efficient = 0
        total_pieces = 0
        for layout in layouts:
            for placement in layout.placements:
                total_pieces += 1
                if self.is_efficient(placement.item.request):
                    efficient += 1

        metrics = PackingMetrics(
            total_sheets=len(layouts),
            total_pieces=total_pieces,
            total_cuts=sum(layout.cut_count for layout in layouts),
            total_edge_banding=sum(layout.edge_banding_total for layout in layouts),
            efficient_pieces=efficient,
            inefficient_pieces=total_pieces - efficient,
            used_area=sum(layout.used_area for layout in layouts),
            sheet_area=sum(layout.sheet_config.area for layout in layouts),
        )
        logger.debug(
            "Totals: %d sheets, %d cuts, %d edges",
            metrics.total_sheets,
            metrics.total_cuts,
            metrics.total_edge_banding,
        )
        return metrics
