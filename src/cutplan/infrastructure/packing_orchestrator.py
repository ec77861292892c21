"""Multi-sheet packing orchestration.

The orchestrator turns a cut list into a sequence of sheets:

1. Pieces that fit the sheet in no allowed orientation are reported as errors.
2. Quantities are exploded into one PlacementItem per physical piece.
3. The optional strip pass consumes a dominant width bucket.
4. The remaining items are sorted and packed sheet by sheet, repeating passes
   over each sheet until a pass places nothing.

A run always terminates: a sheet that receives no piece ends the run, and the
total number of sheets is capped by ``PackingConfig.max_sheets``.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Sequence

from cutplan.domain.value_objects import EPSILON, PieceRequest, PlacementItem
from cutplan.infrastructure.bin_packing import (
    PackingConfig,
    PackingResult,
    PackingStatus,
    PlacementCandidate,
    SheetLayout,
    SheetPacker,
)
from cutplan.infrastructure.metrics import MetricsAggregator
from cutplan.infrastructure.strip_packing import StripPacker

logger = logging.getLogger(__name__)

SortKey = Callable[[PlacementItem], Any]

UNPLACEABLE_WARNING = (
    "Some pieces could not be placed. Check for tight tolerances or odd sizes."
)


def longest_side_key(item: PlacementItem) -> tuple[float, float]:
    """Sort key: longest side descending, then area descending."""
    return (-item.max_side, -item.area)


class PackingOrchestrator:
    """Packs a cut list onto as few sheets as it can.

    Attributes:
        config: Packing configuration shared by every component of the run.
    """

    def __init__(self, config: PackingConfig | None = None) -> None:
        self.config = config or PackingConfig()
        self.metrics = MetricsAggregator(self.config)

    def fits_sheet(self, request: PieceRequest) -> bool:
        """Check whether a piece fits an empty sheet in an allowed orientation."""
        sheet = self.config.sheet
        if (
            request.width <= sheet.width + EPSILON
            and request.height <= sheet.height + EPSILON
        ):
            return True
        return (
            self.config.allow_rotation
            and request.height <= sheet.width + EPSILON
            and request.width <= sheet.height + EPSILON
        )

    def optimize_cut_list(
        self,
        requests: Sequence[PieceRequest],
        sort_key: SortKey | None = None,
        strategy: str = "longest_side",
    ) -> PackingResult:
        """Pack a cut list onto sheets.

        Args:
            requests: Piece requests in input order.
            sort_key: Ordering of the general pass. Defaults to longest side
                descending, then area descending.
            strategy: Name recorded on the result.

        Returns:
            PackingResult with the sheets, diagnostics and totals.
        """
        sort_key = sort_key or longest_side_key
        sheet = self.config.sheet

        errors: list[str] = []
        oversized: list[PieceRequest] = []
        items: list[PlacementItem] = []

        for index, request in enumerate(requests):
            if request.is_empty:
                continue
            if not self.fits_sheet(request):
                oversized.append(request)
                message = (
                    f"{request.describe()} exceeds the "
                    f'{sheet.width:g}" x {sheet.height:g}" sheet'
                )
                errors.append(message)
                logger.warning("%s", message)
                continue
            items.extend(
                PlacementItem(request=request, request_index=index, instance=n)
                for n in range(request.quantity)
            )

        logger.info(
            "Packing %d pieces onto %g x %g sheets", len(items), sheet.width, sheet.height
        )

        layouts: list[SheetLayout] = []
        remaining: list[PlacementItem] = items

        if self.config.strip_mode_enabled:
            strip = StripPacker(self.config).pack(items, self.config.max_sheets)
            for placements in strip.sheets:
                layouts.append(
                    self.metrics.build_layout(len(layouts), placements, "strip")
                )
            remaining = list(strip.leftovers)

        remaining = sorted(remaining, key=sort_key)
        status = PackingStatus.DONE
        warnings: list[str] = []

        while remaining:
            if len(layouts) >= self.config.max_sheets:
                status = PackingStatus.ABORTED_LIMIT
                warnings.append(
                    f"Sheet limit of {self.config.max_sheets} reached; packing aborted."
                )
                logger.warning("%s", warnings[-1])
                break

            packer = SheetPacker(self.config)
            remaining = self._fill_sheet(packer, remaining)

            if not packer.placements:
                status = PackingStatus.ABORTED_STUCK
                warnings.append(UNPLACEABLE_WARNING)
                logger.warning(
                    "Sheet %d received no pieces; %d pieces unplaced",
                    len(layouts) + 1,
                    len(remaining),
                )
                break

            layouts.append(self.metrics.build_layout(len(layouts), packer.placements))

        warnings.extend(self._unplaced_lines(remaining))
        result = PackingResult(
            layouts=tuple(layouts),
            warnings=tuple(warnings),
            errors=tuple(errors),
            unplaced=tuple(remaining),
            oversized=tuple(oversized),
            metrics=self.metrics.totals(layouts),
            status=status,
            strategy=strategy,
        )
        logger.info(
            "Packed %d pieces on %d sheets (%s)",
            result.total_pieces_placed,
            result.total_sheets,
            status.value,
        )
        return result

    def _fill_sheet(
        self,
        packer: SheetPacker,
        items: list[PlacementItem],
    ) -> list[PlacementItem]:
        """Repeat passes over the items until a pass places nothing.

        Returns:
            Items still unplaced, in their original order.
        """
        distinct: set[tuple[float, float]] = set()
        remaining = items

        while remaining:
            placed_any = False
            still_pending: list[PlacementItem] = []
            for item in remaining:
                candidate = packer.find(item)
                if candidate is None or not self._within_cap(candidate, distinct):
                    still_pending.append(item)
                    continue
                packer.place(candidate)
                distinct.add(self._dims_key(candidate))
                placed_any = True
            remaining = still_pending
            if not placed_any:
                break

        return remaining

    def _within_cap(
        self,
        candidate: PlacementCandidate,
        distinct: set[tuple[float, float]],
    ) -> bool:
        """Conservative mode: limit the distinct placed sizes on one sheet."""
        if not self.config.conservative_mode:
            return True
        key = self._dims_key(candidate)
        return key in distinct or len(distinct) < self.config.max_distinct_dims

    @staticmethod
    def _dims_key(candidate: PlacementCandidate) -> tuple[float, float]:
        return (round(candidate.placed_width, 6), round(candidate.placed_height, 6))

    @staticmethod
    def _unplaced_lines(items: Sequence[PlacementItem]) -> list[str]:
        """One ``... not placed`` line per request with unplaced pieces."""
        counts: dict[int, int] = {}
        requests: dict[int, PieceRequest] = {}
        for item in items:
            counts[item.request_index] = counts.get(item.request_index, 0) + 1
            requests[item.request_index] = item.request
        return [
            f"{requests[index].describe(counts[index])} not placed"
            for index in sorted(counts)
        ]
