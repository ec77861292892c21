"""Uniform-width strip packing.

When most pieces of a job share one width, stacking them in full-height
columns ("strips") gives fewer and straighter cuts than free-rectangle
packing. The strip pass runs before the general packer and hands every piece
it does not consume back to it.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Sequence

from cutplan.domain.value_objects import EPSILON, PlacementItem
from cutplan.infrastructure.bin_packing import PackingConfig, PlacedPiece

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StripResult:
    """Outcome of a strip pass.

    Attributes:
        sheets: Placements of every sheet produced by the strip pass.
        leftovers: Items not placed, in their original order.
        common_width: Column width used, or None if strip mode was inactive.
        columns: Number of columns per sheet (0 when inactive).
    """

    sheets: tuple[tuple[PlacedPiece, ...], ...] = ()
    leftovers: tuple[PlacementItem, ...] = ()
    common_width: float | None = None
    columns: int = 0

    @property
    def active(self) -> bool:
        return self.common_width is not None


class StripPacker:
    """Packs a dominant width bucket into vertical columns.

    Items are bucketed by ``round(width / strip_width_tolerance)``. When the
    largest bucket holds at least ``strip_threshold`` of all items, the bucket
    is stacked into columns as wide as its widest member.
    """

    def __init__(self, config: PackingConfig) -> None:
        self.config = config

    def bucket_key(self, width: float) -> int:
        return round(width / self.config.strip_width_tolerance)

    def dominant_bucket(self, items: Sequence[PlacementItem]) -> list[PlacementItem]:
        """Return the largest width bucket (first seen wins ties)."""
        buckets: dict[int, list[PlacementItem]] = {}
        for item in items:
            buckets.setdefault(self.bucket_key(item.width), []).append(item)

        largest: list[PlacementItem] = []
        for bucket in buckets.values():
            if len(bucket) > len(largest):
                largest = bucket
        return largest

    def is_eligible(self, items: Sequence[PlacementItem]) -> bool:
        """Check whether strip mode should run for these items.

        Args:
            items: Pending placement items.

        Returns:
            True when strip mode is enabled and the dominant width bucket
            reaches the configured share of all items.
        """
        if not self.config.strip_mode_enabled or not items:
            return False
        bucket = self.dominant_bucket(items)
        if not bucket:
            return False
        ratio = len(bucket) / len(items)
        return ratio >= self.config.strip_threshold - EPSILON

    def column_count(self, common_width: float) -> int:
        """Number of columns of ``common_width`` that fit across the sheet.

        Returns 0 when a single column is already wider than the sheet.
        """
        sheet_width = self.config.sheet.width
        kerf = self.config.kerf
        if common_width > sheet_width + EPSILON:
            return 0

        columns = math.floor((sheet_width + kerf) / (common_width + kerf))
        while columns > 1 and (
            columns * common_width + (columns - 1) * kerf > sheet_width + EPSILON
        ):
            columns -= 1
        return max(columns, 1)

    def pack(
        self,
        items: Sequence[PlacementItem],
        max_sheets: int | None = None,
    ) -> StripResult:
        """Stack the dominant width bucket into columns, sheet by sheet.

        Args:
            items: Pending placement items in their original order.
            max_sheets: Stop opening sheets once this many are produced.

        Returns:
            StripResult with the produced sheets and the unplaced items.
        """
        if not self.is_eligible(items):
            return StripResult(leftovers=tuple(items))

        bucket = self.dominant_bucket(items)
        common_width = max(item.width for item in bucket)
        columns = self.column_count(common_width)
        if columns == 0:
            logger.info(
                "Strip width %.4f exceeds the sheet; skipping strip mode",
                common_width,
            )
            return StripResult(leftovers=tuple(items))

        logger.info(
            "Strip mode active: %d of %d pieces, width %.4f, %d columns",
            len(bucket),
            len(items),
            common_width,
            columns,
        )

        pending = sorted(bucket, key=lambda item: -item.height)
        placed: set[PlacementItem] = set()
        sheets: list[tuple[PlacedPiece, ...]] = []

        while pending:
            if max_sheets is not None and len(sheets) >= max_sheets:
                break
            sheet, pending = self._fill_sheet(pending, common_width, columns)
            if not sheet:
                break
            sheets.append(sheet)
            placed.update(placement.item for placement in sheet)
            logger.debug("Strip sheet %d holds %d pieces", len(sheets), len(sheet))

        leftovers = tuple(item for item in items if item not in placed)
        return StripResult(
            sheets=tuple(sheets),
            leftovers=leftovers,
            common_width=common_width,
            columns=columns,
        )

    def _fill_sheet(
        self,
        pending: list[PlacementItem],
        common_width: float,
        columns: int,
    ) -> tuple[tuple[PlacedPiece, ...], list[PlacementItem]]:
        """Place pending items into the columns of one sheet.

        Each item goes to the first column with room for it.

        Returns:
            The sheet's placements and the items that did not fit.
        """
        kerf = self.config.kerf
        sheet_height = self.config.sheet.height
        column_heights = [0.0] * columns
        column_counts = [0] * columns

        placements: list[PlacedPiece] = []
        remaining: list[PlacementItem] = []

        for item in pending:
            for column in range(columns):
                gap = kerf if column_counts[column] else 0.0
                top = column_heights[column] + gap
                if top + item.height > sheet_height + EPSILON:
                    continue
                placements.append(
                    PlacedPiece(
                        item=item,
                        x=column * (common_width + kerf),
                        y=top,
                    )
                )
                column_heights[column] = top + item.height
                column_counts[column] += 1
                break
            else:
                remaining.append(item)

        return tuple(placements), remaining
