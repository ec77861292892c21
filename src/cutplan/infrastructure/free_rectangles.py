"""Free-space bookkeeping for a single sheet.

The free space of a sheet is kept as a list of possibly overlapping maximal
rectangles. Placing a piece splits every free rectangle it overlaps into the
slivers that surround it, after which rectangles contained in other free
rectangles are pruned.
"""

from __future__ import annotations

import logging
from typing import Iterator

from cutplan.domain.value_objects import EPSILON, Rect

logger = logging.getLogger(__name__)


class FreeRectangleSet:
    """The empty regions of one sheet.

    Rectangles are kept in insertion order so that fit queries, and therefore
    packing results, are deterministic.

    Attributes:
        sheet_width: Width of the sheet in inches.
        sheet_height: Height of the sheet in inches.
    """

    def __init__(self, sheet_width: float, sheet_height: float) -> None:
        self.sheet_width = sheet_width
        self.sheet_height = sheet_height
        self._rects: list[Rect] = [Rect(0.0, 0.0, sheet_width, sheet_height)]

    def __len__(self) -> int:
        return len(self._rects)

    def __iter__(self) -> Iterator[Rect]:
        return iter(self._rects)

    @property
    def rectangles(self) -> tuple[Rect, ...]:
        """Snapshot of the current free rectangles."""
        return tuple(self._rects)

    def query(self, width: float, height: float) -> list[Rect]:
        """Return every free rectangle that can hold a ``width`` x ``height`` region.

        Args:
            width: Required width (already inflated by kerf).
            height: Required height (already inflated by kerf).

        Returns:
            Fitting free rectangles in insertion order.
        """
        return [
            rect
            for rect in self._rects
            if width <= rect.width + EPSILON and height <= rect.height + EPSILON
        ]

    def consume(self, region: Rect) -> None:
        """Remove ``region`` from the free space.

        Every free rectangle that overlaps the region is replaced by up to four
        slivers (above, below, left, right of the region). Rectangles that do
        not overlap pass through unchanged. Redundant rectangles are pruned
        afterwards.

        Args:
            region: The kerf-inflated region occupied by a placement.
        """
        updated: list[Rect] = []
        for rect in self._rects:
            if not rect.intersects(region):
                updated.append(rect)
                continue
            updated.extend(self._split(rect, region))

        self._rects = self._prune(updated)
        logger.debug(
            "Consumed (%.3f, %.3f, %.3f x %.3f), %d free rectangles remain",
            region.x,
            region.y,
            region.width,
            region.height,
            len(self._rects),
        )

    @staticmethod
    def _split(rect: Rect, region: Rect) -> list[Rect]:
        """Split a free rectangle around an overlapping region.

        Above and below slivers span the full width of the free rectangle.
        Left and right slivers are clipped to the vertical overlap of the two
        rectangles.
        """
        pieces: list[Rect] = []

        # Above: from the top of the free rectangle down to the region.
        if rect.y + EPSILON < region.y < rect.bottom - EPSILON:
            pieces.append(Rect(rect.x, rect.y, rect.width, region.y - rect.y))

        # Below: from the bottom of the region to the bottom of the free rectangle.
        if rect.y + EPSILON < region.bottom < rect.bottom - EPSILON:
            pieces.append(
                Rect(rect.x, region.bottom, rect.width, rect.bottom - region.bottom)
            )

        overlap_top = max(rect.y, region.y)
        overlap_bottom = min(rect.bottom, region.bottom)
        overlap_height = overlap_bottom - overlap_top

        if rect.x + EPSILON < region.x < rect.right - EPSILON:
            pieces.append(Rect(rect.x, overlap_top, region.x - rect.x, overlap_height))

        if rect.x + EPSILON < region.right < rect.right - EPSILON:
            pieces.append(
                Rect(
                    region.right,
                    overlap_top,
                    rect.right - region.right,
                    overlap_height,
                )
            )

        return pieces

    @staticmethod
    def _prune(rects: list[Rect]) -> list[Rect]:
        """Drop every rectangle contained in another rectangle of the list.

        Of two identical rectangles only the first one is kept.
        """
        kept: list[Rect] = []
        for i, candidate in enumerate(rects):
            redundant = False
            for j, other in enumerate(rects):
                if i == j or not other.contains(candidate):
                    continue
                # Mutual containment means the two are the same rectangle.
                if candidate.contains(other) and j > i:
                    continue
                redundant = True
                break
            if not redundant:
                kept.append(candidate)
        return kept
