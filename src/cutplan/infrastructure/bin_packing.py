"""Bin packing data models and the single-sheet packer.

This module provides the configuration, the data structures describing sheet
layouts and packing results, and ``SheetPacker``, which places pieces onto one
sheet using the Best-Short-Side-Fit rule over a set of free rectangles.

All dataclasses are frozen (immutable); configurations are shared across runs
and results are read by the renderers and exporters.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from enum import Enum

from cutplan.domain.value_objects import EPSILON, PieceRequest, PlacementItem, Rect
from cutplan.infrastructure.free_rectangles import FreeRectangleSet

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SheetConfig:
    """Configuration for stock sheet dimensions.

    Standard sheet sizes:
    - 4'x8' (48"x96") - most common plywood and melamine
    - 5'x5' (60"x60") - Baltic birch

    Attributes:
        width: Sheet width in inches (default 48.0 for 4' sheets).
        height: Sheet height in inches (default 96.0 for 8' sheets).
    """

    width: float = 48.0
    height: float = 96.0

    def __post_init__(self) -> None:
        if self.width <= 0:
            raise ValueError("Sheet width must be positive")
        if self.height <= 0:
            raise ValueError("Sheet height must be positive")

    @property
    def area(self) -> float:
        """Total sheet area in square inches."""
        return self.width * self.height


@dataclass(frozen=True)
class PackingConfig:
    """Configuration for a packing run.

    Attributes:
        sheet: Stock sheet dimensions.
        kerf: Saw blade kerf in inches, reserved between adjacent pieces.
        efficient_dims: Dimensions that make a piece a single-cut piece.
        efficiency_tolerance: Match tolerance for efficient_dims in inches.
        allow_rotation: Whether pieces may be turned 90 degrees.
        strip_mode_enabled: Whether the uniform-width strip pass runs first.
        strip_width_tolerance: Width bucket size for strip eligibility.
        strip_threshold: Share of pieces in the largest width bucket needed
            to activate strip mode.
        conservative_mode: Whether to cap distinct piece sizes per sheet.
        max_distinct_dims: Distinct placed sizes allowed per sheet in
            conservative mode.
        max_sheets: Hard ceiling on sheets opened in one run.
    """

    sheet: SheetConfig = field(default_factory=SheetConfig)
    kerf: float = 0.0
    efficient_dims: tuple[float, ...] = (47.875, 48.0, 96.0)
    efficiency_tolerance: float = 0.01
    allow_rotation: bool = True
    strip_mode_enabled: bool = False
    strip_width_tolerance: float = 1 / 32
    strip_threshold: float = 0.7
    conservative_mode: bool = True
    max_distinct_dims: int = 6
    max_sheets: int = 200

    def __post_init__(self) -> None:
        if not math.isfinite(self.kerf) or self.kerf < 0:
            raise ValueError("Kerf must be a non-negative finite number")
        if self.efficiency_tolerance < 0:
            raise ValueError("Efficiency tolerance must be non-negative")
        if self.strip_width_tolerance <= 0:
            raise ValueError("Strip width tolerance must be positive")
        if not 0 < self.strip_threshold <= 1:
            raise ValueError("Strip threshold must be in (0, 1]")
        if self.max_distinct_dims < 1:
            raise ValueError("Max distinct dimensions must be at least 1")
        if self.max_sheets < 1:
            raise ValueError("Max sheets must be at least 1")


@dataclass(frozen=True)
class PlacedPiece:
    """A piece instance placed at a specific position on a sheet.

    The footprint is the piece's own size. Kerf is only taken out of the
    sheet's free space and is never part of the footprint.

    Attributes:
        item: The placement item (one physical piece) being placed.
        x: Distance from the left sheet edge in inches.
        y: Distance from the top sheet edge in inches.
        rotated: True if the piece is turned 90 degrees.
    """

    item: PlacementItem
    x: float
    y: float
    rotated: bool = False

    def __post_init__(self) -> None:
        if self.x < 0 or self.y < 0:
            raise ValueError("Position coordinates must be non-negative")

    @property
    def placed_width(self) -> float:
        """Width of piece as placed (accounts for rotation)."""
        return self.item.height if self.rotated else self.item.width

    @property
    def placed_height(self) -> float:
        """Height of piece as placed (accounts for rotation)."""
        return self.item.width if self.rotated else self.item.height

    @property
    def right_edge(self) -> float:
        """X coordinate of piece right edge."""
        return self.x + self.placed_width

    @property
    def bottom_edge(self) -> float:
        """Y coordinate of piece bottom edge."""
        return self.y + self.placed_height

    @property
    def footprint(self) -> Rect:
        return Rect(self.x, self.y, self.placed_width, self.placed_height)

    @property
    def dims_text(self) -> str:
        """Placed dimensions using the original text, e.g. ``23 1/2" x 48"``."""
        request = self.item.request
        if self.rotated:
            return f'{request.height_text}" x {request.width_text}"'
        return f'{request.width_text}" x {request.height_text}"'

    @property
    def label(self) -> str:
        return f"1PCS {self.dims_text}"

    @property
    def color_key(self) -> str:
        """Key shared by all pieces of the same request size."""
        request = self.item.request
        return f"{request.width_text}x{request.height_text}"


@dataclass(frozen=True)
class SheetLayout:
    """Layout of pieces on a single sheet.

    Attributes:
        sheet_index: Zero-based index of this sheet in the packing result.
        sheet_config: Configuration of the sheet dimensions.
        placements: Tuple of placed pieces on this sheet, in placement order.
        source: Which pass produced the sheet ("strip" or "general").
        cut_count: Saw cuts needed for the sheet's pieces.
        edge_banding_total: Edge-banding operations for the sheet's pieces.
    """

    sheet_index: int
    sheet_config: SheetConfig
    placements: tuple[PlacedPiece, ...]
    source: str = "general"
    cut_count: int = 0
    edge_banding_total: int = 0

    def __post_init__(self) -> None:
        if self.sheet_index < 0:
            raise ValueError("Sheet index must be non-negative")
        if self.cut_count < 0 or self.edge_banding_total < 0:
            raise ValueError("Sheet metrics must be non-negative")

    @property
    def used_area(self) -> float:
        """Total area used by placed pieces in square inches."""
        return sum(p.placed_width * p.placed_height for p in self.placements)

    @property
    def waste_percentage(self) -> float:
        """Percentage of the sheet area that is waste."""
        area = self.sheet_config.area
        if area == 0:
            return 0.0
        return max(0.0, (1 - self.used_area / area) * 100)

    @property
    def piece_count(self) -> int:
        """Number of pieces placed on this sheet."""
        return len(self.placements)


@dataclass(frozen=True)
class PackingMetrics:
    """Grand totals across all sheets of a packing result."""

    total_sheets: int = 0
    total_pieces: int = 0
    total_cuts: int = 0
    total_edge_banding: int = 0
    efficient_pieces: int = 0
    inefficient_pieces: int = 0
    used_area: float = 0.0
    sheet_area: float = 0.0

    @property
    def total_waste_percentage(self) -> float:
        if self.sheet_area == 0:
            return 0.0
        return max(0.0, (1 - self.used_area / self.sheet_area) * 100)


class PackingStatus(str, Enum):
    """Terminal state of a packing run."""

    DONE = "done"
    ABORTED_STUCK = "aborted_stuck"
    ABORTED_LIMIT = "aborted_limit"


@dataclass(frozen=True)
class PackingResult:
    """Complete result of a packing run.

    Attributes:
        layouts: Sheets in the order they were produced.
        warnings: Diagnostics for pieces that could not be placed.
        errors: Oversized pieces excluded before packing.
        unplaced: Items left unplaced by the packer.
        oversized: Requests excluded because they exceed the sheet.
        metrics: Grand totals across all sheets.
        status: How the run ended.
        strategy: Name of the sort strategy used for the general pass.
    """

    layouts: tuple[SheetLayout, ...] = ()
    warnings: tuple[str, ...] = ()
    errors: tuple[str, ...] = ()
    unplaced: tuple[PlacementItem, ...] = ()
    oversized: tuple[PieceRequest, ...] = ()
    metrics: PackingMetrics = field(default_factory=PackingMetrics)
    status: PackingStatus = PackingStatus.DONE
    strategy: str = "longest_side"

    @property
    def total_sheets(self) -> int:
        return len(self.layouts)

    @property
    def total_pieces_placed(self) -> int:
        return sum(layout.piece_count for layout in self.layouts)

    @property
    def total_waste_percentage(self) -> float:
        return self.metrics.total_waste_percentage

    @property
    def placements(self) -> tuple[tuple[PlacedPiece, ...], ...]:
        """Per-sheet placements, for renderers."""
        return tuple(layout.placements for layout in self.layouts)

    @property
    def messages(self) -> tuple[str, ...]:
        """Errors followed by warnings, for display."""
        return self.errors + self.warnings

    @property
    def is_complete(self) -> bool:
        """True when every requested piece was placed."""
        return not self.unplaced and not self.oversized

    def placed_counts(self) -> dict[int, int]:
        """Placed piece count keyed by request index."""
        counts: dict[int, int] = {}
        for layout in self.layouts:
            for placement in layout.placements:
                index = placement.item.request_index
                counts[index] = counts.get(index, 0) + 1
        return counts


@dataclass(frozen=True)
class PlacementCandidate:
    """A scored, not yet committed placement on a sheet.

    Attributes:
        item: The item to place.
        x: Left edge of the placement.
        y: Top edge of the placement.
        rotated: Whether the item is turned 90 degrees.
        consumed: Kerf-inflated region taken out of the free space.
        short_side: Smaller leftover side of the chosen free rectangle.
        long_side: Larger leftover side of the chosen free rectangle.
    """

    item: PlacementItem
    x: float
    y: float
    rotated: bool
    consumed: Rect
    short_side: float
    long_side: float

    @property
    def placed_width(self) -> float:
        return self.item.height if self.rotated else self.item.width

    @property
    def placed_height(self) -> float:
        return self.item.width if self.rotated else self.item.height


class SheetPacker:
    """Places pieces onto one sheet using Best-Short-Side-Fit.

    For every free rectangle, in insertion order, and every allowed
    orientation, the packer scores the leftover sides of the rectangle after
    fitting the kerf-inflated piece. The candidate with the smallest short
    leftover wins, ties going to the smallest long leftover and then to the
    first candidate seen.

    Kerf is clipped at the sheet boundary: no saw line is needed between a
    piece and the sheet edge, so a piece that fits the bare sheet always fits
    an empty sheet.

    Attributes:
        config: Packing configuration (sheet size, kerf, rotation).
        free_rects: Free space of the sheet.
        placements: Pieces placed so far, in placement order.
    """

    def __init__(self, config: PackingConfig) -> None:
        self.config = config
        self.free_rects = FreeRectangleSet(config.sheet.width, config.sheet.height)
        self.placements: list[PlacedPiece] = []

    def find(
        self,
        item: PlacementItem,
        allow_rotate: bool | None = None,
    ) -> PlacementCandidate | None:
        """Find the best placement for an item without modifying the sheet.

        Args:
            item: The item to place.
            allow_rotate: Override for the configured rotation policy.

        Returns:
            The best candidate, or None if the item fits nowhere.
        """
        if allow_rotate is None:
            allow_rotate = self.config.allow_rotation

        orientations = [False]
        if allow_rotate and item.width != item.height:
            orientations.append(True)

        smallest_side = min(item.width, item.height)
        best: PlacementCandidate | None = None

        for rect in self.free_rects.query(smallest_side, smallest_side):
            for rotated in orientations:
                candidate = self._score(item, rect, rotated)
                if candidate is None:
                    continue
                if best is None or candidate.short_side < best.short_side or (
                    candidate.short_side == best.short_side
                    and candidate.long_side < best.long_side
                ):
                    best = candidate

        return best

    def place(self, candidate: PlacementCandidate) -> PlacedPiece:
        """Commit a candidate returned by :meth:`find`."""
        placement = PlacedPiece(
            item=candidate.item,
            x=candidate.x,
            y=candidate.y,
            rotated=candidate.rotated,
        )
        self.free_rects.consume(candidate.consumed)
        self.placements.append(placement)

        logger.debug(
            "Placed %s at (%.3f, %.3f)%s",
            placement.dims_text,
            placement.x,
            placement.y,
            " rotated" if placement.rotated else "",
        )
        return placement

    def insert(
        self,
        item: PlacementItem,
        allow_rotate: bool | None = None,
    ) -> PlacedPiece | None:
        """Place an item at its best position, if it fits anywhere.

        Args:
            item: The item to place.
            allow_rotate: Override for the configured rotation policy.

        Returns:
            The placed piece, or None if the item does not fit.
        """
        candidate = self.find(item, allow_rotate)
        if candidate is None:
            return None
        return self.place(candidate)

    def _score(
        self,
        item: PlacementItem,
        rect: Rect,
        rotated: bool,
    ) -> PlacementCandidate | None:
        """Score one (free rectangle, orientation) pair, or None if it does not fit."""
        piece_w = item.height if rotated else item.width
        piece_h = item.width if rotated else item.height

        if piece_w > rect.width + EPSILON or piece_h > rect.height + EPSILON:
            return None

        kerf = self.config.kerf
        inflated_w = min(piece_w + kerf, self.config.sheet.width - rect.x)
        inflated_h = min(piece_h + kerf, self.config.sheet.height - rect.y)

        if inflated_w > rect.width + EPSILON or inflated_h > rect.height + EPSILON:
            return None

        leftover_w = abs(rect.width - inflated_w)
        leftover_h = abs(rect.height - inflated_h)

        return PlacementCandidate(
            item=item,
            x=rect.x,
            y=rect.y,
            rotated=rotated,
            consumed=Rect(rect.x, rect.y, inflated_w, inflated_h),
            short_side=min(leftover_w, leftover_h),
            long_side=max(leftover_w, leftover_h),
        )
