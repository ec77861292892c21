"""Value objects for cut-list packing.

All value objects are frozen dataclasses. Sheet coordinates have their origin
at the top-left corner of the sheet, with x running across the sheet width and
y running down the sheet height.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

# Tolerance for floating point comparisons of sheet geometry, in inches.
EPSILON = 1e-9


def _format_inches(value: float) -> str:
    """Format a dimension without trailing zeros (e.g. 24.0 -> "24")."""
    return f"{value:g}"


@dataclass(frozen=True)
class PieceRequest:
    """One distinct line of a normalized cut list.

    Attributes:
        width: Unrotated piece width in inches.
        height: Unrotated piece height in inches.
        quantity: Number of identical pieces requested.
        edge_banding_units: Edge-banding operations required per piece.
        display_width: Original width text, used for output only.
        display_height: Original height text, used for output only.
    """

    width: float
    height: float
    quantity: int = 1
    edge_banding_units: int = 0
    display_width: str = ""
    display_height: str = ""

    def __post_init__(self) -> None:
        if not (math.isfinite(self.width) and math.isfinite(self.height)):
            raise ValueError("Piece dimensions must be finite")
        if self.width < 0 or self.height < 0:
            raise ValueError("Piece dimensions must be non-negative")
        if self.quantity < 0:
            raise ValueError("Quantity must be non-negative")
        if self.edge_banding_units < 0:
            raise ValueError("Edge banding units must be non-negative")

    @property
    def width_text(self) -> str:
        """Width as the user wrote it, falling back to the numeric value."""
        return self.display_width or _format_inches(self.width)

    @property
    def height_text(self) -> str:
        """Height as the user wrote it, falling back to the numeric value."""
        return self.display_height or _format_inches(self.height)

    @property
    def area(self) -> float:
        """Area of a single piece in square inches."""
        return self.width * self.height

    @property
    def is_empty(self) -> bool:
        """True when the request places nothing (zero quantity or zero area)."""
        return self.quantity == 0 or self.width == 0 or self.height == 0

    def describe(self, quantity: int | None = None) -> str:
        """Describe the request as ``24" x 30" (3 PCS)``."""
        count = self.quantity if quantity is None else quantity
        return f'{self.width_text}" x {self.height_text}" ({count} PCS)'


@dataclass(frozen=True)
class PlacementItem:
    """A single physical instance exploded from a PieceRequest.

    Attributes:
        request: The request this instance belongs to.
        request_index: Position of the request in the input sequence.
        instance: Zero-based instance number within the request.
    """

    request: PieceRequest
    request_index: int
    instance: int = 0

    @property
    def width(self) -> float:
        return self.request.width

    @property
    def height(self) -> float:
        return self.request.height

    @property
    def area(self) -> float:
        return self.request.area

    @property
    def max_side(self) -> float:
        return max(self.request.width, self.request.height)


@dataclass(frozen=True)
class Rect:
    """Axis-aligned rectangle in sheet coordinates."""

    x: float
    y: float
    width: float
    height: float

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height

    @property
    def area(self) -> float:
        return self.width * self.height

    def intersects(self, other: Rect) -> bool:
        """True when the two rectangles share a region of positive area."""
        return (
            self.x < other.right - EPSILON
            and other.x < self.right - EPSILON
            and self.y < other.bottom - EPSILON
            and other.y < self.bottom - EPSILON
        )

    def contains(self, other: Rect) -> bool:
        """True when ``other`` lies entirely inside this rectangle."""
        return (
            other.x >= self.x - EPSILON
            and other.y >= self.y - EPSILON
            and other.right <= self.right + EPSILON
            and other.bottom <= self.bottom + EPSILON
        )
