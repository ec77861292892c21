"""Domain layer - cut-list value objects."""

from .value_objects import EPSILON, PieceRequest, PlacementItem, Rect

__all__ = [
    "EPSILON",
    "PieceRequest",
    "PlacementItem",
    "Rect",
]
