"""Application layer - use cases and orchestration."""

from .commands import PlanCutsCommand
from .cut_list_parser import (
    MAX_QUANTITY,
    CutListParseError,
    format_fraction,
    parse_cut_list,
    parse_fraction,
)
from .strategies import (
    DEFAULT_STRATEGY,
    available_strategies,
    best_of_strategies,
    evaluate_strategy,
)

__all__ = [
    "DEFAULT_STRATEGY",
    "MAX_QUANTITY",
    "CutListParseError",
    "PlanCutsCommand",
    "available_strategies",
    "best_of_strategies",
    "evaluate_strategy",
    "format_fraction",
    "parse_cut_list",
    "parse_fraction",
]
