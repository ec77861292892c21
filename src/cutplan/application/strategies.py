"""Sort strategies for the general packing pass.

The order in which pieces are offered to the sheet packer changes the
result. Each strategy is a named sort key; ``best_of_strategies`` runs them
all and keeps the best result.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Sequence

from cutplan.domain.value_objects import PieceRequest, PlacementItem
from cutplan.infrastructure.bin_packing import PackingConfig, PackingResult
from cutplan.infrastructure.packing_orchestrator import (
    PackingOrchestrator,
    SortKey,
    longest_side_key,
)

logger = logging.getLogger(__name__)

DEFAULT_STRATEGY = "longest_side"


@dataclass(frozen=True)
class SortStrategy:
    """A named ordering of placement items."""

    name: str
    description: str
    key: SortKey


def _area_key(item: PlacementItem) -> tuple[float, float]:
    return (-item.area, -item.max_side)


def _height_key(item: PlacementItem) -> tuple[float, float]:
    return (-item.height, -item.width)


def _width_key(item: PlacementItem) -> tuple[float, float]:
    return (-item.width, -item.height)


# Registration order is the final tie-breaker of best_of_strategies.
STRATEGIES: dict[str, SortStrategy] = {
    strategy.name: strategy
    for strategy in (
        SortStrategy(
            "longest_side",
            "Longest side descending, then area descending",
            longest_side_key,
        ),
        SortStrategy("area", "Area descending, then longest side", _area_key),
        SortStrategy("height", "Height descending, then width", _height_key),
        SortStrategy("width", "Width descending, then height", _width_key),
    )
}


def available_strategies() -> list[str]:
    """Strategy names in registration order."""
    return list(STRATEGIES)


def get_strategy(name: str) -> SortStrategy:
    """Look up a strategy by name.

    Raises:
        KeyError: If the strategy is not registered.
    """
    if name not in STRATEGIES:
        raise KeyError(
            f"Unknown strategy '{name}'. "
            f"Available strategies: {', '.join(STRATEGIES)}"
        )
    return STRATEGIES[name]


def evaluate_strategy(
    requests: Sequence[PieceRequest],
    config: PackingConfig,
    name: str = DEFAULT_STRATEGY,
) -> PackingResult:
    """Pack the requests with one named strategy."""
    strategy = get_strategy(name)
    return PackingOrchestrator(config).optimize_cut_list(
        requests, sort_key=strategy.key, strategy=strategy.name
    )


def _rank(result: PackingResult) -> tuple[int, int, float]:
    return (len(result.unplaced), result.total_sheets, result.total_waste_percentage)


def best_of_strategies(
    requests: Sequence[PieceRequest],
    config: PackingConfig,
) -> PackingResult:
    """Pack with every registered strategy and return the best result.

    Results are ranked by fewest unplaced pieces, then fewest sheets, then
    lowest waste. Equal results keep the earlier registered strategy.

    Args:
        requests: Piece requests in input order.
        config: Packing configuration.

    Returns:
        The best PackingResult; its ``strategy`` names the winner.
    """
    results = [evaluate_strategy(requests, config, name) for name in STRATEGIES]
    for result in results:
        logger.debug(
            "Strategy %s: %d sheets, %d unplaced, %.2f%% waste",
            result.strategy,
            result.total_sheets,
            len(result.unplaced),
            result.total_waste_percentage,
        )

    # min() keeps the first of equally ranked results
    best = min(results, key=_rank)
    logger.info("Best strategy: %s", best.strategy)
    return best
