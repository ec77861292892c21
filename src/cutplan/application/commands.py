"""Application commands (use cases) for cut planning."""

from __future__ import annotations

import logging
from typing import Sequence

from cutplan.application.cut_list_parser import parse_cut_list
from cutplan.application.strategies import (
    DEFAULT_STRATEGY,
    best_of_strategies,
    evaluate_strategy,
)
from cutplan.domain.value_objects import PieceRequest
from cutplan.infrastructure.bin_packing import PackingConfig, PackingResult

logger = logging.getLogger(__name__)


class PlanCutsCommand:
    """Command to plan how a cut list is cut from stock sheets.

    Attributes:
        config: Packing configuration used for every run of the command.
    """

    def __init__(self, config: PackingConfig | None = None) -> None:
        self.config = config or PackingConfig()

    def execute(
        self,
        requests: Sequence[PieceRequest],
        best: bool = False,
        strategy: str = DEFAULT_STRATEGY,
    ) -> PackingResult:
        """Pack piece requests onto sheets.

        Args:
            requests: Piece requests in input order.
            best: Try every registered strategy and keep the best result.
            strategy: Sort strategy to use when ``best`` is False.

        Returns:
            PackingResult for the cut list.
        """
        if best:
            return best_of_strategies(requests, self.config)
        return evaluate_strategy(requests, self.config, strategy)

    def execute_text(
        self,
        text: str,
        best: bool = False,
        strategy: str = DEFAULT_STRATEGY,
    ) -> PackingResult:
        """Parse cut list text and pack it.

        Raises:
            CutListParseError: If the text contains a malformed line.
        """
        requests = parse_cut_list(text)
        logger.debug("Planning %d cut list lines", len(requests))
        return self.execute(requests, best=best, strategy=strategy)
