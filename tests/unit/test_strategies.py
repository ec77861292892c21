"""Tests for sort strategies and the plan command."""

from __future__ import annotations

import pytest

from cutplan.application import (
    DEFAULT_STRATEGY,
    PlanCutsCommand,
    available_strategies,
    best_of_strategies,
    evaluate_strategy,
)
from cutplan.application import strategies
from cutplan.application.strategies import STRATEGIES, get_strategy
from cutplan.domain import PieceRequest, PlacementItem
from cutplan.infrastructure import PackingConfig, PackingResult, PackingStatus


class TestRegistry:
    """Tests for the strategy registry."""

    def test_registration_order(self) -> None:
        assert available_strategies() == ["longest_side", "area", "height", "width"]
        assert DEFAULT_STRATEGY == "longest_side"

    def test_get_unknown_strategy(self) -> None:
        with pytest.raises(KeyError, match="Unknown strategy 'nope'"):
            get_strategy("nope")

    def test_keys_order_items(self, make_items) -> None:
        items = make_items(
            [
                PieceRequest(width=30.0, height=5.0),
                PieceRequest(width=20.0, height=20.0),
                PieceRequest(width=10.0, height=25.0),
            ]
        )

        def order(name: str) -> list[int]:
            ordered = sorted(items, key=STRATEGIES[name].key)
            return [item.request_index for item in ordered]

        assert order("longest_side") == [0, 2, 1]
        assert order("area") == [1, 2, 0]
        assert order("height") == [2, 1, 0]
        assert order("width") == [0, 1, 2]


class TestEvaluate:
    """Tests for running one or all strategies."""

    def test_result_names_strategy(self, config: PackingConfig) -> None:
        requests = [PieceRequest(width=10.0, height=10.0)]
        result = evaluate_strategy(requests, config, "area")
        assert result.strategy == "area"

    def test_unknown_strategy_raises(self, config: PackingConfig) -> None:
        with pytest.raises(KeyError):
            evaluate_strategy([], config, "nope")

    def test_best_of_ties_keep_first_strategy(self, config: PackingConfig) -> None:
        result = best_of_strategies([PieceRequest(width=10.0, height=10.0)], config)
        assert result.strategy == "longest_side"

    def test_best_of_picks_lowest_rank(
        self, config: PackingConfig, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        leftover = PlacementItem(PieceRequest(width=10.0, height=10.0), 0)
        unplaced = {"longest_side": 1, "area": 1, "height": 0, "width": 0}

        def fake_evaluate(requests, config, name):
            return PackingResult(unplaced=(leftover,) * unplaced[name], strategy=name)

        monkeypatch.setattr(strategies, "evaluate_strategy", fake_evaluate)
        assert best_of_strategies([], config).strategy == "height"

    def test_best_is_never_worse(self, config: PackingConfig) -> None:
        requests = [
            PieceRequest(width=30.0, height=60.0, quantity=3),
            PieceRequest(width=17.0, height=40.0, quantity=5),
            PieceRequest(width=8.0, height=90.0, quantity=4),
            PieceRequest(width=12.5, height=12.5, quantity=9),
        ]
        best = best_of_strategies(requests, config)
        for name in available_strategies():
            other = evaluate_strategy(requests, config, name)
            assert (len(best.unplaced), best.total_sheets) <= (
                len(other.unplaced),
                other.total_sheets,
            )


class TestPlanCutsCommand:
    """Tests for the plan command."""

    def test_execute(self) -> None:
        result = PlanCutsCommand().execute(
            [PieceRequest(width=47.9, height=10.0, quantity=10)]
        )
        assert result.total_sheets == 2
        assert result.status is PackingStatus.DONE

    def test_execute_best(self) -> None:
        result = PlanCutsCommand().execute(
            [PieceRequest(width=10.0, height=10.0)], best=True
        )
        assert result.strategy in available_strategies()

    def test_execute_text(self, cut_list_text: str) -> None:
        result = PlanCutsCommand(PackingConfig(kerf=0.125)).execute_text(cut_list_text)
        assert result.total_pieces_placed == 12
        assert result.is_complete
