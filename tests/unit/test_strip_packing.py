"""Tests for the uniform-width strip pass."""

from __future__ import annotations

import pytest

from cutplan.domain import PieceRequest
from cutplan.infrastructure import PackingConfig, SheetConfig, StripPacker


@pytest.fixture
def strip_config() -> PackingConfig:
    """Strip mode on a 4'x8' sheet without kerf."""
    return PackingConfig(strip_mode_enabled=True)


class TestEligibility:
    """Tests for strip mode activation."""

    def test_disabled_by_config(self, make_items) -> None:
        items = make_items([PieceRequest(width=11.75, height=30.0, quantity=10)])
        assert not StripPacker(PackingConfig()).is_eligible(items)

    def test_no_items(self, strip_config: PackingConfig) -> None:
        assert not StripPacker(strip_config).is_eligible([])

    def test_exactly_at_threshold(self, strip_config: PackingConfig, make_items) -> None:
        items = make_items(
            [
                PieceRequest(width=11.75, height=30.0, quantity=7),
                PieceRequest(width=20.0, height=30.0, quantity=3),
            ]
        )
        assert StripPacker(strip_config).is_eligible(items)

    def test_just_below_threshold(self, strip_config: PackingConfig, make_items) -> None:
        """69.99% of pieces in one bucket is not enough."""
        items = make_items(
            [
                PieceRequest(width=11.75, height=30.0, quantity=6999),
                PieceRequest(width=20.0, height=30.0, quantity=3001),
            ]
        )
        assert not StripPacker(strip_config).is_eligible(items)

    def test_widths_within_tolerance_share_bucket(
        self, strip_config: PackingConfig
    ) -> None:
        packer = StripPacker(strip_config)
        assert packer.bucket_key(11.99) == packer.bucket_key(12.0)
        assert packer.bucket_key(11.9) != packer.bucket_key(12.0)

    def test_first_seen_bucket_wins_ties(
        self, strip_config: PackingConfig, make_items
    ) -> None:
        items = make_items(
            [
                PieceRequest(width=10.0, height=30.0, quantity=2),
                PieceRequest(width=20.0, height=30.0, quantity=2),
            ]
        )
        bucket = StripPacker(strip_config).dominant_bucket(items)
        assert {item.width for item in bucket} == {10.0}


class TestColumnCount:
    """Tests for the number of columns across a sheet."""

    @pytest.mark.parametrize(
        "kerf,width,expected",
        [
            (0.0, 11.75, 4),
            (0.125, 11.75, 4),
            (0.0, 24.0, 2),
            (0.125, 24.0, 1),
            (0.0, 48.0, 1),
            (0.0, 50.0, 0),
        ],
    )
    def test_column_count(self, kerf: float, width: float, expected: int) -> None:
        config = PackingConfig(kerf=kerf, strip_mode_enabled=True)
        assert StripPacker(config).column_count(width) == expected


class TestPack:
    """Tests for stacking items into columns."""

    def test_inactive_returns_everything(self, make_items) -> None:
        items = make_items([PieceRequest(width=10.0, height=10.0, quantity=3)])
        result = StripPacker(PackingConfig()).pack(items)
        assert not result.active
        assert result.sheets == ()
        assert result.leftovers == tuple(items)

    def test_stacks_columns_without_kerf(
        self, strip_config: PackingConfig, make_items
    ) -> None:
        items = make_items([PieceRequest(width=11.75, height=48.0, quantity=8)])
        result = StripPacker(strip_config).pack(items)

        assert result.active
        assert result.columns == 4
        assert len(result.sheets) == 1
        positions = sorted((p.x, p.y) for p in result.sheets[0])
        assert positions == [
            (0.0, 0.0),
            (0.0, 48.0),
            (11.75, 0.0),
            (11.75, 48.0),
            (23.5, 0.0),
            (23.5, 48.0),
            (35.25, 0.0),
            (35.25, 48.0),
        ]
        assert result.leftovers == ()

    def test_kerf_between_stacked_pieces(self, make_items) -> None:
        config = PackingConfig(kerf=0.125, strip_mode_enabled=True)
        items = make_items([PieceRequest(width=11.75, height=48.0, quantity=8)])
        result = StripPacker(config).pack(items)

        # 48 + 1/8 + 48 overruns 96, so each column holds one piece
        assert [len(sheet) for sheet in result.sheets] == [4, 4]
        xs = sorted(p.x for p in result.sheets[0])
        assert xs == [0.0, 11.875, 23.75, 35.625]

    def test_tallest_pieces_placed_first(
        self, strip_config: PackingConfig, make_items
    ) -> None:
        items = make_items(
            [
                PieceRequest(width=48.0, height=10.0, quantity=1),
                PieceRequest(width=48.0, height=50.0, quantity=1),
            ]
        )
        sheet = StripPacker(strip_config).pack(items).sheets[0]
        assert [p.placed_height for p in sheet] == [50.0, 10.0]
        assert [p.y for p in sheet] == [0.0, 50.0]

    def test_common_width_is_widest_member(
        self, strip_config: PackingConfig, make_items
    ) -> None:
        items = make_items(
            [
                PieceRequest(width=11.99, height=20.0, quantity=4),
                PieceRequest(width=12.0, height=20.0, quantity=4),
            ]
        )
        result = StripPacker(strip_config).pack(items)
        assert result.common_width == 12.0
        assert result.columns == 4

    def test_leftovers_keep_original_order(
        self, strip_config: PackingConfig, make_items
    ) -> None:
        items = make_items(
            [
                PieceRequest(width=5.0, height=5.0, quantity=1),
                PieceRequest(width=11.75, height=30.0, quantity=8),
                PieceRequest(width=7.0, height=3.0, quantity=1),
            ]
        )
        result = StripPacker(strip_config).pack(items)
        assert result.leftovers == (items[0], items[-1])

    def test_max_sheets_stops_strip_pass(
        self, strip_config: PackingConfig, make_items
    ) -> None:
        items = make_items([PieceRequest(width=48.0, height=96.0, quantity=5)])
        result = StripPacker(strip_config).pack(items, max_sheets=2)
        assert len(result.sheets) == 2
        assert len(result.leftovers) == 3

    def test_bucket_wider_than_sheet_is_skipped(self, make_items) -> None:
        config = PackingConfig(
            sheet=SheetConfig(width=48.0, height=96.0), strip_mode_enabled=True
        )
        items = make_items([PieceRequest(width=60.0, height=20.0, quantity=4)])
        result = StripPacker(config).pack(items)
        assert result.sheets == ()
        assert result.leftovers == tuple(items)

    def test_every_item_accounted_for(
        self, strip_config: PackingConfig, make_items
    ) -> None:
        items = make_items(
            [
                PieceRequest(width=15.5, height=40.0, quantity=9),
                PieceRequest(width=15.5, height=70.0, quantity=4),
                PieceRequest(width=30.0, height=30.0, quantity=2),
            ]
        )
        result = StripPacker(strip_config).pack(items)
        placed = [p.item for sheet in result.sheets for p in sheet]
        assert sorted(placed + list(result.leftovers), key=id) == sorted(items, key=id)
        assert len(set(placed)) == len(placed)

