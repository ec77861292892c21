"""Pytest configuration and shared fixtures for cut plan tests."""

from __future__ import annotations

from typing import Sequence

import pytest

from cutplan.domain import PieceRequest, PlacementItem
from cutplan.infrastructure import PackingConfig, PackingResult, SheetConfig


def pytest_configure(config: pytest.Config) -> None:
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "slow: tests that take a long time to run")


# =============================================================================
# Shared helpers
# =============================================================================


def _make_items(requests: Sequence[PieceRequest]) -> list[PlacementItem]:
    """Explode requests into placement items, as the orchestrator does."""
    return [
        PlacementItem(request=request, request_index=index, instance=n)
        for index, request in enumerate(requests)
        for n in range(request.quantity)
    ]


def _assert_valid_layout(result: PackingResult) -> None:
    """Check that every placement is on its sheet and no two overlap."""
    for layout in result.layouts:
        sheet = layout.sheet_config
        footprints = [p.footprint for p in layout.placements]
        for rect in footprints:
            assert rect.x >= 0 and rect.y >= 0
            assert rect.right <= sheet.width + 1e-9
            assert rect.bottom <= sheet.height + 1e-9
        for i, a in enumerate(footprints):
            for b in footprints[i + 1 :]:
                assert not a.intersects(b), f"{a} overlaps {b}"


# =============================================================================
# Shared fixtures
# =============================================================================


@pytest.fixture
def config() -> PackingConfig:
    """Default 4'x8' configuration without kerf."""
    return PackingConfig()


@pytest.fixture
def kerf_config() -> PackingConfig:
    """4'x8' configuration with a 1/8" kerf."""
    return PackingConfig(kerf=0.125)


@pytest.fixture
def small_sheet_config() -> PackingConfig:
    """10"x10" sheet without kerf, for hand-checkable layouts."""
    return PackingConfig(sheet=SheetConfig(width=10.0, height=10.0))


@pytest.fixture
def cut_list_text() -> str:
    """A small kitchen cut list."""
    return "\n".join(
        [
            "# Base cabinets",
            '23 1/2" x 34 1/2" = 4PCS 1L',
            "47.875 x 23.5 = 2PCS 2L 1S",
            "",
            "22.75 x 11.25 = 6PCS",
        ]
    )


@pytest.fixture
def make_items():
    """Callable exploding requests into placement items."""
    return _make_items


@pytest.fixture
def assert_valid_layout():
    """Callable checking sheet bounds and overlap for a packing result."""
    return _assert_valid_layout
