"""Tests for the text cutting plan and JSON formatters."""

from __future__ import annotations

import json

import pytest

from cutplan.domain import PieceRequest
from cutplan.infrastructure import (
    CutPlanFormatter,
    JsonExporter,
    PackingConfig,
    PackingOrchestrator,
    PackingResult,
)


@pytest.fixture
def reference_result() -> PackingResult:
    return PackingOrchestrator().optimize_cut_list(
        [PieceRequest(width=47.9, height=10.0, quantity=10, edge_banding_units=1)]
    )


class TestCutPlanFormatter:
    """Tests for the shop cutting plan text."""

    def test_summary(self, reference_result: PackingResult) -> None:
        text = CutPlanFormatter().format(reference_result)
        lines = text.split("\n")
        assert lines[0] == "CUTTING PLAN"
        assert "Total Sheets Needed: 2" in lines
        assert "Total Cuts: 20" in lines
        assert "Total Edges: 10" in lines

    def test_sheet_sections(self, reference_result: PackingResult) -> None:
        lines = CutPlanFormatter().format(reference_result).split("\n")
        assert any(line.startswith("Sheet 1: 9 pcs, 18 cuts, 9 edges") for line in lines)
        assert '    9PCS 47.9" x 10" 1 EDGE (2-cut)' in lines
        assert '    1PCS 47.9" x 10" 1 EDGE (2-cut)' in lines
        assert "ISSUES" not in lines

    def test_single_cut_tag(self) -> None:
        result = PackingOrchestrator().optimize_cut_list(
            [PieceRequest(width=47.875, height=12.0, quantity=2)]
        )
        assert '    2PCS 47.875" x 12" (1-cut)' in CutPlanFormatter().format(result)

    def test_strip_sheet_marker(self) -> None:
        config = PackingConfig(strip_mode_enabled=True)
        result = PackingOrchestrator(config).optimize_cut_list(
            [PieceRequest(width=47.9, height=10.0, quantity=10)]
        )
        assert "[strip]" in CutPlanFormatter(config).format(result)

    def test_issues_section(self) -> None:
        result = PackingOrchestrator().optimize_cut_list(
            [PieceRequest(width=50.0, height=100.0)]
        )
        lines = CutPlanFormatter().format(result).split("\n")
        assert "Total Sheets Needed: 0" in lines
        assert "ISSUES" in lines
        assert '  50" x 100" (1 PCS) exceeds the 48" x 96" sheet' in lines

    def test_format_requests(self) -> None:
        text = CutPlanFormatter().format_requests(
            [
                PieceRequest(
                    width=23.5,
                    height=34.5,
                    quantity=4,
                    display_width="23 1/2",
                    display_height="34 1/2",
                ),
                PieceRequest(width=96.0, height=11.0, quantity=2),
            ]
        )
        assert text.startswith("CUT LIST")
        assert "23 1/2" in text
        assert "(1-cut)" in text and "(2-cut)" in text
        assert text.split("\n")[-1].split() == ["TOTAL", "6"]

    def test_format_no_requests(self) -> None:
        assert CutPlanFormatter().format_requests([]) == "No pieces in cut list."


class TestJsonExporter:
    """Tests for JSON conversion."""

    def test_to_dict(self, reference_result: PackingResult) -> None:
        data = JsonExporter().to_dict(reference_result)
        assert data["status"] == "done"
        assert data["strategy"] == "longest_side"
        assert data["summary"]["total_sheets"] == 2
        assert data["summary"]["total_cuts"] == 20
        assert len(data["sheets"]) == 2
        first = data["sheets"][0]["placements"][0]
        assert first == {
            "label": '1PCS 47.9" x 10"',
            "x": 0.0,
            "y": 0.0,
            "width": 47.9,
            "height": 10.0,
            "rotated": False,
            "request_index": 0,
        }
        assert data["unplaced"] == []

    def test_unplaced_grouped_by_request(self) -> None:
        result = PackingOrchestrator(PackingConfig(max_sheets=1)).optimize_cut_list(
            [PieceRequest(width=48.0, height=96.0, quantity=3)]
        )
        data = JsonExporter().to_dict(result)
        assert data["status"] == "aborted_limit"
        assert data["unplaced"] == [
            {"request_index": 0, "width": 48.0, "height": 96.0, "quantity": 2}
        ]

    def test_export_is_json(self, reference_result: PackingResult) -> None:
        data = json.loads(JsonExporter().export(reference_result))
        assert data["summary"]["total_pieces"] == 10
