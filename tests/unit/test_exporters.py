"""Tests for the exporter framework and the registered exporters."""

from __future__ import annotations

import json
from io import StringIO
from pathlib import Path

import ezdxf
import pytest

from cutplan.domain import PieceRequest
from cutplan.infrastructure import PackingOrchestrator, PackingResult
from cutplan.infrastructure.exporters import (
    DxfExporter,
    ExporterRegistry,
    ExportManager,
    HtmlPrintExporter,
    JsonPlanExporter,
    SvgExporter,
)
from cutplan.infrastructure.exporters.dxf import LAYERS


@pytest.fixture
def result() -> PackingResult:
    """Ten 47.9" x 10" pieces on two sheets."""
    return PackingOrchestrator().optimize_cut_list(
        [PieceRequest(width=47.9, height=10.0, quantity=10)]
    )


class TestExporterRegistry:
    """Tests for ExporterRegistry."""

    def test_builtin_formats(self) -> None:
        assert ExporterRegistry.available_formats() == ["dxf", "html", "json", "svg"]

    def test_get_returns_class(self) -> None:
        assert ExporterRegistry.get("dxf") is DxfExporter
        assert ExporterRegistry.is_registered("svg")

    def test_get_unknown_format_raises_key_error(self) -> None:
        with pytest.raises(KeyError, match="No exporter registered for format 'pdf'"):
            ExporterRegistry.get("pdf")


class TestExportManager:
    """Tests for ExportManager."""

    def test_export_all(self, tmp_path: Path, result: PackingResult) -> None:
        manager = ExportManager(tmp_path / "out")
        files = manager.export_all(["svg", "json"], result, project_name="kitchen")
        assert files == {
            "svg": tmp_path / "out" / "kitchen_svg.svg",
            "json": tmp_path / "out" / "kitchen_json.json",
        }
        assert all(path.exists() for path in files.values())

    def test_unknown_format_writes_nothing(
        self, tmp_path: Path, result: PackingResult
    ) -> None:
        manager = ExportManager(tmp_path / "out")
        with pytest.raises(KeyError):
            manager.export_all(["svg", "pdf"], result)
        assert not (tmp_path / "out").exists()


class TestDxfExporter:
    """Tests for DXF output, read back with ezdxf."""

    def test_file_contents(self, tmp_path: Path, result: PackingResult) -> None:
        path = tmp_path / "plan.dxf"
        DxfExporter().export(result, path)

        doc = ezdxf.readfile(path)
        for name in LAYERS:
            assert doc.layers.has_entry(name)

        msp = doc.modelspace()
        outlines = list(msp.query("LWPOLYLINE"))
        assert len([e for e in outlines if e.dxf.layer == "SHEETS"]) == 2
        assert len([e for e in outlines if e.dxf.layer == "OUTLINE"]) == 10
        assert len(list(msp.query("MTEXT"))) == 10
        titles = sorted(e.dxf.text for e in msp.query("TEXT"))
        assert titles == ["Sheet 1", "Sheet 2"]

    def test_y_axis_is_flipped(self, result: PackingResult) -> None:
        """The first piece sits at the top edge of the sheet outline."""
        doc = ezdxf.read(StringIO(DxfExporter().export_string(result)))
        pieces = [
            e for e in doc.modelspace().query("LWPOLYLINE") if e.dxf.layer == "OUTLINE"
        ]
        top = max(y for x, y in pieces[0].vertices())
        assert top == pytest.approx(96.0)

    def test_millimeters(self, result: PackingResult) -> None:
        doc = ezdxf.read(StringIO(DxfExporter(units="mm").export_string(result)))
        sheets = [
            e for e in doc.modelspace().query("LWPOLYLINE") if e.dxf.layer == "SHEETS"
        ]
        xs = [x for x, y in sheets[0].vertices()]
        assert max(xs) == pytest.approx(48.0 * 25.4)

    def test_invalid_units(self) -> None:
        with pytest.raises(ValueError, match="Invalid units"):
            DxfExporter(units="feet")


class TestSvgExporter:
    """Tests for SvgExporter."""

    def test_export_string(self, result: PackingResult) -> None:
        svg = SvgExporter().export_string(result)
        assert svg.startswith("<svg")
        assert "Sheet 2 of 2" in svg

    def test_individual_sheets(self, tmp_path: Path, result: PackingResult) -> None:
        files = SvgExporter().export_individual_sheets(result, tmp_path / "plan.svg")
        assert files == [tmp_path / "plan_1.svg", tmp_path / "plan_2.svg"]
        assert all(path.read_text().startswith("<svg") for path in files)


class TestTextExporters:
    """Tests for the JSON and HTML exporters."""

    def test_json(self, tmp_path: Path, result: PackingResult) -> None:
        path = tmp_path / "plan.json"
        JsonPlanExporter().export(result, path)
        assert json.loads(path.read_text())["summary"]["total_sheets"] == 2

    def test_html(self, result: PackingResult) -> None:
        html = HtmlPrintExporter(title="Garage").export_string(result)
        assert "<title>Garage</title>" in html
