"""JSON exporter for packing results."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, ClassVar

from cutplan.infrastructure.exporters.base import ExporterRegistry
from cutplan.infrastructure.formatters import JsonExporter

if TYPE_CHECKING:
    from cutplan.infrastructure.bin_packing import PackingResult


@ExporterRegistry.register("json")
class JsonPlanExporter:
    """Writes the packing result as indented JSON."""

    format_name: ClassVar[str] = "json"
    file_extension: ClassVar[str] = "json"

    def __init__(self) -> None:
        self._exporter = JsonExporter()

    def export(self, result: PackingResult, path: Path) -> None:
        path.write_text(self.export_string(result), encoding="utf-8")

    def export_string(self, result: PackingResult) -> str:
        return self._exporter.export(result)
