"""Cut list packing endpoints."""

import logging

from fastapi import APIRouter
from fastapi.responses import Response

from cutplan.application import (
    PlanCutsCommand,
    available_strategies,
    parse_cut_list,
)
from cutplan.application.config import config_to_packing, load_config_from_dict
from cutplan.domain import PieceRequest
from cutplan.infrastructure import CutDiagramRenderer, JsonExporter, PackingResult
from cutplan.infrastructure.exporters import ExporterRegistry
from cutplan.web.exceptions import UnknownStrategyError, UnsupportedFormatError
from cutplan.web.schemas.requests import PackRequest
from cutplan.web.schemas.responses import ExportFormatsSchema, PackResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/pack", tags=["pack"])

MEDIA_TYPES = {
    "dxf": "application/dxf",
    "html": "text/html",
    "json": "application/json",
    "svg": "image/svg+xml",
}


def _to_requests(request: PackRequest) -> list[PieceRequest]:
    if request.cut_list is not None:
        return parse_cut_list(request.cut_list)
    return [
        PieceRequest(
            width=piece.width,
            height=piece.height,
            quantity=piece.quantity,
            edge_banding_units=piece.edge_banding_units,
        )
        for piece in request.pieces or []
    ]


def _run(request: PackRequest) -> PackingResult:
    """Validate the request, then pack its cut list.

    Raises:
        UnknownStrategyError: If the strategy is not registered.
        ConfigError: If the configuration overrides are invalid.
        CutListParseError: If the cut list text is malformed.
    """
    strategies = available_strategies()
    if not request.best and request.strategy not in strategies:
        raise UnknownStrategyError(request.strategy, strategies)

    config = load_config_from_dict({"schema_version": "1.0", **(request.config or {})})
    requests = _to_requests(request)
    logger.debug("Packing %d cut list lines", len(requests))

    command = PlanCutsCommand(config_to_packing(config))
    return command.execute(requests, best=request.best, strategy=request.strategy)


@router.post("", response_model=PackResponse)
async def pack_cut_list(request: PackRequest) -> PackResponse:
    """Pack a cut list and return the plan as JSON.

    Args:
        request: Pieces or cut list text, plus optional configuration.

    Returns:
        Sheets, placements, summary metrics and any issues.
    """
    result = _run(request)
    return PackResponse.model_validate(JsonExporter().to_dict(result))


@router.post("/svg")
async def pack_cut_list_svg(request: PackRequest) -> Response:
    """Pack a cut list and return every sheet stacked in one SVG image."""
    result = _run(request)
    svg = CutDiagramRenderer().render_combined_svg(result)
    return Response(content=svg, media_type="image/svg+xml")


@router.get("/formats", response_model=ExportFormatsSchema)
async def list_export_formats() -> ExportFormatsSchema:
    """List all available export formats."""
    return ExportFormatsSchema(formats=ExporterRegistry.available_formats())


@router.post("/export/{format_name}")
async def export_cut_list(format_name: str, request: PackRequest) -> Response:
    """Pack a cut list and return it in a registered export format.

    Args:
        format_name: Registered exporter name (dxf, html, json, svg).
        request: Pieces or cut list text, plus optional configuration.

    Returns:
        The exported document as a downloadable attachment.
    """
    available = ExporterRegistry.available_formats()
    if format_name not in available:
        raise UnsupportedFormatError(format_name, available)

    result = _run(request)
    exporter = ExporterRegistry.get(format_name)()
    content = exporter.export_string(result)
    return Response(
        content=content,
        media_type=MEDIA_TYPES.get(format_name, "application/octet-stream"),
        headers={
            "Content-Disposition": (
                f"attachment; filename=cutplan.{exporter.file_extension}"
            )
        },
    )
