"""Pydantic schemas for the REST API."""

from cutplan.web.schemas.requests import PackRequest, PieceSchema
from cutplan.web.schemas.responses import (
    ErrorResponseSchema,
    ExportFormatsSchema,
    PackingSummarySchema,
    PackResponse,
    PlacementSchema,
    SheetSchema,
    UnplacedSchema,
)

__all__ = [
    # Requests
    "PackRequest",
    "PieceSchema",
    # Responses
    "ErrorResponseSchema",
    "ExportFormatsSchema",
    "PackResponse",
    "PackingSummarySchema",
    "PlacementSchema",
    "SheetSchema",
    "UnplacedSchema",
]
