"""Pydantic response schemas for the REST API."""

from pydantic import BaseModel, Field


class PlacementSchema(BaseModel):
    """A piece placed on a sheet."""

    label: str = Field(..., description="Piece label, e.g. '1PCS 10\" x 20\"'")
    x: float = Field(..., description="Left edge in inches from the sheet origin")
    y: float = Field(..., description="Top edge in inches from the sheet origin")
    width: float = Field(..., description="Width as placed, after rotation")
    height: float = Field(..., description="Height as placed, after rotation")
    rotated: bool = Field(..., description="Whether the piece was turned 90 degrees")
    request_index: int = Field(..., description="Index of the originating request")


class SheetSchema(BaseModel):
    """Layout of a single stock sheet."""

    index: int = Field(..., description="Zero-based sheet index")
    source: str = Field(..., description="Pass that filled the sheet: strip or general")
    width: float = Field(..., description="Sheet width in inches")
    height: float = Field(..., description="Sheet height in inches")
    cut_count: int = Field(..., description="Estimated cuts for the sheet")
    edge_banding_total: int = Field(..., description="Edge banding units on the sheet")
    waste_percentage: float = Field(..., description="Unused share of the sheet")
    placements: list[PlacementSchema] = Field(default_factory=list)


class PackingSummarySchema(BaseModel):
    """Aggregate metrics for a packing run."""

    total_sheets: int
    total_pieces: int
    total_cuts: int
    total_edge_banding: int
    efficient_pieces: int
    inefficient_pieces: int
    total_waste_percentage: float


class UnplacedSchema(BaseModel):
    """Pieces of one request that were left off every sheet."""

    request_index: int
    width: float
    height: float
    quantity: int


class PackResponse(BaseModel):
    """Response for a packing run."""

    status: str = Field(..., description="done, aborted_stuck or aborted_limit")
    strategy: str = Field(..., description="Sort strategy that produced the plan")
    summary: PackingSummarySchema
    sheets: list[SheetSchema] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)
    errors: list[str] = Field(default_factory=list)
    unplaced: list[UnplacedSchema] = Field(default_factory=list)


class ExportFormatsSchema(BaseModel):
    """Response for available export formats."""

    formats: list[str] = Field(..., description="Available format names")


class ErrorResponseSchema(BaseModel):
    """Error body returned by the exception handlers."""

    error: str
    error_type: str
    details: list[dict] | dict | None = None
