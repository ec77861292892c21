"""Pydantic request schemas for the REST API."""

from typing import Any

from pydantic import BaseModel, Field, model_validator

from cutplan.application import DEFAULT_STRATEGY, MAX_QUANTITY


class PieceSchema(BaseModel):
    """A single cut list line given as structured data."""

    width: float = Field(
        ..., ge=0, allow_inf_nan=False, description="Piece width in inches"
    )
    height: float = Field(
        ..., ge=0, allow_inf_nan=False, description="Piece height in inches"
    )
    quantity: int = Field(
        default=1, ge=0, le=MAX_QUANTITY, description="Number of identical pieces"
    )
    edge_banding_units: int = Field(
        default=0, ge=0, description="Edge banding units per piece"
    )


class PackRequest(BaseModel):
    """Request for packing a cut list.

    Exactly one of ``pieces`` or ``cut_list`` must be given. ``config`` takes
    the same keys as a configuration file; ``schema_version`` may be omitted.
    """

    pieces: list[PieceSchema] | None = Field(
        default=None, description="Structured piece requests"
    )
    cut_list: str | None = Field(
        default=None, description="Cut list text, one '<W> x <H> = <N>PCS' per line"
    )
    config: dict[str, Any] | None = Field(
        default=None, description="Configuration overrides"
    )
    best: bool = Field(
        default=False, description="Try every sort strategy and keep the best plan"
    )
    strategy: str = Field(
        default=DEFAULT_STRATEGY, description="Sort strategy for the general pass"
    )

    @model_validator(mode="after")
    def check_single_source(self) -> "PackRequest":
        if (self.pieces is None) == (self.cut_list is None):
            raise ValueError("Provide exactly one of 'pieces' or 'cut_list'")
        return self
