"""Pydantic models for cut plan configuration files.

Example file::

    {
      "schema_version": "1.0",
      "sheet_size": {"width": 48, "height": 96},
      "kerf": 0.125,
      "strip_mode": {"enabled": true},
      "conservative": {"enabled": true, "max_distinct_dims": 6}
    }
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator

SUPPORTED_VERSIONS: frozenset[str] = frozenset({"1.0"})


class SheetSizeConfigSchema(BaseModel):
    """Configuration for stock sheet dimensions.

    Attributes:
        width: Sheet width in inches (default 48.0 for 4' sheets).
        height: Sheet height in inches (default 96.0 for 8' sheets).
    """

    model_config = ConfigDict(extra="forbid")

    width: float = Field(default=48.0, gt=0, le=144, description="Sheet width in inches")
    height: float = Field(
        default=96.0, gt=0, le=144, description="Sheet height in inches"
    )


class StripModeConfigSchema(BaseModel):
    """Configuration for the uniform-width strip pass.

    Attributes:
        enabled: Whether the strip pass runs before general packing.
        width_tolerance: Widths within this bucket size count as equal.
        threshold: Share of pieces in one width bucket needed to activate.
    """

    model_config = ConfigDict(extra="forbid")

    enabled: bool = Field(default=False, description="Enable strip mode")
    width_tolerance: float = Field(
        default=1 / 32, gt=0, le=1, description="Width bucket size in inches"
    )
    threshold: float = Field(
        default=0.7, gt=0, le=1, description="Share of pieces to activate"
    )


class ConservativeConfigSchema(BaseModel):
    """Configuration for the per-sheet complexity cap."""

    model_config = ConfigDict(extra="forbid")

    enabled: bool = Field(default=True, description="Cap distinct sizes per sheet")
    max_distinct_dims: int = Field(
        default=6, ge=1, le=100, description="Distinct placed sizes per sheet"
    )


class CutPlanConfiguration(BaseModel):
    """Root configuration model for a cut plan.

    Attributes:
        schema_version: Version string in format "major.minor" (e.g., "1.0")
        sheet_size: Stock sheet dimensions
        kerf: Saw blade kerf in inches
        efficient_dims: Dimensions that need a single cut
        allow_rotation: Whether pieces may be turned 90 degrees
        strip_mode: Strip pass configuration
        conservative: Per-sheet complexity cap configuration
        max_sheets: Hard ceiling on sheets per run
    """

    model_config = ConfigDict(extra="forbid")

    schema_version: str = Field(..., pattern=r"^\d+\.\d+$")
    sheet_size: SheetSizeConfigSchema = Field(default_factory=SheetSizeConfigSchema)
    kerf: float = Field(
        default=0.0, ge=0, allow_inf_nan=False, description="Saw kerf in inches"
    )
    efficient_dims: list[float] = Field(
        default_factory=lambda: [47.875, 48.0, 96.0],
        description="Dimensions that need a single cut",
    )
    allow_rotation: bool = Field(default=True, description="Allow 90 degree rotation")
    strip_mode: StripModeConfigSchema = Field(default_factory=StripModeConfigSchema)
    conservative: ConservativeConfigSchema = Field(
        default_factory=ConservativeConfigSchema
    )
    max_sheets: int = Field(default=200, ge=1, le=10000, description="Sheet ceiling")

    @field_validator("schema_version")
    @classmethod
    def validate_supported_version(cls, v: str) -> str:
        """Accept supported versions and newer minors of a supported major."""
        if v in SUPPORTED_VERSIONS:
            return v

        major_version = int(v.split(".")[0])
        supported_majors = {int(sv.split(".")[0]) for sv in SUPPORTED_VERSIONS}
        if major_version in supported_majors:
            return v

        raise ValueError(
            f"Unsupported schema version '{v}'. "
            f"Supported versions: {sorted(SUPPORTED_VERSIONS)}"
        )

    @field_validator("efficient_dims")
    @classmethod
    def validate_efficient_dims(cls, v: list[float]) -> list[float]:
        if any(dim <= 0 for dim in v):
            raise ValueError("Efficient dimensions must be positive")
        return v
