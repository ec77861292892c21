"""Configuration merging utilities for CLI override support.

Precedence is: CLI args > config values > defaults. Only non-None CLI
arguments override configuration values.
"""

from typing import Any

from cutplan.application.config.schema import CutPlanConfiguration


def default_config() -> CutPlanConfiguration:
    """Configuration used when no config file is given."""
    return CutPlanConfiguration(schema_version="1.0")


def merge_config_with_cli(
    config: CutPlanConfiguration,
    *,
    sheet_width: float | None = None,
    sheet_height: float | None = None,
    kerf: float | None = None,
    strip: bool | None = None,
    conservative: bool | None = None,
    allow_rotation: bool | None = None,
    max_sheets: int | None = None,
) -> CutPlanConfiguration:
    """Merge CLI arguments with configuration values.

    Args:
        config: The base configuration to merge with
        sheet_width: Override for sheet_size.width
        sheet_height: Override for sheet_size.height
        kerf: Override for kerf
        strip: Override for strip_mode.enabled
        conservative: Override for conservative.enabled
        allow_rotation: Override for allow_rotation
        max_sheets: Override for max_sheets

    Returns:
        A new, re-validated CutPlanConfiguration with merged values

    Raises:
        pydantic.ValidationError: If an override is out of range.

    Example:
        >>> merged = merge_config_with_cli(default_config(), kerf=0.125)
        >>> merged.kerf
        0.125
    """
    data: dict[str, Any] = config.model_dump()

    if sheet_width is not None:
        data["sheet_size"]["width"] = sheet_width
    if sheet_height is not None:
        data["sheet_size"]["height"] = sheet_height
    if kerf is not None:
        data["kerf"] = kerf
    if strip is not None:
        data["strip_mode"]["enabled"] = strip
    if conservative is not None:
        data["conservative"]["enabled"] = conservative
    if allow_rotation is not None:
        data["allow_rotation"] = allow_rotation
    if max_sheets is not None:
        data["max_sheets"] = max_sheets

    return CutPlanConfiguration.model_validate(data)
