"""Adapter from the configuration schema to the packing engine's config."""

from cutplan.application.config.schema import CutPlanConfiguration
from cutplan.infrastructure.bin_packing import PackingConfig, SheetConfig


def config_to_packing(config: CutPlanConfiguration) -> PackingConfig:
    """Convert a validated CutPlanConfiguration to a frozen PackingConfig.

    Args:
        config: Validated configuration.

    Returns:
        PackingConfig carrying the same settings.
    """
    return PackingConfig(
        sheet=SheetConfig(
            width=config.sheet_size.width,
            height=config.sheet_size.height,
        ),
        kerf=config.kerf,
        efficient_dims=tuple(config.efficient_dims),
        allow_rotation=config.allow_rotation,
        strip_mode_enabled=config.strip_mode.enabled,
        strip_width_tolerance=config.strip_mode.width_tolerance,
        strip_threshold=config.strip_mode.threshold,
        conservative_mode=config.conservative.enabled,
        max_distinct_dims=config.conservative.max_distinct_dims,
        max_sheets=config.max_sheets,
    )
