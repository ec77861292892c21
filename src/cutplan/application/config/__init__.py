"""Configuration schema and loading system for cut plans.

Public API:
    - CutPlanConfiguration: Root configuration model
    - SheetSizeConfigSchema, StripModeConfigSchema, ConservativeConfigSchema
    - load_config: Load configuration from a JSON file
    - load_config_from_dict: Load configuration from a dictionary
    - ConfigError: Exception for configuration errors
    - config_to_packing: Convert a configuration to a PackingConfig
    - merge_config_with_cli: Apply command line overrides
    - default_config: Configuration used without a config file
    - validate_config: Shop advisory checks returning a ValidationResult

Example:
    >>> from pathlib import Path
    >>> from cutplan.application.config import load_config, ConfigError
    >>>
    >>> try:
    ...     config = load_config(Path("shop.json"))
    ...     print(f"Sheet: {config.sheet_size.width}x{config.sheet_size.height}")
    ... except ConfigError as e:
    ...     print(f"Error: {e}")
"""

from cutplan.application.config.adapter import config_to_packing
from cutplan.application.config.loader import (
    ConfigError,
    load_config,
    load_config_from_dict,
)
from cutplan.application.config.merger import default_config, merge_config_with_cli
from cutplan.application.config.schema import (
    SUPPORTED_VERSIONS,
    ConservativeConfigSchema,
    CutPlanConfiguration,
    SheetSizeConfigSchema,
    StripModeConfigSchema,
)
from cutplan.application.config.validator import (
    ValidationError,
    ValidationResult,
    ValidationWarning,
    validate_config,
)

__all__ = [
    "SUPPORTED_VERSIONS",
    "ConfigError",
    "ConservativeConfigSchema",
    "CutPlanConfiguration",
    "SheetSizeConfigSchema",
    "StripModeConfigSchema",
    "ValidationError",
    "ValidationResult",
    "ValidationWarning",
    "config_to_packing",
    "default_config",
    "load_config",
    "load_config_from_dict",
    "merge_config_with_cli",
    "validate_config",
]
