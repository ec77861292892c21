"""Validation results and shop advisory checks for cut plan configurations.

Schema validation (types and ranges) happens in the pydantic models. The
checks here flag settings that are valid but probably not what the user
meant.
"""

from dataclasses import dataclass, field
from typing import Any

from cutplan.application.config.schema import CutPlanConfiguration

# Typical full-kerf saw blade width in inches
TYPICAL_KERF = 0.125

# Kerf above this is almost certainly a units mistake
WIDE_KERF = 0.5


@dataclass
class ValidationError:
    """A blocking validation error.

    Attributes:
        path: JSON path to the invalid field (e.g., "sheet_size.width")
        message: Human-readable description of the error
        value: The invalid value that caused the error
    """

    path: str
    message: str
    value: Any = None


@dataclass
class ValidationWarning:
    """A non-blocking validation warning.

    Attributes:
        path: JSON path to the concerning field
        message: Human-readable description of the concern
        suggestion: Optional suggested remediation
    """

    path: str
    message: str
    suggestion: str | None = None


@dataclass
class ValidationResult:
    """Container for validation errors and warnings."""

    errors: list[ValidationError] = field(default_factory=list)
    warnings: list[ValidationWarning] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return len(self.errors) == 0

    @property
    def exit_code(self) -> int:
        """CLI exit code: 0 clean, 1 errors, 2 warnings only."""
        if self.errors:
            return 1
        if self.warnings:
            return 2
        return 0

    def add_error(self, path: str, message: str, value: Any = None) -> "ValidationResult":
        self.errors.append(ValidationError(path=path, message=message, value=value))
        return self

    def add_warning(
        self, path: str, message: str, suggestion: str | None = None
    ) -> "ValidationResult":
        self.warnings.append(
            ValidationWarning(path=path, message=message, suggestion=suggestion)
        )
        return self


def validate_config(config: CutPlanConfiguration) -> ValidationResult:
    """Check a schema-valid configuration for shop advisories.

    Args:
        config: Configuration that already passed schema validation.

    Returns:
        ValidationResult with any errors and warnings found.
    """
    result = ValidationResult()
    sheet = config.sheet_size

    if config.kerf == 0:
        result.add_warning(
            "kerf",
            "Kerf is 0; pieces will be laid out edge to edge",
            suggestion=f"Set kerf to your blade width (typically {TYPICAL_KERF})",
        )

    longest_side = max(sheet.width, sheet.height)
    for index, dim in enumerate(config.efficient_dims):
        if dim > longest_side:
            result.add_warning(
                f"efficient_dims[{index}]",
                f"Efficient dimension {dim:g} is larger than the "
                f'{sheet.width:g}" x {sheet.height:g}" sheet and never matches',
            )

    if config.kerf * 2 >= min(sheet.width, sheet.height):
        result.add_error(
            "kerf",
            "Kerf leaves no usable material on the sheet",
            value=config.kerf,
        )
    elif config.kerf > WIDE_KERF:
        result.add_warning(
            "kerf",
            f"Kerf of {config.kerf:g} inches is wider than any common saw blade",
            suggestion=f"Check the units; a full-kerf blade is about {TYPICAL_KERF}",
        )

    if config.strip_mode.enabled and config.strip_mode.width_tolerance > 0.25:
        result.add_warning(
            "strip_mode.width_tolerance",
            "Width tolerance above 1/4 inch groups visibly different widths",
            suggestion="Use 1/32 (0.03125) unless parts are trimmed later",
        )

    return result
