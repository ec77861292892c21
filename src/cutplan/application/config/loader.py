"""Configuration loading for JSON files and request bodies.

Loads JSON cut plan configuration files. File system errors, JSON syntax
errors and schema validation errors are all reported as ConfigError with a
clear, actionable message.
"""

import json
from pathlib import Path
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from cutplan.application.config.schema import CutPlanConfiguration


class ConfigError(Exception):
    """Exception raised for configuration-related errors.

    Attributes:
        message: The primary error message
        error_type: Category of error (file_not_found, permission_denied,
            file_read_error, json_parse, validation)
        path: Path to the configuration file (if applicable)
        details: Additional error details (line/column for JSON, validation errors)
    """

    def __init__(
        self,
        message: str,
        error_type: str = "unknown",
        path: Path | None = None,
        details: list[dict[str, Any]] | None = None,
    ) -> None:
        self.message = message
        self.error_type = error_type
        self.path = path
        self.details = details or []
        super().__init__(message)

    def __str__(self) -> str:
        return self.message


def _json_path(loc: tuple[str | int, ...]) -> str:
    """Render a pydantic error location, e.g. ``efficient_dims[1]``."""
    path = ""
    for segment in loc:
        path += f"[{segment}]" if isinstance(segment, int) else f".{segment}"
    return path.lstrip(".")


def _validate(data: Any, path: Path | None = None) -> CutPlanConfiguration:
    """Validate parsed JSON, turning pydantic errors into a ConfigError."""
    try:
        return CutPlanConfiguration.model_validate(data)
    except PydanticValidationError as e:
        details = [
            {
                "path": _json_path(err["loc"]),
                "message": err["msg"],
                "value": err.get("input"),
                "error_type": err["type"],
            }
            for err in e.errors()
        ]
        summary = "\n".join(
            f"  - {detail['path']}: {detail['message']}" for detail in details
        )
        raise ConfigError(
            message=f"Configuration validation failed:\n{summary}",
            error_type="validation",
            path=path,
            details=details,
        ) from e


def _read_json(path: Path) -> Any:
    """Read and decode a JSON file, mapping each failure to its error type."""
    try:
        content = path.read_text(encoding="utf-8")
    except FileNotFoundError as e:
        raise ConfigError(
            f"Config file not found: {path}", "file_not_found", path
        ) from e
    except PermissionError as e:
        raise ConfigError(
            f"Permission denied reading config file: {path}", "permission_denied", path
        ) from e
    except OSError as e:
        raise ConfigError(
            f"Error reading config file: {path}: {e}", "file_read_error", path
        ) from e

    try:
        return json.loads(content)
    except json.JSONDecodeError as e:
        raise ConfigError(
            f"Invalid JSON in {path} at line {e.lineno}, column {e.colno}: {e.msg}",
            error_type="json_parse",
            path=path,
            details=[{"line": e.lineno, "column": e.colno, "message": e.msg}],
        ) from e


def load_config(path: Path) -> CutPlanConfiguration:
    """Load and validate a cut plan configuration from a JSON file.

    Raises:
        ConfigError: If the file cannot be read, is not valid JSON, or fails
            schema validation. ``error_type`` names the failure.
    """
    return _validate(_read_json(path), path)


def load_config_from_dict(data: dict[str, Any]) -> CutPlanConfiguration:
    """Validate a configuration given as a dictionary, e.g. a request body."""
    return _validate(data)
