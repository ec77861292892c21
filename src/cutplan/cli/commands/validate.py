"""Validate command for checking configuration files."""

from pathlib import Path
from typing import Annotated

import typer

from cutplan.application.config import (
    ConfigError,
    ValidationResult,
    load_config,
    validate_config,
)


def validate_command(
    config_file: Annotated[
        Path,
        typer.Argument(help="Path to the JSON configuration file to validate"),
    ],
) -> None:
    """Validate a cut plan configuration file.

    Checks the configuration file for JSON syntax, schema errors (unknown
    fields, invalid types, ranges) and shop advisories such as a zero or
    unusually wide kerf.

    Exit codes:
        0 - Configuration is valid with no warnings
        1 - Configuration has errors (cannot be used)
        2 - Configuration is valid but has warnings

    Example:
        cutplan validate shop.json
    """
    typer.echo(f"Validating {config_file}...")

    try:
        config = load_config(config_file)
    except ConfigError as e:
        display_load_error(e)
        raise typer.Exit(code=1)

    result = validate_config(config)
    _report(result)
    raise typer.Exit(code=result.exit_code)


def display_load_error(error: ConfigError) -> None:
    """Print why a configuration file could not be loaded.

    Validation failures list one ``path: message`` line per field; every
    other failure is described by the error message itself.
    """
    if error.error_type == "validation":
        lines = [f"{d['path']}: {d['message']}" for d in error.details]
    else:
        lines = [error.message]

    typer.echo("Errors:", err=True)
    for line in lines:
        typer.echo(f"  {line}", err=True)
    typer.echo("Validation failed.", err=True)


def _report(result: ValidationResult) -> None:
    for error in result.errors:
        typer.echo(
            f"Error: {error.path}: {error.message} (got {error.value!r})", err=True
        )
    for warning in result.warnings:
        typer.echo(f"Warning: {warning.path}: {warning.message}")
        if warning.suggestion:
            typer.echo(f"  Suggestion: {warning.suggestion}")

    if result.errors:
        typer.echo(
            f"Validation failed: {len(result.errors)} error(s), "
            f"{len(result.warnings)} warning(s)",
            err=True,
        )
    elif result.warnings:
        typer.echo(f"Validation passed with {len(result.warnings)} warning(s)")
    else:
        typer.echo("Validation passed. Configuration is valid.")
