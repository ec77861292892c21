"""Typer CLI for cut list planning."""

import logging
from pathlib import Path
from typing import Annotated

import typer
from pydantic import ValidationError

from cutplan.application import (
    DEFAULT_STRATEGY,
    CutListParseError,
    PlanCutsCommand,
    available_strategies,
    parse_cut_list,
)
from cutplan.application.config import (
    ConfigError,
    config_to_packing,
    default_config,
    load_config,
    merge_config_with_cli,
)
from cutplan.cli.commands import display_load_error, validate_command
from cutplan.domain import PieceRequest
from cutplan.infrastructure import (
    CutDiagramRenderer,
    CutPlanFormatter,
    JsonExporter,
    PackingConfig,
    PackingResult,
)
from cutplan.infrastructure.exporters import ExporterRegistry, ExportManager

OUTPUT_FORMATS = ("text", "ascii", "json", "svg", "html")

app = typer.Typer(
    name="cutplan",
    help="Lay out a cut list on stock sheets with as little waste as possible.",
)

app.command(name="validate")(validate_command)


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def _read_cut_list(input_file: Path) -> list[PieceRequest]:
    """Read and parse a cut list file, exiting with code 1 on failure."""
    try:
        text = input_file.read_text(encoding="utf-8")
    except OSError as e:
        typer.echo(f"Error: cannot read {input_file}: {e}", err=True)
        raise typer.Exit(code=1)

    try:
        return parse_cut_list(text)
    except CutListParseError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)


def _render(
    result: PackingResult,
    output_format: str,
    config: PackingConfig,
    title: str,
) -> str:
    if output_format == "json":
        return JsonExporter().export(result)

    renderer = CutDiagramRenderer()
    if output_format == "svg":
        return renderer.render_combined_svg(result)
    if output_format == "html":
        return renderer.render_html(result, title=title)
    if output_format == "ascii":
        parts = [renderer.render_all_ascii(result)]
        parts.extend(result.messages)
        return "\n".join(parts)
    return CutPlanFormatter(config).format(result)


def _handle_multi_format_export(
    output_formats_str: str,
    output_dir: Path | None,
    project_name: str,
    result: PackingResult,
) -> None:
    """Export the result to every format in a comma-separated list (or 'all')."""
    if output_formats_str.lower() == "all":
        formats = ExporterRegistry.available_formats()
    else:
        formats = [f.strip().lower() for f in output_formats_str.split(",") if f.strip()]

    available = ExporterRegistry.available_formats()
    invalid = [f for f in formats if f not in available]
    if invalid:
        typer.echo(f"Unknown formats: {', '.join(invalid)}", err=True)
        typer.echo(f"Available formats: {', '.join(available)}", err=True)
        raise typer.Exit(code=1)

    if not formats:
        typer.echo("No valid formats to export.", err=True)
        raise typer.Exit(code=1)

    manager = ExportManager(output_dir or Path("."))
    try:
        files = manager.export_all(formats, result, project_name)
    except OSError as e:
        typer.echo(f"Export error: {e}", err=True)
        raise typer.Exit(code=1)

    typer.echo("\nExported files:")
    for fmt, path in files.items():
        typer.echo(f"  {fmt.upper()}: {path}")


@app.command()
def pack(
    input_file: Annotated[
        Path,
        typer.Argument(help="Cut list file, one '<W> x <H> = <N>PCS' line per piece"),
    ],
    config_file: Annotated[
        Path | None,
        typer.Option("--config", "-c", help="Path to JSON configuration file"),
    ] = None,
    sheet_width: Annotated[
        float | None,
        typer.Option("--sheet-width", help="Sheet width in inches"),
    ] = None,
    sheet_height: Annotated[
        float | None,
        typer.Option("--sheet-height", help="Sheet height in inches"),
    ] = None,
    kerf: Annotated[
        float | None,
        typer.Option("--kerf", help="Saw kerf in inches"),
    ] = None,
    strip: Annotated[
        bool | None,
        typer.Option("--strip/--no-strip", help="Run the uniform-width strip pass"),
    ] = None,
    conservative: Annotated[
        bool | None,
        typer.Option(
            "--conservative/--no-conservative",
            help="Cap the number of distinct piece sizes per sheet",
        ),
    ] = None,
    no_rotate: Annotated[
        bool,
        typer.Option("--no-rotate", help="Never turn pieces 90 degrees"),
    ] = False,
    best: Annotated[
        bool,
        typer.Option("--best", help="Try every sort strategy and keep the best plan"),
    ] = False,
    strategy: Annotated[
        str,
        typer.Option("--strategy", help="Sort strategy for the general pass"),
    ] = DEFAULT_STRATEGY,
    output_format: Annotated[
        str,
        typer.Option("--format", "-f", help="Output format: text, ascii, json, svg, html"),
    ] = "text",
    output_file: Annotated[
        Path | None,
        typer.Option("--output", "-o", help="Write output to this file"),
    ] = None,
    output_formats: Annotated[
        str | None,
        typer.Option(
            "--output-formats",
            help="Comma-separated export formats: dxf,html,json,svg (or 'all')",
        ),
    ] = None,
    output_dir: Annotated[
        Path | None,
        typer.Option("--output-dir", help="Output directory for multi-format export"),
    ] = None,
    project_name: Annotated[
        str,
        typer.Option("--project-name", help="Project name for output file naming"),
    ] = "cutplan",
    verbose: Annotated[
        bool,
        typer.Option("--verbose", help="Log packing details"),
    ] = False,
) -> None:
    """Pack a cut list onto sheets and print the cutting plan.

    Exit codes:
        0 - Every piece was placed
        1 - Invalid input or configuration
        2 - Plan produced, but some pieces are oversized or unplaced
    """
    _configure_logging(verbose)

    output_format = output_format.lower()
    if output_format not in OUTPUT_FORMATS:
        typer.echo(
            f"Error: unknown format '{output_format}'. "
            f"Choose from: {', '.join(OUTPUT_FORMATS)}",
            err=True,
        )
        raise typer.Exit(code=1)

    if strategy not in available_strategies():
        typer.echo(
            f"Error: unknown strategy '{strategy}'. "
            f"Choose from: {', '.join(available_strategies())}",
            err=True,
        )
        raise typer.Exit(code=1)

    try:
        base_config = load_config(config_file) if config_file else default_config()
    except ConfigError as e:
        display_load_error(e)
        raise typer.Exit(code=1)

    try:
        merged = merge_config_with_cli(
            base_config,
            sheet_width=sheet_width,
            sheet_height=sheet_height,
            kerf=kerf,
            strip=strip,
            conservative=conservative,
            allow_rotation=False if no_rotate else None,
        )
    except ValidationError as e:
        for err in e.errors():
            location = ".".join(str(part) for part in err["loc"])
            typer.echo(f"Error: {location}: {err['msg']}", err=True)
        raise typer.Exit(code=1)

    packing_config = config_to_packing(merged)
    requests = _read_cut_list(input_file)

    result = PlanCutsCommand(packing_config).execute(
        requests, best=best, strategy=strategy
    )

    if output_formats:
        _handle_multi_format_export(output_formats, output_dir, project_name, result)

    rendered = _render(result, output_format, packing_config, project_name)
    if output_file:
        output_file.write_text(rendered, encoding="utf-8")
        typer.echo(f"Cutting plan written to {output_file}")
    else:
        typer.echo(rendered)

    if result.messages:
        raise typer.Exit(code=2)


@app.command()
def parse(
    input_file: Annotated[Path, typer.Argument(help="Cut list file")],
) -> None:
    """Print the normalized cut list without packing it."""
    requests = _read_cut_list(input_file)
    typer.echo(CutPlanFormatter().format_requests(requests))


if __name__ == "__main__":
    app()
