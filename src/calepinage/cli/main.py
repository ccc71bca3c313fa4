"""Typer CLI for floor plan measurement and tile layouts."""

import logging
from pathlib import Path
from typing import Annotated

import typer

from calepinage.application import GenerateLayoutCommand, PlanState, ReplayEditorCommand
from calepinage.application.config import (
    PlanDocument,
    PlanError,
    load_event_log,
    load_plan,
    merge_plan_overrides,
    save_plan,
)
from calepinage.cli.commands import display_plan_error, validate_command
from calepinage.domain.geometry import edge_lengths
from calepinage.domain.value_objects import LayoutPattern
from calepinage.infrastructure import EdgeListFormatter
from calepinage.infrastructure.exporters import ExporterRegistry


app = typer.Typer(
    name="calepinage",
    help="Measure floor outlines and plan tile layouts with offcut reuse.",
)

# Register validate command
app.command(name="validate")(validate_command)


@app.callback()
def main(
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Log layout decisions to stderr"),
    ] = False,
) -> None:
    """Measure floor outlines and plan tile layouts with offcut reuse."""
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(levelname)s %(name)s: %(message)s",
        )


def _load_or_exit(plan_file: Path) -> PlanDocument:
    try:
        return load_plan(plan_file)
    except PlanError as e:
        display_plan_error(e)
        raise typer.Exit(code=1)


@app.command()
def area(
    plan_file: Annotated[Path, typer.Argument(help="Path to the JSON plan file")],
    edges: Annotated[
        bool,
        typer.Option("--edges", help="Also list the length of every edge"),
    ] = False,
) -> None:
    """Display the area of a plan's outline in square meters."""
    plan = PlanState.from_document(_load_or_exit(plan_file))

    if not plan.editor.is_closed:
        typer.echo("Warning: outline is not closed; area is 0", err=True)
    typer.echo(f"Area: {plan.area:.2f} m²")

    if edges:
        typer.echo()
        typer.echo(EdgeListFormatter().format(edge_lengths(plan.editor.points, plan.scale)))


@app.command()
def layout(
    plan_file: Annotated[Path, typer.Argument(help="Path to the JSON plan file")],
    output_format: Annotated[
        str,
        typer.Option("--format", "-f", help="Output format: text, json, svg"),
    ] = "text",
    output_file: Annotated[
        Path | None,
        typer.Option("--output", "-o", help="Write the output to this file"),
    ] = None,
    tile_w: Annotated[
        float | None,
        typer.Option("--tile-w", help="Tile width in cm"),
    ] = None,
    tile_h: Annotated[
        float | None,
        typer.Option("--tile-h", help="Tile height in cm"),
    ] = None,
    spacing: Annotated[
        float | None,
        typer.Option("--spacing", help="Joint width in mm"),
    ] = None,
    pattern: Annotated[
        LayoutPattern | None,
        typer.Option("--pattern", help="Row pattern: straight or offset"),
    ] = None,
    orientation: Annotated[
        float | None,
        typer.Option("--orientation", help="Tile rotation in degrees"),
    ] = None,
    scale: Annotated[
        float | None,
        typer.Option("--scale", help="Pixels per meter"),
    ] = None,
    no_offcuts: Annotated[
        bool,
        typer.Option("--no-offcuts", help="Cut every partial tile from a fresh tile"),
    ] = False,
) -> None:
    """Compute the tile layout of a plan.

    Options given on the command line override the values in the plan file.

    Example:
        calepinage layout plan-terrasse.json --format svg -o plan.svg
    """
    if not ExporterRegistry.is_registered(output_format):
        available = ", ".join(ExporterRegistry.available_formats())
        typer.echo(f"Unknown format: {output_format}", err=True)
        typer.echo(f"Available formats: {available}", err=True)
        raise typer.Exit(code=1)

    document = _load_or_exit(plan_file)
    try:
        document = merge_plan_overrides(
            document,
            tile_w=tile_w,
            tile_h=tile_h,
            spacing=spacing,
            pattern=pattern.value if pattern else None,
            orientation=orientation,
            scale=scale,
        )
    except PlanError as e:
        display_plan_error(e)
        raise typer.Exit(code=1)

    plan = PlanState.from_document(document, use_offcuts=not no_offcuts)
    result = GenerateLayoutCommand().execute(plan)

    if not result.is_valid:
        for error in result.errors:
            typer.echo(f"Error: {error}", err=True)
        raise typer.Exit(code=1)
    for warning in result.warnings:
        typer.echo(f"Warning: {warning}", err=True)

    exporter = ExporterRegistry.get(output_format)()
    if output_file is not None:
        exporter.export(result, output_file)
        typer.echo(f"{output_format.upper()} layout written to {output_file}")
    else:
        typer.echo(exporter.export_string(result))


@app.command()
def draw(
    events_file: Annotated[
        Path,
        typer.Argument(help="JSON file with recorded editor events"),
    ],
    output_file: Annotated[
        Path,
        typer.Option("--output", "-o", help="Path of the plan file to write"),
    ],
    base_plan: Annotated[
        Path | None,
        typer.Option("--plan", "-p", help="Existing plan to continue editing"),
    ] = None,
) -> None:
    """Replay recorded editor events and save the resulting plan.

    Example:
        calepinage draw clicks.json -o plan-terrasse.json
    """
    try:
        log = load_event_log(events_file)
    except PlanError as e:
        display_plan_error(e)
        raise typer.Exit(code=1)

    plan = None
    if base_plan is not None:
        plan = PlanState.from_document(_load_or_exit(base_plan))

    plan = ReplayEditorCommand().execute(log, plan)
    try:
        save_plan(plan.to_document(), output_file)
    except PlanError as e:
        display_plan_error(e)
        raise typer.Exit(code=1)

    typer.echo(
        f"Outline {plan.editor.phase.value} with {len(plan.editor.points)} point(s)"
    )
    if plan.editor.is_closed:
        typer.echo(f"Area: {plan.area:.2f} m²")
    typer.echo(f"Plan written to {output_file}")


if __name__ == "__main__":
    app()
