"""Validate command for checking plan files.

This module provides the `validate` command that checks a JSON plan file
for schema errors, outline problems and start point concerns.
"""

from pathlib import Path
from typing import Annotated

import typer

from calepinage.application.config import (
    PlanError,
    ValidationResult,
    load_plan,
    validate_plan,
)


def validate_command(
    plan_file: Annotated[
        Path,
        typer.Argument(help="Path to the JSON plan file to validate"),
    ],
) -> None:
    """Validate a plan file.

    Checks the plan file for:
    - JSON syntax errors
    - Schema errors (unknown fields, invalid tile sizes, odd point count)
    - Outline errors (open outline, too few corners, slanted edges)
    - Start point concerns (missing, not a corner, top-left fallback)

    Exit codes:
        0 - Plan is valid with no warnings
        1 - Plan has errors (cannot be tiled)
        2 - Plan is valid but has warnings

    Example:
        calepinage validate plan-terrasse.json
    """
    typer.echo(f"Validating {plan_file}...")
    typer.echo()

    try:
        plan = load_plan(plan_file)
    except PlanError as e:
        display_plan_error(e)
        typer.echo()
        typer.echo("Validation failed.", err=True)
        raise typer.Exit(code=1)

    result = validate_plan(plan)
    _display_validation_result(result)
    raise typer.Exit(code=result.exit_code)


def display_plan_error(error: PlanError) -> None:
    """Display a plan loading error on stderr.

    Args:
        error: The PlanError to display
    """
    typer.echo("Errors:", err=True)
    if error.error_type == "file_not_found":
        typer.echo(f"  File not found: {error.path}", err=True)
    elif error.error_type == "json_parse":
        typer.echo("  Invalid JSON syntax", err=True)
        for detail in error.details:
            line = detail.get("line", "?")
            column = detail.get("column", "?")
            message = detail.get("message", "Unknown error")
            typer.echo(f"    Line {line}, Column {column}: {message}", err=True)
    elif error.error_type == "validation":
        for detail in error.details:
            path = detail.get("path", "unknown")
            message = detail.get("message", "Unknown error")
            typer.echo(f"  {path}: {message}", err=True)
            value = detail.get("value")
            if value is not None:
                typer.echo(f"    Value: {value!r}", err=True)
    else:
        typer.echo(f"  {error.message}", err=True)


def _display_validation_result(result: ValidationResult) -> None:
    if result.errors:
        typer.echo("Errors:", err=True)
        for error in result.errors:
            typer.echo(f"  {error.path}: {error.message}", err=True)
            if error.value is not None:
                typer.echo(f"    Value: {error.value!r}", err=True)
        typer.echo()

    if result.warnings:
        typer.echo("Warnings:")
        for warning in result.warnings:
            typer.echo(f"  {warning.path}: {warning.message}")
            if warning.suggestion:
                typer.echo(f"    Suggestion: {warning.suggestion}")
        typer.echo()

    if result.errors:
        typer.echo(
            f"Validation failed: {len(result.errors)} error(s), "
            f"{len(result.warnings)} warning(s)",
            err=True,
        )
    elif result.warnings:
        typer.echo(f"Validation passed with {len(result.warnings)} warning(s)")
    else:
        typer.echo("Validation passed. Plan is valid.")
