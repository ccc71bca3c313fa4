"""CLI command implementations for the calepinage application.

This package contains subcommands for the calepinage CLI, including:
- validate: Validate a plan file
"""

from calepinage.cli.commands.validate import display_plan_error, validate_command

__all__ = ["display_plan_error", "validate_command"]
