"""Command-line interface for calepinage."""
