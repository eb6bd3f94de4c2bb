"""Typer-based command-line interface.

Usage:
    perf-compare --help
    python -m perf_compare.cli compare baseline.json current.json
"""

from perf_compare.cli._app import app

# Register command modules (side-effect imports)
import perf_compare.cli.cmd_validate  # noqa: F401
import perf_compare.cli.cmd_compare  # noqa: F401
import perf_compare.cli.cmd_analyze  # noqa: F401
import perf_compare.cli.cmd_recover  # noqa: F401

__all__ = ["app"]
