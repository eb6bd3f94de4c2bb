"""Recover command: parse raw model output into an insight array."""

from pathlib import Path

import typer

from perf_compare.cli._app import app
from perf_compare.cli._common import ensure_initialized, read_text, setup_logging
from perf_compare.cli._console import print_json


@app.command("recover", help="Recover insights from a raw model response file.")
def recover_cmd(
    ctx: typer.Context,
    response_file: Path = typer.Argument(
        ..., exists=True, dir_okay=False, help="Text file with the model response"
    ),
):
    """Always prints a JSON array with at least one insight."""
    ensure_initialized()
    setup_logging(verbose=ctx.obj["verbose"], quiet=ctx.obj["quiet"])

    from perf_compare.insights import recover_insights

    print_json(recover_insights(read_text(response_file)))
