"""Validate command: check a single report file."""

from pathlib import Path

import typer

from perf_compare.cli._app import app
from perf_compare.cli._common import ensure_initialized, print_warnings, read_text, setup_logging
from perf_compare.cli._console import console, output_result, print_err, print_ok
from perf_compare.validation import parse_report_json


@app.command("validate", help="Validate a performance report file.")
def validate_cmd(
    ctx: typer.Context,
    report: Path = typer.Argument(..., exists=True, dir_okay=False, help="Report JSON file"),
):
    """Validate a report and show the metrics it normalizes to."""
    ensure_initialized()
    setup_logging(verbose=ctx.obj["verbose"], quiet=ctx.obj["quiet"])

    result = parse_report_json(read_text(report), name=report.stem)

    if ctx.obj["json"]:
        output_result(
            {
                "file": str(report),
                "valid": result.valid,
                "errors": result.errors,
                "warnings": result.warnings,
                "error_codes": [code.value for code in result.error_codes],
                "report": result.sanitized.model_dump() if result.sanitized else None,
            },
            ctx=ctx,
        )
    else:
        if result.valid:
            print_ok(f"{report.name} is valid ({len(result.sanitized.metrics)} metrics)")
        else:
            print_err(f"{report.name} is invalid")
            for error in result.errors:
                console.print(f"  [red]{error}[/red]")
        print_warnings(result.warnings, quiet=ctx.obj["quiet"])

    if not result.valid:
        raise SystemExit(1)
