"""Compare command: diff a baseline report against a current one."""

from pathlib import Path

import typer

from perf_compare.cli._app import app
from perf_compare.cli._common import (
    diff_rows,
    ensure_initialized,
    load_json_file,
    print_summary,
    print_warnings,
    setup_logging,
)
from perf_compare.cli._console import console, output_result, output_table, print_err, print_ok


@app.command("compare", help="Compare a baseline report with a current report.")
def compare_cmd(
    ctx: typer.Context,
    baseline: Path = typer.Argument(..., exists=True, dir_okay=False, help="Baseline report JSON"),
    current: Path = typer.Argument(..., exists=True, dir_okay=False, help="Current report JSON"),
    export: str = typer.Option(
        None,
        "--export",
        "-e",
        help="Export format: json or csv",
    ),
    output: Path = typer.Option(
        None,
        "-o",
        "--output",
        help="Write the export to this file instead of stdout",
    ),
):
    """Print the per-metric comparison, or export it as JSON/CSV."""
    ensure_initialized()
    setup_logging(verbose=ctx.obj["verbose"], quiet=ctx.obj["quiet"])

    from perf_compare.analysis import AnalysisService
    from perf_compare.errors import ExportFormatError, ReportValidationError
    from perf_compare.services.export import export_comparison

    service = AnalysisService()
    try:
        outcome = service.compare(load_json_file(baseline), load_json_file(current))
    except ReportValidationError as e:
        print_err("Comparison aborted: report validation failed")
        for error in e.errors:
            console.print(f"  [red]{error}[/red]")
        raise SystemExit(1)

    result = outcome.result

    if export:
        try:
            text = export_comparison(result, export)
        except ExportFormatError as e:
            print_err(str(e))
            raise SystemExit(2)

        if output:
            output.write_text(text, encoding="utf-8")
            if not ctx.obj["quiet"]:
                print_ok(f"Exported {len(result.diffs)} metrics to {output}")
        else:
            typer.echo(text)
        return

    if ctx.obj["json"]:
        data = result.to_wire()
        data["warnings"] = outcome.warnings
        output_result(data, ctx=ctx)
        return

    output_table(
        diff_rows(result.diffs),
        ctx=ctx,
        title=f"{outcome.baseline.name} -> {outcome.current.name}",
    )
    print_summary(result.summary)
    print_warnings(outcome.warnings, quiet=ctx.obj["quiet"])
