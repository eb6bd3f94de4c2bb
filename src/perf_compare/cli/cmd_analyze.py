"""Analyze command: comparison plus AI (or rule-based) insights."""

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
from perf_compare.cli._console import console, output_result, output_table, print_err


@app.command("analyze", help="Compare two reports and generate insights.")
def analyze_cmd(
    ctx: typer.Context,
    baseline: Path = typer.Argument(..., exists=True, dir_okay=False, help="Baseline report JSON"),
    current: Path = typer.Argument(..., exists=True, dir_okay=False, help="Current report JSON"),
    context: Path = typer.Option(
        None,
        "--context",
        exists=True,
        dir_okay=False,
        help="JSON file with system context (environment, stack, recent_changes, ...)",
    ),
    model: str = typer.Option(None, "--model", help="Model or deployment name override"),
    no_ai: bool = typer.Option(False, "--no-ai", help="Rule-based insights only"),
):
    """Run the full analysis and print diffs, insights and remediation tips."""
    ensure_initialized()
    setup_logging(verbose=ctx.obj["verbose"], quiet=ctx.obj["quiet"])

    from perf_compare.analysis import AnalysisService
    from perf_compare.config import get_settings
    from perf_compare.errors import ReportValidationError
    from perf_compare.insights import InsightGenerator

    system_context = load_json_file(context) if context else None
    if system_context is not None and not isinstance(system_context, dict):
        print_err(f"Context file {context} must contain a JSON object")
        raise SystemExit(1)

    settings = get_settings()
    service = AnalysisService(
        generator=InsightGenerator(settings=settings, model=model),
        settings=settings,
    )

    try:
        response = service.analyze(
            load_json_file(baseline),
            load_json_file(current),
            system_context=system_context,
            use_ai=not no_ai,
        )
    except ReportValidationError as e:
        print_err("Analysis aborted: report validation failed")
        for error in e.errors:
            console.print(f"  [red]{error}[/red]")
        raise SystemExit(1)

    if ctx.obj["json"]:
        output_result(response.to_wire(), ctx=ctx)
        return

    output_table(diff_rows(response.diffs), ctx=ctx, title="Metric comparison")
    print_summary(response.summary)

    if response.ai_insights:
        output_result(response.ai_insights, ctx=ctx, title=f"Insights ({response.model})")
    else:
        console.print("[dim]No significant degradations detected[/dim]")

    if response.suggestions:
        console.print("[bold]Suggestions[/bold]")
        for tip in response.suggestions:
            console.print(f"  - {tip}")

    print_warnings(response.warnings, quiet=ctx.obj["quiet"])
