"""Root Typer application: global output options and ``--version``."""

import typer

from perf_compare import __version__

app = typer.Typer(
    name="perf-compare",
    help="Compare performance test reports (k6 or JSON) and explain regressions.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    pretty_exceptions_enable=False,
)


def _print_version(value: bool) -> None:
    if value:
        typer.echo(f"perf-compare {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    ctx: typer.Context,
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug-level logging"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Warnings and errors only"),
    json_output: bool = typer.Option(
        False, "--json", help="Machine-readable JSON on stdout (status stays on stderr)"
    ),
    version: bool = typer.Option(
        False,
        "--version",
        callback=_print_version,
        is_eager=True,
        help="Show the perf-compare version and exit",
    ),
):
    """Validate, diff and analyze baseline/current performance reports."""
    ctx.ensure_object(dict)
    ctx.obj.update(verbose=verbose, quiet=quiet, json=json_output)
