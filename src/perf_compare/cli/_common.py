"""Shared CLI helpers: initialization, logging and report loading."""

import json
import logging
from pathlib import Path
from typing import Any, List, Optional

from rich.logging import RichHandler

from perf_compare.cli._console import console, print_err, print_warn
from perf_compare.schemas.comparison import MetricDiff
from perf_compare.startup import ensure_initialized as _ensure_initialized

logger = logging.getLogger(__name__)

TREND_STYLES = {
    "improved": "[green]improved[/green]",
    "worse": "[red]worse[/red]",
    "same": "[dim]same[/dim]",
    "unknown": "[yellow]unknown[/yellow]",
}


def ensure_initialized() -> None:
    """Load .env before any command runs."""
    _ensure_initialized()


def setup_logging(*, verbose: bool = False, quiet: bool = False) -> None:
    """Configure logging with Rich handler."""
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.WARNING
    else:
        level = logging.INFO

    handler = RichHandler(
        console=console,
        show_time=True,
        show_path=False,
        markup=False,
        rich_tracebacks=True,
    )

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(level)

    # Suppress noisy third-party loggers
    for name in ("openai", "openai._base_client", "httpx", "httpcore"):
        logging.getLogger(name).setLevel(logging.WARNING)


def read_text(path: Path) -> str:
    """Read a UTF-8 file or exit with an error message.

    Raises:
        SystemExit: If the file cannot be read.
    """
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        print_err(f"Cannot read {path}: {e}")
        raise SystemExit(1)


def load_json_file(path: Path) -> Any:
    """Read and decode a JSON file or exit with an error message.

    Raises:
        SystemExit: If the file is unreadable or not valid JSON.
    """
    text = read_text(path)
    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        print_err(f"Invalid JSON in {path}: {e}")
        raise SystemExit(1)


def format_number(value: Optional[float]) -> str:
    return "-" if value is None else f"{value:,.4g}"


def format_pct(value: Optional[float]) -> str:
    return "-" if value is None else f"{value:+.1f}%"


def diff_rows(diffs: List[MetricDiff], *, styled: bool = True) -> List[dict]:
    """Table rows for a list of diffs."""
    rows = []
    for diff in diffs:
        trend = str(diff.trend)
        rows.append(
            {
                "Metric": diff.label,
                "Baseline": format_number(diff.baseline),
                "Current": format_number(diff.current),
                "Change": format_pct(diff.pct),
                "Trend": TREND_STYLES.get(trend, trend) if styled else trend,
            }
        )
    return rows


def print_warnings(warnings: List[str], *, quiet: bool) -> None:
    if quiet:
        return
    for warning in warnings:
        print_warn(warning)


def print_summary(summary: Any) -> None:
    console.print(
        f"  Improved: {summary.improved}  Worse: {summary.worse}  "
        f"Same: {summary.same}  Unknown: {summary.unknown}"
    )
