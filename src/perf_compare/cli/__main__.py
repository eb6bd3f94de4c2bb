"""Allow ``python -m perf_compare.cli``."""

from perf_compare.cli import app

if __name__ == "__main__":
    app()
