"""Metric value normalizers.

Every value that ends up in a canonical metric map passes through
``coerce_metric_value``: numbers are checked for finiteness, numeric strings
are parsed, and everything else is dropped. None of these functions raise;
problems are reported as warning strings for the caller to collect.
"""

import math
import re
from typing import Any, Dict, List, Mapping, Optional, Tuple

# Metrics whose values are magnitudes; a negative reading is a sign error.
SHOULD_BE_POSITIVE_PATTERN = re.compile(
    r"(time|latency|throughput|rps|tps|memory|cpu|size|count|rate)",
    re.IGNORECASE,
)


def should_be_positive(key: str) -> bool:
    """Return True if the metric name denotes a non-negative magnitude."""
    return bool(SHOULD_BE_POSITIVE_PATTERN.search(key))


def parse_numeric(value: Any) -> Optional[float]:
    """
    Convert a number or numeric string to a finite float.

    Booleans are not numbers here. Strings must parse completely
    ("12.5", " -3 ", "1e3"); "12ms" or "n/a" are rejected.

    Args:
        value: Raw value from a report document

    Returns:
        Finite float, or None if the value is not numeric
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        try:
            number = float(value)
        except OverflowError:
            return None
    elif isinstance(value, str):
        text = value.strip()
        # float() accepts "1_000"; report values never legitimately do
        if not text or "_" in text:
            return None
        try:
            number = float(text)
        except ValueError:
            return None
    else:
        return None
    if not math.isfinite(number):
        return None
    return number


def _type_name(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, Mapping):
        return "object"
    if isinstance(value, (list, tuple)):
        return "array"
    return type(value).__name__


def coerce_metric_value(key: str, value: Any) -> Tuple[Optional[float], List[str]]:
    """
    Validate and coerce a single metric value.

    Args:
        key: Metric name (used for the should-be-positive heuristic)
        value: Raw value

    Returns:
        Tuple of (coerced value or None if dropped, warnings)
    """
    warnings: List[str] = []

    if isinstance(value, bool):
        number: Optional[float] = 1.0 if value else 0.0
        warnings.append(f'Converted boolean metric "{key}" to number: {value} -> {number:g}')
    elif isinstance(value, (int, float)):
        number = parse_numeric(value)
        if number is None:
            warnings.append(f'Skipping invalid metric "{key}": {value}')
            return None, warnings
    elif isinstance(value, str):
        number = parse_numeric(value)
        if number is None:
            warnings.append(f'Skipping non-numeric metric "{key}": {value}')
            return None, warnings
        warnings.append(f'Converted string metric "{key}" to number: {value} -> {number:g}')
    else:
        warnings.append(f'Skipping non-numeric metric "{key}": {_type_name(value)}')
        return None, warnings

    if number < 0 and should_be_positive(key):
        warnings.append(f'Metric "{key}" has negative value: {number:g}')
        number = abs(number)

    return number, warnings


def coerce_metrics(raw: Mapping[str, Any]) -> Tuple[Dict[str, float], List[str]]:
    """
    Coerce a whole metric mapping, collecting warnings.

    Args:
        raw: Metric name -> raw value

    Returns:
        Tuple of (sanitized metrics, warnings)
    """
    sanitized: Dict[str, float] = {}
    warnings: List[str] = []

    for key, value in raw.items():
        name = str(key).strip()
        if not name:
            warnings.append(f"Skipping invalid metric key: {key!r}")
            continue
        number, value_warnings = coerce_metric_value(name, value)
        warnings.extend(value_warnings)
        if number is not None:
            sanitized[name] = number

    return sanitized, warnings
