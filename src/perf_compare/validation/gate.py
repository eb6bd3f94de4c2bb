"""Validation gate: raw report document -> sanitized PerformanceReport.

Structural problems (not an object, no metrics container, nothing numeric
left) are errors and make the report invalid. Everything else (converted
values, defaulted timestamps, naming-style advice) is a warning.
"""

import json
import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List, Mapping, Optional

from perf_compare.comparison.trend import has_known_direction
from perf_compare.extraction import extract_metrics
from perf_compare.extraction.formats import RESERVED_REPORT_KEYS, is_nested_statistical
from perf_compare.extraction.normalizers import parse_numeric
from perf_compare.schemas.report import PerformanceReport, ReportFormat
from perf_compare.schemas.validation import (
    AnalysisRequestValidation,
    ValidationErrorCode,
    ValidationResult,
)

logger = logging.getLogger(__name__)

NOT_AN_OBJECT_ERROR = "Invalid data: must be a JSON object"
MISSING_METRICS_ERROR = 'Missing "metrics" property in report structure'
INVALID_METRICS_ERROR = 'Invalid "metrics" property: must be an object'
NO_VALID_METRICS_ERROR = "No valid numeric metrics found"

# snake_case fragments with a conventional camelCase spelling
CAMEL_CASE_HINTS = {
    "response_time": "responseTime",
    "error_rate": "errorRate",
}


def _to_iso(dt: datetime) -> str:
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def _now() -> datetime:
    return datetime.now(timezone.utc)


def normalize_timestamp(value: Any) -> Optional[str]:
    """
    Normalize an epoch-millis number or ISO-8601 string to ISO UTC.

    Args:
        value: Raw ``timestamp`` field

    Returns:
        ISO string like ``2024-05-01T12:00:00.000Z``, or None if unparseable
    """
    if isinstance(value, bool):
        return None
    try:
        if isinstance(value, (int, float)):
            return _to_iso(datetime.fromtimestamp(value / 1000, tz=timezone.utc))
        if isinstance(value, str) and value.strip():
            text = value.strip()
            if text.endswith("Z"):
                text = text[:-1] + "+00:00"
            return _to_iso(datetime.fromisoformat(text))
    except (ValueError, OverflowError, OSError):
        return None
    return None


def _resolve_timestamp(data: Mapping[str, Any], warnings: List[str]) -> str:
    raw = data.get("timestamp")
    if raw is not None:
        normalized = normalize_timestamp(raw)
        if normalized:
            return normalized
        warnings.append(f"Invalid timestamp format: {raw}")
        return _to_iso(_now())

    # k6 exports carry no timestamp; back-date by the run duration instead
    state = data.get("state")
    if isinstance(state, Mapping):
        duration_ms = parse_numeric(state.get("testRunDurationMs"))
        if duration_ms:
            return _to_iso(_now() - timedelta(milliseconds=duration_ms))
    return _to_iso(_now())


def _resolve_name(data: Mapping[str, Any], fallback: str, warnings: List[str]) -> str:
    name = data.get("name")
    if name is None:
        return fallback
    if isinstance(name, str) and name.strip():
        return name.strip()
    warnings.append("Invalid name format, using fallback")
    return fallback


def suggest_metric_fixes(data: Any) -> List[str]:
    """
    Advisory, non-blocking suggestions about metric naming and units.

    Looks at the simple-format ``metrics`` map when present, otherwise at
    the top-level keys. Nested k6 documents are skipped: their canonical
    names come from the allow-list.

    Args:
        data: Raw report document

    Returns:
        List of suggestion strings (possibly empty)
    """
    if not isinstance(data, Mapping):
        return []

    metrics = data.get("metrics")
    if is_nested_statistical(metrics):
        return []
    if isinstance(metrics, Mapping):
        source: Mapping[str, Any] = metrics
    else:
        source = {k: v for k, v in data.items() if k not in RESERVED_REPORT_KEYS}

    suggestions: List[str] = []
    keys = [str(k) for k in source]

    for snake, camel in CAMEL_CASE_HINTS.items():
        if any(snake in key for key in keys):
            suggestions.append(f'Consider using camelCase: "{camel}" instead of "{snake}"')

    for key in keys:
        lowered = key.lower()
        if "rate" not in lowered and "percent" not in lowered:
            continue
        value = parse_numeric(source[key])
        if value is not None and 1 < value <= 100:
            suggestions.append(
                f'"{key}" might be a percentage - ensure it\'s in the expected format (0-1 vs 0-100)'
            )

    for key in keys:
        if parse_numeric(source[key]) is not None and not has_known_direction(key):
            suggestions.append(
                f'"{key}" has no recognized direction; it is compared as lower-is-better'
            )

    return suggestions


def validate_report(raw: Any, name: str = "Unknown") -> ValidationResult:
    """
    Validate a raw report document and build its sanitized form.

    Args:
        raw: Parsed JSON document
        name: Fallback report name when the document has none

    Returns:
        ValidationResult; ``valid`` is True iff there are no structural
        errors and at least one metric survived sanitization
    """
    if not isinstance(raw, Mapping):
        return ValidationResult(
            valid=False,
            errors=[NOT_AN_OBJECT_ERROR],
            error_codes=[ValidationErrorCode.NOT_AN_OBJECT],
        )

    errors: List[str] = []
    codes: List[ValidationErrorCode] = []
    warnings: List[str] = []

    extraction = extract_metrics(raw)
    if extraction.format == ReportFormat.NESTED_STATISTICAL:
        warnings.append("Detected K6 performance test format - converting to standard format")
    warnings.extend(extraction.warnings)

    if extraction.format == ReportFormat.UNKNOWN:
        errors.append(INVALID_METRICS_ERROR if "metrics" in raw else MISSING_METRICS_ERROR)
        codes.append(ValidationErrorCode.MISSING_METRICS)
    elif extraction.is_empty:
        errors.append(NO_VALID_METRICS_ERROR)
        codes.append(ValidationErrorCode.NO_VALID_METRICS)

    if extraction.format == ReportFormat.NESTED_STATISTICAL:
        warnings.append(f"Extracted {len(extraction.metrics)} critical metrics from K6 report")

    warnings.extend(suggest_metric_fixes(raw))

    sanitized = PerformanceReport(
        name=_resolve_name(raw, name, warnings),
        timestamp=_resolve_timestamp(raw, warnings),
        metrics=extraction.metrics,
    )

    valid = not errors and bool(sanitized.metrics)
    if not valid:
        logger.warning(f"Report '{sanitized.name}' failed validation: {errors}")

    return ValidationResult(
        valid=valid,
        errors=errors,
        warnings=warnings,
        error_codes=codes,
        sanitized=sanitized,
    )


def parse_report_json(text: str, name: str = "Unknown") -> ValidationResult:
    """
    Decode JSON text and validate it as a report.

    Args:
        text: Raw file contents
        name: Fallback report name

    Returns:
        ValidationResult (INVALID_JSON on decode errors)
    """
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        return ValidationResult(
            valid=False,
            errors=[f"JSON parsing error: {e}"],
            error_codes=[ValidationErrorCode.INVALID_JSON],
        )
    return validate_report(data, name)


def _validate_side(
    body: Mapping[str, Any],
    side: str,
    errors: List[str],
    warnings: List[str],
) -> Optional[PerformanceReport]:
    label = side.capitalize()
    if body.get(side) is None:
        errors.append(f'Missing "{side}" report')
        return None

    result = validate_report(body[side], side)
    if not result.valid:
        errors.append(f"{label} validation failed: {', '.join(result.errors)}")
        return None

    warnings.extend(f"{label}: {w}" for w in result.warnings)
    return result.sanitized


def validate_analysis_request(body: Any) -> AnalysisRequestValidation:
    """
    Validate a baseline/current analysis request.

    Both sides are always validated so every failure reason is reported.

    Args:
        body: Request body ``{baseline, current, systemContext?}``

    Returns:
        AnalysisRequestValidation with sanitized reports when valid
    """
    if not isinstance(body, Mapping):
        return AnalysisRequestValidation(
            valid=False, errors=["Request body must be a JSON object"]
        )

    errors: List[str] = []
    warnings: List[str] = []

    baseline = _validate_side(body, "baseline", errors, warnings)
    current = _validate_side(body, "current", errors, warnings)

    system_context: Dict[str, Any] = {}
    raw_context = body.get("systemContext")
    if isinstance(raw_context, Mapping):
        system_context = dict(raw_context)
    elif raw_context:
        warnings.append("Invalid systemContext format, ignoring")

    return AnalysisRequestValidation(
        valid=not errors,
        errors=errors,
        warnings=warnings,
        baseline=baseline,
        current=current,
        system_context=system_context,
    )
