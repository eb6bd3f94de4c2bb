"""Metric extractor: raw report document -> canonical metric map.

The extractor never raises for recoverable problems. Every dropped,
converted or sign-flipped value is reported in ``warnings``; an empty
``metrics`` map is the only failure signal and is turned into a structural
error by the validation gate.
"""

import logging
from typing import Any, Callable, Dict, List, Mapping, Tuple

from perf_compare.extraction.formats import RESERVED_REPORT_KEYS, detect_format
from perf_compare.extraction.nested_metrics import aggregate_checks, flatten_nested_metrics
from perf_compare.extraction.normalizers import coerce_metrics, parse_numeric
from perf_compare.schemas.report import ExtractionResult, ReportFormat

logger = logging.getLogger(__name__)

# Fields tried, in order, when a simple-format metric is itself an object
COMPLEX_VALUE_FIELDS = ("avg", "mean", "value", "rate")


def _extract_simple(document: Mapping[str, Any]) -> Tuple[Dict[str, Any], List[str]]:
    raw: Dict[str, Any] = {}
    warnings: List[str] = []
    complex_found = False

    for key, value in document["metrics"].items():
        if not isinstance(value, Mapping):
            raw[key] = value
            continue
        complex_found = True
        for field_name in COMPLEX_VALUE_FIELDS:
            nested = value.get(field_name)
            if isinstance(nested, (int, float)) and not isinstance(nested, bool):
                raw[f"{key}_{field_name}"] = nested
                break
        else:
            raw[key] = value  # dropped with a warning by coercion

    if complex_found:
        warnings.append("Extracted metrics from complex structure")
    return raw, warnings


def _extract_flat(document: Mapping[str, Any]) -> Tuple[Dict[str, Any], List[str]]:
    raw = {
        key: value
        for key, value in document.items()
        if key not in RESERVED_REPORT_KEYS and parse_numeric(value) is not None
    }
    return raw, []


def _extract_nested(document: Mapping[str, Any]) -> Tuple[Dict[str, Any], List[str]]:
    raw = flatten_nested_metrics(document["metrics"])
    raw.update(aggregate_checks(document))
    logger.debug(
        f"Flattened {len(raw)} values from {len(document['metrics'])} nested metrics"
    )
    return raw, []


_EXTRACTORS: Dict[ReportFormat, Callable[[Mapping[str, Any]], Tuple[Dict[str, Any], List[str]]]] = {
    ReportFormat.SIMPLE: _extract_simple,
    ReportFormat.FLAT: _extract_flat,
    ReportFormat.NESTED_STATISTICAL: _extract_nested,
}


def extract_metrics(document: Any) -> ExtractionResult:
    """
    Convert an arbitrary report document into a flat metric map.

    Args:
        document: Parsed JSON document (simple, flat or k6 summary)

    Returns:
        ExtractionResult with detected format, sanitized metrics and warnings
    """
    report_format = detect_format(document)
    extractor = _EXTRACTORS.get(report_format)
    if extractor is None:
        return ExtractionResult(format=report_format)

    raw, warnings = extractor(document)
    metrics, coercion_warnings = coerce_metrics(raw)
    warnings.extend(coercion_warnings)

    logger.debug(
        f"Extracted {len(metrics)} metrics ({report_format.value} format, "
        f"{len(warnings)} warnings)"
    )
    return ExtractionResult(format=report_format, metrics=metrics, warnings=warnings)
