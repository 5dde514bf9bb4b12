"""Metric extractor — pulls gate count and gas out of a raw result record.

Works on the decoded JSON of one entry of a benchmark report's ``results``
list. Every absent or malformed field resolves to 0; nothing here raises.
"""

from __future__ import annotations

import math
from typing import Any

from domain.models import FunctionMetrics


def _as_metric(value: object) -> float:
    """Coerce a raw JSON scalar to a non-negative finite number, else 0."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return 0
    try:
        finite = math.isfinite(value)
    except OverflowError:
        # JSON integers beyond float range.
        return 0
    if not finite or value < 0:
        return 0
    return value


def _lookup(record: object, *keys: str) -> object:
    """Walk nested mappings, returning None at the first missing level."""
    current = record
    for key in keys:
        if not isinstance(current, dict):
            return None
        current = current.get(key)
    return current


def get_gates(result: dict[str, Any] | None) -> float:
    """Total gate count of a result, or 0."""
    return _as_metric(_lookup(result, "totalGateCount"))


def get_da_gas(result: dict[str, Any] | None) -> float:
    """Data-availability gas from ``gas.gasLimits.daGas``, or 0."""
    return _as_metric(_lookup(result, "gas", "gasLimits", "daGas"))


def get_l2_gas(result: dict[str, Any] | None) -> float:
    """Execution gas from ``gas.gasLimits.l2Gas``, or 0."""
    return _as_metric(_lookup(result, "gas", "gasLimits", "l2Gas"))


def extract_metrics(result: dict[str, Any] | None) -> FunctionMetrics:
    """Extract the three comparison metrics from a result record.

    Args:
        result: One decoded entry of a report's ``results`` list, or None
            when the function is absent from that report.

    Returns:
        A ``FunctionMetrics`` whose fields are all non-negative.
    """
    return FunctionMetrics(
        gates=get_gates(result),
        da_gas=get_da_gas(result),
        l2_gas=get_l2_gas(result),
    )
