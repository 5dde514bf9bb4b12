"""Diff engine — per-function comparison of two benchmark reports.

Reconciles the function names of a base and a candidate report, pairs up
their metrics, classifies each function against a regression threshold and
formats deltas for display.

Everything above ``compare_pair`` is pure and works on decoded JSON;
``compare_pair`` adds the file reads and turns every per-pair failure into an
inline placeholder so one bad report never sinks the whole run.
"""

from __future__ import annotations

import json
import logging
import math
from collections.abc import Callable, Iterable
from typing import TYPE_CHECKING, Any

from domain.models import (
    BenchmarkPair,
    ComparisonStatus,
    ContractSection,
    FunctionComparison,
    MetricPair,
    ReportShapeError,
)
from modules.metrics.core import extract_metrics

if TYPE_CHECKING:
    from domain.ports import FileSystemPort

logger = logging.getLogger("benchdiff.diff")

# Placeholder names the profiler writes when it could not measure a function.
_UNKNOWN_PREFIX = "unknown_function"
_FAILED_MARKER = "(FAILED)"
_RUNNER_ERROR = "BENCHMARK_RUNNER_ERROR"

# ---------------------------------------------------------------------------
# Function name reconciliation (pure)
# ---------------------------------------------------------------------------


def is_comparable_name(name: object) -> bool:
    """Return False for empty names and profiler failure placeholders."""
    if not isinstance(name, str) or not name:
        return False
    if name.startswith(_UNKNOWN_PREFIX) or _FAILED_MARKER in name:
        return False
    return name != _RUNNER_ERROR


def index_results(results: Iterable[object]) -> dict[str, dict[str, Any]]:
    """Map function name to its record; the first record for a name wins."""
    index: dict[str, dict[str, Any]] = {}
    for record in results:
        if not isinstance(record, dict):
            continue
        name = record.get("name")
        if isinstance(name, str):
            index.setdefault(name, record)
    return index


def _names_of(results: Iterable[object]) -> set[str]:
    names: set[str] = set()
    for record in results:
        if not isinstance(record, dict):
            continue
        name = record.get("name")
        if is_comparable_name(name):
            names.add(name)  # type: ignore[arg-type]
        else:
            logger.debug("Skipping comparison for malformed/failed entry: %r", name)
    return names


def comparable_function_names(
    base_results: Iterable[object],
    pr_results: Iterable[object],
) -> list[str]:
    """Union of both reports' function names, minus placeholders, sorted.

    Args:
        base_results: The base report's ``results`` list.
        pr_results: The candidate report's ``results`` list.

    Returns:
        Sorted names present in at least one report.
    """
    return sorted(_names_of(base_results) | _names_of(pr_results))


# ---------------------------------------------------------------------------
# Status classification (pure)
# ---------------------------------------------------------------------------


def fractional_change(pair: MetricPair) -> float:
    """Relative change from base to candidate; ``inf`` when base is 0."""
    if pair.main == 0:
        return math.inf if pair.pr > 0 else 0.0
    return (pair.pr - pair.main) / pair.main


def _is_removed(pairs: tuple[MetricPair, ...], _limit: float) -> bool:
    return all(p.pr == 0 for p in pairs) and any(p.main > 0 for p in pairs)


def _is_new(pairs: tuple[MetricPair, ...], _limit: float) -> bool:
    return all(p.main == 0 for p in pairs) and any(p.pr > 0 for p in pairs)


def _is_regression(pairs: tuple[MetricPair, ...], limit: float) -> bool:
    changes = [fractional_change(p) for p in pairs]
    return any(math.isinf(c) or c > limit for c in changes)


def _is_improvement(pairs: tuple[MetricPair, ...], limit: float) -> bool:
    changes = [fractional_change(p) for p in pairs]
    return any(math.isfinite(c) and c < -limit for c in changes)


_Rule = Callable[[tuple[MetricPair, ...], float], bool]

# Checked in order; the first matching rule decides the status.
_STATUS_RULES: tuple[tuple[ComparisonStatus, _Rule], ...] = (
    (ComparisonStatus.REMOVED, _is_removed),
    (ComparisonStatus.NEW, _is_new),
    (ComparisonStatus.REGRESSION, _is_regression),
    (ComparisonStatus.IMPROVEMENT, _is_improvement),
)


def classify_status(
    gates: MetricPair,
    da_gas: MetricPair,
    l2_gas: MetricPair,
    threshold: float,
) -> ComparisonStatus:
    """Classify one function's change across the three metrics.

    Args:
        gates: Gate count pair.
        da_gas: DA gas pair.
        l2_gas: L2 gas pair.
        threshold: Regression threshold in percent (``10`` means 10%).

    Returns:
        The status of the first matching rule, or UNCHANGED.
    """
    pairs = (gates, da_gas, l2_gas)
    limit = threshold / 100.0
    for status, rule in _STATUS_RULES:
        if rule(pairs, limit):
            return status
    return ComparisonStatus.UNCHANGED


# ---------------------------------------------------------------------------
# Display formatting (pure)
# ---------------------------------------------------------------------------


def format_number(value: float) -> str:
    """Thousands-grouped number; at most three fraction digits."""
    if float(value).is_integer():
        return f"{int(value):,}"
    return f"{value:,.3f}".rstrip("0").rstrip(".")


def format_diff(main: float, pr: float) -> str:
    """Human-readable delta from ``main`` to ``pr``.

    Returns an empty string when there is no visible change, ``+Inf%`` when
    the base is 0, ``-100%`` when the candidate is 0, and otherwise
    ``<delta> (<percent>%)`` with explicit ``+`` on increases.
    """
    if main == 0 and pr == 0:
        return ""
    if main == 0:
        return "+Inf%"
    if pr == 0:
        return "-100%"

    delta = pr - main
    if delta == 0:
        return ""

    pct = delta / main * 100
    # Sub-unit rounding noise.
    if abs(pct) < 0.01 and abs(delta) < 1:
        return ""

    sign = "+" if delta > 0 else ""
    return f"{sign}{format_number(delta)} ({sign}{pct:.1f}%)"


# ---------------------------------------------------------------------------
# Document comparison
# ---------------------------------------------------------------------------


def _results_of(document: object) -> list[object]:
    if not isinstance(document, dict) or not isinstance(document.get("results"), list):
        msg = "missing results array"
        raise ReportShapeError(msg)
    results: list[object] = document["results"]
    return results


def build_comparison(
    name: str,
    base_record: dict[str, Any] | None,
    pr_record: dict[str, Any] | None,
    threshold: float,
) -> FunctionComparison:
    """Pair up the metrics of one function and classify it."""
    base = extract_metrics(base_record)
    pr = extract_metrics(pr_record)
    gates = MetricPair(main=base.gates, pr=pr.gates)
    da_gas = MetricPair(main=base.da_gas, pr=pr.da_gas)
    l2_gas = MetricPair(main=base.l2_gas, pr=pr.l2_gas)
    return FunctionComparison(
        name=name,
        gates=gates,
        da_gas=da_gas,
        l2_gas=l2_gas,
        status=classify_status(gates, da_gas, l2_gas, threshold),
    )


def compare_documents(
    base_doc: object,
    pr_doc: object,
    threshold: float,
) -> tuple[FunctionComparison, ...]:
    """Compare two decoded benchmark reports function by function.

    Args:
        base_doc: Decoded base report.
        pr_doc: Decoded candidate report.
        threshold: Regression threshold in percent.

    Returns:
        Comparisons sorted by function name.

    Raises:
        ReportShapeError: If either document lacks a ``results`` list.
    """
    base_results = _results_of(base_doc)
    pr_results = _results_of(pr_doc)
    base_index = index_results(base_results)
    pr_index = index_results(pr_results)

    return tuple(
        build_comparison(name, base_index.get(name), pr_index.get(name), threshold)
        for name in comparable_function_names(base_results, pr_results)
    )


def compare_pair(
    fs: FileSystemPort,
    pair: BenchmarkPair,
    threshold: float,
) -> ContractSection:
    """Load and compare one benchmark pair. Never raises.

    Any read, parse or shape failure becomes the section's ``error``
    placeholder instead of an exception.
    """
    name = pair.contract_name
    logger.info("Comparing: %s vs %s", pair.base_path, pair.pr_path)

    if not fs.file_exists(pair.base_path) or not fs.file_exists(pair.pr_path):
        logger.error("Report files missing for %s", name)
        return ContractSection(
            contract_name=name,
            error=f"*Error: One or both report files missing for {name}*",
        )

    try:
        base_text = fs.read_file(pair.base_path)
        pr_text = fs.read_file(pair.pr_path)
    except (OSError, UnicodeDecodeError) as exc:
        logger.error("Could not read reports for %s: %s", name, exc)
        return ContractSection(
            contract_name=name,
            error=f"*Error reading benchmark JSON for {name}: {exc}*",
        )

    try:
        base_doc = json.loads(base_text)
        pr_doc = json.loads(pr_text)
    except json.JSONDecodeError as exc:
        logger.error("Invalid JSON in reports for %s: %s", name, exc)
        return ContractSection(
            contract_name=name,
            error=f"*Error parsing benchmark JSON for {name}: {exc}*",
        )

    try:
        comparisons = compare_documents(base_doc, pr_doc, threshold)
    except ReportShapeError:
        logger.warning("Invalid report structure for %s (missing results array)", name)
        return ContractSection(
            contract_name=name,
            error=f"*Skipping {name}: Invalid JSON structure (missing results array).*",
        )

    logger.info("Compared %d function(s) for %s", len(comparisons), name)
    return ContractSection(contract_name=name, comparisons=comparisons)
