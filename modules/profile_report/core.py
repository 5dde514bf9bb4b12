"""Profile report writer — builds the JSON documents the diff engine reads.

A report holds the per-function ``results`` plus two convenience maps:
``summary`` (function name to total gate count) and ``gasSummary``
(function name to DA + L2 gas, execution and teardown limits combined).

Functions that could not be profiled are recorded under a ``(FAILED)``
placeholder name with zero metrics; the diff engine filters those out.

Nothing inside benchdiff calls this module: it is the public API for Python
report producers (profilers, CI scripts) that need to emit files the
``compare`` command can read.
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, Any

from domain.models import REPORT_EXTENSION, Gas, GasLimits, GateCount, ProfileResult

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from domain.ports import FileSystemPort

logger = logging.getLogger("benchdiff.profile_report")

_FAILED_SUFFIX = " (FAILED)"


def report_filename(contract_name: str, suffix: str = "") -> str:
    """File name of a contract's report, e.g. ``Token_latest.benchmark.json``."""
    return f"{contract_name}{suffix}{REPORT_EXTENSION}"


def profile_result(
    name: str,
    gate_counts: Iterable[GateCount] = (),
    gas: GasLimits | None = None,
) -> ProfileResult:
    """Build a result whose total gate count is the sum of its circuits."""
    counts = tuple(gate_counts)
    return ProfileResult(
        name=name,
        total_gate_count=sum(c.gate_count for c in counts),
        gate_counts=counts,
        gas=gas if gas is not None else GasLimits(),
    )


def failed_result(name: str) -> ProfileResult:
    """Placeholder result for a function whose profiling raised."""
    return ProfileResult(name=f"{name}{_FAILED_SUFFIX}", total_gate_count=0)


def _gas_to_dict(gas: Gas) -> dict[str, float]:
    return {"daGas": gas.da_gas, "l2Gas": gas.l2_gas}


def result_to_dict(result: ProfileResult) -> dict[str, Any]:
    """Serialize a result with the report's camelCase field names."""
    return {
        "name": result.name,
        "totalGateCount": result.total_gate_count,
        "gateCounts": [
            {"circuitName": c.circuit_name, "gateCount": c.gate_count} for c in result.gate_counts
        ],
        "gas": {
            "gasLimits": _gas_to_dict(result.gas.gas_limits),
            "teardownGasLimits": _gas_to_dict(result.gas.teardown_gas_limits),
        },
    }


def _total_gas(limits: GasLimits) -> float:
    execution = limits.gas_limits
    teardown = limits.teardown_gas_limits
    return execution.da_gas + execution.l2_gas + teardown.da_gas + teardown.l2_gas


def build_report(results: Sequence[ProfileResult]) -> dict[str, Any]:
    """Assemble the full report document for a list of results.

    Later results overwrite earlier ones in the summary maps when names
    repeat; ``results`` keeps every entry in order.
    """
    return {
        "summary": {r.name: r.total_gate_count for r in results},
        "results": [result_to_dict(r) for r in results],
        "gasSummary": {r.name: _total_gas(r.gas) for r in results},
    }


def save_report(fs: FileSystemPort, results: Sequence[ProfileResult], path: str) -> None:
    """Write a report document with two-space indentation.

    Raises:
        OSError: If the file cannot be written (after logging it).
    """
    if not results:
        logger.info("No results to save for %s. Saving empty report.", path)
    else:
        logger.info("Saving results for %d methods in %s", len(results), path)

    content = json.dumps(build_report(results), indent=2, ensure_ascii=False)
    try:
        fs.write_file(path, content)
    except OSError as exc:
        logger.error("Error writing results to %s: %s", path, exc)
        raise
