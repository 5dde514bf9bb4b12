"""Core data types for benchdiff.

All types are frozen dataclasses with complete type annotations.
This module has ZERO imports from outside the Python standard library.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

# Every benchmark report file name ends with this extension.
REPORT_EXTENSION = ".benchmark.json"


class ComparisonStatus(Enum):
    """Classification of one function across the base and candidate runs.

    Values are the glyphs rendered in the status column of the report.
    """

    REMOVED = "\U0001f6ae"
    NEW = "\U0001f195"
    REGRESSION = "\U0001f534"
    IMPROVEMENT = "\U0001f7e2"
    UNCHANGED = "\u26aa"


class ReportShapeError(ValueError):
    """A benchmark document is not a mapping with a ``results`` list."""


# ---------------------------------------------------------------------------
# Metric types
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class FunctionMetrics:
    """The three scalar metrics extracted from one function result."""

    gates: float = 0
    da_gas: float = 0
    l2_gas: float = 0


@dataclass(frozen=True)
class MetricPair:
    """Base (``main``) and candidate (``pr``) values for one metric."""

    main: float
    pr: float

    @property
    def delta(self) -> float:
        return self.pr - self.main


@dataclass(frozen=True)
class FunctionComparison:
    """Per-function comparison across both runs."""

    name: str
    gates: MetricPair
    da_gas: MetricPair
    l2_gas: MetricPair
    status: ComparisonStatus

    @property
    def metrics(self) -> tuple[MetricPair, MetricPair, MetricPair]:
        """Metric pairs in rendering order: gates, DA gas, L2 gas."""
        return (self.gates, self.da_gas, self.l2_gas)


# ---------------------------------------------------------------------------
# Pipeline types
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class BenchmarkPair:
    """A base report and a candidate report for the same contract."""

    contract_name: str
    base_path: str
    pr_path: str


@dataclass(frozen=True)
class ContractSection:
    """Outcome of comparing one benchmark pair.

    ``error`` holds an inline placeholder message when the pair could not be
    compared; ``comparisons`` is empty in that case.
    """

    contract_name: str
    comparisons: tuple[FunctionComparison, ...] = ()
    error: str | None = None


@dataclass(frozen=True)
class ComparisonReport:
    """The rendered document together with the sections it was built from."""

    markdown: str
    sections: tuple[ContractSection, ...]


@dataclass(frozen=True)
class ComparisonSettings:
    """Inputs of a comparison run."""

    reports_dir: str
    base_suffix: str
    pr_suffix: str
    threshold: float
    output_markdown_path: str


# ---------------------------------------------------------------------------
# Profile report types (writer side)
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Gas:
    """Data-availability and execution gas."""

    da_gas: float = 0
    l2_gas: float = 0


@dataclass(frozen=True)
class GasLimits:
    """Execution and teardown gas limits of one profiled call."""

    gas_limits: Gas = field(default_factory=Gas)
    teardown_gas_limits: Gas = field(default_factory=Gas)


@dataclass(frozen=True)
class GateCount:
    """Gate count of a single circuit within a function call."""

    circuit_name: str
    gate_count: int


@dataclass(frozen=True)
class ProfileResult:
    """Profiling result for one contract function."""

    name: str
    total_gate_count: int
    gate_counts: tuple[GateCount, ...] = ()
    gas: GasLimits = field(default_factory=GasLimits)
