"""Shared pytest fixtures and test factories for benchdiff.

Provides:
- An in-memory FileSystemPort implementation
- Factory fixtures for benchmark report documents and domain models
"""

from __future__ import annotations

import json
from typing import Any

import pytest

from domain.models import ComparisonSettings, ComparisonStatus, FunctionComparison, MetricPair

# ── Fake Port Implementations ─────────────────────────────────────────────


class InMemoryFileSystem:
    """Stateful in-memory FileSystemPort.

    Tracks file contents and directory creation. Directories exist implicitly
    once a file has been written beneath them. ``listing_order`` controls the
    order ``list_directory`` returns entries in, to mimic arbitrary
    filesystem enumeration.
    """

    def __init__(self, *, listing_order: str = "sorted") -> None:
        self._files: dict[str, str] = {}
        self.created_dirs: set[str] = set()
        self.listing_order = listing_order

    def read_file(self, path: str) -> str:
        """Read file content from memory."""
        if path not in self._files:
            msg = f"File not found: {path}"
            raise FileNotFoundError(msg)
        return self._files[path]

    def write_file(self, path: str, content: str) -> None:
        """Write file content to memory."""
        self._files[path] = content

    def list_directory(self, path: str) -> list[str]:
        """Return the direct children of ``path``."""
        prefix = path.rstrip("/") + "/"
        names = {p[len(prefix) :].split("/", 1)[0] for p in self._files if p.startswith(prefix)}
        if not names and path not in self.created_dirs:
            msg = f"Directory not found: {path}"
            raise FileNotFoundError(msg)
        ordered = sorted(names)
        if self.listing_order == "reversed":
            ordered.reverse()
        return ordered

    def file_exists(self, path: str) -> bool:
        """Check if a file exists in memory."""
        return path in self._files

    def make_directory(self, path: str) -> None:
        """Record that a directory was created."""
        self.created_dirs.add(path)


class BrokenFileSystem(InMemoryFileSystem):
    """FileSystemPort whose directory listing fails with a non-ENOENT error."""

    def list_directory(self, path: str) -> list[str]:
        """Always raise PermissionError."""
        msg = f"Permission denied: {path}"
        raise PermissionError(msg)


# ── Fixtures: filesystems and settings ────────────────────────────────────


@pytest.fixture()
def memory_fs() -> InMemoryFileSystem:
    """A fresh in-memory filesystem."""
    return InMemoryFileSystem()


@pytest.fixture()
def make_fs() -> _FileSystemFactory:
    """Factory for in-memory filesystems with a chosen listing order."""

    def _factory(*, listing_order: str = "sorted") -> InMemoryFileSystem:
        return InMemoryFileSystem(listing_order=listing_order)

    return _factory


_FileSystemFactory = Any


@pytest.fixture()
def broken_fs() -> BrokenFileSystem:
    """A filesystem whose directory listing always fails."""
    return BrokenFileSystem()


@pytest.fixture()
def settings() -> ComparisonSettings:
    """Settings pointing at the in-memory ``benchmarks`` directory."""
    return ComparisonSettings(
        reports_dir="benchmarks",
        base_suffix="_base",
        pr_suffix="_latest",
        threshold=5.0,
        output_markdown_path="benchmark_comparison.md",
    )


# ── Fixtures: report document factories ───────────────────────────────────


def _result(name: Any, gates: Any = 0, da_gas: Any = 0, l2_gas: Any = 0) -> dict[str, Any]:
    return {
        "name": name,
        "totalGateCount": gates,
        "gateCounts": [{"circuitName": str(name), "gateCount": gates}],
        "gas": {
            "gasLimits": {"daGas": da_gas, "l2Gas": l2_gas},
            "teardownGasLimits": {"daGas": 0, "l2Gas": 0},
        },
    }


def _document(*results: dict[str, Any]) -> dict[str, Any]:
    return {
        "summary": {str(r.get("name")): r.get("totalGateCount", 0) for r in results},
        "results": list(results),
        "gasSummary": {},
    }


@pytest.fixture()
def make_result() -> _ResultFactory:
    """Factory for one ``results`` entry, shaped as the profiler writes it."""
    return _result


_ResultFactory = Any  # callable[..., dict[str, Any]]


@pytest.fixture()
def make_document() -> _DocumentFactory:
    """Factory wrapping result entries into a full report document."""
    return _document


_DocumentFactory = Any


@pytest.fixture()
def write_report() -> _WriteReportFactory:
    """Factory that serializes a report document into a filesystem port."""

    def _factory(fs: Any, path: str, *results: dict[str, Any]) -> None:
        fs.write_file(path, json.dumps(_document(*results), indent=2))

    return _factory


_WriteReportFactory = Any


# ── Fixtures: domain model factories ──────────────────────────────────────


@pytest.fixture()
def make_comparison() -> _ComparisonFactory:
    """Factory for FunctionComparison with sensible defaults."""

    def _factory(
        name: str = "transfer",
        *,
        gates: tuple[float, float] = (100, 100),
        da_gas: tuple[float, float] = (0, 0),
        l2_gas: tuple[float, float] = (0, 0),
        status: ComparisonStatus = ComparisonStatus.UNCHANGED,
    ) -> FunctionComparison:
        return FunctionComparison(
            name=name,
            gates=MetricPair(main=gates[0], pr=gates[1]),
            da_gas=MetricPair(main=da_gas[0], pr=da_gas[1]),
            l2_gas=MetricPair(main=l2_gas[0], pr=l2_gas[1]),
            status=status,
        )

    return _factory


_ComparisonFactory = Any
