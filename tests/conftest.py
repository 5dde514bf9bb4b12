"""Fixtures for the kernel-level tests (CLI and GitHub Action).

Provides a working directory pre-populated with benchmark reports and a
clean ``INPUT_*`` environment.
"""

from __future__ import annotations

import os
from typing import TYPE_CHECKING, Any

import pytest

from adapters.local_fs import LocalFileSystem
from kernel.console import configure

if TYPE_CHECKING:
    from pathlib import Path


@pytest.fixture()
def project_dir(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
    write_report: Any,
    make_result: Any,
) -> Path:
    """A working directory with one Token pair and one unpaired report."""
    fs = LocalFileSystem(str(tmp_path))
    write_report(
        fs,
        "benchmarks/Token_base.benchmark.json",
        make_result("mint", gates=1000, da_gas=512, l2_gas=20_000),
        make_result("burn", gates=800),
    )
    write_report(
        fs,
        "benchmarks/Token_latest.benchmark.json",
        make_result("mint", gates=1050, da_gas=512, l2_gas=20_000),
        make_result("transfer", gates=600),
    )
    write_report(fs, "benchmarks/Fresh_latest.benchmark.json", make_result("init", gates=5))
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture(autouse=True)
def _isolated_runtime(monkeypatch: pytest.MonkeyPatch) -> None:
    """Clear action inputs and use the plain console between tests."""
    for key in list(os.environ):
        if key.startswith("INPUT_") or key == "GITHUB_OUTPUT":
            monkeypatch.delenv(key)
    configure(backend="plain")
