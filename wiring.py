"""
wiring.py — Connects the comparison pipeline steps.

Pair discovery -> per-pair diff -> rendering. Pairs are processed strictly
one after another; a failure in one pair becomes an inline placeholder in
that contract's section and never stops the others.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from adapters.local_fs import LocalFileSystem
from domain.models import ComparisonReport, ContractSection
from modules.diff.core import compare_pair
from modules.pairing.core import discover_pairs
from modules.renderer.core import render_document

if TYPE_CHECKING:
    from domain.models import BenchmarkPair, ComparisonSettings
    from domain.ports import FileSystemPort

logger = logging.getLogger("benchdiff.wiring")


def _compare_isolated(
    fs: FileSystemPort,
    pair: BenchmarkPair,
    threshold: float,
) -> ContractSection:
    """Run ``compare_pair``, converting any unexpected failure to a placeholder."""
    try:
        return compare_pair(fs, pair, threshold)
    except Exception as exc:
        logger.exception("Unexpected failure comparing %s", pair.contract_name)
        return ContractSection(
            contract_name=pair.contract_name,
            error=f"*Error comparing {pair.contract_name}: {exc}*",
        )


def compare_reports(
    settings: ComparisonSettings,
    fs: FileSystemPort | None = None,
) -> ComparisonReport:
    """Compare every base/candidate pair in the reports directory.

    Args:
        settings: Reports directory, suffixes and threshold.
        fs: Filesystem to read through; defaults to the working directory.

    Returns:
        The rendered document and the per-contract sections behind it.
    """
    fs = fs if fs is not None else LocalFileSystem()
    logger.info(
        "Comparing reports in %s (base suffix %r, PR suffix %r, threshold %s%%)",
        settings.reports_dir,
        settings.base_suffix,
        settings.pr_suffix,
        settings.threshold,
    )

    pairs = discover_pairs(fs, settings.reports_dir, settings.base_suffix, settings.pr_suffix)
    if not pairs:
        logger.info("No matching benchmark report pairs found in the directory.")

    sections = tuple(_compare_isolated(fs, pair, settings.threshold) for pair in pairs)
    markdown = render_document(sections)
    logger.info("Comparison report generated for %d contract pair(s).", len(sections))
    return ComparisonReport(markdown=markdown, sections=sections)


def run_comparison(
    settings: ComparisonSettings,
    fs: FileSystemPort | None = None,
) -> str:
    """Return only the Markdown document of ``compare_reports``."""
    return compare_reports(settings, fs).markdown
