"""Pair discoverer — matches base and candidate benchmark reports.

Scans one reports directory (non-recursively) for candidate files named
``<contract><pr_suffix>.benchmark.json`` and pairs each with a sibling
``<contract><base_suffix>.benchmark.json``. A candidate without a base file
is a new benchmark with nothing to compare against and is dropped.

Listing failures never propagate: the run degrades to "nothing to compare".
"""

from __future__ import annotations

import logging
import os
from typing import TYPE_CHECKING

from domain.models import REPORT_EXTENSION, BenchmarkPair

if TYPE_CHECKING:
    from domain.ports import FileSystemPort

logger = logging.getLogger("benchdiff.pairing")


def contract_name_for(filename: str, suffix: str) -> str | None:
    """Recover the contract name from a report file name.

    Args:
        filename: Bare file name, e.g. ``Token_latest.benchmark.json``.
        suffix: Report suffix to strip, e.g. ``_latest``.

    Returns:
        The contract name, or None if the file name does not carry the suffix.
    """
    pattern = f"{suffix}{REPORT_EXTENSION}"
    if not filename.endswith(pattern):
        return None
    return filename[: len(filename) - len(pattern)]


def discover_pairs(
    fs: FileSystemPort,
    reports_dir: str,
    base_suffix: str,
    pr_suffix: str,
) -> list[BenchmarkPair]:
    """Find base/candidate report pairs in a directory.

    Args:
        fs: Filesystem to list and probe.
        reports_dir: Directory holding the ``*.benchmark.json`` files.
        base_suffix: Suffix of base reports (e.g. ``_base``).
        pr_suffix: Suffix of candidate reports (e.g. ``_latest``).

    Returns:
        Pairs sorted by contract name. Empty when the directory is missing
        or unreadable.
    """
    try:
        entries = fs.list_directory(reports_dir)
    except FileNotFoundError:
        logger.warning("Reports directory not found: %s", reports_dir)
        return []
    except OSError:
        logger.exception("Error reading reports directory %s", reports_dir)
        return []

    pairs: list[BenchmarkPair] = []
    for entry in entries:
        contract_name = contract_name_for(entry, pr_suffix)
        if contract_name is None:
            continue

        base_path = os.path.join(reports_dir, f"{contract_name}{base_suffix}{REPORT_EXTENSION}")
        if not fs.file_exists(base_path):
            logger.debug("No base report for %s, skipping %s", contract_name, entry)
            continue

        pairs.append(
            BenchmarkPair(
                contract_name=contract_name,
                base_path=base_path,
                pr_path=os.path.join(reports_dir, entry),
            )
        )

    # Sorted for output that does not depend on directory enumeration order.
    pairs.sort(key=lambda p: p.contract_name)
    logger.info("Found %d benchmark pair(s) in %s", len(pairs), reports_dir)
    return pairs
