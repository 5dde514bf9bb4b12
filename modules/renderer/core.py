"""Report renderer — turns contract comparisons into a Markdown document.

Each contract becomes an HTML table (GitHub renders the column spans that
plain Markdown tables cannot express). The document starts with a fixed
marker comment so a PR-comment updater can find and replace an earlier
report in place.
"""

from __future__ import annotations

import html
import logging
from collections import Counter
from collections.abc import Iterable

from domain.models import ComparisonStatus, ContractSection, FunctionComparison
from modules.diff.core import format_diff, format_number

logger = logging.getLogger("benchdiff.renderer")

COMMENT_MARKER = "<!-- benchmark-diff -->"
REPORT_TITLE = "# Benchmark Comparison"
NO_PAIRS_MESSAGE = "No matching benchmark report pairs found to compare."
NO_FUNCTIONS_MESSAGE = "*No comparable functions found between reports.*"

_TABLE_HEAD = (
    "<table>",
    "<thead>",
    "<tr>",
    "  <th></th>",
    "  <th>Function</th>",
    '  <th colspan="3">Gates</th>',
    '  <th colspan="3">DA Gas</th>',
    '  <th colspan="3">L2 Gas</th>',
    "</tr>",
    "<tr>",
    "  <th>Status</th>",
    "  <th></th>",
    *("  <th>Base</th>", "  <th>PR</th>", "  <th>Diff</th>") * 3,
    "</tr>",
    "</thead>",
    "<tbody>",
)
_TABLE_TAIL = ("</tbody>", "</table>")


def _render_row(comparison: FunctionComparison) -> list[str]:
    cells = [
        f'  <td align="center">{comparison.status.value}</td>',
        f"  <td><code>{html.escape(comparison.name)}</code></td>",
    ]
    for pair in comparison.metrics:
        cells.append(f'  <td align="right">{format_number(pair.main)}</td>')
        cells.append(f'  <td align="right">{format_number(pair.pr)}</td>')
        cells.append(f'  <td align="right">{format_diff(pair.main, pair.pr)}</td>')
    return ["<tr>", *cells, "</tr>"]


def render_contract_table(comparisons: Iterable[FunctionComparison]) -> str:
    """Render one contract's comparisons as an HTML table.

    Rows are emitted in function-name order. An empty comparison set renders
    the "no comparable functions" placeholder instead of an empty table.
    """
    ordered = sorted(comparisons, key=lambda c: c.name)
    if not ordered:
        return NO_FUNCTIONS_MESSAGE

    lines = list(_TABLE_HEAD)
    for comparison in ordered:
        lines.extend(_render_row(comparison))
    lines.extend(_TABLE_TAIL)
    return "\n".join(lines)


def render_section(section: ContractSection) -> str:
    """Render a contract's body: its error placeholder or its table."""
    if section.error is not None:
        return section.error
    return render_contract_table(section.comparisons)


def render_document(sections: Iterable[ContractSection]) -> str:
    """Assemble the full comparison document.

    Args:
        sections: Per-contract outcomes, in any order.

    Returns:
        Marker, title, then one heading and body per contract sorted by
        contract name. Byte-identical for identical inputs.
    """
    ordered = sorted(sections, key=lambda s: s.contract_name)
    parts = [f"{COMMENT_MARKER}\n", f"{REPORT_TITLE}\n"]

    if not ordered:
        parts.append(f"{NO_PAIRS_MESSAGE}\n")
        return "\n".join(parts)

    for section in ordered:
        parts.append(f"## Contract: {section.contract_name}\n")
        parts.append(render_section(section))
        parts.append("\n")

    logger.info("Rendered comparison report for %d contract(s)", len(ordered))
    return "\n".join(parts)


def count_statuses(sections: Iterable[ContractSection]) -> dict[ComparisonStatus, int]:
    """Count functions per status across all sections, in enum order."""
    counts = Counter(c.status for s in sections for c in s.comparisons)
    return {status: counts.get(status, 0) for status in ComparisonStatus}
