#!/usr/bin/env python3
"""
benchdiff CLI -- Compare gate counts and gas between two benchmark runs.

Usage:
  benchdiff compare [--config PATH] [--reports-dir DIR] [--base-suffix S]
                    [--pr-suffix S] [--threshold PCT] [--output PATH]
  benchdiff pairs   [--config PATH] [--reports-dir DIR] [--base-suffix S]
                    [--pr-suffix S]
  benchdiff action
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import TYPE_CHECKING

from kernel.config import ConfigError, apply_overrides, load_settings
from kernel.console import configure, console

if TYPE_CHECKING:
    from domain.models import ComparisonSettings

logger = logging.getLogger("benchdiff")

_STATUS_LABELS = {
    "REGRESSION": "Regressions",
    "IMPROVEMENT": "Improvements",
    "NEW": "New",
    "REMOVED": "Removed",
    "UNCHANGED": "Unchanged",
}

# ---------------------------------------------------------------------------
# CLI commands
# ---------------------------------------------------------------------------


def _settings_from_args(args: argparse.Namespace) -> ComparisonSettings:
    settings = load_settings(Path(args.config) if args.config else None)
    return apply_overrides(
        settings,
        reports_dir=args.reports_dir,
        base_suffix=args.base_suffix,
        pr_suffix=args.pr_suffix,
        threshold=getattr(args, "threshold", None),
    )


def cmd_compare(args: argparse.Namespace) -> int:
    """Compare all report pairs and emit the Markdown report."""
    import wiring
    from adapters.local_fs import LocalFileSystem
    from modules.renderer.core import count_statuses

    settings = _settings_from_args(args)
    fs = LocalFileSystem()
    report = wiring.compare_reports(settings, fs)

    if args.output:
        fs.write_file(args.output, report.markdown)
        console.success(f"Comparison report written to {args.output}")
    else:
        sys.stdout.write(report.markdown)
        sys.stdout.flush()

    if not report.sections:
        console.warning(f"No matching benchmark report pairs found in {settings.reports_dir}")
        return 0

    counts = count_statuses(report.sections)
    console.kv(
        {
            f"{status.value} {_STATUS_LABELS[status.name]}": str(count)
            for status, count in counts.items()
        },
        title=f"{len(report.sections)} contract(s), threshold {settings.threshold}%",
    )
    for section in report.sections:
        if section.error is not None:
            console.error(f"{section.contract_name}: {section.error.strip('*')}")
    return 0


def cmd_pairs(args: argparse.Namespace) -> int:
    """List the base/candidate pairs that would be compared."""
    from adapters.local_fs import LocalFileSystem
    from modules.pairing.core import discover_pairs

    settings = _settings_from_args(args)
    pairs = discover_pairs(
        LocalFileSystem(),
        settings.reports_dir,
        settings.base_suffix,
        settings.pr_suffix,
    )
    if not pairs:
        console.info(f"No matching benchmark report pairs found in {settings.reports_dir}")
        return 0

    console.table(
        ["Contract", "Base", "PR"],
        [[p.contract_name, p.base_path, p.pr_path] for p in pairs],
        title="Benchmark pairs",
    )
    return 0


def cmd_action(_args: argparse.Namespace) -> int:
    """Run as a GitHub Action step."""
    from kernel.action import run_action

    return run_action()


# ---------------------------------------------------------------------------
# Main entry point
# ---------------------------------------------------------------------------


def _add_selection_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--config", default=None, help="YAML config file (default: benchdiff.yaml)")
    parser.add_argument("--reports-dir", default=None, help="Directory with *.benchmark.json files")
    parser.add_argument("--base-suffix", default=None, help="Suffix of base reports (e.g. _base)")
    parser.add_argument("--pr-suffix", default=None, help="Suffix of candidate reports (e.g. _latest)")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="benchdiff",
        description="benchdiff -- Benchmark comparison for contract gate counts and gas",
    )
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    parser.add_argument("--quiet", action="store_true", help="Only show warnings and errors")
    sub = parser.add_subparsers(dest="command")

    # benchdiff compare
    compare_p = sub.add_parser("compare", help="Compare base and candidate reports")
    _add_selection_args(compare_p)
    compare_p.add_argument(
        "--threshold",
        default=None,
        help="Regression threshold in percent (default: 2.5)",
    )
    compare_p.add_argument("--output", default=None, help="Write the report here instead of stdout")

    # benchdiff pairs
    pairs_p = sub.add_parser("pairs", help="List discovered report pairs")
    _add_selection_args(pairs_p)

    # benchdiff action
    sub.add_parser("action", help="Run as a GitHub Action step (reads INPUT_* variables)")

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    # -- Console configuration (human-facing output) ------------------------
    configure(backend="auto")

    # -- Logging configuration ----------------------------------------------
    if args.verbose:
        level = logging.DEBUG
    elif args.quiet:
        level = logging.WARNING
    else:
        level = logging.INFO
    logging.basicConfig(
        stream=sys.stderr,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
        level=level,
    )

    commands = {
        "compare": cmd_compare,
        "pairs": cmd_pairs,
        "action": cmd_action,
    }
    handler = commands.get(args.command)
    if handler is None:
        parser.print_help()
        return 1

    try:
        return handler(args)
    except (ConfigError, OSError) as exc:
        console.error(str(exc))
        return 1


if __name__ == "__main__":
    sys.exit(main())
