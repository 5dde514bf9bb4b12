"""
kernel/action.py — GitHub Action entry point.

Reads the action inputs from ``INPUT_*`` environment variables, runs the
comparison over the already-generated reports, writes the Markdown report to
``output_markdown_path`` and publishes two step outputs:

- ``comparison_markdown``: the full report text
- ``markdown_file_path``: the resolved path of the written report

Generating the candidate reports is left to earlier workflow steps.
"""

from __future__ import annotations

import logging
import os
import uuid
from collections.abc import Mapping
from pathlib import Path

import wiring
from adapters.local_fs import LocalFileSystem
from kernel.config import ConfigError, apply_overrides, load_settings, parse_threshold

logger = logging.getLogger("benchdiff.action")


def get_input(name: str, env: Mapping[str, str] | None = None) -> str:
    """Read an action input the way the Actions runner exposes it."""
    environ = env if env is not None else os.environ
    key = "INPUT_" + name.replace(" ", "_").upper()
    return environ.get(key, "").strip()


def set_output(name: str, value: str, env: Mapping[str, str] | None = None) -> None:
    """Append a step output to the ``GITHUB_OUTPUT`` file.

    Uses the heredoc form so multi-line values survive intact. Outside a
    runner (no ``GITHUB_OUTPUT``) the output is only logged.
    """
    environ = env if env is not None else os.environ
    output_file = environ.get("GITHUB_OUTPUT")
    if not output_file:
        logger.info("GITHUB_OUTPUT not set; output %s not published", name)
        return

    delimiter = f"ghadelimiter_{uuid.uuid4()}"
    with open(output_file, "a", encoding="utf-8") as fh:
        fh.write(f"{name}<<{delimiter}\n{value}\n{delimiter}\n")


def _group(title: str) -> None:
    print(f"::group::{title}", flush=True)


def _end_group() -> None:
    print("::endgroup::", flush=True)


def run_action(env: Mapping[str, str] | None = None) -> int:
    """Run the action. Returns the process exit code.

    Every failure is reported as an ``::error::`` workflow command and turns
    into exit code 1.
    """
    try:
        settings = load_settings()

        raw_threshold = get_input("threshold", env)
        threshold = parse_threshold(raw_threshold) if raw_threshold else None
        settings = apply_overrides(
            settings,
            threshold=threshold,
            output_markdown_path=get_input("output_markdown_path", env) or None,
            reports_dir=get_input("reports_dir", env) or None,
            base_suffix=get_input("base_suffix", env) or None,
            pr_suffix=get_input("pr_suffix", env) or None,
        )

        logger.info("--- Inputs ---")
        logger.info("Threshold: %s%%", settings.threshold)
        logger.info("Output Markdown Path: %s", settings.output_markdown_path)
        logger.info("Reports Directory: %s", settings.reports_dir)
        logger.info("Base Suffix: %s", settings.base_suffix)
        logger.info("PR Suffix: %s", settings.pr_suffix)

        fs = LocalFileSystem()
        _group("Comparing benchmark reports")
        try:
            markdown = wiring.run_comparison(settings, fs)
        finally:
            _end_group()

        resolved = Path(settings.output_markdown_path).resolve()
        logger.info("Writing comparison report to: %s", resolved)
        fs.write_file(str(resolved), markdown)

        set_output("comparison_markdown", markdown, env)
        set_output("markdown_file_path", str(resolved), env)
    except (ConfigError, OSError) as exc:
        logger.debug("Action failure", exc_info=True)
        print(f"::error::Action failed: {exc}", flush=True)
        return 1

    logger.info("Benchmark comparison action completed successfully.")
    return 0
