"""
kernel/config.py — Defaults, constants and settings loading.

Comparison defaults live here. ``load_settings`` reads the optional YAML
config file; CLI flags and Action inputs are layered on top with
``apply_overrides``.
"""

from __future__ import annotations

import dataclasses
import logging
import math
from pathlib import Path
from typing import Any

import yaml

from domain.models import ComparisonSettings

logger = logging.getLogger("benchdiff.config")

# ---------------------------------------------------------------------------
# Defaults
# ---------------------------------------------------------------------------

CONFIG_FILE = Path("benchdiff.yaml")

DEFAULT_REPORTS_DIR = "benchmarks"
DEFAULT_BASE_SUFFIX = "_base"
DEFAULT_PR_SUFFIX = "_latest"

# Regression threshold in percent (2.5 means 2.5%)
DEFAULT_THRESHOLD = 2.5

DEFAULT_OUTPUT_MARKDOWN_PATH = "benchmark_comparison.md"

DEFAULT_SETTINGS = ComparisonSettings(
    reports_dir=DEFAULT_REPORTS_DIR,
    base_suffix=DEFAULT_BASE_SUFFIX,
    pr_suffix=DEFAULT_PR_SUFFIX,
    threshold=DEFAULT_THRESHOLD,
    output_markdown_path=DEFAULT_OUTPUT_MARKDOWN_PATH,
)

_STRING_KEYS = ("reports_dir", "base_suffix", "pr_suffix", "output_markdown_path")


class ConfigError(ValueError):
    """Invalid configuration file or setting value."""


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------


def parse_threshold(value: object) -> float:
    """Validate a regression threshold given in percent.

    Accepts numbers and numeric strings (Action inputs arrive as strings).

    Raises:
        ConfigError: If the value is not a finite, non-negative number.
    """
    if isinstance(value, bool):
        msg = f"Invalid threshold value {value!r}. Please provide a number."
        raise ConfigError(msg)
    try:
        threshold = float(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        msg = f"Invalid threshold value {value!r}. Please provide a number."
        raise ConfigError(msg) from None
    if not math.isfinite(threshold) or threshold < 0:
        msg = f"Invalid threshold value {value!r}. Must be a finite, non-negative number."
        raise ConfigError(msg)
    return threshold


def _validated(raw: dict[str, Any], source: str) -> dict[str, Any]:
    known = {f.name for f in dataclasses.fields(ComparisonSettings)}
    values: dict[str, Any] = {}
    for key, value in raw.items():
        if key not in known:
            logger.warning("Ignoring unknown setting %r in %s", key, source)
            continue
        if key == "threshold":
            values[key] = parse_threshold(value)
        elif key in _STRING_KEYS:
            if not isinstance(value, str):
                msg = f"Setting {key!r} in {source} must be a string, got {value!r}"
                raise ConfigError(msg)
            values[key] = value
    return values


# ---------------------------------------------------------------------------
# Loading
# ---------------------------------------------------------------------------


def load_settings(path: Path | None = None) -> ComparisonSettings:
    """Load comparison settings from a YAML file.

    Args:
        path: Config file to read; defaults to ``benchdiff.yaml`` in the
            working directory. A missing file yields the defaults.

    Returns:
        Defaults overlaid with the file's values.

    Raises:
        ConfigError: If the file is unreadable, not YAML, not a mapping,
            or holds invalid values.
    """
    config_path = path if path is not None else CONFIG_FILE
    if not config_path.exists():
        logger.debug("No config file at %s, using defaults", config_path)
        return DEFAULT_SETTINGS

    try:
        raw = yaml.safe_load(config_path.read_text(encoding="utf-8"))
    except (OSError, yaml.YAMLError) as exc:
        msg = f"Could not read config file {config_path}: {exc}"
        raise ConfigError(msg) from exc

    if raw is None:
        return DEFAULT_SETTINGS
    if not isinstance(raw, dict):
        msg = f"Config file {config_path} must contain a mapping"
        raise ConfigError(msg)

    logger.info("Loaded settings from %s", config_path)
    return dataclasses.replace(DEFAULT_SETTINGS, **_validated(raw, str(config_path)))


def apply_overrides(settings: ComparisonSettings, **overrides: Any) -> ComparisonSettings:
    """Return ``settings`` with every non-None override applied and validated."""
    provided = {k: v for k, v in overrides.items() if v is not None}
    if not provided:
        return settings
    return dataclasses.replace(settings, **_validated(provided, "overrides"))
