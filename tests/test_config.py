"""Tests for kernel/config.py — defaults, YAML loading and overrides."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import pytest

from kernel.config import (
    DEFAULT_SETTINGS,
    ConfigError,
    apply_overrides,
    load_settings,
    parse_threshold,
)

if TYPE_CHECKING:
    from pathlib import Path


# ---------------------------------------------------------------------------
# parse_threshold
# ---------------------------------------------------------------------------


class TestParseThreshold:
    def test_numbers_and_numeric_strings(self) -> None:
        assert parse_threshold(10) == 10.0
        assert parse_threshold("2.5") == 2.5
        assert parse_threshold(" 0 ") == 0.0

    @pytest.mark.parametrize("bad", ["", "ten", None, True, "nan", "inf", -1, [5]])
    def test_rejects_invalid(self, bad: object) -> None:
        with pytest.raises(ConfigError, match="Invalid threshold value"):
            parse_threshold(bad)


# ---------------------------------------------------------------------------
# load_settings
# ---------------------------------------------------------------------------


class TestLoadSettings:
    def test_missing_file_gives_defaults(self, tmp_path: Path) -> None:
        assert load_settings(tmp_path / "absent.yaml") == DEFAULT_SETTINGS

    def test_defaults(self) -> None:
        assert DEFAULT_SETTINGS.reports_dir == "benchmarks"
        assert DEFAULT_SETTINGS.base_suffix == "_base"
        assert DEFAULT_SETTINGS.pr_suffix == "_latest"
        assert DEFAULT_SETTINGS.threshold == 2.5

    def test_reads_yaml_values(self, tmp_path: Path) -> None:
        config = tmp_path / "benchdiff.yaml"
        config.write_text("reports_dir: out\npr_suffix: _pr\nthreshold: 10\n")

        settings = load_settings(config)

        assert settings.reports_dir == "out"
        assert settings.pr_suffix == "_pr"
        assert settings.threshold == 10.0
        assert settings.base_suffix == "_base"

    def test_empty_file_gives_defaults(self, tmp_path: Path) -> None:
        config = tmp_path / "benchdiff.yaml"
        config.write_text("")
        assert load_settings(config) == DEFAULT_SETTINGS

    def test_default_path_is_working_directory(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        (tmp_path / "benchdiff.yaml").write_text("base_suffix: _main\n")
        monkeypatch.chdir(tmp_path)
        assert load_settings().base_suffix == "_main"

    def test_unknown_keys_warn(self, tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
        config = tmp_path / "benchdiff.yaml"
        config.write_text("colour: blue\nthreshold: 1\n")

        with caplog.at_level(logging.WARNING, logger="benchdiff.config"):
            settings = load_settings(config)

        assert settings.threshold == 1.0
        assert "Ignoring unknown setting 'colour'" in caplog.text

    def test_invalid_yaml(self, tmp_path: Path) -> None:
        config = tmp_path / "benchdiff.yaml"
        config.write_text("threshold: [unclosed\n")
        with pytest.raises(ConfigError, match="Could not read config file"):
            load_settings(config)

    def test_non_mapping(self, tmp_path: Path) -> None:
        config = tmp_path / "benchdiff.yaml"
        config.write_text("- a\n- b\n")
        with pytest.raises(ConfigError, match="must contain a mapping"):
            load_settings(config)

    def test_wrong_value_type(self, tmp_path: Path) -> None:
        config = tmp_path / "benchdiff.yaml"
        config.write_text("reports_dir: 12\n")
        with pytest.raises(ConfigError, match="'reports_dir'"):
            load_settings(config)

    def test_invalid_threshold(self, tmp_path: Path) -> None:
        config = tmp_path / "benchdiff.yaml"
        config.write_text("threshold: -3\n")
        with pytest.raises(ConfigError):
            load_settings(config)


# ---------------------------------------------------------------------------
# apply_overrides
# ---------------------------------------------------------------------------


class TestApplyOverrides:
    def test_none_values_are_ignored(self) -> None:
        assert apply_overrides(DEFAULT_SETTINGS, reports_dir=None, threshold=None) == DEFAULT_SETTINGS

    def test_values_replace_settings(self) -> None:
        settings = apply_overrides(DEFAULT_SETTINGS, pr_suffix="_pr", threshold="7.5")
        assert settings.pr_suffix == "_pr"
        assert settings.threshold == 7.5
        assert settings.reports_dir == DEFAULT_SETTINGS.reports_dir

    def test_empty_suffix_is_a_value(self) -> None:
        assert apply_overrides(DEFAULT_SETTINGS, base_suffix="").base_suffix == ""

    def test_invalid_override(self) -> None:
        with pytest.raises(ConfigError):
            apply_overrides(DEFAULT_SETTINGS, threshold="abc")
