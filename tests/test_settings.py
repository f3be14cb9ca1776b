"""Tests for dashboard/settings.py — config loading and data paths."""

from __future__ import annotations

import pytest

from dashboard.settings import DataPaths, load_settings, project_root


def test_missing_config_raises(tmp_path) -> None:
    with pytest.raises(FileNotFoundError, match="settings.yaml"):
        load_settings(tmp_path)


def test_load_settings_from_root(tmp_path) -> None:
    (tmp_path / "config").mkdir()
    (tmp_path / "config" / "settings.yaml").write_text(
        "output:\n  raw_dir: in\n  marts_dir: out\n", encoding="utf-8"
    )
    cfg = load_settings(tmp_path)
    paths = DataPaths.from_config(tmp_path, cfg)

    assert paths.campaigns_csv == tmp_path / "in" / "campaigns.csv"
    assert paths.benchmarks_csv == tmp_path / "out" / "mart_benchmarks.csv"

    paths.ensure()
    assert paths.raw_dir.is_dir()
    assert paths.marts_dir.is_dir()


def test_default_paths_when_output_missing(tmp_path) -> None:
    paths = DataPaths.from_config(tmp_path, {})
    assert paths.raw_dir == tmp_path / "data" / "raw"
    assert paths.marts_dir == tmp_path / "data" / "marts"


def test_shipped_settings_are_consistent() -> None:
    from dashboard.validators import VALID_PROVIDERS, validate_config

    cfg = load_settings(project_root())
    assert set(cfg["catalog"]["providers"]) == set(VALID_PROVIDERS)
    assert validate_config(cfg["budget"]).is_valid

