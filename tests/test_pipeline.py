"""Tests for the offline pipeline scripts."""

from __future__ import annotations

import importlib

import pandas as pd
import pytest

from conftest import make_record
from dashboard.models import CampaignType

generate = importlib.import_module("scripts.00_generate_data")
benchmarks = importlib.import_module("scripts.01_compute_benchmarks")


def _cfg(**simulation) -> dict:
    sim = {"n_campaigns": 40, "start_month": "2024-01", "n_months": 6, "planned_months": 1}
    sim.update(simulation)
    return {
        "simulation": sim,
        "catalog": {"providers": ["Carwow", "Autotrader", "PistonHeads"]},
    }


def test_generated_campaigns_are_valid() -> None:
    cfg = _cfg()
    raw = generate._make_campaigns(generate._rng(42), cfg)
    validated = generate._validate(raw, cfg["catalog"]["providers"])

    assert len(raw) == 40
    assert len(validated) == len(raw)
    assert set(validated["provider"]) <= set(cfg["catalog"]["providers"])
    assert set(validated["type"]) <= {"Awareness", "Conversion"}


def test_trailing_months_are_plan_only() -> None:
    cfg = _cfg(planned_months=2)
    df = generate._make_campaigns(generate._rng(1), cfg)

    future = df[df["month"] >= "2024-05"]
    past = df[df["month"] < "2024-05"]
    assert future["spend"].isna().all()
    assert past["spend"].notna().all()
    assert df["plan_spend"].notna().all()


def test_generation_is_seeded() -> None:
    cfg = _cfg()
    a = generate._make_campaigns(generate._rng(3), cfg)
    b = generate._make_campaigns(generate._rng(3), cfg)
    pd.testing.assert_frame_equal(a, b)


def test_benchmark_table_shape_and_values() -> None:
    records = [
        make_record(spend=1000, impressions=100000, clicks=2000, campaign_id="A"),
        make_record(spend=1200, impressions=110000, clicks=2100, provider="Autotrader", campaign_id="B"),
        make_record(CampaignType.CONVERSION, spend=2000, impressions=50000, leads=200, gross_profit=8000,
                    campaign_id="C"),
    ]
    table = benchmarks.build_benchmark_table(records, ["Carwow", "Autotrader"])

    # one "All" row plus one row per provider, for each campaign type
    assert len(table) == 6
    row = table[(table["provider"] == "All") & (table["type"] == "Awareness")].iloc[0]
    assert row["n_campaigns"] == 2
    assert row["cpm"] == pytest.approx(10.4545, abs=1e-4)
    assert pd.isna(row["roas"])

    conv = table[(table["provider"] == "Carwow") & (table["type"] == "Conversion")].iloc[0]
    assert conv["roas"] == pytest.approx(4.0)

    empty = table[(table["provider"] == "Autotrader") & (table["type"] == "Conversion")].iloc[0]
    assert empty["n_campaigns"] == 0
    assert pd.isna(empty["cpm"])
