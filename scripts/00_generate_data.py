from __future__ import annotations

import sys
from pathlib import Path
from typing import Dict, List

import numpy as np
import pandas as pd


def _project_root_from_this_file(this_file: Path) -> Path:
    # scripts/00_generate_data.py -> project root is parent of "scripts"
    return this_file.resolve().parents[1]


PROJECT_ROOT = _project_root_from_this_file(Path(__file__))
sys.path.insert(0, str(PROJECT_ROOT))

from dashboard.data_access import CAMPAIGN_COLUMNS  # noqa: E402
from dashboard.settings import DataPaths, load_settings  # noqa: E402
from dashboard.validators import validate_campaign  # noqa: E402


def _rng(seed: int) -> np.random.Generator:
    return np.random.default_rng(seed)


# Provider pricing profile: (CPM in £, click-through rate, lead rate per impression)
_PROVIDER_PROFILE: Dict[str, tuple] = {
    "Carwow": (10.0, 0.020, 0.0040),
    "Autotrader": (12.5, 0.016, 0.0035),
    "Leasing.com": (8.0, 0.022, 0.0030),
    "WhatCar?": (11.0, 0.018, 0.0028),
    "PistonHeads": (14.0, 0.012, 0.0020),
    "AutoExpress": (9.0, 0.015, 0.0022),
}
_DEFAULT_PROFILE = (11.0, 0.017, 0.0030)


def _months(cfg: dict) -> pd.PeriodIndex:
    sim = cfg["simulation"]
    return pd.period_range(pd.Period(sim["start_month"], freq="M"), periods=int(sim["n_months"]), freq="M")


def _present(d: dict) -> dict:
    return {k: v for k, v in d.items() if not (isinstance(v, float) and np.isnan(v))}


def _make_campaigns(rng: np.random.Generator, cfg: dict) -> pd.DataFrame:
    n = int(cfg["simulation"]["n_campaigns"])
    planned_months = int(cfg["simulation"].get("planned_months", 0))
    providers: List[str] = list(cfg["catalog"]["providers"])

    months = _months(cfg)
    cutoff = months[-planned_months] if planned_months > 0 else None

    month_idx = np.sort(rng.integers(0, len(months), size=n))
    provider = rng.choice(providers, size=n)
    ctype = rng.choice(["Awareness", "Conversion"], size=n, p=[0.55, 0.45])
    plan_spend = rng.integers(5, 60, size=n) * 1000

    rows = []
    for i in range(n):
        cpm, ctr, lead_rate = _PROVIDER_PROFILE.get(provider[i], _DEFAULT_PROFILE)
        month = months[month_idx[i]]
        spend = float(plan_spend[i])
        impressions = int(round(spend / (cpm * rng.normal(1.0, 0.10)) * 1000))
        awareness = ctype[i] == "Awareness"

        row = {
            "campaign_id": f"P{str(i + 1).zfill(4)}",
            "name": f"{provider[i]} {ctype[i]} {month.strftime('%b %Y')}",
            "provider": str(provider[i]),
            "type": str(ctype[i]),
            "month": str(month),
            "plan_spend": spend,
            "plan_impressions": impressions,
            "plan_clicks": int(round(impressions * ctr)) if awareness else np.nan,
            "plan_leads": np.nan if awareness else int(round(impressions * lead_rate)),
        }
        for col in ("spend", "impressions", "clicks", "leads", "sales", "gross_profit"):
            row[col] = np.nan

        if cutoff is None or month < cutoff:
            a_spend = round(spend * float(np.clip(rng.normal(1.0, 0.08), 0.6, 1.3)), 2)
            # a few campaigns come back with no delivery reporting
            a_impr = 0 if rng.random() < 0.03 else int(round(impressions * rng.normal(1.0, 0.15)))
            row["spend"] = a_spend
            row["impressions"] = max(a_impr, 0)
            if awareness:
                row["clicks"] = int(max(round(row["impressions"] * ctr * rng.normal(1.0, 0.25)), 0))
            else:
                leads = int(max(round(row["impressions"] * lead_rate * rng.normal(1.0, 0.25)), 0))
                sales = int(rng.binomial(leads, 0.08)) if leads > 0 else 0
                row["leads"] = leads
                row["sales"] = sales
                row["gross_profit"] = round(sales * max(float(rng.normal(1800.0, 400.0)), 0.0), 2) if sales else 0.0

        rows.append(row)

    return pd.DataFrame(rows, columns=CAMPAIGN_COLUMNS)


def _validate(df: pd.DataFrame, providers: List[str]) -> pd.DataFrame:
    keep = []
    for row in df.to_dict("records"):
        plan = _present({
            "spend": row["plan_spend"],
            "impressions": row["plan_impressions"],
            "clicks": row["plan_clicks"],
            "leads": row["plan_leads"],
        })
        actuals = _present({k: row[k] for k in ("spend", "impressions", "clicks", "leads", "sales", "gross_profit")})
        result = validate_campaign({
            "name": row["name"],
            "provider": row["provider"],
            "type": row["type"],
            "month": row["month"],
            "plan": plan,
            "actuals": actuals or None,
        }, providers=providers)
        if not result.is_valid:
            print(f"⚠️ Dropping {row['campaign_id']}: {result.errors}")
        keep.append(result.is_valid)
    return df[keep].reset_index(drop=True)


def main() -> None:
    cfg = load_settings(PROJECT_ROOT)
    seed = int(cfg["project"]["random_seed"])
    rng = _rng(seed)

    paths = DataPaths.from_config(PROJECT_ROOT, cfg)
    paths.ensure()

    campaigns = _make_campaigns(rng, cfg)
    campaigns = _validate(campaigns, list(cfg["catalog"]["providers"]))
    campaigns.to_csv(paths.campaigns_csv, index=False)

    print("✅ Generated raw data:")
    print(f"- {paths.campaigns_csv} ({len(campaigns)} campaigns)")


if __name__ == "__main__":
    main()
