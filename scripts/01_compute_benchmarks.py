from __future__ import annotations

import sys
from pathlib import Path
from typing import List, Sequence

import pandas as pd


def _project_root_from_this_file(this_file: Path) -> Path:
    return this_file.resolve().parents[1]


PROJECT_ROOT = _project_root_from_this_file(Path(__file__))
sys.path.insert(0, str(PROJECT_ROOT))

from dashboard.benchmarking import average_metric, default_metrics  # noqa: E402
from dashboard.data_access import records_from_frame, select_cohort  # noqa: E402
from dashboard.models import CampaignRecord, CampaignType, MetricKind  # noqa: E402
from dashboard.settings import DataPaths, load_settings  # noqa: E402

ALL_PROVIDERS = "All"


def _read_required_csv(path: Path) -> pd.DataFrame:
    if not path.exists():
        raise FileNotFoundError(f"Missing required dataset: {path}")
    return pd.read_csv(path, dtype={"campaign_id": str, "month": str})


def _benchmark_row(cohort: Sequence[CampaignRecord], provider: str, ctype: CampaignType) -> dict:
    row = {"provider": provider, "type": ctype.value, "n_campaigns": len(cohort)}
    for kind in MetricKind:
        row[kind.value] = None
    for kind in default_metrics(ctype):
        row[kind.value] = average_metric(cohort, kind, ctype)
    return row


def build_benchmark_table(records: Sequence[CampaignRecord], providers: Sequence[str]) -> pd.DataFrame:
    """One benchmark row per (provider, type), plus an all-provider row per type.

    Metrics a campaign type does not track (ROAS for Awareness) stay empty.
    Provider/type combinations with no completed campaigns are kept with a
    zero count and empty benchmarks so the mart always has the same shape.
    """
    rows: List[dict] = []
    for ctype in CampaignType:
        rows.append(_benchmark_row(select_cohort(records, ctype), ALL_PROVIDERS, ctype))
        for provider in providers:
            rows.append(_benchmark_row(select_cohort(records, ctype, provider), provider, ctype))
    return pd.DataFrame(rows, columns=["provider", "type", "n_campaigns"] + [k.value for k in MetricKind])


def main() -> None:
    cfg = load_settings(PROJECT_ROOT)
    paths = DataPaths.from_config(PROJECT_ROOT, cfg)
    paths.ensure()

    campaigns = _read_required_csv(paths.campaigns_csv)
    records = records_from_frame(campaigns)

    bench = build_benchmark_table(records, list(cfg["catalog"]["providers"]))
    bench.to_csv(paths.benchmarks_csv, index=False)

    print("✅ Benchmark mart written:")
    print(f"- {paths.benchmarks_csv}")


if __name__ == "__main__":
    main()
