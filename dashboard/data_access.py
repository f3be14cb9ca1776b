from __future__ import annotations

import logging
from typing import Iterable, List, Optional

import pandas as pd
import streamlit as st

from dashboard.models import CampaignRecord, CampaignType, Figures
from dashboard.settings import DataPaths, load_settings

logger = logging.getLogger(__name__)

FIGURE_FIELDS = ("spend", "impressions", "clicks", "leads", "sales", "gross_profit")
PLAN_FIELDS = ("spend", "impressions", "clicks", "leads")
ACTUAL_COLUMNS = list(FIGURE_FIELDS)
PLAN_COLUMNS = [f"plan_{f}" for f in PLAN_FIELDS]
CAMPAIGN_COLUMNS = ["campaign_id", "name", "provider", "type", "month"] + PLAN_COLUMNS + ACTUAL_COLUMNS


def _missing_hint() -> str:
    return (
        "Required data not found. Run the pipeline from the project root:\n"
        "1) python scripts/run_all.py\n"
        "2) streamlit run dashboard/app.py\n"
    )


def _cell(row: dict, column: str) -> Optional[float]:
    v = row.get(column)
    if v is None or pd.isna(v):
        return None
    return float(v)


def _figures(row: dict, columns: Iterable[str], fields: Iterable[str]) -> Optional[Figures]:
    values = {f: _cell(row, c) for c, f in zip(columns, fields)}
    if all(v is None for v in values.values()):
        return None
    return Figures(**values)


def _text(row: dict, column: str) -> str:
    v = row.get(column)
    if v is None or (isinstance(v, float) and pd.isna(v)):
        return ""
    return str(v)


def records_from_frame(df: pd.DataFrame) -> List[CampaignRecord]:
    """Convert a campaign table into ``CampaignRecord`` objects.

    Rows with an unknown campaign type are dropped with a warning.
    """
    records: List[CampaignRecord] = []
    for row in df.to_dict("records"):
        try:
            ctype = CampaignType(row.get("type"))
        except ValueError:
            logger.warning("Skipping campaign %r with unknown type %r", row.get("campaign_id"), row.get("type"))
            continue
        records.append(CampaignRecord(
            type=ctype,
            actuals=_figures(row, ACTUAL_COLUMNS, FIGURE_FIELDS),
            campaign_id=_text(row, "campaign_id"),
            name=_text(row, "name"),
            provider=_text(row, "provider"),
            month=_text(row, "month"),
            plan=_figures(row, PLAN_COLUMNS, PLAN_FIELDS),
        ))
    return records


def select_cohort(
    records: Iterable[CampaignRecord],
    campaign_type: CampaignType,
    provider: Optional[str] = None,
) -> List[CampaignRecord]:
    """Historical records of one type (and optionally one provider) that have actuals."""
    campaign_type = CampaignType(campaign_type)
    return [
        r for r in records
        if r.type is campaign_type
        and r.actuals is not None
        and (provider is None or r.provider == provider)
    ]


@st.cache_data(show_spinner=False)
def load_app_settings() -> dict:
    return load_settings()


@st.cache_data(show_spinner=False)
def load_campaigns() -> pd.DataFrame:
    p = DataPaths.default().campaigns_csv
    if not p.exists():
        st.error(_missing_hint())
        return pd.DataFrame(columns=CAMPAIGN_COLUMNS)
    df = pd.read_csv(p, dtype={"campaign_id": str, "month": str})
    logger.info("Loaded %d campaigns from %s", len(df), p)
    return df


@st.cache_data(show_spinner=False)
def load_benchmarks() -> pd.DataFrame:
    p = DataPaths.default().benchmarks_csv
    if not p.exists():
        st.error(_missing_hint())
        return pd.DataFrame()
    return pd.read_csv(p)
