"""Shared pytest fixtures and record factories."""

from __future__ import annotations

import pytest

from dashboard.models import CampaignRecord, CampaignType, Figures


def make_record(
    type: CampaignType = CampaignType.AWARENESS,
    provider: str = "Carwow",
    month: str = "2024-03",
    campaign_id: str = "P0001",
    **actuals,
) -> CampaignRecord:
    """Build a ``CampaignRecord``; keyword figures become its actuals."""
    return CampaignRecord(
        type=type,
        actuals=Figures(**actuals) if actuals else None,
        campaign_id=campaign_id,
        name=f"{provider} {type.value}",
        provider=provider,
        month=month,
    )


@pytest.fixture
def carwow_awareness_cohort() -> list:
    return [
        make_record(spend=1000, impressions=100000, clicks=2000),
        make_record(spend=1200, impressions=110000, clicks=2100, campaign_id="P0002"),
    ]


@pytest.fixture
def conversion_cohort() -> list:
    return [
        make_record(CampaignType.CONVERSION, spend=2000, impressions=50000, leads=200, sales=10, gross_profit=8000),
        make_record(CampaignType.CONVERSION, spend=4000, impressions=80000, leads=250, sales=12, gross_profit=10000,
                    campaign_id="P0002"),
    ]
