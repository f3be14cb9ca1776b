from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping, Optional

import numpy as np

from dashboard.models import MetricKind, MetricScore, RecommendationTier


def _missing(x: Optional[float]) -> bool:
    return x is None or (isinstance(x, float) and np.isnan(x))


def fmt_pct(x: Optional[float]) -> str:
    # x is already a percentage (e.g. 12.5 -> "12.50%")
    if _missing(x):
        return "—"
    return f"{x:.2f}%"


def fmt_signed_pct(x: Optional[float]) -> str:
    if _missing(x):
        return "—"
    return f"{x:+.1f}%"


def fmt_num(x: Optional[float]) -> str:
    if _missing(x):
        return "—"
    return f"{x:,.0f}"


def fmt_money(x: Optional[float]) -> str:
    if _missing(x):
        return "—"
    return f"£{x:,.2f}"


def fmt_ratio(x: Optional[float]) -> str:
    if _missing(x):
        return "—"
    return f"{x:.2f}x"


@dataclass(frozen=True)
class RecommendationStyle:
    label: str
    color: str
    icon: str


RECOMMENDATION_STYLES: Mapping[RecommendationTier, RecommendationStyle] = MappingProxyType({
    RecommendationTier.EXCELLENT: RecommendationStyle(RecommendationTier.EXCELLENT.label, "#065f46", "✅"),
    RecommendationTier.GOOD: RecommendationStyle(RecommendationTier.GOOD.label, "#166534", "✔️"),
    RecommendationTier.REVIEW: RecommendationStyle(RecommendationTier.REVIEW.label, "#92400e", "⚠️"),
    RecommendationTier.POOR: RecommendationStyle(RecommendationTier.POOR.label, "#991b1b", "⛔"),
})

METRIC_LABELS: Mapping[MetricKind, str] = MappingProxyType({
    MetricKind.CPM: "CPM",
    MetricKind.COST_PER_ENGAGEMENT: "Cost per engagement",
    MetricKind.ENGAGEMENT_RATE: "Engagement rate",
    MetricKind.ROAS: "ROAS",
})


def recommendation_style(tier: RecommendationTier) -> RecommendationStyle:
    return RECOMMENDATION_STYLES[RecommendationTier(tier)]


def score_label(score: MetricScore) -> str:
    return MetricScore(score).name.title()


def fmt_metric(metric: MetricKind, x: Optional[float]) -> str:
    metric = MetricKind(metric)
    if metric is MetricKind.ENGAGEMENT_RATE:
        return fmt_pct(x)
    if metric is MetricKind.ROAS:
        return fmt_ratio(x)
    return fmt_money(x)
