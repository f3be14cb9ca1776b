from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, IntEnum
from types import MappingProxyType
from typing import Mapping, Optional, Tuple


class CampaignType(str, Enum):
    AWARENESS = "Awareness"
    CONVERSION = "Conversion"


class MetricKind(str, Enum):
    CPM = "cpm"
    COST_PER_ENGAGEMENT = "costPerEngagement"
    ENGAGEMENT_RATE = "engagementRate"
    ROAS = "roas"

    @classmethod
    def _missing_(cls, value):
        # short identifiers used by older exports
        aliases = {"cpe": cls.COST_PER_ENGAGEMENT, "rate": cls.ENGAGEMENT_RATE}
        if isinstance(value, str):
            return aliases.get(value)
        return None


class MetricScore(IntEnum):
    POOR = 1
    FAIR = 2
    GOOD = 3
    EXCELLENT = 4


class RecommendationTier(str, Enum):
    EXCELLENT = "Excellent"
    GOOD = "Good"
    REVIEW = "Review"
    POOR = "Poor"

    @property
    def label(self) -> str:
        return _TIER_LABELS[self]

    @property
    def rank(self) -> int:
        return _TIER_RANKS[self]


_TIER_LABELS: Mapping[RecommendationTier, str] = MappingProxyType({
    RecommendationTier.EXCELLENT: "Excellent Plan",
    RecommendationTier.GOOD: "Good Plan",
    RecommendationTier.REVIEW: "Review Carefully",
    RecommendationTier.POOR: "Consider Alternatives",
})

_TIER_RANKS: Mapping[RecommendationTier, int] = MappingProxyType({
    RecommendationTier.POOR: 1,
    RecommendationTier.REVIEW: 2,
    RecommendationTier.GOOD: 3,
    RecommendationTier.EXCELLENT: 4,
})


@dataclass(frozen=True)
class MetricTraits:
    lower_is_better: bool
    is_engagement: bool


METRIC_TRAITS: Mapping[MetricKind, MetricTraits] = MappingProxyType({
    MetricKind.CPM: MetricTraits(lower_is_better=True, is_engagement=False),
    MetricKind.COST_PER_ENGAGEMENT: MetricTraits(lower_is_better=True, is_engagement=True),
    MetricKind.ENGAGEMENT_RATE: MetricTraits(lower_is_better=False, is_engagement=True),
    MetricKind.ROAS: MetricTraits(lower_is_better=False, is_engagement=False),
})


@dataclass(frozen=True)
class Figures:
    """Numeric block of a campaign, used for both the plan and the actuals.

    Every field is a non-negative number or ``None`` when not recorded.
    """

    spend: Optional[float] = None
    impressions: Optional[float] = None
    clicks: Optional[float] = None
    leads: Optional[float] = None
    sales: Optional[float] = None
    gross_profit: Optional[float] = None

    def engagement(self, campaign_type: CampaignType) -> Optional[float]:
        """Clicks for Awareness campaigns, leads for Conversion campaigns."""
        if CampaignType(campaign_type) is CampaignType.AWARENESS:
            return self.clicks
        return self.leads


@dataclass(frozen=True)
class CampaignRecord:
    type: CampaignType
    actuals: Optional[Figures] = None
    campaign_id: str = ""
    name: str = ""
    provider: str = ""
    month: str = ""
    plan: Optional[Figures] = None


@dataclass(frozen=True)
class MetricAssessment:
    metric: MetricKind
    value: Optional[float]
    benchmark: Optional[float]
    percent_diff: Optional[float]
    score: MetricScore


@dataclass(frozen=True)
class PlanEvaluation:
    campaign_type: CampaignType
    cohort_size: int
    assessments: Tuple[MetricAssessment, ...]
    average_score: float
    tier: RecommendationTier

    def assessment(self, metric: MetricKind) -> Optional[MetricAssessment]:
        metric = MetricKind(metric)
        for a in self.assessments:
            if a.metric is metric:
                return a
        return None
