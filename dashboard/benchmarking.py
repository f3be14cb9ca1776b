"""Benchmarking & decision engine.

Scores a proposed or actual campaign plan against the historical performance
of a cohort and maps the result to a recommendation tier. Every function here
is pure: no I/O, no caching, no module state beyond the constants below.
"""

from __future__ import annotations

import logging
import math
from typing import Iterable, Optional, Sequence, Tuple

from dashboard.models import (
    METRIC_TRAITS,
    CampaignRecord,
    CampaignType,
    Figures,
    MetricAssessment,
    MetricKind,
    MetricScore,
    PlanEvaluation,
    RecommendationTier,
)

logger = logging.getLogger(__name__)

# Deviation (in percent) that counts as significantly better or worse.
PERFORMANCE_THRESHOLD_PERCENT = 15.0
# Engagement metrics vary more naturally, so they get a wider band.
ENGAGEMENT_VARIANCE_PERCENT = 20.0

# Lower bounds of the recommendation tiers, applied to the mean metric score.
SCORE_EXCELLENT = 3.5
SCORE_GOOD = 2.75
SCORE_REVIEW = 2.0

AWARENESS_METRICS: Tuple[MetricKind, ...] = (
    MetricKind.CPM,
    MetricKind.COST_PER_ENGAGEMENT,
    MetricKind.ENGAGEMENT_RATE,
)
CONVERSION_METRICS: Tuple[MetricKind, ...] = AWARENESS_METRICS + (MetricKind.ROAS,)


def _num(x: Optional[float]) -> float:
    return 0.0 if x is None else float(x)


def _absent(benchmark: Optional[float]) -> bool:
    # None, zero and NaN all mean "no comparison available"
    return not benchmark or math.isnan(benchmark)


def metric_value(
    figures: Optional[Figures],
    metric: MetricKind,
    campaign_type: CampaignType,
) -> Optional[float]:
    """Compute one metric for a single set of figures.

    Returns ``None`` when the figures are missing or the metric's
    denominator is missing or zero.
    """
    metric = MetricKind(metric)
    campaign_type = CampaignType(campaign_type)
    if figures is None:
        return None

    if metric is MetricKind.CPM:
        if not figures.impressions:
            return None
        return (_num(figures.spend) / figures.impressions) * 1000

    if metric is MetricKind.COST_PER_ENGAGEMENT:
        engagement = figures.engagement(campaign_type)
        if not engagement:
            return None
        return _num(figures.spend) / engagement

    if metric is MetricKind.ENGAGEMENT_RATE:
        if not figures.impressions:
            return None
        return (_num(figures.engagement(campaign_type)) / figures.impressions) * 100

    # MetricKind.ROAS
    if not figures.spend:
        return None
    return _num(figures.gross_profit) / figures.spend


def average_metric(
    cohort: Sequence[CampaignRecord],
    metric: MetricKind,
    campaign_type: CampaignType,
) -> Optional[float]:
    """Mean of ``metric`` over the actuals of ``cohort``.

    Records whose guard fails (or that have no actuals) contribute zero but
    still count in the denominator. Returns ``None`` for an empty cohort.
    """
    metric = MetricKind(metric)
    campaign_type = CampaignType(campaign_type)
    if not cohort:
        return None

    total = 0.0
    for record in cohort:
        value = metric_value(record.actuals, metric, campaign_type)
        if value is not None:
            total += value
    return total / len(cohort)


def percent_diff(value: float, benchmark: Optional[float]) -> Optional[float]:
    if _absent(benchmark):
        return None
    return ((value - benchmark) / benchmark) * 100


def score_metric(
    value: float,
    benchmark: Optional[float],
    lower_is_better: bool = False,
    is_engagement: bool = False,
) -> MetricScore:
    """Score ``value`` against ``benchmark`` on the 1-4 scale.

    A missing, zero or NaN benchmark scores ``GOOD``. Band edges are inclusive on
    the side nearer zero, so every finite deviation maps to exactly one score.
    """
    if _absent(benchmark):
        return MetricScore.GOOD

    diff = ((value - benchmark) / benchmark) * 100
    threshold = ENGAGEMENT_VARIANCE_PERCENT if is_engagement else PERFORMANCE_THRESHOLD_PERCENT

    if lower_is_better:
        if diff <= -threshold:
            return MetricScore.EXCELLENT
        if diff <= 0:
            return MetricScore.GOOD
        if diff <= threshold:
            return MetricScore.FAIR
        return MetricScore.POOR

    if diff >= threshold:
        return MetricScore.EXCELLENT
    if diff >= 0:
        return MetricScore.GOOD
    if diff >= -threshold:
        return MetricScore.FAIR
    return MetricScore.POOR


def recommend(average_score: float) -> RecommendationTier:
    if average_score >= SCORE_EXCELLENT:
        return RecommendationTier.EXCELLENT
    if average_score >= SCORE_GOOD:
        return RecommendationTier.GOOD
    if average_score >= SCORE_REVIEW:
        return RecommendationTier.REVIEW
    return RecommendationTier.POOR


def default_metrics(campaign_type: CampaignType) -> Tuple[MetricKind, ...]:
    if CampaignType(campaign_type) is CampaignType.CONVERSION:
        return CONVERSION_METRICS
    return AWARENESS_METRICS


def evaluate_plan(
    plan: Figures,
    cohort: Sequence[CampaignRecord],
    campaign_type: CampaignType,
    metrics: Optional[Iterable[MetricKind]] = None,
) -> PlanEvaluation:
    """Benchmark every tracked metric of ``plan`` and recommend a tier.

    Metrics whose plan value cannot be computed score ``GOOD``, the same
    neutral score a missing benchmark gets.
    """
    campaign_type = CampaignType(campaign_type)
    kinds = default_metrics(campaign_type) if metrics is None else tuple(MetricKind(m) for m in metrics)

    assessments = []
    for kind in kinds:
        traits = METRIC_TRAITS[kind]
        value = metric_value(plan, kind, campaign_type)
        benchmark = average_metric(cohort, kind, campaign_type)
        if value is None:
            score = MetricScore.GOOD
            diff = None
        else:
            score = score_metric(value, benchmark, traits.lower_is_better, traits.is_engagement)
            diff = percent_diff(value, benchmark)
        assessments.append(MetricAssessment(kind, value, benchmark, diff, score))

    if assessments:
        average = sum(int(a.score) for a in assessments) / len(assessments)
    else:
        average = float(MetricScore.GOOD)
    tier = recommend(average)

    logger.debug(
        "Evaluated %s plan against %d records: average score %.2f -> %s",
        campaign_type.value, len(cohort), average, tier.value,
    )
    return PlanEvaluation(
        campaign_type=campaign_type,
        cohort_size=len(cohort),
        assessments=tuple(assessments),
        average_score=average,
        tier=tier,
    )
