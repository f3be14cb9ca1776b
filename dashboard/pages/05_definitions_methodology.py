from __future__ import annotations

import streamlit as st

from dashboard.benchmarking import (
    ENGAGEMENT_VARIANCE_PERCENT,
    PERFORMANCE_THRESHOLD_PERCENT,
    SCORE_EXCELLENT,
    SCORE_GOOD,
    SCORE_REVIEW,
)

st.title("Definitions & Methodology")

st.markdown(
    rf"""
### Key definitions
- **Engagement** = clicks for Awareness campaigns, leads for Conversion campaigns
- **Cohort** = completed campaigns of the same type (same provider, unless "all providers" is chosen)
- **Benchmark** = cohort mean of a metric

### Metric formulas
- **CPM = spend / impressions × 1000** (lower is better)
- **Cost per engagement = spend / engagement** (lower is better)
- **Engagement rate = engagement / impressions × 100** (higher is better)
- **ROAS = gross profit / spend** (higher is better, Conversion only)

### Scoring
Each metric is scored 1–4 from its difference to the benchmark:
- Excellent (4): at least {PERFORMANCE_THRESHOLD_PERCENT:.0f}% better ({ENGAGEMENT_VARIANCE_PERCENT:.0f}% for engagement metrics)
- Good (3): level with or better than the benchmark
- Fair (2): worse, but within the threshold
- Poor (1): worse by more than the threshold

No benchmark (empty cohort, zero or undefined mean) scores Good: missing history neither rewards nor penalises a plan.

### Recommendation
Average of the metric scores:
- **≥ {SCORE_EXCELLENT}** Excellent Plan
- **≥ {SCORE_GOOD}** Good Plan
- **≥ {SCORE_REVIEW}** Review Carefully
- below that: Consider Alternatives

### Known limitations
- A campaign whose metric cannot be computed (e.g. zero impressions) counts as **zero** in the benchmark mean,
  which drags the benchmark down when history is sparse.
- A campaign with a missing spend (or, for ROAS, missing gross profit) counts that figure as **zero**.
- Benchmarks are plain means: a single outlier campaign moves them.
"""
)

st.info("If you swap synthetic data for real data, keep the same columns and definitions to preserve comparability.")
