from __future__ import annotations

import pandas as pd
import streamlit as st

from dashboard.benchmarking import default_metrics, metric_value
from dashboard.data_access import load_benchmarks, load_campaigns, records_from_frame
from dashboard.models import MetricKind
from dashboard.ui_utils import METRIC_LABELS, fmt_money, fmt_num, fmt_pct, fmt_ratio

st.title("Campaign History")

df = load_campaigns()
if df.empty:
    st.stop()

# Apply global filters
sel_provider = st.session_state.get("selected_provider")
sel_type = st.session_state.get("selected_type")

if sel_provider:
    df = df[df["provider"] == sel_provider]
if sel_type:
    df = df[df["type"] == sel_type]

records = [r for r in records_from_frame(df) if r.actuals is not None]
if not records:
    st.warning("No completed campaigns after filters.")
    st.stop()

rows = []
for r in records:
    row = {
        "campaign_id": r.campaign_id,
        "name": r.name,
        "provider": r.provider,
        "type": r.type.value,
        "month": r.month,
        "spend": r.actuals.spend,
    }
    for kind in MetricKind:
        row[kind.value] = None
    for kind in default_metrics(r.type):
        row[kind.value] = metric_value(r.actuals, kind, r.type)
    rows.append(row)
hist = pd.DataFrame(rows).sort_values("month", ascending=False)

c1, c2, c3, c4 = st.columns(4)
c1.metric("Campaigns", fmt_num(len(hist)))
c2.metric("Total Spend", fmt_money(hist["spend"].sum()))
c3.metric("Mean CPM (measurable campaigns)", fmt_money(hist["cpm"].mean()))
c4.metric("Mean Engagement Rate (measurable campaigns)", fmt_pct(hist["engagementRate"].mean()))
st.caption(
    "Means above skip campaigns whose metric cannot be computed. "
    "Benchmarks count those campaigns as zero, so they can sit lower."
)

st.markdown("### Completed campaigns (most recent first)")
show = hist.copy()
show["spend"] = show["spend"].map(fmt_money)
show["cpm"] = show["cpm"].map(fmt_money)
show["costPerEngagement"] = show["costPerEngagement"].map(fmt_money)
show["engagementRate"] = show["engagementRate"].map(fmt_pct)
show["roas"] = show["roas"].map(fmt_ratio)
show = show.rename(columns={k.value: METRIC_LABELS[k] for k in MetricKind})
st.dataframe(show, use_container_width=True)

st.markdown("### Spend by provider")
chart_df = hist.groupby("provider", as_index=True)["spend"].sum().sort_values(ascending=False)
st.bar_chart(chart_df)

st.markdown("### Benchmarks by provider")
bench = load_benchmarks()
if bench.empty:
    st.stop()
if sel_type:
    bench = bench[bench["type"] == sel_type]
bench = bench.copy()
bench["cpm"] = bench["cpm"].map(fmt_money)
bench["costPerEngagement"] = bench["costPerEngagement"].map(fmt_money)
bench["engagementRate"] = bench["engagementRate"].map(fmt_pct)
bench["roas"] = bench["roas"].map(fmt_ratio)
bench = bench.rename(columns={k.value: METRIC_LABELS[k] for k in MetricKind})
st.dataframe(bench, use_container_width=True, hide_index=True)
