from __future__ import annotations

import pandas as pd
import streamlit as st

from dashboard.data_access import load_app_settings, load_campaigns
from dashboard.ui_utils import fmt_money, fmt_pct
from dashboard.validators import validate_config

st.title("Budget Tracking")

df = load_campaigns()
if df.empty:
    st.stop()

budget = load_app_settings().get("budget", {})
check = validate_config(budget)
if not check.is_valid:
    st.error("Budget configuration in config/settings.yaml is invalid:")
    for field, message in check.errors.items():
        st.write(f"- **{field}**: {message}")
    st.stop()

year = int(budget.get("year", pd.Timestamp.today().year))
st.caption(f"{budget['fiscal_label']} | calendar year {year}")

months = pd.to_datetime(df["month"], format="%Y-%m", errors="coerce")
d = df[months.dt.year == year].copy()
d["quarter"] = "q" + months[months.dt.year == year].dt.quarter.astype(str)

quarters = ["q1", "q2", "q3", "q4"]
actual = d.groupby("quarter")["spend"].sum().reindex(quarters, fill_value=0.0)
planned = d.groupby("quarter")["plan_spend"].sum().reindex(quarters, fill_value=0.0)

summary = pd.DataFrame({
    "quarter": [q.upper() for q in quarters],
    "budget": [float(budget[q]) for q in quarters],
    "planned": planned.to_numpy(),
    "actual": actual.to_numpy(),
})
summary["remaining"] = summary["budget"] - summary["actual"]
summary["utilisation"] = summary["actual"] / summary["budget"].where(summary["budget"] > 0) * 100

annual = float(budget["annual_budget"])
c1, c2, c3 = st.columns(3)
c1.metric("Annual budget", fmt_money(annual))
c2.metric("Actual spend", fmt_money(summary["actual"].sum()))
c3.metric("Utilisation", fmt_pct(summary["actual"].sum() / annual * 100))

show = summary.copy()
for col in ["budget", "planned", "actual", "remaining"]:
    show[col] = show[col].map(fmt_money)
show["utilisation"] = show["utilisation"].map(fmt_pct)
st.dataframe(show, use_container_width=True, hide_index=True)

over = summary[summary["remaining"] < 0]
if not over.empty:
    st.warning("Over budget in: " + ", ".join(over["quarter"]))

st.markdown("### Budget vs actual by quarter")
st.bar_chart(summary.set_index("quarter")[["budget", "actual"]])
