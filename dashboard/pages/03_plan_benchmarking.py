from __future__ import annotations

import logging

import pandas as pd
import streamlit as st

from dashboard.benchmarking import evaluate_plan
from dashboard.data_access import load_app_settings, load_campaigns, records_from_frame, select_cohort
from dashboard.models import CampaignType, Figures
from dashboard.ui_utils import METRIC_LABELS, fmt_metric, fmt_signed_pct, recommendation_style, score_label
from dashboard.validators import (
    ALLOWED_DOMAINS,
    VALID_PROVIDERS,
    is_allowed_domain,
    is_valid_email,
    sanitize_campaign,
    validate_campaign,
)

logger = logging.getLogger(__name__)

st.title("Plan Benchmarking")

df = load_campaigns()
if df.empty:
    st.stop()

catalog = load_app_settings().get("catalog", {})
providers = catalog.get("providers") or list(VALID_PROVIDERS)
allowed_domains = catalog.get("allowed_email_domains") or list(ALLOWED_DOMAINS)

default_provider = st.session_state.get("selected_provider")
default_type = st.session_state.get("selected_type") or CampaignType.AWARENESS.value
type_options = [t.value for t in CampaignType]

st.markdown("### Proposed plan")
with st.form("plan_form"):
    c1, c2, c3 = st.columns(3)
    name = c1.text_input("Campaign name")
    provider = c2.selectbox(
        "Provider", providers,
        index=providers.index(default_provider) if default_provider in providers else 0,
    )
    ctype = c3.selectbox("Type", type_options, index=type_options.index(default_type))

    c4, c5 = st.columns(2)
    month = c4.text_input("Month (YYYY-MM)")
    owner = c5.text_input("Owner email")

    c6, c7, c8 = st.columns(3)
    spend = c6.number_input("Planned spend (£)", min_value=0.0, step=500.0)
    impressions = c7.number_input("Planned impressions", min_value=0, step=1000)
    engagement = c8.number_input("Planned clicks / leads", min_value=0, step=10)

    gross_profit = st.number_input(
        "Expected gross profit (£, Conversion only)", min_value=0.0, step=500.0,
    )
    compare_all = st.checkbox("Compare against all providers", value=False)
    submitted = st.form_submit_button("Benchmark plan")

if not submitted:
    st.info("Fill in the plan and press **Benchmark plan**.")
    st.stop()

engagement_field = "clicks" if ctype == CampaignType.AWARENESS.value else "leads"
form = sanitize_campaign({
    "name": name,
    "provider": provider,
    "type": ctype,
    "month": month,
    "plan": {"spend": float(spend), "impressions": int(impressions), engagement_field: int(engagement)},
})
result = validate_campaign(form, providers=providers)

if owner and not is_valid_email(owner):
    result.errors["owner"] = "Invalid email address"
elif owner and not is_allowed_domain(owner, allowed_domains):
    result.errors["owner"] = "Owner must use a company email address"

if not result.is_valid:
    for field, message in result.errors.items():
        st.error(f"**{field}**: {message}")
    st.stop()

campaign_type = CampaignType(form["type"])
plan = Figures(
    spend=float(spend),
    impressions=float(impressions),
    clicks=float(engagement) if campaign_type is CampaignType.AWARENESS else None,
    leads=float(engagement) if campaign_type is CampaignType.CONVERSION else None,
    gross_profit=float(gross_profit) if campaign_type is CampaignType.CONVERSION else None,
)

records = records_from_frame(df)
cohort = select_cohort(records, campaign_type, provider=None if compare_all else form["provider"])
evaluation = evaluate_plan(plan, cohort, campaign_type)
logger.info("Benchmarked plan %r: %s", form["name"], evaluation.tier.value)

style = recommendation_style(evaluation.tier)
st.markdown(
    f"### {style.icon} <span style='color:{style.color}'>{style.label}</span>",
    unsafe_allow_html=True,
)
st.write(f"**Average score:** {evaluation.average_score:.2f} / 4")
st.caption(
    f"Compared against {evaluation.cohort_size} completed {campaign_type.value} campaign(s)"
    + ("" if compare_all else f" with {form['provider']}") + "."
)
if evaluation.cohort_size == 0:
    st.warning("No comparable history: every metric scores neutral (Good).")

table = pd.DataFrame([
    {
        "Metric": METRIC_LABELS[a.metric],
        "Plan": fmt_metric(a.metric, a.value),
        "Benchmark": fmt_metric(a.metric, a.benchmark),
        "Difference": fmt_signed_pct(a.percent_diff),
        "Score": f"{int(a.score)} ({score_label(a.score)})",
    }
    for a in evaluation.assessments
])
st.markdown("### Metric breakdown")
st.dataframe(table, use_container_width=True, hide_index=True)
