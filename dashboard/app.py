from __future__ import annotations

import sys
from pathlib import Path
import streamlit as st

# Make imports stable regardless of where Streamlit is launched
PROJECT_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(PROJECT_ROOT))

from dashboard.data_access import load_app_settings, load_campaigns  # noqa: E402
from dashboard.settings import configure_logging  # noqa: E402


st.set_page_config(
    page_title="Partner Campaign Tracker",
    layout="wide",
)

configure_logging(load_app_settings())

st.title("Partner Campaign Tracker")
st.caption("Plan vs. history | Benchmark-first | Decision-first")

df = load_campaigns()
if df.empty:
    st.stop()

# Global filters (used implicitly by pages via Streamlit session state)
st.sidebar.header("Global Filters")
providers = ["All"] + sorted(df["provider"].dropna().unique().tolist())
prov = st.sidebar.selectbox("Provider", providers, index=0)
st.session_state["selected_provider"] = None if prov == "All" else prov

types = ["All"] + sorted(df["type"].dropna().unique().tolist())
ct = st.sidebar.selectbox("Campaign type", types, index=0)
st.session_state["selected_type"] = None if ct == "All" else ct

st.sidebar.markdown("---")
st.sidebar.write("Pipeline quick start:")
st.sidebar.code("python scripts/run_all.py\nstreamlit run dashboard/app.py", language="bash")

st.markdown(
    """
This app reads **campaign history** and **pre-computed benchmark marts** and shows decision-relevant views:
- **Campaign History:** what each partner campaign actually delivered
- **Plan Benchmarking:** score a proposed plan against comparable past campaigns
- **Budget Tracking:** spend against the fiscal budget, quarter by quarter
- **Definitions:** formulas, thresholds, limitations
"""
)

st.info("Use the left sidebar to set global filters, then navigate using the Streamlit pages menu.")
