from __future__ import annotations

import streamlit as st

st.title("Home / Context")

st.markdown(
    """
### Why raw partner numbers are misleading
- A campaign's spend, impressions and clicks mean little **on their own**.
- Partners price and deliver differently: a CPM that is cheap on one site is expensive on another.
- Awareness and Conversion campaigns chase **different outcomes** (clicks vs. leads), so they are never mixed.

### Why benchmarking is required
Benchmarking compares a plan against:
- **Comparable past campaigns** (same type, optionally same provider)
- on **cost** metrics (CPM, cost per engagement) and **return** metrics (engagement rate, ROAS)

This answers the question: *is this plan better or worse than what we usually get?*

### What decisions this enables
- Sign off, renegotiate, or skip a partner plan based on **evidence**, not on the partner's pitch deck.
"""
)

st.warning(
    "Portfolio note: If you are using synthetic data, results are illustrative. "
    "The scoring rules and pipeline design are the deliverable."
)
