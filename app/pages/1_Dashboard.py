from __future__ import annotations

# Phase A: Dashboard goal
# - Headline KPIs for the month plus the revenue split by product line.
# - Cost metrics table with a simple trend marker.

import bootstrap

bootstrap.add_src_to_path()

import altair as alt
import pandas as pd
import streamlit as st

from bizmetrics.formatting.formatters import format_currency, format_number
from bizmetrics.sales.samples import DASHBOARD_STATS, sample_metrics

st.set_page_config(page_title="Business Metrics Console", layout="wide")

TREND_LABELS = {"up": "↑ Up", "down": "↓ Down", "stable": "→ Stable"}


def main() -> None:
    st.title("Dashboard")

    stats = DASHBOARD_STATS

    # Phase B: KPI cards
    c1, c2, c3, c4 = st.columns(4)
    c1.metric("Total Orders", format_number(stats["total_orders"]))
    c2.metric("Total Revenue", format_currency(stats["total_revenue"]))
    c3.metric("Avg. Order Value", format_currency(stats["avg_order_value"]))
    c4.metric("Production Efficiency", f"{stats['production_efficiency']}%")

    left, right = st.columns(2)

    # Phase C: Revenue distribution by product line
    with left:
        st.subheader("Revenue Distribution")
        lines = [m for m in sample_metrics() if m.category == "Product Lines"]
        dist = pd.DataFrame(
            {"product_line": [m.name.replace(" Revenue", "") for m in lines], "revenue": [m.value for m in lines]}
        )
        chart = (
            alt.Chart(dist)
            .mark_bar()
            .encode(
                x=alt.X("revenue:Q", title="Revenue", axis=alt.Axis(format="$,.0f")),
                y=alt.Y("product_line:N", title=None, sort="-x"),
                tooltip=[
                    alt.Tooltip("product_line:N", title="Product line"),
                    alt.Tooltip("revenue:Q", title="Revenue", format="$,.0f"),
                ],
            )
            .properties(height=220)
        )
        st.altair_chart(chart, use_container_width=True)

    # Phase D: Recent cost metrics
    with right:
        st.subheader("Recent Metrics")
        table = pd.DataFrame(stats["recent_metrics"])
        table["trend"] = table["trend"].map(TREND_LABELS)
        table.columns = ["Metric", "Value", "Trend"]
        st.dataframe(table, hide_index=True, width="stretch")

    st.caption("Figures are the latest monthly close. Use the sidebar pages to drill in.")


if __name__ == "__main__":
    main()
