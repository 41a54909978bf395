from __future__ import annotations

# Phase A: Metrics Graph goal
# - Pick any metrics from the catalogue and plot them month by month.

import bootstrap

bootstrap.add_src_to_path()

import altair as alt
import streamlit as st

from bizmetrics.sales.samples import METRIC_CATALOGUE, MONTH_LABELS, monthly_series

st.set_page_config(page_title="Business Metrics Console", layout="wide")


def main() -> None:
    st.title("Metrics Graph")

    # Phase B: Metric pickers, one per category
    selected: list[str] = []
    with st.sidebar:
        st.subheader("Metrics")
        for category, names in METRIC_CATALOGUE.items():
            with st.expander(category):
                selected += st.multiselect(category, names, key=f"graph_{category}", label_visibility="collapsed")

    if not selected:
        st.info("Select one or more metrics in the sidebar to plot them.")
        return

    # Phase C: Long-format series + line chart
    df = monthly_series(selected)

    nearest = alt.selection_point(fields=["month", "metric"], nearest=True, on="mouseover", empty=False)
    base = alt.Chart(df).encode(
        x=alt.X("month:N", title=None, sort=MONTH_LABELS, axis=alt.Axis(labelAngle=0)),
        y=alt.Y("value:Q", title="Value", axis=alt.Axis(format=",.0f", tickCount=6)),
        color=alt.Color("metric:N", title=None, legend=alt.Legend(orient="top")),
    )
    lines = base.mark_line(point=True).encode(
        tooltip=[
            alt.Tooltip("month:N", title="Month"),
            alt.Tooltip("metric:N", title="Metric"),
            alt.Tooltip("value:Q", title="Value", format=",.0f"),
        ]
    )
    hover_points = base.mark_point(opacity=0).add_params(nearest)

    st.altair_chart((lines + hover_points).properties(height=420), use_container_width=True)
    st.caption("Monthly values are demo data until the metrics history table is populated.")


if __name__ == "__main__":
    main()
