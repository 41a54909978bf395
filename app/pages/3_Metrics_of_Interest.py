from __future__ import annotations

# Phase A: Metrics of Interest goal
# - Current vs previous value for the metrics derived from sales rows.
# - Search + category filter; sample metrics when the store has nothing.

import bootstrap

bootstrap.add_src_to_path()

import streamlit as st

from bizmetrics.formatting.formatters import format_metric_value, format_percentage_change
from bizmetrics.sales.loader import SalesLoad, load_sales_rows
from bizmetrics.sales.mapping import METRIC_CATEGORIES, filter_metrics, sales_to_metrics
from bizmetrics.sales.samples import sample_metrics
from bizmetrics.store.supabase_client import SupabaseStore

st.set_page_config(page_title="Business Metrics Console", layout="wide")

CARDS_PER_ROW = 3


@st.cache_data(ttl=300)
def load_rows() -> SalesLoad:
    return load_sales_rows(SupabaseStore())


def main() -> None:
    st.title("Metrics of Interest")

    if st.button("Refresh"):
        load_rows.clear()

    # Phase B: Pick the metric source
    loaded = load_rows()
    if loaded.rows:
        metrics = sales_to_metrics(loaded.rows)
        if loaded.error:
            st.warning(f"Database unavailable ({loaded.error}). Showing the last local snapshot.")
    elif loaded.error:
        st.error(f"Failed to load metrics: {loaded.error}")
        st.caption("Using fallback data for demonstration purposes.")
        metrics = sample_metrics()
    else:
        st.info("No metrics found in database. Using sample data.")
        metrics = sample_metrics()

    # Phase C: Filters
    c1, c2 = st.columns([3, 1])
    search = c1.text_input("Search metrics", placeholder="e.g. revenue")
    category = c2.selectbox("Category", ["all", *METRIC_CATEGORIES])

    shown = filter_metrics(metrics, search, category)
    if not shown:
        st.info("No metrics match the current filters.")
        return

    # Phase D: Metric cards
    for start in range(0, len(shown), CARDS_PER_ROW):
        cols = st.columns(CARDS_PER_ROW)
        for col, m in zip(cols, shown[start : start + CARDS_PER_ROW]):
            col.metric(
                m.name,
                format_metric_value(m.value, m.unit),
                delta=format_percentage_change(m.change),
                help=f"{m.description}. Previous: {format_metric_value(m.previous_value, m.unit)}",
            )
            col.caption(m.category)


if __name__ == "__main__":
    main()
