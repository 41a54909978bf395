from __future__ import annotations

# Phase A: Raw Data goal
# - Page through individual orders from the sales database.
# - Filtering, sorting and paging run in the store; on failure the same
#   operations run locally on sample orders.

import bootstrap

bootstrap.add_src_to_path()

import streamlit as st

from bizmetrics.config.settings import settings
from bizmetrics.errors import DataStoreError
from bizmetrics.formatting.formatters import format_currency
from bizmetrics.sales.loader import fetch_orders_page
from bizmetrics.sales.mapping import (
    FIELD_TO_COLUMN,
    STATUSES,
    clamp_page,
    filter_sort_page,
    orders_frame,
    page_totals,
)
from bizmetrics.sales.samples import SAMPLE_ORDERS
from bizmetrics.store.supabase_client import SupabaseStore

st.set_page_config(page_title="Business Metrics Console", layout="wide")

SORT_LABELS = {
    "created_at": "Date",
    "id": "Order ID",
    "customer_name": "Customer",
    "product_name": "Product",
    "quantity": "Quantity",
    "price": "Price",
    "total": "Total",
    "status": "Status",
}


PAGE_KEY = "raw_data_page"


def reset_page() -> None:
    st.session_state[PAGE_KEY] = 1


@st.cache_resource
def get_store() -> SupabaseStore:
    return SupabaseStore()


@st.cache_data(ttl=60)
def connection_status() -> dict:
    # Phase B: One-row connection check, shown in the expander below
    return get_store().check_connection(settings.SALES_TABLE)


def main() -> None:
    st.title("Raw Data")

    status = connection_status()
    with st.expander("Database connection", expanded=not status["success"]):
        if status["success"]:
            st.success(f"Connected to {status['url']} ({status['latency_ms']:.0f} ms)")
        else:
            st.error(f"Connection failed: {status['error']}")

    # Phase C: Controls
    c1, c2, c3 = st.columns([2, 2, 1])
    status_filter = c1.selectbox(
        "Status", STATUSES, format_func=str.capitalize, on_change=reset_page
    )
    sort_field = c2.selectbox(
        "Sort by",
        list(FIELD_TO_COLUMN),
        format_func=lambda f: SORT_LABELS[f],
        on_change=reset_page,
    )
    ascending = c3.toggle("Ascending", value=False, on_change=reset_page)

    page = int(st.session_state.get(PAGE_KEY, 1))

    # Phase D: Query the store; fall back to sample orders on failure
    try:
        orders, total, pages = fetch_orders_page(
            get_store(), status_filter, sort_field, ascending, page, settings.PAGE_SIZE
        )
    except DataStoreError as exc:
        st.error(f"Failed to load orders: {exc}")
        st.caption("Using fallback data for demonstration purposes.")
        orders, total, pages = filter_sort_page(
            SAMPLE_ORDERS, status_filter, sort_field, ascending, page, settings.PAGE_SIZE
        )

    # A filter that shrinks the result set leaves the stored page past the end
    page = clamp_page(page, pages)
    st.session_state[PAGE_KEY] = page

    # Phase E: Table + download
    table_df = orders_frame(orders)
    csv = table_df.to_csv(index=False).encode("utf-8")
    for col in ("price", "total"):
        table_df[col] = table_df[col].map(lambda v: format_currency(v, 2))
    table_df = table_df.rename(columns=SORT_LABELS)
    st.dataframe(table_df, hide_index=True, width="stretch")
    page_sum, page_avg = page_totals(orders)
    st.caption(
        f"Page total {format_currency(page_sum, 2)} · "
        f"average order {format_currency(page_avg, 2)}"
    )

    st.download_button(
        label="Download CSV",
        data=csv,
        file_name=f"orders_page_{page}.csv",
        mime="text/csv",
    )

    # Phase F: Pager
    p1, p2, p3 = st.columns([1, 3, 1])
    if p1.button("Previous", disabled=page <= 1):
        st.session_state[PAGE_KEY] = page - 1
        st.rerun()
    p2.caption(f"Page {page} of {max(pages, 1)} · {total:,} orders")
    if p3.button("Next", disabled=page >= max(pages, 1)):
        st.session_state[PAGE_KEY] = page + 1
        st.rerun()


if __name__ == "__main__":
    main()
