from __future__ import annotations

# Phase A: Monthly Report goal
# - Pick month/year and sections; build a PDF report for download.
# - Metrics and products come from sales rows when available, sample figures otherwise.

import bootstrap

bootstrap.add_src_to_path()

import datetime as dt

import pandas as pd
import streamlit as st

from bizmetrics.reports.monthly import (
    MONTHS,
    YEARS,
    MonthlyReport,
    build_report_data,
    report_metrics_from,
    report_products_from,
)
from bizmetrics.reports.pdf import render_report_pdf
from bizmetrics.sales.loader import SalesLoad, load_sales_rows
from bizmetrics.sales.mapping import product_summary, sales_to_metrics
from bizmetrics.store.supabase_client import SupabaseStore

st.set_page_config(page_title="Business Metrics Console", layout="wide")


@st.cache_data(ttl=300)
def load_rows() -> SalesLoad:
    return load_sales_rows(SupabaseStore())


@st.cache_data
def build_pdf(report_dict: dict) -> bytes:
    # Cache key is the plain-dict form of the report
    return render_report_pdf(MonthlyReport.from_dict(report_dict))


def main() -> None:
    st.title("Monthly Report")

    # Phase B: Report options
    today = dt.date.today()
    c1, c2 = st.columns(2)
    month = c1.selectbox("Month", MONTHS, index=today.month - 1)
    year_default = str(today.year) if str(today.year) in YEARS else YEARS[-1]
    year = c2.selectbox("Year", YEARS, index=YEARS.index(year_default))

    st.markdown("**Include in report**")
    o1, o2, o3 = st.columns(3)
    include_summary = o1.checkbox("Executive summary", value=True)
    include_graphs = o2.checkbox("Graphs", value=True)
    include_raw = o3.checkbox("Raw data", value=True)

    # Phase C: Report data (sales-derived or sample)
    loaded = load_rows()
    metrics = products = None
    if loaded.rows:
        metrics = report_metrics_from(sales_to_metrics(loaded.rows))
        products = report_products_from(product_summary(loaded.rows))
        st.caption(f"Figures from sales data ({loaded.source}).")
    else:
        st.caption("No sales data available. The report uses sample figures.")

    report = build_report_data(
        month,
        year,
        include_graphs=include_graphs,
        include_raw_data=include_raw,
        include_executive_summary=include_summary,
        metrics=metrics,
        products=products,
    )

    # Phase D: Preview
    if report.include_executive_summary:
        st.subheader("Executive Summary")
        st.write(report.executive_summary)

    st.subheader("Key Metrics")
    st.dataframe(
        pd.DataFrame([m.__dict__ for m in report.metrics]).rename(
            columns={"name": "Metric", "value": "Value", "change": "Change"}
        ),
        width="stretch",
        hide_index=True,
    )

    if report.include_raw_data:
        st.subheader("Product Performance")
        st.dataframe(
            pd.DataFrame([p.__dict__ for p in report.products]).rename(
                columns={
                    "name": "Product",
                    "revenue": "Revenue",
                    "units": "Units",
                    "avg_price": "Avg. Price",
                }
            ),
            width="stretch",
            hide_index=True,
        )

    # Phase E: PDF download
    pdf = build_pdf(report.to_dict())
    st.download_button(
        "Download PDF",
        data=pdf,
        file_name=f"monthly_report_{month}_{year}.pdf",
        mime="application/pdf",
    )


if __name__ == "__main__":
    main()
