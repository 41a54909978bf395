from __future__ import annotations

# Phase A: Streamlit entrypoint
# - Streamlit auto-loads files in app/pages for the multi-page console.
# - This file holds global config and a small landing page.

import bootstrap

bootstrap.add_src_to_path()

import streamlit as st

from bizmetrics.config.settings import settings


def main() -> None:
    # Phase B: App-wide settings (title, layout)
    st.set_page_config(
        page_title="Business Metrics Console",
        layout="wide",
    )

    st.title("Business Metrics Console")

    st.write(
        f"Sales, cost and margin metrics for {settings.COMPANY_NAME}. "
        "Orders come from the hosted sales database; when it can't be reached, every page "
        "keeps working on built-in sample data and says so at the top."
    )

    st.write("What you can do here:")
    st.markdown(
        "- **Dashboard:** Headline numbers and the revenue split by product line.\n"
        "- **Raw Data:** Browse, filter and sort individual orders, and download them.\n"
        "- **Metrics of Interest:** Current vs previous values for the metrics that matter.\n"
        "- **Metrics Graph:** Plot any set of metrics month by month.\n"
        "- **Dynamic Metrics:** Move sliders (efficiency, costs, price, volume) and watch unit economics change.\n"
        "- **Hypothetical Scenarios:** Build product-mix scenarios and compare up to four side by side.\n"
        "- **Monthly Report:** Generate the monthly PDF report.\n"
        "- **AI Assistant:** Ask questions about the data."
    )

    st.info("Use the sidebar to navigate through the pages.")


if __name__ == "__main__":
    main()
