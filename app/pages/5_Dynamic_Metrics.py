from __future__ import annotations

# Phase A: Dynamic Metrics goal
# - Sliders for a single-product configuration; unit economics recompute on every move.
# - Two sensitivity sweeps: monthly profit vs efficiency and vs selling price.
# - Presets: load a known configuration or save the current one.

import bootstrap

bootstrap.add_src_to_path()

import altair as alt
import pandas as pd
import streamlit as st

from bizmetrics.calc.metrics import ProductInputs, calculate_metrics, calculate_product_metrics
from bizmetrics.calc.series import EFFICIENCY_SWEEP, PRICE_SWEEP, sweep, sweep_frame
from bizmetrics.errors import DataStoreError
from bizmetrics.formatting.formatters import format_currency, format_metric_value
from bizmetrics.scenarios.presets import (
    default_parameters,
    default_presets,
    fetch_saved_presets,
    load_preset,
    save_preset,
    update_parameter,
)
from bizmetrics.store.supabase_client import SupabaseStore

st.set_page_config(page_title="Business Metrics Console", layout="wide")

PARAMS_KEY = "dynamic_parameters"
PRESETS_KEY = "dynamic_presets"
ERROR_KEY = "dynamic_error"


@st.cache_resource
def get_store() -> SupabaseStore:
    return SupabaseStore()


def init_state() -> None:
    # Phase B: Parameters + presets live in session state across reruns
    if PARAMS_KEY in st.session_state:
        return
    params = default_parameters()
    presets = default_presets(params)
    try:
        presets += fetch_saved_presets(get_store())
        st.session_state[ERROR_KEY] = None
    except DataStoreError as exc:
        st.session_state[ERROR_KEY] = f"Failed to load data: {exc}"
    st.session_state[PARAMS_KEY] = params
    st.session_state[PRESETS_KEY] = presets


def _on_preset_change() -> None:
    name = st.session_state.get("preset_choice")
    for preset in st.session_state[PRESETS_KEY]:
        if preset.name == name:
            st.session_state[PARAMS_KEY] = load_preset(preset)
            for p in preset.parameters:
                st.session_state[f"param_{p.id}"] = float(p.value)


def sweep_chart(df: pd.DataFrame, x_title: str, x_format: str, chart_type: str) -> alt.Chart:
    base = alt.Chart(df).encode(
        x=alt.X("x:O", title=x_title, axis=alt.Axis(labelAngle=0, format=x_format)),
        y=alt.Y("value:Q", title="Monthly profit", axis=alt.Axis(format="$,.0f")),
        tooltip=[
            alt.Tooltip("x:O", title=x_title),
            alt.Tooltip("value:Q", title="Monthly profit", format="$,.0f"),
        ],
    )
    mark = base.mark_line(point=True) if chart_type == "Line" else base.mark_bar()
    return mark.properties(height=300)


def main() -> None:
    st.title("Dynamic Metrics")
    init_state()

    if st.session_state.get(ERROR_KEY):
        st.error(st.session_state[ERROR_KEY])
        st.caption("Using fallback data for demonstration purposes.")

    # Phase C: Presets
    presets = st.session_state[PRESETS_KEY]
    c1, c2, c3 = st.columns([2, 2, 1])
    c1.selectbox(
        "Load preset",
        [p.name for p in presets],
        index=None,
        placeholder="Load Preset",
        key="preset_choice",
        on_change=_on_preset_change,
    )
    preset_name = c2.text_input("Preset name", placeholder="Name this configuration")
    if c3.button("Save preset", disabled=not preset_name.strip()):
        updated, error = save_preset(
            get_store(), preset_name, st.session_state[PARAMS_KEY], presets
        )
        st.session_state[PRESETS_KEY] = updated
        st.session_state[ERROR_KEY] = error
        st.rerun()

    # Phase D: Parameter sliders
    st.subheader("Parameter Adjustment")
    params = st.session_state[PARAMS_KEY]
    cols = st.columns(len(params))
    for col, p in zip(cols, params):
        key = f"param_{p.id}"
        if key not in st.session_state:
            st.session_state[key] = float(p.value)
        value = col.slider(
            f"{p.name} ({p.unit})",
            min_value=float(p.min),
            max_value=float(p.max),
            step=float(p.step),
            help=p.description,
            key=key,
        )
        if value != p.value:
            params = update_parameter(params, p.id, value)
    st.session_state[PARAMS_KEY] = params

    # Phase E: Derived metrics
    st.subheader("Calculated Metrics")
    metrics = calculate_metrics(params)
    cols = st.columns(4)
    for i, m in enumerate(metrics):
        cols[i % 4].metric(m.name, format_metric_value(m.value, m.unit), help=m.description)

    # Phase F: Sensitivity sweeps (monthly profit after efficiency)
    inputs = ProductInputs.from_parameters(params)
    current = calculate_product_metrics(inputs)
    chart_type = st.radio("Chart type", ["Line", "Bar"], horizontal=True)

    by_eff = sweep_frame(
        sweep(inputs, "efficiency", EFFICIENCY_SWEEP, "adjusted_profit", calculate_product_metrics),
        "Monthly Profit by Efficiency",
    )
    by_price = sweep_frame(
        sweep(inputs, "selling_price", PRICE_SWEEP, "adjusted_profit", calculate_product_metrics),
        "Monthly Profit by Price",
    )

    left, right = st.columns(2)
    with left:
        st.markdown("**Monthly Profit by Efficiency**")
        st.altair_chart(sweep_chart(by_eff, "Efficiency (%)", "d", chart_type), use_container_width=True)
    with right:
        st.markdown("**Monthly Profit by Price**")
        st.altair_chart(sweep_chart(by_price, "Selling price ($)", ",d", chart_type), use_container_width=True)

    st.caption(
        f"Current configuration: {format_currency(current.adjusted_profit)} monthly profit. "
        "Labor is costed at $35/hour and overhead at $250/unit."
    )


if __name__ == "__main__":
    main()
