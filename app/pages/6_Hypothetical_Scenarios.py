from __future__ import annotations

# Phase A: Hypothetical Scenarios goal
# - Keep a book of what-if scenarios (mix, prices, costs, production, market).
# - Edit / duplicate / delete; results are always recomputed from parameters.
# - Compare up to 4 selected scenarios side by side.

import bootstrap

bootstrap.add_src_to_path()

from dataclasses import replace

import altair as alt
import pandas as pd
import streamlit as st

from bizmetrics.calc.series import (
    EFFICIENCY_SWEEP,
    comparison_frame,
    comparison_series,
    sweep,
    sweep_frame,
)
from bizmetrics.config.settings import settings
from bizmetrics.errors import InvalidParameterError
from bizmetrics.formatting.formatters import format_currency, format_percentage
from bizmetrics.scenarios.scenario_book import (
    SCENARIO_FIELDS,
    ScenarioBook,
    apply_edits,
    get_path,
)

st.set_page_config(page_title="Business Metrics Console", layout="wide")

BOOK_KEY = "scenario_book"
EDITING_KEY = "scenario_editing"
ERROR_KEY = "scenario_error"


def get_book() -> ScenarioBook:
    if BOOK_KEY not in st.session_state:
        st.session_state[BOOK_KEY] = ScenarioBook.sample()
    return st.session_state[BOOK_KEY]


def scenario_table(book: ScenarioBook) -> pd.DataFrame:
    rows = []
    for s in book.scenarios:
        r = s.results
        rows.append(
            {
                "Scenario": s.name,
                "Revenue": format_currency(r.revenue),
                "COGS": format_currency(r.cogs),
                "Gross Margin": format_percentage(r.gross_margin),
                "Operating Profit": format_currency(r.operating_profit),
                "Operating Margin": format_percentage(r.operating_margin),
            }
        )
    return pd.DataFrame(rows)


def render_list(book: ScenarioBook) -> None:
    # Phase B: Scenario list + compare selection
    st.dataframe(scenario_table(book), hide_index=True, width="stretch")

    full = len(book.selected) >= settings.MAX_COMPARE_SCENARIOS
    for s in list(book.scenarios):
        c1, c2, c3, c4, c5 = st.columns([3, 1, 1, 1, 1])
        c1.markdown(f"**{s.name}**  \n{s.description}")
        checked = s.id in book.selected
        picked = c2.checkbox(
            "Compare",
            value=checked,
            key=f"compare_{s.id}_{checked}",
            disabled=full and not checked,
        )
        if picked != checked:
            book.toggle(s.id)
            st.rerun()
        if c3.button("Edit", key=f"edit_{s.id}"):
            st.session_state[EDITING_KEY] = s.id
            st.session_state[ERROR_KEY] = None
            st.rerun()
        if c4.button("Duplicate", key=f"dup_{s.id}"):
            book.duplicate(s.id)
            st.rerun()
        if c5.button("Delete", key=f"del_{s.id}", disabled=not book.can_delete()):
            book.delete(s.id)
            if st.session_state.get(EDITING_KEY) == s.id:
                st.session_state[EDITING_KEY] = None
            st.rerun()

    if full:
        st.caption(f"At most {settings.MAX_COMPARE_SCENARIOS} scenarios can be compared.")

    if st.button("New scenario"):
        created = book.create()
        st.session_state[EDITING_KEY] = created.id
        st.session_state[ERROR_KEY] = None
        st.rerun()


def render_editor(book: ScenarioBook, scenario_id: str) -> None:
    # Phase C: Editor (sliders keyed by dotted parameter path)
    scenario = book.get(scenario_id)
    if scenario is None:
        st.session_state[EDITING_KEY] = None
        return

    st.subheader(f"Edit: {scenario.name}")
    with st.form(f"edit_form_{scenario.id}"):
        name = st.text_input("Name", value=scenario.name)
        description = st.text_area("Description", value=scenario.description)

        edits: dict[str, float] = {}
        groups = list(dict.fromkeys(f.group for f in SCENARIO_FIELDS))
        for group, col in zip(groups, st.columns(len(groups))):
            col.markdown(f"**{group}**")
            for f in (f for f in SCENARIO_FIELDS if f.group == group):
                current = float(get_path(scenario.parameters, f.path))
                edits[f.path] = col.slider(
                    f.label,
                    min_value=float(f.min),
                    max_value=float(f.max),
                    value=min(max(current, float(f.min)), float(f.max)),
                    step=float(f.step),
                )

        save_col, cancel_col = st.columns(2)
        saved = save_col.form_submit_button("Save")
        cancelled = cancel_col.form_submit_button("Cancel")

    if cancelled:
        st.session_state[EDITING_KEY] = None
        st.session_state[ERROR_KEY] = None
        st.rerun()

    if saved:
        try:
            params = apply_edits(scenario.parameters, edits)
            book.save(
                replace(
                    scenario,
                    name=name.strip() or scenario.name,
                    description=description,
                    parameters=params,
                )
            )
        except InvalidParameterError as exc:
            st.session_state[ERROR_KEY] = str(exc)
        else:
            st.session_state[EDITING_KEY] = None
            st.session_state[ERROR_KEY] = None
        st.rerun()

    if st.session_state.get(ERROR_KEY):
        st.error(st.session_state[ERROR_KEY])


def render_comparison(book: ScenarioBook) -> None:
    # Phase D: Side-by-side comparison of the selected scenarios
    selected = book.selected_scenarios()
    st.subheader("Scenario Comparison")
    if not selected:
        st.info("Select scenarios to compare.")
        return

    df = comparison_frame(comparison_series(selected))
    metric_order = list(dict.fromkeys(df["metric"]))
    chart = (
        alt.Chart(df)
        .mark_bar()
        .encode(
            x=alt.X("metric:N", title=None, sort=metric_order, axis=alt.Axis(labelAngle=0)),
            xOffset=alt.XOffset("scenario:N", sort=[s.name for s in selected]),
            y=alt.Y("value:Q", title="Amount", axis=alt.Axis(format="$,.0f")),
            color=alt.Color("scenario:N", title="Scenario", sort=[s.name for s in selected]),
            tooltip=[
                alt.Tooltip("scenario:N", title="Scenario"),
                alt.Tooltip("metric:N", title="Metric"),
                alt.Tooltip("value:Q", title="Amount", format="$,.0f"),
            ],
        )
        .properties(height=380)
    )
    st.altair_chart(chart, use_container_width=True)

    # Phase E: Operating profit sensitivity to efficiency, per selected scenario
    sweeps = pd.concat(
        [
            sweep_frame(
                sweep(s.parameters, "production.efficiency", EFFICIENCY_SWEEP, "operating_profit"),
                s.name,
            )
            for s in selected
        ],
        ignore_index=True,
    )
    line = (
        alt.Chart(sweeps)
        .mark_line(point=True)
        .encode(
            x=alt.X("x:O", title="Efficiency (%)", axis=alt.Axis(labelAngle=0)),
            y=alt.Y("value:Q", title="Operating profit", axis=alt.Axis(format="$,.0f")),
            color=alt.Color("series:N", title="Scenario"),
            tooltip=[
                alt.Tooltip("series:N", title="Scenario"),
                alt.Tooltip("x:O", title="Efficiency (%)"),
                alt.Tooltip("value:Q", title="Operating profit", format="$,.0f"),
            ],
        )
        .properties(height=300)
    )
    st.markdown("**Operating Profit by Efficiency**")
    st.altair_chart(line, use_container_width=True)


def main() -> None:
    st.title("Hypothetical Scenarios")
    st.caption(
        "Model product mix, pricing, cost and market changes. "
        "Operating expenses are 20% of revenue plus $100,000 fixed."
    )

    book = get_book()
    render_list(book)

    editing = st.session_state.get(EDITING_KEY)
    if editing:
        st.divider()
        render_editor(book, editing)

    st.divider()
    render_comparison(book)


if __name__ == "__main__":
    main()
