from datetime import date

import streamlit as st

from .context import FilterState

FILTER_KEY = "load_filter"


def render_filter_bar(today: date) -> FilterState:
    """
    Start/end pickers with Apply and Clear, shared by the list and exports.
    The applied filter lives in session state so it survives reruns.
    """
    current: FilterState = st.session_state.get(FILTER_KEY, FilterState())
    start_col, end_col, apply_col, clear_col = st.columns([3, 3, 2, 2])
    start = start_col.date_input("Start Date", value=current.start or today, key="filter_start")
    end = end_col.date_input("End Date", value=current.end or today, key="filter_end")
    if apply_col.button("Apply Filter", width="stretch"):
        current = FilterState(enabled=True, start=start, end=end)
    if clear_col.button("Clear Filter", width="stretch"):
        current = FilterState()
    st.session_state[FILTER_KEY] = current
    return current
