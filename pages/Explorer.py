from __future__ import annotations

import streamlit as st

from tech_tree_engine.streamlit_app.config import DEFAULT_TREE_FILE
from tech_tree_engine.streamlit_app.data import get_explorer, load_tree, validate_tree
from tech_tree_engine.streamlit_app.state import ensure_state
from tech_tree_engine.streamlit_app.storage import hydrate_unlocked_from_storage
from tech_tree_engine.streamlit_app.ui.explorer_page import (
    render_filters,
    render_graph,
    render_header,
    render_technology_table,
    render_tree_outline,
    render_unlock_controls,
)
from tech_tree_engine.streamlit_app.ui.layout import render_global_styles
from tech_tree_engine.streamlit_app.ui.shared import (
    render_load_warnings,
    render_points_input,
    render_validation,
)


st.set_page_config(
    page_title="Tech Tree Explorer",
    layout="wide",
)


def main():
    render_global_styles()
    render_header()

    if "reload_token" not in st.session_state:
        st.session_state.reload_token = 0

    hero_cols = st.columns([3, 1, 1])
    with hero_cols[0]:
        st.markdown("**Data source**")
        st.write(DEFAULT_TREE_FILE)
    with hero_cols[1]:
        if st.button("Reload data", type="secondary", width="stretch"):
            st.session_state.reload_token += 1
            st.cache_data.clear()
            st.rerun()
    with hero_cols[2]:
        if st.button("Find a route", type="secondary", width="stretch"):
            st.switch_page("pages/Path_finder.py")

    try:
        registry, skipped = load_tree(str(DEFAULT_TREE_FILE), st.session_state.reload_token)
    except OSError as exc:
        st.error(f"Could not read {DEFAULT_TREE_FILE}: {exc}")
        st.stop()

    ensure_state(registry)
    decoded = hydrate_unlocked_from_storage(registry)
    if decoded and decoded.dropped:
        st.info("Dropped unknown stored technologies: " + ", ".join(decoded.dropped))

    render_load_warnings(skipped)
    validation_result = validate_tree(registry)
    render_validation(validation_result)
    if validation_result.has_errors:
        st.stop()

    explorer = get_explorer(registry)

    cols = st.columns([1, 1.5], gap="large")
    with cols[0]:
        render_points_input()
        st.divider()
        render_unlock_controls(registry)
        st.divider()
        render_filters()

    with cols[1]:
        render_graph(explorer, registry)
        render_tree_outline(registry)

    render_technology_table(registry)


if __name__ == "__main__":
    main()
