from __future__ import annotations

import streamlit as st

from tech_tree_engine.streamlit_app.config import DEFAULT_TREE_FILE
from tech_tree_engine.streamlit_app.data import get_explorer, load_tree
from tech_tree_engine.streamlit_app.state import ensure_state
from tech_tree_engine.streamlit_app.storage import hydrate_unlocked_from_storage
from tech_tree_engine.streamlit_app.ui.layout import render_global_styles
from tech_tree_engine.streamlit_app.ui.path_page import render_path_result, render_target_picker
from tech_tree_engine.streamlit_app.ui.shared import label_for_id, render_points_input


st.set_page_config(
    page_title="Tech Tree Explorer - Path finder",
    layout="wide",
)


def main():
    render_global_styles()
    st.title("Path finder")
    st.caption("Search for the chain of reachable technologies that leads to a target.")

    if st.button("Back to explorer", type="secondary"):
        st.switch_page("pages/Explorer.py")

    if "reload_token" not in st.session_state:
        st.session_state.reload_token = 0

    try:
        registry, _ = load_tree(str(DEFAULT_TREE_FILE), st.session_state.reload_token)
    except OSError as exc:
        st.error(f"Could not read {DEFAULT_TREE_FILE}: {exc}")
        st.stop()

    ensure_state(registry)
    hydrate_unlocked_from_storage(registry)
    explorer = get_explorer(registry)

    cols = st.columns([1, 2], gap="large")
    with cols[0]:
        render_points_input()
        target = render_target_picker(registry)
        st.markdown("**Unlocked**")
        if st.session_state.unlocked:
            for tech_id in sorted(st.session_state.unlocked):
                st.write(f"- {label_for_id(tech_id, registry)}")
        else:
            st.caption("Nothing unlocked yet; the search needs at least one unlocked technology to start from.")

    with cols[1]:
        render_path_result(explorer, registry, target)


if __name__ == "__main__":
    main()
