from __future__ import annotations

import streamlit as st

from tech_tree_engine import GraphFilters, TechnologyRegistry, unlock

from .config import DEFAULT_POINTS
from .storage import persist_unlocked_storage


def _ensure_base_state() -> None:
    if "reload_token" not in st.session_state:
        st.session_state.reload_token = 0

    if "filters" not in st.session_state:
        st.session_state.filters = GraphFilters.reset()

    if "points" not in st.session_state:
        st.session_state.points = DEFAULT_POINTS

    if "selected" not in st.session_state:
        st.session_state.selected = None

    if "target" not in st.session_state:
        st.session_state.target = None

    if "search_query" not in st.session_state:
        st.session_state.search_query = ""

    if "unlocked_storage_dirty" not in st.session_state:
        st.session_state.unlocked_storage_dirty = False


def ensure_state(registry: TechnologyRegistry) -> None:
    _ensure_base_state()

    if st.session_state.selected not in registry:
        st.session_state.selected = None

    if st.session_state.target not in registry:
        st.session_state.target = None

    # Ids from an older tree file are pruned after a reload.
    unlocked = st.session_state.get("unlocked")
    if unlocked is None:
        st.session_state.unlocked = set()
    else:
        st.session_state.unlocked = {tech_id for tech_id in unlocked if tech_id in registry}


def reset_filters() -> None:
    st.session_state.filters = GraphFilters.reset()


def _persist_after_mutation() -> None:
    st.session_state.unlocked_storage_dirty = True
    persist_unlocked_storage()


def apply_unlock(registry: TechnologyRegistry, tech_id: str | None) -> None:
    if tech_id is None:
        return
    unlocked: set[str] = st.session_state.unlocked
    if unlock(registry, tech_id, unlocked, st.session_state.points):
        st.session_state.last_unlock_error = None
        _persist_after_mutation()
    else:
        st.session_state.last_unlock_error = f"{tech_id} is not unlockable with the current budget and prerequisites."


def forget_unlock(tech_id: str | None) -> None:
    if tech_id is None:
        return
    st.session_state.unlocked.discard(tech_id)
    _persist_after_mutation()


def reset_unlocked() -> None:
    st.session_state.unlocked = set()
    _persist_after_mutation()
