from __future__ import annotations

from pathlib import Path

import streamlit as st

from tech_tree_engine import DecodeEvent, GraphExplorer, TreeValidator, load_from_file


def _load_tree(path_str: str, reload_token: int):
    skipped: list[DecodeEvent] = []

    def collect(event: DecodeEvent) -> None:
        if event.skipped and event.line.strip():
            skipped.append(event)

    registry = load_from_file(Path(path_str), listener=collect)
    return registry, skipped


@st.cache_data(show_spinner=False)
def load_tree(path_str: str, reload_token: int):
    return _load_tree(path_str, reload_token)


def validate_tree(registry):
    return TreeValidator(registry).validate()


def get_explorer(registry):
    reload_token = st.session_state.get("reload_token", 0)
    explorer_state = st.session_state.get("explorer")

    if explorer_state and explorer_state.get("token") == reload_token:
        return explorer_state["instance"]

    explorer = GraphExplorer(registry)
    st.session_state.explorer = {"instance": explorer, "token": reload_token}
    return explorer
