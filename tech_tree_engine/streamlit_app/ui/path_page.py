from __future__ import annotations

import altair as alt
import pandas as pd
import streamlit as st

from tech_tree_engine import TechnologyRegistry, find_path

from ..graphviz import build_graphviz
from .shared import label_for_id, option_choices


def render_target_picker(registry: TechnologyRegistry) -> str | None:
    st.subheader("Target")
    options = option_choices(registry)
    option_labels = ["Select target"] + list(options.keys())
    default_label = next(
        (label for label, tech_id in options.items() if tech_id == st.session_state.target),
        "Select target",
    )
    selected_label = st.selectbox("Target technology", option_labels, index=option_labels.index(default_label))
    st.session_state.target = options.get(selected_label)
    return st.session_state.target


def build_path_dataframe(
    registry: TechnologyRegistry, path: list[str], target: str, unlocked: set[str]
) -> pd.DataFrame:
    """One row per step of the route plus the target, with running cost."""

    rows = []
    accumulated = 0
    for position, tech_id in enumerate(path + [target], start=1):
        technology = registry.get(tech_id)
        cost = technology.cost if technology else 0
        # Unlocked seeds contribute nothing to the exploration cost.
        step_cost = 0 if tech_id in unlocked else cost
        accumulated += step_cost
        rows.append(
            {
                "Step": position,
                "Technology": technology.name if technology else tech_id,
                "Tech ID": tech_id,
                "Cost": step_cost,
                "Accumulated": accumulated,
                "Role": _role(tech_id, is_target=position > len(path), unlocked=unlocked),
            }
        )
    return pd.DataFrame(rows)


def format_route(registry: TechnologyRegistry, path: list[str], target: str) -> str:
    steps = [label_for_id(tech_id, registry) for tech_id in path]
    return " → ".join(steps + [f"**{label_for_id(target, registry)}**"])


def _role(tech_id: str, *, is_target: bool, unlocked: set[str]) -> str:
    if is_target:
        return "target"
    return "unlocked" if tech_id in unlocked else "intermediate"


def render_path_chart(df: pd.DataFrame) -> None:
    chart = (
        alt.Chart(df)
        .mark_bar()
        .encode(
            x=alt.X("Step:O", title="Step"),
            y=alt.Y("Accumulated:Q", title="Accumulated cost"),
            color=alt.Color("Role:N", title="Role"),
            tooltip=["Technology", "Tech ID", "Cost", "Accumulated"],
        )
        .properties(height=260)
    )
    st.altair_chart(chart, use_container_width=True)


def render_path_result(explorer, registry: TechnologyRegistry, target: str | None) -> None:
    st.subheader("Route")
    st.caption(
        "The search only walks through technologies that are unlockable right now; "
        "it does not plan a sequence of future unlocks."
    )

    if target is None:
        st.info("Pick a target technology to search for a route.")
        return

    unlocked: set[str] = st.session_state.unlocked
    points = st.session_state.points
    path = find_path(registry, target, unlocked, points)

    if path is None:
        st.warning(f"No route to {label_for_id(target, registry)} from the current unlocked set and budget.")
        return
    if not path:
        st.success(f"{label_for_id(target, registry)} is already unlocked.")
        return

    st.success(format_route(registry, path, target))

    df = build_path_dataframe(registry, path, target, unlocked)
    st.dataframe(df, use_container_width=True, hide_index=True)
    render_path_chart(df)

    graph_view = explorer.build_view(
        unlocked=unlocked,
        points=points,
        selected=target,
        path=path + [target],
    )
    st.graphviz_chart(build_graphviz(graph_view), width="stretch")
