from __future__ import annotations

import pandas as pd
import streamlit as st
from st_keyup import st_keyup

from tech_tree_engine import GraphFilters, TechStatus, TechnologyRegistry, format_tree, list_unlockable

from ..graphviz import build_graphviz
from ..state import apply_unlock, forget_unlock, reset_filters, reset_unlocked
from .shared import describe_prerequisites, label_for_id, option_choices


def render_header() -> None:
    st.title("Tech Tree Explorer")
    st.caption("Track unlocked technologies and inspect the dependency graph.")


def render_search_box() -> None:
    """Live name filter for the technology table, debounced by st_keyup."""
    current_value = st.session_state.search_query

    search_value = st_keyup(
        "Search technologies",
        value=current_value,
        debounce=300,
        placeholder="Filter by name or id",
        key="search_input_widget",
    )

    if search_value is not None and search_value != current_value:
        st.session_state.search_query = search_value


def build_technology_dataframe(
    registry: TechnologyRegistry,
    unlocked: set[str],
    unlockable: set[str],
    search_query: str | None = None,
) -> pd.DataFrame:
    needle = search_query.strip().casefold() if search_query else ""
    rows = []
    for technology in registry.technologies():
        if needle and needle not in technology.name.casefold() and needle not in technology.identifier.casefold():
            continue
        if technology.identifier in unlocked:
            status = TechStatus.UNLOCKED
        elif technology.identifier in unlockable:
            status = TechStatus.UNLOCKABLE
        else:
            status = TechStatus.LOCKED
        rows.append(
            {
                "Name": technology.name,
                "Cost": technology.cost,
                "Requires": describe_prerequisites(technology.identifier, registry),
                "Status": status.value,
                "Description": technology.description,
                "Tech ID": technology.identifier,
            }
        )
    return pd.DataFrame(rows, columns=["Name", "Cost", "Requires", "Status", "Description", "Tech ID"])


def render_technology_table(registry: TechnologyRegistry) -> None:
    st.subheader("Technologies")
    render_search_box()

    unlocked: set[str] = st.session_state.unlocked
    unlockable = set(list_unlockable(registry, unlocked, st.session_state.points))
    table = build_technology_dataframe(registry, unlocked, unlockable, st.session_state.search_query)

    if table.empty:
        st.caption("No technologies match the search.")
        return
    st.dataframe(table, use_container_width=True, hide_index=True)


def render_unlock_controls(registry: TechnologyRegistry) -> None:
    st.subheader("Unlock state")
    st.caption("Only technologies whose prerequisites and cost are satisfied can be unlocked.")

    unlocked: set[str] = st.session_state.unlocked
    points = st.session_state.points
    candidates = [tech_id for tech_id in list_unlockable(registry, unlocked, points) if tech_id not in unlocked]

    metric_cols = st.columns(3)
    metric_cols[0].metric("Technologies", len(registry))
    metric_cols[1].metric("Unlocked", len(unlocked))
    metric_cols[2].metric("Unlockable now", len(candidates))

    unlock_map = {label_for_id(tech_id, registry): tech_id for tech_id in candidates}
    unlock_label = st.selectbox("Unlock technology", ["Select technology"] + list(unlock_map.keys()))
    tech_to_unlock = unlock_map.get(unlock_label)
    st.button(
        "Unlock",
        on_click=apply_unlock,
        args=(registry, tech_to_unlock),
        type="primary",
        disabled=tech_to_unlock is None,
        width="stretch",
    )

    error = st.session_state.get("last_unlock_error")
    if error:
        st.warning(error)

    forget_map = {label_for_id(tech_id, registry): tech_id for tech_id in sorted(unlocked)}
    forget_label = st.selectbox("Forget technology", ["Select technology"] + list(forget_map.keys()))
    tech_to_forget = forget_map.get(forget_label)

    cols = st.columns(2)
    with cols[0]:
        st.button(
            "Forget selected",
            on_click=forget_unlock,
            args=(tech_to_forget,),
            type="secondary",
            disabled=tech_to_forget is None,
            width="stretch",
        )
    with cols[1]:
        st.button("Reset unlocked", on_click=reset_unlocked, type="secondary", width="stretch")


def render_filters() -> None:
    filters: GraphFilters = st.session_state.filters

    st.subheader("Graph filters")
    statuses = [status.value for status in TechStatus]
    selected_statuses = st.multiselect(
        "Statuses",
        options=statuses,
        default=sorted(status.value for status in filters.statuses) if filters.statuses else [],
    )
    hide_filtered = st.checkbox("Hide filtered technologies", value=filters.hide_filtered)

    st.session_state.filters = GraphFilters(
        statuses={TechStatus(value) for value in selected_statuses} if selected_statuses else None,
        hide_filtered=hide_filtered,
    )
    st.button("Reset filters", type="secondary", on_click=reset_filters, width="stretch")


def render_graph(explorer, registry: TechnologyRegistry) -> None:
    st.subheader("Dependency graph")
    st.caption("Dashed edges are Or prerequisites. Select a technology to highlight its chain.")

    options = option_choices(registry)
    option_labels = ["None"] + list(options.keys())
    default_label = next(
        (label for label, tech_id in options.items() if tech_id == st.session_state.selected),
        "None",
    )
    selected_label = st.selectbox("Focus technology", option_labels, index=option_labels.index(default_label))
    st.session_state.selected = options.get(selected_label)

    graph_view = explorer.build_view(
        unlocked=st.session_state.unlocked,
        points=st.session_state.points,
        selected=st.session_state.selected,
        filters=st.session_state.filters,
    )
    st.graphviz_chart(build_graphviz(graph_view), width="stretch")

    with st.expander("Selection details", expanded=bool(st.session_state.selected)):
        if st.session_state.selected:
            technology = registry.get(st.session_state.selected)
            st.markdown(f"**{technology.name}** (cost {technology.cost})")
            st.write(technology.description)
            st.write(f"Requires: {describe_prerequisites(technology.identifier, registry)}")
            dependents = registry.dependents_of(technology.identifier)
            if dependents:
                st.write("Required by: " + ", ".join(label_for_id(dep, registry) for dep in dependents))
        else:
            st.caption("Select a technology to see its prerequisites and dependents.")


def render_tree_outline(registry: TechnologyRegistry) -> None:
    with st.expander("Tree outline"):
        outline = format_tree(registry, st.session_state.unlocked)
        if outline:
            st.code(outline, language=None)
        else:
            st.caption("No technology is currently reachable.")
