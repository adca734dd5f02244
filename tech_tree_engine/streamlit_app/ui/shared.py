from __future__ import annotations

import streamlit as st

from tech_tree_engine import PrerequisiteKind, TechnologyRegistry

from ..config import MAX_POINTS


def format_cost(cost: int | None) -> str:
    return f"{cost:,}" if cost is not None else "N/A"


def tech_name(tech_id: str, registry: TechnologyRegistry) -> str:
    technology = registry.get(tech_id)
    return technology.name if technology else tech_id


def label_for_id(tech_id: str, registry: TechnologyRegistry) -> str:
    technology = registry.get(tech_id)
    if technology is None:
        return tech_id
    return f"{technology.name} | {format_cost(technology.cost)} [{tech_id}]"


def option_choices(registry: TechnologyRegistry) -> dict[str, str]:
    entries = {label_for_id(tech_id, registry): tech_id for tech_id in registry.all_ids()}
    return dict(sorted(entries.items(), key=lambda item: item[0].lower()))


def describe_prerequisites(tech_id: str, registry: TechnologyRegistry) -> str:
    technology = registry.get(tech_id)
    if technology is None:
        return ""
    prerequisites = technology.prerequisites
    if not prerequisites.ids:
        if prerequisites.kind is PrerequisiteKind.ANY:
            return "Never unlockable (empty Or set)"
        return "None"
    joiner = " and " if prerequisites.kind is PrerequisiteKind.ALL else " or "
    return joiner.join(tech_name(prereq, registry) for prereq in sorted(prerequisites.ids))


def render_validation(result) -> None:
    if result.has_errors:
        with st.container(border=True):
            st.error("Validation failed. Resolve blocking issues before exploring the tree.")
            for issue in result.errors:
                st.write(f"**{issue.message}**: {', '.join(issue.technologies)}")
    else:
        with st.container(border=True):
            st.success(f"Tech tree validated ({result.summary()}).")
            if result.warnings:
                st.warning("Warnings detected:")
                for warning in result.warnings:
                    st.write(f"**{warning.message}**: {', '.join(warning.technologies)}")


def render_load_warnings(skipped) -> None:
    if not skipped:
        return
    with st.expander(f"{len(skipped)} line(s) skipped while loading"):
        for event in skipped:
            st.write(f"Line {event.line_number}: {event.reason}")
            st.code(event.line, language=None)


def render_points_input() -> int:
    points = st.number_input(
        "Science points",
        min_value=0,
        max_value=MAX_POINTS,
        value=int(st.session_state.points),
        step=1,
        help="Budget compared against each technology's cost.",
    )
    st.session_state.points = int(points)
    return st.session_state.points
