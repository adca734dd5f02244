from __future__ import annotations

from html import escape as html_escape

from tech_tree_engine import GraphView, PrerequisiteKind


def build_graphviz(view: GraphView) -> str:
    lines = ["digraph G {"]
    lines.append("rankdir=LR;")
    lines.append("graph [pad=0.2];")
    lines.append("node [style=filled];")

    for node in view.nodes:
        if node.is_hidden:
            continue

        base_color = node.style.color
        fillcolor = _dim_color(base_color, 0.6) if node.is_dimmed else base_color
        stroke = "#ff6b6b" if node.is_selected else ("#2563eb" if node.on_path else "#4b5563")
        penwidth = "3" if node.is_selected or node.on_path else "1.5"
        tooltip = _build_tooltip(node)

        badge = [node.status.value.title()]
        if node.is_prerequisite:
            badge.append("Prereq")
        if node.is_dependent:
            badge.append("Dependent")
        if node.on_path:
            badge.append("Path")
        badge_text = " | ".join(badge)

        label_lines = [f"<B>{html_escape(node.label)}</B>"]
        label_lines.append(f"Cost {node.cost}")
        label_lines.append(f"<FONT POINT-SIZE='10'>{badge_text}</FONT>")
        label = "<" + "<BR/>".join(label_lines) + ">"

        lines.append(
            f'"{node.identifier}" [label={label} shape={node.style.shape} fillcolor="{fillcolor}" color="{stroke}" penwidth={penwidth} tooltip="{tooltip}" fontname="Inter" fontsize=12];'
        )

    for edge in view.edges:
        if edge.is_hidden:
            continue
        color = "#94a3b8"
        if edge.is_highlighted:
            color = "#fb7185"
        elif edge.is_dimmed:
            color = "#e2e8f0"
        style = "dashed" if edge.kind is PrerequisiteKind.ANY else "solid"
        lines.append(
            f'"{edge.source}" -> "{edge.target}" [color="{color}" style={style} penwidth=1.4 arrowsize=0.8];'
        )

    lines.append("}")
    return "\n".join(lines)


def _dim_color(hex_color: str, factor: float) -> str:
    hex_color = hex_color.lstrip("#")
    r = int(hex_color[0:2], 16)
    g = int(hex_color[2:4], 16)
    b = int(hex_color[4:6], 16)
    r = int(r + (255 - r) * factor)
    g = int(g + (255 - g) * factor)
    b = int(b + (255 - b) * factor)
    return f"#{r:02x}{g:02x}{b:02x}"


def _build_tooltip(node) -> str:
    details = [node.label, f"Cost: {node.cost}", f"Status: {node.status.value}"]
    if node.prereqs:
        joiner = " and " if node.kind is PrerequisiteKind.ALL else " or "
        details.append("Requires: " + joiner.join(node.prereqs))
    if node.description:
        details.append(node.description)
    return " | ".join(details).replace('"', "'")
