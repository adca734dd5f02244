from tech_tree_engine import GraphExplorer, Prerequisites, Technology, TechnologyRegistry
from tech_tree_engine.streamlit_app.graphviz import build_graphviz
from tech_tree_engine.streamlit_app.ui.explorer_page import build_technology_dataframe
from tech_tree_engine.streamlit_app.ui.path_page import build_path_dataframe, format_route


def sample_registry():
    registry = TechnologyRegistry()
    registry.add(Technology("pottery", "Pottery", "Basic pottery techniques.", Prerequisites.all_of(), 5))
    registry.add(Technology("clay", "Clay", "Shaping clay.", Prerequisites.all_of(), 1))
    registry.add(Technology("writing", "Writing", "Basics of writing.", Prerequisites.all_of("pottery"), 10))
    registry.add(Technology("wheel", "Wheel", "Rolling things.", Prerequisites.any_of("pottery"), 8))
    return registry


def test_graphviz_contains_nodes_and_styled_edges():
    view = GraphExplorer(sample_registry()).build_view(unlocked={"pottery"}, points=10)

    dot = build_graphviz(view)

    assert dot.startswith("digraph G {")
    assert dot.endswith("}")
    assert '"writing" [label=' in dot
    assert '"pottery" -> "writing"' in dot
    assert '"pottery" -> "wheel" [color="#94a3b8" style=dashed' in dot


def test_technology_dataframe_reports_status_and_filters_by_search():
    registry = sample_registry()

    table = build_technology_dataframe(registry, {"pottery"}, {"clay", "writing"}, search_query="WRIT")

    assert list(table["Tech ID"]) == ["writing"]
    assert table.iloc[0]["Status"] == "unlockable"
    assert table.iloc[0]["Requires"] == "Pottery"


def test_technology_dataframe_without_matches_is_empty():
    table = build_technology_dataframe(sample_registry(), set(), set(), search_query="zzz")

    assert table.empty
    assert "Tech ID" in table.columns


def test_path_dataframe_accumulates_costs():
    registry = sample_registry()

    df = build_path_dataframe(registry, ["pottery", "clay"], "writing", {"pottery"})

    assert list(df["Tech ID"]) == ["pottery", "clay", "writing"]
    assert list(df["Accumulated"]) == [0, 1, 11]
    assert list(df["Role"]) == ["unlocked", "intermediate", "target"]


def test_route_banner_labels_every_step_including_target():
    banner = format_route(sample_registry(), ["pottery", "clay"], "writing")

    assert banner == "Pottery | 5 [pottery] → Clay | 1 [clay] → **Writing | 10 [writing]**"
