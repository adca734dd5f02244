from tech_tree_engine import Prerequisites, Technology, TechnologyRegistry, find_roots, format_tree, render_tree


def sample_registry():
    registry = TechnologyRegistry()
    registry.add(Technology("agriculture", "Agriculture", "", Prerequisites.all_of(), 0))
    registry.add(Technology("pottery", "Pottery", "", Prerequisites.all_of(), 5))
    registry.add(Technology("writing", "Writing", "", Prerequisites.all_of("pottery"), 10))
    registry.add(Technology("irrigation", "Irrigation", "", Prerequisites.all_of("agriculture", "pottery"), 12))
    return registry


def test_roots_are_technologies_without_unmet_prerequisites():
    registry = sample_registry()

    assert find_roots(registry, set()) == ["agriculture", "pottery"]
    assert find_roots(registry, {"agriculture", "pottery"}) == ["agriculture", "irrigation", "pottery", "writing"]


def test_render_tree_nests_children_reachable_along_the_path():
    assert render_tree(sample_registry(), set()) == [
        "- Agriculture (Cost: 0)",
        "- Pottery (Cost: 5)",
        "    - Writing (Cost: 10)",
    ]


def test_render_tree_uses_unlocked_technologies():
    lines = render_tree(sample_registry(), {"agriculture"}, indent_step=2)

    assert lines == [
        "- Agriculture (Cost: 0)",
        "- Pottery (Cost: 5)",
        "  - Irrigation (Cost: 12)",
        "  - Writing (Cost: 10)",
    ]


def test_render_tree_ignores_cost_and_does_not_mutate_unlocked():
    registry = sample_registry()
    registry.add(Technology("monument", "Monument", "", Prerequisites.all_of("writing"), 10_000))
    unlocked = {"pottery"}

    lines = render_tree(registry, unlocked)

    assert "        - Monument (Cost: 10000)" in lines
    assert unlocked == {"pottery"}


def test_render_tree_terminates_on_cycles():
    registry = TechnologyRegistry()
    registry.add(Technology("root", "Root", "", Prerequisites.all_of(), 1))
    registry.add(Technology("alpha", "Alpha", "", Prerequisites.any_of("root", "beta"), 2))
    registry.add(Technology("beta", "Beta", "", Prerequisites.any_of("alpha"), 3))

    assert render_tree(registry, set()) == [
        "- Root (Cost: 1)",
        "    - Alpha (Cost: 2)",
        "        - Beta (Cost: 3)",
    ]


def test_format_tree_joins_lines():
    text = format_tree(sample_registry(), set(), indent=2)
    assert text == "  - Agriculture (Cost: 0)\n  - Pottery (Cost: 5)\n      - Writing (Cost: 10)"
