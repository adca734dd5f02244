import pytest

from tech_tree_engine import (
    DependencyExistsError,
    Prerequisites,
    Technology,
    TechnologyRegistry,
    TechTreeError,
)


def sample_registry():
    registry = TechnologyRegistry()
    registry.add(Technology("pottery", "Pottery", "Basic pottery techniques.", Prerequisites.all_of(), 5))
    registry.add(
        Technology("irrigation", "Irrigation", "Advanced irrigation techniques.", Prerequisites.all_of("pottery"), 10)
    )
    registry.add(Technology("sailing", "Sailing", "Boats.", Prerequisites.any_of("pottery", "fishing"), 7))
    return registry


def test_add_inserts_and_overwrites_by_id():
    registry = sample_registry()
    assert "pottery" in registry
    assert len(registry) == 3

    registry.add(Technology("pottery", "Ceramics", "Renamed.", Prerequisites.any_of("fire"), 9))

    replaced = registry.get("pottery")
    assert len(registry) == 3
    assert replaced.name == "Ceramics"
    assert replaced.prerequisites == Prerequisites.any_of("fire")
    assert replaced.cost == 9


def test_all_ids_and_iteration_are_sorted():
    registry = sample_registry()

    assert registry.all_ids() == ["irrigation", "pottery", "sailing"]
    assert list(registry) == ["irrigation", "pottery", "sailing"]
    assert [tech.identifier for tech in registry.technologies()] == ["irrigation", "pottery", "sailing"]


def test_get_unknown_returns_none():
    assert sample_registry().get("missing") is None


def test_remove_without_dependents_deletes_only_that_record():
    registry = sample_registry()

    registry.remove("irrigation")

    assert "irrigation" not in registry
    assert registry.all_ids() == ["pottery", "sailing"]


def test_remove_with_dependency_raises_and_keeps_record():
    registry = sample_registry()

    with pytest.raises(DependencyExistsError) as excinfo:
        registry.remove("pottery")

    error = excinfo.value
    assert isinstance(error, TechTreeError)
    assert error.technology_id == "pottery"
    assert error.dependent_id == "irrigation"
    assert str(error) == "Technology pottery is a prerequisite for irrigation"
    assert "pottery" in registry


def test_remove_checks_or_prerequisites_too():
    registry = TechnologyRegistry()
    registry.add(Technology("fishing", "Fishing", "Nets.", Prerequisites.all_of(), 3))
    registry.add(Technology("sailing", "Sailing", "Boats.", Prerequisites.any_of("fishing"), 7))

    with pytest.raises(DependencyExistsError) as excinfo:
        registry.remove("fishing")

    assert excinfo.value.dependent_id == "sailing"


def test_remove_does_not_cascade_after_dependent_is_gone():
    registry = sample_registry()
    registry.remove("irrigation")
    registry.remove("sailing")

    registry.remove("pottery")

    assert len(registry) == 0


def test_remove_unknown_id_is_noop():
    registry = sample_registry()
    registry.remove("missing")
    assert len(registry) == 3


def test_dependents_of_lists_both_kinds():
    assert sample_registry().dependents_of("pottery") == ["irrigation", "sailing"]
    assert sample_registry().dependents_of("fishing") == ["sailing"]


def test_negative_cost_is_rejected():
    with pytest.raises(ValueError):
        Technology("broken", "Broken", "", Prerequisites.all_of(), -1)
