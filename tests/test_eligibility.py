from tech_tree_engine import (
    Prerequisites,
    Technology,
    TechnologyRegistry,
    is_unlockable,
    list_unlockable,
    unlock,
)


def ancient_registry():
    registry = TechnologyRegistry()
    registry.add(Technology("pottery", "Pottery", "Basic pottery techniques.", Prerequisites.all_of(), 5))
    registry.add(Technology("writing", "Writing", "Basics of writing.", Prerequisites.all_of("pottery"), 10))
    registry.add(Technology("wheel", "Wheel", "Rolling things.", Prerequisites.any_of("pottery", "mining"), 8))
    registry.add(Technology("mystery", "Mystery", "Empty Or set.", Prerequisites.any_of(), 0))
    return registry


def test_pottery_and_writing_scenario():
    registry = ancient_registry()
    unlocked: set[str] = set()

    assert is_unlockable(registry, "pottery", unlocked, 15) is True
    assert is_unlockable(registry, "writing", unlocked, 15) is False

    assert unlock(registry, "pottery", unlocked, 15) is True
    assert unlocked == {"pottery"}
    assert is_unlockable(registry, "writing", unlocked, 15) is True


def test_all_prerequisites_need_subset_and_budget():
    registry = TechnologyRegistry()
    registry.add(Technology("bridge", "Bridge", "", Prerequisites.all_of("wood", "rope"), 10))

    assert is_unlockable(registry, "bridge", {"wood"}, 100) is False
    assert is_unlockable(registry, "bridge", {"wood", "rope", "extra"}, 100) is True
    assert is_unlockable(registry, "bridge", {"wood", "rope"}, 10) is True
    assert is_unlockable(registry, "bridge", {"wood", "rope"}, 9) is False


def test_empty_all_set_only_needs_budget():
    registry = ancient_registry()

    assert is_unlockable(registry, "pottery", set(), 5) is True
    assert is_unlockable(registry, "pottery", set(), 4) is False


def test_any_prerequisites_need_one_member_and_budget():
    registry = ancient_registry()

    assert is_unlockable(registry, "wheel", {"mining"}, 8) is True
    assert is_unlockable(registry, "wheel", {"pottery", "mining"}, 8) is True
    assert is_unlockable(registry, "wheel", {"writing"}, 8) is False
    assert is_unlockable(registry, "wheel", {"pottery"}, 7) is False


def test_empty_any_set_is_never_unlockable():
    registry = ancient_registry()

    assert is_unlockable(registry, "mystery", set(), 1_000) is False
    assert is_unlockable(registry, "mystery", set(registry.all_ids()), 1_000) is False


def test_unknown_technology_is_not_unlockable():
    assert is_unlockable(ancient_registry(), "missing", {"pottery"}, 1_000) is False


def test_dangling_prerequisite_can_only_be_met_through_membership():
    registry = TechnologyRegistry()
    registry.add(Technology("steam", "Steam", "", Prerequisites.all_of("coal"), 1))

    assert is_unlockable(registry, "steam", set(), 1) is False
    assert is_unlockable(registry, "steam", {"coal"}, 1) is True


def test_unlock_failure_leaves_set_untouched():
    registry = ancient_registry()
    unlocked = {"mining"}

    assert unlock(registry, "writing", unlocked, 100) is False
    assert unlock(registry, "missing", unlocked, 100) is False
    assert unlocked == {"mining"}


def test_unlock_is_idempotent():
    registry = ancient_registry()
    unlocked = {"pottery"}

    assert unlock(registry, "writing", unlocked, 10) is True
    assert unlock(registry, "writing", unlocked, 10) is True
    assert unlocked == {"pottery", "writing"}


def test_list_unlockable_is_sorted_and_includes_eligible_unlocked():
    registry = ancient_registry()

    assert list_unlockable(registry, set(), 100) == ["pottery"]
    assert list_unlockable(registry, {"pottery"}, 100) == ["pottery", "wheel", "writing"]
    assert list_unlockable(registry, {"pottery"}, 8) == ["pottery", "wheel"]
    assert list_unlockable(registry, set(), 0) == []
