from __future__ import annotations

from typing import AbstractSet

from .registry import TechnologyRegistry


def is_unlockable(
    registry: TechnologyRegistry,
    tech_id: str,
    unlocked: AbstractSet[str],
    points: int,
) -> bool:
    """Return whether ``tech_id`` meets its prerequisites and fits the budget.

    Unknown ids are never unlockable.
    """

    technology = registry.get(tech_id)
    if technology is None:
        return False
    return technology.prerequisites.is_satisfied_by(unlocked) and technology.cost <= points
