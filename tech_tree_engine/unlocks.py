from __future__ import annotations

from typing import AbstractSet, MutableSet

from .eligibility import is_unlockable
from .registry import TechnologyRegistry


def unlock(
    registry: TechnologyRegistry,
    tech_id: str,
    unlocked: MutableSet[str],
    points: int,
) -> bool:
    if not is_unlockable(registry, tech_id, unlocked, points):
        return False
    unlocked.add(tech_id)
    return True


def list_unlockable(
    registry: TechnologyRegistry,
    unlocked: AbstractSet[str],
    points: int,
) -> list[str]:
    return [tech_id for tech_id in registry.all_ids() if is_unlockable(registry, tech_id, unlocked, points)]
