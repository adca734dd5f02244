"""Priority search for the route of reachable technologies leading to a target."""

from __future__ import annotations

import heapq
from typing import AbstractSet, Dict, List, Set, Tuple

from .eligibility import is_unlockable
from .registry import TechnologyRegistry


def find_path(
    registry: TechnologyRegistry,
    target: str,
    unlocked: AbstractSet[str],
    points: int,
) -> List[str] | None:
    """Return the chain of technologies leading up to ``target``.

    The search starts from every unlocked technology and only expands into
    technologies that are eligible under the given ``unlocked``/``points``
    snapshot; eligibility is not re-evaluated as the search advances. The
    returned list starts with an unlocked technology and stops just before
    ``target``. ``None`` means the target was not reached.
    """

    # Fixed snapshot: eligibility is decided once, up front.
    candidates = [
        tech_id
        for tech_id in registry.all_ids()
        if tech_id not in unlocked and is_unlockable(registry, tech_id, unlocked, points)
    ]
    costs = {tech_id: registry.get(tech_id).cost for tech_id in candidates}

    frontier: List[Tuple[int, str]] = [(0, tech_id) for tech_id in unlocked]
    heapq.heapify(frontier)
    predecessor: Dict[str, str] = {}
    visited: Set[str] = set()

    while frontier:
        current_cost, current = heapq.heappop(frontier)
        if current in visited:
            continue
        visited.add(current)

        if current == target:
            return _reconstruct(predecessor, target)

        for tech_id in candidates:
            if tech_id in visited:
                continue
            predecessor[tech_id] = current
            heapq.heappush(frontier, (current_cost + costs[tech_id], tech_id))

    return None


def _reconstruct(predecessor: Dict[str, str], target: str) -> List[str]:
    path: List[str] = []
    node = target
    while node in predecessor:
        node = predecessor[node]
        path.append(node)
    path.reverse()
    return path
