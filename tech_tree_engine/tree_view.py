"""Indented text rendering of the technologies reachable from an unlocked set."""

from __future__ import annotations

import sys
from typing import AbstractSet, List, Tuple

from .eligibility import is_unlockable
from .registry import TechnologyRegistry

UNLIMITED_POINTS = sys.maxsize


def find_roots(registry: TechnologyRegistry, unlocked: AbstractSet[str]) -> List[str]:
    """Technologies with no prerequisites or with prerequisites already met. Cost is ignored."""

    roots: List[str] = []
    for technology in registry.technologies():
        prerequisites = technology.prerequisites
        if not prerequisites.ids or prerequisites.is_satisfied_by(unlocked):
            roots.append(technology.identifier)
    return roots


def render_tree(
    registry: TechnologyRegistry,
    unlocked: AbstractSet[str],
    *,
    indent: int = 0,
    indent_step: int = 4,
) -> List[str]:
    lines: List[str] = []
    base = frozenset(unlocked)

    for root in find_roots(registry, base):
        # Each frame carries the ids on its root-to-node path.
        stack: List[Tuple[str, int, Tuple[str, ...]]] = [(root, indent, ())]
        while stack:
            tech_id, depth, ancestors = stack.pop()
            technology = registry.get(tech_id)
            if technology is None:
                continue
            lines.append(f"{' ' * depth}- {technology.name} (Cost: {technology.cost})")

            path = ancestors + (tech_id,)
            acquired = base | set(path)
            children = [
                child_id
                for child_id in registry.dependents_of(tech_id)
                if child_id not in path and is_unlockable(registry, child_id, acquired, UNLIMITED_POINTS)
            ]
            for child_id in reversed(children):
                stack.append((child_id, depth + indent_step, path))

    return lines


def format_tree(
    registry: TechnologyRegistry,
    unlocked: AbstractSet[str],
    *,
    indent: int = 0,
    indent_step: int = 4,
) -> str:
    return "\n".join(render_tree(registry, unlocked, indent=indent, indent_step=indent_step))
