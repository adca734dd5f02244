from __future__ import annotations

import logging
from typing import Dict, Iterator, List

from .technology import TechTreeError, Technology

logger = logging.getLogger(__name__)


class DependencyExistsError(TechTreeError):
    def __init__(self, technology_id: str, dependent_id: str):
        self.technology_id = technology_id
        self.dependent_id = dependent_id
        super().__init__(f"Technology {technology_id} is a prerequisite for {dependent_id}")


class TechnologyRegistry:
    """Own the technologies of a tree, keyed by identifier."""

    def __init__(self, technologies: Dict[str, Technology] | None = None):
        self._technologies: Dict[str, Technology] = dict(technologies or {})

    def add(self, technology: Technology) -> None:
        self._technologies[technology.identifier] = technology

    def remove(self, tech_id: str) -> None:
        dependents = self.dependents_of(tech_id)
        if dependents:
            logger.debug("Refusing to remove %s; required by %s", tech_id, ", ".join(dependents))
            raise DependencyExistsError(tech_id, dependents[0])
        self._technologies.pop(tech_id, None)

    def get(self, tech_id: str) -> Technology | None:
        return self._technologies.get(tech_id)

    def all_ids(self) -> List[str]:
        return sorted(self._technologies)

    def technologies(self) -> List[Technology]:
        return [self._technologies[tech_id] for tech_id in self.all_ids()]

    def dependents_of(self, tech_id: str) -> List[str]:
        return sorted(
            other_id
            for other_id, tech in self._technologies.items()
            if other_id != tech_id and tech.prerequisites.references(tech_id)
        )

    def __contains__(self, tech_id: object) -> bool:
        return tech_id in self._technologies

    def __len__(self) -> int:
        return len(self._technologies)

    def __iter__(self) -> Iterator[str]:
        return iter(self.all_ids())
