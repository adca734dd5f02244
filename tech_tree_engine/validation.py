from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Set

from .registry import TechnologyRegistry
from .technology import PrerequisiteKind


@dataclass
class ValidationIssue:
    message: str
    technologies: list[str] = field(default_factory=list)


@dataclass
class ValidationResult:
    errors: list[ValidationIssue] = field(default_factory=list)
    warnings: list[ValidationIssue] = field(default_factory=list)

    @property
    def has_errors(self) -> bool:
        return bool(self.errors)

    def summary(self) -> str:
        error_count = len(self.errors)
        warning_count = len(self.warnings)
        return f"{error_count} error(s), {warning_count} warning(s)"


class TreeValidator:
    """Report data-quality problems in a registry without modifying it."""

    def __init__(self, registry: TechnologyRegistry):
        self.registry = registry

    def validate(self) -> ValidationResult:
        result = ValidationResult()
        self._check_missing_references(result)
        self._check_empty_any_sets(result)
        self._check_cycles(result)
        return result

    def _check_missing_references(self, result: ValidationResult) -> None:
        missing_map: Dict[str, List[str]] = {}

        for technology in self.registry.technologies():
            for prereq in sorted(technology.prerequisites.ids):
                if prereq not in self.registry:
                    missing_map.setdefault(prereq, []).append(technology.identifier)

        # Dangling references are legal; they just never get satisfied.
        for missing, dependents in sorted(missing_map.items()):
            result.warnings.append(
                ValidationIssue(
                    message=f"Missing reference: {missing}",
                    technologies=dependents,
                )
            )

    def _check_empty_any_sets(self, result: ValidationResult) -> None:
        for technology in self.registry.technologies():
            prerequisites = technology.prerequisites
            if prerequisites.kind is PrerequisiteKind.ANY and not prerequisites.ids:
                result.warnings.append(
                    ValidationIssue(
                        message=f"Never unlockable: {technology.identifier} has an empty Or prerequisite set",
                        technologies=[technology.identifier],
                    )
                )

    def _check_cycles(self, result: ValidationResult) -> None:
        visited: Set[str] = set()
        on_path: Set[str] = set()

        for start in self.registry.all_ids():
            if start in visited:
                continue

            visited.add(start)
            on_path.add(start)
            stack = [(start, iter(self._known_prereqs(start)))]

            while stack:
                tech_id, prereqs = stack[-1]
                prereq = next(prereqs, None)
                if prereq is None:
                    on_path.discard(tech_id)
                    stack.pop()
                    continue
                if prereq in on_path:
                    result.errors.append(
                        ValidationIssue(
                            message=f"Cycle detected involving {prereq}",
                            technologies=[prereq],
                        )
                    )
                    continue
                if prereq in visited:
                    continue
                visited.add(prereq)
                on_path.add(prereq)
                stack.append((prereq, iter(self._known_prereqs(prereq))))

    def _known_prereqs(self, tech_id: str) -> list[str]:
        technology = self.registry.get(tech_id)
        if technology is None:
            return []
        return [prereq for prereq in sorted(technology.prerequisites.ids) if prereq in self.registry]
