from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import AbstractSet, Iterable


class TechTreeError(Exception):
    """Base class for recoverable tech tree failures."""


class PrerequisiteKind(str, Enum):
    ALL = "And"
    ANY = "Or"


@dataclass(frozen=True)
class Prerequisites:
    """Prerequisite condition of a technology.

    ``ALL`` requires every listed id to be unlocked, ``ANY`` requires at least
    one. An empty ``ANY`` set can never be satisfied.
    """

    kind: PrerequisiteKind
    ids: frozenset[str] = field(default_factory=frozenset)

    @classmethod
    def all_of(cls, *ids: str) -> "Prerequisites":
        return cls(kind=PrerequisiteKind.ALL, ids=frozenset(ids))

    @classmethod
    def any_of(cls, *ids: str) -> "Prerequisites":
        return cls(kind=PrerequisiteKind.ANY, ids=frozenset(ids))

    @classmethod
    def of_kind(cls, kind: PrerequisiteKind, ids: Iterable[str]) -> "Prerequisites":
        return cls(kind=PrerequisiteKind(kind), ids=frozenset(ids))

    def references(self, tech_id: str) -> bool:
        return tech_id in self.ids

    def is_satisfied_by(self, unlocked: AbstractSet[str]) -> bool:
        if self.kind is PrerequisiteKind.ALL:
            return self.ids.issubset(unlocked)
        return not self.ids.isdisjoint(unlocked)


@dataclass
class Technology:
    identifier: str
    name: str
    description: str
    prerequisites: Prerequisites = field(default_factory=Prerequisites.all_of)
    cost: int = 0

    def __post_init__(self) -> None:
        if isinstance(self.cost, bool) or not isinstance(self.cost, int):
            raise ValueError(f"Technology {self.identifier} has a non-integer cost: {self.cost!r}")
        if self.cost < 0:
            raise ValueError(f"Technology {self.identifier} has a negative cost: {self.cost}")
