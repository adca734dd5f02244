from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterable, List, Set, Tuple

from .eligibility import is_unlockable
from .registry import TechnologyRegistry
from .technology import PrerequisiteKind, Technology


class TechStatus(str, Enum):
    UNLOCKED = "unlocked"
    UNLOCKABLE = "unlockable"
    LOCKED = "locked"


STATUS_COLORS: Dict[TechStatus, str] = {
    TechStatus.UNLOCKED: "#95d5b2",
    TechStatus.UNLOCKABLE: "#ffd166",
    TechStatus.LOCKED: "#d3d3d3",
}

KIND_SHAPES: Dict[PrerequisiteKind, str] = {
    PrerequisiteKind.ALL: "ellipse",
    PrerequisiteKind.ANY: "diamond",
}

MAX_CACHED_VIEWS = 64


@dataclass
class GraphNodeStyle:
    color: str
    shape: str


@dataclass
class GraphNodeView:
    identifier: str
    label: str
    description: str
    cost: int
    kind: PrerequisiteKind
    status: TechStatus
    style: GraphNodeStyle
    prereqs: list[str]
    is_selected: bool = False
    is_prerequisite: bool = False
    is_dependent: bool = False
    on_path: bool = False
    is_dimmed: bool = False
    is_hidden: bool = False


@dataclass
class GraphEdgeView:
    source: str
    target: str
    kind: PrerequisiteKind
    is_highlighted: bool = False
    is_dimmed: bool = False
    is_hidden: bool = False


@dataclass
class GraphFilters:
    statuses: set[TechStatus] | None = None
    hide_filtered: bool = False

    @classmethod
    def reset(cls) -> "GraphFilters":
        return cls()


@dataclass
class GraphView:
    nodes: list[GraphNodeView] = field(default_factory=list)
    edges: list[GraphEdgeView] = field(default_factory=list)
    selected: str | None = None
    filters: GraphFilters = field(default_factory=GraphFilters)

    def node(self, identifier: str) -> GraphNodeView | None:
        for node in self.nodes:
            if node.identifier == identifier:
                return node
        return None


class GraphExplorer:
    """Prepare tech tree data for visualization and filtering.

    Views are cached per input. Call :meth:`invalidate` after mutating the
    registry, otherwise earlier views keep being returned.
    """

    def __init__(self, registry: TechnologyRegistry):
        self.registry = registry
        self._view_cache: Dict[Tuple[Any, ...], GraphView] = {}

    def build_view(
        self,
        *,
        unlocked: Iterable[str] | None = None,
        points: int = 0,
        selected: str | None = None,
        path: Iterable[str] | None = None,
        filters: GraphFilters | None = None,
    ) -> GraphView:
        unlocked_set = set(unlocked or [])
        path_set = set(path or [])
        filters = filters or GraphFilters()

        cache_key = self._cache_key(unlocked_set, points, selected, path_set, filters)
        if cache_key in self._view_cache:
            return self._view_cache[cache_key]

        prerequisite_highlight = self._walk_prerequisites(selected) if selected else set()
        dependent_highlight = self._walk_dependents(selected) if selected else set()

        node_views = [
            self._build_node_view(
                technology,
                status=self.status_of(technology.identifier, unlocked_set, points),
                selected=selected,
                path_set=path_set,
                filters=filters,
                prerequisite_highlight=prerequisite_highlight,
                dependent_highlight=dependent_highlight,
            )
            for technology in self.registry.technologies()
        ]

        node_visibility = {node.identifier: not node.is_hidden and not node.is_dimmed for node in node_views}
        edge_views = self._build_edges(node_visibility, selected, prerequisite_highlight, dependent_highlight, filters)

        view = GraphView(nodes=node_views, edges=edge_views, selected=selected, filters=filters)
        if len(self._view_cache) >= MAX_CACHED_VIEWS:
            # Oldest entry first; dicts keep insertion order.
            del self._view_cache[next(iter(self._view_cache))]
        self._view_cache[cache_key] = view
        return view

    def invalidate(self) -> None:
        self._view_cache.clear()

    def status_of(self, tech_id: str, unlocked: Set[str], points: int) -> TechStatus:
        if tech_id in unlocked:
            return TechStatus.UNLOCKED
        if is_unlockable(self.registry, tech_id, unlocked, points):
            return TechStatus.UNLOCKABLE
        return TechStatus.LOCKED

    def _build_node_view(
        self,
        technology: Technology,
        *,
        status: TechStatus,
        selected: str | None,
        path_set: Set[str],
        filters: GraphFilters,
        prerequisite_highlight: Set[str],
        dependent_highlight: Set[str],
    ) -> GraphNodeView:
        is_visible = not filters.statuses or status in filters.statuses
        is_hidden = filters.hide_filtered and not is_visible
        is_dimmed = (not filters.hide_filtered) and not is_visible

        kind = technology.prerequisites.kind
        return GraphNodeView(
            identifier=technology.identifier,
            label=technology.name,
            description=technology.description,
            cost=technology.cost,
            kind=kind,
            status=status,
            style=GraphNodeStyle(color=STATUS_COLORS[status], shape=KIND_SHAPES[kind]),
            prereqs=sorted(technology.prerequisites.ids),
            is_selected=technology.identifier == selected,
            is_prerequisite=technology.identifier in prerequisite_highlight,
            is_dependent=technology.identifier in dependent_highlight,
            on_path=technology.identifier in path_set,
            is_dimmed=is_dimmed,
            is_hidden=is_hidden,
        )

    def _build_edges(
        self,
        node_visibility: Dict[str, bool],
        selected: str | None,
        prerequisite_highlight: Set[str],
        dependent_highlight: Set[str],
        filters: GraphFilters,
    ) -> list[GraphEdgeView]:
        edges: list[GraphEdgeView] = []

        for technology in self.registry.technologies():
            target = technology.identifier
            for prereq in sorted(technology.prerequisites.ids):
                if prereq not in self.registry:
                    continue

                endpoints_visible = node_visibility.get(target, True) and node_visibility.get(prereq, True)
                is_hidden = filters.hide_filtered and not endpoints_visible
                is_dimmed = (not filters.hide_filtered) and not endpoints_visible

                is_highlighted = False
                if selected:
                    if target == selected and prereq in prerequisite_highlight:
                        is_highlighted = True
                    if prereq == selected and target in dependent_highlight:
                        is_highlighted = True
                    if target in prerequisite_highlight and prereq in prerequisite_highlight:
                        is_highlighted = True
                    if target in dependent_highlight and prereq in dependent_highlight:
                        is_highlighted = True

                edges.append(
                    GraphEdgeView(
                        source=prereq,
                        target=target,
                        kind=technology.prerequisites.kind,
                        is_highlighted=is_highlighted,
                        is_dimmed=is_dimmed,
                        is_hidden=is_hidden,
                    )
                )

        return edges

    def _walk_prerequisites(self, selected: str | None) -> Set[str]:
        if not selected or selected not in self.registry:
            return set()

        visited: Set[str] = set()
        pending: List[str] = [selected]
        while pending:
            technology = self.registry.get(pending.pop())
            if technology is None:
                continue
            for prereq in technology.prerequisites.ids:
                if prereq in visited:
                    continue
                visited.add(prereq)
                pending.append(prereq)
        visited.discard(selected)
        return visited

    def _walk_dependents(self, selected: str | None) -> Set[str]:
        if not selected or selected not in self.registry:
            return set()

        visited: Set[str] = set()
        pending: List[str] = [selected]
        while pending:
            for dependent in self.registry.dependents_of(pending.pop()):
                if dependent in visited:
                    continue
                visited.add(dependent)
                pending.append(dependent)
        visited.discard(selected)
        return visited

    def _cache_key(
        self,
        unlocked: Set[str],
        points: int,
        selected: str | None,
        path_set: Set[str],
        filters: GraphFilters,
    ) -> Tuple[Any, ...]:
        filters_key = (
            tuple(sorted(status.value for status in filters.statuses)) if filters.statuses else None,
            filters.hide_filtered,
        )
        return (tuple(sorted(unlocked)), points, selected, tuple(sorted(path_set)), filters_key)
