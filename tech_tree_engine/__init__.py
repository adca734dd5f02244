"""Core package for tech tree eligibility, unlocking and path search."""

from .codec import CodecError, DecodeEvent, deserialize, serialize
from .eligibility import is_unlockable
from .graph import (
    GraphEdgeView,
    GraphExplorer,
    GraphFilters,
    GraphNodeStyle,
    GraphNodeView,
    GraphView,
    TechStatus,
)
from .pathfinding import find_path
from .registry import DependencyExistsError, TechnologyRegistry
from .storage import load_from_file, save_to_file
from .technology import PrerequisiteKind, Prerequisites, Technology, TechTreeError
from .tree_view import find_roots, format_tree, render_tree
from .unlocked_storage import DecodedUnlocked, decode_unlocked, encode_unlocked
from .unlocks import list_unlockable, unlock
from .validation import TreeValidator, ValidationIssue, ValidationResult

__all__ = [
    "Technology",
    "Prerequisites",
    "PrerequisiteKind",
    "TechnologyRegistry",
    "TechTreeError",
    "DependencyExistsError",
    "is_unlockable",
    "unlock",
    "list_unlockable",
    "find_path",
    "serialize",
    "deserialize",
    "CodecError",
    "DecodeEvent",
    "load_from_file",
    "save_to_file",
    "find_roots",
    "render_tree",
    "format_tree",
    "TreeValidator",
    "ValidationIssue",
    "ValidationResult",
    "GraphExplorer",
    "GraphView",
    "GraphNodeView",
    "GraphEdgeView",
    "GraphFilters",
    "GraphNodeStyle",
    "TechStatus",
    "encode_unlocked",
    "decode_unlocked",
    "DecodedUnlocked",
]
