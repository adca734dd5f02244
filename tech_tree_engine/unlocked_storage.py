"""Helpers for persisting the unlocked set to browser storage."""

from __future__ import annotations

from dataclasses import dataclass
from typing import AbstractSet

from .registry import TechnologyRegistry

STORAGE_KEY = "tech-tree-unlocked"
STORAGE_VERSION = 1


@dataclass(frozen=True, slots=True)
class DecodedUnlocked:
    unlocked: frozenset[str]
    dropped: tuple[str, ...]


def encode_unlocked(unlocked: AbstractSet[str]) -> dict:
    """Translate the unlocked set into a versioned storage payload."""

    return {"version": STORAGE_VERSION, "unlocked": sorted(unlocked)}


def decode_unlocked(payload: object, registry: TechnologyRegistry) -> DecodedUnlocked | None:
    """Rebuild an unlocked set from a storage payload.

    Invalid shapes or versions return ``None`` to signal caller should
    ignore the stored value. Ids the registry no longer knows are reported
    in ``dropped``.
    """

    if not isinstance(payload, dict):
        return None

    if payload.get("version") != STORAGE_VERSION:
        return None

    items = payload.get("unlocked")
    if not isinstance(items, list):
        return None

    known: set[str] = set()
    dropped: list[str] = []

    for item in items:
        if not isinstance(item, str):
            return None
        if item in registry:
            known.add(item)
        elif item not in dropped:
            dropped.append(item)

    return DecodedUnlocked(unlocked=frozenset(known), dropped=tuple(dropped))
