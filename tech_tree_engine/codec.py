"""Line-oriented text format for technology registries.

Each technology occupies one line of five ``;``-separated fields::

    id;name;description;And:prereq_a,prereq_b;cost

The prerequisite field is ``<kind>:<comma separated ids>`` where ``kind`` is
``And`` or ``Or``; an empty prerequisite set is written as ``And:``. No
escaping is performed, so identifiers, names and descriptions must not contain
``;``, ``:``, ``,`` or newlines.

Decoding is permissive by default: malformed lines and unknown prerequisite
kinds are skipped, unparsable costs become ``0``. Pass ``strict=True`` to
raise :class:`CodecError` instead.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable

from .registry import TechnologyRegistry
from .technology import PrerequisiteKind, Prerequisites, Technology, TechTreeError

logger = logging.getLogger(__name__)

FIELD_SEPARATOR = ";"
KIND_SEPARATOR = ":"
ID_SEPARATOR = ","
FIELD_COUNT = 5
MAX_COST = 2**32 - 1


class CodecError(TechTreeError, ValueError):
    def __init__(self, line_number: int, reason: str):
        self.line_number = line_number
        self.reason = reason
        super().__init__(f"Line {line_number}: {reason}")


@dataclass(frozen=True)
class DecodeEvent:
    line_number: int
    line: str
    technology: Technology | None = None
    reason: str | None = None

    @property
    def skipped(self) -> bool:
        return self.technology is None


DecodeListener = Callable[[DecodeEvent], None]


def serialize(registry: TechnologyRegistry) -> str:
    return "\n".join(_encode_line(technology) for technology in registry.technologies())


def _encode_line(technology: Technology) -> str:
    prerequisites = technology.prerequisites
    prereq_field = f"{prerequisites.kind.value}{KIND_SEPARATOR}{ID_SEPARATOR.join(sorted(prerequisites.ids))}"
    return FIELD_SEPARATOR.join(
        [
            technology.identifier,
            technology.name,
            technology.description,
            prereq_field,
            str(technology.cost),
        ]
    )


def deserialize(
    data: str,
    *,
    strict: bool = False,
    listener: DecodeListener | None = None,
) -> TechnologyRegistry:
    registry = TechnologyRegistry()

    for line_number, line in enumerate(_split_lines(data), start=1):
        if strict and not line.strip():
            continue

        technology, reason = _decode_line(line, strict=strict)
        if technology is None:
            if strict:
                raise CodecError(line_number, reason or "invalid line")
            logger.debug("Skipping line %d: %s", line_number, reason)
        else:
            logger.debug("Loaded technology: %s", technology)
            registry.add(technology)

        if listener is not None:
            listener(DecodeEvent(line_number=line_number, line=line, technology=technology, reason=reason))

    return registry


def _decode_line(line: str, *, strict: bool) -> tuple[Technology | None, str | None]:
    parts = line.split(FIELD_SEPARATOR)
    if len(parts) != FIELD_COUNT:
        return None, f"expected {FIELD_COUNT} fields, found {len(parts)}"

    tech_id, name, description, prereq_field, cost_field = parts

    kind_parts = prereq_field.split(KIND_SEPARATOR)
    if len(kind_parts) < 2:
        return None, f"missing prerequisite kind separator in {prereq_field!r}"
    # Anything after a second separator is ignored.
    kind_token, id_list = kind_parts[0], kind_parts[1]
    try:
        kind = PrerequisiteKind(kind_token)
    except ValueError:
        return None, f"unknown prerequisite kind {kind_token!r}"

    prereq_ids = [item for item in id_list.split(ID_SEPARATOR) if item]

    cost = _parse_cost(cost_field)
    if cost is None:
        if strict:
            return None, f"invalid cost {cost_field!r}"
        cost = 0

    technology = Technology(
        identifier=tech_id,
        name=name,
        description=description,
        prerequisites=Prerequisites.of_kind(kind, prereq_ids),
        cost=cost,
    )
    return technology, None


def _split_lines(data: str) -> list[str]:
    """Split on line feeds only; a trailing carriage return per line and a final empty line are dropped."""

    if not data:
        return []
    lines = data.split("\n")
    if lines[-1] == "":
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


def _parse_cost(raw_cost: str) -> int | None:
    # Unsigned 32-bit decimal with at most one leading "+", no surrounding whitespace.
    digits = raw_cost[1:] if raw_cost.startswith("+") else raw_cost
    if not digits or not digits.isascii() or not digits.isdigit():
        return None
    cost = int(digits)
    if cost > MAX_COST:
        return None
    return cost
