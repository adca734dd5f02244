from __future__ import annotations

import logging
from pathlib import Path

from .codec import DecodeListener, deserialize, serialize
from .registry import TechnologyRegistry

logger = logging.getLogger(__name__)


def load_from_file(
    path: Path | str,
    *,
    strict: bool = False,
    listener: DecodeListener | None = None,
) -> TechnologyRegistry:
    """Read a serialized tech tree from ``path``.

    I/O failures propagate as ``OSError``; malformed lines follow the codec's
    ``strict`` setting.
    """

    path = Path(path)
    data = path.read_text(encoding="utf-8")
    registry = deserialize(data, strict=strict, listener=listener)
    logger.info("Loaded tech tree from %s (%d technologies)", path, len(registry))
    return registry


def save_to_file(registry: TechnologyRegistry, path: Path | str) -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    payload = serialize(registry)
    path.write_text(payload + "\n" if payload else "", encoding="utf-8")
    logger.info("Saved %d technologies to %s", len(registry), path)
    return path
