from __future__ import annotations

import logging
import math
from collections import Counter
from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

from ..core.models import ImportSettings, Node, Position
from .export import ExportPayload, parse_export

__all__ = [
    "ConfigError",
    "DecisionGraph",
    "available_stacks_in_bb",
    "big_blind",
]

logger = logging.getLogger(__name__)


class ConfigError(ValueError):
    """Raised when the export settings lack data a computation depends on."""


@dataclass(frozen=True, slots=True)
class DecisionGraph:
    """Read-only view of every node of one strategy export."""

    nodes: Mapping[int, Node] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "nodes", MappingProxyType(dict(self.nodes)))

    @classmethod
    def load(cls, raw: ExportPayload | Mapping[str, Any]) -> DecisionGraph:
        payload = parse_export(raw)
        graph = cls(nodes=payload.domain_nodes())
        duplicates = graph._duplicate_roots()
        for position, count in duplicates.items():
            logger.warning(
                "Export holds %d root nodes for %s; the lowest node id is used",
                count,
                position.name,
            )
        logger.debug("Loaded decision graph with %d nodes", len(graph.nodes))
        return graph

    def __contains__(self, node_id: object) -> bool:
        return node_id in self.nodes

    def __iter__(self) -> Iterator[int]:
        return iter(self.nodes)

    def __len__(self) -> int:
        return len(self.nodes)

    def get(self, node_id: int | None) -> Node | None:
        if node_id is None:
            return None
        return self.nodes.get(node_id)

    def find_root(self, position: Position) -> int | None:
        """Id of the preflop node where ``position`` acts first, if any.

        Several candidates resolve to the lowest id so the answer does not
        depend on the order the export listed its nodes in.
        """

        candidates = [node_id for node_id, node in self.nodes.items() if node.player == position and node.is_root]
        return min(candidates) if candidates else None

    def roots(self) -> dict[Position, int]:
        found: dict[Position, int] = {}
        for position in Position:
            node_id = self.find_root(position)
            if node_id is not None:
                found[position] = node_id
        return found

    def _duplicate_roots(self) -> dict[Position, int]:
        counts = Counter(node.player for node in self.nodes.values() if node.is_root)
        return {position: count for position, count in counts.items() if count > 1}


def big_blind(settings: ImportSettings) -> float:
    if not settings.blinds:
        raise ConfigError("export settings carry no blinds")
    value = settings.blinds[0]
    if not math.isfinite(value):
        raise ConfigError(f"big blind {value!r} is not a finite number")
    return value


def available_stacks_in_bb(settings: ImportSettings, bb: float) -> tuple[int, ...]:
    """Stack sizes in whole big blinds, first occurrence order, no repeats."""

    if not math.isfinite(bb) or bb <= 0:
        return ()
    seen: dict[int, None] = {}
    for stack in settings.stacks:
        if not math.isfinite(stack):
            continue
        seen.setdefault(math.floor(stack / bb), None)
    return tuple(seen)
