"""Shape of the strategy export and its conversion into domain objects.

The export comes from an upstream solver and is trusted to be mostly
well-formed. Validators here only coerce values that would otherwise crash
the navigator: malformed arrays become empty, unusable node entries are
dropped. Nothing is rejected outright.
"""

from __future__ import annotations

import json
import logging
import math
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from ..core.models import ActionKind, ActionSpec, HandNodeData, ImportSettings, Node, Position, make_action

__all__ = [
    "ExportAction",
    "ExportHand",
    "ExportNode",
    "ExportPayload",
    "ExportSettings",
    "HandDataSettings",
    "load_export_file",
    "parse_export",
]

logger = logging.getLogger(__name__)


def _number(value: object, default: float = 0.0) -> float:
    if isinstance(value, bool):
        return default
    try:
        result = float(value)  # type: ignore[arg-type]
    except (TypeError, ValueError, OverflowError):
        return default
    if not math.isfinite(result):
        return default
    return result


def _number_list(value: object) -> list[float]:
    """Coerce ``value`` to a list of finite floats; any bad entry empties the list."""

    if not isinstance(value, (list, tuple)):
        return []
    numbers: list[float] = []
    for entry in value:
        if isinstance(entry, bool) or not isinstance(entry, (int, float, str)):
            return []
        try:
            number = float(entry)
        except (ValueError, OverflowError):
            return []
        if not math.isfinite(number):
            return []
        numbers.append(number)
    return numbers


def _int_list(value: object) -> list[int]:
    if not isinstance(value, (list, tuple)):
        return []
    result: list[int] = []
    for entry in value:
        try:
            result.append(int(entry))
        except (TypeError, ValueError, OverflowError):
            continue
    return result


class _ExportModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class ExportHand(_ExportModel):
    weight: float = 0.0
    played: list[float] = Field(default_factory=list)
    evs: list[float] = Field(default_factory=list)

    @model_validator(mode="before")
    @classmethod
    def _coerce(cls, data: Any) -> Any:
        if not isinstance(data, Mapping):
            return {}
        return {
            "weight": _number(data.get("weight")),
            "played": _number_list(data.get("played")),
            "evs": _number_list(data.get("evs")),
        }

    def to_domain(self) -> HandNodeData:
        return HandNodeData(weight=self.weight, played=tuple(self.played), evs=tuple(self.evs))


class ExportAction(_ExportModel):
    type: ActionKind = ActionKind.CHECK
    amount: float = 0.0
    node: int | None = None

    @model_validator(mode="before")
    @classmethod
    def _coerce(cls, data: Any) -> Any:
        if not isinstance(data, Mapping):
            return {}
        target = data.get("node")
        try:
            node = int(target) if target is not None and not isinstance(target, bool) else None
        except (TypeError, ValueError, OverflowError):
            node = None
        return {
            "type": ActionKind.parse(data.get("type")),
            "amount": _number(data.get("amount")),
            "node": node,
        }

    def to_domain(self) -> ActionSpec:
        # A missing target is kept as -1 so indices stay aligned with played/evs.
        target = self.node if self.node is not None else -1
        return ActionSpec(action=make_action(self.type, self.amount), target=target)


class ExportNode(_ExportModel):
    player: Position
    street: int = 0
    sequence: list[int] = Field(default_factory=list)
    actions: list[ExportAction] = Field(default_factory=list)
    hands: dict[str, ExportHand] = Field(default_factory=dict)

    @model_validator(mode="before")
    @classmethod
    def _coerce(cls, data: Any) -> Any:
        if not isinstance(data, Mapping):
            return data
        cleaned: dict[str, Any] = dict(data)
        position = Position.parse(cleaned.get("player"))
        if position is not None:
            cleaned["player"] = position
        street = cleaned.get("street")
        cleaned["street"] = int(_number(street)) if street is not None else 0
        cleaned["sequence"] = _int_list(cleaned.get("sequence"))
        actions = cleaned.get("actions")
        cleaned["actions"] = list(actions) if isinstance(actions, (list, tuple)) else []
        hands = cleaned.get("hands")
        cleaned["hands"] = {str(key): value for key, value in hands.items()} if isinstance(hands, Mapping) else {}
        return cleaned

    def to_domain(self) -> Node:
        return Node(
            player=self.player,
            street=self.street,
            sequence=tuple(self.sequence),
            actions=tuple(action.to_domain() for action in self.actions),
            hands={hand_id: hand.to_domain() for hand_id, hand in self.hands.items()},
        )


class HandDataSettings(_ExportModel):
    stacks: list[float] = Field(default_factory=list)
    blinds: list[float] = Field(default_factory=list)

    @field_validator("stacks", "blinds", mode="before")
    @classmethod
    def _numbers(cls, value: Any) -> list[float]:
        return _number_list(value)


class ExportSettings(_ExportModel):
    handdata: HandDataSettings = Field(default_factory=HandDataSettings)

    @field_validator("handdata", mode="before")
    @classmethod
    def _handdata(cls, value: Any) -> Any:
        return value if isinstance(value, Mapping) else {}


class ExportPayload(_ExportModel):
    settings: ExportSettings = Field(default_factory=ExportSettings)
    nodes: dict[int, ExportNode] = Field(default_factory=dict)

    @field_validator("settings", mode="before")
    @classmethod
    def _settings(cls, value: Any) -> Any:
        return value if isinstance(value, Mapping) else {}

    @field_validator("nodes", mode="before")
    @classmethod
    def _nodes(cls, value: Any) -> dict[int, Any]:
        if not isinstance(value, Mapping):
            return {}
        nodes: dict[int, Any] = {}
        for key, raw in value.items():
            try:
                node_id = int(key)
            except (TypeError, ValueError):
                logger.debug("Skipping node with non-integer id %r", key)
                continue
            if not isinstance(raw, Mapping) or Position.parse(raw.get("player")) is None:
                logger.debug("Skipping node %s without a known player", node_id)
                continue
            nodes[node_id] = raw
        return nodes

    def import_settings(self) -> ImportSettings:
        handdata = self.settings.handdata
        return ImportSettings(stacks=tuple(handdata.stacks), blinds=tuple(handdata.blinds))

    def domain_nodes(self) -> dict[int, Node]:
        return {node_id: node.to_domain() for node_id, node in self.nodes.items()}


def parse_export(raw: ExportPayload | Mapping[str, Any]) -> ExportPayload:
    if isinstance(raw, ExportPayload):
        return raw
    if not isinstance(raw, Mapping):
        logger.debug("Export payload is not a mapping; treating it as empty")
        return ExportPayload()
    return ExportPayload.model_validate(raw)


def load_export_file(path: Path | str) -> ExportPayload:
    """Read a JSON export from disk."""

    resource = Path(path)
    with resource.open("r", encoding="utf-8") as fh:
        data = json.load(fh)
    if not isinstance(data, dict):
        raise ValueError("Invalid strategy export payload")
    return parse_export(data)
