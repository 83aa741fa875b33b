"""Reduce a node's per-hand strategy into what a chart cell shows."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass

from ..core.hands import all_hands
from ..core.models import EMPTY_CELL, ActionKind, ActionSpec, CellValue, HandNodeData, Node

__all__ = [
    "DominantAction",
    "PrioritizedAction",
    "dominant_action",
    "prioritized_actions",
    "project",
    "top_frequency_pct",
]

_KIND_PRIORITY = {
    ActionKind.RAISE: 0,
    ActionKind.CALL: 1,
    ActionKind.CHECK: 2,
    ActionKind.FOLD: 3,
}


@dataclass(frozen=True, slots=True)
class DominantAction:
    index: int | None
    frequency: float
    ev: float


@dataclass(frozen=True, slots=True)
class PrioritizedAction:
    action: ActionSpec
    frequency: float
    ev: float

    @property
    def kind(self) -> ActionKind:
        return self.action.kind

    @property
    def amount(self) -> float:
        return self.action.amount


def _value_at(values: Sequence[float], index: int) -> float:
    return values[index] if index < len(values) else 0.0


def dominant_action(hand_data: HandNodeData) -> DominantAction:
    """Most frequent action of a hand; ties go to the lowest index."""

    played = hand_data.played
    if not played:
        return DominantAction(index=None, frequency=0.0, ev=0.0)
    best = 0
    for index in range(1, len(played)):
        if played[index] > played[best]:
            best = index
    return DominantAction(index=best, frequency=played[best], ev=_value_at(hand_data.evs, best))


def _priority(entry: PrioritizedAction) -> tuple[int, float]:
    group = _KIND_PRIORITY[entry.kind]
    return group, -entry.amount if entry.kind is ActionKind.RAISE else 0.0


def prioritized_actions(hand_data: HandNodeData, node_actions: Sequence[ActionSpec]) -> tuple[PrioritizedAction, ...]:
    """Actions the hand actually takes, in legend and stacking order.

    Raises come first, largest amount first, then call, then check, then fold.
    Equal keys keep the node's menu order.
    """

    entries = [
        PrioritizedAction(
            action=action,
            frequency=_value_at(hand_data.played, index),
            ev=_value_at(hand_data.evs, index),
        )
        for index, action in enumerate(node_actions)
    ]
    return tuple(sorted((entry for entry in entries if entry.frequency > 0), key=_priority))


def _cell(hand_data: HandNodeData, actions: tuple[ActionSpec, ...]) -> CellValue:
    dominant = dominant_action(hand_data)
    return CellValue(
        frequency=dominant.frequency,
        ev=dominant.ev,
        dominant_index=dominant.index,
        hand_data=hand_data,
        actions=actions,
    )


def project(node: Node | None) -> Mapping[str, CellValue]:
    """One cell per canonical hand, zero-valued where the node has no data."""

    if node is None:
        return {hand_id: EMPTY_CELL for hand_id in all_hands()}
    hands = node.hands
    return {
        hand_id: _cell(hands[hand_id], node.actions) if hand_id in hands else EMPTY_CELL
        for hand_id in all_hands()
    }


def top_frequency_pct(prioritized: Sequence[PrioritizedAction]) -> int | None:
    """Caption for a cell: the top-priority action's share in whole percent."""

    if not prioritized:
        return None
    return round(prioritized[0].frequency * 100)
