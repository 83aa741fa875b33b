from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import IntEnum, StrEnum
from types import MappingProxyType
from typing import Union

__all__ = [
    "Action",
    "ActionKind",
    "ActionSpec",
    "Call",
    "CellValue",
    "Check",
    "Fold",
    "HandNodeData",
    "ImportSettings",
    "NavigationStep",
    "Node",
    "Position",
    "Raise",
    "make_action",
]


class Position(IntEnum):
    """Seats in acting order; values match the integer codes of the export."""

    EP = 0
    MP = 1
    LJ = 2
    HJ = 3
    CO = 4
    BU = 5
    SB = 6
    BB = 7

    @classmethod
    def parse(cls, value: object) -> Position | None:
        """Return the seat for an integer code or a seat name, else ``None``."""

        if isinstance(value, Position):
            return value
        if isinstance(value, bool):
            return None
        if isinstance(value, int):
            try:
                return cls(value)
            except ValueError:
                return None
        if isinstance(value, str):
            token = value.strip().upper()
            if token.isdigit():
                return cls.parse(int(token))
            if token == "BTN":
                token = "BU"
            return cls.__members__.get(token)
        return None


class ActionKind(StrEnum):
    FOLD = "F"
    CALL = "C"
    CHECK = "X"
    RAISE = "R"

    @classmethod
    def parse(cls, code: object) -> ActionKind:
        """Map an export type code to a kind.

        Anything that is not fold, call or raise lands in the check bucket, which
        sorts and colors as "other passive action".
        """

        token = str(code or "").strip().upper()[:1]
        if token == "F":
            return cls.FOLD
        if token == "C":
            return cls.CALL
        if token == "R":
            return cls.RAISE
        return cls.CHECK


@dataclass(frozen=True, slots=True)
class Fold:
    @property
    def kind(self) -> ActionKind:
        return ActionKind.FOLD

    @property
    def amount(self) -> float:
        return 0.0


@dataclass(frozen=True, slots=True)
class Call:
    @property
    def kind(self) -> ActionKind:
        return ActionKind.CALL

    @property
    def amount(self) -> float:
        return 0.0


@dataclass(frozen=True, slots=True)
class Check:
    @property
    def kind(self) -> ActionKind:
        return ActionKind.CHECK

    @property
    def amount(self) -> float:
        return 0.0


@dataclass(frozen=True, slots=True)
class Raise:
    amount: float

    @property
    def kind(self) -> ActionKind:
        return ActionKind.RAISE


Action = Union[Fold, Call, Check, Raise]


def make_action(kind: ActionKind | str, amount: float = 0.0) -> Action:
    """Build the tagged action for ``kind``; ``amount`` only matters for raises."""

    parsed = kind if isinstance(kind, ActionKind) else ActionKind.parse(kind)
    if parsed is ActionKind.RAISE:
        return Raise(amount=float(amount))
    if parsed is ActionKind.CALL:
        return Call()
    if parsed is ActionKind.FOLD:
        return Fold()
    return Check()


@dataclass(frozen=True, slots=True)
class ActionSpec:
    """One entry of a node's action menu."""

    action: Action
    target: int

    @property
    def kind(self) -> ActionKind:
        return self.action.kind

    @property
    def amount(self) -> float:
        return self.action.amount


@dataclass(frozen=True, slots=True)
class HandNodeData:
    """Strategy of one hand at one node; ``played``/``evs`` align with the node's actions."""

    weight: float = 0.0
    played: tuple[float, ...] = ()
    evs: tuple[float, ...] = ()


EMPTY_HAND_DATA = HandNodeData()


def _frozen_mapping(value: Mapping[str, HandNodeData] | None) -> Mapping[str, HandNodeData]:
    return MappingProxyType(dict(value or {}))


@dataclass(frozen=True, slots=True)
class Node:
    player: Position
    street: int = 0
    sequence: tuple[int, ...] = ()
    actions: tuple[ActionSpec, ...] = ()
    hands: Mapping[str, HandNodeData] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "hands", _frozen_mapping(self.hands))

    @property
    def is_root(self) -> bool:
        return not self.sequence and self.street == 0


@dataclass(frozen=True, slots=True)
class ImportSettings:
    stacks: tuple[float, ...] = ()
    blinds: tuple[float, ...] = ()


@dataclass(frozen=True, slots=True)
class NavigationStep:
    position: Position
    kind: ActionKind
    amount: float
    node_id: int
    round: int = 1


@dataclass(frozen=True, slots=True)
class CellValue:
    """Projection of one hand at the current node."""

    frequency: float = 0.0
    ev: float = 0.0
    dominant_index: int | None = None
    hand_data: HandNodeData = EMPTY_HAND_DATA
    actions: tuple[ActionSpec, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not self.actions


EMPTY_CELL = CellValue()
