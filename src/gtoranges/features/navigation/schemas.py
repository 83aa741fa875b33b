from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict

__all__ = [
    "ActionPayload",
    "BandPayload",
    "CellDetailPayload",
    "CellPayload",
    "GridPayload",
    "LegendPayload",
    "PrioritizedPayload",
    "StatePayload",
    "StepPayload",
]


class _APIModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)


class ActionPayload(_APIModel):
    index: int
    kind: str
    amount: float
    node: int
    label: str


class StepPayload(_APIModel):
    position: str
    kind: str
    amount: float
    node: int
    round: int
    label: str


class StatePayload(_APIModel):
    phase: str
    big_blind: float
    available_stacks: list[int]
    stack_bb: int | None = None
    node_id: int | None = None
    player: str | None = None
    street: int | None = None
    history: list[StepPayload]
    actions: list[ActionPayload]


class BandPayload(_APIModel):
    color: str
    start: float
    end: float


class PrioritizedPayload(_APIModel):
    kind: str
    amount: float
    frequency: float
    ev: float
    color: str


class CellPayload(_APIModel):
    hand: str
    hand_type: str
    frequency: float
    ev: float
    caption: int | None = None
    background: str
    bands: list[BandPayload]


class LegendPayload(_APIModel):
    label: str
    color: str


class GridPayload(_APIModel):
    node_id: int | None = None
    ranks: str
    rows: list[list[str]]
    cells: list[CellPayload]
    legend: list[LegendPayload]


class CellDetailPayload(_APIModel):
    hand: str
    hand_type: str
    weight: float
    played: list[float]
    evs: list[float]
    frequency: float
    ev: float
    dominant_index: int | None = None
    actions: list[PrioritizedPayload]
    bands: list[BandPayload]
