"""Navigation through a strategy export as a pure state machine.

``transition(state, command)`` returns the next state value and never raises.
Commands that cannot apply (nothing imported, unknown node, index out of
range) return the very same state object, so callers can detect a no-op with
``is``.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field, replace
from enum import StrEnum
from types import MappingProxyType
from typing import Any, Union

from pydantic import ValidationError

from ...core.models import ActionKind, CellValue, ImportSettings, NavigationStep, Node, Position
from ...data.export import ExportPayload, parse_export
from ...data.graph import ConfigError, DecisionGraph, available_stacks_in_bb, big_blind
from ...strategy.aggregate import project

__all__ = [
    "ChooseAction",
    "Command",
    "ImportData",
    "LoadInitialRoot",
    "NavigationState",
    "Phase",
    "Reset",
    "RewindTo",
    "SelectStack",
    "transition",
]

logger = logging.getLogger(__name__)


class Phase(StrEnum):
    EMPTY = "empty"
    STACK_PENDING = "stack_pending"
    AT_NODE = "at_node"


def _empty_projection() -> Mapping[str, CellValue]:
    return MappingProxyType(dict(project(None)))


_EMPTY_PROJECTION = _empty_projection()


@dataclass(frozen=True, slots=True)
class NavigationState:
    graph: DecisionGraph | None = None
    settings: ImportSettings | None = None
    big_blind: float = 0.0
    available_stacks: tuple[int, ...] = ()
    stack_bb: int | None = None
    current_node_id: int | None = None
    history: tuple[NavigationStep, ...] = ()
    projection: Mapping[str, CellValue] = field(default_factory=lambda: _EMPTY_PROJECTION)

    @property
    def phase(self) -> Phase:
        if self.graph is None:
            return Phase.EMPTY
        if self.current_node_id is None:
            return Phase.STACK_PENDING
        return Phase.AT_NODE

    @property
    def current_node(self) -> Node | None:
        if self.graph is None:
            return None
        return self.graph.get(self.current_node_id)


@dataclass(frozen=True, slots=True)
class ImportData:
    raw: ExportPayload | Mapping[str, Any]


@dataclass(frozen=True, slots=True)
class SelectStack:
    stack_bb: int


@dataclass(frozen=True, slots=True)
class LoadInitialRoot:
    position: Position


@dataclass(frozen=True, slots=True)
class ChooseAction:
    kind: ActionKind
    amount: float
    node_id: int


@dataclass(frozen=True, slots=True)
class RewindTo:
    index: int


@dataclass(frozen=True, slots=True)
class Reset:
    pass


Command = Union[ImportData, SelectStack, LoadInitialRoot, ChooseAction, RewindTo, Reset]


def _at(state: NavigationState, node_id: int, node: Node, history: tuple[NavigationStep, ...]) -> NavigationState:
    return replace(
        state,
        current_node_id=node_id,
        history=history,
        projection=MappingProxyType(dict(project(node))),
    )


def _cleared(state: NavigationState, **changes: Any) -> NavigationState:
    return replace(state, current_node_id=None, history=(), projection=_EMPTY_PROJECTION, **changes)


def _import(state: NavigationState, command: ImportData) -> NavigationState:
    try:
        payload = parse_export(command.raw)
    except ValidationError as exc:
        logger.warning("Ignoring unreadable export: %s", exc)
        return state
    settings = payload.import_settings()
    try:
        bb = big_blind(settings)
    except ConfigError as exc:
        logger.warning("%s; big blind treated as 0", exc)
        bb = 0.0
    return NavigationState(
        graph=DecisionGraph.load(payload),
        settings=settings,
        big_blind=bb,
        available_stacks=available_stacks_in_bb(settings, bb),
    )


def _select_stack(state: NavigationState, command: SelectStack) -> NavigationState:
    if state.phase is Phase.EMPTY:
        logger.debug("Ignoring stack selection before any import")
        return state
    return _cleared(state, stack_bb=command.stack_bb)


def _load_initial_root(state: NavigationState, command: LoadInitialRoot) -> NavigationState:
    if state.graph is None:
        logger.debug("Ignoring root load before any import")
        return state
    node_id = state.graph.find_root(command.position)
    node = state.graph.get(node_id)
    if node_id is None or node is None:
        logger.debug("No root node for %s", command.position.name)
        return state
    step = NavigationStep(position=command.position, kind=ActionKind.FOLD, amount=0.0, node_id=node_id, round=1)
    return _at(state, node_id, node, (step,))


def _choose_action(state: NavigationState, command: ChooseAction) -> NavigationState:
    node = state.graph.get(command.node_id) if state.graph is not None else None
    if node is None:
        logger.debug("Ignoring action towards unknown node %s", command.node_id)
        return state
    prior = sum(1 for step in state.history if step.position == node.player)
    step = NavigationStep(
        position=node.player,
        kind=command.kind,
        amount=command.amount,
        node_id=command.node_id,
        round=prior + 1,
    )
    return _at(state, command.node_id, node, (*state.history, step))


def _rewind_to(state: NavigationState, command: RewindTo) -> NavigationState:
    if state.graph is None or not 0 <= command.index < len(state.history):
        logger.debug("Ignoring rewind to step %s of %d", command.index, len(state.history))
        return state
    history = state.history[: command.index + 1]
    node_id = history[-1].node_id
    node = state.graph.get(node_id)
    if node is None:
        return state
    return _at(state, node_id, node, history)


def _reset(state: NavigationState, _command: Reset) -> NavigationState:
    return _cleared(state, stack_bb=None)


_HANDLERS: dict[type, Callable[[NavigationState, Any], NavigationState]] = {
    ImportData: _import,
    SelectStack: _select_stack,
    LoadInitialRoot: _load_initial_root,
    ChooseAction: _choose_action,
    RewindTo: _rewind_to,
    Reset: _reset,
}


def transition(state: NavigationState, command: Command) -> NavigationState:
    handler = _HANDLERS.get(type(command))
    if handler is None:
        logger.debug("Unknown navigation command %r", command)
        return state
    return handler(state, command)
