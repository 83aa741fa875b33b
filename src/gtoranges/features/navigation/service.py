from __future__ import annotations

import logging
import secrets
import string
import threading
from collections import OrderedDict
from collections.abc import Mapping
from typing import Any

from ...core.formatting import format_action_label, format_step
from ...core.hands import RANKS, all_hands, grid, hand_type
from ...core.models import ActionKind, Position
from ...data.export import ExportPayload
from ...strategy.colors import RaiseRankTable, color_for, css_gradient
from .controller import NavigationController
from .schemas import (
    ActionPayload,
    BandPayload,
    CellDetailPayload,
    CellPayload,
    GridPayload,
    LegendPayload,
    PrioritizedPayload,
    StatePayload,
    StepPayload,
)

__all__ = ["NavigatorManager"]

logger = logging.getLogger(__name__)


class NavigatorManager:
    """Registry of navigation sessions, one controller per operator."""

    def __init__(self, *, default_export: ExportPayload | None = None, max_sessions: int = 64) -> None:
        self._sessions: OrderedDict[str, NavigationController] = OrderedDict()
        self._lock = threading.Lock()
        self._default_export = default_export
        self._max_sessions = max(1, max_sessions)

    def create_session(self) -> str:
        controller = NavigationController()
        if self._default_export is not None:
            controller.import_data(self._default_export)
        session_id = _sid()
        with self._lock:
            self._sessions[session_id] = controller
            while len(self._sessions) > self._max_sessions:
                evicted, _ = self._sessions.popitem(last=False)
                logger.debug("Evicted navigation session %s", evicted)
        return session_id

    def controller(self, session_id: str) -> NavigationController:
        with self._lock:
            controller = self._sessions.get(session_id)
        if controller is None:
            raise KeyError(f"session '{session_id}' not found")
        return controller

    # ------------------------------------------------------------------ commands
    def import_data(self, session_id: str, raw: ExportPayload | Mapping[str, Any]) -> StatePayload:
        controller = self.controller(session_id)
        controller.import_data(raw)
        return _state_payload(controller)

    def select_stack(self, session_id: str, stack_bb: int) -> StatePayload:
        controller = self.controller(session_id)
        controller.select_stack(stack_bb)
        return _state_payload(controller)

    def load_root(self, session_id: str, position: Position | int | str) -> StatePayload:
        controller = self.controller(session_id)
        controller.load_initial_root(position)
        return _state_payload(controller)

    def choose(self, session_id: str, kind: ActionKind | str, amount: float, node_id: int) -> StatePayload:
        controller = self.controller(session_id)
        controller.choose_action(kind, amount, node_id)
        return _state_payload(controller)

    def rewind(self, session_id: str, index: int) -> StatePayload:
        controller = self.controller(session_id)
        controller.rewind_to(index)
        return _state_payload(controller)

    def reset(self, session_id: str) -> StatePayload:
        controller = self.controller(session_id)
        controller.reset()
        return _state_payload(controller)

    # ------------------------------------------------------------------ reads
    def state(self, session_id: str) -> StatePayload:
        return _state_payload(self.controller(session_id))

    def grid(self, session_id: str) -> GridPayload:
        return _grid_payload(self.controller(session_id))

    def cell(self, session_id: str, hand_id: str) -> CellDetailPayload:
        return _cell_detail(self.controller(session_id), hand_id)


def _sid(length: int = 10) -> str:
    alphabet = string.ascii_lowercase + string.digits
    return "".join(secrets.choice(alphabet) for _ in range(length))


def _state_payload(controller: NavigationController) -> StatePayload:
    state = controller.state
    bb = state.big_blind
    node = state.current_node
    history = [
        StepPayload(
            position=step.position.name,
            kind=step.kind.value,
            amount=step.amount,
            node=step.node_id,
            round=step.round,
            label=format_step(step, bb, first=index == 0),
        )
        for index, step in enumerate(state.history)
    ]
    actions = (
        [
            ActionPayload(
                index=index,
                kind=action.kind.value,
                amount=action.amount,
                node=action.target,
                label=format_action_label(action, bb),
            )
            for index, action in enumerate(node.actions)
        ]
        if node is not None
        else []
    )
    return StatePayload(
        phase=state.phase.value,
        big_blind=bb,
        available_stacks=list(state.available_stacks),
        stack_bb=state.stack_bb,
        node_id=state.current_node_id,
        player=node.player.name if node is not None else None,
        street=node.street if node is not None else None,
        history=history,
        actions=actions,
    )


def _cell_payload(controller: NavigationController, hand_id: str, table: RaiseRankTable) -> CellPayload:
    cell = controller.cell(hand_id)
    bands = controller.gradient(hand_id, table)
    return CellPayload(
        hand=hand_id,
        hand_type=hand_type(hand_id),
        frequency=cell.frequency,
        ev=cell.ev,
        caption=controller.caption(hand_id),
        background=css_gradient(bands),
        bands=[BandPayload(color=band.color, start=band.start, end=band.end) for band in bands],
    )


def _grid_payload(controller: NavigationController) -> GridPayload:
    table = controller.raise_table()
    return GridPayload(
        node_id=controller.state.current_node_id,
        ranks=RANKS,
        rows=[list(row) for row in grid()],
        cells=[_cell_payload(controller, hand_id, table) for hand_id in all_hands()],
        legend=[LegendPayload(label=entry.label, color=entry.color) for entry in controller.legend()],
    )


def _cell_detail(controller: NavigationController, hand_id: str) -> CellDetailPayload:
    cell = controller.cell(hand_id)
    table = controller.raise_table()
    prioritized = controller.prioritized(hand_id)
    bands = controller.gradient(hand_id, table)
    return CellDetailPayload(
        hand=hand_id,
        hand_type=hand_type(hand_id),
        weight=cell.hand_data.weight,
        played=list(cell.hand_data.played),
        evs=list(cell.hand_data.evs),
        frequency=cell.frequency,
        ev=cell.ev,
        dominant_index=cell.dominant_index,
        actions=[
            PrioritizedPayload(
                kind=entry.kind.value,
                amount=entry.amount,
                frequency=entry.frequency,
                ev=entry.ev,
                color=color_for(entry.kind, entry.amount, table),
            )
            for entry in prioritized
        ],
        bands=[BandPayload(color=band.color, start=band.start, end=band.end) for band in bands],
    )
