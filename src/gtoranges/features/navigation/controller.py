from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Mapping
from typing import Any

from ...core.hands import is_hand_id
from ...core.models import EMPTY_CELL, ActionKind, CellValue, NavigationStep, Node, Position
from ...data.export import ExportPayload
from ...strategy.aggregate import PrioritizedAction, prioritized_actions, top_frequency_pct
from ...strategy.colors import GradientBand, LegendEntry, RaiseRankTable, build_gradient, legend
from .state import (
    ChooseAction,
    Command,
    ImportData,
    LoadInitialRoot,
    NavigationState,
    Phase,
    Reset,
    RewindTo,
    SelectStack,
    transition,
)

__all__ = ["NavigationController", "Observer"]

logger = logging.getLogger(__name__)

Observer = Callable[[NavigationState], None]


class NavigationController:
    """Holds the current navigation state and tells observers when it changes.

    Every operation builds the complete next state first and swaps it in as
    one value; observers run after the swap and only when something changed.
    """

    def __init__(self, state: NavigationState | None = None) -> None:
        self._state = state or NavigationState()
        self._observers: list[Observer] = []
        self._lock = threading.Lock()

    # ------------------------------------------------------------------ observers
    def subscribe(self, observer: Observer) -> Callable[[], None]:
        with self._lock:
            self._observers.append(observer)

        def _unsubscribe() -> None:
            with self._lock:
                if observer in self._observers:
                    self._observers.remove(observer)

        return _unsubscribe

    def dispatch(self, command: Command) -> NavigationState:
        with self._lock:
            previous = self._state
            current = transition(previous, command)
            self._state = current
            observers = list(self._observers)
        if current is not previous:
            for observer in observers:
                observer(current)
        return current

    # ------------------------------------------------------------------ commands
    def import_data(self, raw: ExportPayload | Mapping[str, Any]) -> NavigationState:
        return self.dispatch(ImportData(raw))

    def select_stack(self, stack_bb: int) -> NavigationState:
        return self.dispatch(SelectStack(stack_bb))

    def load_initial_root(self, position: Position | int | str) -> NavigationState:
        parsed = Position.parse(position)
        if parsed is None:
            logger.debug("Ignoring root load for unknown position %r", position)
            return self._state
        return self.dispatch(LoadInitialRoot(parsed))

    def choose_action(self, kind: ActionKind | str, amount: float, node_id: int) -> NavigationState:
        parsed = kind if isinstance(kind, ActionKind) else ActionKind.parse(kind)
        return self.dispatch(ChooseAction(parsed, float(amount), node_id))

    def choose_index(self, index: int) -> NavigationState:
        """Follow the ``index``-th entry of the current node's action menu."""

        node = self.current_node
        if node is None or not 0 <= index < len(node.actions):
            logger.debug("Ignoring action index %s", index)
            return self._state
        action = node.actions[index]
        return self.choose_action(action.kind, action.amount, action.target)

    def rewind_to(self, index: int) -> NavigationState:
        return self.dispatch(RewindTo(index))

    def reset(self) -> NavigationState:
        return self.dispatch(Reset())

    # ------------------------------------------------------------------ accessors
    @property
    def state(self) -> NavigationState:
        return self._state

    @property
    def phase(self) -> Phase:
        return self._state.phase

    @property
    def projection(self) -> Mapping[str, CellValue]:
        return self._state.projection

    @property
    def history(self) -> tuple[NavigationStep, ...]:
        return self._state.history

    @property
    def available_stacks(self) -> tuple[int, ...]:
        return self._state.available_stacks

    @property
    def big_blind(self) -> float:
        return self._state.big_blind

    @property
    def stack_bb(self) -> int | None:
        return self._state.stack_bb

    @property
    def current_node(self) -> Node | None:
        return self._state.current_node

    def cell(self, hand_id: str) -> CellValue:
        if not is_hand_id(hand_id):
            raise KeyError(f"unknown hand '{hand_id}'")
        return self._state.projection.get(hand_id, EMPTY_CELL)

    def prioritized(self, hand_id: str) -> tuple[PrioritizedAction, ...]:
        cell = self.cell(hand_id)
        return prioritized_actions(cell.hand_data, cell.actions)

    def raise_table(self) -> RaiseRankTable:
        return RaiseRankTable.from_projection(self._state.projection)

    def gradient(self, hand_id: str, table: RaiseRankTable | None = None) -> tuple[GradientBand, ...]:
        return build_gradient(self.prioritized(hand_id), table or self.raise_table())

    def caption(self, hand_id: str) -> int | None:
        return top_frequency_pct(self.prioritized(hand_id))

    def legend(self) -> tuple[LegendEntry, ...]:
        return legend(self.raise_table(), self._state.big_blind)
