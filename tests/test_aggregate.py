from __future__ import annotations

import pytest

from gtoranges.core.hands import all_hands
from gtoranges.core.models import ActionKind, ActionSpec, HandNodeData, Node, Position, make_action
from gtoranges.data.graph import DecisionGraph
from gtoranges.strategy.aggregate import dominant_action, prioritized_actions, project, top_frequency_pct


def _spec(kind: str, amount: float = 0.0, target: int = 0) -> ActionSpec:
    return ActionSpec(action=make_action(kind, amount), target=target)


def test_dominant_action_ties_go_to_lowest_index() -> None:
    result = dominant_action(HandNodeData(played=(0.4, 0.4, 0.2), evs=(1.0, 2.0, 3.0)))
    assert result.index == 0
    assert result.frequency == pytest.approx(0.4)
    assert result.ev == pytest.approx(1.0)


def test_dominant_action_without_data() -> None:
    result = dominant_action(HandNodeData())
    assert (result.index, result.frequency, result.ev) == (None, 0.0, 0.0)


def test_dominant_action_missing_ev_is_zero() -> None:
    result = dominant_action(HandNodeData(played=(0.1, 0.9), evs=(0.3,)))
    assert result.index == 1
    assert result.ev == 0.0


def test_prioritized_order_raises_desc_then_call_then_fold() -> None:
    actions = (_spec("F"), _spec("C"), _spec("R", 50), _spec("R", 100))
    hand = HandNodeData(played=(0.1, 0.2, 0.3, 0.4), evs=(0.0, 0.5, 1.0, 1.5))

    ordered = prioritized_actions(hand, actions)

    assert [(entry.kind, entry.amount) for entry in ordered] == [
        (ActionKind.RAISE, 100.0),
        (ActionKind.RAISE, 50.0),
        (ActionKind.CALL, 0.0),
        (ActionKind.FOLD, 0.0),
    ]
    assert [entry.frequency for entry in ordered] == [0.4, 0.3, 0.2, 0.1]


def test_prioritized_drops_unplayed_and_places_check_before_fold() -> None:
    actions = (_spec("F"), _spec("X"), _spec("R", 300), _spec("C"))
    hand = HandNodeData(played=(0.5, 0.5, 0.0))

    ordered = prioritized_actions(hand, actions)

    assert [entry.kind for entry in ordered] == [ActionKind.CHECK, ActionKind.FOLD]
    assert all(entry.ev == 0.0 for entry in ordered)


def test_prioritized_keeps_menu_order_for_equal_keys() -> None:
    actions = (_spec("C", target=1), _spec("C", target=2))
    ordered = prioritized_actions(HandNodeData(played=(0.3, 0.7)), actions)
    assert [entry.action.target for entry in ordered] == [1, 2]


def test_project_without_node_is_all_zero() -> None:
    cells = project(None)
    assert list(cells) == list(all_hands())
    assert all(cell.frequency == 0 and cell.ev == 0 and cell.is_empty for cell in cells.values())


def test_project_fills_missing_hands_with_empty_cells() -> None:
    node = Node(
        player=Position.BB,
        actions=(_spec("F"), _spec("C")),
        hands={"AA": HandNodeData(weight=1.0, played=(0.25, 0.75), evs=(0.0, 2.0))},
    )
    cells = project(node)

    assert len(cells) == 169
    assert cells["AA"].frequency == pytest.approx(0.75)
    assert cells["AA"].ev == pytest.approx(2.0)
    assert cells["AA"].dominant_index == 1
    assert cells["AA"].actions == node.actions
    assert cells["72o"].is_empty
    assert cells["72o"].frequency == 0.0


def test_aa_root_end_to_end(aa_payload) -> None:
    graph = DecisionGraph.load(aa_payload)
    node = graph.get(graph.find_root(Position.BB))
    cell = project(node)["AA"]

    assert cell.frequency == pytest.approx(0.8)
    assert cell.ev == pytest.approx(2.5)

    ordered = prioritized_actions(cell.hand_data, cell.actions)
    assert [(entry.kind, entry.amount) for entry in ordered] == [(ActionKind.RAISE, 100.0), (ActionKind.CALL, 0.0)]
    assert top_frequency_pct(ordered) == 80
    assert top_frequency_pct(()) is None
