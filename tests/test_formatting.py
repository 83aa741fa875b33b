from __future__ import annotations

from gtoranges.core.formatting import format_action_label, format_bb, format_step
from gtoranges.core.models import ActionKind, ActionSpec, NavigationStep, Position, make_action


def test_format_bb() -> None:
    assert format_bb(250, 100) == "2.5BB"
    assert format_bb(1000, 100) == "10BB"
    assert format_bb(233, 100) == "2.3BB"
    assert format_bb(250, 0) == "250"
    assert format_bb(12.5, 0) == "12.5"


def test_format_action_label() -> None:
    assert format_action_label(ActionSpec(action=make_action("R", 300), target=1), 100) == "Raise 3BB"
    assert format_action_label(ActionSpec(action=make_action("C"), target=1), 100) == "Call"
    assert format_action_label(ActionSpec(action=make_action("X"), target=1), 100) == "Check"
    assert format_action_label(ActionSpec(action=make_action("F"), target=1), 100) == "Fold"


def test_format_step_breadcrumbs() -> None:
    root = NavigationStep(position=Position.SB, kind=ActionKind.FOLD, amount=0, node_id=0)
    raised = NavigationStep(position=Position.BB, kind=ActionKind.RAISE, amount=250, node_id=3)
    again = NavigationStep(position=Position.SB, kind=ActionKind.CALL, amount=0, node_id=8, round=2)

    assert format_step(root, 100, first=True) == "SB"
    assert format_step(raised, 100) == "BB R 2.5BB"
    assert format_step(again, 100) == "SB (2) C"
