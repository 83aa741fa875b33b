from __future__ import annotations

import pytest

from gtoranges.core.models import ActionKind, ActionSpec, HandNodeData, make_action
from gtoranges.strategy.aggregate import PrioritizedAction, prioritized_actions
from gtoranges.strategy.colors import (
    CALL_COLOR,
    CHECK_COLOR,
    FOLD_COLOR,
    NEUTRAL_COLOR,
    RAISE_FALLBACK_COLOR,
    RAISE_PALETTE,
    GradientBand,
    RaiseRankTable,
    build_gradient,
    color_for,
    css_gradient,
    legend,
)


def _entry(kind: str, frequency: float, amount: float = 0.0) -> PrioritizedAction:
    return PrioritizedAction(action=ActionSpec(action=make_action(kind, amount), target=0), frequency=frequency, ev=0.0)


def test_raise_colors_follow_rank_among_distinct_amounts() -> None:
    table = RaiseRankTable.from_amounts([250, 900, 250, 2000, 400])
    assert table.amounts == (2000, 900, 400, 250)
    assert color_for(ActionKind.RAISE, 2000, table) == RAISE_PALETTE[0]
    assert color_for(ActionKind.RAISE, 250, table) == RAISE_PALETTE[3]
    assert color_for(ActionKind.RAISE, 123, table) == RAISE_FALLBACK_COLOR


def test_raise_colors_fall_back_past_palette() -> None:
    table = RaiseRankTable.from_amounts(range(100, 900, 100))
    assert len(table.amounts) == 8
    assert table.color_for_amount(800) == RAISE_PALETTE[0]
    assert table.color_for_amount(300) == RAISE_PALETTE[5]
    assert table.color_for_amount(200) == RAISE_FALLBACK_COLOR
    assert table.color_for_amount(100) == RAISE_FALLBACK_COLOR


def test_passive_action_colors() -> None:
    table = RaiseRankTable()
    assert color_for(ActionKind.CALL, 0, table) == CALL_COLOR
    assert color_for(ActionKind.CHECK, 0, table) == CHECK_COLOR
    assert color_for(ActionKind.FOLD, 0, table) == FOLD_COLOR


def test_gradient_reverses_priority_and_covers_full_range() -> None:
    table = RaiseRankTable.from_amounts([100, 50])
    prioritized = (_entry("R", 0.4, 100), _entry("R", 0.3, 50), _entry("C", 0.2), _entry("F", 0.1))

    bands = build_gradient(prioritized, table)

    assert [band.color for band in bands] == [FOLD_COLOR, CALL_COLOR, RAISE_PALETTE[1], RAISE_PALETTE[0]]
    assert bands[0].start == 0.0
    assert bands[-1].end == 100.0
    for previous, current in zip(bands, bands[1:]):
        assert current.start == previous.end
    assert [band.size for band in bands] == pytest.approx([10.0, 20.0, 30.0, 40.0])


def test_gradient_pads_unplayed_share_with_neutral() -> None:
    bands = build_gradient((_entry("C", 0.25),), RaiseRankTable())
    assert bands == (
        GradientBand(color=CALL_COLOR, start=0.0, end=25.0),
        GradientBand(color=NEUTRAL_COLOR, start=25.0, end=100.0),
    )


def test_gradient_clamps_overshoot() -> None:
    bands = build_gradient((_entry("R", 0.7, 300), _entry("C", 0.6)), RaiseRankTable.from_amounts([300]))
    assert [band.color for band in bands] == [CALL_COLOR, RAISE_PALETTE[0]]
    assert bands[1].start == pytest.approx(60.0)
    assert bands[1].end == 100.0


def test_gradient_snaps_rounding_gap() -> None:
    bands = build_gradient((_entry("C", 0.3333333), _entry("F", 0.6666667)), RaiseRankTable())
    assert len(bands) == 2
    assert bands[-1].end == 100.0


def test_gradient_for_empty_cell_is_neutral() -> None:
    bands = build_gradient((), RaiseRankTable())
    assert bands == (GradientBand(color=NEUTRAL_COLOR, start=0.0, end=100.0),)
    assert css_gradient(bands) == NEUTRAL_COLOR


def test_css_gradient_uses_hard_stops() -> None:
    bands = (
        GradientBand(color=CALL_COLOR, start=0.0, end=20.0),
        GradientBand(color=RAISE_PALETTE[0], start=20.0, end=100.0),
    )
    assert css_gradient(bands) == (
        "linear-gradient(to top, #4caf50 0%, #4caf50 20%, #0d47a1 20%, #0d47a1 100%)"
    )
    assert css_gradient(bands[:1], direction="to right").startswith("linear-gradient(to right, ")


def test_aa_cell_gradient() -> None:
    actions = tuple(
        ActionSpec(action=make_action(kind, amount), target=i)
        for i, (kind, amount) in enumerate((("F", 0), ("C", 0), ("R", 100)))
    )
    prioritized = prioritized_actions(HandNodeData(played=(0.0, 0.2, 0.8)), actions)
    bands = build_gradient(prioritized, RaiseRankTable.from_amounts([100]))

    assert [band.color for band in bands] == [CALL_COLOR, RAISE_PALETTE[0]]
    assert bands[0].end == pytest.approx(20.0)
    assert bands[1].end == 100.0


def test_legend_lists_raises_then_passive_actions() -> None:
    entries = legend(RaiseRankTable.from_amounts([250, 1000]), 100)
    assert [entry.label for entry in entries] == ["Raise 10BB", "Raise 2.5BB", "Call", "Check", "Fold"]
    assert entries[0].color == RAISE_PALETTE[0]
    assert entries[1].color == RAISE_PALETTE[1]


def test_legend_groups_extra_raises() -> None:
    entries = legend(RaiseRankTable.from_amounts(range(100, 900, 100)), 100)
    labels = [entry.label for entry in entries]
    assert labels[:6] == ["Raise 8BB", "Raise 7BB", "Raise 6BB", "Raise 5BB", "Raise 4BB", "Raise 3BB"]
    assert labels[6] == "Smaller raises"
    assert entries[6].color == RAISE_FALLBACK_COLOR
    assert labels[7:] == ["Call", "Check", "Fold"]
