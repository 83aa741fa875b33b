from __future__ import annotations

from .models import ActionKind, ActionSpec, NavigationStep

__all__ = ["format_action_label", "format_bb", "format_step"]

_KIND_LABEL = {
    ActionKind.FOLD: "Fold",
    ActionKind.CALL: "Call",
    ActionKind.CHECK: "Check",
    ActionKind.RAISE: "Raise",
}


def format_bb(amount: float, big_blind: float) -> str:
    """Express a chip amount in big blinds, one decimal, dropping a trailing ``.0``.

    Without a usable big blind the raw chip amount is shown instead.
    """

    if big_blind <= 0:
        value = float(amount)
        return f"{value:.0f}" if value.is_integer() else f"{value:g}"
    text = f"{amount / big_blind:.1f}"
    if text.endswith(".0"):
        text = text[:-2]
    return f"{text}BB"


def format_action_label(action: ActionSpec, big_blind: float) -> str:
    label = _KIND_LABEL[action.kind]
    if action.kind is ActionKind.RAISE:
        return f"{label} {format_bb(action.amount, big_blind)}"
    return label


def format_step(step: NavigationStep, big_blind: float, *, first: bool = False) -> str:
    """Breadcrumb label for one navigation step.

    The first step of a history is the synthetic root entry, so only the seat
    is shown for it.
    """

    seat = step.position.name
    if step.round > 1:
        seat = f"{seat} ({step.round})"
    if first:
        return seat
    if step.kind is ActionKind.RAISE:
        return f"{seat} R {format_bb(step.amount, big_blind)}"
    return f"{seat} {step.kind.value}"
