"""Canonical starting-hand identities.

Hands are named the way every preflop chart names them: ``"AA"`` for a pair,
``"AKs"`` for suited and ``"AKo"`` for offsuit, stronger rank first. The
13x13 chart puts suited hands above the diagonal (row rank stronger than the
column rank) and offsuit hands below it.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

__all__ = [
    "RANKS",
    "HandType",
    "all_hands",
    "canonicalize",
    "grid",
    "hand_type",
    "is_hand_id",
]

RANKS = "AKQJT98765432"

HandType = Literal["pair", "suited", "offsuit"]

_RANK_INDEX = {rank: index for index, rank in enumerate(RANKS)}


def _rank_index(rank: str) -> int:
    try:
        return _RANK_INDEX[rank.upper()]
    except (KeyError, AttributeError):
        raise ValueError(f"unknown rank {rank!r}") from None


def canonicalize(rank_a: str, rank_b: str) -> str:
    """Return the hand id for grid row ``rank_a`` and column ``rank_b``.

    The call is not commutative: ``canonicalize("A", "K")`` is ``"AKs"`` while
    ``canonicalize("K", "A")`` is ``"AKo"``.
    """

    index_a = _rank_index(rank_a)
    index_b = _rank_index(rank_b)
    first, second = RANKS[index_a], RANKS[index_b]
    if index_a == index_b:
        return first + first
    if index_a < index_b:
        return f"{first}{second}s"
    return f"{second}{first}o"


@lru_cache(maxsize=1)
def grid() -> tuple[tuple[str, ...], ...]:
    """Rows of the 13x13 chart, strongest rank first on both axes."""

    return tuple(tuple(canonicalize(row, col) for col in RANKS) for row in RANKS)


@lru_cache(maxsize=1)
def all_hands() -> tuple[str, ...]:
    """Every one of the 169 hand classes in chart order, each listed once."""

    return tuple(hand_id for row in grid() for hand_id in row)


def hand_type(hand_id: str) -> HandType:
    if not is_hand_id(hand_id):
        raise ValueError(f"not a canonical hand id: {hand_id!r}")
    if len(hand_id) == 2:
        return "pair"
    return "suited" if hand_id[2] == "s" else "offsuit"


def is_hand_id(value: object) -> bool:
    return isinstance(value, str) and value in _HAND_SET


_HAND_SET = frozenset(all_hands())
