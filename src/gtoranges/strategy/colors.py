"""Visual encoding of a cell's action mix.

Each cell is drawn as stacked flat-color bands, one per action the hand takes,
sized by frequency. Raise sizes are colored by their rank among all raise
sizes present at the current node, so the same size keeps the same shade
across the whole chart.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass
from typing import Final

from ..core.formatting import format_bb
from ..core.models import ActionKind, CellValue
from .aggregate import PrioritizedAction

__all__ = [
    "CALL_COLOR",
    "CHECK_COLOR",
    "FOLD_COLOR",
    "NEUTRAL_COLOR",
    "RAISE_FALLBACK_COLOR",
    "RAISE_PALETTE",
    "GradientBand",
    "LegendEntry",
    "RaiseRankTable",
    "build_gradient",
    "color_for",
    "css_gradient",
    "legend",
]

# Largest raise first, darkest to lightest.
RAISE_PALETTE: Final = ("#0d47a1", "#1565c0", "#1976d2", "#2196f3", "#42a5f5", "#64b5f6")
RAISE_FALLBACK_COLOR: Final = "#bbdefb"
CALL_COLOR: Final = "#4caf50"
CHECK_COLOR: Final = "#ffeb3b"
FOLD_COLOR: Final = "#f5f5f5"
NEUTRAL_COLOR: Final = "#f5f5f5"

_COVERAGE_TOLERANCE = 1e-6


@dataclass(frozen=True, slots=True)
class RaiseRankTable:
    """Distinct raise amounts at a node, largest first."""

    amounts: tuple[float, ...] = ()

    @classmethod
    def from_amounts(cls, amounts: Iterable[float]) -> RaiseRankTable:
        return cls(amounts=tuple(sorted(set(amounts), reverse=True)))

    @classmethod
    def from_projection(cls, projection: Mapping[str, CellValue]) -> RaiseRankTable:
        return cls.from_amounts(
            action.amount
            for cell in projection.values()
            for action in cell.actions
            if action.kind is ActionKind.RAISE
        )

    def rank_of(self, amount: float) -> int | None:
        try:
            return self.amounts.index(amount)
        except ValueError:
            return None

    def color_for_amount(self, amount: float) -> str:
        rank = self.rank_of(amount)
        if rank is None or rank >= len(RAISE_PALETTE):
            return RAISE_FALLBACK_COLOR
        return RAISE_PALETTE[rank]


def color_for(kind: ActionKind, amount: float, table: RaiseRankTable) -> str:
    if kind is ActionKind.FOLD:
        return FOLD_COLOR
    if kind is ActionKind.RAISE:
        return table.color_for_amount(amount)
    if kind is ActionKind.CALL:
        return CALL_COLOR
    return CHECK_COLOR


@dataclass(frozen=True, slots=True)
class GradientBand:
    color: str
    start: float
    end: float

    @property
    def size(self) -> float:
        return self.end - self.start


def build_gradient(prioritized: Sequence[PrioritizedAction], table: RaiseRankTable) -> tuple[GradientBand, ...]:
    """Stack the actions of one cell into bands covering exactly 0-100%.

    The prioritized order is reversed before stacking, so the biggest raise
    ends up at the far end of the gradient. Any share not played is filled
    with the neutral color.
    """

    bands: list[GradientBand] = []
    total = 0.0
    for entry in reversed(prioritized):
        start = total
        total = min(100.0, start + entry.frequency * 100.0)
        bands.append(GradientBand(color=color_for(entry.kind, entry.amount, table), start=start, end=total))

    if 100.0 - total > _COVERAGE_TOLERANCE:
        bands.append(GradientBand(color=NEUTRAL_COLOR, start=total, end=100.0))
    elif bands:
        last = bands[-1]
        bands[-1] = GradientBand(color=last.color, start=last.start, end=100.0)
    return tuple(bands)


def _fmt_stop(value: float) -> str:
    text = f"{value:.4f}".rstrip("0").rstrip(".")
    return f"{text}%"


def css_gradient(bands: Sequence[GradientBand], direction: str = "to top") -> str:
    """CSS background for a cell; hard stops so every band is a flat color."""

    if not bands or (len(bands) == 1 and bands[0].color == NEUTRAL_COLOR):
        return NEUTRAL_COLOR
    stops: list[str] = []
    for band in bands:
        stops.append(f"{band.color} {_fmt_stop(band.start)}")
        stops.append(f"{band.color} {_fmt_stop(band.end)}")
    return f"linear-gradient({direction}, {', '.join(stops)})"


@dataclass(frozen=True, slots=True)
class LegendEntry:
    label: str
    color: str


def legend(table: RaiseRankTable, big_blind: float) -> tuple[LegendEntry, ...]:
    entries = [
        LegendEntry(label=f"Raise {format_bb(amount, big_blind)}", color=table.color_for_amount(amount))
        for amount in table.amounts[: len(RAISE_PALETTE)]
    ]
    if len(table.amounts) > len(RAISE_PALETTE):
        entries.append(LegendEntry(label="Smaller raises", color=RAISE_FALLBACK_COLOR))
    entries.extend(
        (
            LegendEntry(label="Call", color=CALL_COLOR),
            LegendEntry(label="Check", color=CHECK_COLOR),
            LegendEntry(label="Fold", color=FOLD_COLOR),
        )
    )
    return tuple(entries)
