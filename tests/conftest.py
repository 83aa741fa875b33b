from __future__ import annotations

import sys
from pathlib import Path

import pytest

# Ensure "src" is on sys.path for imports in tests
PROJECT_ROOT = Path(__file__).resolve().parents[1]
SRC_DIR = PROJECT_ROOT / "src"
if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))


def _hand(played: list[float], evs: list[float], weight: float = 1.0) -> dict[str, object]:
    return {"weight": weight, "played": played, "evs": evs}


@pytest.fixture
def aa_payload() -> dict[str, object]:
    """Single BB root holding AA: fold/call/raise 100 at 0/20/80%."""

    return {
        "settings": {"handdata": {"stacks": [2000], "blinds": [100, 50]}},
        "nodes": {
            "0": {
                "player": 7,
                "street": 0,
                "sequence": [],
                "actions": [
                    {"type": "F", "amount": 0, "node": 1},
                    {"type": "C", "amount": 0, "node": 2},
                    {"type": "R", "amount": 100, "node": 3},
                ],
                "hands": {"AA": _hand([0, 0.2, 0.8], [0, 1.0, 2.5])},
            }
        },
    }


@pytest.fixture
def tree_payload() -> dict[str, object]:
    """SB opens, BB responds, SB acts again: enough depth for rounds and rewinds."""

    return {
        "settings": {"handdata": {"stacks": [2000, 1000, 2050, 2000], "blinds": [100, 50]}},
        "nodes": {
            "0": {
                "player": 6,
                "street": 0,
                "sequence": [],
                "actions": [
                    {"type": "F", "amount": 0, "node": 1},
                    {"type": "C", "amount": 100, "node": 2},
                    {"type": "R", "amount": 250, "node": 3},
                    {"type": "R", "amount": 2000, "node": 4},
                ],
                "hands": {
                    "AA": _hand([0, 0.1, 0.3, 0.6], [0, 1.0, 2.0, 3.0]),
                    "KK": _hand([0, 0, 0.5, 0.5], [0, 0.5, 2.2, 2.2]),
                    "72o": _hand([1.0, 0, 0, 0], [0, -0.4, -0.6, -1.5]),
                    "AKs": _hand([0, 0.25, 0.25, 0], [0, 0.8, 0.9, 0.7]),
                },
            },
            "1": {"player": 7, "street": 0, "sequence": [0], "actions": [], "hands": {}},
            "2": {
                "player": 7,
                "street": 0,
                "sequence": [1],
                "actions": [
                    {"type": "X", "amount": 0, "node": 5},
                    {"type": "R", "amount": 400, "node": 6},
                ],
                "hands": {"AA": _hand([0.2, 0.8], [1.1, 1.6])},
            },
            "3": {
                "player": 7,
                "street": 0,
                "sequence": [2],
                "actions": [
                    {"type": "F", "amount": 0, "node": 7},
                    {"type": "C", "amount": 250, "node": 8},
                    {"type": "R", "amount": 900, "node": 6},
                ],
                "hands": {"QQ": _hand([0, 0.4, 0.6], [0, 0.7, 1.2])},
            },
            "6": {
                "player": 6,
                "street": 0,
                "sequence": [1, 1],
                "actions": [
                    {"type": "F", "amount": 0, "node": 7},
                    {"type": "C", "amount": 400, "node": 8},
                ],
                "hands": {"AA": _hand([0, 1.0], [0, 4.0])},
            },
            "8": {"player": 7, "street": 1, "sequence": [2, 1], "actions": [], "hands": {}},
            "10": {
                "player": 7,
                "street": 0,
                "sequence": [],
                "actions": [{"type": "C", "amount": 0, "node": 2}],
                "hands": {},
            },
        },
    }
