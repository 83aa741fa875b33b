"""Navigation feature: state machine, controller, service layer and API router."""

from .controller import NavigationController
from .router import create_navigation_router
from .schemas import (
    CellDetailPayload,
    CellPayload,
    GridPayload,
    StatePayload,
    StepPayload,
)
from .service import NavigatorManager
from .state import NavigationState, Phase, transition

__all__ = [
    "CellDetailPayload",
    "CellPayload",
    "GridPayload",
    "NavigationController",
    "NavigationState",
    "NavigatorManager",
    "Phase",
    "StatePayload",
    "StepPayload",
    "create_navigation_router",
    "transition",
]
