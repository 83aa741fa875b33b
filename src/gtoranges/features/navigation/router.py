from __future__ import annotations

from collections.abc import Callable

from fastapi import APIRouter, HTTPException
from fastapi.responses import JSONResponse
from pydantic import BaseModel, model_validator

from ...core.models import ActionKind, Position
from ...data.export import ExportPayload
from .schemas import CellDetailPayload, GridPayload, StatePayload
from .service import NavigatorManager

__all__ = [
    "ActionRequest",
    "RewindRequest",
    "RootRequest",
    "StackRequest",
    "create_navigation_router",
]


class StackRequest(BaseModel):
    stack_bb: int


class RootRequest(BaseModel):
    position: Position

    @model_validator(mode="before")
    @classmethod
    def _coerce(cls, data: object) -> object:
        if not isinstance(data, dict):
            return data
        cleaned = dict(data)
        parsed = Position.parse(cleaned.get("position"))
        if parsed is not None:
            cleaned["position"] = parsed
        return cleaned


class ActionRequest(BaseModel):
    kind: ActionKind
    amount: float = 0.0
    node: int

    @model_validator(mode="before")
    @classmethod
    def _coerce(cls, data: object) -> object:
        if not isinstance(data, dict):
            return data
        cleaned = dict(data)
        kind = cleaned.get("kind", cleaned.get("type"))
        cleaned["kind"] = ActionKind.parse(kind)
        if cleaned.get("amount") in (None, ""):
            cleaned["amount"] = 0.0
        return cleaned


class RewindRequest(BaseModel):
    index: int


_APIPayload = StatePayload | GridPayload | CellDetailPayload


class _NavigatorEndpoints:
    def __init__(self, manager: NavigatorManager) -> None:
        self.manager = manager

    def _json_response(self, data: dict[str, object]) -> JSONResponse:
        return JSONResponse(data)

    def _require(self, func: Callable[..., _APIPayload], *args: object) -> JSONResponse:
        try:
            payload = func(*args)
        except KeyError as exc:
            raise HTTPException(404, str(exc)) from exc
        return self._json_response(payload.to_dict())

    # ------------------------------------------------------------------ actions
    def create(self) -> JSONResponse:
        return self._json_response({"session": self.manager.create_session()})

    def import_data(self, sid: str, body: ExportPayload) -> JSONResponse:
        return self._require(self.manager.import_data, sid, body)

    def stack(self, sid: str, body: StackRequest) -> JSONResponse:
        return self._require(self.manager.select_stack, sid, body.stack_bb)

    def root(self, sid: str, body: RootRequest) -> JSONResponse:
        return self._require(self.manager.load_root, sid, body.position)

    def action(self, sid: str, body: ActionRequest) -> JSONResponse:
        return self._require(self.manager.choose, sid, body.kind, body.amount, body.node)

    def rewind(self, sid: str, body: RewindRequest) -> JSONResponse:
        return self._require(self.manager.rewind, sid, body.index)

    def reset(self, sid: str) -> JSONResponse:
        return self._require(self.manager.reset, sid)

    def state(self, sid: str) -> JSONResponse:
        return self._require(self.manager.state, sid)

    def grid(self, sid: str) -> JSONResponse:
        return self._require(self.manager.grid, sid)

    def cell(self, sid: str, hand_id: str) -> JSONResponse:
        return self._require(self.manager.cell, sid, hand_id)


def create_navigation_router(manager: NavigatorManager) -> APIRouter:
    controller = _NavigatorEndpoints(manager)
    router = APIRouter(prefix="/api/v1/navigator", tags=["navigator"])

    @router.post("")
    def create_session() -> JSONResponse:
        return controller.create()

    @router.post("/{sid}/import")
    def import_data(sid: str, body: ExportPayload) -> JSONResponse:
        return controller.import_data(sid, body)

    @router.post("/{sid}/stack")
    def select_stack(sid: str, body: StackRequest) -> JSONResponse:
        return controller.stack(sid, body)

    @router.post("/{sid}/root")
    def load_root(sid: str, body: RootRequest) -> JSONResponse:
        return controller.root(sid, body)

    @router.post("/{sid}/action")
    def choose_action(sid: str, body: ActionRequest) -> JSONResponse:
        return controller.action(sid, body)

    @router.post("/{sid}/rewind")
    def rewind(sid: str, body: RewindRequest) -> JSONResponse:
        return controller.rewind(sid, body)

    @router.post("/{sid}/reset")
    def reset(sid: str) -> JSONResponse:
        return controller.reset(sid)

    @router.get("/{sid}/state")
    def get_state(sid: str) -> JSONResponse:
        return controller.state(sid)

    @router.get("/{sid}/grid")
    def get_grid(sid: str) -> JSONResponse:
        return controller.grid(sid)

    @router.get("/{sid}/cells/{hand_id}")
    def get_cell(sid: str, hand_id: str) -> JSONResponse:
        return controller.cell(sid, hand_id)

    return router
