from __future__ import annotations

import logging

from fastapi import FastAPI

from ..config import AppConfig, configure_logging
from ..data.export import ExportPayload, load_export_file
from ..features.navigation import NavigatorManager, create_navigation_router

__all__ = ["create_app", "main"]

logger = logging.getLogger(__name__)


def _default_export(config: AppConfig) -> ExportPayload | None:
    if config.export_path is None:
        return None
    payload = load_export_file(config.export_path)
    logger.info("Preloading %d nodes from %s", len(payload.nodes), config.export_path)
    return payload


def create_app(config: AppConfig | None = None, *, manager: NavigatorManager | None = None) -> FastAPI:
    config = config or AppConfig.from_env()
    if manager is None:
        manager = NavigatorManager(default_export=_default_export(config), max_sessions=config.max_sessions)

    app = FastAPI(title="GTO Range Navigator")
    app.state.manager = manager
    app.include_router(create_navigation_router(manager))

    @app.get("/healthz")
    def healthz() -> dict[str, str]:
        return {"status": "ok"}

    return app


def main() -> None:  # pragma: no cover - runner
    import uvicorn

    config = AppConfig.from_env()
    configure_logging(config.log_level)
    uvicorn.run(create_app(config), host=config.host, port=config.port)


if __name__ == "__main__":  # pragma: no cover
    main()
