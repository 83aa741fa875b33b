from __future__ import annotations

import json
from pathlib import Path

from fastapi.testclient import TestClient

from gtoranges.config import AppConfig
from gtoranges.web.app import create_app


def test_config_defaults() -> None:
    config = AppConfig.from_env({})
    assert config == AppConfig()
    assert config.export_path is None
    assert config.log_level == "WARNING"
    assert (config.host, config.port, config.max_sessions) == ("0.0.0.0", 8000, 64)


def test_config_reads_environment() -> None:
    config = AppConfig.from_env(
        {
            "GTORANGES_EXPORT": "/tmp/export.json",
            "GTORANGES_LOG_LEVEL": "debug",
            "BIND": "127.0.0.1",
            "PORT": "9001",
            "GTORANGES_MAX_SESSIONS": "0",
        }
    )
    assert config.export_path == Path("/tmp/export.json")
    assert config.log_level == "DEBUG"
    assert config.host == "127.0.0.1"
    assert config.port == 9001
    assert config.max_sessions == 1


def test_config_ignores_bad_numbers() -> None:
    config = AppConfig.from_env({"PORT": "eighty", "GTORANGES_MAX_SESSIONS": "lots"})
    assert config.port == 8000
    assert config.max_sessions == 64


def test_app_serves_health_and_preloaded_sessions(tmp_path, aa_payload) -> None:
    path = tmp_path / "export.json"
    path.write_text(json.dumps(aa_payload), encoding="utf-8")
    client = TestClient(create_app(AppConfig(export_path=path)))

    assert client.get("/healthz").json() == {"status": "ok"}

    sid = client.post("/api/v1/navigator").json()["session"]
    state = client.get(f"/api/v1/navigator/{sid}/state").json()
    assert state["phase"] == "stack_pending"
    assert state["available_stacks"] == [20]
