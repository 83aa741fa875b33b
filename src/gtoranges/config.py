"""Runtime configuration read from the environment.

``GTORANGES_EXPORT`` points at a JSON strategy export loaded into every new
web session. ``GTORANGES_LOG_LEVEL`` sets the root log level for the entry
points; the library itself never configures logging. ``BIND`` and ``PORT``
control where the web server listens.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Final

__all__ = ["AppConfig", "configure_logging"]

_EXPORT_VAR: Final = "GTORANGES_EXPORT"
_LOG_LEVEL_VAR: Final = "GTORANGES_LOG_LEVEL"
_MAX_SESSIONS_VAR: Final = "GTORANGES_MAX_SESSIONS"

_LOG_FORMAT: Final = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def _int_env(environ: Mapping[str, str], key: str, default: int) -> int:
    raw = environ.get(key, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


@dataclass(frozen=True)
class AppConfig:
    export_path: Path | None = None
    log_level: str = "WARNING"
    host: str = "0.0.0.0"
    port: int = 8000
    max_sessions: int = 64

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> AppConfig:
        env = os.environ if environ is None else environ
        export = env.get(_EXPORT_VAR, "").strip()
        return cls(
            export_path=Path(export) if export else None,
            log_level=(env.get(_LOG_LEVEL_VAR, "").strip() or "WARNING").upper(),
            host=env.get("BIND", "").strip() or "0.0.0.0",
            port=_int_env(env, "PORT", 8000),
            max_sessions=max(1, _int_env(env, _MAX_SESSIONS_VAR, 64)),
        )


def configure_logging(level: str | int = "WARNING") -> None:
    if isinstance(level, str):
        resolved = logging.getLevelName(level.upper())
        level = resolved if isinstance(resolved, int) else logging.WARNING
    logging.basicConfig(level=level, format=_LOG_FORMAT)
